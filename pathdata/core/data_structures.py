"""Core data structures for the path data system.

This module defines the path samples exchanged between the transform engine,
the path data container and the reference curve, in both the Cartesian and
the Frenet representation.
"""

import bisect
from dataclasses import dataclass, replace
from typing import Iterable, Iterator, List, Optional, Sequence, Union
import numpy as np

from .coordinate_converter import lerp, slerp


@dataclass(frozen=True)
class PathPoint:
    """Sample of a path in the Cartesian frame.

    Attributes:
        x: X coordinate in global frame [m]
        y: Y coordinate in global frame [m]
        theta: Heading angle [rad]
        kappa: Curvature [1/m]
        dkappa: Curvature rate [1/m²] (not populated by the transform)
        v: Speed [m/s] (not populated by the transform)
        s: Cumulative arc length from the first sample [m]
    """
    x: float
    y: float
    theta: float = 0.0
    kappa: float = 0.0
    dkappa: float = 0.0
    v: float = 0.0
    s: float = 0.0

    def to_array(self) -> np.ndarray:
        """Convert to numpy array [x, y, theta, kappa, dkappa, v, s]."""
        return np.array([self.x, self.y, self.theta, self.kappa,
                         self.dkappa, self.v, self.s])

    @classmethod
    def from_array(cls, arr: np.ndarray) -> 'PathPoint':
        """Create from numpy array [x, y, theta, kappa, (dkappa, v, s)]."""
        dkappa = arr[4] if len(arr) > 4 else 0.0
        v = arr[5] if len(arr) > 5 else 0.0
        s = arr[6] if len(arr) > 6 else 0.0
        return cls(x=float(arr[0]), y=float(arr[1]), theta=float(arr[2]),
                   kappa=float(arr[3]), dkappa=float(dkappa), v=float(v), s=float(s))


@dataclass(frozen=True)
class FrenetFramePoint:
    """Sample of a path in the Frenet frame of a reference curve.

    ``dl`` and ``ddl`` are ``None`` when they were not computed, which is the
    case for every point produced by a Cartesian-to-Frenet conversion.

    Attributes:
        s: Longitudinal offset along the reference curve [m]
        l: Lateral offset from the reference curve, positive to the left [m]
        dl: First derivative of l with respect to s
        ddl: Second derivative of l with respect to s [1/m]
    """
    s: float
    l: float
    dl: Optional[float] = 0.0
    ddl: Optional[float] = 0.0

    @property
    def has_derivatives(self) -> bool:
        """Whether both lateral derivatives are available."""
        return self.dl is not None and self.ddl is not None

    def to_array(self) -> np.ndarray:
        """Convert to numpy array [s, l, dl, ddl], NaN for missing derivatives."""
        return np.array([
            self.s,
            self.l,
            np.nan if self.dl is None else self.dl,
            np.nan if self.ddl is None else self.ddl,
        ])

    @classmethod
    def from_array(cls, arr: np.ndarray) -> 'FrenetFramePoint':
        """Create from numpy array [s, l, (dl, ddl)]; NaN reads as not computed."""
        def _optional(idx):
            if len(arr) <= idx:
                return 0.0
            value = float(arr[idx])
            return None if np.isnan(value) else value

        return cls(s=float(arr[0]), l=float(arr[1]), dl=_optional(2), ddl=_optional(3))


@dataclass(frozen=True)
class SLPoint:
    """Longitudinal/lateral pair relative to a reference curve."""
    s: float
    l: float


@dataclass(frozen=True)
class ReferencePoint:
    """Reference curve sample at a longitudinal offset.

    Attributes:
        x, y: Position of the curve point [m]
        heading: Tangent direction of the curve [rad]
        kappa: Curvature of the curve [1/m]
        dkappa: Curvature rate of the curve [1/m²]
    """
    x: float
    y: float
    heading: float
    kappa: float
    dkappa: float


class DiscretizedPath(Sequence[PathPoint]):
    """Ordered Cartesian path samples indexed by arc length.

    Args:
        path_points: Samples in path order; their ``s`` must be non-decreasing
    """

    def __init__(self, path_points: Iterable[PathPoint] = ()):
        self._points = tuple(path_points)

    def __len__(self) -> int:
        return len(self._points)

    def __getitem__(self, idx):
        return self._points[idx]

    def __iter__(self) -> Iterator[PathPoint]:
        return iter(self._points)

    def __eq__(self, other) -> bool:
        if not isinstance(other, DiscretizedPath):
            return NotImplemented
        return self._points == other._points

    def __repr__(self) -> str:
        return f"DiscretizedPath(num_points={len(self._points)}, length={self.length:.3f})"

    @property
    def path_points(self) -> List[PathPoint]:
        """Samples as a new list."""
        return list(self._points)

    @property
    def length(self) -> float:
        """Arc length of the last sample, 0 for an empty path."""
        if not self._points:
            return 0.0
        return self._points[-1].s

    def path_point_at(self, idx: int) -> PathPoint:
        """Get the sample at a specific index."""
        if idx < 0 or idx >= len(self._points):
            raise IndexError(
                f"Index {idx} out of range for path of length {len(self._points)}"
            )
        return self._points[idx]

    def query_lower_bound(self, s: float) -> int:
        """Index of the first sample whose arc length is not less than s."""
        return bisect.bisect_left([p.s for p in self._points], s)

    def evaluate(self, s: float) -> PathPoint:
        """Evaluate the path at arc length s by linear interpolation.

        Queries before the first or after the last sample are extrapolated
        along the first or last segment. Zero-length segments at either end
        are skipped so the extrapolation keeps a usable direction.

        Args:
            s: Arc length along this path [m]

        Returns:
            Interpolated path point with its ``s`` set to the query
        """
        if not self._points:
            raise IndexError("Cannot evaluate an empty path")
        if len(self._points) == 1:
            return self._points[0]

        last = len(self._points) - 1
        idx = min(max(self.query_lower_bound(s), 1), last)
        if s > self._points[-1].s:
            while idx > 1 and self._points[idx].s - self._points[idx - 1].s < 1e-12:
                idx -= 1
        elif s < self._points[0].s:
            while idx < last and self._points[idx].s - self._points[idx - 1].s < 1e-12:
                idx += 1
        return interpolate_path_point(self._points[idx - 1], self._points[idx], s)

    def to_array(self) -> np.ndarray:
        """Convert to numpy array of shape (n, 7)."""
        if not self._points:
            return np.empty((0, 7))
        return np.vstack([p.to_array() for p in self._points])


class FrenetFramePath(Sequence[FrenetFramePoint]):
    """Ordered Frenet path samples relative to one reference curve."""

    def __init__(self, points: Iterable[FrenetFramePoint] = ()):
        self._points = tuple(points)

    def __len__(self) -> int:
        return len(self._points)

    def __getitem__(self, idx):
        return self._points[idx]

    def __iter__(self) -> Iterator[FrenetFramePoint]:
        return iter(self._points)

    def __eq__(self, other) -> bool:
        if not isinstance(other, FrenetFramePath):
            return NotImplemented
        return self._points == other._points

    def __repr__(self) -> str:
        return f"FrenetFramePath(num_points={len(self._points)})"

    @property
    def points(self) -> List[FrenetFramePoint]:
        """Samples as a new list."""
        return list(self._points)

    def nearest_index(self, s: float, epsilon: float = 0.0) -> int:
        """Index of the sample whose longitudinal offset is closest to s.

        Linear scan; the first sample within ``epsilon`` of ``s`` is returned
        immediately, otherwise the first of the nearest samples wins.
        """
        if not self._points:
            raise IndexError("Cannot search an empty frenet path")

        index = 0
        shortest_distance = float('inf')
        for i, point in enumerate(self._points):
            distance = abs(s - point.s)
            if distance < epsilon:
                return i
            if distance < shortest_distance:
                index = i
                shortest_distance = distance
        return index

    def to_array(self) -> np.ndarray:
        """Convert to numpy array of shape (n, 4)."""
        if not self._points:
            return np.empty((0, 4))
        return np.vstack([p.to_array() for p in self._points])


def interpolate_path_point(p0: PathPoint, p1: PathPoint, s: float) -> PathPoint:
    """Linearly interpolate (or extrapolate) between two path points at arc length s."""
    s0 = p0.s
    s1 = p1.s
    if abs(s1 - s0) < 1e-12:
        return replace(p0, s=s)

    return PathPoint(
        x=lerp(p0.x, s0, p1.x, s1, s),
        y=lerp(p0.y, s0, p1.y, s1, s),
        theta=slerp(p0.theta, s0, p1.theta, s1, s),
        kappa=lerp(p0.kappa, s0, p1.kappa, s1, s),
        dkappa=lerp(p0.dkappa, s0, p1.dkappa, s1, s),
        v=lerp(p0.v, s0, p1.v, s1, s),
        s=s,
    )


PathLike = Union[DiscretizedPath, Sequence[PathPoint]]
FrenetPathLike = Union[FrenetFramePath, Sequence[FrenetFramePoint]]
