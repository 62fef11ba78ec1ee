"""Reference line backed by a cubic spline.

Implements the queries the path transform needs from a reference curve:
sampling heading and curvature by longitudinal offset, mapping (s, l) pairs
to Cartesian points, and projecting Cartesian points onto the curve.
"""

import math
import numpy as np
from typing import Optional, Sequence, Tuple
from loguru import logger
from scipy.optimize import minimize_scalar

from ..config import PathDataConfig
from ..core.data_structures import ReferencePoint, SLPoint
from ..core.exceptions import ProjectionError
from .cubic_spline import CubicSpline2D


class ReferenceLine:
    """Reference curve for Frenet coordinates.

    The longitudinal offset ``s`` runs from 0 to :attr:`length`; the lateral
    offset ``l`` is positive to the left of the curve heading.

    Args:
        spline: Arc-length parameterized curve
        config: Projection and domain settings
    """

    def __init__(self, spline: CubicSpline2D, config: Optional[PathDataConfig] = None):
        self.spline = spline
        self.config = config if config is not None else PathDataConfig()
        logger.info(f"Reference line initialized with length={self.length:.2f}m")

    @classmethod
    def from_waypoints(
        cls,
        x: Sequence[float],
        y: Sequence[float],
        config: Optional[PathDataConfig] = None
    ) -> 'ReferenceLine':
        """Create a reference line through waypoints."""
        return cls(CubicSpline2D(x, y), config)

    @classmethod
    def from_config(cls, config: PathDataConfig) -> 'ReferenceLine':
        """Create a reference line through the configured waypoints."""
        if len(config.reference_waypoints_x) < 2:
            raise ValueError("Configuration does not define reference waypoints")
        return cls.from_waypoints(config.reference_waypoints_x, config.reference_waypoints_y, config)

    @property
    def length(self) -> float:
        """Total length of the reference line."""
        return self.spline.length

    def get_reference_point(self, s: float) -> ReferencePoint:
        """Sample position, heading, curvature and curvature rate at s.

        Raises:
            ProjectionError: If s is outside the reference line
        """
        s = self._clamp_to_domain(s)
        rx, ry = self.spline.calc_position(s)
        rtheta = self.spline.calc_yaw(s)
        rkappa = self.spline.calc_curvature(s)
        rdkappa = self.spline.calc_curvature_rate(s)

        if any(v is None for v in [rx, ry, rtheta, rkappa, rdkappa]):
            raise ProjectionError(
                f"Failed to calculate reference line properties at s={s:.3f}: "
                f"position=({rx}, {ry}), yaw={rtheta}, curvature={rkappa}, curvature_rate={rdkappa}"
            )

        return ReferencePoint(x=rx, y=ry, heading=rtheta, kappa=rkappa, dkappa=rdkappa)

    def get_point_in_cartesian_frame(self, sl_point: SLPoint) -> Tuple[float, float]:
        """Map a (s, l) pair to global coordinates.

        Raises:
            ProjectionError: If s is outside the reference line
        """
        ref_point = self.get_reference_point(sl_point.s)
        x = ref_point.x - math.sin(ref_point.heading) * sl_point.l
        y = ref_point.y + math.cos(ref_point.heading) * sl_point.l
        return x, y

    def get_point_in_frenet_frame(self, x: float, y: float) -> SLPoint:
        """Project a global point onto the reference line.

        A coarse scan over the whole line picks the closest sample, which is
        then refined by bounded minimisation of the distance on the
        neighbouring interval.

        Raises:
            ProjectionError: If the minimisation fails, the point lies beyond
                either end of the line, or it is farther than the configured
                maximum lateral offset
        """
        n_samples = self.config.projection_coarse_samples
        s_samples = np.linspace(0.0, self.length, n_samples)
        px, py = self.spline.calc_position(s_samples)
        dist_sq = (px - x) ** 2 + (py - y) ** 2
        if not np.all(np.isfinite(dist_sq)):
            raise ProjectionError(f"Reference line sampling failed while projecting ({x:.3f}, {y:.3f})")

        k = int(np.argmin(dist_sq))
        s_lower = s_samples[max(k - 1, 0)]
        s_upper = s_samples[min(k + 1, n_samples - 1)]

        def _distance_sq(s: float) -> float:
            rx, ry = self.spline.calc_position(s)
            return (rx - x) ** 2 + (ry - y) ** 2

        result = minimize_scalar(
            _distance_sq,
            bounds=(s_lower, s_upper),
            method='bounded',
            options={'xatol': self.config.projection_tolerance},
        )
        if not result.success:
            raise ProjectionError(
                f"Projection of ({x:.3f}, {y:.3f}) did not converge: {result.message}"
            )

        best_s = float(result.x)
        if _distance_sq(best_s) > dist_sq[k]:
            best_s = float(s_samples[k])

        ref_point = self.get_reference_point(best_s)
        dx = x - ref_point.x
        dy = y - ref_point.y
        cos_theta_r = math.cos(ref_point.heading)
        sin_theta_r = math.sin(ref_point.heading)

        along = cos_theta_r * dx + sin_theta_r * dy
        tolerance = self.config.domain_tolerance
        if (best_s <= s_samples[1] and along < -tolerance) or \
                (best_s >= s_samples[-2] and along > tolerance):
            raise ProjectionError(
                f"Point ({x:.3f}, {y:.3f}) lies beyond the end of the reference line "
                f"(s={best_s:.3f}, overshoot={along:.3f}m)"
            )

        l = cos_theta_r * dy - sin_theta_r * dx
        if abs(l) > self.config.max_lateral_offset:
            raise ProjectionError(
                f"Point ({x:.3f}, {y:.3f}) is {abs(l):.3f}m from the reference line, "
                f"beyond max_lateral_offset={self.config.max_lateral_offset:.3f}m"
            )

        return SLPoint(s=best_s, l=l)

    def _clamp_to_domain(self, s: float) -> float:
        """Clamp s to [0, length], rejecting offsets beyond the tolerance."""
        tolerance = self.config.domain_tolerance
        if s < -tolerance or s > self.length + tolerance:
            raise ProjectionError(
                f"s={s:.3f} is outside the reference line domain [0, {self.length:.3f}]"
            )
        return min(max(s, 0.0), self.length)
