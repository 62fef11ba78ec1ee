"""Path data container.

Holds a path in both its Cartesian and its Frenet representation relative to
one reference curve, keeping the two representations in step.
"""

import weakref
from typing import Optional
from loguru import logger

from ..config import PathDataConfig
from .data_structures import (
    DiscretizedPath,
    FrenetFramePath,
    FrenetPathLike,
    PathLike,
    PathPoint,
)
from .exceptions import (
    InconsistentStateError,
    ProjectionError,
    UnboundReferenceCurveError,
)
from .path_transform import ReferenceCurve, derive_cartesian, derive_frenet


class PathData:
    """Cartesian and Frenet views of one path along a reference curve.

    The reference curve is borrowed: only a weak reference is kept, so the
    container never extends the curve's lifetime and reports it as unbound
    once the curve is gone. Setting either path derives the other before
    anything is stored; a failed derivation leaves both stored paths as they
    were.

    Not thread-safe; callers sharing an instance must serialize mutations.

    Args:
        config: Lookup settings (defaults to ``PathDataConfig()``)
    """

    def __init__(self, config: Optional[PathDataConfig] = None):
        self.config = config if config is not None else PathDataConfig()
        self._reference_line_ref: Optional[weakref.ReferenceType] = None
        self._discretized_path = DiscretizedPath()
        self._frenet_path = FrenetFramePath()

    def __len__(self) -> int:
        return len(self._discretized_path)

    @property
    def reference_line(self) -> Optional[ReferenceCurve]:
        """Bound reference curve, or None if unset or no longer alive."""
        if self._reference_line_ref is None:
            return None
        return self._reference_line_ref()

    @property
    def discretized_path(self) -> DiscretizedPath:
        """Cartesian path; empty when no path is set."""
        return self._discretized_path

    @property
    def frenet_frame_path(self) -> FrenetFramePath:
        """Frenet path; empty when no path is set."""
        return self._frenet_path

    @property
    def is_empty(self) -> bool:
        """Whether no path is stored."""
        return len(self._discretized_path) == 0

    def set_reference_line(self, reference_line: Optional[ReferenceCurve]) -> None:
        """Bind a reference curve, discarding any stored path.

        Args:
            reference_line: Curve to bind, or None to leave the container unbound

        Raises:
            TypeError: If the curve does not support weak references; the
                container is left unchanged
        """
        reference_line_ref = None
        if reference_line is not None:
            try:
                reference_line_ref = weakref.ref(reference_line)
            except TypeError as e:
                raise TypeError(
                    f"Reference line of type {type(reference_line).__name__} must support weak "
                    f"references (add '__weakref__' to its __slots__)"
                ) from e

        self.clear()
        self._reference_line_ref = reference_line_ref
        if reference_line_ref is not None:
            logger.debug("Reference line bound to path data")

    def set_discretized_path(self, path: PathLike) -> bool:
        """Set the Cartesian path and derive its Frenet counterpart.

        The samples are stored as given, so their ``s`` must start at 0 and be
        non-decreasing for arc-length lookups to work.

        Args:
            path: Cartesian path samples

        Returns:
            True if both paths were stored, False if the path was rejected
        """
        reference_line = self.reference_line
        if reference_line is None:
            logger.error("Should NOT set discretized path when reference line is not set. "
                         "Please set reference line first.")
            return False

        discretized_path = DiscretizedPath(path)
        _warn_on_bad_arc_length(discretized_path)
        try:
            frenet_path = derive_frenet(discretized_path, reference_line)
        except ProjectionError as e:
            logger.error(f"Fail to transfer discretized path to frenet path: {e}")
            return False

        self._commit(discretized_path, frenet_path)
        return True

    def set_frenet_path(self, frenet_path: FrenetPathLike) -> bool:
        """Set the Frenet path and derive its Cartesian counterpart.

        Args:
            frenet_path: Frenet path samples

        Returns:
            True if both paths were stored, False if the path was rejected
        """
        reference_line = self.reference_line
        if reference_line is None:
            logger.error("Should NOT set frenet path when reference line is not set. "
                         "Please set reference line first.")
            return False

        frenet_path = FrenetFramePath(frenet_path)
        try:
            discretized_path = derive_cartesian(frenet_path, reference_line)
        except ProjectionError as e:
            logger.error(f"Fail to transfer frenet path to discretized path: {e}")
            return False

        self._commit(discretized_path, frenet_path)
        return True

    def get_path_point_with_path_s(self, s: float) -> PathPoint:
        """Path point at arc length s along the Cartesian path.

        Interpolates linearly between the bracketing samples and extrapolates
        past either end.

        Raises:
            IndexError: If no path is stored
        """
        return self._discretized_path.evaluate(s)

    def get_path_point_with_ref_s(self, ref_s: float) -> PathPoint:
        """Stored path point whose Frenet s is closest to ref_s.

        Returns the first sample within ``config.ref_s_epsilon`` of ``ref_s``
        if there is one, otherwise the first nearest sample. The result is
        always a stored sample; no interpolation is done.

        Raises:
            UnboundReferenceCurveError: If no reference line is bound
            IndexError: If no path is stored
        """
        if self.reference_line is None:
            raise UnboundReferenceCurveError(
                "Cannot look up a path point by reference s without a reference line"
            )
        self._check_consistency()

        index = self._frenet_path.nearest_index(ref_s, epsilon=self.config.ref_s_epsilon)
        return self._discretized_path.path_point_at(index)

    def clear(self) -> None:
        """Unbind the reference line and drop both paths."""
        self._discretized_path = DiscretizedPath()
        self._frenet_path = FrenetFramePath()
        self._reference_line_ref = None

    # Aliases named after the operations they implement
    bind_reference_curve = set_reference_line
    set_cartesian_path = set_discretized_path
    path_point_at_arc_length = get_path_point_with_path_s
    path_point_at_reference_arc_length = get_path_point_with_ref_s

    def _commit(self, discretized_path: DiscretizedPath, frenet_path: FrenetFramePath) -> None:
        if len(discretized_path) != len(frenet_path):
            raise InconsistentStateError(
                f"Derived path size mismatch: {len(discretized_path)} cartesian points vs "
                f"{len(frenet_path)} frenet points"
            )
        self._discretized_path = discretized_path
        self._frenet_path = frenet_path
        logger.debug(f"Path data updated with {len(discretized_path)} points")

    def _check_consistency(self) -> None:
        if len(self._discretized_path) != len(self._frenet_path):
            raise InconsistentStateError(
                f"Stored path size mismatch: {len(self._discretized_path)} cartesian points vs "
                f"{len(self._frenet_path)} frenet points"
            )


def _warn_on_bad_arc_length(path: DiscretizedPath) -> None:
    if len(path) == 0:
        return
    if path[0].s != 0.0:
        logger.warning(f"Discretized path starts at s={path[0].s:.3f} instead of 0")
    for i in range(1, len(path)):
        if path[i].s < path[i - 1].s:
            logger.warning(f"Discretized path arc length decreases at index {i} "
                           f"({path[i - 1].s:.3f} -> {path[i].s:.3f})")
            break
