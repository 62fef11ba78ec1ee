"""Conversion between Cartesian and Frenet path representations.

The functions here convert whole paths against one reference curve. Each
conversion is atomic: the output is assembled locally and returned only when
every sample converted, otherwise a ``ProjectionError`` is raised and no
partial path escapes.
"""

import math
from typing import List, Protocol, Tuple

from loguru import logger

from .coordinate_converter import CartesianFrenetConverter
from .data_structures import (
    DiscretizedPath,
    FrenetFramePath,
    FrenetFramePoint,
    FrenetPathLike,
    PathLike,
    PathPoint,
    ReferencePoint,
    SLPoint,
)
from .exceptions import ProjectionError


# Smallest admissible 1 - kappa_ref * l; below it the offset point lies at or
# behind the reference curve's centre of curvature.
MIN_ONE_MINUS_KAPPA_L = 1.0e-6


class ReferenceCurve(Protocol):
    """Queries a reference curve must answer for path conversion.

    The two point mappings raise ``ProjectionError`` when the curve cannot
    represent the requested offset or point. Curves are held by weak
    reference, so implementations must support ``weakref.ref`` (classes with
    ``__slots__`` need a ``__weakref__`` slot).
    """

    def get_reference_point(self, s: float) -> ReferencePoint:
        ...

    def get_point_in_cartesian_frame(self, sl_point: SLPoint) -> Tuple[float, float]:
        ...

    def get_point_in_frenet_frame(self, x: float, y: float) -> SLPoint:
        ...


def derive_cartesian(frenet_path: FrenetPathLike, curve: ReferenceCurve) -> DiscretizedPath:
    """Convert a Frenet path into a Cartesian path.

    Lateral derivatives that were not computed are read as zero. Arc length
    is re-derived from the output positions rather than copied from the
    Frenet ``s``, since an offset path is longer or shorter than its
    reference curve.

    Args:
        frenet_path: Frenet samples in path order
        curve: Reference curve the samples are expressed against

    Returns:
        Cartesian path with one sample per Frenet sample

    Raises:
        ProjectionError: If any sample cannot be mapped
    """
    path_points: List[PathPoint] = []
    for i, frenet_point in enumerate(frenet_path):
        dl = frenet_point.dl if frenet_point.dl is not None else 0.0
        ddl = frenet_point.ddl if frenet_point.ddl is not None else 0.0

        try:
            x, y = curve.get_point_in_cartesian_frame(SLPoint(frenet_point.s, frenet_point.l))
            ref_point = curve.get_reference_point(frenet_point.s)
        except ProjectionError as e:
            raise ProjectionError(
                f"Failed to convert sl point (s={frenet_point.s:.3f}, l={frenet_point.l:.3f}) "
                f"at index {i} to xy point: {e}",
                index=i,
            ) from e

        if 1.0 - ref_point.kappa * frenet_point.l < MIN_ONE_MINUS_KAPPA_L:
            raise ProjectionError(
                f"Lateral offset l={frenet_point.l:.3f} at index {i} reaches the centre of "
                f"curvature of the reference curve (kappa={ref_point.kappa:.4f})",
                index=i,
            )

        theta = CartesianFrenetConverter.calculate_theta(
            ref_point.heading, ref_point.kappa, frenet_point.l, dl)
        kappa = CartesianFrenetConverter.calculate_kappa(
            ref_point.kappa, ref_point.dkappa, frenet_point.l, dl, ddl)

        if path_points:
            last = path_points[-1]
            s = last.s + math.hypot(x - last.x, y - last.y)
        else:
            s = 0.0

        path_points.append(PathPoint(x=x, y=y, theta=theta, kappa=kappa,
                                     dkappa=0.0, v=0.0, s=s))

    logger.debug(f"Converted frenet path with {len(path_points)} points to cartesian")
    return DiscretizedPath(path_points)


def derive_frenet(discretized_path: PathLike, curve: ReferenceCurve) -> FrenetFramePath:
    """Convert a Cartesian path into a Frenet path.

    Only ``s`` and ``l`` are produced. ``dl`` and ``ddl`` are left as
    ``None``; use :func:`estimate_lateral_derivatives` where they are needed.

    Args:
        discretized_path: Cartesian samples in path order
        curve: Reference curve to project onto

    Returns:
        Frenet path with one sample per Cartesian sample

    Raises:
        ProjectionError: If any sample cannot be projected
    """
    frenet_points: List[FrenetFramePoint] = []
    for i, path_point in enumerate(discretized_path):
        try:
            sl_point = curve.get_point_in_frenet_frame(path_point.x, path_point.y)
        except ProjectionError as e:
            raise ProjectionError(
                f"Failed to project point ({path_point.x:.3f}, {path_point.y:.3f}) "
                f"at index {i} onto reference curve: {e}",
                index=i,
            ) from e
        frenet_points.append(FrenetFramePoint(s=sl_point.s, l=sl_point.l, dl=None, ddl=None))

    logger.debug(f"Converted cartesian path with {len(frenet_points)} points to frenet")
    return FrenetFramePath(frenet_points)


def estimate_lateral_derivatives(
    discretized_path: PathLike,
    frenet_path: FrenetPathLike,
    curve: ReferenceCurve
) -> FrenetFramePath:
    """Fill in dl and ddl of a Frenet path from its Cartesian counterpart.

    Uses the heading and curvature of each Cartesian sample with the inverse
    of the transforms applied by :func:`derive_cartesian`.

    Args:
        discretized_path: Cartesian samples carrying heading and curvature
        frenet_path: Corresponding Frenet samples (same length and order)
        curve: Reference curve of the Frenet samples

    Returns:
        Frenet path with every derivative populated

    Raises:
        ValueError: If the two paths differ in length
        ProjectionError: If a reference point cannot be queried
    """
    if len(discretized_path) != len(frenet_path):
        raise ValueError(
            f"Path length mismatch: {len(discretized_path)} cartesian points vs "
            f"{len(frenet_path)} frenet points"
        )

    points: List[FrenetFramePoint] = []
    for i, (path_point, frenet_point) in enumerate(zip(discretized_path, frenet_path)):
        try:
            ref_point = curve.get_reference_point(frenet_point.s)
        except ProjectionError as e:
            raise ProjectionError(
                f"Failed to query reference point at s={frenet_point.s:.3f} (index {i}): {e}",
                index=i,
            ) from e

        dl, ddl = CartesianFrenetConverter.calculate_lateral_derivatives(
            ref_point.heading, ref_point.kappa, ref_point.dkappa,
            frenet_point.l, path_point.theta, path_point.kappa)
        points.append(FrenetFramePoint(s=frenet_point.s, l=frenet_point.l, dl=dl, ddl=ddl))

    return FrenetFramePath(points)
