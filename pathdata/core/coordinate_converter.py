"""Analytic transforms between Frenet and Cartesian path quantities.

This module provides the point-wise formulas relating a path's heading and
curvature to its lateral offset (and derivatives) along a reference curve,
plus the angle helpers they rely on.

Reference:
Werling et al., "Optimal Trajectory Generation for Dynamic Street Scenarios
in a Frenet Frame" (2010)
"""

import math
import numpy as np
from typing import Tuple, Union


class CartesianFrenetConverter:
    """Point-wise heading and curvature transforms under lateral offset.

    All derivatives are taken with respect to the reference curve's arc
    length ``s`` (not time):
    - l: lateral offset from the reference curve
    - dl: dl/ds
    - ddl: d²l/ds²
    """

    @staticmethod
    def calculate_theta(rtheta: float, rkappa: float, l: float, dl: float) -> float:
        """Heading of a path point offset from the reference curve.

        Args:
            rtheta: Reference point heading
            rkappa: Reference point curvature
            l: Lateral offset
            dl: Lateral offset derivative dl/ds

        Returns:
            Heading angle in [-pi, pi]
        """
        return normalize_angle(rtheta + math.atan2(dl, 1.0 - rkappa * l))

    @staticmethod
    def calculate_kappa(
        rkappa: float,
        rdkappa: float,
        l: float,
        dl: float,
        ddl: float
    ) -> float:
        """Curvature of a path point offset from the reference curve.

        Args:
            rkappa: Reference point curvature
            rdkappa: Reference point curvature rate
            l: Lateral offset
            dl: dl/ds
            ddl: d²l/ds²

        Returns:
            Curvature of the offset path
        """
        one_minus_kappa_r_d = 1.0 - rkappa * l
        delta_theta = math.atan2(dl, one_minus_kappa_r_d)
        tan_delta_theta = dl / one_minus_kappa_r_d
        cos_delta_theta = math.cos(delta_theta)

        kappa_r_d_prime = rdkappa * l + rkappa * dl

        return (((ddl + kappa_r_d_prime * tan_delta_theta) *
                 cos_delta_theta * cos_delta_theta) / one_minus_kappa_r_d + rkappa) * \
            cos_delta_theta / one_minus_kappa_r_d

    @staticmethod
    def calculate_lateral_derivatives(
        rtheta: float,
        rkappa: float,
        rdkappa: float,
        l: float,
        theta: float,
        kappa: float
    ) -> Tuple[float, float]:
        """Inverse of the heading/curvature transforms.

        Args:
            rtheta: Reference point heading
            rkappa: Reference point curvature
            rdkappa: Reference point curvature rate
            l: Lateral offset
            theta: Path heading
            kappa: Path curvature

        Returns:
            dl: dl/ds
            ddl: d²l/ds²
        """
        delta_theta = normalize_angle(theta - rtheta)
        tan_delta_theta = math.tan(delta_theta)
        cos_delta_theta = math.cos(delta_theta)

        one_minus_kappa_r_d = 1.0 - rkappa * l
        dl = one_minus_kappa_r_d * tan_delta_theta

        kappa_r_d_prime = rdkappa * l + rkappa * dl

        ddl = (-kappa_r_d_prime * tan_delta_theta +
               one_minus_kappa_r_d / (cos_delta_theta * cos_delta_theta) *
               (kappa * one_minus_kappa_r_d / cos_delta_theta - rkappa))

        return dl, ddl


def normalize_angle(angle: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Normalize angle to [-pi, pi] range.

    Args:
        angle: Input angle in radians

    Returns:
        Normalized angle in [-pi, pi]
    """
    two_pi = 2.0 * np.pi

    # math.remainder semantics: n is the nearest integer, ties to even
    n = np.round(angle / two_pi)
    a = angle - n * two_pi

    if np.isscalar(a):
        if abs(a + np.pi) < 1e-9 and angle > 0:
            return -np.pi
        return float(a)

    mask = (np.abs(a + np.pi) < 1e-9) & (angle > 0)
    if np.any(mask):
        a[mask] = -np.pi

    return a


def lerp(x0: float, t0: float, x1: float, t1: float, t: float) -> float:
    """Linear interpolation of x at t; extrapolates outside [t0, t1]."""
    if abs(t1 - t0) <= 1e-10:
        return x0
    r = (t - t0) / (t1 - t0)
    return x0 + r * (x1 - x0)


def slerp(a0: float, t0: float, a1: float, t1: float, t: float) -> float:
    """Interpolate an angle along the shortest arc between a0 and a1."""
    if abs(t1 - t0) <= 1e-10:
        return normalize_angle(a0)
    a0_n = normalize_angle(a0)
    a1_n = normalize_angle(a1)
    d = a1_n - a0_n
    if d > math.pi:
        d -= 2.0 * math.pi
    elif d < -math.pi:
        d += 2.0 * math.pi

    r = (t - t0) / (t1 - t0)
    return normalize_angle(a0_n + d * r)
