"""Cubic spline curves parameterized by arc length.

Based on the implementation from PythonRobotics:
https://github.com/AtsushiSakai/PythonRobotics
"""

import math
import numpy as np
from typing import List, Optional, Sequence, Tuple, Union

ArrayLike = Union[float, np.ndarray]


class CubicSpline1D:
    """1D Cubic Spline interpolation with natural boundary conditions.

    Evaluation outside ``[x[0], x[-1]]`` yields ``None`` for scalar queries
    and ``NaN`` for array queries.

    Args:
        x: x coordinates for data points (strictly ascending)
        y: y coordinates for data points
    """

    def __init__(self, x: Sequence[float], y: Sequence[float]):
        if len(x) != len(y):
            raise ValueError(f"x ({len(x)}) and y ({len(y)}) must have the same length")
        if len(x) < 2:
            raise ValueError(f"At least 2 data points are required, got {len(x)}")

        h = np.diff(x)
        if np.any(h <= 0):
            raise ValueError("x coordinates must be strictly ascending")

        self.x = np.asarray(x, dtype=float)
        self.nx = len(x)
        self.a = np.asarray(y, dtype=float)
        self.c = np.linalg.solve(self._calc_A(h), self._calc_B(h))
        self.b = (self.a[1:] - self.a[:-1]) / h - h / 3.0 * (2.0 * self.c[:-1] + self.c[1:])
        self.d = (self.c[1:] - self.c[:-1]) / (3.0 * h)

    def calc_position(self, x: ArrayLike) -> Optional[ArrayLike]:
        """Calculate y at x."""
        return self._evaluate(x, 0)

    def calc_first_derivative(self, x: ArrayLike) -> Optional[ArrayLike]:
        """Calculate dy/dx at x."""
        return self._evaluate(x, 1)

    def calc_second_derivative(self, x: ArrayLike) -> Optional[ArrayLike]:
        """Calculate d²y/dx² at x."""
        return self._evaluate(x, 2)

    def calc_third_derivative(self, x: ArrayLike) -> Optional[ArrayLike]:
        """Calculate d³y/dx³ at x."""
        return self._evaluate(x, 3)

    def _evaluate(self, x: ArrayLike, order: int) -> Optional[ArrayLike]:
        scalar = np.isscalar(x)
        xs = np.atleast_1d(np.asarray(x, dtype=float))
        mask = (xs >= self.x[0]) & (xs <= self.x[-1])

        if scalar and not mask[0]:
            return None

        res = np.full(xs.shape, np.nan)
        if np.any(mask):
            i = self._search_index(xs[mask])
            dx = xs[mask] - self.x[i]
            a, b, c, d = self.a[i], self.b[i], self.c[i], self.d[i]
            if order == 0:
                res[mask] = a + b * dx + c * dx ** 2 + d * dx ** 3
            elif order == 1:
                res[mask] = b + 2.0 * c * dx + 3.0 * d * dx ** 2
            elif order == 2:
                res[mask] = 2.0 * c + 6.0 * d * dx
            else:
                res[mask] = 6.0 * d

        if scalar:
            return float(res[0])
        return res

    def _search_index(self, x: np.ndarray) -> np.ndarray:
        """Search data segment index for given x."""
        idx = np.searchsorted(self.x, x, side='right') - 1
        return np.clip(idx, 0, self.nx - 2)

    def _calc_A(self, h: np.ndarray) -> np.ndarray:
        """Calculate matrix A for spline coefficient c."""
        A = np.zeros((self.nx, self.nx))
        A[0, 0] = 1.0
        for i in range(self.nx - 1):
            if i != (self.nx - 2):
                A[i + 1, i + 1] = 2.0 * (h[i] + h[i + 1])
            A[i + 1, i] = h[i]
            A[i, i + 1] = h[i]

        A[0, 1] = 0.0
        A[self.nx - 1, self.nx - 2] = 0.0
        A[self.nx - 1, self.nx - 1] = 1.0
        return A

    def _calc_B(self, h: np.ndarray) -> np.ndarray:
        """Calculate matrix B for spline coefficient c."""
        B = np.zeros(self.nx)
        for i in range(self.nx - 2):
            B[i + 1] = 3.0 * (self.a[i + 2] - self.a[i + 1]) / h[i + 1] \
                - 3.0 * (self.a[i + 1] - self.a[i]) / h[i]
        return B


class CubicSpline2D:
    """2D Cubic Spline curve through waypoints, parameterized by arc length s.

    Args:
        x: x coordinates of waypoints
        y: y coordinates of waypoints
    """

    def __init__(self, x: Sequence[float], y: Sequence[float]):
        self.s = self._calc_s(x, y)
        self.sx = CubicSpline1D(self.s, x)
        self.sy = CubicSpline1D(self.s, y)

    def _calc_s(self, x: Sequence[float], y: Sequence[float]) -> List[float]:
        """Calculate cumulative chord length along the waypoints."""
        self.ds = np.hypot(np.diff(x), np.diff(y))
        if np.any(self.ds <= 0.0):
            raise ValueError("Waypoints contain duplicate consecutive points")
        return [0.0] + np.cumsum(self.ds).tolist()

    @property
    def length(self) -> float:
        """Total arc length of the curve."""
        return self.s[-1]

    def calc_position(self, s: ArrayLike) -> Tuple[Optional[ArrayLike], Optional[ArrayLike]]:
        """Calculate (x, y) position at arc length s."""
        return self.sx.calc_position(s), self.sy.calc_position(s)

    def calc_yaw(self, s: ArrayLike) -> Optional[ArrayLike]:
        """Calculate heading angle in radians at arc length s."""
        dx = self.sx.calc_first_derivative(s)
        dy = self.sy.calc_first_derivative(s)

        if np.isscalar(s):
            if dx is None or dy is None:
                return None
            return math.atan2(dy, dx)
        return np.arctan2(dy, dx)

    def calc_curvature(self, s: ArrayLike) -> Optional[ArrayLike]:
        """Calculate signed curvature at arc length s."""
        dx = self.sx.calc_first_derivative(s)
        ddx = self.sx.calc_second_derivative(s)
        dy = self.sy.calc_first_derivative(s)
        ddy = self.sy.calc_second_derivative(s)

        if np.isscalar(s) and any(v is None for v in [dx, ddx, dy, ddy]):
            return None

        with np.errstate(invalid='ignore', divide='ignore'):
            return (ddy * dx - ddx * dy) / ((dx ** 2 + dy ** 2) ** 1.5)

    def calc_curvature_rate(self, s: ArrayLike) -> Optional[ArrayLike]:
        """Calculate rate of change of curvature at arc length s."""
        dx = self.sx.calc_first_derivative(s)
        dy = self.sy.calc_first_derivative(s)
        ddx = self.sx.calc_second_derivative(s)
        ddy = self.sy.calc_second_derivative(s)
        dddx = self.sx.calc_third_derivative(s)
        dddy = self.sy.calc_third_derivative(s)

        if np.isscalar(s) and any(v is None for v in [dx, dy, ddx, ddy, dddx, dddy]):
            return None

        with np.errstate(invalid='ignore', divide='ignore'):
            a = dx * ddy - dy * ddx
            b = dx * dddy - dy * dddx
            c = dx * ddx + dy * ddy
            d = dx * dx + dy * dy
            # d(kappa)/ds with the chain rule through ds_curve = sqrt(d) * ds_param
            return (b * d - 3.0 * a * c) / (d ** 3)
