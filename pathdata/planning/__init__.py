"""Reference curve module."""

from .cubic_spline import CubicSpline1D, CubicSpline2D
from .reference_line import ReferenceLine

__all__ = [
    'CubicSpline1D',
    'CubicSpline2D',
    'ReferenceLine',
]
