"""Shared fixtures for the path data tests."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from pathdata.core.data_structures import ReferencePoint, SLPoint
from pathdata.core.exceptions import ProjectionError
from pathdata.planning.reference_line import ReferenceLine


class StraightCurve:
    """Reference curve along the x-axis from x=0 to x=length."""

    def __init__(self, length: float = 10.0):
        self.length = length

    def _check(self, s):
        if s < 0.0 or s > self.length:
            raise ProjectionError(f"s={s} outside [0, {self.length}]")

    def get_reference_point(self, s):
        self._check(s)
        return ReferencePoint(x=s, y=0.0, heading=0.0, kappa=0.0, dkappa=0.0)

    def get_point_in_cartesian_frame(self, sl_point: SLPoint):
        self._check(sl_point.s)
        return sl_point.s, sl_point.l

    def get_point_in_frenet_frame(self, x, y):
        self._check(x)
        return SLPoint(s=x, l=y)


@pytest.fixture
def straight_curve():
    """Analytic straight curve of length 10 along the x-axis."""
    return StraightCurve(10.0)


@pytest.fixture
def straight_line():
    """Spline reference line along the x-axis from (0, 0) to (20, 0)."""
    return ReferenceLine.from_waypoints([0.0, 10.0, 20.0], [0.0, 0.0, 0.0])
