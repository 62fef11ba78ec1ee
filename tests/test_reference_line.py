"""Tests for the spline reference line."""

import numpy as np
import pytest

from pathdata.config import PathDataConfig
from pathdata.core.data_structures import SLPoint
from pathdata.core.exceptions import ProjectionError
from pathdata.planning.reference_line import ReferenceLine


@pytest.fixture
def arc_line():
    """Quarter circle of radius 10, counter-clockwise, starting at the origin heading east."""
    radius = 10.0
    phi = np.linspace(0.0, np.pi / 2.0, 31)
    return ReferenceLine.from_waypoints(radius * np.sin(phi), radius - radius * np.cos(phi))


def test_reference_point_on_straight_line(straight_line):
    ref = straight_line.get_reference_point(5.0)
    assert ref.x == pytest.approx(5.0)
    assert ref.y == pytest.approx(0.0)
    assert ref.heading == pytest.approx(0.0)
    assert ref.kappa == pytest.approx(0.0, abs=1e-9)
    assert ref.dkappa == pytest.approx(0.0, abs=1e-9)


def test_reference_point_outside_domain(straight_line):
    with pytest.raises(ProjectionError):
        straight_line.get_reference_point(25.0)
    with pytest.raises(ProjectionError):
        straight_line.get_reference_point(-1.0)


def test_reference_point_within_domain_tolerance(straight_line):
    ref = straight_line.get_reference_point(20.0005)
    assert ref.x == pytest.approx(20.0)


def test_sl_to_cartesian_left_is_positive(straight_line):
    x, y = straight_line.get_point_in_cartesian_frame(SLPoint(s=3.0, l=1.0))
    assert x == pytest.approx(3.0)
    assert y == pytest.approx(1.0)


def test_projection_on_straight_line(straight_line):
    sl = straight_line.get_point_in_frenet_frame(4.0, -2.0)
    assert sl.s == pytest.approx(4.0, abs=1e-4)
    assert sl.l == pytest.approx(-2.0, abs=1e-6)


def test_projection_beyond_end_fails(straight_line):
    with pytest.raises(ProjectionError):
        straight_line.get_point_in_frenet_frame(25.0, 0.0)
    with pytest.raises(ProjectionError):
        straight_line.get_point_in_frenet_frame(-3.0, 1.0)


def test_projection_beyond_max_lateral_offset_fails():
    config = PathDataConfig(max_lateral_offset=5.0)
    line = ReferenceLine.from_waypoints([0.0, 10.0], [0.0, 0.0], config)

    assert line.get_point_in_frenet_frame(5.0, 4.0).l == pytest.approx(4.0, abs=1e-6)
    with pytest.raises(ProjectionError):
        line.get_point_in_frenet_frame(5.0, 8.0)


def test_projection_round_trip_on_arc(arc_line):
    """Projecting a point and mapping it back reproduces the point."""
    radius = 9.0
    phi = np.pi / 4.0
    x, y = radius * np.sin(phi), 10.0 - radius * np.cos(phi)

    sl = arc_line.get_point_in_frenet_frame(x, y)
    assert sl.l == pytest.approx(1.0, abs=1e-2)

    x_back, y_back = arc_line.get_point_in_cartesian_frame(sl)
    assert x_back == pytest.approx(x, abs=1e-3)
    assert y_back == pytest.approx(y, abs=1e-3)


def test_arc_curvature_is_positive(arc_line):
    ref = arc_line.get_reference_point(arc_line.length / 2.0)
    assert ref.kappa == pytest.approx(0.1, rel=0.02)


def test_from_config():
    config = PathDataConfig(reference_waypoints_x=[0.0, 5.0], reference_waypoints_y=[0.0, 0.0])
    line = ReferenceLine.from_config(config)
    assert line.length == pytest.approx(5.0)
    assert line.config is config


def test_from_config_without_waypoints():
    with pytest.raises(ValueError):
        ReferenceLine.from_config(PathDataConfig())


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
