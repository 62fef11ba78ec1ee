"""Tests for path point sequences."""

import numpy as np
import pytest

from pathdata.core.data_structures import (
    DiscretizedPath,
    FrenetFramePath,
    FrenetFramePoint,
    PathPoint,
)


@pytest.fixture
def l_shaped_path():
    return DiscretizedPath([
        PathPoint(x=0.0, y=0.0, theta=0.0, kappa=0.0, s=0.0),
        PathPoint(x=1.0, y=0.0, theta=0.0, kappa=0.2, s=1.0),
        PathPoint(x=1.0, y=1.0, theta=np.pi / 2, kappa=0.4, s=2.0),
    ])


def test_path_point_array_round_trip():
    point = PathPoint(x=1.0, y=2.0, theta=0.3, kappa=0.1, s=4.0)
    assert PathPoint.from_array(point.to_array()) == point


def test_frenet_point_missing_derivatives_become_nan():
    point = FrenetFramePoint(s=1.0, l=0.5, dl=None, ddl=None)
    arr = point.to_array()
    assert not point.has_derivatives
    assert np.isnan(arr[2]) and np.isnan(arr[3])
    assert FrenetFramePoint.from_array(arr) == point


def test_sequence_protocol(l_shaped_path):
    assert len(l_shaped_path) == 3
    assert l_shaped_path[1].x == 1.0
    assert [p.s for p in l_shaped_path] == [0.0, 1.0, 2.0]
    assert l_shaped_path.length == 2.0
    assert l_shaped_path.to_array().shape == (3, 7)


def test_path_point_at_out_of_range(l_shaped_path):
    with pytest.raises(IndexError):
        l_shaped_path.path_point_at(3)


def test_evaluate_interpolates(l_shaped_path):
    point = l_shaped_path.evaluate(1.5)
    assert point.x == pytest.approx(1.0)
    assert point.y == pytest.approx(0.5)
    assert point.theta == pytest.approx(np.pi / 4)
    assert point.kappa == pytest.approx(0.3)
    assert point.s == pytest.approx(1.5)


def test_evaluate_at_sample_returns_sample_values(l_shaped_path):
    point = l_shaped_path.evaluate(1.0)
    assert point.x == pytest.approx(1.0)
    assert point.y == pytest.approx(0.0)
    assert point.kappa == pytest.approx(0.2)


def test_evaluate_extrapolates_past_both_ends(l_shaped_path):
    before = l_shaped_path.evaluate(-0.5)
    assert before.x == pytest.approx(-0.5)
    assert before.y == pytest.approx(0.0)

    after = l_shaped_path.evaluate(2.5)
    assert after.x == pytest.approx(1.0)
    assert after.y == pytest.approx(1.5)
    assert after.kappa == pytest.approx(0.5)


def test_evaluate_skips_zero_length_end_segments():
    # Trailing duplicate sample would otherwise pin extrapolation to x=1
    path = DiscretizedPath([
        PathPoint(x=0.0, y=0.0, s=0.0),
        PathPoint(x=1.0, y=0.0, s=1.0),
        PathPoint(x=1.0, y=0.0, s=1.0),
    ])
    after = path.evaluate(2.0)
    assert after.x == pytest.approx(2.0)
    assert after.s == pytest.approx(2.0)

    leading = DiscretizedPath([
        PathPoint(x=0.0, y=0.0, s=0.0),
        PathPoint(x=0.0, y=0.0, s=0.0),
        PathPoint(x=1.0, y=0.0, s=1.0),
    ])
    assert leading.evaluate(-1.0).x == pytest.approx(-1.0)


def test_evaluate_single_point():
    path = DiscretizedPath([PathPoint(x=3.0, y=4.0)])
    assert path.evaluate(10.0) == PathPoint(x=3.0, y=4.0)


def test_evaluate_empty_path_raises():
    with pytest.raises(IndexError):
        DiscretizedPath().evaluate(0.0)


def test_nearest_index_prefers_first_minimum():
    path = FrenetFramePath([FrenetFramePoint(s=0.0, l=0.0), FrenetFramePoint(s=1.0, l=0.0)])
    assert path.nearest_index(0.5) == 0
    assert path.nearest_index(0.9) == 1


def test_nearest_index_empty_raises():
    with pytest.raises(IndexError):
        FrenetFramePath().nearest_index(0.0)


def test_empty_paths():
    assert len(DiscretizedPath()) == 0
    assert DiscretizedPath().length == 0.0
    assert DiscretizedPath().to_array().shape == (0, 7)
    assert FrenetFramePath().to_array().shape == (0, 4)
