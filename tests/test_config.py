"""Tests for configuration loading and validation."""

import math

import pytest

from pathdata.config import (
    ConfigValidationError,
    PathDataConfig,
    load_config,
    save_config,
    validate_config,
)


def test_default_config_is_valid():
    config = PathDataConfig()
    validate_config(config)
    assert config.ref_s_epsilon == 1.0e-3
    assert math.isinf(config.max_lateral_offset)


def test_validation_collects_all_errors():
    config = PathDataConfig(ref_s_epsilon=0.0, projection_coarse_samples=1, domain_tolerance=-1.0)
    with pytest.raises(ConfigValidationError) as exc_info:
        validate_config(config)

    message = str(exc_info.value)
    assert "ref_s_epsilon" in message
    assert "projection_coarse_samples" in message
    assert "domain_tolerance" in message


def test_validation_rejects_mismatched_waypoints():
    config = PathDataConfig(reference_waypoints_x=[0.0, 1.0], reference_waypoints_y=[0.0])
    with pytest.raises(ConfigValidationError):
        validate_config(config)


def test_save_and_load_round_trip(tmp_path):
    config = PathDataConfig(
        ref_s_epsilon=0.01,
        max_lateral_offset=4.0,
        reference_waypoints_x=[0.0, 10.0, 20.0],
        reference_waypoints_y=[0.0, 1.0, 0.0],
    )
    path = tmp_path / "nested" / "config.yaml"

    save_config(config, str(path))
    loaded = load_config(str(path))

    assert loaded.ref_s_epsilon == pytest.approx(0.01)
    assert loaded.max_lateral_offset == pytest.approx(4.0)
    assert loaded.reference_waypoints_x == [0.0, 10.0, 20.0]
    assert loaded.config_path == str(path)


def test_infinite_lateral_offset_survives_round_trip(tmp_path):
    path = tmp_path / "config.yaml"
    save_config(PathDataConfig(), str(path))
    assert math.isinf(load_config(str(path)).max_lateral_offset)


def test_load_missing_file():
    with pytest.raises(FileNotFoundError):
        load_config("does/not/exist.yaml")


def test_load_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    with pytest.raises(ValueError):
        load_config(str(path))


def test_load_unknown_key(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("not_a_field: 1\n")
    with pytest.raises(ValueError):
        load_config(str(path))


def test_load_invalid_values(tmp_path):
    path = tmp_path / "invalid.yaml"
    path.write_text("projection_tolerance: -0.5\n")
    with pytest.raises(ConfigValidationError):
        load_config(str(path))
