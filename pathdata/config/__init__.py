"""Configuration management module."""

import math
import yaml
from pathlib import Path
from typing import List, Optional
from dataclasses import dataclass, field
from loguru import logger


@dataclass
class PathDataConfig:
    """Configuration for reference curves and the path data container.

    Attributes:
        # Container lookups
        ref_s_epsilon: Distance under which a stored sample's Frenet s counts
            as an exact match for a reference arc-length query [m]

        # Projection onto the reference curve
        projection_coarse_samples: Number of samples of the coarse nearest-point scan
        projection_tolerance: Absolute tolerance on s of the refined projection [m]
        domain_tolerance: Slack beyond either end of the curve still treated
            as inside its domain [m]
        max_lateral_offset: Largest |l| a projection may return [m]

        # Reference curve
        reference_waypoints_x: X coordinates of waypoints
        reference_waypoints_y: Y coordinates of waypoints
    """
    # Container lookups
    ref_s_epsilon: float = 1.0e-3

    # Projection
    projection_coarse_samples: int = 1000
    projection_tolerance: float = 1.0e-6
    domain_tolerance: float = 1.0e-3
    max_lateral_offset: float = math.inf

    # Reference curve
    reference_waypoints_x: list = field(default_factory=list)
    reference_waypoints_y: list = field(default_factory=list)

    # Internal: loaded from
    config_path: Optional[str] = None


class ConfigValidationError(ValueError):
    """Raised when configuration validation fails."""
    pass


def validate_config(config: PathDataConfig) -> None:
    """Validate configuration values for consistency and correctness.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    errors: List[str] = []

    if config.ref_s_epsilon <= 0:
        errors.append(f"ref_s_epsilon must be positive, got {config.ref_s_epsilon}")

    if config.projection_coarse_samples < 2:
        errors.append(f"projection_coarse_samples must be at least 2, got {config.projection_coarse_samples}")
    if config.projection_tolerance <= 0:
        errors.append(f"projection_tolerance must be positive, got {config.projection_tolerance}")
    if config.domain_tolerance < 0:
        errors.append(f"domain_tolerance must be non-negative, got {config.domain_tolerance}")
    if config.max_lateral_offset <= 0:
        errors.append(f"max_lateral_offset must be positive, got {config.max_lateral_offset}")

    # Reference curve waypoints are optional, but must be usable when given
    n_x = len(config.reference_waypoints_x)
    n_y = len(config.reference_waypoints_y)
    if n_x != n_y:
        errors.append(f"reference_waypoints_x ({n_x}) and reference_waypoints_y ({n_y}) must have the same length")
    elif n_x == 1:
        errors.append("reference waypoints must have at least 2 points, got 1")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigValidationError(error_msg)


def load_config(config_path: str) -> PathDataConfig:
    """Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Loaded configuration
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, 'r') as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML file {config_path}: {e}") from e

    if config_dict is None:
        raise ValueError(f"YAML file {config_path} is empty or contains no valid content")

    try:
        config = PathDataConfig(**config_dict)
    except TypeError as e:
        raise ValueError(f"Invalid configuration structure in {config_path}: {e}") from e

    config.config_path = str(config_path)

    try:
        validate_config(config)
    except ConfigValidationError:
        logger.error(f"Configuration validation failed for {config_path}")
        raise

    logger.info(f"Configuration loaded and validated from {config_path}")

    return config


def save_config(config: PathDataConfig, config_path: str):
    """Save configuration to YAML file.

    Args:
        config: Configuration to save
        config_path: Path to save YAML file
    """
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    config_dict = {
        'ref_s_epsilon': config.ref_s_epsilon,
        'projection_coarse_samples': config.projection_coarse_samples,
        'projection_tolerance': config.projection_tolerance,
        'domain_tolerance': config.domain_tolerance,
        'max_lateral_offset': float(config.max_lateral_offset),
        'reference_waypoints_x': list(config.reference_waypoints_x),
        'reference_waypoints_y': list(config.reference_waypoints_y),
    }

    with open(config_path, 'w') as f:
        yaml.safe_dump(config_dict, f, default_flow_style=False, indent=2)

    logger.info(f"Configuration saved to {config_path}")
