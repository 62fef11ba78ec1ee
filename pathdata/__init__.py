"""Frenet/Cartesian path data for planning along a reference curve."""

from .config import PathDataConfig, load_config
from .core import (
    PathPoint,
    FrenetFramePoint,
    SLPoint,
    ReferencePoint,
    DiscretizedPath,
    FrenetFramePath,
    PathDataError,
    UnboundReferenceCurveError,
    ProjectionError,
    InconsistentStateError,
    derive_cartesian,
    derive_frenet,
    estimate_lateral_derivatives,
    PathData,
)
from .planning import ReferenceLine

__version__ = "0.1.0"

__all__ = [
    'PathDataConfig',
    'load_config',
    'PathPoint',
    'FrenetFramePoint',
    'SLPoint',
    'ReferencePoint',
    'DiscretizedPath',
    'FrenetFramePath',
    'PathDataError',
    'UnboundReferenceCurveError',
    'ProjectionError',
    'InconsistentStateError',
    'derive_cartesian',
    'derive_frenet',
    'estimate_lateral_derivatives',
    'PathData',
    'ReferenceLine',
]
