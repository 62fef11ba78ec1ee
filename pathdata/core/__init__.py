"""Core module for path data structures and Frenet/Cartesian conversion."""

from .data_structures import (
    PathPoint,
    FrenetFramePoint,
    SLPoint,
    ReferencePoint,
    DiscretizedPath,
    FrenetFramePath,
)
from .coordinate_converter import (
    CartesianFrenetConverter,
    normalize_angle,
)
from .exceptions import (
    PathDataError,
    UnboundReferenceCurveError,
    ProjectionError,
    InconsistentStateError,
)
from .path_transform import (
    ReferenceCurve,
    derive_cartesian,
    derive_frenet,
    estimate_lateral_derivatives,
)
from .path_data import PathData

__all__ = [
    'PathPoint',
    'FrenetFramePoint',
    'SLPoint',
    'ReferencePoint',
    'DiscretizedPath',
    'FrenetFramePath',
    'CartesianFrenetConverter',
    'normalize_angle',
    'PathDataError',
    'UnboundReferenceCurveError',
    'ProjectionError',
    'InconsistentStateError',
    'ReferenceCurve',
    'derive_cartesian',
    'derive_frenet',
    'estimate_lateral_derivatives',
    'PathData',
]
