"""Exceptions raised by the path data core."""


class PathDataError(Exception):
    """Base class for path data errors."""
    pass


class UnboundReferenceCurveError(PathDataError):
    """Raised when an operation needs a reference curve but none is bound."""
    pass


class ProjectionError(PathDataError, ValueError):
    """Raised when the reference curve cannot map an offset or a point.

    Attributes:
        index: Position of the offending sample in its sequence, if known
    """

    def __init__(self, message: str, index=None):
        super().__init__(message)
        self.index = index


class InconsistentStateError(PathDataError, AssertionError):
    """Raised when the stored Cartesian and Frenet paths disagree in size."""
    pass
