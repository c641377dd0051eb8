"""
Error types raised by dedupifyr.

Request construction and option building raise immediately and abort only
the current request. Per-file load failures are collected rather than
raised. The session folds anything else into a Faulted outcome.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Classification used when reporting a failed operation."""
    INVALID_REQUEST_SHAPE = 'invalid_request_shape'
    PATH_NOT_FOUND = 'path_not_found'
    BIAS_OUT_OF_BOUNDS = 'bias_out_of_bounds'
    INCOMPLETE_OPTIONS = 'incomplete_options'
    LOAD_FAILURE = 'load_failure'
    CANCELLED = 'cancelled'
    FAULTED = 'faulted'


class DedupifyrError(Exception):
    """Base class for all dedupifyr errors."""

    kind = ErrorKind.FAULTED


class InvalidRequestShapeError(DedupifyrError):
    """The input string does not describe a Directory, Single or Pair request."""

    kind = ErrorKind.INVALID_REQUEST_SHAPE


class PathNotFoundError(InvalidRequestShapeError):
    """A path named in a request does not exist."""

    kind = ErrorKind.PATH_NOT_FOUND

    def __init__(self, path: str):
        super().__init__(f"Path not found: {path}")
        self.path = path


class BiasOutOfBoundsError(DedupifyrError):
    """The bias factor lies outside 0 to 100 percent."""

    kind = ErrorKind.BIAS_OUT_OF_BOUNDS

    def __init__(self, value: float):
        super().__init__(f"Bias factor must be between 0 and 100, got {value:g}")
        self.value = value


class IncompleteOptionsError(DedupifyrError):
    """An option value was read before it was configured."""

    kind = ErrorKind.INCOMPLETE_OPTIONS


class LoadFailureError(DedupifyrError):
    """A single image could not be loaded."""

    kind = ErrorKind.LOAD_FAILURE

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to load {path}: {reason}")
        self.path = path
        self.reason = reason


class ComparisonCancelled(DedupifyrError):
    """In-flight load or compare work was cancelled."""

    kind = ErrorKind.CANCELLED

    def __init__(self, message: str = "Comparison cancelled"):
        super().__init__(message)


def error_kind(error: BaseException) -> ErrorKind:
    """Return the ErrorKind for any exception (FAULTED for foreign ones)."""
    if isinstance(error, DedupifyrError):
        return error.kind
    return ErrorKind.FAULTED


__all__ = [
    'ErrorKind',
    'DedupifyrError',
    'InvalidRequestShapeError',
    'PathNotFoundError',
    'BiasOutOfBoundsError',
    'IncompleteOptionsError',
    'LoadFailureError',
    'ComparisonCancelled',
    'error_kind',
]
