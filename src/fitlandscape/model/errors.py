"""
Error Taxonomy
==============
Typed failures raised by the numeric core. All of them are detected at the
boundary of an operation; none is recoverable by retrying with the same
arguments. The core never returns NaN or Inf in place of an error.
"""


class FitLandscapeError(ValueError):
    """Base class for all errors raised by the fitlandscape core."""


class InvalidParameterError(FitLandscapeError):
    """Bad dataset generation arguments or a malformed dataset."""


class InvalidRangeError(FitLandscapeError):
    """Malformed grid bounds or coefficient sample sequences."""


class EmptyDatasetError(FitLandscapeError):
    """A metric or projection was attempted on a zero-length dataset."""


class NonFiniteResultError(FitLandscapeError):
    """A finite input overflowed to an infinite or NaN error value."""
