"""
Exception hierarchy for pycoxsurv.

All exceptions inherit from PyCoxSurvError to allow catching any
library-specific error.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyCoxSurvError(Exception):
    """Base exception for all pycoxsurv errors."""
    pass


class ValidationError(PyCoxSurvError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks: unsorted
    orderings, negative weights, malformed chain-position flags, etc.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when the parallel subject arrays have inconsistent lengths.
    """
    pass


class CancelledError(PyCoxSurvError):
    """
    A risk-set sweep was cancelled by its host.

    Raised from CancellationToken.check(). No partial output accompanies
    this exception; whatever was accumulated before the check is discarded.

    Attributes:
        n_strata_done: Strata fully processed before cancellation, if known
    """

    def __init__(self, message: str, n_strata_done: int | None = None):
        super().__init__(message)
        self.n_strata_done = n_strata_done
