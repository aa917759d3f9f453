"""
Core infrastructure for pycoxsurv.

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    cancellation: Cooperative cancellation token
    compute: Timing utilities
"""

from pycoxsurv.core.result import Result
from pycoxsurv.core.cancellation import CancellationToken
from pycoxsurv.core.exceptions import (
    PyCoxSurvError,
    ValidationError,
    DimensionError,
    CancelledError,
)

__all__ = [
    # Result
    "Result",
    # Cancellation
    "CancellationToken",
    # Exceptions
    "PyCoxSurvError",
    "ValidationError",
    "DimensionError",
    "CancelledError",
]
