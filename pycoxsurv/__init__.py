"""
pycoxsurv: risk-set statistics for Cox model survival curves.

Computes the counts and sums survival curves for a fitted Cox model are
built from -- number at risk, events, censorings, Efron tie-corrected
risk sums and covariate means -- at a caller-chosen grid of report times,
by stratum.

Submodules:
    survival: The risk-set sweep and its public API
    core: Result envelope, exceptions, validation, cancellation, timing
"""

__version__ = "0.1.0"

from pycoxsurv import survival
from pycoxsurv.survival import coxsurv_counts, RiskSetSolution
from pycoxsurv.core import CancellationToken

__all__ = [
    "__version__",
    "survival",
    "coxsurv_counts",
    "RiskSetSolution",
    "CancellationToken",
]
