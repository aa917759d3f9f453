"""
Shared types for risk-set accumulation.

ChainPosition and CountField name the small closed sets the sweep branches
on and writes into; RiskSetParams is the frozen payload carried inside a
Result[P] envelope.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from numpy.typing import NDArray


class ChainPosition(IntEnum):
    """Where an interval row sits in one subject's chain of intervals.

    A subject observed over (1,2] (2,3] (3,4] (5,8] has two chains; the
    rows are START, INTERIOR, END, BOTH.
    """

    INTERIOR = 0
    START = 1
    END = 2
    BOTH = 3

    @property
    def is_start(self) -> bool:
        return self in (ChainPosition.START, ChainPosition.BOTH)

    @property
    def is_final(self) -> bool:
        """Last interval of its chain (the subject's real exit)."""
        return self in (ChainPosition.END, ChainPosition.BOTH)


class CountField(IntEnum):
    """Column layout of the 12-wide count table."""

    N_RISK = 0          # at risk, unweighted
    WT_RISK = 1         # at risk, sum of weights
    RISK_RISK = 2       # at risk, sum of weight * risk
    N_EVENT = 3         # events at t, unweighted
    WT_EVENT = 4        # events at t, sum of weights
    RISK_EVENT = 5      # events at t, sum of weight * risk
    N_CENSOR = 6        # mid-chain rows crossed, unweighted
    WT_CENSOR = 7       # mid-chain rows crossed, sum of weights
    N_FINAL = 8         # events at t on a final interval, unweighted
    WT_FINAL = 9        # events at t on a final interval, sum of weights
    EFRON_SUM = 10      # Efron-averaged sum of weight * risk
    EFRON_SUM2 = 11     # Efron-averaged square of the above


N_COUNT_FIELDS = len(CountField)


@dataclass(frozen=True)
class RiskSetParams:
    """Risk-set sufficient statistics at each (stratum, report time).

    Rows are stratum-major, ascending in time within a stratum:
    row = stratum_index * len(report_times) + time_index.
    """

    n_strata: int
    counts: NDArray              # (rows, 12) — see CountField
    xbar: NDArray                # (rows, p) — mean covariate among the at-risk
    xsum: NDArray                # (rows, p) — sum of w*r*x over events at t
    time: NDArray                # (rows,) — report time of each row
    stratum: NDArray             # (rows,) — stratum label of each row
    report_times: NDArray        # (m,) — the ascending report grid
    strata_labels: NDArray       # (n_strata,) — labels in output order
    xbar_denominator: str        # "count" or "risk"
