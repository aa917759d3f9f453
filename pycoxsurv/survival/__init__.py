"""
Risk-set statistics for Cox model survival curves.

Public API:
    coxsurv_counts(...) -> RiskSetSolution
    chain_positions(id, start, stop) -> position flags
    sort_orders(start, stop, strata) -> (sort1, sort2)
"""

from pycoxsurv.survival.solvers import coxsurv_counts
from pycoxsurv.survival.solution import RiskSetSolution
from pycoxsurv.survival.design import RiskSetDesign
from pycoxsurv.survival._common import ChainPosition, CountField, RiskSetParams
from pycoxsurv.survival._prepare import chain_positions, sort_orders
from pycoxsurv.survival._riskset import accumulate_risk_sets, efron_sums

__all__ = [
    "coxsurv_counts",
    "RiskSetSolution",
    "RiskSetDesign",
    "RiskSetParams",
    "ChainPosition",
    "CountField",
    "chain_positions",
    "sort_orders",
    "accumulate_risk_sets",
    "efron_sums",
]
