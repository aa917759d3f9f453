"""
Public API for risk-set accumulation.

    coxsurv_counts(report_times, stop, status, X, risk) -> RiskSetSolution

Validates inputs, creates a RiskSetDesign, runs the sweep and wraps the
Result in a Solution.
"""

from __future__ import annotations

import warnings
from typing import Literal

import numpy as np

from pycoxsurv.core.cancellation import CancellationToken
from pycoxsurv.core.compute.timing import Timer
from pycoxsurv.core.exceptions import ValidationError
from pycoxsurv.core.result import Result
from pycoxsurv.survival._common import CountField
from pycoxsurv.survival._riskset import accumulate_risk_sets
from pycoxsurv.survival.design import RiskSetDesign
from pycoxsurv.survival.solution import RiskSetSolution


def coxsurv_counts(
    report_times,
    stop,
    status,
    X=None,
    risk=None,
    *,
    start=None,
    weight=None,
    strata=None,
    position=None,
    id=None,
    sort1=None,
    sort2=None,
    xbar_denominator: Literal["count", "risk"] = "count",
    cancel_token: CancellationToken | None = None,
) -> RiskSetSolution:
    """Risk-set counts and sums for Cox model survival curves.

    Matches the totals R's survival::survfit.coxph() tabulates before
    building curves: for each stratum and report time, the number at risk,
    events, censorings, Efron-corrected risk sums, and covariate means.

    Parameters
    ----------
    report_times : array-like
        Strictly ascending times at which to report, shared by all strata.
    stop : array-like
        End of each (start, stop] interval.
    status : array-like
        Event indicator at stop (1=event, 0=censored).
    X : array-like or None
        Covariate matrix (n, p). None for no covariates.
    risk : array-like or None
        Risk scores, e.g. exp(X @ beta). Defaults to 1.
    start : array-like or None
        Start of each interval. None for right-censored data.
    weight : array-like or None
        Non-negative case weights. Defaults to 1.
    strata : array-like or None
        Stratum labels.
    position : array-like or None
        Chain-position flags (0 interior, 1 start, 2 end, 3 both).
    id : array-like or None
        Subject ids, used to derive position when it is not given.
    sort1, sort2 : array-like or None
        Precomputed stratum-grouped orderings by start and by stop.
    xbar_denominator : str
        "count" (default) averages the at-risk covariate sum over the
        number at risk; "risk" over the at-risk sum of weight * risk.
    cancel_token : CancellationToken or None
        Lets a host abort a long sweep; raises CancelledError.

    Returns
    -------
    RiskSetSolution
    """
    if xbar_denominator not in ("count", "risk"):
        raise ValidationError(
            f"xbar_denominator must be 'count' or 'risk', "
            f"got '{xbar_denominator}'"
        )

    timer = Timer()
    timer.start()

    with timer.section('validation'):
        design = RiskSetDesign.for_riskset(
            report_times, stop, status, X, risk,
            start=start,
            weight=weight,
            strata=strata,
            position=position,
            id=id,
            sort1=sort1,
            sort2=sort2,
        )

    with timer.section('sweep'):
        params = accumulate_risk_sets(
            design.report_times,
            design.start,
            design.stop,
            design.status,
            design.weight,
            design.risk,
            design.strata,
            design.position,
            design.X,
            design.sort1,
            design.sort2,
            strata_labels=design.strata_labels,
            xbar_denominator=xbar_denominator,
            cancel_token=cancel_token,
        )

    timer.stop()

    warnings_list = []
    if not (np.all(np.isfinite(params.counts))
            and np.all(np.isfinite(params.xbar))
            and np.all(np.isfinite(params.xsum))):
        warnings_list.append(
            "non-finite values in output; check risk scores and weights"
        )

    m = len(params.report_times)
    n_risk = params.counts[:, CountField.N_RISK].reshape(params.n_strata, m)
    empty = params.strata_labels[np.all(n_risk == 0, axis=1)]
    if len(empty) > 0:
        warnings_list.append(
            f"strata with nobody at risk at any report time: {empty.tolist()}"
        )

    for msg in warnings_list:
        warnings.warn(msg, RuntimeWarning, stacklevel=2)

    result = Result(
        params=params,
        info={
            "method": "risk-set sweep",
            "ties": "efron",
            "xbar_denominator": xbar_denominator,
            "n_strata": params.n_strata,
            "n_observations": design.n,
            "n_events": design.n_events,
        },
        timing=timer.result(),
        backend_name="cpu_riskset",
        warnings=tuple(warnings_list),
    )

    return RiskSetSolution(_result=result)
