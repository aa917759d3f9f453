"""
Risk-set accumulation for Cox model survival curves.

Computes, at every (stratum, report time), the counts and sums that
survival and cumulative-hazard curves for a fitted Cox model are built
from: the size and composition of the risk set, events and censorings,
and the Efron tie-corrected risk-set sums.

Algorithm (per stratum, report times latest to earliest):
    1. Growth: walk the exit-ordered rows backward while stop >= t.
       Rows whose interval (start, stop] covers t join the risk set.
       Rows with stop == t and status == 1 are this time's events.
    2. Shrink: walk the entry-ordered rows backward while start >= t.
       Rows still marked at risk leave the risk set.
    3. Efron: with d tied events of total risk weight W in a risk set of
       risk weight R, average R - k*W/d^2 and its square over k = 0..d-1.

Walking backward means the running sums grow by additions and shrink only
when a row's entry time is passed, which keeps them accurate for long
follow-up. When the risk set empties, the sums are reset to exactly zero
rather than subtracted down to rounding residue.

For (start, stop] data, number at risk != entries - exits: a subject
observed as (1,2] (2,5] (5,6] enters and exits once but changes risk
score three times. The at-risk fields track every change; the censoring
fields use the chain-position flag to tell interval joins from exits.

References:
    Therneau, T. M. and Grambsch, P. M. (2000). Modeling Survival Data:
        Extending the Cox Model. Springer. Ch. 10.
    Efron, B. (1977). The efficiency of Cox's likelihood function for
        censored data. JASA, 72(359), 557-565.
    R Core Team. survival::survfit.coxph
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pycoxsurv.core.cancellation import CancellationToken
from pycoxsurv.survival._common import (
    N_COUNT_FIELDS,
    ChainPosition,
    CountField as F,
    RiskSetParams,
)


def accumulate_risk_sets(
    report_times: NDArray,
    start: NDArray,
    stop: NDArray,
    status: NDArray,
    weight: NDArray,
    risk: NDArray,
    strata: NDArray,
    position: NDArray,
    X: NDArray,
    sort1: NDArray,
    sort2: NDArray,
    *,
    strata_labels: NDArray | None = None,
    xbar_denominator: str = "count",
    cancel_token: CancellationToken | None = None,
) -> RiskSetParams:
    """Sweep every stratum and tabulate risk-set statistics.

    Inputs are trusted: sort1/sort2 must be stratum-contiguous permutations
    with strata in the same order, ascending by start and by stop within
    each stratum. RiskSetDesign.for_riskset() enforces this.

    Parameters
    ----------
    report_times : NDArray
        (m,) strictly ascending report times, shared by all strata.
    start, stop : NDArray
        (n,) interval endpoints; row i is at risk on (start[i], stop[i]].
    status : NDArray
        (n,) 1 if the row ends in an event, 0 if censored.
    weight : NDArray
        (n,) non-negative case weights.
    risk : NDArray
        (n,) risk scores, typically exp(X @ beta).
    strata : NDArray
        (n,) integer stratum codes.
    position : NDArray
        (n,) ChainPosition codes.
    X : NDArray
        (n, p) covariates.
    sort1, sort2 : NDArray
        Row orders ascending by start and by stop, grouped by stratum.
    strata_labels : NDArray or None
        Labels reported for each stratum code (indexed by code). Defaults
        to the codes themselves.
    xbar_denominator : str
        "count" divides the at-risk covariate sum by the number at risk,
        "risk" by the at-risk sum of weight * risk.
    cancel_token : CancellationToken or None
        Polled before the sweep and before each stratum.

    Returns
    -------
    RiskSetParams
    """
    if cancel_token is not None:
        cancel_token.check(n_strata_done=0)

    m = len(report_times)
    p = X.shape[1]

    exit_blocks = _stratum_blocks(sort2, strata)
    entry_blocks = {code: (lo, hi) for code, lo, hi in _stratum_blocks(sort1, strata)}
    n_strata = len(exit_blocks)

    final_codes = [int(c) for c in ChainPosition if c.is_final]
    is_final = np.isin(position, final_codes)
    wrisk = weight * risk
    at_risk = np.zeros(len(stop), dtype=bool)

    n_rows = m * n_strata
    counts = np.zeros((n_rows, N_COUNT_FIELDS), dtype=np.float64)
    xbar = np.zeros((n_rows, p), dtype=np.float64)
    xsum = np.zeros((n_rows, p), dtype=np.float64)
    row_stratum = np.empty(n_rows, dtype=np.intp)

    for s_idx, (code, lo2, hi2) in enumerate(exit_blocks):
        if cancel_token is not None:
            cancel_token.check(n_strata_done=s_idx)

        lo1, hi1 = entry_blocks[code]
        exit_cur = hi2 - 1
        entry_cur = hi1 - 1

        # Running risk set: persists across report times within the stratum
        n_risk = 0
        wt_risk = 0.0
        risk_risk = 0.0
        x_risk = np.zeros(p, dtype=np.float64)

        for j in range(m - 1, -1, -1):
            t = report_times[j]
            n = np.zeros(N_COUNT_FIELDS, dtype=np.float64)
            x_event = np.zeros(p, dtype=np.float64)

            # Growth phase
            while exit_cur >= lo2:
                i = sort2[exit_cur]
                if stop[i] < t:
                    break
                if start[i] <= t:
                    at_risk[i] = True
                    n_risk += 1
                    wt_risk += weight[i]
                    risk_risk += wrisk[i]
                    x_risk += wrisk[i] * X[i]

                if not is_final[i]:
                    n[F.N_CENSOR] += 1
                    n[F.WT_CENSOR] += weight[i]

                if stop[i] == t and status[i] > 0:
                    n[F.N_EVENT] += 1
                    n[F.WT_EVENT] += weight[i]
                    n[F.RISK_EVENT] += wrisk[i]
                    x_event += wrisk[i] * X[i]
                    if is_final[i]:
                        n[F.N_FINAL] += 1
                        n[F.WT_FINAL] += weight[i]
                exit_cur -= 1

            # Shrink phase
            while entry_cur >= lo1:
                i = sort1[entry_cur]
                if start[i] < t:
                    break
                if at_risk[i]:
                    at_risk[i] = False
                    n_risk -= 1
                    if n_risk == 0:
                        wt_risk = 0.0
                        risk_risk = 0.0
                        x_risk[:] = 0.0
                    else:
                        wt_risk -= weight[i]
                        risk_risk -= wrisk[i]
                        x_risk -= wrisk[i] * X[i]
                entry_cur -= 1

            n[F.N_RISK] = n_risk
            n[F.WT_RISK] = wt_risk
            n[F.RISK_RISK] = risk_risk
            n[F.EFRON_SUM], n[F.EFRON_SUM2] = efron_sums(
                int(n[F.N_EVENT]), risk_risk, n[F.RISK_EVENT],
            )

            row = s_idx * m + j
            counts[row] = n
            if n_risk > 0:
                denom = n_risk if xbar_denominator == "count" else risk_risk
                xbar[row] = x_risk / denom
            xsum[row] = x_event
            row_stratum[row] = code

        # Rows of this stratum left unvisited by either cursor lie before
        # the earliest report time and contribute nothing.

    labels = np.asarray(strata_labels) if strata_labels is not None else None
    ordered_codes = np.array([code for code, _, _ in exit_blocks], dtype=np.intp)

    return RiskSetParams(
        n_strata=n_strata,
        counts=counts,
        xbar=xbar,
        xsum=xsum,
        time=np.tile(np.asarray(report_times, dtype=np.float64), n_strata),
        stratum=labels[row_stratum] if labels is not None else row_stratum,
        report_times=np.asarray(report_times, dtype=np.float64),
        strata_labels=labels[ordered_codes] if labels is not None else ordered_codes,
        xbar_denominator=xbar_denominator,
    )


def efron_sums(n_events: int, risk_sum: float, event_risk_sum: float) -> tuple[float, float]:
    """Efron-averaged risk-set sum and its square.

    With d tied events the risk set is thinned by an equal share of the
    events' own risk weight for each successive death:

        S1 = (1/d) * sum_{k=0}^{d-1} (R - k*m)
        S2 = (1/d) * sum_{k=0}^{d-1} (R - k*m)^2,     m = W / d^2

    For d <= 1 this is just (R, R^2).
    """
    if n_events <= 1:
        return risk_sum, risk_sum * risk_sum

    meanwt = event_risk_sum / (n_events * n_events)
    s1 = 0.0
    s2 = 0.0
    for k in range(n_events):
        r = risk_sum - k * meanwt
        s1 += r
        s2 += r * r
    return s1 / n_events, s2 / n_events


def _stratum_blocks(order: NDArray, strata: NDArray) -> list[tuple[int, int, int]]:
    """Contiguous (code, lo, hi) runs of strata along an ordering."""
    if len(order) == 0:
        return []
    codes = strata[order]
    breaks = np.flatnonzero(codes[1:] != codes[:-1]) + 1
    los = np.concatenate(([0], breaks))
    his = np.concatenate((breaks, [len(order)]))
    return [(int(codes[lo]), int(lo), int(hi)) for lo, hi in zip(los, his)]
