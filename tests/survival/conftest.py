"""
Shared fixtures for risk-set tests.

brute_force recomputes every output row directly from its definition
(who covers t, who died at t, ...) with no sweep, so the accumulator can
be checked against it on random counting-process data.
"""

import numpy as np
import pytest


def _brute_force(report_times, start, stop, status, weight, risk, X, strata,
                 position, xbar_denominator="count"):
    report_times = np.asarray(report_times, dtype=np.float64)
    labels = np.unique(strata)
    m = len(report_times)
    p = X.shape[1]
    rows = len(labels) * m

    counts = np.zeros((rows, 12))
    xbar = np.zeros((rows, p))
    xsum = np.zeros((rows, p))

    final = np.isin(position, [2, 3])
    wr = weight * risk
    # A row is tallied at the largest report time not after its stop
    upper = np.append(report_times[1:], np.inf)

    for s, lab in enumerate(labels):
        ins = strata == lab
        for j, t in enumerate(report_times):
            row = s * m + j
            at = ins & (start < t) & (stop >= t)
            ev = ins & (stop == t) & (status == 1)
            crossed = ins & (stop >= t) & (stop < upper[j])
            mid = crossed & ~final

            n_risk = int(at.sum())
            R = wr[at].sum()
            d = int(ev.sum())
            W = wr[ev].sum()
            if d <= 1:
                e1, e2 = R, R * R
            else:
                terms = R - np.arange(d) * W / d**2
                e1, e2 = terms.mean(), (terms**2).mean()

            counts[row] = [
                n_risk, weight[at].sum(), R,
                d, weight[ev].sum(), W,
                mid.sum(), weight[mid].sum(),
                (ev & final).sum(), weight[ev & final].sum(),
                e1, e2,
            ]
            if n_risk > 0:
                denom = n_risk if xbar_denominator == "count" else R
                xbar[row] = (wr[at, None] * X[at]).sum(axis=0) / denom
            xsum[row] = (wr[ev, None] * X[ev]).sum(axis=0)

    return counts, xbar, xsum


@pytest.fixture
def brute_force():
    """Direct, sweep-free computation of the risk-set table."""
    return _brute_force


@pytest.fixture
def counting_data(rng):
    """Random (start, stop] data: 3 strata, integer times with many ties."""
    n = 60
    start = rng.integers(0, 6, size=n).astype(np.float64)
    stop = start + rng.integers(1, 5, size=n)
    status = rng.integers(0, 2, size=n).astype(np.float64)
    weight = rng.uniform(0.5, 2.0, size=n)
    risk = np.exp(rng.standard_normal(n) * 0.5)
    X = rng.standard_normal((n, 2))
    strata = rng.integers(0, 3, size=n)
    position = rng.integers(0, 4, size=n)
    report_times = np.array([1.0, 2.0, 2.5, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0])
    return dict(
        report_times=report_times,
        start=start,
        stop=stop,
        status=status,
        weight=weight,
        risk=risk,
        X=X,
        strata=strata,
        position=position,
    )
