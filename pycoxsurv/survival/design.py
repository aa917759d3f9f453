"""
RiskSetDesign: immutable container for counting-process survival data.

Wraps (start, stop] intervals, event status, weights, risk scores,
covariates, strata, chain positions and the two sort orders the sweep
walks. Validates inputs at construction time -- the accumulator itself
trusts clean data.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from pycoxsurv.core.exceptions import DimensionError, ValidationError
from pycoxsurv.core.validation import (
    check_1d,
    check_array,
    check_consistent_length,
    check_finite,
    check_index_array,
    check_min_samples,
    check_nonnegative,
    check_permutation,
    check_strictly_increasing,
    check_values_in,
)
from pycoxsurv.survival._common import ChainPosition
from pycoxsurv.survival._prepare import chain_positions, sort_orders


@dataclass(frozen=True)
class RiskSetDesign:
    """Immutable, validated input to the risk-set sweep.

    Parameters
    ----------
    report_times : NDArray
        (m,) strictly ascending report grid.
    start, stop : NDArray
        (n,) interval endpoints, start < stop.
    status : NDArray
        (n,) event indicator, 0/1.
    weight : NDArray
        (n,) non-negative case weights.
    risk : NDArray
        (n,) risk scores.
    X : NDArray
        (n, p) covariates; p may be 0.
    strata : NDArray
        (n,) integer stratum codes, indexes into strata_labels.
    strata_labels : NDArray
        Original stratum labels, one per code.
    position : NDArray
        (n,) ChainPosition codes.
    sort1, sort2 : NDArray
        (n,) entry- and exit-time orderings, grouped by stratum.
    """

    report_times: NDArray
    start: NDArray
    stop: NDArray
    status: NDArray
    weight: NDArray
    risk: NDArray
    X: NDArray
    strata: NDArray
    strata_labels: NDArray
    position: NDArray
    sort1: NDArray
    sort2: NDArray

    @classmethod
    def for_riskset(
        cls,
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
    ) -> RiskSetDesign:
        """Create and validate risk-set input, filling in defaults.

        start defaults to -inf (plain right-censored data), weight and risk
        to ones, strata to a single stratum. position is derived from id
        when given, otherwise every row is its own complete chain. sort1
        and sort2 are computed when not supplied.

        Raises
        ------
        ValidationError
            If inputs are invalid.
        DimensionError
            If array shapes are inconsistent.
        """
        report_times = check_array(report_times, "report_times").astype(np.float64)
        check_1d(report_times, "report_times")
        check_min_samples(report_times, 1, "report_times")
        check_finite(report_times, "report_times")
        check_strictly_increasing(report_times, "report_times")

        stop = check_array(stop, "stop").astype(np.float64)
        check_1d(stop, "stop")
        check_min_samples(stop, 1, "stop")
        check_finite(stop, "stop")
        n = len(stop)

        status = check_array(status, "status").astype(np.float64)
        check_1d(status, "status")
        check_values_in(status, (0.0, 1.0), "status")

        if start is None:
            start = np.full(n, -np.inf)
        else:
            start = check_array(start, "start").astype(np.float64)
            check_1d(start, "start")
            if np.any(np.isnan(start)):
                raise ValidationError("start: contains NaN values")

        if weight is None:
            weight = np.ones(n, dtype=np.float64)
        else:
            weight = check_array(weight, "weight").astype(np.float64)
            check_1d(weight, "weight")
            check_nonnegative(weight, "weight")

        if risk is None:
            risk = np.ones(n, dtype=np.float64)
        else:
            risk = check_array(risk, "risk").astype(np.float64)
            check_1d(risk, "risk")

        if X is None:
            X = np.zeros((n, 0), dtype=np.float64)
        else:
            X = check_array(X, "X").astype(np.float64)
            if X.ndim == 1:
                X = X.reshape(-1, 1)
            if X.ndim != 2:
                raise DimensionError(
                    f"X: expected 1D or 2D array, got {X.ndim}D with shape {X.shape}"
                )

        check_consistent_length(
            stop, status, start, weight, risk, X,
            names=("stop", "status", "start", "weight", "risk", "X"),
        )

        bad = np.flatnonzero(start >= stop)
        if len(bad) > 0:
            i = int(bad[0])
            raise ValidationError(
                f"start must be < stop for every row, but row {i} has "
                f"start={start[i]}, stop={stop[i]}"
            )

        if strata is None:
            codes = np.zeros(n, dtype=np.intp)
            labels = np.zeros(1, dtype=np.intp)
        else:
            strata = np.asarray(strata).ravel()
            if len(strata) != n:
                raise DimensionError(
                    f"strata must have {n} elements to match stop, got {len(strata)}"
                )
            labels, codes = np.unique(strata, return_inverse=True)
            codes = codes.astype(np.intp).ravel()

        if position is not None and id is not None:
            raise ValidationError("pass either position or id, not both")
        if position is not None:
            position = check_index_array(position, "position")
            check_1d(position, "position")
            if len(position) != n:
                raise DimensionError(
                    f"position must have {n} elements to match stop, got {len(position)}"
                )
            check_values_in(position, tuple(int(c) for c in ChainPosition), "position")
        elif id is not None:
            id = np.asarray(id).ravel()
            if len(id) != n:
                raise DimensionError(
                    f"id must have {n} elements to match stop, got {len(id)}"
                )
            position = chain_positions(id, start, stop)
        else:
            position = np.full(n, int(ChainPosition.BOTH), dtype=np.intp)

        if (sort1 is None) != (sort2 is None):
            raise ValidationError("sort1 and sort2 must be given together")
        if sort1 is None:
            sort1, sort2 = sort_orders(start, stop, codes)
        else:
            sort1 = check_index_array(sort1, "sort1")
            sort2 = check_index_array(sort2, "sort2")
            check_permutation(sort1, n, "sort1")
            check_permutation(sort2, n, "sort2")
            _check_ordering(sort1, start, codes, "sort1", "start")
            _check_ordering(sort2, stop, codes, "sort2", "stop")
            if not np.array_equal(_run_codes(sort1, codes), _run_codes(sort2, codes)):
                raise ValidationError(
                    "sort1 and sort2 must list the strata in the same order"
                )

        return cls(
            report_times=report_times,
            start=start,
            stop=stop,
            status=status,
            weight=weight,
            risk=risk,
            X=X,
            strata=codes,
            strata_labels=labels,
            position=position,
            sort1=sort1,
            sort2=sort2,
        )

    @property
    def n(self) -> int:
        """Number of interval rows."""
        return len(self.stop)

    @property
    def p(self) -> int:
        """Number of covariates."""
        return self.X.shape[1]

    @property
    def n_times(self) -> int:
        return len(self.report_times)

    @property
    def n_strata(self) -> int:
        return len(_run_codes(self.sort2, self.strata))

    @property
    def n_events(self) -> int:
        """Number of rows ending in an event."""
        return int(np.sum(self.status))


def _run_codes(order: NDArray, codes: NDArray) -> NDArray:
    """Stratum code of each contiguous run along an ordering."""
    c = codes[order]
    keep = np.ones(len(c), dtype=bool)
    keep[1:] = c[1:] != c[:-1]
    return c[keep]


def _check_ordering(
    order: NDArray,
    key: NDArray,
    codes: NDArray,
    name: str,
    key_name: str,
) -> None:
    """Verify order is stratum-contiguous and ascending in key within stratum."""
    runs = _run_codes(order, codes)
    if len(np.unique(runs)) != len(runs):
        raise ValidationError(
            f"{name}: strata are not contiguous; every stratum must occupy "
            f"one block of the ordering"
        )
    c = codes[order]
    k = key[order]
    same = c[1:] == c[:-1]
    bad = np.flatnonzero(same & (k[1:] < k[:-1]))
    if len(bad) > 0:
        i = int(bad[0])
        raise ValidationError(
            f"{name}: not ascending by {key_name} within stratum at position "
            f"{i + 1} ({key_name}={k[i + 1]} after {k[i]})"
        )
