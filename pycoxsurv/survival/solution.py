"""
Solution wrapper for risk-set results.

Wraps a Result[RiskSetParams] and exposes named columns of the count
table, per-stratum views and an R-style summary().
"""

from __future__ import annotations

import numpy as np

from pycoxsurv.core.exceptions import ValidationError
from pycoxsurv.core.result import Result
from pycoxsurv.survival._common import CountField, RiskSetParams


class RiskSetSolution:
    """Risk-set sufficient statistics at each (stratum, report time).

    Rows are stratum-major, ascending in time within stratum.
    """

    __slots__ = ('_result',)

    def __init__(self, _result: Result[RiskSetParams]) -> None:
        self._result = _result

    def _col(self, field: CountField):
        return self._result.params.counts[:, field]

    # -- Raw tables --

    @property
    def counts(self):
        """(rows, 12) count table; columns are laid out as in CountField."""
        return self._result.params.counts

    @property
    def xbar(self):
        """(rows, p) mean covariate vector among those at risk."""
        return self._result.params.xbar

    @property
    def xsum(self):
        """(rows, p) sum of weight * risk * x over events at each time."""
        return self._result.params.xsum

    @property
    def time(self):
        return self._result.params.time

    @property
    def stratum(self):
        return self._result.params.stratum

    @property
    def report_times(self):
        return self._result.params.report_times

    @property
    def strata_labels(self):
        return self._result.params.strata_labels

    @property
    def n_strata(self) -> int:
        return self._result.params.n_strata

    @property
    def xbar_denominator(self) -> str:
        return self._result.params.xbar_denominator

    # -- Named count columns --

    @property
    def n_risk(self):
        """Number at risk."""
        return self._col(CountField.N_RISK)

    @property
    def weighted_risk(self):
        return self._col(CountField.WT_RISK)

    @property
    def risk_sum(self):
        """Sum of weight * risk over the risk set."""
        return self._col(CountField.RISK_RISK)

    @property
    def n_event(self):
        return self._col(CountField.N_EVENT)

    @property
    def weighted_event(self):
        return self._col(CountField.WT_EVENT)

    @property
    def event_risk_sum(self):
        return self._col(CountField.RISK_EVENT)

    @property
    def n_censor(self):
        """Mid-chain rows crossed since the previous (later) report time."""
        return self._col(CountField.N_CENSOR)

    @property
    def weighted_censor(self):
        return self._col(CountField.WT_CENSOR)

    @property
    def n_final(self):
        """Events at each time that end their subject's chain."""
        return self._col(CountField.N_FINAL)

    @property
    def weighted_final(self):
        return self._col(CountField.WT_FINAL)

    @property
    def efron_sum(self):
        return self._col(CountField.EFRON_SUM)

    @property
    def efron_sum2(self):
        return self._col(CountField.EFRON_SUM2)

    # -- Envelope --

    @property
    def info(self):
        return self._result.info

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def timing(self):
        return self._result.timing

    # -- Per-stratum access --

    def stratum_slice(self, label) -> slice:
        """Row slice holding one stratum's report times."""
        matches = np.flatnonzero(self.strata_labels == label)
        if len(matches) == 0:
            raise ValidationError(
                f"unknown stratum {label!r}; "
                f"available: {self.strata_labels.tolist()}"
            )
        m = len(self.report_times)
        s = int(matches[0])
        return slice(s * m, (s + 1) * m)

    def for_stratum(self, label) -> dict:
        """Named columns restricted to one stratum."""
        sl = self.stratum_slice(label)
        out = {"time": self.time[sl]}
        for field in CountField:
            out[field.name.lower()] = self.counts[sl, field]
        out["xbar"] = self.xbar[sl]
        out["xsum"] = self.xsum[sl]
        return out

    def summary(self) -> str:
        """R-style summary of the risk-set table."""
        lines = []
        lines.append("Call: coxsurv_counts()")
        lines.append("")
        lines.append(
            f"  strata={self.n_strata}, report times={len(self.report_times)}, "
            f"covariates={self.xbar.shape[1]}"
        )

        for label in self.strata_labels:
            sl = self.stratum_slice(label)
            lines.append("")
            if self.n_strata > 1:
                lines.append(f"  stratum={label}")
            lines.append(
                f"  {'time':>8s}  {'n.risk':>8s}  {'n.event':>8s}  "
                f"{'n.censor':>8s}  {'risk.sum':>10s}  {'efron':>10s}"
            )
            rows = range(sl.start, sl.stop)
            show = list(rows)[:20]
            for r in show:
                lines.append(
                    f"  {self.time[r]:8.4g}  {self.n_risk[r]:8.0f}  "
                    f"{self.n_event[r]:8.0f}  {self.n_censor[r]:8.0f}  "
                    f"{self.risk_sum[r]:10.4f}  {self.efron_sum[r]:10.4f}"
                )
            if len(rows) > 20:
                lines.append(f"  ... ({len(rows) - 20} more rows)")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"RiskSetSolution(strata={self.n_strata}, "
            f"times={len(self.report_times)}, "
            f"p={self.xbar.shape[1]})"
        )
