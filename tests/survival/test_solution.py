"""
Tests for coxsurv_counts() and RiskSetSolution.
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from pycoxsurv import CancellationToken, coxsurv_counts, RiskSetSolution
from pycoxsurv.core.exceptions import CancelledError, ValidationError
from pycoxsurv.survival import CountField


# Two strata, right-censored:
#   stratum "a": times 1, 2, 2, 4 with events at 2, 2, 4
#   stratum "b": times 1, 3 with an event at 1
TIME = np.array([1.0, 2.0, 2.0, 4.0, 1.0, 3.0])
EVENT = np.array([0, 1, 1, 1, 1, 0])
GROUP = np.array(["a", "a", "a", "a", "b", "b"])
X = np.array([[0.0], [1.0], [1.0], [2.0], [1.0], [3.0]])
GRID = [1.0, 2.0, 3.0, 4.0]


@pytest.fixture
def sol():
    return coxsurv_counts(GRID, TIME, EVENT, X, strata=GROUP)


class TestSolver:

    def test_returns_solution(self, sol):
        assert isinstance(sol, RiskSetSolution)
        assert sol.n_strata == 2
        assert sol.backend_name == "cpu_riskset"
        assert_array_equal(sol.strata_labels, ["a", "b"])

    def test_stratum_a(self, sol):
        a = sol.for_stratum("a")
        assert_array_equal(a["time"], GRID)
        assert_array_equal(a["n_risk"], [4, 3, 1, 1])
        assert_array_equal(a["n_event"], [0, 2, 0, 1])

    def test_stratum_b(self, sol):
        b = sol.for_stratum("b")
        assert_array_equal(b["n_risk"], [2, 1, 1, 0])
        assert_array_equal(b["n_event"], [1, 0, 0, 0])

    def test_efron_at_tie(self, sol):
        """Stratum a, t=2: R=3, W=2, d=2 -> (3 + 2.5)/2."""
        a = sol.for_stratum("a")
        assert a["efron_sum"][1] == pytest.approx(2.75)

    def test_named_columns_match_table(self, sol):
        assert_array_equal(sol.n_risk, sol.counts[:, CountField.N_RISK])
        assert_array_equal(sol.efron_sum2, sol.counts[:, CountField.EFRON_SUM2])
        assert_array_equal(sol.weighted_final, sol.counts[:, CountField.WT_FINAL])

    def test_xbar_and_xsum(self, sol):
        a = sol.for_stratum("a")
        # t=1: all four of stratum a at risk, x = 0, 1, 1, 2
        assert_allclose(a["xbar"][0], [1.0])
        # t=2: events at x=1 and x=1
        assert_allclose(a["xsum"][1], [2.0])

    def test_info_and_timing(self, sol):
        assert sol.info["n_strata"] == 2
        assert sol.info["xbar_denominator"] == "count"
        assert sol.info["n_events"] == 4
        assert "sweep" in sol.timing
        assert "validation" in sol.timing
        assert sol.timing["total_seconds"] >= 0

    def test_no_covariates(self):
        sol = coxsurv_counts(GRID, TIME, EVENT)
        assert sol.xbar.shape == (4, 0)
        assert sol.n_strata == 1

    def test_unknown_denominator(self):
        with pytest.raises(ValidationError, match="xbar_denominator"):
            coxsurv_counts(GRID, TIME, EVENT, xbar_denominator="events")

    def test_unknown_stratum(self, sol):
        with pytest.raises(ValidationError, match="unknown stratum"):
            sol.for_stratum("c")


class TestWarnings:

    def test_clean_run_has_no_warnings(self, sol):
        assert sol.warnings == ()

    def test_non_finite_output(self):
        with pytest.warns(RuntimeWarning, match="non-finite"):
            sol = coxsurv_counts(GRID, TIME, EVENT, risk=[1, np.inf, 1, 1, 1, 1])
        assert any("non-finite" in w for w in sol.warnings)

    def test_empty_stratum(self):
        with pytest.warns(RuntimeWarning, match="nobody at risk"):
            sol = coxsurv_counts([10.0], [1.0, 20.0], [1, 0], strata=[0, 1])
        assert any("[0]" in w for w in sol.warnings)


class TestCancellation:

    def test_cancelled_before_call(self):
        token = CancellationToken()
        token.cancel("user abort")
        with pytest.raises(CancelledError, match="user abort"):
            coxsurv_counts(GRID, TIME, EVENT, X, strata=GROUP, cancel_token=token)

    def test_uncancelled_token_runs(self):
        token = CancellationToken()
        sol = coxsurv_counts(GRID, TIME, EVENT, X, strata=GROUP, cancel_token=token)
        assert sol.n_strata == 2


class TestPresentation:

    def test_summary(self, sol):
        text = sol.summary()
        assert "coxsurv_counts()" in text
        assert "stratum=a" in text
        assert "stratum=b" in text
        assert "n.risk" in text

    def test_repr(self, sol):
        assert repr(sol) == "RiskSetSolution(strata=2, times=4, p=1)"
