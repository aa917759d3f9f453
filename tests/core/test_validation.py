"""
Tests for input validators.
"""

import numpy as np
import pytest

from pycoxsurv.core.exceptions import DimensionError, ValidationError
from pycoxsurv.core.validation import (
    check_1d,
    check_2d,
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


class TestCheckArray:

    def test_int_converted_to_float(self):
        out = check_array([1, 2, 3], "x")
        assert out.dtype == np.float64

    def test_bool_converted_to_float(self):
        out = check_array([True, False], "x")
        assert out.dtype == np.float64

    def test_float32_kept(self):
        out = check_array(np.zeros(3, dtype=np.float32), "x")
        assert out.dtype == np.float32

    def test_string_rejected(self):
        with pytest.raises(ValidationError, match="x: non-numeric"):
            check_array(["a", "b"], "x")

    def test_ragged_rejected(self):
        with pytest.raises(ValidationError, match="x:"):
            check_array([[1, 2], [3]], "x")


class TestCheckIndexArray:

    def test_integral_floats(self):
        out = check_index_array([0.0, 2.0, 1.0], "order")
        assert out.dtype == np.intp

    def test_fractional_rejected(self):
        with pytest.raises(ValidationError, match="integer"):
            check_index_array([0.5, 1.0], "order")


class TestShapeChecks:

    def test_finite(self):
        with pytest.raises(ValidationError, match=r"1 NaN, 1 Inf"):
            check_finite(np.array([1.0, np.nan, np.inf]), "x")

    def test_1d(self):
        with pytest.raises(DimensionError, match="expected 1D"):
            check_1d(np.zeros((2, 2)), "x")

    def test_2d(self):
        with pytest.raises(DimensionError, match="expected 2D"):
            check_2d(np.zeros(3), "X")

    def test_consistent_length(self):
        with pytest.raises(DimensionError, match="a=3, b=2"):
            check_consistent_length(np.zeros(3), np.zeros(2), names=("a", "b"))

    def test_consistent_length_name_count(self):
        with pytest.raises(ValueError):
            check_consistent_length(np.zeros(3), names=("a", "b"))

    def test_min_samples(self):
        with pytest.raises(ValidationError, match="at least 1"):
            check_min_samples(np.zeros(0), 1, "x")


class TestValueChecks:

    def test_nonnegative(self):
        with pytest.raises(ValidationError, match="first at index 1"):
            check_nonnegative(np.array([0.0, -1.0, 2.0]), "weight")

    def test_nonnegative_allows_zero(self):
        check_nonnegative(np.zeros(3), "weight")

    def test_values_in(self):
        with pytest.raises(ValidationError, match=r"\[2\.0\]"):
            check_values_in(np.array([0.0, 1.0, 2.0]), (0.0, 1.0), "status")

    def test_strictly_increasing(self):
        with pytest.raises(ValidationError, match=r"t\[1\]=2\.0"):
            check_strictly_increasing(np.array([1.0, 2.0, 2.0]), "t")

    def test_single_value_is_increasing(self):
        check_strictly_increasing(np.array([1.0]), "t")


class TestCheckPermutation:

    def test_valid(self):
        check_permutation(np.array([2, 0, 1]), 3, "sort1")

    def test_out_of_range(self):
        with pytest.raises(ValidationError, match=r"\[0, 2\]"):
            check_permutation(np.array([0, 1, 3]), 3, "sort1")

    def test_repeated(self):
        with pytest.raises(ValidationError, match="repeated"):
            check_permutation(np.array([0, 1, 1]), 3, "sort1")

    def test_wrong_length(self):
        with pytest.raises(DimensionError, match="length 3"):
            check_permutation(np.array([0, 1]), 3, "sort1")
