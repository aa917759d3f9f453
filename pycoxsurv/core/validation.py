"""
Input validation utilities for pycoxsurv.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pycoxsurv.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a floating-point numpy array.

    Rejects inputs that result in object dtype (indicating mixed types or
    non-numeric data) and non-numeric dtypes. Booleans are accepted and
    converted, since event indicators are commonly passed as bool.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if result.dtype == np.bool_:
        return result.astype(np.float64)

    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


def check_index_array(array: ArrayLike, name: str) -> NDArray[np.intp]:
    """
    Validate and convert input to an integer index array.

    Float input is accepted only when every value is integral.

    Raises:
        ValidationError: If values are non-numeric or non-integral
    """
    result = check_array(array, name)
    if not np.all(np.isfinite(result)) or np.any(result != np.round(result)):
        raise ValidationError(f"{name}: must contain integer indices")
    return result.astype(np.intp)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_consistent_length(
    *arrays: NDArray[np.floating[Any]],
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [arr.shape[0] for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")


def check_min_samples(array: NDArray[np.floating[Any]], min_samples: int, name: str) -> None:
    """
    Verify array has at least the minimum number of samples.

    Raises:
        ValidationError: If array has fewer than min_samples
    """
    n = array.shape[0]
    if n < min_samples:
        raise ValidationError(
            f"{name}: requires at least {min_samples} samples, got {n}"
        )


def check_nonnegative(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array has no negative entries. NaN is not rejected here.

    Raises:
        ValidationError: If any entry is negative
    """
    negative = np.flatnonzero(array < 0)
    if len(negative) > 0:
        raise ValidationError(
            f"{name}: must be non-negative, found {len(negative)} negative "
            f"values (first at index {int(negative[0])})"
        )


def check_values_in(
    array: NDArray[Any],
    allowed: tuple[float, ...],
    name: str,
) -> None:
    """
    Verify every entry of array is one of the allowed values.

    Raises:
        ValidationError: If any entry falls outside the allowed set
    """
    bad = ~np.isin(array, allowed)
    if np.any(bad):
        unexpected = np.unique(array[bad])
        raise ValidationError(
            f"{name}: must contain only {list(allowed)}, "
            f"got unexpected values {unexpected.tolist()}"
        )


def check_strictly_increasing(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify a 1D array is strictly ascending.

    Raises:
        ValidationError: If any consecutive pair is not increasing
    """
    bad = np.flatnonzero(np.diff(array) <= 0)
    if len(bad) > 0:
        i = int(bad[0])
        raise ValidationError(
            f"{name}: must be strictly increasing, but {name}[{i}]={array[i]} "
            f">= {name}[{i + 1}]={array[i + 1]}"
        )


def check_permutation(order: NDArray[np.intp], n: int, name: str) -> None:
    """
    Verify order is a permutation of 0..n-1.

    Raises:
        DimensionError: If order has the wrong length
        ValidationError: If order repeats or omits an index
    """
    if order.shape != (n,):
        raise DimensionError(
            f"{name}: expected a permutation of length {n}, got shape {order.shape}"
        )
    if n == 0:
        return
    if order.min() < 0 or order.max() >= n:
        raise ValidationError(
            f"{name}: indices must lie in [0, {n - 1}], "
            f"got range [{int(order.min())}, {int(order.max())}]"
        )
    if len(np.unique(order)) != n:
        raise ValidationError(f"{name}: contains repeated indices, not a permutation")
