# helix/core/validation.py

"""
Validation utilities for the helix package.

This module provides the assertion primitives used to enforce filter
preconditions (check_argument, check_state) together with converters that
validate and normalize lag tables, coefficients and the arrays passed to the
filter operations.
"""

from typing import Any, Optional

import numpy as np

from helix.core.exceptions import (
    raise_dimension_error, raise_invalid_argument, raise_invalid_state
)
from helix.core.types import CoefficientSequence, FilterArray, LagSequence, Shape

# Ranks supported by the filter operations
SUPPORTED_RANKS = (1, 2, 3)


def check_argument(condition: bool,
                   constraint: str,
                   argument: Optional[str] = None,
                   index: Optional[int] = None) -> None:
    """Raise InvalidArgumentError if an argument precondition is false.

    Args:
        condition: The precondition that must hold
        constraint: Text of the invariant, used as the error message
        argument: Name of the argument being checked
        index: Lag index being checked, for per-lag invariants

    Raises:
        InvalidArgumentError: If condition is false
    """
    if not condition:
        raise_invalid_argument(
            f"Invalid argument: {constraint}",
            argument=argument,
            index=index,
            constraint=constraint
        )


def check_state(condition: bool,
                requirement: str,
                operation: Optional[str] = None) -> None:
    """Raise InvalidStateError if required internal state is absent.

    Args:
        condition: The state requirement that must hold
        requirement: Text of the requirement, e.g. "lag2 has been specified"
        operation: Name of the operation that needs the state

    Raises:
        InvalidStateError: If condition is false
    """
    if not condition:
        raise_invalid_state(
            f"Invalid state: {requirement}",
            operation=operation,
            requirement=requirement
        )


def validate_lag_sequence(lags: LagSequence, name: str = "lags") -> np.ndarray:
    """Validate a lag sequence and return it as a 1-D int64 array.

    Args:
        lags: Sequence of integer lags
        name: Name of the sequence for error messages

    Returns:
        np.ndarray: A new int64 array holding the lags

    Raises:
        InvalidArgumentError: If the lags are not a 1-D sequence of integers
    """
    check_argument(lags is not None, f"{name} is not None", argument=name)
    array = np.asarray(lags)
    check_argument(array.ndim == 1, f"{name} is one-dimensional", argument=name)

    if array.size and not np.issubdtype(array.dtype, np.integer):
        check_argument(
            np.issubdtype(array.dtype, np.number) and bool(np.all(np.isfinite(array))),
            f"{name} contains only integers",
            argument=name
        )
        check_argument(
            bool(np.all(array == np.round(array))),
            f"{name} contains only integers",
            argument=name
        )

    return np.array(array, dtype=np.int64)


def validate_coefficients(a: CoefficientSequence, name: str = "a") -> np.ndarray:
    """Validate filter coefficients and return them as a 1-D float64 array.

    Args:
        a: Sequence of filter coefficients
        name: Name of the sequence for error messages

    Returns:
        np.ndarray: A new float64 array holding the coefficients

    Raises:
        InvalidArgumentError: If the coefficients are not finite real numbers
    """
    check_argument(a is not None, f"{name} is not None", argument=name)
    array = np.asarray(a)
    check_argument(array.ndim == 1, f"{name} is one-dimensional", argument=name)
    check_argument(
        array.size == 0 or np.issubdtype(array.dtype, np.number)
        and not np.issubdtype(array.dtype, np.complexfloating),
        f"{name} contains real numbers",
        argument=name
    )
    array = np.array(array, dtype=np.float64)
    check_argument(bool(np.all(np.isfinite(array))), f"{name} is finite", argument=name)
    return array


def validate_filter_array(x: FilterArray, name: str = "x") -> np.ndarray:
    """Validate an array passed to a filter operation.

    Args:
        x: Array of rank 1, 2 or 3
        name: Name of the array for error messages

    Returns:
        np.ndarray: C-contiguous float64 array (x itself when already so)

    Raises:
        DimensionError: If the rank is not 1, 2 or 3
        InvalidArgumentError: If the array contains NaN or infinite values
    """
    if x is None:
        raise TypeError(f"{name} cannot be None")

    array = np.asarray(x)
    if array.ndim not in SUPPORTED_RANKS:
        raise_dimension_error(
            f"{name} must have rank 1, 2 or 3, got rank {array.ndim}",
            array_name=name,
            expected_shape="(n1,), (n2, n1) or (n3, n2, n1)",
            actual_shape=array.shape
        )

    array = np.ascontiguousarray(array, dtype=np.float64)
    check_argument(bool(np.all(np.isfinite(array))), f"{name} is finite", argument=name)
    return array


def validate_output_array(y: Any, shape: Shape, name: str = "y") -> np.ndarray:
    """Validate a caller-supplied output array.

    The output is written in place, so it must already be a writable,
    C-contiguous float64 array with the same shape as the input.

    Args:
        y: Output array
        shape: Required shape
        name: Name of the array for error messages

    Returns:
        np.ndarray: y, unchanged

    Raises:
        TypeError: If y is not a NumPy array
        DimensionError: If y cannot receive the output in place
    """
    if not isinstance(y, np.ndarray):
        raise TypeError(f"{name} must be a NumPy array, got {type(y).__name__}")

    if y.shape != tuple(shape):
        raise_dimension_error(
            f"{name} has shape {y.shape}, expected {tuple(shape)}",
            array_name=name,
            expected_shape=tuple(shape),
            actual_shape=y.shape
        )

    if y.dtype != np.float64 or not y.flags.c_contiguous or not y.flags.writeable:
        raise_dimension_error(
            f"{name} must be a writable C-contiguous float64 array",
            array_name=name,
            expected_shape=tuple(shape),
            actual_shape=y.shape,
            details=f"dtype={y.dtype}, c_contiguous={y.flags.c_contiguous}, "
                    f"writeable={y.flags.writeable}"
        )

    return y


def validate_positive_int(value: Any, name: str) -> int:
    """Validate that a value is a positive integer.

    Raises:
        InvalidArgumentError: If value is not an integer >= 1
    """
    check_argument(
        isinstance(value, (int, np.integer)) and not isinstance(value, bool) and value >= 1,
        f"{name} >= 1",
        argument=name
    )
    return int(value)


def validate_tolerance(value: Any, name: str = "tolerance") -> float:
    """Validate a non-negative finite tolerance.

    Raises:
        InvalidArgumentError: If value is negative or not finite
    """
    check_argument(
        isinstance(value, (int, float, np.floating, np.integer))
        and not isinstance(value, bool) and np.isfinite(value) and value >= 0,
        f"{name} >= 0",
        argument=name
    )
    return float(value)
