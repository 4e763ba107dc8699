"""
helix Test Suite

Tests for the helix package: minimum-phase filter construction and the four
filter operations, Wilson-Burg factorization, array utilities, validation and
configuration.
"""

import pytest

# Import commonly used test utilities
from tests.conftest import (
    # Sample filter tables
    LAGS_1D,
    COEFFS_1D,
    LAGS_2D,
    COEFFS_2D,
    LAGS_3D,
    COEFFS_3D,

    # Hypothesis strategies
    stable_filters_1d,
    arrays_of_rank,

    # Reference implementations
    reference_apply,
    dense_coefficients,

    # Assertion utilities
    assert_array_equal,
    assert_adjoint,
)

# Custom pytest markers for test categorization
pytest.mark.slow = pytest.mark.slow
pytest.mark.numba = pytest.mark.numba
pytest.mark.property = pytest.mark.property
