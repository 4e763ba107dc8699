'''
Pytest configuration and fixtures for the helix test suite.

This module provides sample filters of each dimensionality, hypothesis
strategies that draw stable minimum-phase filters and finite arrays, a
reference implementation of forward filtering built on scipy.signal, and
shared assertion helpers.
'''

from typing import Optional

import numpy as np
import pytest
from hypothesis import strategies as st
from hypothesis.extra import numpy as hnp
from scipy import signal

from helix.core.config import reset_config
from helix.filters.minimum_phase import MinimumPhaseFilter


# ---- Sample filter tables ----

# Stable when sum(|a[1:]|) < |a[0]|
LAGS_1D = {"lag1": [0, 1, 3]}
COEFFS_1D = [1.0, -0.5, 0.2]

# Includes a negative lag1, which is causal because its lag2 is positive
LAGS_2D = {"lag1": [0, 1, -1, 0, 1], "lag2": [0, 0, 1, 1, 1]}
COEFFS_2D = [1.0, -0.3, -0.1, -0.2, -0.1]

LAGS_3D = {"lag1": [0, 1, -1, 0, 0], "lag2": [0, 0, 1, -1, 0], "lag3": [0, 0, 0, 1, 1]}
COEFFS_3D = [2.0, -0.4, 0.3, -0.2, 0.5]


@pytest.fixture
def rng() -> np.random.Generator:
    """Provide a seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def filter_1d() -> MinimumPhaseFilter:
    """1-D filter with a gap in its lags."""
    return MinimumPhaseFilter(a=COEFFS_1D, **LAGS_1D)


@pytest.fixture
def filter_2d() -> MinimumPhaseFilter:
    """2-D filter whose lag table includes a negative lag1."""
    return MinimumPhaseFilter(a=COEFFS_2D, **LAGS_2D)


@pytest.fixture
def filter_3d() -> MinimumPhaseFilter:
    """3-D filter with a non-unit leading coefficient."""
    return MinimumPhaseFilter(a=COEFFS_3D, **LAGS_3D)


@pytest.fixture(params=[1, 2, 3], ids=["1d", "2d", "3d"])
def filter_and_array(request, rng):
    """A filter of each dimensionality with a random array of matching rank."""
    if request.param == 1:
        mpf = MinimumPhaseFilter(a=COEFFS_1D, **LAGS_1D)
        shape = (37,)
    elif request.param == 2:
        mpf = MinimumPhaseFilter(a=COEFFS_2D, **LAGS_2D)
        shape = (9, 11)
    else:
        mpf = MinimumPhaseFilter(a=COEFFS_3D, **LAGS_3D)
        shape = (5, 6, 7)
    return mpf, rng.standard_normal(shape)


@pytest.fixture
def clean_config():
    """Restore the default configuration after a test changes it."""
    reset_config()
    yield
    reset_config()


# ---- Hypothesis Strategies ----

finite_floats = st.floats(min_value=-10, max_value=10, allow_nan=False, allow_infinity=False)


@st.composite
def stable_filters_1d(draw, max_coefficients: int = 5, max_lag: int = 6) -> MinimumPhaseFilter:
    """Draw a 1-D filter with a0 = 1 and sum(|a[1:]|) <= 0.9."""
    m = draw(st.integers(min_value=1, max_value=max_coefficients))
    lags = draw(st.lists(st.integers(min_value=1, max_value=max_lag),
                         min_size=m - 1, max_size=m - 1, unique=True))
    raw = draw(hnp.arrays(np.float64, m - 1,
                          elements=st.floats(min_value=-1, max_value=1,
                                             allow_nan=False, allow_infinity=False)))
    scale = 0.9 / max(1.0, float(np.sum(np.abs(raw))))
    return MinimumPhaseFilter([0] + lags, np.concatenate(([1.0], raw * scale)))


def arrays_of_rank(ndim: int, max_side: int = 8) -> st.SearchStrategy:
    """Finite float64 arrays of a fixed rank."""
    return hnp.arrays(
        np.float64,
        hnp.array_shapes(min_dims=ndim, max_dims=ndim, min_side=1, max_side=max_side),
        elements=finite_floats
    )


# ---- Reference implementations ----

def reference_apply(mpf: MinimumPhaseFilter, x: np.ndarray) -> np.ndarray:
    """Forward filtering by N-D convolution with the filter's stencil.

    Uses the lags of the first x.ndim dimensions and zero padding outside x.
    """
    lags = mpf.lag_vectors()[:, :x.ndim]
    mins = lags.min(axis=0)
    extent = lags.max(axis=0) - mins + 1

    kernel = np.zeros(tuple(extent[::-1]))
    for j in range(mpf.m):
        kernel[tuple((lags[j] - mins)[::-1])] += mpf.a[j]

    full = signal.convolve(x, kernel, mode="full", method="direct")
    start = (-mins)[::-1]
    return full[tuple(slice(s, s + n) for s, n in zip(start, x.shape))]


def dense_coefficients(mpf: MinimumPhaseFilter) -> np.ndarray:
    """Dense 1-D polynomial coefficients for use with scipy.signal.lfilter."""
    b = np.zeros(int(mpf.max1) + 1)
    np.add.at(b, mpf.lag1, mpf.a)
    return b


# ---- Assertion utilities ----

def assert_array_equal(actual, expected, rtol=1e-10, atol=1e-12, err_msg=""):
    """Assert that two arrays are equal within tolerance."""
    np.testing.assert_allclose(actual, expected, rtol=rtol, atol=atol, err_msg=err_msg)


def assert_adjoint(lhs: float, rhs: float, scale: Optional[float] = None):
    """Assert the two sides of a dot-product test agree."""
    atol = 1e-9 * (scale if scale is not None else max(1.0, abs(lhs), abs(rhs)))
    np.testing.assert_allclose(lhs, rhs, rtol=1e-9, atol=atol)
