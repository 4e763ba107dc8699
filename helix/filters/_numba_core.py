"""
Numba-accelerated core for helix filtering.

A single kernel implements all four linear operators of a minimum-phase
filter (apply, transpose, inverse, inverse transpose) on rank-3 views, so
1-D and 2-D arrays are handled as degenerate volumes with unit leading axes
and zero lags in the unused dimensions.

Output positions are split into an interior zone, where every shifted
coordinate is provably in bounds and the term loop runs unchecked, and the
boundary zone near the array edges, where each term is bounds-checked and
out-of-bounds terms are dropped. The interior ranges are computed by the
caller from the filter's cached lag extrema and passed in ``bounds``.
"""

import logging

import numpy as np
from numba import jit

# Set up module-level logger
logger = logging.getLogger("helix.filters._numba_core")


@jit(nopython=True, cache=True)
def helix_filter(lag1: np.ndarray,
                 lag2: np.ndarray,
                 lag3: np.ndarray,
                 a: np.ndarray,
                 bounds: np.ndarray,
                 x: np.ndarray,
                 y: np.ndarray,
                 transpose: bool,
                 inverse: bool) -> None:
    """
    Apply a helix filter, its transpose, inverse or inverse transpose.

    With s = +1 (causal) or -1 (transpose), the operators are

    - apply:             y[p] = a[0]*x[p] + sum_j a[j]*x[p - s*lag[j]]
    - inverse:           y[p] = (x[p] - sum_j a[j]*y[p - s*lag[j]]) / a[0]

    where sums run over j >= 1 and terms outside the array are dropped.
    Causal operators visit positions in increasing helix order, transpose
    operators in decreasing order; the inverse recursions depend on that
    order. The inverse operators may run in place (x and y the same array).

    Args:
        lag1: Lags in dimension 1 (last axis), int64
        lag2: Lags in dimension 2, int64
        lag3: Lags in dimension 3 (first axis), int64
        a: Filter coefficients, float64
        bounds: Interior ranges [lo1, hi1, lo2, hi2, lo3, hi3], int64
        x: Input array of shape (n3, n2, n1)
        y: Output array of shape (n3, n2, n1), written in place
        transpose: Whether lags point forward (anti-causal direction)
        inverse: Whether to run the recursive deconvolution
    """
    m = a.shape[0]
    n3, n2, n1 = y.shape
    a0 = a[0]
    a0i = 1.0 / a[0]
    s = -1 if transpose else 1
    src = y if inverse else x

    lo1, hi1 = bounds[0], bounds[1]
    lo2, hi2 = bounds[2], bounds[3]
    lo3, hi3 = bounds[4], bounds[5]

    for t3 in range(n3):
        i3 = n3 - 1 - t3 if transpose else t3
        inside3 = lo3 <= i3 and i3 < hi3
        for t2 in range(n2):
            i2 = n2 - 1 - t2 if transpose else t2
            inside2 = inside3 and lo2 <= i2 and i2 < hi2
            for t1 in range(n1):
                i1 = n1 - 1 - t1 if transpose else t1
                acc = 0.0
                if inside2 and lo1 <= i1 and i1 < hi1:
                    # Interior: no per-term checks
                    for j in range(1, m):
                        acc += a[j] * src[i3 - s * lag3[j], i2 - s * lag2[j], i1 - s * lag1[j]]
                else:
                    for j in range(1, m):
                        k1 = i1 - s * lag1[j]
                        k2 = i2 - s * lag2[j]
                        k3 = i3 - s * lag3[j]
                        if (0 <= k1 and k1 < n1 and 0 <= k2 and k2 < n2
                                and 0 <= k3 and k3 < n3):
                            acc += a[j] * src[k3, k2, k1]
                if inverse:
                    y[i3, i2, i1] = a0i * (x[i3, i2, i1] - acc)
                else:
                    y[i3, i2, i1] = a0 * x[i3, i2, i1] + acc


def interior_bounds(shape: tuple, extrema: tuple, transpose: bool) -> np.ndarray:
    """
    Compute the interior ranges passed to helix_filter.

    A position i in dimension d is interior when i - s*lag stays within
    [0, n_d) for every lag of that dimension, giving [max(0, max_d),
    min(n_d, n_d + min_d)) for causal operators and [max(0, -min_d),
    min(n_d, n_d - max_d)) for transpose operators. A range may be empty.

    Args:
        shape: Volume shape (n3, n2, n1)
        extrema: ((min1, max1), (min2, max2), (min3, max3))
        transpose: Whether the bounds are for a transpose operator

    Returns:
        np.ndarray: int64 array [lo1, hi1, lo2, hi2, lo3, hi3]
    """
    bounds = np.empty(6, dtype=np.int64)
    for d, (n, (lmin, lmax)) in enumerate(zip(reversed(shape), extrema)):
        if transpose:
            bounds[2 * d] = max(0, -lmin)
            bounds[2 * d + 1] = min(n, n - lmax)
        else:
            bounds[2 * d] = max(0, lmax)
            bounds[2 * d + 1] = min(n, n + lmin)
    return bounds
