# helix/filters/factorization.py

"""
Wilson-Burg spectral factorization on a helix.

Given a target autocorrelation r and a fixed lag table, Wilson-Burg
factorization iterates toward the coefficients of the minimum-phase filter
whose autocorrelation matches r. Each iteration deconvolves r by the current
filter and its transpose, keeps the causal half of the result (with the
center halved after adding one), and reconvolves by the current filter to
obtain the next coefficients.

The iteration runs in a working buffer padded well beyond r so that edge
effects of the recursive deconvolutions stay small near the center. 1-D and
2-D lag tables are supported.

Classes:
    FactorizationResult: Filter plus convergence diagnostics

Functions:
    factorize: Wilson-Burg factorization with diagnostics
    factor: Wilson-Burg factorization returning only the filter
    filter_autocorrelation: Autocorrelation of a filter's coefficient stencil
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import numpy as np
from scipy import signal

from helix.core.config import get_factorization_config
from helix.core.exceptions import raise_convergence_error, warn_convergence
from helix.core.types import FilterArray, LagSequence, OptionalLags
from helix.core.validation import (
    check_argument, validate_filter_array, validate_lag_sequence,
    validate_positive_int, validate_tolerance
)
from helix.filters.minimum_phase import MinimumPhaseFilter
from helix.utils.array_ops import copy_region, zeros

# Set up module-level logger
logger = logging.getLogger("helix.filters.factorization")


@dataclass
class FactorizationResult:
    """Result container for Wilson-Burg factorization.

    Attributes:
        filter: The final minimum-phase filter
        iterations: Number of iterations performed
        converged: Whether the coefficient change fell within tolerance
        max_change: Largest absolute coefficient change in the final iteration
        tolerance: The convergence tolerance that was used
    """

    filter: MinimumPhaseFilter
    iterations: int
    converged: bool
    max_change: float
    tolerance: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result object to a dictionary."""
        return {
            "filter": self.filter.to_dict(),
            "iterations": self.iterations,
            "converged": self.converged,
            "max_change": self.max_change,
            "tolerance": self.tolerance
        }


def factorize(r: FilterArray,
              lag1: LagSequence,
              lag2: OptionalLags = None,
              *,
              lag3: OptionalLags = None,
              tolerance: Optional[float] = None,
              max_iterations: Optional[int] = None,
              padding_factor: Optional[int] = None) -> FactorizationResult:
    """
    Factor an autocorrelation into a minimum-phase filter.

    Args:
        r: Target autocorrelation, symmetric about its midpoint, of rank 1
            (with lag1 only) or rank 2 (with lag1 and lag2)
        lag1: Lags in dimension 1; lag1[0] must be 0
        lag2: Lags in dimension 2, for 2-D factorization
        lag3: Not supported; must be None
        tolerance: Largest coefficient change that counts as converged
            (default from configuration)
        max_iterations: Iteration cap (default from configuration)
        padding_factor: Buffer padding per unit lag span (default from
            configuration)

    Returns:
        FactorizationResult: The final filter and convergence diagnostics

    Raises:
        InvalidArgumentError: If the lag table is invalid, r's rank does not
            match the lag table, or 3-D factorization is requested
        ConvergenceError: If the coefficients become non-finite or the
            leading coefficient vanishes

    Warns:
        ConvergenceWarning: If max_iterations is reached without convergence

    Examples:
        >>> import numpy as np
        >>> result = factorize(np.array([-0.5, 1.25, -0.5]), lag1=[0, 1])
        >>> np.round(result.filter.a, 6)
        array([ 1. , -0.5])
    """
    config = get_factorization_config()
    tolerance = validate_tolerance(config.tolerance if tolerance is None else tolerance)
    max_iterations = validate_positive_int(
        config.max_iterations if max_iterations is None else max_iterations, "max_iterations")
    padding_factor = validate_positive_int(
        config.padding_factor if padding_factor is None else padding_factor, "padding_factor")

    check_argument(lag3 is None, "factorization supports 1-D and 2-D lag tables", argument="lag3")
    r = validate_filter_array(r, "r")
    ndim = 1 if lag2 is None else 2
    check_argument(r.ndim == ndim, f"r has rank {ndim} to match the lag table", argument="r")

    lag1 = validate_lag_sequence(lag1, "lag1")
    lag2 = None if lag2 is None else validate_lag_sequence(lag2, "lag2")
    a = zeros(len(lag1))
    if a.size:
        a[0] = 1.0
    mpf = MinimumPhaseFilter(lag1, a, lag2)

    # Array axes run from the highest dimension down to dimension 1
    spans = [mpf.max1 - mpf.min1] if ndim == 1 else [mpf.max2 - mpf.min2, mpf.max1 - mpf.min1]
    shape = tuple(n + padding_factor * span for n, span in zip(r.shape, spans))
    center = tuple((n - 1) // 2 for n in shape)
    r_center = tuple((n - 1) // 2 for n in r.shape)

    s = zeros(shape)
    copy_region(r, s, dst_offset=tuple(k - l for k, l in zip(center, r_center)))
    t = zeros(shape)
    u = zeros(shape)
    k = int(np.ravel_multi_index(center, shape))

    # Buffer positions of each lag vector relative to the center
    lag_axes = [lag1] if ndim == 1 else [lag2, lag1]
    positions = [c + lag for c, lag in zip(center, lag_axes)]
    inside = np.ones(len(a), dtype=bool)
    for pos, n in zip(positions, shape):
        inside &= (pos >= 0) & (pos < n)
    taps = tuple(pos[inside] for pos in positions)

    logger.debug(
        f"Factorizing rank-{ndim} autocorrelation of shape {r.shape} "
        f"with {len(a)} lags in buffer of shape {shape}"
    )

    converged = False
    max_change = np.inf
    iteration = 0
    while iteration < max_iterations:
        iteration += 1
        mpf.apply_inverse(s, t)
        mpf.apply_inverse_transpose(t, u)

        flat = u.reshape(-1)
        flat[k] += 1.0
        flat[:k] = 0.0
        flat[k] *= 0.5

        mpf.apply(u, t)

        a_next = a.copy()
        a_next[inside] = t[taps]
        if not np.all(np.isfinite(a_next)) or a_next[0] == 0.0:
            raise_convergence_error(
                "Wilson-Burg factorization diverged",
                iterations=iteration,
                tolerance=tolerance,
                coefficients=a_next,
                details="The target may not be a valid autocorrelation for this lag table"
            )

        max_change = float(np.max(np.abs(a_next - a)))
        a = a_next
        mpf = mpf.with_coefficients(a)
        logger.debug(f"Iteration {iteration}: max coefficient change {max_change:.3e}")

        if max_change <= tolerance:
            converged = True
            break

    if converged:
        logger.debug(f"Factorization converged after {iteration} iterations")
    else:
        logger.warning(
            f"Factorization stopped after {iteration} iterations "
            f"with max coefficient change {max_change:.3e}"
        )
        warn_convergence(
            "Wilson-Burg factorization did not converge",
            iterations=iteration,
            tolerance=tolerance,
            max_change=max_change
        )

    return FactorizationResult(
        filter=mpf,
        iterations=iteration,
        converged=converged,
        max_change=max_change,
        tolerance=tolerance
    )


def factor(r: FilterArray,
           lag1: LagSequence,
           lag2: OptionalLags = None,
           **kwargs: Any) -> MinimumPhaseFilter:
    """
    Factor an autocorrelation into a minimum-phase filter.

    Convenience wrapper around factorize that returns only the filter.
    Keyword arguments are passed through to factorize.
    """
    return factorize(r, lag1, lag2, **kwargs).filter


def filter_autocorrelation(mpf: MinimumPhaseFilter) -> np.ndarray:
    """
    Autocorrelation of a filter's coefficient stencil.

    The stencil places a[j] at its lag vector (shifted so all offsets are
    non-negative). Its full autocorrelation has odd extent
    2*(max_d - min_d) + 1 in each dimension with the zero-lag value at the
    midpoint, which is the form factorize expects.

    Args:
        mpf: The filter

    Returns:
        np.ndarray: Autocorrelation with rank mpf.dimensions
    """
    lags = mpf.lag_vectors()
    mins = lags.min(axis=0)
    extent = lags.max(axis=0) - mins + 1

    # Reverse so the last axis is dimension 1
    stencil = zeros(tuple(extent[::-1]))
    for j in range(mpf.m):
        stencil[tuple((lags[j] - mins)[::-1])] += mpf.a[j]

    return signal.correlate(stencil, stencil, mode="full", method="direct")
