"""
helix Filters Module

Minimum-phase filters on a helix and Wilson-Burg spectral factorization.

The MinimumPhaseFilter class applies a causal filter, its transpose, its
inverse and its inverse transpose to 1-D, 2-D and 3-D arrays. The
factorization functions estimate the coefficients of a minimum-phase filter
whose autocorrelation matches a target autocorrelation.
"""

import logging

# Set up module-level logger
logger = logging.getLogger("helix.filters")

from .minimum_phase import MinimumPhaseFilter
from .factorization import (
    FactorizationResult,
    factorize,
    factor,
    filter_autocorrelation
)

__all__ = [
    'MinimumPhaseFilter',
    'FactorizationResult',
    'factorize',
    'factor',
    'filter_autocorrelation'
]
