"""
helix Utilities Module

Pure array helper functions used by the filter and factorization modules:
lag extrema, zero-filled allocation, region copies with offsets, impulses and
rank-3 views.
"""

import logging

# Set up module-level logger
logger = logging.getLogger("helix.utils")

from .array_ops import (
    lag_min,
    lag_max,
    lag_extrema,
    zeros,
    copy_region,
    impulse,
    as_volume
)

__all__ = [
    'lag_min',
    'lag_max',
    'lag_extrema',
    'zeros',
    'copy_region',
    'impulse',
    'as_volume'
]
