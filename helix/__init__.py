# helix/__init__.py
"""
helix - Minimum-phase filters on a helix

Multi-dimensional recursive filtering with minimum-phase filters. A filter is
a table of lag vectors and coefficients whose lag vectors are causal when
arrays are unrolled along a helix, so the filter, its transpose, its inverse
and its inverse transpose can all be applied to 1-D, 2-D and 3-D arrays with
ordinary 1-D recursions.

The package provides:
- MinimumPhaseFilter: the four linear operators on rank 1..3 arrays
- factorize / factor: Wilson-Burg spectral factorization of a target
  autocorrelation into a minimum-phase filter with a given lag table
- filter_autocorrelation: the autocorrelation of a filter's stencil

Settings for factorization and logging live in helix.core.config and may be
overridden with HELIX_<SECTION>_<OPTION> environment variables.
"""

import logging
from typing import Union

from .version import __version__, __title__, __description__, __license__
from .core.config import initialize_config
from .core.exceptions import (
    HelixError,
    InvalidArgumentError,
    InvalidStateError,
    DimensionError,
    ConvergenceError,
    ConfigurationError,
    HelixWarning,
    ConvergenceWarning
)
from .filters import (
    MinimumPhaseFilter,
    FactorizationResult,
    factorize,
    factor,
    filter_autocorrelation
)

# Set up package-wide logger
logger = logging.getLogger("helix")

# Apply environment overrides and configure the package logger
initialize_config()


# Public API functions

def get_version() -> str:
    """
    Return the version of the helix package.

    Returns:
        str: Version string in format MAJOR.MINOR.PATCH
    """
    return __version__


def set_log_level(level: Union[str, int]) -> None:
    """
    Set the logging level for the helix package.

    Args:
        level: Logging level, either as string ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
              or as an integer constant from the logging module
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())
    logger.setLevel(level)
    logger.debug(f"Log level set to {logging.getLevelName(level)}")


__all__ = [
    # Filters
    'MinimumPhaseFilter',
    'FactorizationResult',
    'factorize',
    'factor',
    'filter_autocorrelation',

    # Exceptions
    'HelixError',
    'InvalidArgumentError',
    'InvalidStateError',
    'DimensionError',
    'ConvergenceError',
    'ConfigurationError',
    'HelixWarning',
    'ConvergenceWarning',

    # Public functions
    'get_version',
    'set_log_level',

    # Version info
    '__version__',
    '__title__',
    '__description__',
    '__license__'
]

logger.debug(f"helix v{__version__} initialized")
