"""
helix Core Module

Foundation shared by the filter and factorization modules: the exception
hierarchy, validation primitives, configuration management and type aliases.
"""

import logging

# Set up module-level logger
logger = logging.getLogger("helix.core")

from .exceptions import (
    HelixError,
    InvalidArgumentError,
    InvalidStateError,
    DimensionError,
    ConvergenceError,
    ConfigurationError,
    HelixWarning,
    ConvergenceWarning
)

from .validation import (
    check_argument,
    check_state,
    validate_lag_sequence,
    validate_coefficients,
    validate_filter_array,
    validate_output_array
)

from .config import (
    get_config,
    set_config,
    reset_config,
    get_config_manager,
    get_factorization_config,
    ConfigManager,
    FactorizationConfig,
    LoggingConfig,
    HelixConfig
)

__all__ = [
    # Exceptions
    'HelixError',
    'InvalidArgumentError',
    'InvalidStateError',
    'DimensionError',
    'ConvergenceError',
    'ConfigurationError',
    'HelixWarning',
    'ConvergenceWarning',

    # Validation
    'check_argument',
    'check_state',
    'validate_lag_sequence',
    'validate_coefficients',
    'validate_filter_array',
    'validate_output_array',

    # Configuration
    'get_config',
    'set_config',
    'reset_config',
    'get_config_manager',
    'get_factorization_config',
    'ConfigManager',
    'FactorizationConfig',
    'LoggingConfig',
    'HelixConfig'
]
