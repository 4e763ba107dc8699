'''
Configuration management for the helix package.

Configuration is held in dataclass sections and resolved in layers:

1. Default values built into the package
2. Environment variables named HELIX_<SECTION>_<OPTION>
3. Runtime modifications through set_config

The factorization section supplies the convergence tolerance, the iteration
cap and the buffer padding used by Wilson-Burg factorization when the caller
does not pass them explicitly. The logging section configures the package
logger.
'''

import os
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .exceptions import ConfigurationError
from .types import LogLevel

# Set up module-level logger
logger = logging.getLogger("helix.core.config")

CONFIG_ENV_PREFIX = "HELIX_"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigSection(Enum):
    """Enumeration of configuration sections."""
    FACTORIZATION = "factorization"
    LOGGING = "logging"


@dataclass
class FactorizationConfig:
    """
    Wilson-Burg factorization settings.

    Attributes:
        tolerance: Largest absolute coefficient change between iterations
            that still counts as converged
        max_iterations: Iteration cap; factorization stops with a warning
            when it is reached
        padding_factor: Working buffer padding per unit of lag span, in
            each dimension
    """
    tolerance: float = 1e-10
    max_iterations: int = 100
    padding_factor: int = 20


@dataclass
class LoggingConfig:
    """
    Logging configuration settings.

    Attributes:
        log_level: Level of the package logger
        log_format: Format string for log messages
        log_date_format: Format string for log message timestamps
        console_logging: Whether to log to the console
    """
    log_level: LogLevel = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_date_format: str = "%Y-%m-%d %H:%M:%S"
    console_logging: bool = True


@dataclass
class HelixConfig:
    """
    Complete configuration for the helix package.

    Attributes:
        factorization: Wilson-Burg factorization settings
        logging: Logging configuration settings
    """
    factorization: FactorizationConfig = field(default_factory=FactorizationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigManager:
    """
    Configuration manager for the helix package.

    Holds the current configuration and provides methods to get, set and
    reset options. Environment overrides are applied once, on initialization.
    """

    def __init__(self):
        """Initialize the configuration manager with default settings."""
        self._config = HelixConfig()
        self._initialized = False
        self._modified_keys = set()

    def initialize(self) -> None:
        """
        Initialize the configuration manager.

        Applies environment variable overrides, validates the result and
        configures the package logger.
        """
        if self._initialized:
            return

        self._apply_env_overrides()
        self._validate_config()
        self._setup_logging()

        self._initialized = True
        logger.debug("Configuration manager initialized")

    def _apply_env_overrides(self) -> None:
        """Apply HELIX_<SECTION>_<OPTION> environment variables."""
        for env_var, value in os.environ.items():
            if not env_var.startswith(CONFIG_ENV_PREFIX):
                continue

            key = env_var[len(CONFIG_ENV_PREFIX):]
            parts = key.lower().split('_', 1)

            if len(parts) != 2:
                continue

            section, option = parts

            try:
                ConfigSection(section)
            except ValueError:
                continue

            section_obj = getattr(self._config, section)
            if not hasattr(section_obj, option):
                continue

            try:
                setattr(section_obj, option, self._convert(getattr(section_obj, option), value))
                logger.debug(f"Applied environment override: {env_var}={value}")
            except ValueError as e:
                logger.warning(f"Failed to apply environment override {env_var}: {e}")

    @staticmethod
    def _convert(current_value: Any, value: Any) -> Any:
        """Convert value to the type of current_value."""
        value_type = type(current_value)
        if value_type is bool and isinstance(value, str):
            return value.lower() in ('true', 'yes', '1', 'y')
        if value_type is str and isinstance(value, str) and current_value in _LOG_LEVELS:
            return value.upper()
        if value_type is int and isinstance(value, float) and not value.is_integer():
            raise ValueError(f"expected an integer, got {value}")
        if value_type is not type(value):
            return value_type(value)
        return value

    def _setup_logging(self) -> None:
        """Configure the package logger from the logging section."""
        package_logger = logging.getLogger("helix")

        for handler in package_logger.handlers[:]:
            package_logger.removeHandler(handler)

        package_logger.setLevel(getattr(logging, self._config.logging.log_level))

        if self._config.logging.console_logging:
            formatter = logging.Formatter(
                fmt=self._config.logging.log_format,
                datefmt=self._config.logging.log_date_format
            )
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(formatter)
            package_logger.addHandler(console_handler)
        else:
            package_logger.addHandler(logging.NullHandler())

    def _validate_config(self) -> None:
        """Replace invalid values with their defaults, logging a warning."""
        defaults = HelixConfig()
        factorization = self._config.factorization

        if not factorization.tolerance >= 0:
            logger.warning(f"Invalid tolerance: {factorization.tolerance}, must be non-negative")
            factorization.tolerance = defaults.factorization.tolerance

        if factorization.max_iterations <= 0:
            logger.warning(f"Invalid max_iterations: {factorization.max_iterations}, must be positive")
            factorization.max_iterations = defaults.factorization.max_iterations

        if factorization.padding_factor < 1:
            logger.warning(f"Invalid padding_factor: {factorization.padding_factor}, must be at least 1")
            factorization.padding_factor = defaults.factorization.padding_factor

        if self._config.logging.log_level not in _LOG_LEVELS:
            logger.warning(f"Invalid log level: {self._config.logging.log_level}, using INFO")
            self._config.logging.log_level = "INFO"

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        """
        Convert the configuration to a dictionary.

        Returns:
            Dictionary mapping section names to option dictionaries
        """
        result = {}
        for section in ConfigSection:
            section_obj = getattr(self._config, section.value)
            result[section.value] = {
                name: getattr(section_obj, name) for name in section_obj.__dataclass_fields__
            }
        return result

    def get(self, section: str, option: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            section: The configuration section
            option: The configuration option
            default: Default value if the option is not found

        Returns:
            The configuration value, or the default if not found
        """
        if not self.has_section(section):
            return default

        section_obj = getattr(self._config, section)

        if not hasattr(section_obj, option):
            return default

        return getattr(section_obj, option)

    def set(self, section: str, option: str, value: Any) -> None:
        """
        Set a configuration value.

        Args:
            section: The configuration section
            option: The configuration option
            value: The value to set

        Raises:
            ConfigurationError: If the section or option is not found, or the
                value cannot be converted to the option's type
        """
        if not self.has_section(section):
            raise ConfigurationError(
                f"Unknown configuration section: {section}",
                setting=f"{section}.{option}",
                value=value,
                issue="Section not found"
            )

        section_obj = getattr(self._config, section)

        if not hasattr(section_obj, option):
            raise ConfigurationError(
                f"Unknown configuration option: {section}.{option}",
                setting=f"{section}.{option}",
                value=value,
                issue="Option not found"
            )

        try:
            typed_value = self._convert(getattr(section_obj, option), value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Failed to set configuration option: {section}.{option}",
                setting=f"{section}.{option}",
                value=value,
                issue=str(e)
            ) from e

        setattr(section_obj, option, typed_value)
        self._validate_config()
        self._modified_keys.add(f"{section}.{option}")

        if section == ConfigSection.LOGGING.value:
            self._setup_logging()

        logger.debug(f"Set configuration option: {section}.{option}={typed_value}")

    def reset(self, section: Optional[str] = None, option: Optional[str] = None) -> None:
        """
        Reset configuration to default values.

        Args:
            section: The configuration section to reset, or None to reset all
            option: The configuration option to reset, or None to reset the entire section

        Raises:
            ConfigurationError: If the section or option is not found
        """
        if section is None:
            self._config = HelixConfig()
            self._modified_keys.clear()
            self._setup_logging()
            logger.debug("Reset all configuration to defaults")
            return

        if not self.has_section(section):
            raise ConfigurationError(
                f"Unknown configuration section: {section}",
                setting=section,
                issue="Section not found"
            )

        default_section = getattr(HelixConfig(), section)

        if option is None:
            setattr(self._config, section, default_section)
            self._modified_keys = {k for k in self._modified_keys if not k.startswith(f"{section}.")}
        else:
            section_obj = getattr(self._config, section)
            if not hasattr(section_obj, option):
                raise ConfigurationError(
                    f"Unknown configuration option: {section}.{option}",
                    setting=f"{section}.{option}",
                    issue="Option not found"
                )
            setattr(section_obj, option, getattr(default_section, option))
            self._modified_keys.discard(f"{section}.{option}")

        if section == ConfigSection.LOGGING.value:
            self._setup_logging()

        logger.debug(f"Reset configuration: {section}{'.' + option if option else ''}")

    def get_modified_options(self) -> Dict[str, Dict[str, Any]]:
        """
        Get a dictionary of options changed at runtime.

        Returns:
            Dictionary of modified options with their current values
        """
        result = {}
        for key in self._modified_keys:
            section, option = key.split(".", 1)
            result.setdefault(section, {})[option] = self.get(section, option)
        return result

    def has_section(self, section: str) -> bool:
        """Check if a configuration section exists."""
        return section in {s.value for s in ConfigSection}

    def get_sections(self) -> List[str]:
        """Get the list of configuration section names."""
        return [s.value for s in ConfigSection]

    def get_section(self, section: str) -> Any:
        """
        Get a configuration section object.

        Raises:
            ConfigurationError: If the section is not found
        """
        if not self.has_section(section):
            raise ConfigurationError(
                f"Unknown configuration section: {section}",
                setting=section,
                issue="Section not found"
            )
        return getattr(self._config, section)


# Global configuration manager instance
_config_manager = ConfigManager()


def initialize_config() -> None:
    """Initialize the configuration system."""
    _config_manager.initialize()


def get_config_manager() -> ConfigManager:
    """
    Get the configuration manager instance.

    Returns:
        The configuration manager instance
    """
    if not _config_manager._initialized:
        initialize_config()

    return _config_manager


def get_config(section: str, option: str, default: Any = None) -> Any:
    """
    Get a configuration value.

    Args:
        section: The configuration section
        option: The configuration option
        default: Default value if the option is not found

    Returns:
        The configuration value, or the default if not found
    """
    return get_config_manager().get(section, option, default)


def set_config(section: str, option: str, value: Any) -> None:
    """
    Set a configuration value.

    Raises:
        ConfigurationError: If the section or option is not found
    """
    get_config_manager().set(section, option, value)


def reset_config(section: Optional[str] = None, option: Optional[str] = None) -> None:
    """
    Reset configuration to default values.

    Raises:
        ConfigurationError: If the section or option is not found
    """
    get_config_manager().reset(section, option)


def get_factorization_config() -> FactorizationConfig:
    """
    Get the factorization configuration.

    Returns:
        The factorization configuration object
    """
    return get_config_manager().get_section(ConfigSection.FACTORIZATION.value)


def to_dict() -> Dict[str, Dict[str, Any]]:
    """
    Convert the current configuration to a dictionary.

    Returns:
        Dictionary representation of the configuration
    """
    return get_config_manager().to_dict()
