"""
ignorematch Core: Configuration Validators.

Validation for the configuration document read by
:class:`ignorematch.infrastructure.config_manager.ConfigManager`.
"""
from typing import Any, Dict

from ignorematch.core.constants import VALID_LOG_LEVELS, ConfigKey, ErrorCode


class ValidationError(Exception):
    """Base exception for validation errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize ValidationError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.error_code = error_code


def validate_config(config: Dict[str, Any]) -> bool:
    """Validate a configuration document.

    The document may be empty. When the ``ignorematch`` section is present
    it may only contain the ``logging`` and ``cache`` sections.

    Args:
        config: Configuration dictionary

    Returns:
        True if valid

    Raises:
        ValidationError: If configuration is invalid
    """
    if not isinstance(config, dict):
        raise ValidationError("Configuration must be a dictionary")

    section = config.get(ConfigKey.ROOT)
    if section is None:
        return True
    if not isinstance(section, dict):
        raise ValidationError(f"'{ConfigKey.ROOT}' section must be a dictionary")

    unknown = set(section.keys()) - {ConfigKey.LOGGING, ConfigKey.CACHE}
    if unknown:
        raise ValidationError(f"Unknown configuration sections: {', '.join(sorted(unknown))}")

    if ConfigKey.LOGGING in section:
        validate_logging_config(section[ConfigKey.LOGGING])
    if ConfigKey.CACHE in section:
        validate_cache_config(section[ConfigKey.CACHE])

    return True


def validate_logging_config(logging_config: Dict[str, Any]) -> bool:
    """Validate logging configuration.

    Raises:
        ValidationError: If logging config is invalid
    """
    if not isinstance(logging_config, dict):
        raise ValidationError("Logging configuration must be a dictionary")

    unknown = set(logging_config.keys()) - {ConfigKey.LOG_LEVEL, ConfigKey.LOG_FILE}
    if unknown:
        raise ValidationError(f"Unknown logging configuration fields: {', '.join(sorted(unknown))}")

    if ConfigKey.LOG_LEVEL in logging_config:
        validate_log_level(logging_config[ConfigKey.LOG_LEVEL])

    log_file = logging_config.get(ConfigKey.LOG_FILE)
    if log_file is not None and (not isinstance(log_file, str) or not log_file):
        raise ValidationError(f"Log file must be a non-empty string: {log_file!r}")

    return True


def validate_log_level(level: Any) -> bool:
    """Validate a log level name (case-insensitive)."""
    if not isinstance(level, str) or level.upper() not in VALID_LOG_LEVELS:
        raise ValidationError(
            f"Invalid log level: {level!r}. Must be one of {sorted(VALID_LOG_LEVELS)}"
        )
    return True


def validate_cache_config(cache: Dict[str, Any]) -> bool:
    """Validate compiled-rule cache configuration.

    Args:
        cache: Cache configuration dictionary

    Returns:
        True if valid

    Raises:
        ValidationError: If cache config is invalid
    """
    if not isinstance(cache, dict):
        raise ValidationError("Cache configuration must be a dictionary")

    unknown = set(cache.keys()) - {ConfigKey.CACHE_ENABLED, ConfigKey.CACHE_MAX_ENTRIES}
    if unknown:
        raise ValidationError(f"Unknown cache configuration fields: {', '.join(sorted(unknown))}")

    if ConfigKey.CACHE_ENABLED in cache:
        enabled = cache[ConfigKey.CACHE_ENABLED]
        if not isinstance(enabled, bool):
            raise ValidationError(f"Cache enabled must be boolean: {enabled}")

    if ConfigKey.CACHE_MAX_ENTRIES in cache:
        max_entries = cache[ConfigKey.CACHE_MAX_ENTRIES]
        # bool is an int subclass
        if isinstance(max_entries, bool) or not isinstance(max_entries, int) or max_entries <= 0:
            raise ValidationError(f"Cache max_entries must be a positive integer: {max_entries}")

    return True
