#!/usr/bin/env python3
"""Layered configuration for ignorematch.

This module provides configuration management with:
- Precedence levels from compiled defaults up to runtime overrides
- YAML configuration files
- Environment variable overrides (IGNOREMATCH_SECTION__KEY)
- Validation of every loaded layer
- Thread-safe access

Example:
    >>> config = ConfigManager()
    >>> config.load_file("ignorematch.yaml")
    >>> config.get("ignorematch.cache.max_entries", default=1024)
"""

import copy
import os
import threading
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ignorematch.core.constants import ConfigKey, Defaults, ErrorCode
from ignorematch.core.validators import ValidationError, validate_config


class ConfigSource(Enum):
    """Configuration source precedence levels."""

    COMPILED_DEFAULTS = 1  # Lowest precedence
    USER_CONFIG = 2
    ENVIRONMENT = 3
    CLI_ARGS = 4
    RUNTIME = 5  # Highest precedence


class ConfigError(Exception):
    """Configuration error."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class ConfigManager:
    """Thread-safe layered configuration manager.

    Values are looked up from the highest precedence source down:
    runtime updates, CLI arguments, environment variables, the user's
    YAML file, compiled defaults.
    """

    DEFAULT_CONFIG = {
        ConfigKey.ROOT: {
            ConfigKey.LOGGING: {
                ConfigKey.LOG_LEVEL: Defaults.LOG_LEVEL,
                ConfigKey.LOG_FILE: None,
            },
            ConfigKey.CACHE: {
                ConfigKey.CACHE_ENABLED: Defaults.CACHE_ENABLED,
                ConfigKey.CACHE_MAX_ENTRIES: Defaults.CACHE_MAX_ENTRIES,
            },
        }
    }

    def __init__(self, config_file: Optional[str] = None, environ: Optional[Dict[str, str]] = None):
        """Initialize configuration manager.

        Args:
            config_file: Optional YAML file to load as user config
            environ: Environment mapping to read overrides from (defaults to os.environ)
        """
        self._config: Dict[ConfigSource, Dict[str, Any]] = {}
        self._lock = threading.RLock()

        self._config[ConfigSource.COMPILED_DEFAULTS] = copy.deepcopy(self.DEFAULT_CONFIG)

        if config_file:
            self.load_file(config_file)

        self._load_environment(os.environ if environ is None else environ)

    def load_file(self, file_path: str, source: ConfigSource = ConfigSource.USER_CONFIG) -> None:
        """Load configuration from a YAML file.

        Args:
            file_path: Path to YAML config file
            source: Configuration source level

        Raises:
            ConfigError: If the file cannot be read, parsed or validated
        """
        path = Path(file_path).expanduser()

        if not path.exists():
            raise ConfigError(f"Config file not found: {file_path}", ErrorCode.NOT_FOUND)

        try:
            with open(path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML parse error in {file_path}: {e}", ErrorCode.INVALID_INPUT) from e
        except PermissionError as e:
            raise ConfigError(f"Cannot read config {file_path}: {e}", ErrorCode.PERMISSION_DENIED) from e
        except OSError as e:
            raise ConfigError(f"Error loading config {file_path}: {e}", ErrorCode.INTERNAL_ERROR) from e

        if config_data is None:
            config_data = {}
        if not isinstance(config_data, dict):
            raise ConfigError(f"Invalid config format in {file_path}", ErrorCode.INVALID_INPUT)

        self._store(source, config_data, origin=str(file_path))

    def load_dict(self, config_data: Dict[str, Any], source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Load configuration from a dictionary.

        Raises:
            ConfigError: If the dictionary fails validation
        """
        self._store(source, copy.deepcopy(config_data), origin=source.name.lower())

    def _store(self, source: ConfigSource, config_data: Dict[str, Any], origin: str) -> None:
        try:
            validate_config(config_data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {origin}: {e}", e.error_code) from e

        with self._lock:
            self._config[source] = config_data

    def _load_environment(self, environ: Dict[str, str]) -> None:
        """Load overrides from environment variables.

        ``IGNOREMATCH_CACHE__MAX_ENTRIES=64`` sets ``ignorematch.cache.max_entries``.
        """
        env_config: Dict[str, Any] = {}
        prefix = Defaults.ENV_PREFIX

        for key, value in environ.items():
            if not key.startswith(prefix) or len(key) == len(prefix):
                continue

            parts = key[len(prefix):].lower().split(Defaults.ENV_NESTING)

            current = env_config
            for part in parts[:-1]:
                current = current.setdefault(part, {})
            current[parts[-1]] = self._parse_env_value(value)

        if env_config:
            self._store(ConfigSource.ENVIRONMENT, {ConfigKey.ROOT: env_config}, origin="environment")

    def _parse_env_value(self, value: str) -> Any:
        """Parse an environment value into bool, int, float or str."""
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Args:
            key: Dot-separated key path (e.g., "ignorematch.cache.enabled")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        with self._lock:
            for source in sorted(self._config.keys(), key=lambda s: s.value, reverse=True):
                value = self._get_nested(self._config[source], key)
                if value is not None:
                    return value

            return default

    def _get_nested(self, config: Dict[str, Any], key: str) -> Optional[Any]:
        current: Any = config
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return None
            current = current[part]
        return current

    def set(self, key: str, value: Any, source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Set configuration value at the given precedence level."""
        with self._lock:
            current = self._config.setdefault(source, {})

            parts = key.split(".")
            for part in parts[:-1]:
                current = current.setdefault(part, {})
            current[parts[-1]] = value

    def get_all(self) -> Dict[str, Any]:
        """Get configuration merged from all sources."""
        with self._lock:
            merged: Dict[str, Any] = {}
            for source in sorted(self._config.keys(), key=lambda s: s.value):
                merged = self._deep_merge(merged, self._config[source])
            return merged

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def clear(self, source: Optional[ConfigSource] = None) -> None:
        """Clear one source, or every source except the compiled defaults."""
        with self._lock:
            if source:
                if source != ConfigSource.COMPILED_DEFAULTS:
                    self._config.pop(source, None)
            else:
                for s in list(self._config.keys()):
                    if s != ConfigSource.COMPILED_DEFAULTS:
                        del self._config[s]


_global_config: Optional[ConfigManager] = None


def get_config_manager(config_file: Optional[str] = None) -> ConfigManager:
    """Get or create the global configuration manager."""
    global _global_config
    if _global_config is None:
        _global_config = ConfigManager(config_file)
    return _global_config


def set_global_config(config: Optional[ConfigManager]) -> None:
    """Set (or with ``None``, reset) the global configuration manager."""
    global _global_config
    _global_config = config
