"""ignorematch Infrastructure Layer.

Services used around the matcher engine:
- ConfigManager: layered configuration from defaults, YAML, environment and CLI
- LRUCache: compiled-rule cache
- Logger: structured logging
"""

from .cache_manager import CacheConfig, CacheEntry, LRUCache
from .config_manager import ConfigError
from .config_manager import ConfigManager, ConfigSource, get_config_manager, set_global_config
from .logger import Logger, LogLevel, get_logger, reset_loggers, set_global_logger

__all__ = [
    # Logger exports
    "Logger",
    "LogLevel",
    "get_logger",
    "set_global_logger",
    "reset_loggers",
    # Cache exports
    "CacheEntry",
    "CacheConfig",
    "LRUCache",
    # Config exports
    "ConfigSource",
    "ConfigError",
    "ConfigManager",
    "get_config_manager",
    "set_global_config",
]
