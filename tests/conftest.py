"""Shared pytest fixtures for ignorematch tests."""
import logging
import os
from pathlib import Path
from typing import Any, Dict, List

import pytest
import yaml

from ignorematch.infrastructure.config_manager import ConfigManager, set_global_config
from ignorematch.infrastructure.logger import Logger, reset_loggers


class ListHandler(logging.Handler):
    """Logging handler that keeps records in memory."""

    def __init__(self):
        super().__init__()
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture
def list_handler() -> ListHandler:
    """In-memory handler for asserting on log output."""
    return ListHandler()


@pytest.fixture
def debug_logger(list_handler: ListHandler) -> Logger:
    """DEBUG-level logger writing only to ``list_handler``."""
    return Logger("ignorematch.test", level="DEBUG", handlers=[list_handler])


@pytest.fixture
def isolated_config() -> ConfigManager:
    """Configuration that ignores the process environment."""
    return ConfigManager(environ={})


@pytest.fixture
def sample_config() -> Dict[str, Any]:
    """Provide a sample ignorematch configuration."""
    return {
        "ignorematch": {
            "logging": {
                "level": "DEBUG",
                "file": None,
            },
            "cache": {
                "enabled": True,
                "max_entries": 16,
            },
        }
    }


@pytest.fixture
def config_file(tmp_path: Path, sample_config: Dict[str, Any]) -> Path:
    """Create a configuration file."""
    config_path = tmp_path / "ignorematch.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path


@pytest.fixture(autouse=True)
def reset_singletons(monkeypatch):
    """Reset global config and loggers, and hide IGNOREMATCH_* variables."""
    for key in list(os.environ):
        if key.startswith("IGNOREMATCH_"):
            monkeypatch.delenv(key)

    set_global_config(None)
    reset_loggers()
    yield
    set_global_config(None)
    reset_loggers()
