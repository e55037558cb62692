#!/usr/bin/env python3
"""Structured logging for ignorematch.

This module wraps the standard ``logging`` module with:
- Log levels mirroring the standard ones
- Structured key=value context appended to messages
- Thread-local context stacks
- Optional rotating file output

Example:
    >>> logger = Logger("ignorematch.rules", level=LogLevel.DEBUG)
    >>> logger.debug("Compiled rule", pattern="*.log", is_dir=False)
    >>> with logger.add_context(source=".gitignore"):
    ...     logger.info("Compiling rules")
"""

import logging
import logging.handlers
import threading
from contextlib import contextmanager
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ignorematch.core.constants import Defaults

ROOT_LOGGER_NAME = "ignorematch"


class LogLevel(IntEnum):
    """Log levels matching Python's logging module."""

    DEBUG = logging.DEBUG  # 10
    INFO = logging.INFO  # 20
    WARNING = logging.WARNING  # 30
    ERROR = logging.ERROR  # 40
    CRITICAL = logging.CRITICAL  # 50


class Logger:
    """Structured logger with context support.

    Context given to a call, or pushed with :meth:`add_context`, is
    rendered as ``message | key=value ...`` and also attached to the
    record as ``record.context``.
    """

    _context_stack = threading.local()

    def __init__(
        self,
        name: str = ROOT_LOGGER_NAME,
        level: Union[LogLevel, str] = Defaults.LOG_LEVEL,
        handlers: Optional[List[logging.Handler]] = None,
    ):
        """Initialize logger.

        Args:
            name: Logger name, normally under the ``ignorematch`` namespace
            level: Minimum log level to output
            handlers: Handlers replacing the default console handler
        """
        self.name = name
        self.logger = logging.getLogger(name)
        self.set_level(level)

        if handlers is None:
            handlers = [self._create_console_handler()]

        self.logger.handlers.clear()
        for handler in handlers:
            self.logger.addHandler(handler)

        self.logger.propagate = False

    def _create_console_handler(self) -> logging.StreamHandler:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        return handler

    def create_file_handler(
        self,
        filename: Union[str, Path],
        max_bytes: int = 1024 * 1024,
        backup_count: int = 3,
    ) -> logging.handlers.RotatingFileHandler:
        """Create a rotating file handler.

        Args:
            filename: Path to log file
            max_bytes: Maximum size before rotation
            backup_count: Number of rotated files to keep

        Returns:
            Handler whose records include the structured context
        """
        handler = logging.handlers.RotatingFileHandler(
            filename, maxBytes=max_bytes, backupCount=backup_count
        )
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s - %(context)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        return handler

    def add_handler(self, handler: logging.Handler) -> None:
        self.logger.addHandler(handler)

    def remove_handler(self, handler: logging.Handler) -> None:
        self.logger.removeHandler(handler)

    def clear_file_handlers(self) -> None:
        """Detach and close every file handler."""
        for handler in list(self.logger.handlers):
            if isinstance(handler, logging.FileHandler):
                self.logger.removeHandler(handler)
                handler.close()

    def set_level(self, level: Union[LogLevel, str]) -> None:
        """Set the minimum log level (LogLevel or case-insensitive name)."""
        if isinstance(level, str):
            level = LogLevel[level.upper()]
        self.logger.setLevel(level)

    def get_level(self) -> LogLevel:
        return LogLevel(self.logger.level)

    def is_enabled_for(self, level: Union[LogLevel, str]) -> bool:
        if isinstance(level, str):
            level = LogLevel[level.upper()]
        return self.logger.isEnabledFor(level)

    def _get_context(self) -> Dict[str, Any]:
        if not hasattr(self._context_stack, "stack"):
            self._context_stack.stack = [{}]

        context: Dict[str, Any] = {}
        for ctx in self._context_stack.stack:
            context.update(ctx)
        return context

    def _format_message(self, msg: str, context: Dict[str, Any]) -> str:
        if context:
            ctx_str = " ".join(f"{k}={v!r}" for k, v in context.items())
            return f"{msg} | {ctx_str}"
        return msg

    @contextmanager
    def add_context(self, **kwargs):
        """Push context for the duration of a ``with`` block."""
        if not hasattr(self._context_stack, "stack"):
            self._context_stack.stack = [{}]

        self._context_stack.stack.append(kwargs)
        try:
            yield
        finally:
            self._context_stack.stack.pop()

    def _log(self, level: LogLevel, msg: str, context: Dict[str, Any]) -> None:
        if not self.logger.isEnabledFor(level):
            return
        combined = self._get_context()
        combined.update(context)
        self.logger.log(level, self._format_message(msg, combined), extra={"context": combined})

    def debug(self, msg: str, **context) -> None:
        self._log(LogLevel.DEBUG, msg, context)

    def info(self, msg: str, **context) -> None:
        self._log(LogLevel.INFO, msg, context)

    def warning(self, msg: str, **context) -> None:
        self._log(LogLevel.WARNING, msg, context)

    def error(self, msg: str, **context) -> None:
        self._log(LogLevel.ERROR, msg, context)

    def exception(self, msg: str, exc: Exception, **context) -> None:
        """Log an exception with its traceback.

        Args:
            msg: Log message
            exc: Exception to log
            **context: Additional context key-value pairs
        """
        combined = self._get_context()
        combined.update(context)
        combined["exception_type"] = type(exc).__name__
        combined["exception_message"] = str(exc)
        self.logger.error(
            self._format_message(msg, combined), exc_info=exc, extra={"context": combined}
        )


_loggers: Dict[str, Logger] = {}
_loggers_lock = threading.Lock()


def get_logger(name: str = ROOT_LOGGER_NAME) -> Logger:
    """Get or create the shared logger for ``name``."""
    with _loggers_lock:
        logger = _loggers.get(name)
        if logger is None:
            logger = Logger(name=name)
            _loggers[name] = logger
        return logger


def set_global_logger(logger: Logger) -> None:
    """Register ``logger`` as the shared instance for its name."""
    with _loggers_lock:
        _loggers[logger.name] = logger


def reset_loggers() -> None:
    """Forget all shared loggers."""
    with _loggers_lock:
        _loggers.clear()
