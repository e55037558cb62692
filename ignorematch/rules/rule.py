#!/usr/bin/env python3
"""Compile one ignore-file line into a rule.

This module provides the public entry points:
- ``compile_rule``: pure compilation of a single line
- ``Rule``: immutable compiled rule with its directory and negation flags
- ``RuleCompiler``: configured service adding a compiled-rule cache and logging

The caller strips comments and line terminators, applies rules in file
order and normalizes path separators to ``/``.

Example:
    >>> rule = compile_rule("build/")
    >>> rule.is_dir, rule.matches("build")
    (True, True)
"""

from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

from ignorematch.core.constants import CHAR_NEGATE, CHAR_SEP, ConfigKey, Defaults
from ignorematch.infrastructure.cache_manager import CacheConfig, LRUCache
from ignorematch.infrastructure.config_manager import ConfigManager, get_config_manager
from ignorematch.infrastructure.logger import Logger, get_logger
from ignorematch.rules.compiler import create_matcher
from ignorematch.rules.cursor import Cursor
from ignorematch.rules.matchers import try_blank


@dataclass(frozen=True)
class Rule:
    """A compiled ignore-file line.

    Attributes:
        pattern: The line exactly as given
        predicate: Function deciding whether a relative path matches
        is_dir: The line ends with a separator (directory-only rule)
        is_negate: The line starts with ``!`` (re-inclusion rule)
    """

    pattern: str
    predicate: Callable[[str], bool] = field(repr=False, compare=False)
    is_dir: bool = False
    is_negate: bool = False

    def matches(self, path: str) -> bool:
        """Check whether the whole of ``path`` matches the pattern."""
        return self.predicate(path)


def compile_rule(line: str) -> Rule:
    """Compile a single ignore-file line.

    Never raises: malformed fragments degrade to literal text and blank
    lines produce a rule that matches nothing.

    Args:
        line: One line of ignore-file syntax without its line terminator

    Returns:
        Compiled rule
    """
    cursor = Cursor(line)

    built = try_blank(cursor)
    if built is None:
        built = create_matcher(cursor)
    matcher, _ = built

    last, _ = cursor.last()
    first, _ = cursor.first()

    def predicate(path: str) -> bool:
        matched, _ = matcher(Cursor(path))
        return matched

    return Rule(
        pattern=line,
        predicate=predicate,
        is_dir=last == CHAR_SEP,
        is_negate=first == CHAR_NEGATE,
    )


class RuleCompiler:
    """Compile lines into rules, reusing earlier results.

    Identical lines always compile to identical rules, so compiled rules
    are kept in an LRU cache keyed by line text.
    """

    def __init__(self, config: Optional[ConfigManager] = None, logger: Optional[Logger] = None):
        """Initialize the compiler.

        Args:
            config: Configuration (global manager if None)
            logger: Logger (shared ``ignorematch.rules`` logger if None)
        """
        self._config = config or get_config_manager()
        self._logger = logger or get_logger("ignorematch.rules")

        cache_section = f"{ConfigKey.ROOT}.{ConfigKey.CACHE}"
        self._cache = LRUCache(
            CacheConfig(
                max_entries=self._config.get(
                    f"{cache_section}.{ConfigKey.CACHE_MAX_ENTRIES}", Defaults.CACHE_MAX_ENTRIES
                ),
                enabled=self._config.get(
                    f"{cache_section}.{ConfigKey.CACHE_ENABLED}", Defaults.CACHE_ENABLED
                ),
            )
        )

    def compile(self, line: str) -> Rule:
        """Compile one line, returning the cached rule when available."""
        rule = self._cache.get(line)
        if rule is not None:
            self._logger.debug("Rule cache hit", pattern=line)
            return rule

        rule = compile_rule(line)
        self._cache.set(line, rule)
        self._logger.debug(
            "Compiled rule",
            pattern=line,
            is_dir=rule.is_dir,
            is_negate=rule.is_negate,
            blank=try_blank(Cursor(line)) is not None,
        )
        return rule

    def compile_many(self, lines: Iterable[str]) -> List[Rule]:
        """Compile lines in order, one rule per line."""
        return [self.compile(line) for line in lines]

    def get_stats(self):
        """Get compiled-rule cache statistics."""
        return self._cache.get_stats()

    def clear(self) -> None:
        """Drop all cached rules."""
        self._cache.clear()
