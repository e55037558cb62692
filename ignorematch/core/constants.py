"""
ignorematch Core: Constants and Type Definitions

This module provides the marker characters of the ignore-file syntax,
the token kinds the compiler dispatches on, error codes and defaults.
"""
from enum import Enum, IntEnum

# Version information
IGNOREMATCH_VERSION = "1.0.0"


# Error codes (0-9 range)
class ErrorCode(IntEnum):
    """Standardized error codes for ignorematch operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Bad configuration value or file
    NOT_FOUND = 2  # Config file doesn't exist
    PERMISSION_DENIED = 3  # Config file not readable
    INTERNAL_ERROR = 6  # Bug in ignorematch


# Marker characters of the pattern syntax
CHAR_SEP = "/"
CHAR_SPACE = " "
CHAR_WILDCARD = "*"
CHAR_OPTION = "?"
CHAR_CHOICE_START = "["
CHAR_CHOICE_END = "]"
CHAR_NEGATE = "!"

# Returned by a cursor positioned at or past the end of its text
NO_CHAR = ""

# A literal run stops in front of any of these
LITERAL_DELIMITERS = frozenset((CHAR_WILDCARD, CHAR_SEP, CHAR_CHOICE_START, CHAR_OPTION))

# Multi-character tokens introduced by a separator
MANY_SEGMENTS = "/**/"
ANY_SEGMENT = "/*/"


class Token(Enum):
    """Token kinds recognised at the start of a pattern fragment."""

    LITERAL = "literal"
    STAR = "star"  # *
    MANY_SEGMENTS = "many_segments"  # /**/
    ANY_SEGMENT = "any_segment"  # /*/
    CHOICE = "choice"  # [...]
    OPTION = "option"  # ?
    SEPARATOR = "separator"  # /
    NEGATE = "negate"  # leading !


# Configuration keys
class ConfigKey:
    """Configuration file keys."""

    ROOT = "ignorematch"
    LOGGING = "logging"
    LOG_LEVEL = "level"
    LOG_FILE = "file"
    CACHE = "cache"
    CACHE_ENABLED = "enabled"
    CACHE_MAX_ENTRIES = "max_entries"


class Defaults:
    """Default values used when nothing is configured."""

    LOG_LEVEL = "WARNING"
    CACHE_ENABLED = True
    CACHE_MAX_ENTRIES = 1024
    ENV_PREFIX = "IGNOREMATCH_"
    ENV_NESTING = "__"


VALID_LOG_LEVELS = frozenset(("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"))
