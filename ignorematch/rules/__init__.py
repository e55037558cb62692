"""ignorematch Rules System.

This module provides the pattern compiler and its matcher engine:
- Cursor: immutable position in a character sequence (the backtrack checkpoint)
- matchers: one constructor per pattern token
- compiler: sequential composition, wildcard backtracking and the token compiler
- Rule / compile_rule / RuleCompiler: the public entry points
"""

from .compiler import chain, classify, create_matcher, search
from .cursor import Cursor
from .matchers import Matcher, Splitter
from .rule import Rule, RuleCompiler, compile_rule

__all__ = [
    # Engine
    "Cursor",
    "Matcher",
    "Splitter",
    "chain",
    "classify",
    "create_matcher",
    "search",
    # Rules
    "Rule",
    "RuleCompiler",
    "compile_rule",
]
