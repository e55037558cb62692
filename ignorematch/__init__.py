"""ignorematch - compile gitignore-style pattern lines into path predicates.

Example:
    >>> from ignorematch import compile_rule
    >>> rule = compile_rule("*.log")
    >>> rule.matches("debug.log")
    True
"""

from ignorematch.core.constants import IGNOREMATCH_VERSION, Token
from ignorematch.rules import Cursor, Rule, RuleCompiler, compile_rule

__version__ = IGNOREMATCH_VERSION

__all__ = [
    "Cursor",
    "Rule",
    "RuleCompiler",
    "Token",
    "compile_rule",
    "__version__",
]
