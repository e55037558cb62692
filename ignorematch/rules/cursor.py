#!/usr/bin/env python3
"""Immutable read cursor over a character sequence.

A cursor is the backtracking primitive of the matcher engine. It pairs a
shared, read-only text with a position. Moving a cursor returns a new
cursor, so keeping a reference to an old one is a checkpoint that can be
restored at no cost.

Example:
    >>> cursor = Cursor("ab")
    >>> cursor.current()
    ('a', False)
    >>> cursor.advance().advance().current()
    ('', True)
"""

from dataclasses import dataclass
from typing import Tuple

from ignorematch.core.constants import NO_CHAR


@dataclass(frozen=True)
class Cursor:
    """Position inside an immutable text."""

    text: str
    position: int = 0

    def current(self) -> Tuple[str, bool]:
        """Return the character at the position and whether the end is reached.

        At or past the end the character is ``NO_CHAR``.
        """
        if self.position >= len(self.text):
            return NO_CHAR, True
        return self.text[self.position], False

    def advance(self) -> "Cursor":
        """Return a cursor one character further along.

        Advancing a cursor that is already at the end returns it unchanged.
        """
        if self.position >= len(self.text):
            return self
        return Cursor(self.text, self.position + 1)

    def at_end(self) -> bool:
        """Check whether no characters remain."""
        return self.position >= len(self.text)

    def first(self) -> Tuple[str, bool]:
        """Peek at the first character of the whole text."""
        if not self.text:
            return NO_CHAR, True
        return self.text[0], False

    def last(self) -> Tuple[str, bool]:
        """Peek at the last character of the whole text."""
        if not self.text:
            return NO_CHAR, True
        return self.text[-1], False

    def remaining(self) -> str:
        """Return the unread part of the text."""
        return self.text[self.position:]

    def startswith(self, prefix: str) -> bool:
        """Check whether the unread text begins with ``prefix``."""
        return self.text.startswith(prefix, self.position)
