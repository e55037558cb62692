#!/usr/bin/env python3
"""Elementary matchers for the tokens of an ignore-file pattern.

Every ``try_*`` constructor looks at a pattern cursor. When the pattern
starts with the token it handles, it returns a runtime matcher for that
token together with the pattern cursor moved past it; otherwise it
returns ``None`` and the caller keeps its own pattern cursor.

The wildcards ``*`` and ``/**/`` do not build a matcher. They build a
splitter: a function yielding, in order, the input cursors at which the
rest of the pattern may be tried. The compiler drives the retries.

A runtime matcher takes an input cursor and returns ``(matched, cursor)``.
On success the returned cursor sits after the consumed input. On failure
the returned cursor is not meaningful: ``chain`` in
:mod:`ignorematch.rules.compiler` hands its own checkpoint back instead.

Matchers close over immutable data only and can be shared between threads.
"""

from typing import Callable, FrozenSet, Iterator, List, Optional, Tuple

from ignorematch.core.constants import (
    ANY_SEGMENT,
    CHAR_CHOICE_END,
    CHAR_CHOICE_START,
    CHAR_OPTION,
    CHAR_SEP,
    CHAR_SPACE,
    CHAR_WILDCARD,
    LITERAL_DELIMITERS,
    MANY_SEGMENTS,
)
from ignorematch.rules.cursor import Cursor

Matcher = Callable[[Cursor], Tuple[bool, Cursor]]
BuildResult = Optional[Tuple[Matcher, Cursor]]
Splitter = Callable[[Cursor], Iterator[Cursor]]
SplitResult = Optional[Tuple[Splitter, Cursor]]


def match_sequence(literal: str, cursor: Cursor) -> Tuple[bool, Cursor]:
    """Consume ``literal`` from ``cursor`` character by character.

    Returns the original cursor on the first mismatch or premature end.
    """
    rest = cursor
    for expected in literal:
        char, at_end = rest.current()
        if at_end or char != expected:
            return False, cursor
        rest = rest.advance()
    return True, rest


def positive_matcher(cursor: Cursor) -> Tuple[bool, Cursor]:
    """Succeed without consuming anything."""
    return True, cursor


def negative_matcher(cursor: Cursor) -> Tuple[bool, Cursor]:
    """Fail without consuming anything."""
    return False, cursor


def end_of_input_matcher(cursor: Cursor) -> Tuple[bool, Cursor]:
    """Succeed only when the input is used up.

    A single trailing separator is allowed, so ``build`` also matches
    ``build/``.
    """
    char, at_end = cursor.current()
    if char == CHAR_SEP:
        cursor = cursor.advance()
        at_end = cursor.at_end()
    return at_end, cursor


def try_literal(pattern: Cursor) -> BuildResult:
    """Build a matcher for the literal run at the start of ``pattern``.

    The run always takes its first character, whatever it is, and then
    extends up to the next ``*``, ``/``, ``[`` or ``?``.
    """
    start = pattern.position
    rest = pattern.advance()
    while not rest.at_end() and rest.current()[0] not in LITERAL_DELIMITERS:
        rest = rest.advance()
    literal = pattern.text[start:rest.position]

    def match_literal(cursor: Cursor) -> Tuple[bool, Cursor]:
        return match_sequence(literal, cursor)

    return match_literal, rest


def try_star(pattern: Cursor) -> SplitResult:
    """Recognise ``*``: zero or more non-separator characters.

    The returned splitter yields the input positions where the rest of
    the pattern may start: the current position first, then after each
    further non-separator character, stopping at a separator or the end
    of the input. Trying them in order makes the star take the shortest
    run that lets the rest succeed.
    """
    ok, rest = match_sequence(CHAR_WILDCARD, pattern)
    if not ok:
        return None

    def star_splits(cursor: Cursor) -> Iterator[Cursor]:
        while True:
            yield cursor

            char, at_end = cursor.current()
            if at_end or char == CHAR_SEP:
                return
            cursor = cursor.advance()

    return star_splits, rest


def try_any_segment(pattern: Cursor) -> BuildResult:
    """Build a matcher for ``/*/``: exactly one path segment.

    At runtime a leading separator is required. The matcher then consumes
    up to and including the next separator, or to the end of the input
    when the segment is the last one.
    """
    ok, rest = match_sequence(ANY_SEGMENT, pattern)
    if not ok:
        return None

    def match_any_segment(cursor: Cursor) -> Tuple[bool, Cursor]:
        char, _ = cursor.current()
        if char != CHAR_SEP:
            return False, cursor

        cursor = cursor.advance()
        while not cursor.at_end():
            char, _ = cursor.current()
            cursor = cursor.advance()
            if char == CHAR_SEP:
                break

        return True, cursor

    return match_any_segment, rest


def try_many_segments(pattern: Cursor) -> SplitResult:
    """Recognise ``/**/``: a separator followed by any number of segments.

    The returned splitter yields nothing unless the input starts with a
    separator. Otherwise it consumes that separator and yields every
    following position, separators included, up to the end of the input.
    """
    ok, rest = match_sequence(MANY_SEGMENTS, pattern)
    if not ok:
        return None

    def many_segment_splits(cursor: Cursor) -> Iterator[Cursor]:
        char, _ = cursor.current()
        if char != CHAR_SEP:
            return

        cursor = cursor.advance()
        while True:
            yield cursor

            if cursor.at_end():
                return
            cursor = cursor.advance()

    return many_segment_splits, rest


def try_choice(pattern: Cursor) -> BuildResult:
    """Build a matcher for a ``[...]`` character class.

    Members are taken literally; ranges are not supported. Without a
    closing ``]`` no class is recognised and ``None`` is returned.
    """
    char, _ = pattern.current()
    if char != CHAR_CHOICE_START:
        return None

    members: List[str] = []
    rest = pattern
    while True:
        rest = rest.advance()
        char, at_end = rest.current()
        if at_end:
            return None
        if char == CHAR_CHOICE_END:
            rest = rest.advance()
            break
        members.append(char)

    choices: FrozenSet[str] = frozenset(members)

    def match_choice(cursor: Cursor) -> Tuple[bool, Cursor]:
        char, at_end = cursor.current()
        if not at_end and char in choices:
            return True, cursor.advance()
        return False, cursor

    return match_choice, rest


def try_option(pattern: Cursor) -> BuildResult:
    """Build a matcher for ``?``: any single character."""
    char, _ = pattern.current()
    if char != CHAR_OPTION:
        return None

    def match_option(cursor: Cursor) -> Tuple[bool, Cursor]:
        if cursor.at_end():
            return False, cursor
        return True, cursor.advance()

    return match_option, pattern.advance()


def try_separator(pattern: Cursor) -> BuildResult:
    """Build a matcher for a single ``/``.

    Spaces that follow a separator at the very end of the pattern are
    skipped. A trailing separator is also satisfied by the end of the
    input, so ``build/`` matches ``build``.
    """
    char, _ = pattern.current()
    if char != CHAR_SEP:
        return None

    rest = pattern.advance()
    lookahead = rest
    while lookahead.current()[0] == CHAR_SPACE:
        lookahead = lookahead.advance()

    trailing = lookahead.at_end()
    if trailing:
        rest = lookahead

    def match_separator(cursor: Cursor) -> Tuple[bool, Cursor]:
        char, at_end = cursor.current()
        if char == CHAR_SEP:
            return True, cursor.advance()
        return at_end and trailing, cursor

    return match_separator, rest


def try_blank(pattern: Cursor) -> BuildResult:
    """Recognise an empty or space-only line, which matches nothing."""
    if pattern.remaining().strip(CHAR_SPACE):
        return None
    return negative_matcher, pattern
