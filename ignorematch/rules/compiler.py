#!/usr/bin/env python3
"""Compiler from pattern text to a composite matcher.

The compiler walks the pattern left to right and classifies the token at
the cursor. Ordinary tokens build an elementary matcher that is appended
to the current run of steps. ``*`` and ``/**/`` build a splitter instead
and open a new run: everything after the wildcard, up to the next one,
is the suffix tried at each split point.

The runs are matched by :func:`search`, which keeps the untried split
points of every wildcard on an explicit stack. Neither compilation nor
matching recurses per token, so pattern length is not limited by the
interpreter's recursion limit, and path length never adds depth either.

Matching cost is not linear: every ``*`` or ``/**/`` retries its suffix
at each later input position, so patterns with several of them can take
quadratic or worse time in the path length.

Example:
    >>> matcher, _ = create_matcher(Cursor("src/*.py"))
    >>> matcher(Cursor("src/main.py"))[0]
    True
"""

from typing import Callable, Dict, Iterator, List, Sequence, Tuple

from ignorematch.core.constants import (
    ANY_SEGMENT,
    CHAR_CHOICE_START,
    CHAR_NEGATE,
    CHAR_OPTION,
    CHAR_SEP,
    CHAR_WILDCARD,
    MANY_SEGMENTS,
    Token,
)
from ignorematch.rules.cursor import Cursor
from ignorematch.rules.matchers import (
    BuildResult,
    Matcher,
    SplitResult,
    Splitter,
    end_of_input_matcher,
    positive_matcher,
    try_any_segment,
    try_choice,
    try_literal,
    try_many_segments,
    try_option,
    try_separator,
    try_star,
)

Branch = Tuple[Splitter, Matcher]


def chain(first: Matcher, *rest: Matcher) -> Matcher:
    """Combine matchers into one that requires all of them, in sequence.

    If ``first`` fails, its result is returned as is. If a later matcher
    fails after earlier ones consumed input, the combined matcher reports
    failure with the cursor it was given, so an enclosing scan can retry
    from a different split point.
    """
    assert first is not None, "chain: first matcher is missing"
    assert all(m is not None for m in rest), "chain: matcher is missing"

    def match_all(cursor: Cursor) -> Tuple[bool, Cursor]:
        checkpoint = cursor
        ok, cursor = first(cursor)
        if not ok:
            return False, cursor

        for matcher in rest:
            ok, cursor = matcher(cursor)
            if not ok:
                return False, checkpoint
        return True, cursor

    return match_all


def search(head: Matcher, branches: Sequence[Branch]) -> Matcher:
    """Match ``head`` and then each wildcard branch in turn.

    A branch pairs a wildcard's splitter with the steps that follow the
    wildcard. For every branch, split points are tried in the order the
    splitter yields them; when a later branch runs out of split points the
    search resumes the previous branch at its next split point. This is
    the same depth-first order as retrying each suffix recursively, kept
    on an explicit stack.

    Args:
        head: Steps before the first wildcard
        branches: One ``(splitter, steps)`` pair per wildcard, in pattern order

    Returns:
        Matcher that succeeds with the cursor of the first complete match
    """

    def match_search(cursor: Cursor) -> Tuple[bool, Cursor]:
        checkpoint = cursor
        ok, rest = head(cursor)
        if not ok:
            return False, checkpoint
        if not branches:
            return True, rest

        pending: List[Iterator[Cursor]] = [branches[0][0](rest)]
        while pending:
            split = next(pending[-1], None)
            if split is None:
                pending.pop()
                continue

            depth = len(pending) - 1
            ok, rest = branches[depth][1](split)
            if not ok:
                continue
            if depth + 1 == len(branches):
                return True, rest
            pending.append(branches[depth + 1][0](rest))

        return False, checkpoint

    return match_search


def classify(pattern: Cursor) -> Token:
    """Return the kind of token starting at the pattern cursor."""
    char, _ = pattern.current()

    if char == CHAR_NEGATE and pattern.position == 0:
        return Token.NEGATE
    if char == CHAR_SEP:
        if pattern.startswith(MANY_SEGMENTS):
            return Token.MANY_SEGMENTS
        if pattern.startswith(ANY_SEGMENT):
            return Token.ANY_SEGMENT
        return Token.SEPARATOR
    if char == CHAR_WILDCARD:
        return Token.STAR
    if char == CHAR_CHOICE_START:
        return Token.CHOICE
    if char == CHAR_OPTION:
        return Token.OPTION
    return Token.LITERAL


BUILDERS: Dict[Token, Callable[[Cursor], BuildResult]] = {
    Token.LITERAL: try_literal,
    Token.ANY_SEGMENT: try_any_segment,
    Token.CHOICE: try_choice,
    Token.OPTION: try_option,
    Token.SEPARATOR: try_separator,
}

# Wildcards that retry the rest of the pattern
SPLITTERS: Dict[Token, Callable[[Cursor], SplitResult]] = {
    Token.STAR: try_star,
    Token.MANY_SEGMENTS: try_many_segments,
}


def create_matcher(pattern: Cursor) -> Tuple[Matcher, Cursor]:
    """Compile the pattern from the cursor onwards.

    Args:
        pattern: Cursor over the pattern text

    Returns:
        Tuple of the composite matcher and the exhausted pattern cursor.
        The matcher only succeeds when it consumes the whole input.
    """
    splitters: List[Splitter] = []
    runs: List[List[Matcher]] = [[positive_matcher]]

    while not pattern.at_end():
        token = classify(pattern)

        if token is Token.NEGATE:
            pattern = pattern.advance()
            continue

        if token in SPLITTERS:
            splitter, pattern = SPLITTERS[token](pattern)
            splitters.append(splitter)
            runs.append([positive_matcher])
            continue

        built = BUILDERS[token](pattern)
        if built is None:
            # Unterminated class: treat "[" as ordinary text
            built = try_literal(pattern)

        step, pattern = built
        runs[-1].append(step)

    runs[-1].append(end_of_input_matcher)

    head = chain(*runs[0])
    if not splitters:
        return head, pattern

    branches = [(splitter, chain(*steps)) for splitter, steps in zip(splitters, runs[1:])]
    return search(head, branches), pattern
