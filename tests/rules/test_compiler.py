#!/usr/bin/env python3
"""Tests for chain(), token classification and create_matcher()."""

import pytest

from ignorematch.core.constants import Token
from ignorematch.rules.compiler import BUILDERS, SPLITTERS, chain, classify, create_matcher, search
from ignorematch.rules.cursor import Cursor
from ignorematch.rules.matchers import negative_matcher, positive_matcher, try_literal, try_star


def literal(text):
    """Matcher for a plain literal."""
    matcher, _ = try_literal(Cursor(text))
    return matcher


class TestChain:
    """Tests for sequential composition."""

    def test_both_succeed(self):
        """The result continues from the second matcher's cursor."""
        ok, rest = chain(literal("ab"), literal("c"))(Cursor("abcd"))
        assert ok
        assert rest.position == 3

    def test_second_failure_rolls_back(self):
        """A failure after partial progress returns the checkpoint."""
        cursor = Cursor("abd")
        assert chain(literal("ab"), literal("c"))(cursor) == (False, cursor)

    def test_first_failure(self):
        """A failing first matcher fails the chain."""
        ok, _ = chain(literal("x"), literal("c"))(Cursor("abc"))
        assert not ok

    def test_identity(self):
        """The positive matcher is an identity for chain."""
        cursor = Cursor("ab")
        assert chain(positive_matcher, literal("ab"))(cursor) == literal("ab")(cursor)

    def test_negative_absorbs(self):
        """A negative component makes the chain fail."""
        assert not chain(positive_matcher, negative_matcher)(Cursor(""))[0]

    def test_nested_rollback(self):
        """Rollback is observed through several levels of chaining."""
        cursor = Cursor("abcx")
        matcher = chain(chain(literal("a"), literal("b")), chain(literal("c"), literal("d")))
        assert matcher(cursor) == (False, cursor)

    def test_many_steps(self):
        """Any number of matchers can be chained without nesting."""
        steps = [literal("a")] * 5000
        ok, rest = chain(positive_matcher, *steps)(Cursor("a" * 5000))
        assert ok
        assert rest.at_end()

    def test_late_failure_rolls_back(self):
        """A failure deep in a long chain returns the checkpoint."""
        cursor = Cursor("a" * 4999 + "b")
        assert chain(positive_matcher, *[literal("a")] * 5000)(cursor) == (False, cursor)

    @pytest.mark.parametrize(("first", "second"), [(None, positive_matcher), (positive_matcher, None)])
    def test_missing_component(self, first, second):
        """Chaining a missing matcher is an internal error."""
        with pytest.raises(AssertionError):
            chain(first, second)


class TestClassify:
    """Tests for token classification."""

    @pytest.mark.parametrize(
        ("pattern", "position", "token"),
        [
            ("!a", 0, Token.NEGATE),
            ("a!b", 1, Token.LITERAL),
            ("/**/b", 0, Token.MANY_SEGMENTS),
            ("/*/b", 0, Token.ANY_SEGMENT),
            ("/*b", 0, Token.SEPARATOR),
            ("/b", 0, Token.SEPARATOR),
            ("*b", 0, Token.STAR),
            ("[ab]", 0, Token.CHOICE),
            ("?", 0, Token.OPTION),
            ("]", 0, Token.LITERAL),
            ("a", 0, Token.LITERAL),
        ],
    )
    def test_classify(self, pattern, position, token):
        """Each marker maps to its token kind."""
        assert classify(Cursor(pattern, position)) is token

    def test_dispatch_is_exhaustive(self):
        """Every token except NEGATE has exactly one builder or splitter."""
        assert not set(BUILDERS) & set(SPLITTERS)
        assert set(BUILDERS) | set(SPLITTERS) == set(Token) - {Token.NEGATE}
        assert set(SPLITTERS) == {Token.STAR, Token.MANY_SEGMENTS}


class TestCreateMatcher:
    """Tests for create_matcher()."""

    def test_pattern_is_exhausted(self):
        """Compilation reads the whole pattern."""
        _, rest = create_matcher(Cursor("src/*.py"))
        assert rest.at_end()

    def test_whole_input_required(self):
        """A prefix match is not a match."""
        matcher, _ = create_matcher(Cursor("abc"))
        assert matcher(Cursor("abc"))[0]
        assert not matcher(Cursor("abcd"))[0]

    def test_leading_negation_is_skipped(self):
        """A leading ! contributes no matcher."""
        matcher, _ = create_matcher(Cursor("!abc"))
        assert matcher(Cursor("abc"))[0]
        assert not matcher(Cursor("!abc"))[0]

    def test_star_retries_after_partial_suffix_match(self):
        """The star scan retries once the suffix fails further along."""
        matcher, _ = create_matcher(Cursor("a*b"))
        assert matcher(Cursor("abab"))[0]
        assert not matcher(Cursor("abba"))[0]

    def test_success_consumes_input(self):
        """On success the returned cursor is at the end of the input."""
        matcher, _ = create_matcher(Cursor("a/**/c"))
        ok, rest = matcher(Cursor("a/b/c"))
        assert ok
        assert rest.at_end()

    def test_long_pattern(self):
        """Patterns of thousands of tokens compile and match."""
        line = "a/" * 5000 + "b"
        matcher, _ = create_matcher(Cursor(line))
        assert matcher(Cursor(line))[0]
        assert not matcher(Cursor("a/" * 5000 + "c"))[0]

    def test_many_stars(self):
        """Thousands of wildcards compile and match."""
        matcher, _ = create_matcher(Cursor("*a" * 2000))
        assert matcher(Cursor("a" * 2000))[0]
        assert matcher(Cursor("xa" * 2000))[0]
        assert not matcher(Cursor("b"))[0]

    def test_many_segment_wildcards(self):
        """Thousands of /**/ tokens compile and match."""
        matcher, _ = create_matcher(Cursor("x" + "/**/x" * 2000))
        assert matcher(Cursor("x" + "/x" * 2000))[0]
        assert matcher(Cursor("x" + "/y/x" * 2000))[0]


class TestSearch:
    """Tests for backtracking over wildcard split points."""

    def test_head_only(self):
        """Without branches the head decides."""
        cursor = Cursor("ab")
        assert search(literal("ab"), [])(cursor) == literal("ab")(cursor)

    def test_head_failure_restores_cursor(self):
        """A failing head returns the starting cursor."""
        splits, _ = try_star(Cursor("*"))
        cursor = Cursor("xb")
        assert search(literal("a"), [(splits, literal("b"))])(cursor) == (False, cursor)

    def test_backtracks_into_earlier_branch(self):
        """A dead end in a later branch resumes the earlier one."""
        star, _ = try_star(Cursor("*"))
        matcher = search(
            positive_matcher,
            [(star, literal("a")), (star, chain(literal("b"), negative_matcher)), (star, literal("c"))],
        )
        assert not matcher(Cursor("aabc"))[0]

        matcher, _ = create_matcher(Cursor("*a*b"))
        assert matcher(Cursor("xaxab"))[0]
        assert not matcher(Cursor("xaxa"))[0]

    def test_shortest_split_first(self):
        """The first split point that completes the match wins."""
        star, _ = try_star(Cursor("*"))
        ok, rest = search(positive_matcher, [(star, literal("a"))])(Cursor("aaa"))
        assert ok
        assert rest.position == 1
