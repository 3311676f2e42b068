"""Tests for :class:`dojodoc.syntax.base.TokenStream`."""

from __future__ import annotations

from dojodoc.syntax import Token, TokenKind, TokenStream

TEXT = "a /*x*/ b c"


def _stream() -> TokenStream:
    return TokenStream(
        TEXT,
        [
            Token(TokenKind.CODE, "c", 10, 11),
            Token(TokenKind.CODE, "a", 0, 1),
            Token(TokenKind.BLOCK_COMMENT, "x", 2, 7),
            Token(TokenKind.CODE, "b", 8, 9),
        ],
    )


def test_tokens_are_sorted_by_start() -> None:
    assert [token.value for token in _stream().tokens] == ["a", "x", "b", "c"]


def test_tokens_in_range_returns_enclosed_tokens_in_order() -> None:
    stream = _stream()

    assert [t.value for t in stream.tokens_in_range((2, 9))] == ["x", "b"]
    assert [t.value for t in stream.tokens_in_range((0, 11))] == ["a", "x", "b", "c"]
    assert stream.tokens_in_range((3, 6)) == []


def test_reverse_returns_preceding_tokens_nearest_first() -> None:
    stream = _stream()

    assert [t.value for t in stream.tokens_in_range((8, 9), reverse=True)] == ["x", "a"]
    assert stream.tokens_in_range((0, 1), reverse=True) == []


def test_source_for_range_slices_text() -> None:
    assert _stream().source_for_range((2, 7)) == "/*x*/"
