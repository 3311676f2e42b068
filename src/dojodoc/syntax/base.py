"""Interfaces between the metadata processor and a syntax backend."""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from enum import StrEnum
from typing import Iterable, Protocol, Sequence

from dojodoc.model import DocumentedValue

__all__ = [
    "BoundNode",
    "NodeKind",
    "SourceIndex",
    "SourceRange",
    "SyntaxNode",
    "Token",
    "TokenKind",
    "TokenStream",
]

SourceRange = tuple[int, int]


class NodeKind(StrEnum):
    """Syntax node categories the processor dispatches on."""

    IDENTIFIER = "identifier"
    FUNCTION = "function"
    RETURN = "return"
    OBJECT = "object"
    PROPERTY = "property"
    OTHER = "other"


class TokenKind(StrEnum):
    """Token categories; only comments matter to the processor."""

    BLOCK_COMMENT = "block_comment"
    LINE_BLOCK_COMMENT = "line_block_comment"
    LINE_COMMENT = "line_comment"
    CODE = "code"


@dataclass(frozen=True, slots=True)
class Token:
    """A lexical token; comment values exclude their delimiters."""

    kind: TokenKind
    value: str
    start: int
    end: int


class SyntaxNode(Protocol):
    """A syntax tree node with character offsets into the source."""

    @property
    def kind(self) -> NodeKind: ...

    @property
    def range(self) -> SourceRange: ...

    @property
    def body_range(self) -> SourceRange | None:
        """Range of a function body, braces included."""

    @property
    def key_name(self) -> str | None:
        """Key of an object property."""


class SourceIndex(Protocol):
    """Token and text queries over one source file."""

    def tokens_in_range(
        self,
        range: SourceRange,
        *,
        reverse: bool = False,
    ) -> Sequence[Token]: ...

    def source_for_range(self, range: SourceRange) -> str: ...


@dataclass(frozen=True, slots=True)
class BoundNode:
    """A syntax node paired with the value it evaluated to, if any."""

    raw: SyntaxNode
    evaluated: DocumentedValue | None = None


class TokenStream:
    """:class:`SourceIndex` over an ordered, non-overlapping token list.

    Example:
        >>> stream = TokenStream("{ x }", [
        ...     Token(TokenKind.CODE, "{", 0, 1),
        ...     Token(TokenKind.CODE, "x", 2, 3),
        ...     Token(TokenKind.CODE, "}", 4, 5),
        ... ])
        >>> [token.value for token in stream.tokens_in_range((2, 3), reverse=True)]
        ['{']
    """

    def __init__(self, text: str, tokens: Iterable[Token]) -> None:
        self.text = text
        self.tokens: list[Token] = sorted(tokens, key=lambda token: token.start)
        self._starts = [token.start for token in self.tokens]
        self._ends = [token.end for token in self.tokens]

    def tokens_in_range(
        self,
        range: SourceRange,
        *,
        reverse: bool = False,
    ) -> list[Token]:
        """Return tokens inside ``range``.

        With ``reverse`` the tokens ending at or before the start of
        ``range`` are returned instead, nearest first.
        """

        start, end = range
        if reverse:
            return self.tokens[: bisect_right(self._ends, start)][::-1]
        lower = bisect_left(self._starts, start)
        upper = bisect_right(self._ends, end)
        return self.tokens[lower:upper]

    def source_for_range(self, range: SourceRange) -> str:
        start, end = range
        return self.text[start:end]
