"""JavaScript syntax backend built on tree-sitter."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Iterator, Sequence

from .base import NodeKind, SourceRange, Token, TokenKind, TokenStream

__all__ = [
    "FUNCTION_NODE_TYPES",
    "JavaScriptNode",
    "JavaScriptSource",
    "SyntaxBackendUnavailableError",
    "named_children",
]

FUNCTION_NODE_TYPES = frozenset(
    {
        "arrow_function",
        "function",
        "function_declaration",
        "function_expression",
        "generator_function",
        "generator_function_declaration",
        "method_definition",
    }
)

_NODE_KINDS: dict[str, NodeKind] = {
    "identifier": NodeKind.IDENTIFIER,
    "return_statement": NodeKind.RETURN,
    "object": NodeKind.OBJECT,
    "pair": NodeKind.PROPERTY,
    **{name: NodeKind.FUNCTION for name in FUNCTION_NODE_TYPES},
}


class SyntaxBackendUnavailableError(RuntimeError):
    """Raised when the tree-sitter JavaScript grammar cannot be loaded."""


@lru_cache(maxsize=1)
def _load_parser() -> Any:
    try:
        from tree_sitter_languages import get_parser  # type: ignore[import]
    except ImportError as exc:
        raise SyntaxBackendUnavailableError(
            "JavaScript parsing requires tree_sitter_languages."
        ) from exc

    try:
        return get_parser("javascript")
    except Exception as exc:  # pragma: no cover - grammar binary mismatch
        raise SyntaxBackendUnavailableError(
            f"tree-sitter parser for 'javascript' is unavailable: {exc}"
        ) from exc


def named_children(node: Any) -> list[Any]:
    """Return the named children of ``node`` other than comments."""

    return [child for child in node.named_children if child.type != "comment"]


def _iter_leaves(root: Any) -> Iterator[Any]:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.child_count == 0:
            if node.end_byte > node.start_byte:
                yield node
            continue
        stack.extend(reversed(node.children))


@dataclass(frozen=True, slots=True)
class JavaScriptNode:
    """:class:`~dojodoc.syntax.base.SyntaxNode` view of a tree-sitter node."""

    node: Any
    kind: NodeKind
    range: SourceRange
    body_range: SourceRange | None = None
    key_name: str | None = None


class JavaScriptSource(TokenStream):
    """Token stream and node wrapper for one parsed JavaScript file.

    Offsets exposed to callers are character offsets into ``text``;
    tree-sitter byte offsets are converted on the way out.
    """

    def __init__(self, text: str, tree: Any) -> None:
        self.tree = tree
        self._source_bytes = text.encode("utf-8")
        self._byte_offsets = self._build_byte_offsets(text)
        super().__init__(text, self._build_tokens(text, tree.root_node))

    @classmethod
    def parse(cls, text: str) -> "JavaScriptSource":
        """Parse ``text`` with the tree-sitter JavaScript grammar.

        Raises:
            SyntaxBackendUnavailableError: If tree-sitter is not installed.
        """

        parser = _load_parser()
        return cls(text, parser.parse(text.encode("utf-8")))

    @property
    def root(self) -> Any:
        return self.tree.root_node

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------
    def wrap(self, node: Any, *, kind: NodeKind | None = None) -> JavaScriptNode:
        """Return the processor-facing view of ``node``."""

        body_range: SourceRange | None = None
        body = node.child_by_field_name("body")
        if body is not None and body.type == "statement_block":
            body_range = self.node_range(body)

        return JavaScriptNode(
            node=node,
            kind=kind or _NODE_KINDS.get(node.type, NodeKind.OTHER),
            range=self.node_range(node),
            body_range=body_range,
            key_name=self.key_name(node),
        )

    def node_range(self, node: Any) -> SourceRange:
        return self._char_index(node.start_byte), self._char_index(node.end_byte)

    def node_text(self, node: Any) -> str:
        return self._source_bytes[node.start_byte : node.end_byte].decode(
            "utf-8", errors="ignore"
        )

    def key_name(self, node: Any) -> str | None:
        """Return the key of a ``pair`` or the name of a method."""

        if node.type == "pair":
            key = node.child_by_field_name("key")
        elif node.type == "method_definition":
            key = node.child_by_field_name("name")
        else:
            return None
        if key is None:
            return None
        text = self.node_text(key)
        if key.type == "string":
            return text[1:-1]
        return text

    # ------------------------------------------------------------------
    # Tokens
    # ------------------------------------------------------------------
    def _build_tokens(self, text: str, root: Any) -> list[Token]:
        tokens: list[Token] = []
        for leaf in _iter_leaves(root):
            start, end = self.node_range(leaf)
            raw = text[start:end]
            if leaf.type != "comment":
                tokens.append(Token(TokenKind.CODE, raw, start, end))
            elif raw.startswith("/*"):
                body = raw[2:-2] if raw.endswith("*/") else raw[2:]
                tokens.append(Token(TokenKind.BLOCK_COMMENT, body, start, end))
            elif not self._starts_line(text, start):
                tokens.append(Token(TokenKind.LINE_COMMENT, raw[2:], start, end))
            elif self._continues_block(text, tokens, start):
                previous = tokens.pop()
                tokens.append(
                    Token(
                        TokenKind.LINE_BLOCK_COMMENT,
                        f"{previous.value}\n{raw[2:]}",
                        previous.start,
                        end,
                    )
                )
            else:
                tokens.append(
                    Token(TokenKind.LINE_BLOCK_COMMENT, raw[2:], start, end)
                )
        return tokens

    @staticmethod
    def _starts_line(text: str, start: int) -> bool:
        line_start = text.rfind("\n", 0, start) + 1
        return not text[line_start:start].strip()

    @staticmethod
    def _continues_block(text: str, tokens: Sequence[Token], start: int) -> bool:
        if not tokens or tokens[-1].kind != TokenKind.LINE_BLOCK_COMMENT:
            return False
        gap = text[tokens[-1].end : start]
        return not gap.strip() and gap.count("\n") == 1

    @staticmethod
    def _build_byte_offsets(text: str) -> list[int]:
        offsets = [0]
        total = 0
        for char in text:
            total += len(char.encode("utf-8"))
            offsets.append(total)
        return offsets

    def _char_index(self, byte_offset: int) -> int:
        return max(0, bisect_right(self._byte_offsets, byte_offset) - 1)
