"""Syntax backends feeding nodes and comment tokens to the processor."""

from __future__ import annotations

from .base import (
    BoundNode,
    NodeKind,
    SourceIndex,
    SourceRange,
    SyntaxNode,
    Token,
    TokenKind,
    TokenStream,
)
from .javascript import (
    JavaScriptNode,
    JavaScriptSource,
    SyntaxBackendUnavailableError,
)

__all__ = [
    "BoundNode",
    "JavaScriptNode",
    "JavaScriptSource",
    "NodeKind",
    "SourceIndex",
    "SourceRange",
    "SyntaxBackendUnavailableError",
    "SyntaxNode",
    "Token",
    "TokenKind",
    "TokenStream",
]
