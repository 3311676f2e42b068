"""Dojodoc comment parsing and metadata merging."""

from __future__ import annotations

from .merge import merge_metadata
from .models import (
    FieldKind,
    Metadata,
    PropertyMetadata,
    ReturnMetadata,
    ValueMetadata,
)
from .parser import STANDARD_KEYS, TODO_MARKER, parse_comment
from .scanner import CommentBlock, KeyLine, ScannedLine
from .text import extract_tags, strip_optional, trim_doc

__all__ = [
    "STANDARD_KEYS",
    "TODO_MARKER",
    "CommentBlock",
    "FieldKind",
    "KeyLine",
    "Metadata",
    "PropertyMetadata",
    "ReturnMetadata",
    "ScannedLine",
    "ValueMetadata",
    "extract_tags",
    "merge_metadata",
    "parse_comment",
    "strip_optional",
    "trim_doc",
]
