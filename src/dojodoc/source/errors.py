"""Domain-specific exceptions for source file handling."""

from __future__ import annotations


class SourceError(RuntimeError):
    """Base error for source file failures."""


class SourceReadError(SourceError):
    """Raised when a source file cannot be read or decoded."""


__all__ = ["SourceError", "SourceReadError"]
