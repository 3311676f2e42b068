"""Line scanner for indentation-keyed doc comment blocks.

A block looks like::

     summary:
            Adds two numbers.
     a: Number
            The first operand.

The indentation of the first line is the *key indent*; every later line at
exactly that indentation starts a new key, anything else continues the
current one.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Iterator

__all__ = [
    "IGNORE_MARKER",
    "KEY_PATTERN",
    "CommentBlock",
    "KeyLine",
    "ScannedLine",
    "indent_width",
    "match_key_line",
]

KEY_PATTERN = re.compile(r"^\s*([^:\s]+?):\s*(.*)$")

# ``|`` counts as indentation because examples use it inside the indent zone.
_INDENT_PATTERN = re.compile(r"^[\s|]*")

IGNORE_MARKER = "note"


@dataclass(frozen=True, slots=True)
class KeyLine:
    """Key token and trailing content of a ``key: content`` line."""

    key: str
    content: str


@dataclass(frozen=True, slots=True)
class ScannedLine:
    """A raw line tagged with its key, when it opens a new field."""

    text: str
    key_line: KeyLine | None = None

    @property
    def is_key(self) -> bool:
        return self.key_line is not None


def match_key_line(line: str) -> KeyLine | None:
    """Return the :class:`KeyLine` for ``line`` or ``None`` if not key-shaped."""

    match = KEY_PATTERN.match(line)
    if match is None:
        return None
    return KeyLine(key=match.group(1), content=match.group(2))


def indent_width(line: str) -> int:
    """Return the indentation width of ``line`` with tabs as two spaces."""

    normalized = line.replace("\t", "  ")
    return len(_INDENT_PATTERN.match(normalized).group(0))


@dataclass(frozen=True, slots=True)
class CommentBlock:
    """Raw comment lines plus the key indent fixed by the first line."""

    lines: tuple[str, ...]
    key_indent: int

    @classmethod
    def from_text(cls, text: str) -> "CommentBlock | None":
        """Build a block from ``text`` or return ``None`` when it is not docs.

        Example:
            >>> CommentBlock.from_text(" summary: hi").key_indent
            1
            >>> CommentBlock.from_text("just a remark") is None
            True
        """

        # Only "\n" ends a line; form feeds and other separators are content.
        lines = tuple(
            line.removesuffix("\r")
            for line in text.removesuffix("\n").split("\n")
        )

        first = match_key_line(lines[0])
        if first is None or first.key.lower() == IGNORE_MARKER:
            return None

        return cls(lines=lines, key_indent=indent_width(lines[0]))

    def is_key_position(self, line: str) -> bool:
        """Return ``True`` when ``line`` sits exactly at the key indent.

        Whitespace-only lines as wide as the indent are blank separators.
        """

        normalized = line.replace("\t", "  ")
        return (
            bool(normalized)
            and indent_width(line) == self.key_indent
            and len(normalized) != self.key_indent
        )

    def scan(self) -> Iterator[ScannedLine]:
        """Yield every line classified as a key line or a continuation."""

        for line in self.lines:
            key_line = (
                match_key_line(line) if self.is_key_position(line) else None
            )
            yield ScannedLine(text=line, key_line=key_line)
