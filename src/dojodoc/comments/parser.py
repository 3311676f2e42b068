"""Parser turning dojodoc comment blocks into :class:`Metadata` records."""

from __future__ import annotations

from .models import Metadata, PropertyMetadata
from .scanner import KEY_PATTERN, CommentBlock, KeyLine
from .text import (
    OPTIONAL_TYPE_PATTERN,
    TYPE_PATTERN,
    extract_tags,
    match_leading_type,
    trim_doc,
)

__all__ = ["STANDARD_KEYS", "TODO_MARKER", "parse_comment"]

# Keys describing the enclosing value; every other key names a parameter or
# a property.
STANDARD_KEYS: dict[str, str] = {
    "summary": "summary",
    "description": "description",
    "tags": "tags",
    "returns": "returns",
    "example": "examples",
    "examples": "examples",
}

TODO_MARKER = "TODO"


def _append_line(current: str, line: str) -> str:
    return f"{current}\n{line}" if current else line


def _apply_standard_key(metadata: Metadata, key: str, line: str) -> None:
    """Fold one line of content into the standard field ``key``."""

    line = trim_doc(line)

    if key == "tags":
        metadata.tags.extend(line.split())
    elif key == "examples":
        metadata.examples[-1] = _append_line(metadata.examples[-1], line)
    elif key == "returns":
        metadata.returns.summary = _append_line(metadata.returns.summary, line)
    elif key == "summary":
        metadata.summary = _append_line(metadata.summary, line)
    elif key == "description":
        metadata.description = _append_line(metadata.description, line)


def _open_standard_key(metadata: Metadata, key: str, content: str) -> None:
    # Every occurrence of ``example``/``examples`` starts a new example.
    if key == "examples":
        metadata.examples.append("")

    if key == "returns":
        leading = match_leading_type(content)
        if leading is not None:
            metadata.returns.type, remainder = leading
            metadata.returns.tags.extend(extract_tags(content))
            content = remainder

    _apply_standard_key(metadata, key, content)


def _open_property_key(metadata: Metadata, key: str, content: str) -> None:
    prop = metadata.properties.get(key)
    if prop is None:
        prop = metadata.properties[key] = PropertyMetadata()

    prop.tags.extend(extract_tags(content))

    match = TYPE_PATTERN.match(content)
    if match is not None:
        prop.type = match.group(1)
        prop.is_optional = OPTIONAL_TYPE_PATTERN.search(prop.type) is not None


def parse_comment(comment: str, for_key: str | None = None) -> Metadata:
    """Parse a dojodoc comment block into a :class:`Metadata` record.

    Args:
        comment: Raw comment text with comment delimiters already removed.
        for_key: When set, only the block for this property name is read and
            every other key, standard keys included, is skipped.

    Returns:
        The parsed metadata. Text that is not a dojodoc block yields an
        empty record.

    Example:
        >>> meta = parse_comment(" summary:\\n    Adds.\\n a: Number\\n    Left.")
        >>> meta.summary, meta.properties["a"].type
        ('Adds.', 'Number')
    """

    metadata = Metadata()

    block = CommentBlock.from_text(comment)
    if block is None:
        return metadata

    key: str | None = None
    is_property = False
    skipping_todo = False

    for line in block.scan():
        if skipping_todo:
            if KEY_PATTERN.match(line.text) is None:
                continue
            skipping_todo = False

        key_line: KeyLine | None = line.key_line
        if key_line is not None:
            key = STANDARD_KEYS.get(key_line.key, key_line.key)

            # TODO notes look like property definitions; drop them and their
            # body up to the next key-shaped line.
            if key.startswith(TODO_MARKER):
                key = None
                skipping_todo = True
                continue

            if for_key and key != for_key:
                key = None
                continue

            is_property = bool(for_key) or key not in STANDARD_KEYS
            if is_property:
                _open_property_key(metadata, key, key_line.content)
            else:
                _open_standard_key(metadata, key, key_line.content)

        elif key is not None:
            if is_property:
                prop = metadata.properties[key]
                prop.summary = _append_line(prop.summary, line.text.lstrip())
            else:
                _apply_standard_key(metadata, key, line.text)

    return metadata
