"""Text helpers shared by the comment parser and the metadata merger."""

from __future__ import annotations

import re

__all__ = [
    "OPTIONAL_TYPE_PATTERN",
    "TYPE_PATTERN",
    "extract_tags",
    "match_leading_type",
    "strip_optional",
    "trim_doc",
]

# Optional leading ``[tag]`` groups, then the type itself: primitive names,
# dotted object paths, slashed module ids, ``|`` unions and ``[]`` arrays,
# with a trailing ``?`` for optional parameters.
TYPE_PATTERN = re.compile(r"^(?:\[[^\]]+\]\s*)*\s*([\w|\[\]/.]+\??)\s*$")
_LEADING_TYPE_PATTERN = re.compile(
    r"^(?:\[[^\]]+\]\s*)*\s*([\w|\[\]/.]+\??)(?=\s|$)"
)
_TAGGED_PATTERN = re.compile(r"^\s*\[")
_TYPE_PUNCTUATION = frozenset("|[]/.?")
# Names accepted as a leading type even when prose follows them.
_BUILTIN_TYPE_NAMES = frozenset(
    {
        "any",
        "array",
        "boolean",
        "date",
        "domnode",
        "element",
        "error",
        "function",
        "integer",
        "node",
        "null",
        "number",
        "object",
        "promise",
        "regexp",
        "string",
        "undefined",
    }
)
OPTIONAL_TYPE_PATTERN = re.compile(r"\?\s*$")
_TAG_PATTERN = re.compile(r"\[([^\]]+)\]")
_TRIM_PATTERN = re.compile(r"^[\s*]+|\s+$")


def trim_doc(text: str) -> str:
    """Trim whitespace, plus any asterisks leading the text.

    Example:
        >>> trim_doc(" ** String  ")
        'String'
    """

    return _TRIM_PATTERN.sub("", text)


def strip_optional(type_text: str) -> str:
    """Remove a trailing ``?`` optional marker from ``type_text``."""

    return OPTIONAL_TYPE_PATTERN.sub("", type_text)


def extract_tags(line: str) -> list[str]:
    """Return bracketed inline tags in ``line`` from left to right.

    Example:
        >>> extract_tags("[const] [readonly] String")
        ['const', 'readonly']
    """

    return _TAG_PATTERN.findall(line)


def match_leading_type(content: str) -> tuple[str, str] | None:
    """Split ``content`` into a leading type annotation and the remainder.

    Content that is nothing but a type annotation is taken whole. When prose
    follows, the leading word only counts as a type if it is tagged, carries
    type punctuation or names a built-in type, so a plain sentence stays a
    summary. Returns ``None`` when ``content`` does not start with a type.

    Example:
        >>> match_leading_type("[tag] string some summary")
        ('string', ' some summary')
        >>> match_leading_type("my.Widget")
        ('my.Widget', '')
        >>> match_leading_type("The sum of a and b") is None
        True
    """

    whole = TYPE_PATTERN.match(content)
    if whole is not None:
        return whole.group(1), ""

    match = _LEADING_TYPE_PATTERN.match(content)
    if match is None:
        return None

    type_text = match.group(1)
    if not (
        _TAGGED_PATTERN.match(content)
        or _TYPE_PUNCTUATION.intersection(type_text)
        or type_text.lower() in _BUILTIN_TYPE_NAMES
    ):
        return None
    return type_text, content[match.end():]
