"""Non-destructive merge of parsed metadata into persistent records."""

from __future__ import annotations

from dataclasses import fields
from typing import Any

from .models import FieldKind, field_kind
from .text import strip_optional, trim_doc

__all__ = ["merge_metadata"]


def merge_metadata(destination: Any, fragment: Any) -> None:
    """Merge ``fragment`` into ``destination`` in place.

    Only truthy fragment fields are written, so empty data never erases what
    an earlier comment recorded. List fields are concatenated (not
    deduplicated: merging the same fragment twice repeats its entries),
    textual fields overwrite only when they carry visible text, ``type``
    strings lose their optional marker, and flags or resolved type values
    overwrite unconditionally. Nested records (``properties`` and
    ``returns``) are never merged here.

    Args:
        destination: Record mutated in place, usually a value's
            :class:`~dojodoc.comments.models.ValueMetadata`.
        fragment: Dataclass instance from :mod:`dojodoc.comments.models`.
    """

    for dataclass_field in fields(fragment):
        kind = field_kind(dataclass_field)
        name = dataclass_field.name
        value = getattr(fragment, name)

        if kind is None or kind is FieldKind.NESTED or not value:
            continue
        if not hasattr(destination, name):
            continue

        match kind:
            case FieldKind.LIST:
                current = getattr(destination, name)
                if isinstance(current, list):
                    setattr(destination, name, current + list(value))
                else:
                    setattr(destination, name, list(value))
            case FieldKind.TYPE:
                if isinstance(value, str):
                    setattr(destination, name, strip_optional(value))
                else:
                    setattr(destination, name, value)
            case FieldKind.TEXT:
                if trim_doc(value):
                    setattr(destination, name, value)
            case FieldKind.FLAG:
                setattr(destination, name, value)
