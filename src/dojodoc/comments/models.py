"""Metadata records produced by the doc-comment parser.

Every mergeable attribute carries an explicit :class:`FieldKind` in its
dataclass field metadata so :func:`~dojodoc.comments.merge.merge_metadata`
can dispatch on the declared kind rather than on the runtime shape of the
value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

__all__ = [
    "FieldKind",
    "Metadata",
    "PropertyMetadata",
    "ReturnMetadata",
    "ValueMetadata",
    "field_kind",
]


class FieldKind(Enum):
    """Merge behavior attached to a metadata attribute."""

    TYPE = "type"
    TEXT = "text"
    LIST = "list"
    FLAG = "flag"
    NESTED = "nested"


def _kind(kind: FieldKind) -> dict[str, FieldKind]:
    return {"kind": kind}


def field_kind(dataclass_field: Any) -> FieldKind | None:
    """Return the :class:`FieldKind` declared on ``dataclass_field``."""

    return dataclass_field.metadata.get("kind")


@dataclass(slots=True)
class PropertyMetadata:
    """Documentation for one parameter or object property.

    ``type`` starts out as the annotation text and may later be replaced by
    the resolved value it names.
    """

    type: Any = field(default="", metadata=_kind(FieldKind.TYPE))
    summary: str = field(default="", metadata=_kind(FieldKind.TEXT))
    description: str = field(default="", metadata=_kind(FieldKind.TEXT))
    tags: list[str] = field(
        default_factory=list, metadata=_kind(FieldKind.LIST)
    )
    is_optional: bool = field(default=False, metadata=_kind(FieldKind.FLAG))


@dataclass(slots=True)
class ReturnMetadata:
    """Type and summary of a function return value."""

    type: str = field(default="", metadata=_kind(FieldKind.TYPE))
    summary: str = field(default="", metadata=_kind(FieldKind.TEXT))
    tags: list[str] = field(
        default_factory=list, metadata=_kind(FieldKind.LIST)
    )

    def is_documented(self) -> bool:
        return bool(self.type or self.summary)


@dataclass(slots=True)
class Metadata:
    """Parse result for a whole comment block.

    ``properties`` and ``returns`` are routed to other values by the
    processor and are never merged into the documented value itself.
    """

    type: Any = field(default="", metadata=_kind(FieldKind.TYPE))
    summary: str = field(default="", metadata=_kind(FieldKind.TEXT))
    description: str = field(default="", metadata=_kind(FieldKind.TEXT))
    tags: list[str] = field(
        default_factory=list, metadata=_kind(FieldKind.LIST)
    )
    examples: list[str] = field(
        default_factory=list, metadata=_kind(FieldKind.LIST)
    )
    returns: ReturnMetadata = field(
        default_factory=ReturnMetadata, metadata=_kind(FieldKind.NESTED)
    )
    properties: dict[str, PropertyMetadata] = field(
        default_factory=dict, metadata=_kind(FieldKind.NESTED)
    )


@dataclass(slots=True)
class ValueMetadata:
    """Persistent documentation record owned by a value."""

    type: Any = ""
    summary: str = ""
    description: str = ""
    tags: list[str] = field(default_factory=list)
    examples: list[str] = field(default_factory=list)
    is_optional: bool = False
