"""Resolve type annotations in parsed metadata against a scope."""

from __future__ import annotations

import re
from typing import Any

from dojodoc.core.logging import Logger, get_logger
from dojodoc.model import TYPE_UNDEFINED, ScopeLookup

__all__ = ["resolve_type_annotation", "type_path"]

_TRAILING_NON_IDENTIFIER = re.compile(r"[^\w$.]+$")


def type_path(type_text: str) -> list[str]:
    """Return the dotted lookup path named by ``type_text``.

    Example:
        >>> type_path("dijit.form.Button?")
        ['dijit', 'form', 'Button']
    """

    return _TRAILING_NON_IDENTIFIER.sub("", type_text).split(".")


def resolve_type_annotation(
    metadata: Any,
    scope: ScopeLookup,
    *,
    logger: Logger | None = None,
) -> None:
    """Replace ``metadata.type`` with what it names in ``scope``, if useful.

    Built-ins (values without a source file), unknown names and undefined
    values leave the annotation text untouched. Module aliases become the
    module identifier; anything else is evaluated and attached directly so
    exporters can inspect its structure.
    """

    type_text = getattr(metadata, "type", None)
    if not type_text or not isinstance(type_text, str):
        return

    entity = scope.get_variable(type_path(type_text))

    if entity is None or entity.type == TYPE_UNDEFINED or not entity.file:
        log = logger or get_logger(__name__)
        log.debug("type-annotation-unresolved", annotation=type_text)
        return

    if entity.related_module is not None:
        metadata.type = entity.related_module.id
        return

    entity.evaluate()
    metadata.type = entity
