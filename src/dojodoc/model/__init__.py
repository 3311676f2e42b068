"""Value model and scope interfaces used by the processor."""

from __future__ import annotations

from .scope import Scope, ScopeLookup
from .values import (
    TYPE_ANY,
    TYPE_FUNCTION,
    TYPE_OBJECT,
    TYPE_UNDEFINED,
    VALID_TYPES,
    DocumentedValue,
    ModuleRef,
    Value,
    ValueFactory,
)

__all__ = [
    "TYPE_ANY",
    "TYPE_FUNCTION",
    "TYPE_OBJECT",
    "TYPE_UNDEFINED",
    "VALID_TYPES",
    "DocumentedValue",
    "ModuleRef",
    "Scope",
    "ScopeLookup",
    "Value",
    "ValueFactory",
]
