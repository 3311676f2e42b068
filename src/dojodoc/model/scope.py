"""Name lookup for type annotations."""

from __future__ import annotations

from typing import Protocol, Sequence

from .values import DocumentedValue

__all__ = ["Scope", "ScopeLookup"]


class ScopeLookup(Protocol):
    """Resolve a dotted name path to a value."""

    def get_variable(
        self, path: Sequence[str]
    ) -> DocumentedValue | None: ...


class Scope:
    """Lexical scope with an optional parent chain.

    The first path segment is looked up through the chain; later segments
    walk properties of the value found.

    Example:
        >>> from dojodoc.model.values import Value
        >>> root = Scope()
        >>> ns = Value(type="object")
        >>> ns.set_property("Widget", Value(type="function"))
        >>> root.set_variable("ui", ns)
        >>> root.get_variable(["ui", "Widget"]).type
        'function'
    """

    def __init__(self, parent: "Scope | None" = None) -> None:
        self.parent = parent
        self.variables: dict[str, DocumentedValue] = {}

    def set_variable(self, name: str, value: DocumentedValue) -> None:
        self.variables[name] = value

    def lookup(self, name: str) -> DocumentedValue | None:
        scope: Scope | None = self
        while scope is not None:
            if name in scope.variables:
                return scope.variables[name]
            scope = scope.parent
        return None

    def get_variable(self, path: Sequence[str]) -> DocumentedValue | None:
        if not path or not path[0]:
            return None

        value = self.lookup(path[0])
        for segment in path[1:]:
            if value is None:
                return None
            value = value.get_property(segment)
        return value
