"""Value model consumed by the metadata processor.

The processor only talks to values through :class:`DocumentedValue`; the
:class:`Value` class is the in-memory implementation used by the document
driver and the tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Protocol, runtime_checkable

from dojodoc.comments.models import ValueMetadata

__all__ = [
    "TYPE_ANY",
    "TYPE_FUNCTION",
    "TYPE_OBJECT",
    "TYPE_UNDEFINED",
    "VALID_TYPES",
    "DocumentedValue",
    "ModuleRef",
    "Value",
    "ValueFactory",
]

TYPE_ANY = "any"
TYPE_FUNCTION = "function"
TYPE_OBJECT = "object"
TYPE_UNDEFINED = "undefined"

VALID_TYPES: frozenset[str] = frozenset(
    {
        TYPE_ANY,
        "array",
        "boolean",
        TYPE_FUNCTION,
        "instance",
        "null",
        "number",
        TYPE_OBJECT,
        "string",
        TYPE_UNDEFINED,
    }
)


@dataclass(frozen=True, slots=True)
class ModuleRef:
    """Reference to a module by its canonical identifier."""

    id: str


@runtime_checkable
class DocumentedValue(Protocol):
    """Interface of an evaluated program value that carries documentation."""

    type: str
    metadata: ValueMetadata
    returns: list["DocumentedValue"]
    file: Any
    related_module: ModuleRef | None

    @property
    def properties(self) -> Mapping[str, "DocumentedValue"]: ...

    @property
    def named_parameters(self) -> Mapping[str, "DocumentedValue"]: ...

    def get_property(self, name: str) -> "DocumentedValue | None": ...

    def set_property(self, name: str, value: "DocumentedValue") -> None: ...

    def evaluate(self) -> None: ...


ValueFactory = Callable[..., DocumentedValue]


class Value:
    """In-memory program value.

    Example:
        >>> fn = Value(type="function")
        >>> fn.add_parameter("a", Value(type="number"))
        >>> list(fn.named_parameters)
        ['a']
    """

    def __init__(
        self,
        *,
        type: str = TYPE_ANY,
        name: str | None = None,
        file: Any = None,
        related_module: ModuleRef | None = None,
        evaluator: Callable[["Value"], None] | None = None,
    ) -> None:
        self.type = type
        self.name = name
        self.file = file
        self.related_module = related_module
        self.metadata = ValueMetadata()
        self.returns: list[DocumentedValue] = []
        self.parameters: list[str] = []
        self._properties: dict[str, DocumentedValue] = {}
        self._named_parameters: dict[str, DocumentedValue] = {}
        self._evaluator = evaluator
        self.evaluated = evaluator is None

    def __repr__(self) -> str:
        return f"Value(name={self.name!r}, type={self.type!r})"

    @property
    def properties(self) -> Mapping[str, DocumentedValue]:
        return self._properties

    @property
    def named_parameters(self) -> Mapping[str, DocumentedValue]:
        return self._named_parameters

    def get_property(self, name: str) -> DocumentedValue | None:
        return self._properties.get(name)

    def set_property(self, name: str, value: DocumentedValue) -> None:
        self._properties[name] = value

    def add_parameter(self, name: str, value: DocumentedValue) -> None:
        """Append a named parameter, keeping declaration order."""

        if name not in self._named_parameters:
            self.parameters.append(name)
        self._named_parameters[name] = value

    def evaluate(self) -> None:
        """Run the deferred evaluator once."""

        if self.evaluated:
            return
        self.evaluated = True
        if self._evaluator is not None:
            self._evaluator(self)
