"""Tests for :mod:`dojodoc.annotations`."""

from __future__ import annotations

from pathlib import Path

from dojodoc.annotations import resolve_type_annotation, type_path
from dojodoc.comments import PropertyMetadata
from dojodoc.model import ModuleRef, Scope, Value

SOURCE = Path("/project/src/app.js")


def _scope(**variables: Value) -> Scope:
    scope = Scope()
    for name, value in variables.items():
        scope.set_variable(name, value)
    return scope


def test_type_path_strips_trailing_punctuation() -> None:
    assert type_path("dijit.form.Button?") == ["dijit", "form", "Button"]
    assert type_path("String[]") == ["String"]


def test_builtin_names_stay_textual() -> None:
    metadata = PropertyMetadata(type="String")
    scope = _scope(String=Value(type="function"))

    resolve_type_annotation(metadata, scope)

    assert metadata.type == "String"


def test_unknown_and_undefined_names_stay_textual() -> None:
    metadata = PropertyMetadata(type="Missing")
    undefined = PropertyMetadata(type="Ghost")
    scope = _scope(Ghost=Value(type="undefined", file=SOURCE))

    resolve_type_annotation(metadata, scope)
    resolve_type_annotation(undefined, scope)

    assert metadata.type == "Missing"
    assert undefined.type == "Ghost"


def test_module_alias_resolves_to_module_id() -> None:
    alias = Value(
        type="object",
        file=SOURCE,
        related_module=ModuleRef(id="dijit/form/Button"),
    )
    metadata = PropertyMetadata(type="Button?")

    resolve_type_annotation(metadata, _scope(Button=alias))

    assert metadata.type == "dijit/form/Button"


def test_local_values_are_evaluated_and_attached() -> None:
    calls: list[Value] = []
    widget = Value(type="function", file=SOURCE, evaluator=calls.append)
    namespace = Value(type="object", file=SOURCE)
    namespace.set_property("Widget", widget)
    metadata = PropertyMetadata(type="ui.Widget")

    resolve_type_annotation(metadata, _scope(ui=namespace))

    assert metadata.type is widget
    assert calls == [widget]
    assert widget.evaluated is True


def test_empty_type_is_left_alone() -> None:
    metadata = PropertyMetadata()

    resolve_type_annotation(metadata, _scope())

    assert metadata.type == ""
