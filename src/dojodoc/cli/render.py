"""Output helpers shared by the ``dojodoc`` commands."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from rich.markup import escape
from rich.tree import Tree

from dojodoc.comments import Metadata
from dojodoc.document import DocumentedModule
from dojodoc.model import DocumentedValue

_MAX_DEPTH = 4


def metadata_to_dict(metadata: Metadata) -> dict[str, Any]:
    """Return ``metadata`` as JSON-ready primitives.

    Example:
        >>> metadata_to_dict(Metadata())["returns"]
        {'type': '', 'summary': '', 'tags': []}
    """

    return asdict(metadata)


def type_label(value: DocumentedValue) -> str:
    """Return the best display type for ``value``.

    A resolved annotation points at another value; show its name.
    """

    annotated = value.metadata.type
    if isinstance(annotated, str):
        return annotated or value.type
    return getattr(annotated, "name", None) or getattr(annotated, "type", "any")


def _label(name: str, value: DocumentedValue) -> str:
    marker = "?" if value.metadata.is_optional else ""
    label = f"[cyan]{escape(type_label(value))}[/cyan]"
    if name:
        label = f"[bold]{escape(name)}[/bold]{marker}: {label}"
    summary = value.metadata.summary.strip()
    if summary:
        label += f" - {escape(summary.splitlines()[0])}"
    return label


def _add_value(
    tree: Tree,
    value: DocumentedValue,
    *,
    depth: int,
    seen: set[int],
) -> None:
    if depth >= _MAX_DEPTH or id(value) in seen:
        return
    seen = seen | {id(value)}

    for tag in value.metadata.tags:
        tree.add(f"[magenta]tag[/magenta] {escape(tag)}")
    for name, parameter in value.named_parameters.items():
        tree.add(f"[green]param[/green] {_label(name, parameter)}")
    for returned in value.returns[:1]:
        tree.add(f"[yellow]returns[/yellow] {_label('', returned)}")
    for name, child in value.properties.items():
        branch = tree.add(_label(name, child))
        _add_value(branch, child, depth=depth + 1, seen=seen)


def module_tree(module: DocumentedModule) -> Tree:
    """Build a Rich tree of the values documented in ``module``."""

    tree = Tree(f"[bold blue]{escape(module.file.module_id)}[/bold blue]")
    for name, value in module.values.items():
        branch = tree.add(_label(name, value))
        _add_value(branch, value, depth=0, seen=set())
    if module.exports is not None:
        branch = tree.add(f"[bold]exports[/bold]: [cyan]{escape(type_label(module.exports))}[/cyan]")
        _add_value(branch, module.exports, depth=0, seen=set())
    return tree


__all__ = ["metadata_to_dict", "module_tree", "type_label"]
