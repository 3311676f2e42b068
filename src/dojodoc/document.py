"""Document a JavaScript source file end to end.

The walker builds a shallow value graph from syntax alone (functions with
their named parameters and returns, object literals with their properties,
top-level names) and hands every node to :class:`DojodocProcessor` with its
nearest enclosing function or object literal as context.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any

from dojodoc.core.config import ModuleIdSettings
from dojodoc.core.logging import Logger, get_logger
from dojodoc.model import (
    TYPE_ANY,
    TYPE_FUNCTION,
    TYPE_OBJECT,
    TYPE_UNDEFINED,
    Scope,
    Value,
)
from dojodoc.processor import DojodocProcessor
from dojodoc.source import SourceFile
from dojodoc.syntax import BoundNode, JavaScriptSource, NodeKind
from dojodoc.syntax.javascript import FUNCTION_NODE_TYPES, named_children

__all__ = ["DocumentedModule", "document_file", "document_source"]

_LITERAL_TYPES = {
    "array": "array",
    "false": "boolean",
    "null": "null",
    "number": "number",
    "string": "string",
    "template_string": "string",
    "true": "boolean",
    "undefined": TYPE_UNDEFINED,
}

_DECLARATION_TYPES = frozenset(
    {"function_declaration", "generator_function_declaration"}
)


def _names_into_scope(context: BoundNode | None) -> bool:
    # Names declared at top level or in a function body (an AMD factory, in
    # practice) are visible to type annotations; object members are not.
    return context is None or context.raw.kind == NodeKind.FUNCTION


@dataclass(slots=True)
class DocumentedModule:
    """Values documented from one source file."""

    file: SourceFile
    scope: Scope
    values: dict[str, Value] = field(default_factory=dict)
    exports: Value | None = None


class _Walker:
    def __init__(
        self,
        *,
        file: SourceFile,
        source: JavaScriptSource,
        processor: DojodocProcessor,
        module: DocumentedModule,
    ) -> None:
        self._file = file
        self._source = source
        self._processor = processor
        self._module = module

    def walk(self) -> None:
        for child in named_children(self._source.root):
            self._visit(child, None, None)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def _visit(
        self,
        node: Any,
        context: BoundNode | None,
        owner: Value | None,
    ) -> Value | None:
        """Visit ``node`` returning the value it evaluates to, if modeled."""

        if node.type in FUNCTION_NODE_TYPES:
            return self._function(node, context)
        if node.type == "object":
            return self._object(node, context)
        if node.type == "return_statement":
            self._return(node, context, owner)
        elif node.type == "variable_declarator":
            self._declarator(node, context, owner)
        elif node.type == "assignment_expression":
            self._assignment(node, context, owner)
        elif node.type == "call_expression":
            self._call(node, context, owner)
        else:
            for child in named_children(node):
                self._visit(child, context, owner)
        return None

    def _value_of(
        self,
        node: Any | None,
        context: BoundNode | None,
        owner: Value | None,
    ) -> Value:
        if node is None:
            return Value(type=TYPE_UNDEFINED, file=self._file)
        if node.type == "identifier":
            known = self._module.scope.lookup(self._source.node_text(node))
            if isinstance(known, Value):
                return known
        value = self._visit(node, context, owner)
        if value is None:
            value = Value(type=_LITERAL_TYPES.get(node.type, TYPE_ANY), file=self._file)
        return value

    def _document(self, raw: Any, value: Value, context: BoundNode | None, **kwargs: Any) -> None:
        bound = BoundNode(self._source.wrap(raw, **kwargs), value)
        self._processor.generate_metadata(bound, context)

    def _publish(self, name: str, value: Value) -> None:
        if value.name is None:
            value.name = name
        self._module.scope.set_variable(name, value)
        self._module.values[name] = value

    # ------------------------------------------------------------------
    # Structures
    # ------------------------------------------------------------------
    def _function(self, node: Any, context: BoundNode | None) -> Value:
        value = Value(type=TYPE_FUNCTION, file=self._file)
        bound = BoundNode(self._source.wrap(node), value)

        name_node = node.child_by_field_name("name")
        if name_node is not None:
            value.name = self._source.node_text(name_node)
            if _names_into_scope(context) and node.type in _DECLARATION_TYPES:
                self._publish(value.name, value)

        for identifier in self._parameter_identifiers(node):
            parameter = Value(file=self._file)
            value.add_parameter(self._source.node_text(identifier), parameter)
            self._document(identifier, parameter, bound)

        body = node.child_by_field_name("body")
        if body is not None and body.type == "statement_block":
            for child in named_children(body):
                self._visit(child, bound, value)
        elif body is not None:
            value.returns.append(self._value_of(body, bound, value))

        self._processor.generate_metadata(bound, context)
        return value

    def _parameter_identifiers(self, node: Any) -> list[Any]:
        single = node.child_by_field_name("parameter")
        if single is not None:
            return [single]

        parameters = node.child_by_field_name("parameters")
        if parameters is None:
            return []

        identifiers = []
        for parameter in named_children(parameters):
            if parameter.type == "assignment_pattern":
                parameter = parameter.child_by_field_name("left")
            elif parameter.type == "rest_pattern":
                parameter = next(
                    (c for c in named_children(parameter) if c.type == "identifier"),
                    None,
                )
            if parameter is not None and parameter.type == "identifier":
                identifiers.append(parameter)
        return identifiers

    def _object(self, node: Any, context: BoundNode | None) -> Value:
        value = Value(type=TYPE_OBJECT, file=self._file)
        bound = BoundNode(self._source.wrap(node), value)

        for child in named_children(node):
            if child.type == "pair":
                name = self._source.key_name(child)
                member = self._value_of(child.child_by_field_name("value"), bound, None)
                if name:
                    value.set_property(name, member)
                self._document(child, member, bound)
            elif child.type == "method_definition":
                member = self._function(child, bound)
                name = self._source.key_name(child)
                if name:
                    value.set_property(name, member)
                self._document(child, member, bound, kind=NodeKind.PROPERTY)
            elif child.type == "shorthand_property_identifier":
                name = self._source.node_text(child)
                member = self._module.scope.lookup(name) or Value(file=self._file)
                value.set_property(name, member)
            else:
                self._visit(child, bound, None)

        # Properties first, so body docs bind to them instead of fabricating.
        self._processor.generate_metadata(bound, context)
        return value

    # ------------------------------------------------------------------
    # Statements and expressions
    # ------------------------------------------------------------------
    def _return(self, node: Any, context: BoundNode | None, owner: Value | None) -> None:
        argument = next(iter(named_children(node)), None)
        value = self._value_of(argument, context, owner)
        if owner is not None:
            owner.returns.append(value)
        self._document(node, value, context)

    def _declarator(self, node: Any, context: BoundNode | None, owner: Value | None) -> None:
        value = self._value_of(node.child_by_field_name("value"), context, owner)
        name_node = node.child_by_field_name("name")
        if (
            _names_into_scope(context)
            and name_node is not None
            and name_node.type == "identifier"
        ):
            self._publish(self._source.node_text(name_node), value)

    def _assignment(self, node: Any, context: BoundNode | None, owner: Value | None) -> None:
        value = self._value_of(node.child_by_field_name("right"), context, owner)
        left = node.child_by_field_name("left")
        if not _names_into_scope(context) or left is None:
            return

        if left.type == "identifier":
            self._publish(self._source.node_text(left), value)
        elif left.type == "member_expression":
            path = self._source.node_text(left).split(".")
            target = self._module.scope.get_variable(path[:-1])
            if target is not None:
                if value.name is None:
                    value.name = path[-1]
                target.set_property(path[-1], value)

    def _call(self, node: Any, context: BoundNode | None, owner: Value | None) -> None:
        callee = node.child_by_field_name("function")
        arguments = node.child_by_field_name("arguments")
        values = [
            self._visit(argument, context, owner)
            for argument in (named_children(arguments) if arguments is not None else [])
        ]
        if callee is not None and callee.type != "identifier":
            self._visit(callee, context, owner)

        # define([deps], function (...) { return exports; })
        if (
            context is None
            and callee is not None
            and self._source.node_text(callee) == "define"
            and values
            and values[-1] is not None
            and values[-1].type == TYPE_FUNCTION
            and values[-1].returns
        ):
            self._module.exports = values[-1].returns[0]


def document_source(
    file: SourceFile,
    *,
    logger: Logger | None = None,
) -> DocumentedModule:
    """Document the already loaded ``file``.

    Raises:
        SyntaxBackendUnavailableError: If tree-sitter is not installed.
    """

    log = (logger or get_logger(__name__)).bind(module_id=file.module_id)
    source = JavaScriptSource.parse(file.source)
    module = DocumentedModule(file=file, scope=Scope())
    processor = DojodocProcessor(source=source, scope=module.scope, logger=log)

    _Walker(file=file, source=source, processor=processor, module=module).walk()

    log.info("module-documented", values=len(module.values))
    return module


def document_file(
    path: str | os.PathLike[str],
    settings: ModuleIdSettings,
    *,
    logger: Logger | None = None,
) -> DocumentedModule:
    """Load and document the JavaScript file at ``path``.

    Raises:
        SourceReadError: If the file cannot be read.
        SyntaxBackendUnavailableError: If tree-sitter is not installed.
    """

    return document_source(SourceFile.load(path, settings), logger=logger)
