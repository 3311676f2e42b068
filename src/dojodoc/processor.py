"""Attach dojodoc comment metadata to evaluated values.

The processor receives syntax nodes from a tree walker, finds the comment
that documents each one and merges what it parses into the value model.
Documentation is best effort: malformed or missing comments produce an
empty fragment and leave the value untouched.
"""

from __future__ import annotations

import re
from typing import Any, Sequence

from dojodoc.annotations import resolve_type_annotation
from dojodoc.comments import (
    Metadata,
    PropertyMetadata,
    merge_metadata,
    parse_comment,
    trim_doc,
)
from dojodoc.core.logging import Logger, get_logger
from dojodoc.model import (
    TYPE_ANY,
    TYPE_OBJECT,
    VALID_TYPES,
    DocumentedValue,
    ScopeLookup,
    Value,
    ValueFactory,
)
from dojodoc.source import process_source
from dojodoc.syntax.base import (
    BoundNode,
    NodeKind,
    SourceIndex,
    SyntaxNode,
    Token,
    TokenKind,
)

__all__ = ["DojodocProcessor"]

_INLINE_TYPE_CLEANUP = re.compile(r"^\*+|\?\s*$")
_RETURN_COMMENT = re.compile(r"^[^\n]*//(.*?)\n")
_NON_PRIMITIVE_CHARS = re.compile(r"[^a-z]")


def _first(tokens: Sequence[Token]) -> Token | None:
    return tokens[0] if tokens else None


class DojodocProcessor:
    """Bind dojodoc metadata from one source file onto its values.

    Args:
        source: Token and text queries for the file being documented.
        scope: Lookup used to resolve type annotations.
        logger: Optional structured logger.
        value_factory: Builds values for documented properties that the
            evaluated model does not contain yet.
    """

    def __init__(
        self,
        *,
        source: SourceIndex,
        scope: ScopeLookup,
        logger: Logger | None = None,
        value_factory: ValueFactory = Value,
    ) -> None:
        self._source = source
        self._scope = scope
        self._logger = logger or get_logger(__name__, component="processor")
        self._value_factory = value_factory

    @staticmethod
    def process_source(source: str) -> str:
        """Preprocess raw source text before it is parsed."""

        return process_source(source)

    def generate_metadata(
        self,
        value: BoundNode,
        context: BoundNode | None = None,
    ) -> None:
        """Merge the documentation for ``value`` into its metadata.

        Args:
            value: The node being visited and the value it evaluated to.
            context: The nearest enclosing function or object literal.
        """

        evaluated = value.evaluated
        if evaluated is None:
            return

        raw = value.raw
        context_kind = context.raw.kind if context is not None else None
        fragment: Any = Metadata()

        if raw.kind == NodeKind.IDENTIFIER and context_kind == NodeKind.FUNCTION:
            fragment = self._parameter_fragment(raw)
        elif raw.kind == NodeKind.RETURN:
            fragment = self._return_fragment(raw)
        elif raw.kind in (NodeKind.FUNCTION, NodeKind.OBJECT):
            fragment = self._body_fragment(raw, evaluated)
        elif raw.kind == NodeKind.PROPERTY and context_kind == NodeKind.OBJECT:
            fragment = self._property_fragment(raw)

        merge_metadata(evaluated.metadata, fragment)

    # ------------------------------------------------------------------
    # Comment sources
    # ------------------------------------------------------------------
    def _parameter_fragment(self, raw: SyntaxNode) -> PropertyMetadata:
        # function (/*String*/ name, /*Number?*/ count)
        candidate = _first(self._source.tokens_in_range(raw.range, reverse=True))
        if candidate is None or candidate.kind != TokenKind.BLOCK_COMMENT:
            return PropertyMetadata()

        fragment = PropertyMetadata(
            type=_INLINE_TYPE_CLEANUP.sub("", trim_doc(candidate.value)),
            is_optional="?" in candidate.value,
        )
        resolve_type_annotation(fragment, self._scope, logger=self._logger)
        return fragment

    def _return_fragment(self, raw: SyntaxNode) -> PropertyMetadata:
        # return { // Object
        match = _RETURN_COMMENT.match(self._source.source_for_range(raw.range))
        if match is None:
            return PropertyMetadata()
        return PropertyMetadata(type=trim_doc(match.group(1)))

    def _property_fragment(self, raw: SyntaxNode) -> PropertyMetadata:
        name = raw.key_name
        candidate = _first(self._source.tokens_in_range(raw.range, reverse=True))
        if (
            not name
            or candidate is None
            or candidate.kind != TokenKind.LINE_BLOCK_COMMENT
            or not re.match(rf"^\s*{re.escape(name)}:", candidate.value)
        ):
            return PropertyMetadata()

        fragment = parse_comment(candidate.value, for_key=name).properties.get(
            name, PropertyMetadata()
        )
        resolve_type_annotation(fragment, self._scope, logger=self._logger)
        return fragment

    def _body_fragment(
        self,
        raw: SyntaxNode,
        evaluated: DocumentedValue,
    ) -> Metadata:
        body_range = raw.range if raw.kind == NodeKind.OBJECT else raw.body_range
        if body_range is None:
            return Metadata()

        # The token right after the opening brace.
        tokens = self._source.tokens_in_range(body_range)
        candidate = tokens[1] if len(tokens) > 1 else None
        if candidate is None or candidate.kind != TokenKind.LINE_BLOCK_COMMENT:
            return Metadata()

        metadata = parse_comment(candidate.value)
        is_function = raw.kind == NodeKind.FUNCTION

        for name, prop in metadata.properties.items():
            target = self._property_target(evaluated, name, is_function, metadata)
            resolve_type_annotation(prop, self._scope, logger=self._logger)
            merge_metadata(target.metadata, prop)

        if metadata.returns.is_documented():
            if not evaluated.returns:
                return_type = metadata.returns.type
                evaluated.returns.append(
                    self._value_factory(
                        type=return_type if return_type in VALID_TYPES else TYPE_ANY
                    )
                )
                self._logger.debug(
                    "return-slot-created",
                    annotation=return_type or None,
                )
            merge_metadata(evaluated.returns[0].metadata, metadata.returns)

        return metadata

    def _property_target(
        self,
        evaluated: DocumentedValue,
        name: str,
        is_function: bool,
        metadata: Metadata,
    ) -> DocumentedValue:
        """Return the value documented by key ``name``, creating it if needed."""

        if is_function and name in evaluated.named_parameters:
            return evaluated.named_parameters[name]
        if name in evaluated.properties:
            return evaluated.properties[name]

        primitive = ""
        if isinstance(metadata.type, str):
            primitive = _NON_PRIMITIVE_CHARS.sub("", metadata.type)
        created = (
            self._value_factory(type=primitive)
            if primitive
            else self._value_factory()
        )

        if is_function:
            prototype = evaluated.get_property("prototype")
            if prototype is None:
                prototype = self._value_factory(type=TYPE_OBJECT)
                evaluated.set_property("prototype", prototype)
            prototype.set_property(name, created)
        else:
            evaluated.set_property(name, created)

        self._logger.debug(
            "property-fabricated",
            name=name,
            on_prototype=is_function,
        )
        return created
