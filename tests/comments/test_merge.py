"""Tests for :mod:`dojodoc.comments.merge`."""

from __future__ import annotations

from dojodoc.comments import (
    Metadata,
    PropertyMetadata,
    ReturnMetadata,
    ValueMetadata,
    merge_metadata,
)
from dojodoc.model import Value


def test_lists_are_concatenated_without_deduplication() -> None:
    destination = ValueMetadata(tags=["a", "x"])

    merge_metadata(destination, PropertyMetadata(tags=["x"]))

    assert destination.tags == ["a", "x", "x"]


def test_empty_fragment_fields_never_erase_existing_values() -> None:
    destination = ValueMetadata(
        type="String",
        summary="Kept",
        description="Also kept",
        tags=["t"],
        is_optional=True,
    )

    merge_metadata(destination, PropertyMetadata())

    assert destination == ValueMetadata(
        type="String",
        summary="Kept",
        description="Also kept",
        tags=["t"],
        is_optional=True,
    )


def test_whitespace_only_text_does_not_overwrite() -> None:
    destination = ValueMetadata(summary="Kept")

    merge_metadata(destination, PropertyMetadata(summary="   \n  "))

    assert destination.summary == "Kept"


def test_type_strings_lose_their_optional_marker() -> None:
    destination = ValueMetadata()

    merge_metadata(destination, PropertyMetadata(type="Number?", is_optional=True))

    assert destination.type == "Number"
    assert destination.is_optional is True


def test_resolved_type_values_are_assigned_as_is() -> None:
    resolved = Value(type="function", name="Widget")
    destination = ValueMetadata(type="Widget")

    merge_metadata(destination, PropertyMetadata(type=resolved))

    assert destination.type is resolved


def test_nested_records_are_never_merged() -> None:
    destination = ValueMetadata()
    fragment = Metadata(
        summary="Top",
        examples=["demo();"],
        returns=ReturnMetadata(type="String", summary="ignored"),
        properties={"a": PropertyMetadata(type="Number")},
    )

    merge_metadata(destination, fragment)

    assert destination.summary == "Top"
    assert destination.examples == ["demo();"]
    assert not hasattr(destination, "returns")
    assert not hasattr(destination, "properties")


def test_fields_missing_on_destination_are_skipped() -> None:
    destination = ReturnMetadata()

    merge_metadata(
        destination,
        PropertyMetadata(type="String", description="no slot", is_optional=True),
    )

    assert destination.type == "String"
    assert not hasattr(destination, "description")


def test_merging_same_fragment_twice_repeats_entries() -> None:
    destination = ValueMetadata(tags=["a"])
    fragment = PropertyMetadata(tags=["x"])

    merge_metadata(destination, fragment)
    merge_metadata(destination, fragment)

    assert destination.tags == ["a", "x", "x"]
