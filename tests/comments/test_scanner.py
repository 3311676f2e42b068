"""Tests for :mod:`dojodoc.comments.scanner`."""

from __future__ import annotations

from dojodoc.comments.scanner import (
    CommentBlock,
    KeyLine,
    indent_width,
    match_key_line,
)


def test_match_key_line_splits_key_and_content() -> None:
    assert match_key_line("  a: Number") == KeyLine(key="a", content="Number")
    assert match_key_line("summary:") == KeyLine(key="summary", content="")
    assert match_key_line("no key here") is None


def test_indent_width_counts_tabs_as_two_spaces_and_pipes() -> None:
    assert indent_width("\tfoo") == 2
    assert indent_width("    bar") == 4
    assert indent_width("  | example") == 4


def test_from_text_rejects_non_documentation() -> None:
    assert CommentBlock.from_text("") is None
    assert CommentBlock.from_text("just a remark") is None
    assert CommentBlock.from_text(" note: internal detail") is None
    assert CommentBlock.from_text(" NOTE: internal detail") is None


def test_scan_marks_only_lines_at_key_indent_as_keys() -> None:
    block = CommentBlock.from_text(
        "  summary:\n"
        "      Has a colon: inside.\n"
        "  a: Number\n"
        "  not a key line\n"
        "   b: off by one"
    )

    assert block is not None
    assert block.key_indent == 2

    scanned = list(block.scan())
    assert [line.is_key for line in scanned] == [True, False, True, False, False]
    assert scanned[2].key_line == KeyLine(key="a", content="Number")


def test_whitespace_line_as_wide_as_indent_is_not_a_key() -> None:
    block = CommentBlock.from_text("  summary: one\n  \n  two: three")

    assert block is not None
    assert not block.is_key_position("  ")
    assert block.is_key_position("  two: three")


def test_from_text_splits_on_newlines_only() -> None:
    block = CommentBlock.from_text(" example:\r\n     x\x0cy z\n")

    assert block is not None
    assert block.lines == (" example:", "     x\x0cy z")
