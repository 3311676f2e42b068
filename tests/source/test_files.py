"""Tests for :mod:`dojodoc.source.files`."""

from __future__ import annotations

from pathlib import Path

import pytest

from dojodoc.core.config import ModuleIdSettings
from dojodoc.source import SourceFile, SourceReadError


def test_load_reads_preprocesses_and_names_module(tmp_path: Path) -> None:
    (tmp_path / "src" / "widgets").mkdir(parents=True)
    src = (tmp_path / "src").resolve()
    path = src / "widgets" / "Button.js"
    path.write_text("/*=====\nvar stub;\n=====*/\n", encoding="utf-8")
    settings = ModuleIdSettings(base_url=f"{src.as_posix()}/", prefix_map={"ui": ""})

    loaded = SourceFile.load(path, settings)

    assert loaded.filename == path.resolve()
    assert loaded.module_id == "ui/widgets/Button"
    assert loaded.source == "\nvar stub;\n\n"


def test_repr_omits_source_text(tmp_path: Path) -> None:
    path = tmp_path / "a.js"
    path.write_text("secret();", encoding="utf-8")

    loaded = SourceFile.load(path, ModuleIdSettings())

    assert "secret" not in repr(loaded)
    assert "module_id" in repr(loaded)


def test_missing_file_raises_source_read_error(tmp_path: Path) -> None:
    with pytest.raises(SourceReadError):
        SourceFile.load(tmp_path / "missing.js", ModuleIdSettings())


def test_undecodable_file_raises_source_read_error(tmp_path: Path) -> None:
    path = tmp_path / "binary.js"
    path.write_bytes(b"\xff\xfe\x00bad")

    with pytest.raises(SourceReadError):
        SourceFile.load(path, ModuleIdSettings())
