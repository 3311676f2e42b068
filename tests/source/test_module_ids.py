"""Tests for :mod:`dojodoc.source.module_ids`."""

from __future__ import annotations

from pathlib import PurePosixPath

import pytest

from dojodoc.core.config import ModuleIdSettings
from dojodoc.source import module_id_from_path, resolve_relative_id


@pytest.fixture()
def settings() -> ModuleIdSettings:
    return ModuleIdSettings(base_url="/project/src/", prefix_map={"myapp": ""})


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("a/b/../c", "a/c"),
        ("a/../../b", "b"),
        ("./a/./b", "a/b"),
        ("/x/../../y", "/y"),
        ("a/b/c", "a/b/c"),
    ],
)
def test_resolve_relative_id(path: str, expected: str) -> None:
    assert resolve_relative_id(path) == expected


def test_module_id_under_prefix(settings: ModuleIdSettings) -> None:
    assert module_id_from_path("/project/src/foo/bar.js", settings) == "myapp/foo/bar"


def test_main_file_names_the_module(settings: ModuleIdSettings) -> None:
    assert module_id_from_path("/project/src/main.js", settings) == "myapp"


def test_relative_segments_are_collapsed_first(settings: ModuleIdSettings) -> None:
    path = "/project/lib/../src/foo/./bar.js"

    assert module_id_from_path(path, settings) == "myapp/foo/bar"


def test_pure_paths_are_accepted(settings: ModuleIdSettings) -> None:
    path = PurePosixPath("/project/src/widgets/Button.js")

    assert module_id_from_path(path, settings) == "myapp/widgets/Button"


def test_longest_prefix_wins() -> None:
    settings = ModuleIdSettings(
        base_url="/project/",
        prefix_map={"app": "src", "dijit": "src/vendor/dijit"},
    )

    assert (
        module_id_from_path("/project/src/vendor/dijit/form/Button.js", settings)
        == "dijit/form/Button"
    )
    assert module_id_from_path("/project/src/views/Home.js", settings) == "app/views/Home"


def test_prefix_does_not_match_partial_directory_names() -> None:
    settings = ModuleIdSettings(base_url="/project/", prefix_map={"app": "src"})

    assert module_id_from_path("/project/srcfoo/x.js", settings) == "project/srcfoo/x"


def test_paths_outside_every_prefix_are_cleaned(settings: ModuleIdSettings) -> None:
    assert module_id_from_path("/elsewhere/util.js", settings) == "elsewhere/util"
