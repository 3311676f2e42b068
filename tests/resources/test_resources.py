"""Tests for :mod:`dojodoc.resources`."""

from __future__ import annotations

import pytest

from dojodoc.core.config import DEFAULTS_RESOURCE_NAME
from dojodoc.resources import get_resource


def test_get_resource_missing_file_raises() -> None:
    with pytest.raises(FileNotFoundError):
        get_resource("does-not-exist.toml")


def test_defaults_resource_is_packaged() -> None:
    text = get_resource(DEFAULTS_RESOURCE_NAME).read_text(encoding="utf-8")

    assert "log_level" in text
    assert "[modules]" in text
