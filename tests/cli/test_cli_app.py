"""Integration tests for the Typer application exposed by :mod:`dojodoc.cli`."""

from __future__ import annotations

import json
import tomllib
from pathlib import Path

import pytest
from typer.testing import CliRunner

from dojodoc.cli import create_app


@pytest.fixture()
def runner() -> CliRunner:
    """Return a Typer CLI runner for invoking the application."""

    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_cwd(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Keep a stray ./dojodoc.toml or DOJODOC_* variable out of each test."""

    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DOJODOC_LOG_LEVEL", raising=False)
    monkeypatch.delenv("DOJODOC_BASE_URL", raising=False)
    return tmp_path


def test_init_writes_config_once(runner: CliRunner, tmp_path: Path) -> None:
    target = tmp_path / "project"
    app = create_app()

    first = runner.invoke(app, ["init", "--path", str(target)], catch_exceptions=False)
    second = runner.invoke(app, ["init", "--path", str(target)], catch_exceptions=False)

    assert first.exit_code == 0
    assert "Wrote" in first.stdout
    rendered = tomllib.loads((target / "dojodoc.toml").read_text(encoding="utf-8"))
    assert rendered["log_level"] == "WARNING"
    assert second.exit_code == 0
    assert "already exists" in second.stdout


def test_init_force_applies_log_level_flag(runner: CliRunner, tmp_path: Path) -> None:
    app = create_app()
    runner.invoke(app, ["init"], catch_exceptions=False)

    result = runner.invoke(
        app,
        ["--log-level", "error", "init", "--force"],
        catch_exceptions=False,
    )

    assert result.exit_code == 0
    rendered = tomllib.loads((tmp_path / "dojodoc.toml").read_text(encoding="utf-8"))
    assert rendered["log_level"] == "ERROR"


def test_module_id_uses_config_file(runner: CliRunner, tmp_path: Path) -> None:
    config = tmp_path / "custom.toml"
    config.write_text(
        '[modules]\nbase_url = "/project/src/"\n\n[modules.prefix_map]\nmyapp = ""\n',
        encoding="utf-8",
    )

    result = runner.invoke(
        create_app(),
        [
            "--config",
            str(config),
            "module-id",
            "/project/src/foo/bar.js",
            "/project/src/main.js",
        ],
        catch_exceptions=False,
    )

    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["myapp/foo/bar", "myapp"]


def test_module_id_reads_config_from_working_directory(
    runner: CliRunner,
    tmp_path: Path,
) -> None:
    (tmp_path / "dojodoc.toml").write_text(
        '[modules]\nbase_url = "/p/"\n\n[modules.prefix_map]\nx = "lib"\n',
        encoding="utf-8",
    )

    result = runner.invoke(create_app(), ["module-id", "/p/lib/a.js"])

    assert result.stdout.strip() == "x/a"


def test_comment_from_stdin_prints_json(runner: CliRunner) -> None:
    result = runner.invoke(
        create_app(),
        ["comment", "-"],
        input=" summary: Adds.\n a: Number?\n     Left operand.\n",
        catch_exceptions=False,
    )

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["summary"] == "Adds."
    assert payload["properties"]["a"] == {
        "type": "Number?",
        "summary": "Left operand.",
        "description": "",
        "tags": [],
        "is_optional": True,
    }


def test_comment_for_key_filters_properties(runner: CliRunner, tmp_path: Path) -> None:
    comment = tmp_path / "comment.txt"
    comment.write_text(" a: Number\n b: String\n", encoding="utf-8")

    result = runner.invoke(
        create_app(),
        ["comment", str(comment), "--for-key", "b"],
        catch_exceptions=False,
    )

    payload = json.loads(result.stdout)
    assert list(payload["properties"]) == ["b"]


def test_comment_missing_file_fails(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(create_app(), ["comment", str(tmp_path / "nope.txt")])

    assert result.exit_code == 1
    assert "Failed to read" in result.output


def test_preprocess_prints_stripped_source(runner: CliRunner, tmp_path: Path) -> None:
    source = tmp_path / "stub.js"
    source.write_text("/*=====\nvar stub;\n=====*/\n", encoding="utf-8")

    result = runner.invoke(create_app(), ["preprocess", str(source)], catch_exceptions=False)

    assert result.exit_code == 0
    assert result.stdout == "\nvar stub;\n\n"


def test_malformed_config_exits_with_error(runner: CliRunner, tmp_path: Path) -> None:
    config = tmp_path / "broken.toml"
    config.write_text("log_level = ", encoding="utf-8")

    result = runner.invoke(create_app(), ["--config", str(config), "module-id", "a.js"])

    assert result.exit_code == 1
    assert "Configuration error" in result.output


def test_unknown_log_level_exits_with_error(
    runner: CliRunner,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("DOJODOC_LOG_LEVEL", "chatty")

    result = runner.invoke(create_app(), ["module-id", "a.js"])

    assert result.exit_code == 1
    assert "Unsupported log level" in result.output


def test_document_prints_tree(runner: CliRunner, tmp_path: Path) -> None:
    pytest.importorskip("tree_sitter_languages")
    source = tmp_path / "add.js"
    source.write_text(
        "function add(/*Number*/ a, /*Number*/ b) {\n"
        "    // summary:\n"
        "    //     Adds two numbers.\n"
        "    return a + b;\n"
        "}\n",
        encoding="utf-8",
    )

    result = runner.invoke(create_app(), ["document", str(source)], catch_exceptions=False)

    assert result.exit_code == 0
    assert "add" in result.stdout
    assert "Adds two numbers." in result.stdout
    assert "Number" in result.stdout


def test_document_missing_file_fails(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(create_app(), ["document", str(tmp_path / "nope.js")])

    assert result.exit_code == 1
