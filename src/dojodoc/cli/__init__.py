"""Command-line interface primitives for :mod:`dojodoc`.

This module exposes the Typer application behind the ``dojodoc`` console
script and wires its commands into the comment parser, the source helpers
and the document driver.

Example:
    >>> import typer
    >>> from dojodoc.cli import create_app
    >>> app = create_app()
    >>> isinstance(app, typer.Typer)
    True
"""

from __future__ import annotations

from dataclasses import dataclass
import json
import os
from pathlib import Path
import sys

from rich.console import Console
import typer

from dojodoc.cli.init import init_config
from dojodoc.cli.render import metadata_to_dict, module_tree
from dojodoc.comments import parse_comment
from dojodoc.core.config import (
    CONFIG_FILENAME,
    AppConfig,
    ConfigLoadError,
    env_overrides,
    load_config,
    load_packaged_defaults,
    read_user_config,
)
from dojodoc.core.logging import Logger, configure_logging, get_logger
from dojodoc.document import document_file
from dojodoc.source import (
    SourceReadError,
    module_id_from_path,
    process_source,
)
from dojodoc.syntax import SyntaxBackendUnavailableError

_app_help = (
    "Parse dojodoc comments and bind them to JavaScript values."
    "\n\n"
    "Use `dojodoc init` to write a `dojodoc.toml` with module prefixes."
)

_STDIN = "-"


@dataclass(slots=True)
class CLIContext:
    """Settings shared by every ``dojodoc`` subcommand."""

    config: AppConfig
    logger: Logger


def _fail(message: str) -> typer.Exit:
    typer.secho(message, fg=typer.colors.RED, err=True)
    return typer.Exit(code=1)


def _require_context(ctx: typer.Context) -> CLIContext:
    if not isinstance(ctx.obj, CLIContext):  # pragma: no cover
        raise _fail("Internal error: CLI context not initialized.")
    return ctx.obj


def _read_text(path: str) -> str:
    """Read ``path`` as UTF-8, or standard input for ``-``."""

    if path == _STDIN:
        return sys.stdin.read()
    try:
        return Path(path).expanduser().read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(f"Failed to read {path}: {exc}") from exc


def _load_app_config(
    config_path: Path | None,
    log_level: str | None,
) -> AppConfig:
    """Apply the defaults < file < env < flags precedence stack."""

    user_config = None
    if config_path is not None:
        user_config = read_user_config(config_path.expanduser())
    elif Path(CONFIG_FILENAME).is_file():
        user_config = read_user_config(Path(CONFIG_FILENAME))

    return load_config(
        defaults=load_packaged_defaults(),
        user_config=user_config,
        env_config=env_overrides(os.environ),
        cli_overrides={"log_level": log_level} if log_level else None,
    )


def create_app() -> typer.Typer:
    """Create the Typer application for the ``dojodoc`` CLI.

    Example:
        >>> cli = create_app()
        >>> isinstance(cli, typer.Typer)
        True

    Returns:
        A configured Typer application ready to be invoked by ``dojodoc``.
    """

    app = typer.Typer(
        help=_app_help,
        no_args_is_help=True,
        rich_markup_mode="rich",
        invoke_without_command=False,
        cls=typer.core.TyperGroup,
    )

    @app.callback()
    def main_callback(
        ctx: typer.Context,
        config_path: Path | None = typer.Option(
            None,
            "--config",
            "-c",
            help=f"Path to a {CONFIG_FILENAME} (defaults to ./{CONFIG_FILENAME}).",
        ),
        log_level: str | None = typer.Option(
            None,
            "--log-level",
            "-l",
            help="Override the logging level (DEBUG/INFO/WARNING/ERROR).",
        ),
    ) -> None:
        """Load configuration and logging for every subcommand."""

        try:
            config = _load_app_config(config_path, log_level)
        except ConfigLoadError as exc:
            raise _fail(f"Configuration error: {exc}") from exc

        try:
            configure_logging(level=config.log_level, log_file=config.log_file)
        except ValueError as exc:
            raise _fail(f"Configuration error: {exc}") from exc

        ctx.obj = CLIContext(
            config=config,
            logger=get_logger(__name__, command=ctx.invoked_subcommand),
        )

    @app.command(
        "init",
        help=f"Write a {CONFIG_FILENAME} template.",
    )
    def init_command(
        ctx: typer.Context,
        path: Path = typer.Option(
            Path("."),
            "--path",
            "-p",
            help=f"Directory receiving {CONFIG_FILENAME}.",
        ),
        force: bool = typer.Option(
            False,
            "--force",
            help=f"Overwrite an existing {CONFIG_FILENAME}.",
        ),
    ) -> None:
        state = _require_context(ctx)
        try:
            config_path, written = init_config(
                directory=path,
                config=state.config,
                force=force,
            )
        except OSError as exc:
            raise _fail(f"Failed to write config: {exc}") from exc

        state.logger.info("init-complete", path=str(config_path), written=written)
        if written:
            typer.secho(f"Wrote {config_path}", fg=typer.colors.GREEN)
        else:
            typer.secho(
                f"{config_path} already exists; use --force to overwrite.",
                fg=typer.colors.YELLOW,
            )

    @app.command(
        "module-id",
        help="Print the module identifier of each path.",
    )
    def module_id_command(
        ctx: typer.Context,
        paths: list[str] = typer.Argument(..., metavar="PATH..."),
    ) -> None:
        state = _require_context(ctx)
        for path in paths:
            typer.echo(module_id_from_path(path, state.config.modules))

    @app.command(
        "comment",
        help="Parse a dojodoc comment block and print it as JSON.",
    )
    def comment_command(
        ctx: typer.Context,
        file: str = typer.Argument(..., help="Comment text file, or - for stdin."),
        for_key: str | None = typer.Option(
            None,
            "--for-key",
            "-k",
            help="Only read the block documenting this property.",
        ),
    ) -> None:
        state = _require_context(ctx)
        try:
            text = _read_text(file)
        except SourceReadError as exc:
            raise _fail(str(exc)) from exc

        metadata = parse_comment(text, for_key=for_key)
        state.logger.debug(
            "comment-parsed",
            properties=sorted(metadata.properties),
            for_key=for_key,
        )
        typer.echo(json.dumps(metadata_to_dict(metadata), indent=2))

    @app.command(
        "preprocess",
        help="Print a source file with documentation stub markers removed.",
    )
    def preprocess_command(
        ctx: typer.Context,
        file: str = typer.Argument(..., help="Source file, or - for stdin."),
    ) -> None:
        _require_context(ctx)
        try:
            text = _read_text(file)
        except SourceReadError as exc:
            raise _fail(str(exc)) from exc
        typer.echo(process_source(text), nl=False)

    @app.command(
        "document",
        help="Document a JavaScript file and print the bound metadata.",
    )
    def document_command(
        ctx: typer.Context,
        file: Path = typer.Argument(..., help="JavaScript source file."),
    ) -> None:
        state = _require_context(ctx)
        try:
            module = document_file(file, state.config.modules, logger=state.logger)
        except (SourceReadError, SyntaxBackendUnavailableError) as exc:
            raise _fail(str(exc)) from exc

        Console(soft_wrap=True).print(module_tree(module))

    return app


__all__ = ["CLIContext", "create_app"]
