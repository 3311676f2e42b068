"""Helpers for the ``dojodoc init`` command."""

from __future__ import annotations

from pathlib import Path

from dojodoc.core.config import (
    CONFIG_FILENAME,
    AppConfig,
    render_user_config,
)


def init_config(
    *,
    directory: Path,
    config: AppConfig,
    force: bool = False,
) -> tuple[Path, bool]:
    """Write a ``dojodoc.toml`` template into ``directory``.

    Example:
        >>> from pathlib import Path
        >>> path, written = init_config(  # doctest: +SKIP
        ...     directory=Path("/tmp/dojodoc-example"), config=AppConfig()
        ... )

    Args:
        directory: Target directory; created when missing.
        config: Settings rendered into the template.
        force: Overwrite an existing ``dojodoc.toml``.

    Returns:
        The config path and whether it was (re)written.
    """

    directory = directory.expanduser()
    directory.mkdir(parents=True, exist_ok=True)

    config_path = directory / CONFIG_FILENAME
    if config_path.exists() and not force:
        return config_path, False

    config_path.write_text(render_user_config(config), encoding="utf-8")
    return config_path, True


__all__ = ["init_config"]
