"""Configuration for :mod:`dojodoc`.

Settings come from four layers, later ones winning: the packaged
``dojodoc.defaults.toml``, a user ``dojodoc.toml``, ``DOJODOC_*``
environment variables and CLI flags. Tables are merged key by key so a
layer only has to spell out what it changes.
"""

from __future__ import annotations

from collections.abc import Mapping
import os
from pathlib import Path
from typing import Any

import tomllib
import tomlkit
from pydantic import BaseModel, Field, ValidationError, field_validator

from dojodoc.core.logging import LOG_LEVELS
from dojodoc.resources import get_resource

DEFAULTS_RESOURCE_NAME = "dojodoc.defaults.toml"
CONFIG_FILENAME = "dojodoc.toml"
ENV_PREFIX = "DOJODOC_"

# Environment variable suffix -> dotted settings path.
_ENV_SETTINGS = {
    "LOG_LEVEL": ("log_level",),
    "LOG_FILE": ("log_file",),
    "BASE_URL": ("modules", "base_url"),
}

_STRICT_MODEL = {
    "extra": "forbid",
    "str_strip_whitespace": True,
    "validate_assignment": True,
}


class ConfigLoadError(RuntimeError):
    """Raised when configuration cannot be read, parsed or validated."""


class ModuleIdSettings(BaseModel):
    """How file paths map onto module identifiers."""

    base_url: str = Field(
        default="",
        description="Directory prefixed to every prefix_map entry.",
    )
    prefix_map: dict[str, str] = Field(
        default_factory=dict,
        description="Module name mapped to its path below base_url.",
    )

    model_config = _STRICT_MODEL


class AppConfig(BaseModel):
    """Root settings object handed to every CLI command."""

    log_level: str = Field(
        default="WARNING",
        description="Minimum level of log events that are emitted.",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional file receiving JSON-rendered log events.",
    )
    modules: ModuleIdSettings = Field(
        default_factory=ModuleIdSettings,
        description="Module identifier resolution settings.",
    )

    model_config = _STRICT_MODEL

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unsupported log level: {value!r}")
        return level


def read_packaged_defaults_text() -> str:
    """Return the packaged ``dojodoc.defaults.toml`` verbatim."""

    return get_resource(DEFAULTS_RESOURCE_NAME).read_text(encoding="utf-8")


def load_packaged_defaults() -> dict[str, Any]:
    """Parse the packaged defaults.

    Example:
        >>> load_packaged_defaults()["log_level"]
        'WARNING'
    """

    return tomllib.loads(read_packaged_defaults_text())


def read_user_config(path: Path) -> dict[str, Any]:
    """Parse a user ``dojodoc.toml``.

    Raises:
        ConfigLoadError: If the file cannot be read or is not valid TOML.
    """

    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except OSError as exc:
        raise ConfigLoadError(f"Cannot read config {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigLoadError(f"Invalid TOML in {path}: {exc}") from exc


def env_overrides(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Collect non-empty ``DOJODOC_*`` variables as a nested settings layer.

    Example:
        >>> env_overrides({"DOJODOC_BASE_URL": "/src/"})
        {'modules': {'base_url': '/src/'}}
    """

    environ = os.environ if environ is None else environ
    layer: dict[str, Any] = {}
    for suffix, path in _ENV_SETTINGS.items():
        value = environ.get(ENV_PREFIX + suffix)
        if not value:
            continue
        *parents, leaf = path
        table = layer
        for parent in parents:
            table = table.setdefault(parent, {})
        table[leaf] = value
    return layer


def _overlay(base: Mapping[str, Any], layer: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``base`` updated with ``layer``, merging nested tables."""

    result = dict(base)
    for key, value in layer.items():
        current = result.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            value = _overlay(current, value)
        result[key] = value
    return result


def load_config(
    *,
    defaults: Mapping[str, Any],
    user_config: Mapping[str, Any] | None = None,
    env_config: Mapping[str, Any] | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> AppConfig:
    """Validate the merged settings layers.

    Args:
        defaults: Packaged defaults shipped with the application.
        user_config: Parsed user ``dojodoc.toml`` content.
        env_config: Layer built by :func:`env_overrides`.
        cli_overrides: Settings supplied via CLI flags.

    Raises:
        ConfigLoadError: If the merged settings fail validation.
    """

    merged: dict[str, Any] = dict(defaults)
    for layer in (user_config, env_config, cli_overrides):
        merged = _overlay(merged, layer or {})

    try:
        return AppConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigLoadError(f"Invalid configuration: {exc}") from exc


def render_user_config(config: AppConfig) -> str:
    """Render ``config`` as a commented ``dojodoc.toml``."""

    document = tomlkit.document()
    document.add(tomlkit.comment("Generated by dojodoc init"))
    document.add(
        tomlkit.comment("Later layers win: defaults, this file, DOJODOC_* env, CLI flags")
    )
    for suffix in _ENV_SETTINGS:
        document.add(tomlkit.comment(f"  {ENV_PREFIX}{suffix}"))
    document.add(tomlkit.nl())

    document["log_level"] = config.log_level
    if config.log_file is not None:
        document["log_file"] = str(config.log_file)

    modules = tomlkit.table()
    modules["base_url"] = config.modules.base_url
    prefix_map = tomlkit.table()
    for name, prefix in sorted(config.modules.prefix_map.items()):
        prefix_map[name] = prefix
    modules["prefix_map"] = prefix_map
    document["modules"] = modules

    return tomlkit.dumps(document)


__all__ = [
    "AppConfig",
    "CONFIG_FILENAME",
    "ConfigLoadError",
    "DEFAULTS_RESOURCE_NAME",
    "ENV_PREFIX",
    "ModuleIdSettings",
    "env_overrides",
    "load_config",
    "load_packaged_defaults",
    "read_packaged_defaults_text",
    "read_user_config",
    "render_user_config",
]
