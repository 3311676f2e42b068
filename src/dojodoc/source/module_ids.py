"""Derive module identifiers from file paths."""

from __future__ import annotations

import os
from pathlib import PurePath
import re

from dojodoc.core.config import ModuleIdSettings

__all__ = ["module_id_from_path", "resolve_relative_id"]

_ID_CLEANUP = re.compile(r"^/|\.js$")


def resolve_relative_id(path: str) -> str:
    """Collapse ``.`` and ``..`` segments of a slash-separated path.

    ``..`` segments that would climb above the start of the path are
    dropped.

    Example:
        >>> resolve_relative_id("a/b/../c")
        'a/c'
        >>> resolve_relative_id("a/../../b")
        'b'
    """

    result: list[str] = []
    for segment in path.split("/"):
        if segment == "..":
            # The empty first segment of an absolute path is the root.
            if result and result != [""]:
                result.pop()
        elif segment != ".":
            result.append(segment)
    return "/".join(result)


def _as_posix(path: str | os.PathLike[str]) -> str:
    if isinstance(path, PurePath):
        return path.as_posix()
    return os.fspath(path)


def module_id_from_path(
    path: str | os.PathLike[str],
    settings: ModuleIdSettings,
) -> str:
    """Return the module identifier for ``path``.

    The longest ``base_url + prefix`` that contains the path wins; a file
    named ``main.js`` directly under that prefix is the module itself.
    Paths outside every prefix map to their cleaned relative form.

    Example:
        >>> settings = ModuleIdSettings(
        ...     base_url="/project/src/", prefix_map={"myapp": ""}
        ... )
        >>> module_id_from_path("/project/src/foo/bar.js", settings)
        'myapp/foo/bar'
        >>> module_id_from_path("/project/src/main.js", settings)
        'myapp'
    """

    resolved = resolve_relative_id(_as_posix(path))

    match: tuple[str, str] | None = None
    for module, prefix in settings.prefix_map.items():
        path_prefix = settings.base_url + prefix
        # Avoid matching partial directory names.
        if not path_prefix.endswith("/"):
            path_prefix += "/"
        if not resolved.startswith(path_prefix):
            continue
        if match is None or len(path_prefix) > len(match[1]):
            match = (module, path_prefix)

    if match is None:
        return _ID_CLEANUP.sub("", resolved)

    module, path_prefix = match
    remainder = _ID_CLEANUP.sub("", resolved[len(path_prefix):])
    if remainder == "main":
        return module
    return f"{module}/{remainder}"
