"""Source files loaded for documentation."""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path

from dojodoc.core.config import ModuleIdSettings

from .errors import SourceReadError
from .module_ids import module_id_from_path
from .preprocess import process_source

__all__ = ["SourceFile"]


@dataclass(frozen=True, slots=True)
class SourceFile:
    """A source file with its module identifier and preprocessed text.

    ``source`` is left out of the repr to keep debug output readable.
    """

    filename: Path
    module_id: str
    source: str = field(default="", repr=False)

    @classmethod
    def load(
        cls,
        filename: str | os.PathLike[str],
        settings: ModuleIdSettings,
    ) -> "SourceFile":
        """Read ``filename`` as UTF-8 and strip documentation markers.

        Raises:
            SourceReadError: If the file cannot be read or decoded.
        """

        path = Path(filename).expanduser().resolve(strict=False)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceReadError(f"Failed to read {path}: {exc}") from exc

        return cls(
            filename=path,
            module_id=module_id_from_path(path, settings),
            source=process_source(text),
        )
