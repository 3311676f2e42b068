"""Source file loading, preprocessing and module identifiers."""

from __future__ import annotations

from .errors import SourceError, SourceReadError
from .files import SourceFile
from .module_ids import module_id_from_path, resolve_relative_id
from .preprocess import process_source

__all__ = [
    "SourceError",
    "SourceFile",
    "SourceReadError",
    "module_id_from_path",
    "process_source",
    "resolve_relative_id",
]
