"""Source text preprocessing applied before parsing."""

from __future__ import annotations

import re

__all__ = ["STUB_MARKER_PATTERN", "process_source"]

# ``/*=====`` and ``=====*/`` fence code that only exists for documentation.
STUB_MARKER_PATTERN = re.compile(r"/\*={5,}|={5,}\*/")


def process_source(source: str) -> str:
    """Strip documentation stub markers, keeping the fenced code.

    Removal is repeated until nothing changes, so applying the function to
    its own output is a no-op.

    Example:
        >>> process_source("/*=====\\nvar stub = {};\\n=====*/")
        '\\nvar stub = {};\\n'
    """

    while True:
        processed = STUB_MARKER_PATTERN.sub("", source)
        if processed == source:
            return processed
        source = processed
