"""Decide from a file name whether it is scanned and with which ecosystem."""

from __future__ import annotations

import os

from surfacemap.scanner.models import Ecosystem

# File extension → ecosystem mapping
SOURCE_EXTENSIONS: dict[str, Ecosystem] = {
    ".go": Ecosystem.GO,
    ".py": Ecosystem.PYTHON,
    ".js": Ecosystem.JAVASCRIPT,
    ".ts": Ecosystem.JAVASCRIPT,
    ".jsx": Ecosystem.JAVASCRIPT,
    ".tsx": Ecosystem.JAVASCRIPT,
}


def classify(path: str | os.PathLike[str]) -> tuple[bool, Ecosystem | None]:
    """Return (in_scope, ecosystem) for a path, from its extension alone."""
    ext = os.path.splitext(os.fspath(path))[1]
    ecosystem = SOURCE_EXTENSIONS.get(ext)
    return ecosystem is not None, ecosystem
