"""Public package surface for fileselector.

Exports the selection registry and its value types. ``main`` lazily imports
the CLI entrypoint to keep package imports lightweight.
"""

from __future__ import annotations

from .content import FileContentRecord
from .errors import (
    FileSelectorError,
    ListerError,
    MissingProviderError,
    ProviderError,
    UnknownProviderError,
)
from .events import EventBus, SelectionEvent
from .paths import normalize_path
from .selector import SCRATCH_BUFFER_PREFIX, FileSelector


def main(*args, **kwargs):
    """Lazily import CLI entrypoint."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "EventBus",
    "FileContentRecord",
    "FileSelector",
    "FileSelectorError",
    "ListerError",
    "MissingProviderError",
    "ProviderError",
    "SCRATCH_BUFFER_PREFIX",
    "SelectionEvent",
    "UnknownProviderError",
    "main",
    "normalize_path",
]
