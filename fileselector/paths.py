"""Project-relative path normalization.

Every selection entry is keyed by the string returned from ``normalize_path``.
Inputs may be relative to the project root or absolute, may carry ``./``,
``..``, doubled or trailing separators, and may go through symlinks; all
spellings of one filesystem entity collapse to one key.
"""

from __future__ import annotations

import os
from pathlib import Path


def is_within(path: Path, root: Path) -> bool:
    """Return whether ``path`` is at or under ``root`` (both already resolved)."""
    try:
        path.relative_to(root)
        return True
    except ValueError:
        return False


def absolute_path(path: str | os.PathLike[str], project_root: Path) -> Path:
    """Resolve ``path`` against ``project_root`` into an absolute resolved path."""
    raw = Path(os.path.expanduser(os.fspath(path)))
    if not raw.is_absolute():
        raw = project_root / raw
    return raw.resolve()


def normalize_path(path: str | os.PathLike[str], project_root: Path) -> str:
    """Return the canonical selection key for ``path``.

    Paths under ``project_root`` become POSIX paths relative to it. Paths
    outside the root keep their resolved absolute POSIX form. The project
    root itself normalizes to ``"."``.
    """
    root = project_root.resolve()
    resolved = absolute_path(path, root)
    if is_within(resolved, root):
        return resolved.relative_to(root).as_posix()
    return resolved.as_posix()


def strip_directory_suffix(label: str) -> str:
    """Drop trailing separators that picker labels put on directories."""
    stripped = label.rstrip("/")
    if not stripped and label:
        return "/"
    return stripped


__all__ = [
    "absolute_path",
    "is_within",
    "normalize_path",
    "strip_directory_suffix",
]
