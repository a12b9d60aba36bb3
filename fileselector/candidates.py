"""Picker candidate labels for a project tree.

Labels are project-relative POSIX paths; directories end with ``/`` so a
picker can offer them for expansion.
"""

from __future__ import annotations

from collections.abc import Callable, Container
from pathlib import Path

from .filesystem import list_files as default_list_files
from .paths import normalize_path


def _label(path: Path, root: Path) -> str:
    label = normalize_path(path, root)
    if path.is_dir():
        return f"{label}/"
    return label


def collect_candidates(
    root: Path,
    *,
    include_hidden: bool = True,
    respect_ignore_rules: bool = True,
    list_files: Callable[..., list[Path]] = default_list_files,
) -> list[str]:
    """Return every file and directory under ``root`` as a picker label."""
    root = root.resolve()
    paths = list_files(
        root,
        respect_ignore_rules=respect_ignore_rules,
        include_hidden=include_hidden,
        include_directories=True,
    )
    return [_label(path, root) for path in paths]


def sorted_candidates(
    root: Path,
    *,
    respect_ignore_rules: bool = True,
    list_files: Callable[..., list[Path]] = default_list_files,
) -> list[str]:
    """Return candidate labels with directories first, then by path."""
    labels = collect_candidates(
        root,
        include_hidden=False,
        respect_ignore_rules=respect_ignore_rules,
        list_files=list_files,
    )
    return sorted(labels, key=lambda label: (not label.endswith("/"), label))


def unselected(labels: list[str], selected: Container[str]) -> list[str]:
    """Drop labels whose path is already selected."""
    return [label for label in labels if label not in selected]


__all__ = ["collect_candidates", "sorted_candidates", "unselected"]
