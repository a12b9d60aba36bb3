"""Filesystem collaborators: path classification and recursive listing.

``list_files`` prefers ``rg --files`` for plain file listings and falls back
to a breadth-first walk filtered through ``git check-ignore``. Both paths return
resolved absolute paths ordered by their case-folded project-relative label.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from .errors import ListerError
from .gitignore import GIT_METADATA_DIR, GitIgnoreFilter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegularFile:
    """Stat result for anything that exists and is not a directory."""

    path: Path


@dataclass(frozen=True)
class Directory:
    """Stat result for an existing directory."""

    path: Path


StatResult = RegularFile | Directory | None


def stat_path(path: Path) -> StatResult:
    """Classify ``path``; ``None`` when it does not exist or cannot be stat'ed."""
    try:
        is_dir = path.is_dir()
        exists = is_dir or path.exists()
    except OSError:
        return None
    if not exists:
        return None
    if is_dir:
        return Directory(path)
    return RegularFile(path)


def _relative_label(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def _has_hidden_part(path: Path, root: Path) -> bool:
    try:
        parts = path.relative_to(root).parts
    except ValueError:
        return False
    return any(part.startswith(".") for part in parts)


def _list_files_rg(root: Path, respect_ignore_rules: bool, include_hidden: bool) -> list[Path] | None:
    """List files with ripgrep; ``None`` when rg is missing or fails."""
    if shutil.which("rg") is None:
        return None

    cmd = ["rg", "--files"]
    if not respect_ignore_rules:
        cmd.append("--no-ignore")
    if include_hidden:
        cmd.extend(["--hidden", "--glob", f"!{GIT_METADATA_DIR}"])

    try:
        proc = subprocess.run(
            cmd,
            cwd=root,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        logger.debug("rg --files failed under %s: %s", root, exc)
        return None

    files: list[Path] = []
    for raw in proc.stdout.splitlines():
        if not raw:
            continue
        path = root / raw
        if GIT_METADATA_DIR in Path(raw).parts:
            continue
        if not include_hidden and _has_hidden_part(path, root):
            continue
        resolved = path.resolve()
        if resolved.is_file():
            files.append(resolved)
    return files


def _scan_level(directories: list[Path], include_hidden: bool) -> list[tuple[Path, bool]]:
    """Children of every directory in one depth level as ``(path, is_dir)``."""
    entries: list[tuple[Path, bool]] = []
    for directory in directories:
        try:
            with os.scandir(directory) as it:
                for entry in it:
                    if entry.name == GIT_METADATA_DIR:
                        continue
                    if not include_hidden and entry.name.startswith("."):
                        continue
                    try:
                        is_dir = entry.is_dir(follow_symlinks=False)
                    except OSError:
                        continue
                    entries.append((directory / entry.name, is_dir))
        except OSError as exc:
            logger.warning("skipping unreadable directory %s: %s", directory, exc.strerror or exc)
    return entries


def _list_walk(
    root: Path,
    respect_ignore_rules: bool,
    include_hidden: bool,
    include_directories: bool,
) -> list[Path]:
    ignore_filter = GitIgnoreFilter.for_directory(root) if respect_ignore_rules else None

    found: list[Path] = []
    level = [root]
    while level:
        entries = _scan_level(level, include_hidden)
        ignored = ignore_filter.ignored(entries) if ignore_filter is not None else set()
        level = []
        for path, is_dir in entries:
            if path in ignored:
                continue
            if is_dir:
                level.append(path)
                if include_directories:
                    found.append(path.resolve())
                continue
            resolved = path.resolve()
            if resolved.is_file():
                found.append(resolved)
    return found


def list_files(
    root: Path,
    *,
    respect_ignore_rules: bool = True,
    include_hidden: bool = False,
    include_directories: bool = False,
) -> list[Path]:
    """Recursively list regular files (and optionally directories) under ``root``.

    Raises ``ListerError`` when ``root`` is not a readable directory.
    Unreadable nested directories are skipped with a warning.
    """
    root = root.resolve()
    try:
        with os.scandir(root):
            pass
    except OSError as exc:
        raise ListerError(root, exc.strerror or str(exc)) from exc

    paths: list[Path] | None = None
    if not include_directories:
        paths = _list_files_rg(root, respect_ignore_rules, include_hidden)
    if paths is None:
        paths = _list_walk(root, respect_ignore_rules, include_hidden, include_directories)

    return sorted(paths, key=lambda path: _relative_label(path, root).casefold())


__all__ = [
    "Directory",
    "RegularFile",
    "StatResult",
    "list_files",
    "stat_path",
]
