"""Ask git which listed paths are ignored.

Nothing is cached between listings. A ``GitIgnoreFilter`` is bound to one
work tree for the duration of a single ``list_files`` call, and each batch of
sibling entries goes to ``git check-ignore --stdin`` in one subprocess, so
a walk costs one git call per directory depth rather than one per entry.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

from .paths import is_within

logger = logging.getLogger(__name__)

GIT_METADATA_DIR = ".git"


def git_toplevel(path: Path) -> Path | None:
    """Return the resolved work tree root containing ``path``, if any."""
    if shutil.which("git") is None:
        return None
    try:
        proc = subprocess.run(
            ["git", "-C", str(path), "rev-parse", "--show-toplevel"],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    top_level = proc.stdout.decode("utf-8", errors="replace").strip()
    if not top_level:
        return None
    return Path(top_level).resolve()


class GitIgnoreFilter:
    """Batch ignore checks against one git work tree.

    Tracked files are never reported as ignored, matching git's own view.
    """

    def __init__(self, work_tree: Path) -> None:
        self.work_tree = work_tree

    @classmethod
    def for_directory(cls, root: Path) -> GitIgnoreFilter | None:
        """Filter for the work tree around ``root``; ``None`` outside git."""
        work_tree = git_toplevel(root)
        if work_tree is None or not is_within(root.resolve(), work_tree):
            return None
        return cls(work_tree)

    def ignored(self, entries: Sequence[tuple[Path, bool]]) -> set[Path]:
        """Return the ignored paths among ``(path, is_dir)`` entries.

        Paths come back exactly as passed in. A failing git call ignores
        nothing rather than dropping the whole batch.
        """
        if not entries:
            return set()

        by_key: dict[str, Path] = {}
        payload: list[bytes] = []
        for path, is_dir in entries:
            try:
                rel = path.relative_to(self.work_tree).as_posix()
            except ValueError:
                continue
            by_key[rel] = path
            # Directory-only patterns such as "build/" need the trailing slash.
            payload.append(os.fsencode(f"{rel}/" if is_dir else rel))
        if not payload:
            return set()

        try:
            proc = subprocess.run(
                ["git", "-C", str(self.work_tree), "check-ignore", "-z", "--stdin"],
                input=b"\x00".join(payload) + b"\x00",
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except OSError as exc:
            logger.debug("git check-ignore failed under %s: %s", self.work_tree, exc)
            return set()

        # 0: some paths ignored, 1: none ignored, anything else is a git error.
        if proc.returncode == 1:
            return set()
        if proc.returncode != 0:
            logger.debug("git check-ignore exited %s under %s", proc.returncode, self.work_tree)
            return set()

        ignored: set[Path] = set()
        for raw in proc.stdout.split(b"\x00"):
            key = os.fsdecode(raw).rstrip("/")
            if key in by_key:
                ignored.add(by_key[key])
        return ignored


__all__ = ["GIT_METADATA_DIR", "GitIgnoreFilter", "git_toplevel"]
