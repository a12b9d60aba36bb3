"""Directory expansion into selectable files."""

from __future__ import annotations

import logging
from collections.abc import Callable, Container
from pathlib import Path

from .errors import ListerError
from .paths import normalize_path

logger = logging.getLogger(__name__)

FileLister = Callable[..., list[Path]]


class DirectoryExpander:
    """Resolve a directory to the normalized paths of the files it contains.

    Hidden files, ignored files and directories themselves are excluded by
    the lister options. The caller inserts the returned batch and announces
    it once.
    """

    def __init__(self, list_files: FileLister) -> None:
        self._list_files = list_files

    def expand(self, directory: Path, project_root: Path, selected: Container[str]) -> list[str]:
        """Return normalized files under ``directory`` that are not in ``selected``.

        A lister failure abandons the expansion and yields an empty batch.
        """
        try:
            files = self._list_files(
                directory,
                respect_ignore_rules=True,
                include_hidden=False,
                include_directories=False,
            )
        except (ListerError, OSError) as exc:
            logger.warning("abandoning expansion of %s: %s", directory, exc)
            return []

        batch: list[str] = []
        seen: set[str] = set()
        for file in files:
            normalized = normalize_path(file, project_root)
            if normalized in seen or normalized in selected:
                continue
            seen.add(normalized)
            batch.append(normalized)
        logger.debug("expanded %s into %d new file(s)", directory, len(batch))
        return batch


__all__ = ["DirectoryExpander", "FileLister"]
