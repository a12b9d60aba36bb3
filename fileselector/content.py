"""Materialize selected files as content records.

Each record carries the raw bytes of one selected file plus a content kind
detected by Pygments from the file name and text. Files that cannot be read
are left out of the export.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from pygments.lexers import get_lexer_for_filename, guess_lexer_for_filename
from pygments.util import ClassNotFound

from .paths import absolute_path

logger = logging.getLogger(__name__)

UNKNOWN_FILE_TYPE = "unknown"

Classifier = Callable[[str, str], str | None]


def decode_text(data: bytes) -> str:
    """Decode file bytes using UTF-8, UTF-8 with BOM, then latin-1."""
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return data.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class FileContentRecord:
    """One exported file: normalized path, raw bytes, detected content kind."""

    path: str
    content: bytes
    file_type: str = UNKNOWN_FILE_TYPE

    @property
    def text(self) -> str:
        return decode_text(self.content)


def classify_content(filename: str, text: str) -> str | None:
    """Return the Pygments alias for ``filename``/``text`` or ``None`` if undetermined."""
    name = Path(filename).name
    try:
        lexer = get_lexer_for_filename(name, text)
    except ClassNotFound:
        try:
            lexer = guess_lexer_for_filename(name, text)
        except ClassNotFound:
            return None
    if lexer.aliases:
        return lexer.aliases[0]
    return lexer.name.lower()


class ContentLoader:
    """Read selected paths relative to a project root."""

    def __init__(self, project_root: Path, classify: Classifier = classify_content) -> None:
        self._project_root = project_root
        self._classify = classify

    def load(self, path: str) -> FileContentRecord | None:
        """Read one path; ``None`` when it cannot be opened or read."""
        target = absolute_path(path, self._project_root)
        try:
            with open(target, "rb") as handle:
                content = handle.read()
        except OSError as exc:
            logger.debug("skipping unreadable selection %s: %s", path, exc)
            return None

        file_type = self._classify(path, decode_text(content)) or UNKNOWN_FILE_TYPE
        return FileContentRecord(path=path, content=content, file_type=file_type)

    def export(self, paths: Iterable[str]) -> list[FileContentRecord]:
        """Return records for every readable path, in input order."""
        records: list[FileContentRecord] = []
        for path in paths:
            record = self.load(path)
            if record is not None:
                records.append(record)
        return records


__all__ = [
    "Classifier",
    "ContentLoader",
    "FileContentRecord",
    "UNKNOWN_FILE_TYPE",
    "classify_content",
    "decode_text",
]
