"""Render exported file contents for inclusion in a prompt."""

from __future__ import annotations

import json
from collections.abc import Iterable

from .content import UNKNOWN_FILE_TYPE, FileContentRecord


def _fence_for(text: str) -> str:
    fence = "```"
    while fence in text:
        fence += "`"
    return fence


def render_bundle(records: Iterable[FileContentRecord]) -> str:
    """Render each record as a path header followed by a fenced code block.

    The fence is tagged with the file type unless it is unknown, and grows
    longer than any backtick run inside the file.
    """
    blocks: list[str] = []
    for record in records:
        text = record.text
        fence = _fence_for(text)
        tag = "" if record.file_type == UNKNOWN_FILE_TYPE else record.file_type
        body = text if text.endswith("\n") or not text else f"{text}\n"
        blocks.append(f"{record.path}\n{fence}{tag}\n{body}{fence}\n")
    return "\n".join(blocks)


def bundle_as_json(records: Iterable[FileContentRecord]) -> str:
    payload = [
        {"path": record.path, "file_type": record.file_type, "content": record.text}
        for record in records
    ]
    return json.dumps(payload, indent=2)


__all__ = ["bundle_as_json", "render_bundle"]
