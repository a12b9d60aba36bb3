"""Selection registry for project files.

``FileSelector`` owns the ordered, deduplicated list of project-relative
paths a user picked, announces every change with an ``update`` event, and
materializes the selected files on demand. Directories are never stored:
adding one adds every regular file it contains, announced as one batch.

All collaborators (project root, stat, recursive lister, content classifier,
error reporting) are injected so the registry runs without a live editor.
"""

from __future__ import annotations

import logging
import sys
import threading
from collections.abc import Callable, Mapping
from pathlib import Path

from .candidates import collect_candidates, sorted_candidates, unselected
from .config import load_provider_name, load_provider_options
from .content import Classifier, ContentLoader, FileContentRecord, classify_content
from .errors import ListerError, ProviderError
from .events import EventBus, EventName, Handler, SelectionEvent
from .expander import DirectoryExpander, FileLister
from .filesystem import Directory, StatResult, list_files as default_list_files, stat_path
from .paths import absolute_path, normalize_path, strip_directory_suffix
from .providers import create_provider

logger = logging.getLogger(__name__)

SCRATCH_BUFFER_PREFIX = "fileselector://"


def report_error(message: str) -> None:
    """Default user-visible error sink: log it and echo it on stderr."""
    logger.error("%s", message)
    sys.stderr.write(f"fileselector: {message}\n")


class FileSelector:
    """Ordered set of selected project files with change notification.

    Indices passed to ``remove_at`` are 0-based. Mutations, expansion and
    export are serialized by an instance lock; ``update`` is emitted after
    the lock is released and after a whole batch has been applied.
    """

    def __init__(
        self,
        selector_id: int = 0,
        *,
        project_root: Callable[[], Path],
        stat: Callable[[Path], StatResult] = stat_path,
        list_files: FileLister = default_list_files,
        classify: Classifier = classify_content,
        notify_error: Callable[[str], None] = report_error,
        provider: str | None = None,
        provider_options: Mapping[str, object] | None = None,
        respect_ignore_rules: bool = True,
    ) -> None:
        self.id = selector_id
        self._project_root = project_root
        self._stat = stat
        self._list_files = list_files
        self._classify = classify
        self._notify_error = notify_error
        self._provider_name = provider
        self._provider_options = dict(provider_options) if provider_options is not None else None
        self._respect_ignore_rules = respect_ignore_rules
        self._expander = DirectoryExpander(list_files)
        self._events = EventBus()
        self._lock = threading.RLock()
        self._paths: list[str] = []
        self._members: set[str] = set()
        self.file_cache: list[str] = []

    def _root(self) -> Path:
        return Path(self._project_root()).resolve()

    def _insert(self, normalized: str) -> bool:
        if normalized in self._members:
            return False
        self._paths.append(normalized)
        self._members.add(normalized)
        return True

    def __len__(self) -> int:
        return len(self._paths)

    def add(self, path: str | None) -> None:
        """Select ``path``; directories are expanded into their files.

        Empty paths and paths already selected are ignored without an event.
        """
        if not path:
            return
        root = self._root()
        target = absolute_path(path, root)
        if isinstance(self._stat(target), Directory):
            self._add_directory(target, root)
            return

        normalized = normalize_path(target, root)
        with self._lock:
            inserted = self._insert(normalized)
        if inserted:
            logger.debug("selector %s: added %s", self.id, normalized)
            self.emit(SelectionEvent.UPDATE)

    def _add_directory(self, directory: Path, root: Path) -> None:
        with self._lock:
            batch = self._expander.expand(directory, root, self._members)
            for normalized in batch:
                self._insert(normalized)
        if batch:
            logger.debug("selector %s: added %d file(s) from %s", self.id, len(batch), directory)
            self.emit(SelectionEvent.UPDATE)

    def add_from_editor_buffer(self, path: str | None) -> bool:
        """Toggle an editor buffer's file in the selection.

        Returns ``False`` for unnamed buffers and the selector's own scratch
        buffers; otherwise removes the file when selected or adds it, and
        returns ``True``.
        """
        if not path or path.startswith(SCRATCH_BUFFER_PREFIX):
            return False

        normalized = normalize_path(path, self._root())
        with self._lock:
            removed = normalized in self._members
            if removed:
                self._paths.remove(normalized)
                self._members.discard(normalized)
        if removed:
            logger.debug("selector %s: toggled off %s", self.id, normalized)
            self.emit(SelectionEvent.UPDATE)
            return True

        self.add(path)
        return True

    def remove_at(self, index: int) -> bool:
        """Remove the entry at 0-based ``index``; ``False`` when out of range."""
        with self._lock:
            if not 0 <= index < len(self._paths):
                return False
            removed = self._paths.pop(index)
            self._members.discard(removed)
        logger.debug("selector %s: removed %s", self.id, removed)
        self.emit(SelectionEvent.UPDATE)
        return True

    def reset(self) -> None:
        """Clear the selection, the picker file cache and every observer."""
        with self._lock:
            self._paths.clear()
            self._members.clear()
            self.file_cache = []
            self._events.clear()

    def list(self) -> list[str]:
        with self._lock:
            return list(self._paths)

    def get_selected_filepaths(self) -> list[str]:
        return self.list()

    def get_selected_files_contents(self) -> list[FileContentRecord]:
        """Read every selected file; unreadable ones are skipped."""
        with self._lock:
            loader = ContentLoader(self._root(), self._classify)
            return loader.export(list(self._paths))

    def on(self, event: EventName, handler: Handler) -> None:
        self._events.on(event, handler)

    def off(self, event: EventName, handler: Handler | None = None) -> None:
        self._events.off(event, handler)

    def emit(self, event: EventName, *args: object) -> None:
        self._events.emit(event, *args)

    def handle_path_selection(self, selected_path: str | None) -> None:
        """Provider callback: ``None`` means cancelled, directory labels lose their ``/``."""
        if selected_path is None:
            return
        self.add(strip_directory_suffix(selected_path))

    def update_file_cache(self) -> list[str]:
        """Refresh the dirs-first candidate cache used by the native picker."""
        labels = sorted_candidates(
            self._root(),
            respect_ignore_rules=self._respect_ignore_rules,
            list_files=self._list_files,
        )
        with self._lock:
            self.file_cache = labels
        return list(labels)

    def _candidates_for(self, provider_name: str) -> list[str]:
        if provider_name == "native":
            labels = self.update_file_cache()
        else:
            labels = collect_candidates(
                self._root(),
                include_hidden=True,
                respect_ignore_rules=self._respect_ignore_rules,
                list_files=self._list_files,
            )
        with self._lock:
            return unselected(labels, self._members)

    def open(self, provider: str | None = None, options: Mapping[str, object] | None = None) -> bool:
        """Show a picker and add whatever the user chooses.

        Provider problems are reported through ``notify_error`` and leave the
        selection untouched; returns whether the picker ran.
        """
        name = (provider or self._provider_name or load_provider_name()).strip().lower()
        if options is None:
            options = self._provider_options if self._provider_options is not None else load_provider_options()
        try:
            picker = create_provider(name)
            candidates = self._candidates_for(name)
            picker(candidates, self.handle_path_selection, options)
        except (ProviderError, ListerError) as exc:
            self._notify_error(str(exc))
            return False
        return True


__all__ = ["FileSelector", "SCRATCH_BUFFER_PREFIX", "report_error"]
