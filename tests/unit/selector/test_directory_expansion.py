"""Directory expansion: one batch, one event, failures absorbed."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fileselector import FileSelector, ListerError
from fileselector.expander import DirectoryExpander
from fileselector.filesystem import Directory


def _write(root: Path, rel: str) -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"{rel}\n", encoding="utf-8")
    return path


class DirectoryExpansionTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name).resolve()
        which_patch = mock.patch("fileselector.filesystem.shutil.which", return_value=None)
        which_patch.start()
        self.addCleanup(which_patch.stop)
        self.updates: list[tuple[object, ...]] = []

    def _selector(self, **kwargs) -> FileSelector:
        selector = FileSelector(project_root=lambda: self.root, **kwargs)
        selector.on("update", lambda *args: self.updates.append(args))
        return selector

    def test_directory_with_n_files_emits_exactly_one_update(self) -> None:
        for rel in ("pkg/a.py", "pkg/b.py", "pkg/sub/c.py", "pkg/sub/deeper/d.py"):
            _write(self.root, rel)
        selector = self._selector()

        selector.add("pkg")

        self.assertEqual(
            selector.list(),
            ["pkg/a.py", "pkg/b.py", "pkg/sub/c.py", "pkg/sub/deeper/d.py"],
        )
        self.assertEqual(len(self.updates), 1)

    def test_already_selected_files_are_not_duplicated(self) -> None:
        for rel in ("pkg/a.py", "pkg/b.py", "pkg/c.py"):
            _write(self.root, rel)
        selector = self._selector()
        selector.add("pkg/b.py")
        self.updates.clear()

        selector.add(str(self.root / "pkg") + "/")

        self.assertEqual(selector.list(), ["pkg/b.py", "pkg/a.py", "pkg/c.py"])
        self.assertEqual(len(self.updates), 1)

    def test_expanding_fully_selected_directory_emits_nothing(self) -> None:
        _write(self.root, "pkg/a.py")
        selector = self._selector()
        selector.add("pkg")
        self.updates.clear()

        selector.add("pkg")

        self.assertEqual(selector.list(), ["pkg/a.py"])
        self.assertEqual(self.updates, [])

    def test_hidden_files_and_directories_are_skipped(self) -> None:
        _write(self.root, "pkg/visible.py")
        _write(self.root, "pkg/.env")
        _write(self.root, "pkg/.cache/blob.bin")
        selector = self._selector()

        selector.add("pkg")

        self.assertEqual(selector.list(), ["pkg/visible.py"])

    def test_ignored_paths_are_skipped(self) -> None:
        _write(self.root, "pkg/keep.py")
        ignored = {_write(self.root, "pkg/debug.log"), self.root / "pkg" / "build"}
        _write(self.root, "pkg/build/out.py")
        ignore_filter = mock.Mock()
        ignore_filter.ignored.side_effect = lambda entries: {path for path, _is_dir in entries if path in ignored}
        selector = self._selector()

        with mock.patch(
            "fileselector.filesystem.GitIgnoreFilter.for_directory", return_value=ignore_filter
        ):
            selector.add("pkg")

        self.assertEqual(selector.list(), ["pkg/keep.py"])

    def test_lister_failure_abandons_expansion_without_raising(self) -> None:
        _write(self.root, "keep.txt")

        def failing_lister(root: Path, **_options: object) -> list[Path]:
            raise ListerError(root, "permission denied")

        selector = self._selector(list_files=failing_lister)
        selector.add("keep.txt")
        self.updates.clear()
        (self.root / "locked").mkdir()

        with self.assertLogs("fileselector.expander", level="WARNING"):
            selector.add("locked")

        self.assertEqual(selector.list(), ["keep.txt"])
        self.assertEqual(self.updates, [])

    def test_stat_collaborator_decides_directory_branch(self) -> None:
        calls: list[tuple[Path, dict[str, object]]] = []

        def fake_lister(root: Path, **options: object) -> list[Path]:
            calls.append((root, options))
            return [self.root / "virtual" / "one.py", self.root / "virtual" / "two.py"]

        selector = self._selector(
            stat=lambda path: Directory(path),
            list_files=fake_lister,
        )

        selector.add("virtual")

        self.assertEqual(selector.list(), ["virtual/one.py", "virtual/two.py"])
        self.assertEqual(
            calls,
            [
                (
                    self.root / "virtual",
                    {"respect_ignore_rules": True, "include_hidden": False, "include_directories": False},
                )
            ],
        )


class DirectoryExpanderTests(unittest.TestCase):
    def test_expand_dedupes_within_batch_and_against_selection(self) -> None:
        root = Path("/proj")
        files = [root / "a.py", root / "./a.py", root / "b.py", root / "c.py"]
        expander = DirectoryExpander(lambda directory, **_options: files)

        batch = expander.expand(root, root, {"b.py"})

        self.assertEqual(batch, ["a.py", "c.py"])

    def test_expand_absorbs_os_errors(self) -> None:
        def failing(directory: Path, **_options: object) -> list[Path]:
            raise PermissionError(13, "Permission denied", str(directory))

        expander = DirectoryExpander(failing)

        with self.assertLogs("fileselector.expander", level="WARNING"):
            self.assertEqual(expander.expand(Path("/proj/x"), Path("/proj"), set()), [])


if __name__ == "__main__":
    unittest.main()
