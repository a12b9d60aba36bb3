"""Tests for recursive listing and path classification."""

from __future__ import annotations

import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fileselector.errors import ListerError
from fileselector.filesystem import Directory, RegularFile, list_files, stat_path


def _make_tree(root: Path) -> None:
    for rel in ("B.txt", "a.txt", "src/main.py", "src/util/helpers.py", ".hidden/secret.txt", "src/.env"):
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(rel, encoding="utf-8")


class WalkListingTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name).resolve()
        _make_tree(self.root)
        which_patch = mock.patch("fileselector.filesystem.shutil.which", return_value=None)
        which_patch.start()
        self.addCleanup(which_patch.stop)

    def _labels(self, paths: list[Path]) -> list[str]:
        return [path.relative_to(self.root).as_posix() for path in paths]

    def test_lists_visible_files_sorted_case_insensitively(self) -> None:
        files = list_files(self.root)

        self.assertEqual(self._labels(files), ["a.txt", "B.txt", "src/main.py", "src/util/helpers.py"])

    def test_hidden_entries_can_be_included(self) -> None:
        files = list_files(self.root, include_hidden=True)

        self.assertIn(".hidden/secret.txt", self._labels(files))
        self.assertIn("src/.env", self._labels(files))

    def test_directories_can_be_included(self) -> None:
        entries = list_files(self.root, include_directories=True)

        self.assertEqual(
            self._labels(entries),
            ["a.txt", "B.txt", "src", "src/main.py", "src/util", "src/util/helpers.py"],
        )

    def test_git_metadata_is_skipped_even_with_hidden_entries(self) -> None:
        (self.root / ".git" / "refs").mkdir(parents=True)
        (self.root / ".git" / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")

        labels = self._labels(list_files(self.root, include_hidden=True, include_directories=True))

        self.assertIn(".hidden", labels)
        self.assertFalse([label for label in labels if label.split("/")[0] == ".git"])

    def test_missing_root_raises_lister_error(self) -> None:
        with self.assertRaises(ListerError):
            list_files(self.root / "nope")

    def test_file_root_raises_lister_error(self) -> None:
        with self.assertRaises(ListerError):
            list_files(self.root / "a.txt")


class RipgrepListingTests(unittest.TestCase):
    def test_uses_rg_output_and_filters_hidden_paths(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)
            completed = subprocess.CompletedProcess(
                args=["rg", "--files"],
                returncode=0,
                stdout="src/main.py\na.txt\n.hidden/secret.txt\n",
            )
            with mock.patch("fileselector.filesystem.shutil.which", return_value="/usr/bin/rg"), mock.patch(
                "fileselector.filesystem.subprocess.run", return_value=completed
            ) as run:
                files = list_files(root, respect_ignore_rules=False)

            self.assertEqual([path.relative_to(root).as_posix() for path in files], ["a.txt", "src/main.py"])
            self.assertEqual(run.call_args.args[0], ["rg", "--files", "--no-ignore"])
            self.assertEqual(run.call_args.kwargs["cwd"], root)

    def test_hidden_rg_listing_excludes_git_metadata(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)
            (root / ".git").mkdir()
            (root / ".git" / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")
            completed = subprocess.CompletedProcess(
                args=["rg", "--files"],
                returncode=0,
                stdout=".git/HEAD\n.hidden/secret.txt\na.txt\n",
            )
            with mock.patch("fileselector.filesystem.shutil.which", return_value="/usr/bin/rg"), mock.patch(
                "fileselector.filesystem.subprocess.run", return_value=completed
            ) as run:
                files = list_files(root, respect_ignore_rules=False, include_hidden=True)

            self.assertEqual([path.relative_to(root).as_posix() for path in files], [".hidden/secret.txt", "a.txt"])
            self.assertEqual(run.call_args.args[0], ["rg", "--files", "--no-ignore", "--hidden", "--glob", "!.git"])

    def test_rg_failure_falls_back_to_walk(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)

            def which(name: str) -> str | None:
                return "/usr/bin/rg" if name == "rg" else None

            with mock.patch("fileselector.filesystem.shutil.which", side_effect=which), mock.patch(
                "fileselector.filesystem.subprocess.run",
                side_effect=subprocess.CalledProcessError(2, ["rg"]),
            ):
                files = list_files(root, include_hidden=True)

            labels = [path.relative_to(root).as_posix() for path in files]
            self.assertIn(".hidden/secret.txt", labels)
            self.assertIn("src/util/helpers.py", labels)

    def test_directory_listing_never_uses_rg(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)
            with mock.patch("fileselector.filesystem.shutil.which", return_value=None), mock.patch(
                "fileselector.filesystem.subprocess.run"
            ) as run:
                list_files(root, include_directories=True)

            run.assert_not_called()


class StatPathTests(unittest.TestCase):
    def test_classifies_files_directories_and_missing_paths(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "f.txt").write_text("f", encoding="utf-8")

            self.assertEqual(stat_path(root), Directory(root))
            self.assertEqual(stat_path(root / "f.txt"), RegularFile(root / "f.txt"))
            self.assertIsNone(stat_path(root / "missing"))


if __name__ == "__main__":
    unittest.main()
