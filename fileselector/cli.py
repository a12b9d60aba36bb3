"""Command-line front door for fileselector.

Runs one in-memory selection session against a project root: adds paths,
toggles buffer paths, resolves fuzzy picks, removes indices, optionally opens
an interactive picker, then prints the selection.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .bundle import bundle_as_json, render_bundle
from .config import load_respect_gitignore, save_provider_name
from .project import resolve_project_root
from .providers import available_provider_names
from .selector import FileSelector

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("paths", "bundle", "json")


def _nonnegative_int(value: str) -> int:
    """argparse type for selection indices."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fileselector",
        description="Select project files and print them, or their contents, for a prompt.",
    )
    parser.add_argument(
        "root",
        nargs="?",
        default=None,
        help="Project root. Defaults to the git work tree or marker directory around the cwd.",
    )
    parser.add_argument("--add", action="append", default=[], metavar="PATH", help="Add a file or directory.")
    parser.add_argument(
        "--buffer",
        action="append",
        default=[],
        metavar="PATH",
        help="Toggle a file the way an editor buffer does: remove if selected, add otherwise.",
    )
    parser.add_argument(
        "--pick",
        action="append",
        default=[],
        metavar="QUERY",
        help="Add the best fuzzy match for QUERY among unselected project paths.",
    )
    parser.add_argument(
        "--remove",
        action="append",
        default=[],
        type=_nonnegative_int,
        metavar="INDEX",
        help="Remove the entry at 0-based INDEX (applied highest index first).",
    )
    parser.add_argument(
        "--provider",
        default=None,
        help=f"Picker provider for --interactive ({', '.join(available_provider_names())}).",
    )
    parser.add_argument(
        "--save-provider",
        action="store_true",
        help="Store --provider in the config file as the default picker.",
    )
    parser.add_argument("--interactive", action="store_true", help="Open a picker before printing.")
    parser.add_argument("--format", choices=OUTPUT_FORMATS, default="paths", help="Output format.")
    parser.add_argument("--verbose", action="store_true", help="Log debug details on stderr.")
    return parser


def render_selection(selector: FileSelector, output_format: str) -> str:
    """Render the current selection in one of ``OUTPUT_FORMATS``."""
    if output_format == "bundle":
        return render_bundle(selector.get_selected_files_contents())
    if output_format == "json":
        return bundle_as_json(selector.get_selected_files_contents()) + "\n"
    paths = selector.get_selected_filepaths()
    return "".join(f"{path}\n" for path in paths)


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and run one selection session.

    ``default_path`` is primarily for tests; when omitted the project root is
    discovered from the current working directory.
    """
    parser = _build_parser()
    args = parser.parse_args()
    _configure_logging(args.verbose)

    if args.save_provider:
        if not args.provider or not args.provider.strip():
            parser.error("--save-provider requires --provider")
        save_provider_name(args.provider)

    if args.root is not None:
        root = Path(args.root)
        if not root.is_dir():
            raise SystemExit(f"Not a directory: {root}")
        root = root.resolve()
    else:
        root = resolve_project_root(default_path)

    selector = FileSelector(
        project_root=lambda: root,
        provider=args.provider,
        respect_ignore_rules=load_respect_gitignore(),
    )

    for path in args.add:
        selector.add(path)
    for path in args.buffer:
        if not selector.add_from_editor_buffer(path):
            logger.warning("ignoring buffer %r", path)
    for query in args.pick:
        before = len(selector)
        selector.open("fuzzy", options={"query": query})
        if len(selector) == before:
            logger.warning("no unselected path matches %r", query)
    for index in sorted(set(args.remove), reverse=True):
        if not selector.remove_at(index):
            raise SystemExit(f"No selection at index {index}")

    if args.interactive and not selector.open(args.provider):
        raise SystemExit(1)

    sys.stdout.write(render_selection(selector, args.format))


if __name__ == "__main__":
    main()
