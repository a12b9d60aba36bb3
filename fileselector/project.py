"""Project root discovery."""

from __future__ import annotations

from pathlib import Path

from .gitignore import git_toplevel

ROOT_MARKERS = (".git", "pyproject.toml", "setup.cfg", "package.json", "Cargo.toml", "go.mod")


def resolve_project_root(start: Path | None = None) -> Path:
    """Return the project root containing ``start`` (default: the working directory).

    A git work tree wins; otherwise the nearest ancestor holding one of
    ``ROOT_MARKERS``; otherwise ``start`` itself.
    """
    origin = (start or Path.cwd()).resolve()
    if origin.is_file():
        origin = origin.parent

    top_level = git_toplevel(origin)
    if top_level is not None:
        return top_level

    for candidate in (origin, *origin.parents):
        if any((candidate / marker).exists() for marker in ROOT_MARKERS):
            return candidate
    return origin


__all__ = ["ROOT_MARKERS", "resolve_project_root"]
