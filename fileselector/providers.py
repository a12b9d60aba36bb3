"""Pluggable picker backends.

A provider receives the candidate labels that are not selected yet, a
callback to report the choice, and free-form options from config. It calls
the callback exactly once: with the chosen label, or with ``None`` when the
user cancels or nothing matches.
"""

from __future__ import annotations

import shutil
import subprocess
import sys
from collections.abc import Callable, Mapping
from typing import TextIO

from .errors import MissingProviderError, ProviderError, UnknownProviderError
from .fuzzy import best_match

PROMPT_TITLE = "Add a file"

SelectCallback = Callable[[str | None], None]
Provider = Callable[[list[str], SelectCallback, Mapping[str, object]], None]


class NativePromptProvider:
    """Numbered list on a text stream, answered by index on standard input."""

    def __init__(
        self,
        *,
        input_func: Callable[[str], str] = input,
        output: TextIO | None = None,
    ) -> None:
        self._input = input_func
        self._output = output

    def __call__(self, candidates: list[str], on_select: SelectCallback, options: Mapping[str, object]) -> None:
        out = self._output or sys.stdout
        if not candidates:
            out.write("No files left to add.\n")
            on_select(None)
            return

        width = len(str(len(candidates)))
        for number, label in enumerate(candidates, start=1):
            out.write(f"{number:>{width}}. {label}\n")
        out.flush()

        prompt = str(options.get("prompt") or f"{PROMPT_TITLE}: ")
        try:
            answer = self._input(prompt).strip()
        except (EOFError, KeyboardInterrupt):
            on_select(None)
            return

        if not answer.isdigit() or not 1 <= int(answer) <= len(candidates):
            on_select(None)
            return
        on_select(candidates[int(answer) - 1])


class FzfProvider:
    """Run the ``fzf`` binary over the candidate list.

    Construction raises ``MissingProviderError`` when fzf is not on ``PATH``,
    so ``create_provider`` fails before any candidate is collected.
    """

    CANCELLED_RETURN_CODES = frozenset({1, 130})

    def __init__(self) -> None:
        if shutil.which("fzf") is None:
            raise MissingProviderError("fzf", "Please install fzf to use it as a file selector.")

    def __call__(self, candidates: list[str], on_select: SelectCallback, options: Mapping[str, object]) -> None:
        extra_args = options.get("fzf_args") or []
        if not isinstance(extra_args, list):
            raise ProviderError("fzf_args must be a list of strings")
        cmd = ["fzf", "--prompt", f"{PROMPT_TITLE}> ", *[str(arg) for arg in extra_args]]

        try:
            proc = subprocess.run(
                cmd,
                input="\n".join(candidates),
                stdout=subprocess.PIPE,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise ProviderError(f"fzf failed to start: {exc}") from exc

        if proc.returncode in self.CANCELLED_RETURN_CODES:
            on_select(None)
            return
        if proc.returncode != 0:
            raise ProviderError(f"fzf exited with status {proc.returncode}")

        choice = proc.stdout.splitlines()[0].strip() if proc.stdout.strip() else ""
        on_select(choice or None)


class FuzzyQueryProvider:
    """Pick the best fuzzy match for ``options["query"]`` without prompting."""

    def __call__(self, candidates: list[str], on_select: SelectCallback, options: Mapping[str, object]) -> None:
        query = options.get("query")
        if not isinstance(query, str):
            on_select(None)
            return
        on_select(best_match(query, candidates))


PROVIDER_FACTORIES: dict[str, Callable[[], Provider]] = {
    "native": NativePromptProvider,
    "fzf": FzfProvider,
    "fuzzy": FuzzyQueryProvider,
}


def available_provider_names() -> list[str]:
    return sorted(PROVIDER_FACTORIES)


def create_provider(name: str) -> Provider:
    """Instantiate the provider registered under ``name``."""
    factory = PROVIDER_FACTORIES.get(name.strip().lower())
    if factory is None:
        raise UnknownProviderError(name)
    return factory()


__all__ = [
    "FuzzyQueryProvider",
    "FzfProvider",
    "NativePromptProvider",
    "PROMPT_TITLE",
    "PROVIDER_FACTORIES",
    "Provider",
    "SelectCallback",
    "available_provider_names",
    "create_provider",
]
