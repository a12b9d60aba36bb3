"""Exception types raised by fileselector components."""

from __future__ import annotations


class FileSelectorError(Exception):
    """Base class for fileselector errors."""


class ListerError(FileSelectorError):
    """Raised when a directory cannot be listed recursively."""

    def __init__(self, root: object, reason: str) -> None:
        self.root = root
        self.reason = reason
        super().__init__(f"cannot list files under {root}: {reason}")


class ProviderError(FileSelectorError):
    """Base class for picker provider failures reported to the user."""


class MissingProviderError(ProviderError):
    """Raised when a known picker provider cannot run in this environment."""

    def __init__(self, name: str, hint: str) -> None:
        self.name = name
        super().__init__(f"{name} is not installed. {hint}")


class UnknownProviderError(ProviderError):
    """Raised when a configured provider name matches no known provider."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown file selector provider: {name}")


__all__ = [
    "FileSelectorError",
    "ListerError",
    "MissingProviderError",
    "ProviderError",
    "UnknownProviderError",
]
