"""Persistent JSON config helpers.

Stores the picker provider name, provider options and listing preferences.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "fileselector"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH
DEFAULT_PROVIDER = "native"


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Write failures are logged and otherwise ignored.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError) as exc:
        logger.warning("could not write config %s: %s", CONFIG_PATH, exc)


def load_provider_name() -> str:
    """Return the configured picker provider name, ``native`` when unset."""
    value = load_config().get("provider")
    if not isinstance(value, str) or not value.strip():
        return DEFAULT_PROVIDER
    return value.strip().lower()


def save_provider_name(name: str) -> None:
    """Persist ``name`` as the default provider; blank names are not saved."""
    stripped = str(name).strip().lower()
    if not stripped:
        return
    config = load_config()
    config["provider"] = stripped
    save_config(config)


def load_provider_options() -> dict[str, object]:
    """Return provider options; only a JSON object with string keys is accepted."""
    value = load_config().get("provider_opts")
    if not isinstance(value, dict):
        return {}
    return {key: item for key, item in value.items() if isinstance(key, str)}


def load_respect_gitignore() -> bool:
    """Return whether listings honor git ignore rules (default ``True``).

    Only explicit booleans override the default.
    """
    value = load_config().get("respect_gitignore")
    return value if isinstance(value, bool) else True


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_PROVIDER",
    "load_config",
    "load_provider_name",
    "load_provider_options",
    "load_respect_gitignore",
    "save_config",
    "save_provider_name",
]
