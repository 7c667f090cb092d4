"""Where BetBlock keeps its config file and its store, and what the config holds.

Desktop installs follow the XDG base directories (``$XDG_CONFIG_HOME`` and
``$XDG_DATA_HOME``, defaulting to ``~/.config`` and ``~/.local/share``).
Under python-for-android both live in the app-private directory instead.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from betblock.models import AppConfig

log = logging.getLogger(__name__)

_APP_NAME = "betblock"
_STORE_NAME = "betblock.db"


def _platform_dirs() -> tuple[Path, Path]:
    """Return ``(config_dir, store_dir)`` for the running platform."""
    env = os.environ
    if "ANDROID_ARGUMENT" in env or hasattr(sys, "getandroidapilevel"):
        private = env.get("ANDROID_PRIVATE") or env.get("ANDROID_APP_PATH") or "."
        base = Path(private) / _APP_NAME
        return base / "config", base / "store"

    home = Path.home()
    config_home = Path(env.get("XDG_CONFIG_HOME") or home / ".config")
    data_home = Path(env.get("XDG_DATA_HOME") or home / ".local" / "share")
    return config_home / _APP_NAME, data_home / _APP_NAME


_CONFIG_DIR, _STORE_DIR = _platform_dirs()
_CONFIG_FILE = _CONFIG_DIR / "config.json"


def load_config() -> AppConfig:
    """Read the config file. Missing or unreadable files give the defaults."""
    try:
        raw = _CONFIG_FILE.read_text()
    except FileNotFoundError:
        return AppConfig()
    try:
        return AppConfig.model_validate(json.loads(raw))
    except (json.JSONDecodeError, PydanticValidationError):
        log.warning("Ignoring unreadable config at %s", _CONFIG_FILE)
        return AppConfig()


def save_config(config: AppConfig) -> Path:
    """Write ``config`` as JSON and return the file it went to."""
    _CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    _CONFIG_FILE.write_text(config.model_dump_json(indent=2))
    log.debug("Config written to %s", _CONFIG_FILE)
    return _CONFIG_FILE


def _update(**changes) -> AppConfig:
    """Apply ``changes`` on top of the saved config, validate and save."""
    updated = AppConfig.model_validate({**load_config().model_dump(), **changes})
    save_config(updated)
    return updated


def get_store_path() -> Path:
    """Path of the store file, creating its directory if needed."""
    configured = load_config().store_path
    path = Path(configured) if configured else _STORE_DIR / _STORE_NAME
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def set_store_path(path: str) -> AppConfig:
    """Point the store at ``path``. A directory gets the default file name."""
    target = Path(path).expanduser().resolve()
    if target.is_dir():
        target = target / _STORE_NAME
    target.parent.mkdir(parents=True, exist_ok=True)
    return _update(store_path=str(target))


def reset_store_path() -> AppConfig:
    """Go back to the default store location."""
    return _update(store_path=None)


def set_monthly_savings(amount: float) -> AppConfig:
    """Change the monthly savings figure used for projections."""
    return _update(monthly_savings=amount)
