"""SQLite-backed local key-value store. Values are stored as JSON."""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from betblock.config import get_store_path as _config_get_store_path
from betblock.errors import StorageError

log = logging.getLogger(__name__)

USERS_KEY = "usuarios"
SESSION_KEY = "@user"
GOAL_KEY = "meta"
HOURS_KEY = "horasApostando"
BLOCK_KEY = "bloqueio"
LOGIN_LOG_KEY = "logUsuarios"

DEMO_USERNAME = "admin"
DEMO_PASSWORD = "12345"
DEMO_HOURS = {"sem1": 6, "sem2": 4, "sem3": 5, "sem4": 3}

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
    key    TEXT PRIMARY KEY,
    value  TEXT NOT NULL
);
"""


def _get_store_path() -> Path:
    """Return the store file path from config (or default)."""
    return _config_get_store_path()


def get_connection(store_path: Optional[Path] = None) -> sqlite3.Connection:
    """Open a connection and ensure the schema exists."""
    path = store_path or _get_store_path()
    try:
        conn = sqlite3.connect(str(path))
        conn.row_factory = sqlite3.Row
        conn.executescript(_SCHEMA)
    except sqlite3.Error as exc:
        log.error("Could not open store at %s: %s", path, exc)
        raise StorageError(f"Could not open local storage: {exc}") from exc
    return conn


def get_item(conn: sqlite3.Connection, key: str) -> Any:
    """Fetch and decode a value, or None when the key is absent."""
    try:
        row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
    except sqlite3.Error as exc:
        raise StorageError(f"Could not read '{key}': {exc}") from exc
    if row is None:
        return None
    try:
        return json.loads(row["value"])
    except json.JSONDecodeError as exc:
        raise StorageError(f"Stored value for '{key}' is corrupt") from exc


def set_item(conn: sqlite3.Connection, key: str, value: Any) -> None:
    """Encode and store a value, replacing any previous one."""
    try:
        conn.execute(
            """INSERT INTO kv (key, value) VALUES (?, ?)
               ON CONFLICT(key) DO UPDATE SET value = excluded.value""",
            (key, json.dumps(value)),
        )
        conn.commit()
    except sqlite3.Error as exc:
        raise StorageError(f"Could not write '{key}': {exc}") from exc


def remove_item(conn: sqlite3.Connection, key: str) -> bool:
    """Delete a key. Returns True if something was removed."""
    try:
        cur = conn.execute("DELETE FROM kv WHERE key = ?", (key,))
        conn.commit()
    except sqlite3.Error as exc:
        raise StorageError(f"Could not remove '{key}': {exc}") from exc
    return cur.rowcount > 0


def keys(conn: sqlite3.Connection) -> list[str]:
    """List every stored key."""
    try:
        rows = conn.execute("SELECT key FROM kv ORDER BY key ASC").fetchall()
    except sqlite3.Error as exc:
        raise StorageError(f"Could not list keys: {exc}") from exc
    return [r["key"] for r in rows]


def seed_demo_data(conn: sqlite3.Connection) -> list[str]:
    """Write the demo account and weekly hours where missing.

    Returns the keys that were written.
    """
    written: list[str] = []
    if get_item(conn, HOURS_KEY) is None:
        set_item(conn, HOURS_KEY, DEMO_HOURS)
        written.append(HOURS_KEY)

    users = get_item(conn, USERS_KEY) or {}
    if DEMO_USERNAME not in users:
        users[DEMO_USERNAME] = {
            "senha": DEMO_PASSWORD,
            "dataCadastro": datetime.now().isoformat(),
        }
        set_item(conn, USERS_KEY, users)
        written.append(USERS_KEY)

    if written:
        log.info("Seeded demo data: %s", ", ".join(written))
    return written
