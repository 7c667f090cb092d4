"""Savings goal, weekly hours and the app-block toggle."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from betblock import storage
from betblock.errors import StorageError
from betblock.models import Goal, WeeklyHours
from betblock.validation import validate_goal

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Goal
# ---------------------------------------------------------------------------


def get_goal(conn: sqlite3.Connection) -> Optional[Goal]:
    """Return the active goal, if one is set."""
    record = storage.get_item(conn, storage.GOAL_KEY)
    return Goal.from_record(record) if record else None


def set_goal(conn: sqlite3.Connection, name: str, amount_text: str) -> Goal:
    """Validate and store a new goal, replacing the previous one."""
    clean_name, amount = validate_goal(name, amount_text)
    goal = Goal(name=clean_name, amount=amount, activated_at=datetime.now())
    storage.set_item(conn, storage.GOAL_KEY, goal.to_record())
    log.info("Goal set: %s (%.2f)", goal.name, goal.amount)
    return goal


def delete_goal(conn: sqlite3.Connection) -> bool:
    """Remove the active goal. Returns True if there was one."""
    removed = storage.remove_item(conn, storage.GOAL_KEY)
    if removed:
        log.info("Goal deleted")
    return removed


# ---------------------------------------------------------------------------
# Weekly hours (read only; written outside the app)
# ---------------------------------------------------------------------------


def get_weekly_hours(conn: sqlite3.Connection) -> Optional[WeeklyHours]:
    """Return the stored weekly hours, or None when there are none.

    Raises StorageError when the record is not a mapping of numbers.
    """
    record = storage.get_item(conn, storage.HOURS_KEY)
    if not record:
        return None
    if not isinstance(record, dict):
        raise StorageError(f"Unreadable weekly hours record: {record!r}")
    try:
        return WeeklyHours.from_record(record)
    except PydanticValidationError as exc:
        log.warning("Unreadable weekly hours record %r", record)
        raise StorageError("Unreadable weekly hours record.") from exc


# ---------------------------------------------------------------------------
# Block toggle
# ---------------------------------------------------------------------------


def is_blocked(conn: sqlite3.Connection) -> bool:
    return bool(storage.get_item(conn, storage.BLOCK_KEY))


def set_blocked(conn: sqlite3.Connection, value: bool) -> bool:
    """Persist the block flag. It only affects what the screens display."""
    storage.set_item(conn, storage.BLOCK_KEY, bool(value))
    log.info("Gambling app block %s", "enabled" if value else "disabled")
    return bool(value)


def toggle_block(conn: sqlite3.Connection) -> bool:
    """Flip the block flag and return the new state."""
    return set_blocked(conn, not is_blocked(conn))
