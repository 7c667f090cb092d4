"""Local account store: registration, login and the single active session.

Every function takes the open store connection; nothing is kept in module
state. Free text is sanitised the same way before storage and comparison,
so ``"ad<min"`` and ``"admin"`` name the same account.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from typing import Optional

from betblock import storage
from betblock.errors import DuplicateUserError, InvalidCredentialsError
from betblock.models import LoginLogEntry, Session, User
from betblock.validation import validate_login, validate_registration

log = logging.getLogger(__name__)

# Oldest login entries are dropped past this many.
LOGIN_LOG_LIMIT = 100


def _load_users(conn: sqlite3.Connection) -> dict[str, dict]:
    return storage.get_item(conn, storage.USERS_KEY) or {}


def _start_session(conn: sqlite3.Connection, username: str) -> Session:
    """Overwrite the current session and append to the login log."""
    session = Session(username=username, login_time=datetime.now())
    storage.set_item(conn, storage.SESSION_KEY, session.to_record())

    entries = storage.get_item(conn, storage.LOGIN_LOG_KEY) or []
    entries.append(LoginLogEntry(username=username, login_time=session.login_time).to_record())
    storage.set_item(conn, storage.LOGIN_LOG_KEY, entries[-LOGIN_LOG_LIMIT:])
    return session


def register(
    conn: sqlite3.Connection, username: str, password: str, confirm_password: str
) -> User:
    """Create an account and log it in."""
    user_name, pw = validate_registration(username, password, confirm_password)

    users = _load_users(conn)
    if user_name in users:
        log.info("Registration rejected: '%s' already exists", user_name)
        raise DuplicateUserError(user_name)

    user = User(username=user_name, password=pw, created_at=datetime.now())
    users[user_name] = user.to_record()
    storage.set_item(conn, storage.USERS_KEY, users)
    _start_session(conn, user_name)
    log.info("Registered user '%s'", user_name)
    return user


def login(conn: sqlite3.Connection, username: str, password: str) -> Session:
    """Check credentials and replace the active session."""
    user_name, pw = validate_login(username, password)

    record = _load_users(conn).get(user_name)
    if record is None or record.get("senha") != pw:
        log.info("Failed login for '%s'", user_name)
        raise InvalidCredentialsError()

    session = _start_session(conn, user_name)
    log.info("User '%s' logged in", user_name)
    return session


def logout(conn: sqlite3.Connection) -> None:
    """Clear the active session. Safe to call when nobody is logged in."""
    if storage.remove_item(conn, storage.SESSION_KEY):
        log.info("Logged out")


def current_session(conn: sqlite3.Connection) -> Optional[Session]:
    """Return the active session, if any."""
    record = storage.get_item(conn, storage.SESSION_KEY)
    return Session.from_record(record) if record else None


def is_authenticated(conn: sqlite3.Connection) -> bool:
    return current_session(conn) is not None


def get_user(conn: sqlite3.Connection, username: str) -> Optional[User]:
    """Fetch a single account by exact (sanitised) username."""
    record = _load_users(conn).get(username)
    return User.from_record(username, record) if record else None


def list_users(conn: sqlite3.Connection) -> list[User]:
    """All accounts, oldest first."""
    users = [User.from_record(name, rec) for name, rec in _load_users(conn).items()]
    return sorted(users, key=lambda u: u.created_at)


def login_log(conn: sqlite3.Connection, limit: Optional[int] = None) -> list[LoginLogEntry]:
    """Past logins, most recent first."""
    entries = [LoginLogEntry.from_record(r) for r in storage.get_item(conn, storage.LOGIN_LOG_KEY) or []]
    entries.reverse()
    return entries[:limit] if limit is not None else entries
