"""Tests for the account store."""

from __future__ import annotations

from pathlib import Path

import pytest

from betblock import accounts, storage
from betblock.errors import DuplicateUserError, InvalidCredentialsError, ValidationError


@pytest.fixture()
def conn(tmp_path: Path):
    """Provide a fresh store for each test."""
    connection = storage.get_connection(store_path=tmp_path / "test.db")
    yield connection
    connection.close()


class TestRegister:
    def test_creates_user_and_session(self, conn) -> None:
        user = accounts.register(conn, "alice", "secret", "secret")
        assert user.username == "alice"

        stored = storage.get_item(conn, storage.USERS_KEY)
        assert stored["alice"]["senha"] == "secret"
        assert "dataCadastro" in stored["alice"]

        session = accounts.current_session(conn)
        assert session is not None
        assert session.username == "alice"

    def test_duplicate_rejected(self, conn) -> None:
        accounts.register(conn, "alice", "secret", "secret")
        with pytest.raises(DuplicateUserError) as info:
            accounts.register(conn, "alice", "other", "other")
        assert info.value.username == "alice"

    def test_duplicate_after_sanitising(self, conn) -> None:
        accounts.register(conn, "admin", "12345", "12345")
        with pytest.raises(DuplicateUserError):
            accounts.register(conn, "ad<min", "12345", "12345")

    def test_usernames_are_case_sensitive(self, conn) -> None:
        accounts.register(conn, "alice", "secret", "secret")
        accounts.register(conn, "Alice", "secret", "secret")
        assert {u.username for u in accounts.list_users(conn)} == {"alice", "Alice"}

    def test_invalid_input(self, conn) -> None:
        with pytest.raises(ValidationError):
            accounts.register(conn, "al", "secret", "secret")
        with pytest.raises(ValidationError):
            accounts.register(conn, "alice", "secret", "different")
        assert storage.get_item(conn, storage.USERS_KEY) is None
        assert accounts.current_session(conn) is None

    def test_stored_values_are_sanitised(self, conn) -> None:
        accounts.register(conn, "{bob}", "pa'ss`word", "pa'ss`word")
        stored = storage.get_item(conn, storage.USERS_KEY)
        assert stored == {"bob": {"senha": "password", "dataCadastro": stored["bob"]["dataCadastro"]}}

    def test_logs_the_login(self, conn) -> None:
        accounts.register(conn, "alice", "secret", "secret")
        log = accounts.login_log(conn)
        assert [e.username for e in log] == ["alice"]


class TestLogin:
    def test_success(self, conn) -> None:
        accounts.register(conn, "alice", "secret", "secret")
        accounts.logout(conn)
        session = accounts.login(conn, "alice", "secret")
        assert session.username == "alice"
        assert accounts.current_session(conn) == session

    def test_wrong_password(self, conn) -> None:
        accounts.register(conn, "alice", "secret", "secret")
        with pytest.raises(InvalidCredentialsError):
            accounts.login(conn, "alice", "wrong")

    def test_unknown_user(self, conn) -> None:
        with pytest.raises(InvalidCredentialsError) as info:
            accounts.login(conn, "nobody", "secret")
        assert "username or password" in str(info.value)

    def test_sanitised_credentials_match(self, conn) -> None:
        accounts.register(conn, "admin", "12345", "12345")
        session = accounts.login(conn, "ad<min", "12'345")
        assert session.username == "admin"

    def test_validation(self, conn) -> None:
        with pytest.raises(ValidationError):
            accounts.login(conn, "", "secret")
        with pytest.raises(ValidationError):
            accounts.login(conn, "ab", "secret")

    def test_overwrites_session(self, conn) -> None:
        accounts.register(conn, "alice", "secret", "secret")
        accounts.register(conn, "carol", "secret", "secret")
        accounts.login(conn, "alice", "secret")
        assert accounts.current_session(conn).username == "alice"

    def test_appends_to_log(self, conn) -> None:
        accounts.register(conn, "alice", "secret", "secret")
        accounts.login(conn, "alice", "secret")
        accounts.login(conn, "alice", "secret")
        assert len(accounts.login_log(conn)) == 3
        assert len(accounts.login_log(conn, limit=2)) == 2

    def test_failed_login_keeps_session(self, conn) -> None:
        accounts.register(conn, "alice", "secret", "secret")
        with pytest.raises(InvalidCredentialsError):
            accounts.login(conn, "alice", "nope")
        assert accounts.current_session(conn).username == "alice"
        assert len(accounts.login_log(conn)) == 1


class TestLogout:
    def test_clears_session(self, conn) -> None:
        accounts.register(conn, "alice", "secret", "secret")
        accounts.logout(conn)
        assert accounts.current_session(conn) is None
        assert not accounts.is_authenticated(conn)

    def test_idempotent(self, conn) -> None:
        accounts.logout(conn)
        accounts.logout(conn)
        assert accounts.current_session(conn) is None


class TestLookup:
    def test_get_user(self, conn) -> None:
        accounts.register(conn, "alice", "secret", "secret")
        user = accounts.get_user(conn, "alice")
        assert user is not None
        assert user.password == "secret"
        assert accounts.get_user(conn, "bob") is None

    def test_log_most_recent_first(self, conn) -> None:
        accounts.register(conn, "alice", "secret", "secret")
        accounts.register(conn, "carol", "secret", "secret")
        assert [e.username for e in accounts.login_log(conn)] == ["carol", "alice"]

    def test_log_is_capped(self, conn) -> None:
        accounts.register(conn, "alice", "secret", "secret")
        for _ in range(accounts.LOGIN_LOG_LIMIT + 5):
            accounts.login(conn, "alice", "secret")
        assert len(storage.get_item(conn, storage.LOGIN_LOG_KEY)) == accounts.LOGIN_LOG_LIMIT
        assert len(accounts.login_log(conn)) == accounts.LOGIN_LOG_LIMIT

    def test_seeded_admin_can_log_in(self, conn) -> None:
        storage.seed_demo_data(conn)
        assert accounts.login(conn, "admin", "12345").username == "admin"
