"""Tests for Pydantic models."""

from __future__ import annotations

from datetime import datetime

import pytest
from pydantic import ValidationError

from betblock.models import (
    AppConfig,
    Goal,
    LoginLogEntry,
    RiskTier,
    Session,
    Trend,
    User,
    WeeklyHours,
)


class TestEnums:
    def test_risk_values(self) -> None:
        assert RiskTier.LOW.value == "low"
        assert RiskTier("high") is RiskTier.HIGH

    def test_trend_values(self) -> None:
        assert Trend("stable") is Trend.STABLE


class TestUser:
    def test_record_uses_stored_field_names(self) -> None:
        created = datetime(2024, 5, 1, 12, 0)
        user = User(username="alice", password="pass1", created_at=created)
        assert user.to_record() == {"senha": "pass1", "dataCadastro": created.isoformat()}

    def test_from_record(self) -> None:
        user = User.from_record("bob", {"senha": "1234", "dataCadastro": "2024-01-02T03:04:05"})
        assert user.username == "bob"
        assert user.password == "1234"
        assert user.created_at == datetime(2024, 1, 2, 3, 4, 5)

    def test_short_username_rejected(self) -> None:
        with pytest.raises(ValidationError):
            User(username="ab", password="1234")

    def test_long_password_rejected(self) -> None:
        with pytest.raises(ValidationError):
            User(username="alice", password="x" * 51)


class TestSession:
    def test_record_roundtrip_keys(self) -> None:
        session = Session(username="alice", login_time=datetime(2024, 5, 1, 9, 30))
        record = session.to_record()
        assert record == {"user": "alice", "loginTime": "2024-05-01T09:30:00"}
        assert Session.from_record(record) == session

    def test_log_entry_same_shape(self) -> None:
        entry = LoginLogEntry(username="alice", login_time=datetime(2024, 5, 1))
        assert set(entry.to_record()) == {"user", "loginTime"}


class TestGoal:
    def test_record_keys(self) -> None:
        goal = Goal(name="Car", amount=25000, activated_at=datetime(2024, 1, 1))
        assert goal.to_record() == {
            "nome": "Car",
            "valor": 25000.0,
            "dataAtivacao": "2024-01-01T00:00:00",
        }

    def test_zero_amount_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Goal(name="Car", amount=0)

    def test_amount_over_limit_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Goal(name="Car", amount=10_000_001)

    def test_from_record_without_date(self) -> None:
        goal = Goal.from_record({"nome": "Trip", "valor": "1200"})
        assert goal.amount == 1200.0


class TestWeeklyHours:
    def test_from_record(self) -> None:
        hours = WeeklyHours.from_record({"sem1": 6, "sem2": 4, "sem3": 5, "sem4": 3})
        assert hours.as_list() == [6, 4, 5, 3]

    def test_negative_kept(self) -> None:
        hours = WeeklyHours.from_record({"sem1": 1, "sem2": 1, "sem3": 1, "sem4": -1})
        assert hours.week4 == -1

    def test_missing_weeks_read_as_zero(self) -> None:
        hours = WeeklyHours.from_record({"sem4": 2})
        assert hours.as_list() == [0, 0, 0, 2]

    def test_null_week_reads_as_zero(self) -> None:
        hours = WeeklyHours.from_record({"sem1": None, "sem2": 1, "sem3": 1, "sem4": 1})
        assert hours.week1 == 0

    def test_non_numeric_rejected(self) -> None:
        with pytest.raises(ValidationError):
            WeeklyHours.from_record({"sem1": "lots", "sem2": 1, "sem3": 1, "sem4": 1})


class TestAppConfig:
    def test_defaults(self) -> None:
        config = AppConfig()
        assert config.store_path is None
        assert config.monthly_savings == 200
        assert config.projection_months == 24

    def test_non_positive_savings_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AppConfig(monthly_savings=0)
