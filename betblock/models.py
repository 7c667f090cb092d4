"""Pydantic models — single source of truth for all data types."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

USERNAME_MIN = 3
USERNAME_MAX = 30
PASSWORD_MIN = 4
PASSWORD_MAX = 50
GOAL_NAME_MIN = 2
GOAL_NAME_MAX = 50
GOAL_AMOUNT_MAX = 10_000_000


class RiskTier(str, enum.Enum):
    """Coarse classification of weekly gambling hours."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Trend(str, enum.Enum):
    """Direction of the last three weeks of gambling hours."""

    IMPROVING = "improving"
    WORSENING = "worsening"
    STABLE = "stable"


class User(BaseModel):
    """A registered account."""

    username: str = Field(min_length=USERNAME_MIN, max_length=USERNAME_MAX)
    password: str = Field(min_length=PASSWORD_MIN, max_length=PASSWORD_MAX)
    created_at: datetime = Field(default_factory=datetime.now)

    def to_record(self) -> dict[str, str]:
        """Stored form under the ``usuarios`` mapping."""
        return {"senha": self.password, "dataCadastro": self.created_at.isoformat()}

    @classmethod
    def from_record(cls, username: str, record: dict) -> "User":
        return cls(
            username=username,
            password=record["senha"],
            created_at=datetime.fromisoformat(record["dataCadastro"]),
        )


class Session(BaseModel):
    """The single active login."""

    username: str
    login_time: datetime = Field(default_factory=datetime.now)

    def to_record(self) -> dict[str, str]:
        return {"user": self.username, "loginTime": self.login_time.isoformat()}

    @classmethod
    def from_record(cls, record: dict) -> "Session":
        return cls(
            username=record["user"],
            login_time=datetime.fromisoformat(record["loginTime"]),
        )


class LoginLogEntry(BaseModel):
    """One line of the login history."""

    username: str
    login_time: datetime

    def to_record(self) -> dict[str, str]:
        return {"user": self.username, "loginTime": self.login_time.isoformat()}

    @classmethod
    def from_record(cls, record: dict) -> "LoginLogEntry":
        return cls(
            username=record["user"],
            login_time=datetime.fromisoformat(record["loginTime"]),
        )


class Goal(BaseModel):
    """The savings target the user is working toward."""

    name: str = Field(min_length=GOAL_NAME_MIN, max_length=GOAL_NAME_MAX)
    amount: float = Field(gt=0, le=GOAL_AMOUNT_MAX)
    activated_at: datetime = Field(default_factory=datetime.now)

    def to_record(self) -> dict:
        return {
            "nome": self.name,
            "valor": self.amount,
            "dataAtivacao": self.activated_at.isoformat(),
        }

    @classmethod
    def from_record(cls, record: dict) -> "Goal":
        activated = record.get("dataAtivacao")
        return cls(
            name=record["nome"],
            amount=float(record["valor"]),
            activated_at=datetime.fromisoformat(activated) if activated else datetime.now(),
        )


class WeeklyHours(BaseModel):
    """Hours spent gambling over the trailing four weeks, oldest first."""

    week1: float = 0
    week2: float = 0
    week3: float = 0
    week4: float = 0

    def as_list(self) -> list[float]:
        return [self.week1, self.week2, self.week3, self.week4]

    def to_record(self) -> dict[str, float]:
        return {"sem1": self.week1, "sem2": self.week2, "sem3": self.week3, "sem4": self.week4}

    @classmethod
    def from_record(cls, record: dict) -> "WeeklyHours":
        # Written outside the app: missing or empty weeks read as 0.
        return cls(**{f"week{i}": record.get(f"sem{i}") or 0 for i in range(1, 5)})


class HomeSummary(BaseModel):
    """Dashboard data for the status command / home screen."""

    username: Optional[str] = None
    goal: Goal
    goal_is_default: bool = False
    weekly_hours: float
    risk: RiskTier
    blocked: bool = False
    monthly_savings: float = Field(gt=0)
    projection_months: int = Field(gt=0)
    progress_percent: int = Field(ge=0)
    milestones: dict[int, float] = Field(default_factory=dict)
    eta_years: int = Field(ge=0)
    eta_months: int = Field(ge=0)


class HoursSummary(BaseModel):
    """Data behind the hours screen."""

    hours: WeeklyHours
    has_data: bool = False
    total: float
    average: float
    trend: Trend
    risk: RiskTier
    blocked: bool = False


class AppConfig(BaseModel):
    """Application configuration (persisted to ~/.config/betblock/config.json)."""

    store_path: Optional[str] = None  # None = use default (~/.local/share/betblock/)
    monthly_savings: float = Field(default=200, gt=0)
    projection_months: int = Field(default=24, gt=0, le=600)
