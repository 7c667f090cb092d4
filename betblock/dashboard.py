"""Read-only views assembled from the store for the home and hours screens."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from typing import Optional

from betblock import accounts, goals, progress, storage
from betblock.models import AppConfig, Goal, HomeSummary, HoursSummary, WeeklyHours

# Shown until the user sets a goal of their own.
DEFAULT_GOAL_NAME = "PlayStation 5"
DEFAULT_GOAL_AMOUNT = 4500
# Shown on the home screen when no hours have been recorded.
DEFAULT_WEEKLY_HOURS = 3


def _default_hours() -> WeeklyHours:
    return WeeklyHours.from_record(storage.DEMO_HOURS)


def get_home_summary(conn: sqlite3.Connection, config: Optional[AppConfig] = None) -> HomeSummary:
    """Build the full home dashboard."""
    config = config or AppConfig()
    session = accounts.current_session(conn)

    goal = goals.get_goal(conn)
    goal_is_default = goal is None
    if goal is None:
        goal = Goal(name=DEFAULT_GOAL_NAME, amount=DEFAULT_GOAL_AMOUNT, activated_at=datetime.now())

    hours = goals.get_weekly_hours(conn)
    # A zero week falls back to the default, as the home card always did.
    this_week = hours.week4 if hours is not None and hours.week4 else DEFAULT_WEEKLY_HOURS

    years, months = progress.eta_to_goal(goal.amount, config.monthly_savings)
    return HomeSummary(
        username=session.username if session else None,
        goal=goal,
        goal_is_default=goal_is_default,
        weekly_hours=this_week,
        risk=progress.risk_tier(this_week),
        blocked=goals.is_blocked(conn),
        monthly_savings=config.monthly_savings,
        projection_months=config.projection_months,
        progress_percent=progress.goal_progress_percent(
            config.monthly_savings, config.projection_months, goal.amount
        ),
        milestones=progress.savings_milestones(config.monthly_savings),
        eta_years=years,
        eta_months=months,
    )


def get_hours_summary(conn: sqlite3.Connection) -> HoursSummary:
    """Build the weekly hours view."""
    stored = goals.get_weekly_hours(conn)
    hours = stored or _default_hours()
    return HoursSummary(
        hours=hours,
        has_data=stored is not None,
        total=progress.total_hours(hours),
        average=progress.average_hours(hours),
        trend=progress.trend(*hours.as_list()),
        risk=progress.risk_tier(hours.week4),
        blocked=goals.is_blocked(conn),
    )
