"""Pure calculations behind the dashboard: risk, trend and savings progress."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from betblock.models import RiskTier, Trend, WeeklyHours

LOW_RISK_MAX_HOURS = 2
MEDIUM_RISK_MAX_HOURS = 5
DEFAULT_MILESTONES = (6, 12, 24)


def _round_half_up(value: float, places: int = 0) -> Decimal:
    quantum = Decimal(1).scaleb(-places)
    return Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)


def risk_tier(weekly_hours: float) -> RiskTier:
    """Classify a week's gambling hours."""
    if weekly_hours <= LOW_RISK_MAX_HOURS:
        return RiskTier.LOW
    if weekly_hours <= MEDIUM_RISK_MAX_HOURS:
        return RiskTier.MEDIUM
    return RiskTier.HIGH


def trend(w1: float, w2: float, w3: float, w4: float) -> Trend:
    """Compare the last three weeks; only a strict chain counts as a trend.

    ``w1`` is part of the record but does not take part in the comparison.
    """
    if w4 < w3 < w2:
        return Trend.IMPROVING
    if w4 > w3 > w2:
        return Trend.WORSENING
    return Trend.STABLE


def goal_progress_percent(monthly_savings: float, months: int, goal_amount: float) -> int:
    """Share of the goal covered by ``months`` of savings, as a whole percent."""
    if goal_amount <= 0:
        return 0
    return int(_round_half_up(monthly_savings * months / goal_amount * 100))


def eta_to_goal(goal_amount: float, monthly_savings: float) -> tuple[int, int]:
    """Whole (years, months) needed to reach the goal at a fixed saving rate."""
    if goal_amount <= 0 or monthly_savings <= 0:
        return 0, 0
    total_months = math.ceil(goal_amount / monthly_savings)
    return divmod(total_months, 12)


def format_eta(years: int, months: int) -> str:
    """Human wording for an ETA, e.g. ``"1 year and 11 months"``."""
    def _unit(n: int, word: str) -> str:
        return f"{n} {word}{'' if n == 1 else 's'}"

    # Up to a year is counted in months ("12 months", not "1 year").
    total = years * 12 + months
    if total <= 12:
        return _unit(total, "month")
    if months == 0:
        return _unit(years, "year")
    return f"{_unit(years, 'year')} and {_unit(months, 'month')}"


def total_hours(hours: WeeklyHours) -> float:
    return sum(hours.as_list())


def average_hours(hours: WeeklyHours) -> float:
    """Mean hours per week, to one decimal place."""
    return float(_round_half_up(total_hours(hours) / 4, places=1))


def savings_milestones(
    monthly_savings: float, months: Iterable[int] = DEFAULT_MILESTONES
) -> dict[int, float]:
    """Money saved after each number of months."""
    return {m: monthly_savings * m for m in months}
