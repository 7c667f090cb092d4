"""Rich terminal formatting helpers."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from betblock.encouragement import advice_for, recommendation_for, weekly_message
from betblock.models import Goal, HomeSummary, HoursSummary, LoginLogEntry, RiskTier, Trend
from betblock.progress import format_eta

console = Console()

_RISK_STYLE: dict[RiskTier, str] = {
    RiskTier.LOW: "green",
    RiskTier.MEDIUM: "yellow",
    RiskTier.HIGH: "bold red",
}

_TREND_TEXT: dict[Trend, tuple[str, str]] = {
    Trend.IMPROVING: ("Improving!", "green"),
    Trend.WORSENING: ("Watch out!", "yellow"),
    Trend.STABLE: ("Stable", "blue"),
}


def money(amount: float) -> str:
    """Format an amount with thousands separators and two decimals."""
    return f"{amount:,.2f}"


def print_home(summary: HomeSummary) -> None:
    """Print the home dashboard."""
    name = escape(summary.username or "guest")
    risk_style = _RISK_STYLE[summary.risk]
    lines: list[str] = [
        f"Welcome, [bold]{name}[/bold]",
        "",
        f"Risk profile: [{risk_style}]{summary.risk.value.title()}[/{risk_style}]",
        advice_for(summary.risk),
        "",
        f"Hours gambling this week: {summary.weekly_hours:g}h",
        weekly_message(summary.weekly_hours),
        "",
        f"App blocker: {'[green]ON[/green]' if summary.blocked else '[dim]OFF[/dim]'}",
    ]
    console.print(Panel("\n".join(lines), title="Home", border_style="blue"))

    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("months")
    table.add_column("saved", justify="right")
    for months, saved in summary.milestones.items():
        table.add_row(f"{months} months", money(saved))
    console.print(Panel(
        table,
        title=f"Saving {money(summary.monthly_savings)} a month",
        border_style="green",
    ))

    goal = summary.goal
    eta = format_eta(summary.eta_years, summary.eta_months)
    label = f"{escape(goal.name)}{' (example)' if summary.goal_is_default else ''}"
    console.print(Panel(
        f"{summary.progress_percent}% of a {label} in {summary.projection_months} months\n"
        f"Goal reached in about {eta}",
        title="Goal",
        border_style="magenta",
    ))


def print_goal(goal: Goal, eta_years: int, eta_months: int, monthly_savings: float) -> None:
    """Print the active goal."""
    lines = [
        f"Goal: [bold]{escape(goal.name)}[/bold]",
        f"Amount: {money(goal.amount)}",
        f"Set on: {goal.activated_at.strftime('%Y-%m-%d')}",
        "",
        f"Saving {money(monthly_savings)} a month you will reach it in about "
        f"{format_eta(eta_years, eta_months)}.",
    ]
    console.print(Panel("\n".join(lines), title="Goal", border_style="magenta"))


def print_hours(summary: HoursSummary) -> None:
    """Print the weekly hours view with trend and recommendation."""
    table = Table(show_header=True, box=None, pad_edge=False)
    for i in range(1, 5):
        table.add_column(f"Week {i}", justify="right")
    table.add_row(*(f"{h:g}h" for h in summary.hours.as_list()))
    title = "Hours Gambling" if summary.has_data else "Hours Gambling (example data)"
    console.print(Panel(table, title=title, border_style="blue"))

    trend_text, trend_style = _TREND_TEXT[summary.trend]
    lines = [
        f"Total: {summary.total:g}h",
        f"Average: {summary.average:.1f}h per week",
        f"This week: {summary.hours.week4:g}h",
        f"Trend: [{trend_style}]{trend_text}[/{trend_style}]",
        f"App blocker: {'[green]ON[/green]' if summary.blocked else '[dim]OFF[/dim]'}",
    ]
    console.print(Panel("\n".join(lines), title="Statistics", border_style="cyan"))

    rec_title, rec_text = recommendation_for(summary.risk)
    style = _RISK_STYLE[summary.risk]
    console.print(Panel(rec_text, title=rec_title, border_style=style.split()[-1]))


def print_login_log(entries: list[LoginLogEntry]) -> None:
    """Print the login history."""
    if not entries:
        console.print(Panel("No logins yet.", title="Login history", border_style="dim"))
        return

    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("when")
    table.add_column("user")
    for entry in entries:
        table.add_row(entry.login_time.strftime("%Y-%m-%d %H:%M"), escape(entry.username))
    console.print(Panel(table, title="Login history", border_style="blue"))


def print_nudge(message: str) -> None:
    """Print an encouragement message in a styled panel."""
    text = Text(message, justify="center")
    console.print(Panel(text, border_style="magenta", padding=(1, 4)))


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_info(message: str) -> None:
    """Print an informational message."""
    console.print(f"[blue]{message}[/blue]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]{message}[/yellow]")
