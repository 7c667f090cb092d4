"""BetBlock CLI -- keep gambling in check and your savings goal in sight."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import typer
from rich.markup import escape

from betblock import accounts, config as cfg, dashboard, display, encouragement, goals, progress, storage
from betblock.errors import BetBlockError, StorageError

app = typer.Typer(
    name="betblock",
    help="Track the hours you spend gambling and what you save by stopping.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _conn() -> storage.sqlite3.Connection:
    """Get a store connection (convenience wrapper)."""
    return storage.get_connection()


@contextmanager
def _store() -> Iterator[storage.sqlite3.Connection]:
    """Open the store and turn app errors into a message and exit code 1."""
    conn = None
    try:
        conn = _conn()
        yield conn
    except StorageError as exc:
        display.print_warning(f"Storage problem, please try again later. ({escape(str(exc))})")
        raise typer.Exit(1)
    except BetBlockError as exc:
        display.print_warning(escape(str(exc)))
        raise typer.Exit(1)
    finally:
        if conn is not None:
            conn.close()


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------


@app.command()
def register(
    username: str = typer.Argument(..., help="Pick a username (3-30 characters)"),
    password: Optional[str] = typer.Option(None, "--password", "-p", help="Password (prompted if omitted)"),
    confirm: Optional[str] = typer.Option(None, "--confirm", help="Repeat the password"),
) -> None:
    """Create an account and log in."""
    if password is None:
        password = typer.prompt("Password", hide_input=True)
    if confirm is None:
        confirm = typer.prompt("Confirm password", hide_input=True)
    with _store() as conn:
        user = accounts.register(conn, username, password, confirm)
        display.print_success(f"Welcome, {escape(user.username)}! Your account was created.")


@app.command()
def login(
    username: str = typer.Argument(..., help="Your username"),
    password: Optional[str] = typer.Option(None, "--password", "-p", help="Password (prompted if omitted)"),
) -> None:
    """Log in."""
    if password is None:
        password = typer.prompt("Password", hide_input=True)
    with _store() as conn:
        session = accounts.login(conn, username, password)
        display.print_success(f"Welcome, {escape(session.username)}!")


@app.command()
def logout() -> None:
    """Log out of the current session."""
    with _store() as conn:
        accounts.logout(conn)
        display.print_success("Logged out.")


@app.command()
def whoami() -> None:
    """Show who is logged in."""
    with _store() as conn:
        session = accounts.current_session(conn)
        if session is None:
            display.print_info("Not logged in.")
            return
        since = session.login_time.strftime("%Y-%m-%d %H:%M")
        display.print_info(f"Logged in as {escape(session.username)} since {since}")


@app.command()
def history(
    limit: int = typer.Option(10, "--limit", "-n", help="Number of logins to show"),
) -> None:
    """Show recent logins."""
    with _store() as conn:
        display.print_login_log(accounts.login_log(conn, limit=limit))


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------


@app.command()
def status() -> None:
    """See your risk profile and savings progress."""
    with _store() as conn:
        summary = dashboard.get_home_summary(conn, cfg.load_config())
        display.print_home(summary)


@app.command()
def hours() -> None:
    """See your weekly gambling hours and trend."""
    with _store() as conn:
        display.print_hours(dashboard.get_hours_summary(conn))


@app.command()
def nudge() -> None:
    """Get a word of encouragement."""
    display.print_nudge(encouragement.get_nudge())


# ---------------------------------------------------------------------------
# Goal & blocker
# ---------------------------------------------------------------------------


@app.command()
def goal(
    name: Optional[str] = typer.Option(None, "--set", help="Name of a new goal (e.g. Car, House, Trip)"),
    amount: Optional[str] = typer.Option(None, "--amount", "-a", help="Goal amount, e.g. 25.000 or 4500,50"),
    delete: bool = typer.Option(False, "--delete", help="Delete the current goal"),
) -> None:
    """Show, set or delete your savings goal."""
    config = cfg.load_config()
    with _store() as conn:
        if name is not None:
            new_goal = goals.set_goal(conn, name, amount or "")
            years, months = progress.eta_to_goal(new_goal.amount, config.monthly_savings)
            display.print_success("Goal set!")
            display.print_goal(new_goal, years, months, config.monthly_savings)
        elif delete:
            if goals.delete_goal(conn):
                display.print_success("Goal deleted.")
            else:
                display.print_info("No goal to delete.")
        else:
            current = goals.get_goal(conn)
            if current is None:
                display.print_info("No goal set. Use --set NAME --amount AMOUNT.")
                return
            years, months = progress.eta_to_goal(current.amount, config.monthly_savings)
            display.print_goal(current, years, months, config.monthly_savings)


@app.command()
def block(
    on: bool = typer.Option(False, "--on", help="Block gambling apps"),
    off: bool = typer.Option(False, "--off", help="Unblock gambling apps"),
    toggle: bool = typer.Option(False, "--toggle", help="Flip the current state"),
) -> None:
    """Turn the gambling app blocker on or off."""
    with _store() as conn:
        if on:
            state = goals.set_blocked(conn, True)
        elif off:
            state = goals.set_blocked(conn, False)
        elif toggle:
            state = goals.toggle_block(conn)
        else:
            state = goals.is_blocked(conn)
            display.print_info(f"App blocker is {'ON' if state else 'OFF'}. Use --on, --off or --toggle.")
            return
        if state:
            display.print_success("Gambling apps blocked.")
        else:
            display.print_info("Gambling apps unblocked.")


@app.command(name="seed-demo")
def seed_demo() -> None:
    """Load the demo account (admin / 12345) and example weekly hours."""
    with _store() as conn:
        written = storage.seed_demo_data(conn)
        if written:
            display.print_success(f"Seeded: {', '.join(written)}")
        else:
            display.print_info("Demo data already present.")


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@app.command()
def config(
    store_path: Optional[str] = typer.Option(
        None, "--store-path",
        help="Set a custom store file path",
    ),
    savings: Optional[float] = typer.Option(
        None, "--savings",
        help="Monthly amount you save by not gambling",
    ),
    reset: bool = typer.Option(False, "--reset", help="Reset to the default local store"),
    show: bool = typer.Option(False, "--show", help="Show current config"),
) -> None:
    """Configure where your data is stored and your monthly savings."""
    if store_path:
        result = cfg.set_store_path(store_path)
        display.print_success(f"Store path set to: {result.store_path}")
    elif savings is not None:
        if savings <= 0:
            display.print_warning("Monthly savings must be greater than zero.")
            raise typer.Exit(1)
        result = cfg.set_monthly_savings(savings)
        display.print_success(f"Monthly savings set to {display.money(result.monthly_savings)}")
    elif reset:
        cfg.reset_store_path()
        display.print_success("Reset to default local store.")
    elif show:
        current = cfg.load_config()
        resolved = cfg.get_store_path()
        if current.store_path:
            display.print_info(f"Store: {current.store_path}")
        else:
            display.print_info(f"Store: {resolved} (default)")
        display.print_info(f"Monthly savings: {display.money(current.monthly_savings)}")
        display.print_info(f"Projection: {current.projection_months} months")
    else:
        display.print_info("Use --store-path, --savings, --reset, or --show.")
