"""Input sanitisation and form validation shared by the CLI and mobile app."""

from __future__ import annotations

import math
import re

from betblock.errors import ValidationError
from betblock.models import (
    GOAL_AMOUNT_MAX,
    GOAL_NAME_MAX,
    GOAL_NAME_MIN,
    PASSWORD_MAX,
    PASSWORD_MIN,
    USERNAME_MAX,
    USERNAME_MIN,
)

_UNSAFE_CHARS = re.compile(r"""[<>{}"'`]""")


def sanitize(text: str) -> str:
    """Strip the characters ``< > { } " ' ` `` from free text."""
    return _UNSAFE_CHARS.sub("", text)


def clean(text: str) -> str:
    """Trim and sanitise a field; the form every stored value takes."""
    return sanitize(text.strip()).strip()


def validate_registration(username: str, password: str, confirm_password: str) -> tuple[str, str]:
    """Check the sign-up form and return the cleaned (username, password)."""
    if not username.strip():
        raise ValidationError("Enter a username.")
    if len(username.strip()) < USERNAME_MIN:
        raise ValidationError(f"Username must be at least {USERNAME_MIN} characters.")
    if not password.strip():
        raise ValidationError("Enter a password.")
    if len(password) < PASSWORD_MIN:
        raise ValidationError(f"Password must be at least {PASSWORD_MIN} characters.")
    if not confirm_password.strip():
        raise ValidationError("Confirm your password.")
    if password != confirm_password:
        raise ValidationError("Passwords do not match.")

    user, pw = clean(username), clean(password)
    if len(user) < USERNAME_MIN:
        raise ValidationError(f"Username must be at least {USERNAME_MIN} characters.")
    if len(user) > USERNAME_MAX:
        raise ValidationError(f"Username must be at most {USERNAME_MAX} characters.")
    if len(pw) < PASSWORD_MIN:
        raise ValidationError(f"Password must be at least {PASSWORD_MIN} characters.")
    if len(pw) > PASSWORD_MAX:
        raise ValidationError(f"Password must be at most {PASSWORD_MAX} characters.")
    return user, pw


def validate_login(username: str, password: str) -> tuple[str, str]:
    """Check the login form and return the cleaned (username, password)."""
    if not username.strip():
        raise ValidationError("Enter your username.")
    if not password.strip():
        raise ValidationError("Enter your password.")
    if len(username.strip()) < USERNAME_MIN:
        raise ValidationError(f"Username must be at least {USERNAME_MIN} characters.")
    return clean(username), clean(password)


def parse_amount(text: str) -> float:
    """Parse a money amount written with ``.`` thousands and ``,`` decimals.

    ``"4.500,50"`` -> 4500.5, ``"4500"`` -> 4500.0.
    """
    normalised = text.strip().replace(" ", "").replace(".", "").replace(",", ".")
    try:
        value = float(normalised)
    except ValueError:
        raise ValidationError("Enter a valid amount greater than zero.") from None
    if math.isnan(value) or math.isinf(value):
        raise ValidationError("Enter a valid amount greater than zero.")
    return value


def validate_goal(name: str, amount_text: str) -> tuple[str, float]:
    """Check the goal form and return the cleaned (name, amount)."""
    if not name.strip():
        raise ValidationError("Name your goal (e.g. Car, House, Trip).")
    if not amount_text.strip():
        raise ValidationError("Enter the goal amount.")

    amount = parse_amount(amount_text)
    if amount <= 0:
        raise ValidationError("Enter a valid amount greater than zero.")
    if amount > GOAL_AMOUNT_MAX:
        raise ValidationError("That amount is too high. Enter a realistic value.")

    cleaned = clean(name)
    if len(cleaned) < GOAL_NAME_MIN:
        raise ValidationError(f"Goal name must be at least {GOAL_NAME_MIN} characters.")
    if len(cleaned) > GOAL_NAME_MAX:
        raise ValidationError(f"Goal name must be at most {GOAL_NAME_MAX} characters.")
    return cleaned, amount
