"""Advice and encouragement messages keyed to the user's risk tier.

General nudges are loaded from ``ENCOURAGEMENTS.md`` at the project root.
The user can freely add, edit, or remove messages in that file.
If the file is missing, a small built-in fallback list is used.
"""

from __future__ import annotations

import random
from pathlib import Path

from betblock.models import RiskTier

_FALLBACK_MESSAGES: list[str] = [
    "Every week without a bet is money kept for something you want.",
    "Urges pass. You do not have to act on this one.",
    "A slip is not a failure. Start again from today.",
    "Your goal is closer than it was last month.",
    "Talking to someone you trust makes this easier.",
    "You are in control of what you do next.",
]

_ADVICE: dict[RiskTier, str] = {
    RiskTier.LOW: "Keep it up! You are in control.",
    RiskTier.MEDIUM: "Heads up! Keep an eye on your habits.",
    RiskTier.HIGH: "Careful! Consider looking for professional help.",
}

_RECOMMENDATIONS: dict[RiskTier, tuple[str, str]] = {
    RiskTier.LOW: (
        "Well done! You are doing great!",
        "Keep this level of control and stay focused on your goals.",
    ),
    RiskTier.MEDIUM: (
        "Watch the time you spend",
        "Try to cut down the time you spend betting, little by little.",
    ),
    RiskTier.HIGH: (
        "Consider getting help",
        "This much time may point to compulsive behaviour. Consider professional support.",
    ),
}

# At or below this many hours the weekly message congratulates the user.
_PRAISE_MAX_HOURS = 3


def _load_messages() -> list[str]:
    """Parse bullet points from ENCOURAGEMENTS.md, falling back to built-in list."""
    md_path = Path(__file__).resolve().parent.parent / "ENCOURAGEMENTS.md"
    if not md_path.exists():
        return _FALLBACK_MESSAGES

    messages: list[str] = []
    for line in md_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if stripped.startswith("- "):
            msg = stripped[2:].strip()
            if msg:
                messages.append(msg)
    return messages if messages else _FALLBACK_MESSAGES


_MESSAGES: list[str] = _load_messages()


def get_nudge() -> str:
    """Return a single random encouragement message."""
    return random.choice(_MESSAGES)


def advice_for(tier: RiskTier) -> str:
    """One-line advice shown under the risk profile."""
    return _ADVICE[tier]


def recommendation_for(tier: RiskTier) -> tuple[str, str]:
    """(title, text) of the personalised recommendation."""
    return _RECOMMENDATIONS[tier]


def weekly_message(hours: float) -> str:
    """Comment on this week's hours."""
    shown = f"{hours:g}"
    if hours <= _PRAISE_MAX_HOURS:
        return f"Congratulations! You kept it to just {shown} hour(s) this week!"
    return f"You gambled for {shown} hour(s) this week. Try to cut down!"
