"""Matplotlib charts for the hours and savings screens.

All figures use a dark theme consistent with the BetBlock app palette.
"""

from __future__ import annotations

import io

import matplotlib
matplotlib.use("Agg")  # non-interactive backend -- render to image buffers
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure
from PIL import Image

from betblock.models import WeeklyHours
from betblock.progress import LOW_RISK_MAX_HOURS, MEDIUM_RISK_MAX_HOURS

# -- Palette (matches app dark theme) -------------------------------------
_BG = "#2D2D2D"
_FG = "#e0e0e0"
_ACCENT = "#00A3FF"
_GRID = "#444444"
_LOW = "#4CAF50"
_MEDIUM = "#FF9800"
_HIGH = "#F44336"

_WEEK_LABELS = ["Week 1", "Week 2", "Week 3", "Week 4"]


# -----------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------

def _fig_to_pil(fig: Figure, dpi: int = 100) -> Image.Image:
    """Render a matplotlib Figure to a PIL Image and close it."""
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=dpi, bbox_inches="tight",
                facecolor=fig.get_facecolor(), edgecolor="none")
    plt.close(fig)
    buf.seek(0)
    return Image.open(buf)


def _style_axes(ax) -> None:
    ax.set_facecolor(_BG)
    ax.tick_params(colors=_FG, labelsize=8)
    ax.spines["bottom"].set_color(_GRID)
    ax.spines["left"].set_color(_GRID)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.yaxis.grid(color=_GRID, linewidth=0.5)


# -----------------------------------------------------------------------
# Weekly hours
# -----------------------------------------------------------------------

def weekly_hours_chart(
    hours: WeeklyHours,
    *,
    title: str = "Hours Gambling per Week",
    size: tuple[int, int] = (540, 260),
    dpi: int = 100,
) -> Image.Image:
    """Line chart of the four weeks, with the risk bands shaded behind it."""
    values = np.array(hours.as_list(), dtype=float)
    x = np.arange(len(values))
    top = max(float(values.max()) + 1, MEDIUM_RISK_MAX_HOURS + 2)
    bottom = min(0.0, float(values.min()) - 1)

    fig_w, fig_h = size[0] / dpi, size[1] / dpi
    fig = Figure(figsize=(fig_w, fig_h), dpi=dpi, facecolor=_BG)
    ax = fig.add_subplot(111)
    _style_axes(ax)

    ax.axhspan(0, LOW_RISK_MAX_HOURS, color=_LOW, alpha=0.08)
    ax.axhspan(LOW_RISK_MAX_HOURS, MEDIUM_RISK_MAX_HOURS, color=_MEDIUM, alpha=0.08)
    ax.axhspan(MEDIUM_RISK_MAX_HOURS, top, color=_HIGH, alpha=0.08)

    ax.plot(x, values, color=_ACCENT, linewidth=2, marker="o",
            markersize=6, markerfacecolor=_ACCENT, markeredgecolor="white",
            markeredgewidth=0.5)
    ax.fill_between(x, values, alpha=0.15, color=_ACCENT)

    ax.set_xticks(x)
    ax.set_xticklabels(_WEEK_LABELS)
    ax.set_ylim(bottom, top)
    ax.set_ylabel("Hours", color=_FG, fontsize=9)
    ax.set_title(title, color=_FG, fontsize=11, fontweight="bold")

    return _fig_to_pil(fig, dpi=dpi)


# -----------------------------------------------------------------------
# Savings projection
# -----------------------------------------------------------------------

def savings_projection_chart(
    monthly_savings: float,
    goal_amount: float,
    months: int = 24,
    *,
    title: str = "Savings Projection",
    size: tuple[int, int] = (540, 260),
    dpi: int = 100,
) -> Image.Image:
    """Cumulative savings over ``months`` against the goal line."""
    x = np.arange(0, months + 1)
    saved = x * monthly_savings

    fig_w, fig_h = size[0] / dpi, size[1] / dpi
    fig = Figure(figsize=(fig_w, fig_h), dpi=dpi, facecolor=_BG)
    ax = fig.add_subplot(111)
    _style_axes(ax)

    ax.plot(x, saved, color=_LOW, linewidth=2)
    ax.fill_between(x, saved, alpha=0.15, color=_LOW)
    if goal_amount > 0:
        ax.axhline(goal_amount, color=_ACCENT, linestyle="--", linewidth=1.2)
        ax.text(0, goal_amount, " goal", color=_ACCENT, fontsize=8, va="bottom")

    ax.set_xlim(0, months)
    ax.set_ylim(0, max(float(saved[-1]), goal_amount) * 1.1 or 1)
    ax.set_xlabel("Months", color=_FG, fontsize=9)
    ax.set_title(title, color=_FG, fontsize=11, fontweight="bold")

    return _fig_to_pil(fig, dpi=dpi)
