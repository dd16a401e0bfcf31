# src/sprintcal/charts.py

import math
from typing import List, Sequence

import matplotlib.pyplot as plt
from matplotlib.patches import Patch, Rectangle

from .date_utils import WEEKDAY_NAMES, month_name
from .models import CalendarMonth, PeriodType

COLOR_DEVELOPMENT = '#4A90D9'
COLOR_QA = '#F5A623'
COLOR_RELEASE = '#D0021B'
COLOR_TODAY = '#7ED321'

PERIOD_COLORS = {
    PeriodType.DEVELOPMENT: COLOR_DEVELOPMENT,
    PeriodType.QA: COLOR_QA,
    PeriodType.RELEASE: COLOR_RELEASE,
}

# (css-ish class name, label, colour) in display order
LEGEND_ITEMS = [
    ('development', 'Development', COLOR_DEVELOPMENT),
    ('qa', 'QA', COLOR_QA),
    ('release', 'Release', COLOR_RELEASE),
    ('today', 'Today', COLOR_TODAY),
]


def _draw_month(ax, month: CalendarMonth):
    rows = math.ceil(len(month.days) / 7)
    ax.set_xlim(0, 7)
    ax.set_ylim(rows + 1, 0)
    ax.axis("off")
    ax.set_title(f"{month_name(month.month)} {month.year}", fontsize=12, fontweight='bold')

    for col, name in enumerate(WEEKDAY_NAMES):
        ax.text(col + 0.5, 0.5, name, ha="center", va="center", fontsize=8)

    for idx, day in enumerate(month.days):
        if day is None:
            continue
        row, col = divmod(idx, 7)
        y = row + 1
        edge = COLOR_TODAY if day.is_today else '#CCCCCC'
        ax.add_patch(Rectangle((col, y), 1, 1, fill=False, edgecolor=edge,
                               linewidth=2 if day.is_today else 0.5))
        ax.text(col + 0.08, y + 0.3, str(day.date.day), fontsize=7, va="center")
        # one thin bar per claiming sprint, stacked at the bottom of the cell
        for i, period in enumerate(day.periods):
            ax.add_patch(Rectangle((col + 0.05, y + 0.5 + i * 0.15), 0.9, 0.12,
                                   color=PERIOD_COLORS[period.type]))


def render_calendar_png(months: Sequence[CalendarMonth], filename: str, cols: int = 3):
    """
    Draws the months as a grid and saves it as PNG.
    :param months: Result of generate_calendar_months()/build_calendar().
    :param filename: Output path, e.g. "sprints.png".
    :param cols: Months per row.
    """
    if not months:
        fig, ax = plt.subplots()
        ax.text(0.5, 0.5, "No months", ha="center", va="center", fontsize=14)
        ax.axis("off")
        fig.savefig(filename, bbox_inches="tight")
        plt.close(fig)
        return

    cols = max(1, min(cols, len(months)))
    rows = math.ceil(len(months) / cols)
    fig, axes = plt.subplots(rows, cols, figsize=(4 * cols, 4 * rows), squeeze=False)
    flat: List = [ax for row in axes for ax in row]
    for ax, month in zip(flat, months):
        _draw_month(ax, month)
    for ax in flat[len(months):]:
        ax.axis("off")

    handles = [Patch(color=color, label=label) for _, label, color in LEGEND_ITEMS]
    fig.legend(handles=handles, loc="lower center", ncol=len(handles))
    fig.savefig(filename, bbox_inches="tight")
    plt.close(fig)
