import logging
from typing import List, Optional, Sequence

from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from .charts import COLOR_TODAY, LEGEND_ITEMS, PERIOD_COLORS
from .date_utils import WEEKDAY_NAMES, format_date, month_name, weekday_name
from .models import CalendarConfig, CalendarMonth, PeriodType

_PERIOD_MARKS = {
    PeriodType.DEVELOPMENT: 'D',
    PeriodType.QA: 'Q',
    PeriodType.RELEASE: 'R',
}


def format_month_text(month: CalendarMonth) -> str:
    """
    Plain-text month. Each cell is the day number followed by one letter per
    claiming sprint (D=development, Q=QA, R=release); today is marked with '*'.
    """
    cell = 7
    lines = [f"{month_name(month.month)} {month.year}".center(cell * 7).rstrip(),
             "".join(name.ljust(cell) for name in WEEKDAY_NAMES).rstrip()]
    row: List[str] = []
    for day in month.days:
        if day is None:
            row.append(" " * cell)
        else:
            marks = "".join(_PERIOD_MARKS[p.type] for p in day.periods)
            star = "*" if day.is_today else ""
            row.append(f"{day.date.day}{star}{marks}".ljust(cell))
        if len(row) == 7:
            lines.append("".join(row).rstrip())
            row = []
    if row:
        lines.append("".join(row).rstrip())
    return "\n".join(lines)


def format_legend_text() -> str:
    return "Legend: D=Development  Q=QA  R=Release  *=Today"


def _draw_legend(c, x, y):
    c.setFont('Helvetica', 9)
    for _, label, color in LEGEND_ITEMS:
        c.setFillColor(HexColor(color))
        c.rect(x, y - 2, 10, 10, stroke=0, fill=1)
        c.setFillColor(HexColor('#000000'))
        c.drawString(x + 14, y, label)
        x += 90


def _draw_month(c, month: CalendarMonth, x0, y_top, cell_w, cell_h):
    c.setFont('Helvetica-Bold', 12)
    c.drawString(x0, y_top, f"{month_name(month.month)} {month.year}")
    y = y_top - 20
    c.setFont('Helvetica', 8)
    for col, name in enumerate(WEEKDAY_NAMES):
        c.drawCentredString(x0 + col * cell_w + cell_w / 2, y, name)
    y -= 6
    for idx, day in enumerate(month.days):
        if day is None:
            continue
        row, col = divmod(idx, 7)
        x = x0 + col * cell_w
        top = y - row * cell_h
        c.setStrokeColor(HexColor(COLOR_TODAY if day.is_today else '#CCCCCC'))
        c.setLineWidth(2 if day.is_today else 0.5)
        c.rect(x, top - cell_h, cell_w, cell_h, stroke=1, fill=0)
        c.setFillColor(HexColor('#000000'))
        c.drawString(x + 3, top - 10, str(day.date.day))
        for i, period in enumerate(day.periods):
            c.setFillColor(HexColor(PERIOD_COLORS[period.type]))
            c.rect(x + 3, top - 18 - i * 6, cell_w - 6, 4, stroke=0, fill=1)
    c.setFillColor(HexColor('#000000'))
    rows = (len(month.days) + 6) // 7
    return y - rows * cell_h


def export_calendar_pdf(months: Sequence[CalendarMonth], filename: str,
                        config: Optional[CalendarConfig] = None):
    """Sprint calendar as PDF, two months per page plus a legend."""
    logging.info(f"[sprintcal] PDF export to {filename} started.")
    try:
        c = canvas.Canvas(filename, pagesize=letter)
        w, h = letter
        margin = 50
        cell_w = (w - 2 * margin) / 7
        cell_h = 40

        def page_header():
            y = h - margin
            c.setFont('Helvetica-Bold', 14)
            c.drawString(margin, y, 'Sprint Calendar')
            y -= 18
            if config is not None:
                c.setFont('Helvetica', 10)
                center = format_date(config.center_date) if config.center_date else '-'
                c.drawString(margin, y,
                             f"Start: {weekday_name(config.start_day_of_week)}  "
                             f"Development: {config.development_days} days  "
                             f"QA: {config.qa_days} days  Center: {center}")
                y -= 18
            _draw_legend(c, margin, y)
            return y - 30

        y = page_header()
        for i, month in enumerate(months):
            if i and i % 2 == 0:
                c.showPage()
                y = page_header()
            y = _draw_month(c, month, margin, y, cell_w, cell_h) - 30
        c.save()
    except Exception as e:
        logging.error(f"PDF export error: {e}")
        raise
    logging.info(f"[sprintcal] PDF export to {filename} finished.")
