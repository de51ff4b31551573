"""Formatting helpers shared by the CLI screens."""
import calendar
from datetime import date, datetime
from typing import List, Optional

from .models import Project

WEEKDAY_HEADER = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

def format_money(budget: float) -> str:
    """Whole dollars, truncated: 5000.99 -> '$5000'."""
    return f"${int(budget)}"

def format_date_range(start: datetime, end: datetime) -> str:
    return f"{start:%b} {start.day} - {end:%b} {end.day}"

def format_day(day: date) -> str:
    return f"{day:%b} {day.day}, {day.year}"

def format_timestamp(moment: datetime) -> str:
    return f"{format_day(moment)} at {moment:%H:%M}"

def status_label(project: Project) -> str:
    return "Completed" if project.is_completed else "In Progress"

def month_grid(year: int, month: int) -> List[List[Optional[date]]]:
    """
    Weeks of the month, Sunday first.

    Days outside the month are None so every week has seven cells.
    """
    weeks = calendar.Calendar(firstweekday=calendar.SUNDAY).monthdatescalendar(year, month)
    return [[d if d.month == month else None for d in week] for week in weeks]

def render_month(year: int, month: int, selected: Optional[date] = None) -> str:
    """Plain-text calendar with the selected day in brackets."""
    lines = [f"{calendar.month_name[month]} {year}".center(35), " ".join(f"{d:>4}" for d in WEEKDAY_HEADER)]
    for week in month_grid(year, month):
        cells = []
        for day in week:
            if day is None:
                cells.append("    ")
            elif day == selected:
                cells.append(f"[{day.day:>2}]")
            else:
                cells.append(f"{day.day:>4}")
        lines.append(" ".join(cells))
    return "\n".join(lines)
