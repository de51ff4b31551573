"""Unit tests for the formatting helpers."""

from datetime import date, datetime

from managerio.models import Project
from managerio.views import (
    format_money, format_date_range, format_day, format_timestamp, status_label, month_grid, render_month,
)


class TestFormatting:
    """Test text formatting."""

    def test_format_money(self):
        """Test budgets are shown as truncated whole dollars."""
        assert format_money(5000) == "$5000"
        assert format_money(5000.99) == "$5000"
        assert format_money(0) == "$0"

    def test_format_date_range(self):
        """Test the list-row date range."""
        assert format_date_range(datetime(2025, 1, 1), datetime(2025, 1, 31)) == "Jan 1 - Jan 31"

    def test_format_day(self):
        """Test the dashboard heading date."""
        assert format_day(date(2025, 1, 5)) == "Jan 5, 2025"
        assert format_timestamp(datetime(2025, 1, 5, 14, 30)) == "Jan 5, 2025 at 14:30"

    def test_status_label(self):
        """Test the completion label."""
        project = Project(title="Site", start_date=datetime(2025, 1, 1), end_date=datetime(2025, 1, 2))
        assert status_label(project) == "In Progress"
        assert status_label(project.model_copy(update={"is_completed": True})) == "Completed"


class TestMonthGrid:
    """Test the calendar grid."""

    def test_january_2025(self):
        """Test padding around a month starting on a Wednesday."""
        weeks = month_grid(2025, 1)
        assert len(weeks) == 5
        assert all(len(week) == 7 for week in weeks)
        assert weeks[0][:3] == [None, None, None]
        assert weeks[0][3] == date(2025, 1, 1)
        assert weeks[-1][-2] == date(2025, 1, 31)
        assert weeks[-1][-1] is None

    def test_every_day_once(self):
        """Test each day of the month appears exactly once."""
        days = [d for week in month_grid(2024, 2) for d in week if d is not None]
        assert days == [date(2024, 2, n) for n in range(1, 30)]

    def test_render_month(self):
        """Test the rendered calendar marks the selected day."""
        text = render_month(2025, 1, date(2025, 1, 15))
        assert "January 2025" in text
        assert "Sun" in text
        assert "[15]" in text
