"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports ISO dates, anything dateutil understands, and a few relative
    forms: "today", "yesterday", "tomorrow", "this month", "last month",
    "this year", "last year" (the latter four give the first day of the
    period).

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    if not date_str:
        raise ValueError("Empty date string")
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
        "this month": today.replace(day=1),
        "last month": (today - relativedelta(months=1)).replace(day=1),
        "this year": today.replace(month=1, day=1),
        "last year": today.replace(month=1, day=1) - relativedelta(years=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        # Year-first so "2025-02-01" style input is never read as day-first
        return date_parser.parse(date_str, yearfirst=True).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def fiscal_year_range(year: int) -> tuple[date, date]:
    """Return the calendar fiscal year (January 1 to December 31) for a year."""
    start = date(year, 1, 1)
    return start, start + relativedelta(years=1) - timedelta(days=1)
