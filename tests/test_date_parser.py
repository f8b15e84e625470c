"""Tests for date parser with relative dates."""

import pytest
from datetime import date, timedelta
from ledgerbook.utils.date_parser import fiscal_year_range, parse_date


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    result = parse_date("2025-01-15")
    assert result == date(2025, 1, 15)


def test_parse_iso_date_is_year_first():
    """Test an ISO date is never read day-first."""
    assert parse_date("2025-02-01") == date(2025, 2, 1)


def test_parse_today():
    """Test parsing 'today'."""
    assert parse_date("today") == date.today()


def test_parse_yesterday():
    """Test parsing 'yesterday'."""
    assert parse_date("yesterday") == date.today() - timedelta(days=1)


def test_parse_tomorrow():
    """Test parsing 'tomorrow'."""
    assert parse_date("Tomorrow ") == date.today() + timedelta(days=1)


def test_parse_last_month():
    """Test parsing 'last month'."""
    result = parse_date("last month")
    # Should be first day of last month
    today = date.today()
    if today.month == 1:
        expected = date(today.year - 1, 12, 1)
    else:
        expected = date(today.year, today.month - 1, 1)
    assert result == expected


def test_parse_this_month():
    """Test parsing 'this month'."""
    assert parse_date("this month") == date.today().replace(day=1)


def test_parse_this_year():
    """Test parsing 'this year'."""
    assert parse_date("this year") == date(date.today().year, 1, 1)


def test_parse_last_year():
    """Test parsing 'last year'."""
    assert parse_date("last year") == date(date.today().year - 1, 1, 1)


def test_parse_invalid_date():
    """Test that garbage raises ValueError."""
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("not a date")


def test_parse_empty_date():
    """Test that an empty string raises ValueError."""
    with pytest.raises(ValueError):
        parse_date("   ")


def test_fiscal_year_range():
    """Test the calendar fiscal year."""
    assert fiscal_year_range(2025) == (date(2025, 1, 1), date(2025, 12, 31))
    assert fiscal_year_range(2024) == (date(2024, 1, 1), date(2024, 12, 31))
