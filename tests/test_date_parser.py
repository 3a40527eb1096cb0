"""Tests for date parser with relative dates."""

import pytest
from datetime import date, timedelta
from veira.utils.date_parser import parse_date, get_date_range

TODAY = date(2024, 3, 14)


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    result = parse_date("2024-01-15")
    assert result == date(2024, 1, 15)


def test_parse_today():
    """Test parsing 'today'."""
    assert parse_date("today", today=TODAY) == TODAY


def test_parse_yesterday():
    """Test parsing 'yesterday'."""
    assert parse_date("Yesterday", today=TODAY) == TODAY - timedelta(days=1)


def test_parse_days_ago():
    """Test parsing 'N days ago'."""
    assert parse_date("7 days ago", today=TODAY) == date(2024, 3, 7)
    assert parse_date("0 days ago", today=TODAY) == TODAY


def test_parse_invalid():
    """Test parsing an unknown string."""
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("not-a-date")


def test_parse_standard_formats():
    """Test parsing various standard date formats."""
    assert parse_date("January 15, 2024") == date(2024, 1, 15)
    assert parse_date("15 Jan 2024") == date(2024, 1, 15)


def test_get_date_range_this_week():
    """Test get_date_range for this-week."""
    start, end = get_date_range("this-week", today=TODAY)
    assert start == date(2024, 3, 11)
    assert start.weekday() == 0  # Should be Monday
    assert end == TODAY


def test_get_date_range_this_month():
    """Test get_date_range for this-month."""
    assert get_date_range("this-month", today=TODAY) == (date(2024, 3, 1), TODAY)


def test_get_date_range_last_month():
    """Test get_date_range for last-month across a leap February."""
    assert get_date_range("last-month", today=TODAY) == (date(2024, 2, 1), date(2024, 2, 29))


def test_get_date_range_last_month_in_january():
    start, end = get_date_range("last-month", today=date(2024, 1, 10))
    assert (start, end) == (date(2023, 12, 1), date(2023, 12, 31))


def test_get_date_range_unknown():
    with pytest.raises(ValueError, match="Unknown period"):
        get_date_range("this-decade")
