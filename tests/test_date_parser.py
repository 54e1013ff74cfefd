"""Tests for date parser with relative dates."""

import pytest
from datetime import date, datetime, timedelta
from ledgerdesk.utils.date_parser import first_of_month, get_date_range, parse_date, to_calendar_day


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    result = parse_date("2024-01-15")
    assert result == date(2024, 1, 15)


def test_parse_natural_date():
    """Test parsing a written-out date."""
    assert parse_date("March 5, 2024") == date(2024, 3, 5)


def test_parse_today():
    """Test parsing 'today'."""
    result = parse_date("today")
    assert result == date.today()


def test_parse_yesterday():
    """Test parsing 'yesterday'."""
    result = parse_date("Yesterday ")
    assert result == date.today() - timedelta(days=1)


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


def test_parse_invalid_date():
    """Test that garbage raises ValueError."""
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("not a date at all")


def test_to_calendar_day_strict():
    """Calendar days accept dates and ISO strings only."""
    assert to_calendar_day("2024-03-01") == date(2024, 3, 1)
    assert to_calendar_day(date(2024, 3, 1)) == date(2024, 3, 1)
    assert to_calendar_day(datetime(2024, 3, 1, 23, 59)) == date(2024, 3, 1)

    with pytest.raises(ValueError):
        to_calendar_day("yesterday")
    with pytest.raises(ValueError):
        to_calendar_day("2024-02-30")
    with pytest.raises(ValueError):
        to_calendar_day(20240301)


@pytest.mark.parametrize("text", ["20240301", "2024-W10-1", "2024-061", "2024-03-01T10:00"])
def test_to_calendar_day_rejects_other_iso_forms(text):
    with pytest.raises(ValueError, match="expected YYYY-MM-DD"):
        to_calendar_day(text)


def test_first_of_month():
    """Test month normalization."""
    assert first_of_month("2024-03") == date(2024, 3, 1)
    assert first_of_month("2024-03-31") == date(2024, 3, 1)
    assert first_of_month(date(2024, 2, 29)) == date(2024, 2, 1)

    with pytest.raises(ValueError):
        first_of_month("2024-13")


def test_get_date_range_this_month():
    """Test this-month range."""
    start, end = get_date_range("this-month")
    today = date.today()
    assert start == today.replace(day=1)
    assert end == today


def test_get_date_range_last_month():
    """Test last-month range ends the day before this month starts."""
    start, end = get_date_range("last-month")
    assert start.day == 1
    assert end == date.today().replace(day=1) - timedelta(days=1)
    assert start.month == end.month


def test_get_date_range_this_year():
    """Test this-year range."""
    start, end = get_date_range("this-year")
    assert start == date(date.today().year, 1, 1)
    assert end == date.today()


def test_get_date_range_unknown():
    """Test unknown period raises ValueError."""
    with pytest.raises(ValueError, match="Unknown period"):
        get_date_range("next-decade")
