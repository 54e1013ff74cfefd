"""Date parsing utilities."""

import re
from datetime import date, datetime, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

CALENDAR_DAY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "tomorrow", "last month", "this month"

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
        "this month": today.replace(day=1),
        "last month": (today - relativedelta(months=1)).replace(day=1),
        "next month": (today + relativedelta(months=1)).replace(day=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        return date.fromisoformat(date_str)
    except ValueError:
        pass

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def to_calendar_day(value: date | str) -> date:
    """Normalize a date or strict ISO ``YYYY-MM-DD`` string to a calendar day.

    Unlike ``parse_date`` this accepts no relative or fuzzy forms: entries are
    keyed by calendar day and must round-trip exactly.

    Raises:
        ValueError: If the value is not a valid calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not CALENDAR_DAY_PATTERN.match(text):
            raise ValueError(f"Invalid calendar date '{value}': expected YYYY-MM-DD")
        try:
            return date.fromisoformat(text)
        except ValueError as e:
            raise ValueError(f"Invalid calendar date '{value}': {e}")
    raise ValueError(f"Invalid calendar date {value!r}")


def first_of_month(value: date | str) -> date:
    """Normalize a month to its first day.

    Accepts a date, an ISO date string or a ``YYYY-MM`` string.

    Raises:
        ValueError: If the value cannot be read as a month
    """
    if isinstance(value, str) and len(value.strip()) == 7:
        value = f"{value.strip()}-01"
    return to_calendar_day(value).replace(day=1)


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a specified period.

    Args:
        period: Period string (this-month, last-month, this-year)

    Returns:
        Tuple of (start_date, end_date) for the specified period

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "this-month":
        return (today.replace(day=1), today)

    if period == "last-month":
        start_date = (today - relativedelta(months=1)).replace(day=1)
        end_date = today.replace(day=1) - timedelta(days=1)
        return (start_date, end_date)

    if period == "this-year":
        return (today.replace(month=1, day=1), today)

    raise ValueError(
        f"Unknown period: '{period}'. Supported periods: this-month, last-month, this-year"
    )
