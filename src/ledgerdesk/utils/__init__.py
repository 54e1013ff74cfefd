"""Utility functions for ledgerdesk."""

from ledgerdesk.utils.date_parser import parse_date, to_calendar_day, first_of_month
from ledgerdesk.utils.amount_parser import parse_amount, to_decimal

__all__ = ["parse_date", "to_calendar_day", "first_of_month", "parse_amount", "to_decimal"]
