"""Aggregation of ledger entries into daily, monthly and rolling totals.

The module-level functions are pure: they take already-loaded entries and
never touch storage, so they work the same over a database listing and over
a ``LedgerMirror`` projection. Empty input always yields zero results.

Dates are calendar-day keys. A ``date`` or an ISO ``YYYY-MM-DD`` string is
accepted wherever a day is expected; no timezone conversion is applied.
Amounts are summed as ``Decimal`` in input order, so repeated aggregation of
the same input gives identical results.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

from ledgerdesk import config
from ledgerdesk.database.base import Database
from ledgerdesk.domain.entities import (
    CatalogKind,
    DailyTotal,
    ExpenseCategory,
    ExpenseEntry,
    IncomeEntry,
    MonthlySummary,
    MonthStats,
    SeriesPoint,
)
from ledgerdesk.utils.date_parser import to_calendar_day

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def month_key(day: date | str) -> str:
    """Return the ``YYYY-MM`` key of a calendar day."""
    return to_calendar_day(day).strftime("%Y-%m")


def entry_total(entry: IncomeEntry) -> Decimal:
    """Sum of an income entry's line amounts (zero when it has no lines)."""
    total = ZERO
    for line in entry.lines:
        total += line.amount
    return total


def _sum_income(entries: Iterable[IncomeEntry]) -> Decimal:
    total = ZERO
    for entry in entries:
        total += entry_total(entry)
    return total


def _sum_expenses(entries: Iterable[ExpenseEntry]) -> Decimal:
    total = ZERO
    for entry in entries:
        total += entry.amount
    return total


def daily_total(
    income: Iterable[IncomeEntry], expenses: Iterable[ExpenseEntry], day: date | str
) -> DailyTotal:
    """Income and expense totals for entries dated exactly ``day``."""
    day = to_calendar_day(day)
    return DailyTotal(
        date=day,
        income=_sum_income(e for e in income if e.date == day),
        expense=_sum_expenses(e for e in expenses if e.date == day),
    )


def entries_in_month(entries: Iterable, month: date | str) -> list:
    """Filter income or expense entries to one calendar month.

    Args:
        entries: Income or expense entries
        month: Any day of the month, or a ``YYYY-MM`` string
    """
    if isinstance(month, str) and len(month.strip()) == 7:
        key = month.strip()
    else:
        key = month_key(month)
    return [entry for entry in entries if entry.date.strftime("%Y-%m") == key]


def month_to_date_stats(
    income: Iterable[IncomeEntry], expenses: Iterable[ExpenseEntry], reference_date: date | str
) -> MonthStats:
    """Income, expenses and profit for the reference date's calendar month."""
    key = month_key(reference_date)
    income_total = _sum_income(entries_in_month(income, key))
    expense_total = _sum_expenses(entries_in_month(expenses, key))
    return MonthStats(income=income_total, expenses=expense_total, profit=income_total - expense_total)


def rolling_series(
    income: Iterable[IncomeEntry],
    expenses: Iterable[ExpenseEntry],
    days: int = config.DEFAULT_SERIES_DAYS,
    reference_date: Optional[date | str] = None,
) -> list[SeriesPoint]:
    """Daily income/expense series of ``days`` consecutive dates ending at ``reference_date``.

    Every date in the window is present exactly once, oldest first, and starts
    at zero, so quiet days show up as zero instead of being dropped. Entries
    outside the window are ignored. ``days <= 0`` returns an empty series.
    """
    end = to_calendar_day(reference_date) if reference_date is not None else date.today()
    if days <= 0:
        return []

    points = [SeriesPoint(date=end - timedelta(days=offset)) for offset in range(days - 1, -1, -1)]
    by_date = {point.date: point for point in points}

    for entry in income:
        point = by_date.get(entry.date)
        if point is not None:
            point.income += entry_total(entry)

    for entry in expenses:
        point = by_date.get(entry.date)
        if point is not None:
            point.expense += entry.amount

    return points


def category_breakdown(
    expenses: Iterable[ExpenseEntry], categories: Iterable[ExpenseCategory]
) -> dict[str, Decimal]:
    """Total expense amount per category name.

    Expenses whose category is not in ``categories`` are summed under
    ``"Unknown"``. Categories sharing a name share a bucket. Keys appear in
    order of first occurrence in ``expenses``.
    """
    names = {category.id: category.name for category in categories}
    breakdown: dict[str, Decimal] = {}
    for entry in expenses:
        name = names.get(entry.category_id, config.UNKNOWN_CATEGORY)
        breakdown[name] = breakdown.get(name, ZERO) + entry.amount
    return breakdown


def monthly_summary(
    income: Iterable[IncomeEntry], expenses: Iterable[ExpenseEntry]
) -> list[MonthlySummary]:
    """One row per month with any activity, newest month first."""
    totals: dict[str, list[Decimal]] = {}
    for entry in income:
        bucket = totals.setdefault(entry.date.strftime("%Y-%m"), [ZERO, ZERO])
        bucket[0] += entry_total(entry)
    for entry in expenses:
        bucket = totals.setdefault(entry.date.strftime("%Y-%m"), [ZERO, ZERO])
        bucket[1] += entry.amount

    return [
        MonthlySummary(month=key, income=inc, expenses=exp, profit=inc - exp)
        for key, (inc, exp) in sorted(totals.items(), reverse=True)
    ]


def recent_entries(entries: Sequence, limit: int = config.RECENT_ENTRIES_LIMIT) -> list:
    """The first ``limit`` entries of an already newest-first listing."""
    return list(entries[: max(limit, 0)])


class ReportService:
    """Service that loads ledger data and feeds the pure aggregation functions."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db

    def _load(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> tuple[list[IncomeEntry], list[ExpenseEntry]]:
        income = self.db.list_income_entries(start_date=start_date, end_date=end_date)
        expenses = self.db.list_expense_entries(start_date=start_date, end_date=end_date)
        logger.debug(f"Loaded {len(income)} income and {len(expenses)} expense entries for reporting")
        return income, expenses

    def daily_total(self, day: date | str) -> DailyTotal:
        """Totals for one calendar day."""
        day = to_calendar_day(day)
        income, expenses = self._load(start_date=day, end_date=day)
        return daily_total(income, expenses, day)

    def today_income(self, today: Optional[date] = None) -> Decimal:
        """Total income recorded for today."""
        return self.daily_total(today or date.today()).income

    def month_to_date_stats(self, reference_date: Optional[date | str] = None) -> MonthStats:
        """Income, expenses and profit for the reference date's month."""
        reference = to_calendar_day(reference_date) if reference_date is not None else date.today()
        income, expenses = self._load()
        return month_to_date_stats(income, expenses, reference)

    def rolling_series(
        self, days: int = config.DEFAULT_SERIES_DAYS, reference_date: Optional[date | str] = None
    ) -> list[SeriesPoint]:
        """Daily series for the ``days`` days ending at ``reference_date``."""
        end = to_calendar_day(reference_date) if reference_date is not None else date.today()
        if days <= 0:
            return []
        income, expenses = self._load(start_date=end - timedelta(days=days - 1), end_date=end)
        return rolling_series(income, expenses, days, end)

    def category_breakdown(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> dict[str, Decimal]:
        """Expense totals per category name, including inactive categories."""
        expenses = self.db.list_expense_entries(start_date=start_date, end_date=end_date)
        categories = self.db.list_catalog_items(CatalogKind.EXPENSE_CATEGORY, include_inactive=True)
        return category_breakdown(expenses, categories)

    def monthly_summary(self) -> list[MonthlySummary]:
        """Per-month income, expenses and profit, newest month first."""
        income, expenses = self._load()
        return monthly_summary(income, expenses)
