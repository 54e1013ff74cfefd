"""In-memory projection of ledger state for interactive callers."""

import logging
from datetime import date
from typing import Any, Callable, Optional, TypeVar

from ledgerdesk import config
from ledgerdesk.domain import aggregation
from ledgerdesk.domain.entities import (
    AccountSnapshot,
    ExpenseEntry,
    IncomeEntry,
    MonthStats,
    SeriesPoint,
)
from ledgerdesk.domain.ledger import LedgerService
from ledgerdesk.domain.snapshot import SnapshotService

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _entry_sort_key(entry: IncomeEntry | ExpenseEntry) -> tuple[int, int]:
    # Newest date first, then newest insert first, same as the store
    return (-entry.date.toordinal(), -entry.id)


class LedgerMirror:
    """Non-authoritative copy of income, expense and snapshot state.

    The mirror only ever holds server-confirmed entities: ``apply`` runs a
    ledger or snapshot operation and merges its returned entity by ID (or by
    month for snapshots). If the operation raises, nothing is merged and the
    error propagates. ``resync`` rebuilds everything from the services and
    can be called at any time to reconcile.
    """

    def __init__(self):
        self.income: list[IncomeEntry] = []
        self.expenses: list[ExpenseEntry] = []
        self.snapshots: list[AccountSnapshot] = []
        self.loaded = False

    def resync(self, ledger: LedgerService, snapshots: Optional[SnapshotService] = None) -> None:
        """Replace the projection with a full reload.

        Without a snapshot service the snapshot projection is emptied, not kept.
        """
        self.income = list(ledger.list_income())
        self.expenses = list(ledger.list_expense())
        self.snapshots = list(snapshots.list_snapshots()) if snapshots is not None else []
        self.loaded = True
        logger.debug(
            f"Mirror resynced: {len(self.income)} income, {len(self.expenses)} expenses, "
            f"{len(self.snapshots)} snapshots"
        )

    def apply(self, operation: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run a mutating operation and merge its confirmed result.

        Only operations that return the written entity can be applied.
        Deletes return nothing, so use ``delete_income`` or ``delete_expense``.

        Example:
            mirror.apply(ledger.create_income, "2024-03-01", "", lines)

        Raises:
            TypeError: If the operation is a delete
        """
        name = getattr(operation, "__name__", "")
        if name.startswith("delete_"):
            raise TypeError(f"Cannot apply {name}; use LedgerMirror.{name} instead")
        result = operation(*args, **kwargs)
        self.merge(result)
        return result

    def delete_income(self, ledger: LedgerService, entry_id: int) -> None:
        """Delete an income entry, then drop it from the projection."""
        ledger.delete_income(entry_id)
        self.remove_income(entry_id)

    def delete_expense(self, ledger: LedgerService, entry_id: int) -> None:
        """Delete an expense entry, then drop it from the projection."""
        ledger.delete_expense(entry_id)
        self.remove_expense(entry_id)

    def merge(self, entity: Any) -> None:
        """Merge one confirmed entity into the projection."""
        if isinstance(entity, IncomeEntry):
            self.income = sorted(
                [e for e in self.income if e.id != entity.id] + [entity], key=_entry_sort_key
            )
        elif isinstance(entity, ExpenseEntry):
            self.expenses = sorted(
                [e for e in self.expenses if e.id != entity.id] + [entity], key=_entry_sort_key
            )
        elif isinstance(entity, AccountSnapshot):
            self.snapshots = sorted(
                [s for s in self.snapshots if s.month != entity.month] + [entity],
                key=lambda s: s.month,
                reverse=True,
            )
        else:
            raise TypeError(f"Cannot mirror {type(entity).__name__}")

    def remove_income(self, entry_id: int) -> None:
        self.income = [e for e in self.income if e.id != entry_id]

    def remove_expense(self, entry_id: int) -> None:
        self.expenses = [e for e in self.expenses if e.id != entry_id]

    # Read-side conveniences over the projection
    def month_stats(self, reference_date: Optional[date | str] = None) -> MonthStats:
        return aggregation.month_to_date_stats(
            self.income, self.expenses, reference_date or date.today()
        )

    def series(
        self, days: int = config.DEFAULT_SERIES_DAYS, reference_date: Optional[date | str] = None
    ) -> list[SeriesPoint]:
        return aggregation.rolling_series(self.income, self.expenses, days, reference_date)
