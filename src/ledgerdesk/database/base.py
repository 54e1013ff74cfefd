"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Any, Sequence
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerdesk.domain.entities import (
    CatalogKind,
    CatalogItem,
    IncomeLine,
    IncomeEntry,
    ExpenseEntry,
    SnapshotBalance,
    AccountSnapshot,
)


class Database(ABC):
    """Abstract database interface for ledgerdesk.

    Multi-row writes (income header plus lines, snapshot header plus balances)
    are atomic: implementations commit both halves or neither.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Catalog operations
    @abstractmethod
    def create_catalog_item(self, kind: CatalogKind, name: str, **fields: Any) -> int:
        """Create a catalog item of the given kind. Returns item ID."""
        pass

    @abstractmethod
    def get_catalog_item(self, kind: CatalogKind, item_id: int) -> Optional[CatalogItem]:
        """Get catalog item by ID (active or not)."""
        pass

    @abstractmethod
    def list_catalog_items(
        self, kind: CatalogKind, include_inactive: bool = False
    ) -> list[CatalogItem]:
        """List catalog items of one kind."""
        pass

    @abstractmethod
    def update_catalog_item(self, kind: CatalogKind, item_id: int, **fields: Any) -> None:
        """Update catalog item fields (name, active, sort_order, type, currency)."""
        pass

    @abstractmethod
    def count_catalog_references(self, kind: CatalogKind, item_id: int) -> int:
        """Count ledger or snapshot rows referencing a catalog item."""
        pass

    @abstractmethod
    def delete_catalog_item(self, kind: CatalogKind, item_id: int) -> None:
        """Hard-delete an unreferenced catalog item."""
        pass

    # Income operations
    @abstractmethod
    def create_income_entry(
        self, date: date, notes: str, created_by: str, lines: Sequence[IncomeLine]
    ) -> int:
        """Create an income entry with its lines as one unit. Returns entry ID."""
        pass

    @abstractmethod
    def replace_income_entry(
        self, entry_id: int, date: date, notes: str, lines: Sequence[IncomeLine]
    ) -> None:
        """Replace header fields and the full line set of an income entry."""
        pass

    @abstractmethod
    def get_income_entry(self, entry_id: int) -> Optional[IncomeEntry]:
        """Get income entry by ID."""
        pass

    @abstractmethod
    def list_income_entries(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[IncomeEntry]:
        """List income entries, newest date first, then newest insert first."""
        pass

    @abstractmethod
    def delete_income_entry(self, entry_id: int) -> None:
        """Delete an income entry and its lines."""
        pass

    # Expense operations
    @abstractmethod
    def create_expense_entry(
        self,
        date: date,
        vendor: str,
        amount: Decimal,
        payment_type_id: int,
        category_id: int,
        created_by: str,
        cheque_no: Optional[str] = None,
        reason: Optional[str] = None,
        attachment: Optional[bytes] = None,
    ) -> int:
        """Create an expense entry. Returns entry ID."""
        pass

    @abstractmethod
    def replace_expense_entry(
        self,
        entry_id: int,
        date: date,
        vendor: str,
        amount: Decimal,
        payment_type_id: int,
        category_id: int,
        cheque_no: Optional[str] = None,
        reason: Optional[str] = None,
        attachment: Optional[bytes] = None,
    ) -> None:
        """Overwrite every field of an expense entry."""
        pass

    @abstractmethod
    def get_expense_entry(self, entry_id: int) -> Optional[ExpenseEntry]:
        """Get expense entry by ID."""
        pass

    @abstractmethod
    def list_expense_entries(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[ExpenseEntry]:
        """List expense entries, newest date first, then newest insert first."""
        pass

    @abstractmethod
    def delete_expense_entry(self, entry_id: int) -> None:
        """Delete an expense entry."""
        pass

    # Snapshot operations
    @abstractmethod
    def upsert_snapshot(
        self,
        month: date,
        balances: Sequence[SnapshotBalance],
        is_locked: bool,
        reject_locked: bool = False,
    ) -> int:
        """Create or replace the snapshot for a month. Returns snapshot ID.

        Args:
            month: First day of the month (uniqueness key)
            balances: Complete balance set; replaces any existing set
            is_locked: Lock flag to store
            reject_locked: If True, refuse to replace a snapshot that is locked
        """
        pass

    @abstractmethod
    def get_snapshot(self, snapshot_id: int) -> Optional[AccountSnapshot]:
        """Get snapshot by ID."""
        pass

    @abstractmethod
    def get_snapshot_by_month(self, month: date) -> Optional[AccountSnapshot]:
        """Get snapshot by its (normalized) month."""
        pass

    @abstractmethod
    def list_snapshots(self) -> list[AccountSnapshot]:
        """List snapshots, newest month first."""
        pass
