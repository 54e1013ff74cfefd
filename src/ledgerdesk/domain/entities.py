"""Domain model entities for ledgerdesk.

These are pure data classes representing business concepts, independent of
database schema. Entries reference catalog items by id only; relationship
traversal always goes back through the owning service.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


class CatalogKind(Enum):
    """Reference data kinds that ledger and snapshot rows point to."""

    INCOME_METHOD = "Income method"
    EXPENSE_CATEGORY = "Expense category"
    EXPENSE_TYPE = "Expense type"
    ACCOUNT = "Account"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class IncomeMethod:
    """Income (payment) method catalog item, e.g. Cash or Card."""

    id: int
    name: str
    active: bool
    sort_order: int
    created_at: datetime


@dataclass(frozen=True)
class ExpenseCategory:
    """Expense category catalog item."""

    id: int
    name: str
    active: bool
    created_at: datetime


@dataclass(frozen=True)
class ExpenseType:
    """Expense payment type catalog item, e.g. Cash or Cheque."""

    id: int
    name: str
    active: bool
    created_at: datetime


@dataclass(frozen=True)
class Account:
    """Account whose balance is frozen into monthly snapshots."""

    id: int
    name: str
    type: str
    currency: str
    active: bool
    created_at: datetime


@dataclass(frozen=True)
class IncomeLine:
    """One (method, amount) pair within an income entry."""

    method_id: int
    amount: Decimal


@dataclass(frozen=True)
class IncomeEntry:
    """Income recorded for one date, split across payment methods."""

    id: int
    date: date
    notes: str
    created_by: str
    lines: tuple[IncomeLine, ...] = ()
    created_at: Optional[datetime] = None

    @property
    def total(self) -> Decimal:
        """Sum of all line amounts (zero for an entry without lines)."""
        return sum((line.amount for line in self.lines), Decimal("0"))


@dataclass(frozen=True)
class ExpenseEntry:
    """Expense paid to a single vendor on one date."""

    id: int
    date: date
    vendor: str
    amount: Decimal
    payment_type_id: int
    category_id: int
    cheque_no: Optional[str]
    reason: Optional[str]
    attachment: Optional[bytes]
    created_by: str
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class SnapshotBalance:
    """Frozen balance of one account."""

    account_id: int
    balance: Decimal


@dataclass(frozen=True)
class AccountSnapshot:
    """Month-keyed set of account balances."""

    id: int
    month: date
    is_locked: bool
    balances: tuple[SnapshotBalance, ...] = ()
    created_at: Optional[datetime] = None

    def balance_for(self, account_id: int) -> Optional[Decimal]:
        for entry in self.balances:
            if entry.account_id == account_id:
                return entry.balance
        return None


@dataclass(frozen=True)
class DailyTotal:
    """Income and expense totals for a single day."""

    date: date
    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")


@dataclass(frozen=True)
class MonthStats:
    """Income, expenses and profit for one calendar month."""

    income: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")
    profit: Decimal = Decimal("0")


@dataclass
class SeriesPoint:
    """One day of a rolling income/expense series."""

    date: date
    income: Decimal = field(default_factory=lambda: Decimal("0"))
    expense: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass(frozen=True)
class MonthlySummary:
    """Per-month report row."""

    month: str
    income: Decimal
    expenses: Decimal
    profit: Decimal


CatalogItem = Union[IncomeMethod, ExpenseCategory, ExpenseType, Account]
