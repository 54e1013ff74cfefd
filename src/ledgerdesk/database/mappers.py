"""Mapper functions to convert between domain models and SQLAlchemy models.

Child rows (income lines, snapshot balances) are folded into tuples on the
parent entity here, so nothing above the storage layer ever sees row-level or
delimiter-encoded collections.
"""

from ledgerdesk.domain import entities as domain
from ledgerdesk.database.models import (
    IncomeMethod as ORMIncomeMethod,
    ExpenseCategory as ORMExpenseCategory,
    ExpenseType as ORMExpenseType,
    Account as ORMAccount,
    IncomeEntry as ORMIncomeEntry,
    IncomeEntryLine as ORMIncomeEntryLine,
    ExpenseEntry as ORMExpenseEntry,
    AccountSnapshot as ORMAccountSnapshot,
    SnapshotBalance as ORMSnapshotBalance,
)


def income_method_to_domain(orm_method: ORMIncomeMethod) -> domain.IncomeMethod:
    """Convert SQLAlchemy IncomeMethod model to domain IncomeMethod entity."""
    return domain.IncomeMethod(
        id=orm_method.id,
        name=orm_method.name,
        active=bool(orm_method.is_active),
        sort_order=orm_method.sort_order,
        created_at=orm_method.created_at,
    )


def expense_category_to_domain(orm_category: ORMExpenseCategory) -> domain.ExpenseCategory:
    """Convert SQLAlchemy ExpenseCategory model to domain ExpenseCategory entity."""
    return domain.ExpenseCategory(
        id=orm_category.id,
        name=orm_category.name,
        active=bool(orm_category.is_active),
        created_at=orm_category.created_at,
    )


def expense_type_to_domain(orm_type: ORMExpenseType) -> domain.ExpenseType:
    """Convert SQLAlchemy ExpenseType model to domain ExpenseType entity."""
    return domain.ExpenseType(
        id=orm_type.id,
        name=orm_type.name,
        active=bool(orm_type.is_active),
        created_at=orm_type.created_at,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        type=orm_account.type,
        currency=orm_account.currency,
        active=bool(orm_account.is_active),
        created_at=orm_account.created_at,
    )


def income_line_to_domain(orm_line: ORMIncomeEntryLine) -> domain.IncomeLine:
    """Convert SQLAlchemy IncomeEntryLine model to domain IncomeLine."""
    return domain.IncomeLine(method_id=orm_line.method_id, amount=orm_line.amount)


def income_entry_to_domain(orm_entry: ORMIncomeEntry) -> domain.IncomeEntry:
    """Convert SQLAlchemy IncomeEntry model (with lines) to domain IncomeEntry."""
    return domain.IncomeEntry(
        id=orm_entry.id,
        date=orm_entry.date,
        notes=orm_entry.notes or "",
        created_by=orm_entry.created_by,
        lines=tuple(income_line_to_domain(line) for line in orm_entry.lines),
        created_at=orm_entry.created_at,
    )


def expense_entry_to_domain(orm_entry: ORMExpenseEntry) -> domain.ExpenseEntry:
    """Convert SQLAlchemy ExpenseEntry model to domain ExpenseEntry entity."""
    return domain.ExpenseEntry(
        id=orm_entry.id,
        date=orm_entry.date,
        vendor=orm_entry.vendor,
        amount=orm_entry.amount,
        payment_type_id=orm_entry.payment_type_id,
        category_id=orm_entry.category_id,
        cheque_no=orm_entry.cheque_no,
        reason=orm_entry.reason,
        attachment=orm_entry.attachment,
        created_by=orm_entry.created_by,
        created_at=orm_entry.created_at,
    )


def snapshot_balance_to_domain(orm_balance: ORMSnapshotBalance) -> domain.SnapshotBalance:
    """Convert SQLAlchemy SnapshotBalance model to domain SnapshotBalance."""
    return domain.SnapshotBalance(account_id=orm_balance.account_id, balance=orm_balance.balance)


def snapshot_to_domain(orm_snapshot: ORMAccountSnapshot) -> domain.AccountSnapshot:
    """Convert SQLAlchemy AccountSnapshot model (with balances) to domain AccountSnapshot."""
    return domain.AccountSnapshot(
        id=orm_snapshot.id,
        month=orm_snapshot.month,
        is_locked=bool(orm_snapshot.is_locked),
        balances=tuple(snapshot_balance_to_domain(b) for b in orm_snapshot.balances),
        created_at=orm_snapshot.created_at,
    )
