"""Transaction ledger domain service."""

import logging
from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Optional

from ledgerdesk import config
from ledgerdesk.database.base import Database
from ledgerdesk.domain.entities import (
    CatalogKind,
    ExpenseEntry,
    ExpenseType,
    IncomeEntry,
    IncomeLine,
)
from ledgerdesk.domain.errors import (
    ValidationError,
    NotFoundError,
    catalog_item_not_found,
    expense_entry_not_found,
    income_entry_not_found,
    negative_amount,
)
from ledgerdesk.utils.amount_parser import to_decimal
from ledgerdesk.utils.date_parser import to_calendar_day

logger = logging.getLogger(__name__)


def requires_cheque_number(payment_type: Optional[ExpenseType]) -> bool:
    """Whether an expense paid with this type needs a cheque number.

    Matches on the type's name ("Cheque", any case), so renaming the type
    silently disables the rule. Enforced by the presentation layer only.
    """
    if payment_type is None:
        return False
    return payment_type.name.strip().lower() == config.CHEQUE_TYPE_NAME


def coerce_date(value: date | str) -> date:
    """Normalize an entry date or raise ValidationError."""
    try:
        return to_calendar_day(value)
    except ValueError as e:
        raise ValidationError(str(e)) from e


def coerce_amount(value: Any) -> Decimal:
    """Normalize a non-negative monetary amount or raise ValidationError."""
    try:
        amount = to_decimal(value)
    except ValueError as e:
        raise ValidationError(str(e)) from e
    if amount < 0:
        raise ValidationError(negative_amount(amount))
    return amount


class LedgerService:
    """Service for recording income and expense entries.

    An income entry's lines are its whole value content: every write replaces
    the full line set, never patches individual lines.
    """

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    # Income
    def list_income(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[IncomeEntry]:
        """List income entries, newest date first, ties broken by newest insert."""
        return self.db.list_income_entries(start_date=start_date, end_date=end_date)

    def get_income(self, entry_id: int) -> Optional[IncomeEntry]:
        """Get income entry by ID."""
        return self.db.get_income_entry(entry_id)

    def create_income(
        self,
        date: date | str,
        notes: Optional[str],
        lines: Iterable[IncomeLine | Mapping],
        created_by: str = config.DEFAULT_CREATED_BY,
    ) -> IncomeEntry:
        """Create an income entry with its lines.

        Args:
            date: Calendar day (date or ISO string)
            notes: Free-text notes
            lines: Method/amount lines; IncomeLine or mappings with
                ``method_id``/``methodId`` and ``amount``
            created_by: Username recording the entry

        Returns:
            The stored IncomeEntry

        Raises:
            ValidationError: If the date is invalid, an amount is negative or a
                method ID is unknown
        """
        entry_date = coerce_date(date)
        normalized = self._normalize_lines(lines)

        entry_id = self.db.create_income_entry(
            date=entry_date,
            notes=(notes or "").strip(),
            created_by=created_by or config.DEFAULT_CREATED_BY,
            lines=normalized,
        )
        logger.info(f"Created income entry {entry_id} for {entry_date} with {len(normalized)} line(s)")
        return self._require_income(entry_id)

    def replace_income(
        self,
        entry_id: int,
        date: date | str,
        notes: Optional[str],
        lines: Iterable[IncomeLine | Mapping],
    ) -> IncomeEntry:
        """Replace an income entry's header and its complete line set.

        Raises:
            NotFoundError: If the entry does not exist (or was deleted meanwhile)
            ValidationError: As for create_income
        """
        self._require_income(entry_id)
        entry_date = coerce_date(date)
        normalized = self._normalize_lines(lines)

        self.db.replace_income_entry(
            entry_id=entry_id, date=entry_date, notes=(notes or "").strip(), lines=normalized
        )
        logger.info(f"Replaced income entry {entry_id} with {len(normalized)} line(s)")
        return self._require_income(entry_id)

    def delete_income(self, entry_id: int) -> None:
        """Delete an income entry and its lines.

        Raises:
            NotFoundError: If the entry does not exist
        """
        self.db.delete_income_entry(entry_id)
        logger.info(f"Deleted income entry {entry_id}")

    # Expenses
    def list_expense(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[ExpenseEntry]:
        """List expense entries, newest date first, ties broken by newest insert."""
        return self.db.list_expense_entries(start_date=start_date, end_date=end_date)

    def get_expense(self, entry_id: int) -> Optional[ExpenseEntry]:
        """Get expense entry by ID."""
        return self.db.get_expense_entry(entry_id)

    def create_expense(
        self,
        date: date | str,
        vendor: str,
        amount: Any,
        payment_type_id: int,
        category_id: int,
        cheque_no: Optional[str] = None,
        reason: Optional[str] = None,
        attachment: Optional[bytes] = None,
        created_by: str = config.DEFAULT_CREATED_BY,
    ) -> ExpenseEntry:
        """Create an expense entry.

        Raises:
            ValidationError: If the date is invalid, vendor is blank, amount is
                negative, or the payment type / category is unknown
        """
        fields = self._normalize_expense(date, vendor, amount, payment_type_id, category_id)
        entry_id = self.db.create_expense_entry(
            created_by=created_by or config.DEFAULT_CREATED_BY,
            cheque_no=_blank_to_none(cheque_no),
            reason=_blank_to_none(reason),
            attachment=attachment,
            **fields,
        )
        logger.info(f"Created expense entry {entry_id} for {fields['date']}")
        return self._require_expense(entry_id)

    def replace_expense(
        self,
        entry_id: int,
        date: date | str,
        vendor: str,
        amount: Any,
        payment_type_id: int,
        category_id: int,
        cheque_no: Optional[str] = None,
        reason: Optional[str] = None,
        attachment: Optional[bytes] = None,
    ) -> ExpenseEntry:
        """Replace every field of an expense entry (single-row update).

        Raises:
            NotFoundError: If the entry does not exist (or was deleted meanwhile)
            ValidationError: As for create_expense
        """
        self._require_expense(entry_id)
        fields = self._normalize_expense(date, vendor, amount, payment_type_id, category_id)
        self.db.replace_expense_entry(
            entry_id=entry_id,
            cheque_no=_blank_to_none(cheque_no),
            reason=_blank_to_none(reason),
            attachment=attachment,
            **fields,
        )
        logger.info(f"Replaced expense entry {entry_id}")
        return self._require_expense(entry_id)

    def delete_expense(self, entry_id: int) -> None:
        """Delete an expense entry.

        Raises:
            NotFoundError: If the entry does not exist
        """
        self.db.delete_expense_entry(entry_id)
        logger.info(f"Deleted expense entry {entry_id}")

    def cheque_number_required(self, payment_type_id: int) -> bool:
        """Whether the given payment type requires a cheque number."""
        payment_type = self.db.get_catalog_item(CatalogKind.EXPENSE_TYPE, payment_type_id)
        return requires_cheque_number(payment_type)

    # Helpers
    def _require_income(self, entry_id: int) -> IncomeEntry:
        entry = self.db.get_income_entry(entry_id)
        if entry is None:
            raise NotFoundError(income_entry_not_found(entry_id))
        return entry

    def _require_expense(self, entry_id: int) -> ExpenseEntry:
        entry = self.db.get_expense_entry(entry_id)
        if entry is None:
            raise NotFoundError(expense_entry_not_found(entry_id))
        return entry

    def _require_catalog_id(self, kind: CatalogKind, item_id: Any) -> int:
        try:
            item_id = int(item_id)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid {kind.label.lower()} id {item_id!r}")
        if self.db.get_catalog_item(kind, item_id) is None:
            logger.debug(f"Rejected reference to unknown {kind.label.lower()} {item_id}")
            raise ValidationError(catalog_item_not_found(kind.label, item_id))
        return item_id

    def _normalize_lines(self, lines: Iterable[IncomeLine | Mapping]) -> list[IncomeLine]:
        if lines is None:
            return []

        known_methods = {
            item.id for item in self.db.list_catalog_items(CatalogKind.INCOME_METHOD, include_inactive=True)
        }
        normalized = []
        for line in lines:
            if isinstance(line, IncomeLine):
                method_id, amount = line.method_id, line.amount
            elif isinstance(line, Mapping):
                method_id = line.get("method_id", line.get("methodId"))
                amount = line.get("amount")
            else:
                raise ValidationError(f"Invalid income line {line!r}")

            try:
                method_id = int(method_id)
            except (TypeError, ValueError):
                raise ValidationError(f"Invalid income method id {method_id!r}")
            if method_id not in known_methods:
                logger.debug(f"Rejected income line for unknown method {method_id}")
                raise ValidationError(catalog_item_not_found(CatalogKind.INCOME_METHOD.label, method_id))

            normalized.append(IncomeLine(method_id=method_id, amount=coerce_amount(amount)))
        return normalized

    def _normalize_expense(
        self, date: date | str, vendor: str, amount: Any, payment_type_id: Any, category_id: Any
    ) -> dict[str, Any]:
        if vendor is None or not str(vendor).strip():
            raise ValidationError("Vendor must not be empty")
        return {
            "date": coerce_date(date),
            "vendor": str(vendor).strip(),
            "amount": coerce_amount(amount),
            "payment_type_id": self._require_catalog_id(CatalogKind.EXPENSE_TYPE, payment_type_id),
            "category_id": self._require_catalog_id(CatalogKind.EXPENSE_CATEGORY, category_id),
        }


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None
