"""Monthly account snapshot domain service."""

import logging
from collections.abc import Mapping
from datetime import date
from typing import Iterable, Optional

from ledgerdesk import config
from ledgerdesk.database.base import Database
from ledgerdesk.domain.entities import AccountSnapshot, CatalogKind, SnapshotBalance
from ledgerdesk.domain.errors import ValidationError, NotFoundError, catalog_item_not_found
from ledgerdesk.utils.amount_parser import to_decimal
from ledgerdesk.utils.date_parser import first_of_month

logger = logging.getLogger(__name__)


def normalize_month(month: date | str) -> date:
    """Normalize any day of a month, or ``YYYY-MM``, to the month's first day.

    Raises:
        ValidationError: If the value cannot be read as a month
    """
    try:
        return first_of_month(month)
    except ValueError as e:
        raise ValidationError(f"Invalid snapshot month {month!r}: {e}") from e


class SnapshotService:
    """Service for freezing account balances into month-keyed snapshots.

    There is at most one snapshot per month. Re-submitting a month replaces
    its balance set and lock flag in place (same ID). Snapshots are never
    deleted.
    """

    def __init__(self, db: Database, enforce_lock: Optional[bool] = None):
        """Initialize snapshot service.

        Args:
            db: Database instance
            enforce_lock: If True, a locked month rejects re-submission with
                ConflictError. Defaults to LEDGERDESK_ENFORCE_SNAPSHOT_LOCK,
                which is off (lock is advisory).
        """
        self.db = db
        self.enforce_lock = config.enforce_snapshot_lock() if enforce_lock is None else enforce_lock

    def upsert_snapshot(
        self,
        month: date | str,
        balances: Iterable[SnapshotBalance | Mapping],
        is_locked: bool = True,
    ) -> AccountSnapshot:
        """Create the month's snapshot, or replace its balances and lock flag.

        Args:
            month: Any day of the month, or ``YYYY-MM``
            balances: Complete balance set; SnapshotBalance or mappings with
                ``account_id``/``accountId`` and ``balance``
            is_locked: Lock flag to store

        Returns:
            The stored AccountSnapshot

        Raises:
            ValidationError: If the month is invalid, an account ID is unknown,
                an account appears twice, or a balance is not a number
            ConflictError: If the month is locked and locks are enforced, or a
                concurrent writer created the same month first
        """
        month_start = normalize_month(month)
        normalized = self._normalize_balances(balances)

        snapshot_id = self.db.upsert_snapshot(
            month=month_start,
            balances=normalized,
            is_locked=bool(is_locked),
            reject_locked=self.enforce_lock,
        )
        logger.info(
            f"Saved snapshot {snapshot_id} for {month_start:%Y-%m} "
            f"with {len(normalized)} balance(s), locked={bool(is_locked)}"
        )

        snapshot = self.db.get_snapshot(snapshot_id)
        if snapshot is None:
            raise NotFoundError(f"Snapshot {snapshot_id} not found")
        return snapshot

    def list_snapshots(self) -> list[AccountSnapshot]:
        """List snapshots, newest month first."""
        return self.db.list_snapshots()

    def get_snapshot(self, month: date | str) -> Optional[AccountSnapshot]:
        """Get the snapshot for a month, or None."""
        return self.db.get_snapshot_by_month(normalize_month(month))

    def is_locked(self, month: date | str) -> bool:
        """Whether the month has a locked snapshot."""
        snapshot = self.get_snapshot(month)
        return snapshot is not None and snapshot.is_locked

    def _normalize_balances(
        self, balances: Iterable[SnapshotBalance | Mapping]
    ) -> list[SnapshotBalance]:
        if balances is None:
            return []

        # Any known account, active or not
        known_accounts = {
            item.id for item in self.db.list_catalog_items(CatalogKind.ACCOUNT, include_inactive=True)
        }
        normalized = []
        seen: set[int] = set()
        for item in balances:
            if isinstance(item, SnapshotBalance):
                account_id, balance = item.account_id, item.balance
            elif isinstance(item, Mapping):
                account_id = item.get("account_id", item.get("accountId"))
                balance = item.get("balance")
            else:
                raise ValidationError(f"Invalid snapshot balance {item!r}")

            try:
                account_id = int(account_id)
            except (TypeError, ValueError):
                raise ValidationError(f"Invalid account id {account_id!r}")
            if account_id not in known_accounts:
                raise ValidationError(catalog_item_not_found(CatalogKind.ACCOUNT.label, account_id))
            if account_id in seen:
                raise ValidationError(f"Account {account_id} appears more than once in the snapshot")
            seen.add(account_id)

            try:
                amount = to_decimal(balance)
            except ValueError as e:
                raise ValidationError(f"Invalid balance for account {account_id}: {e}") from e
            normalized.append(SnapshotBalance(account_id=account_id, balance=amount))
        return normalized
