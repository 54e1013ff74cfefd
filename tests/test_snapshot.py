"""Tests for monthly account snapshots."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerdesk.domain.entities import AccountSnapshot, CatalogKind, SnapshotBalance
from ledgerdesk.domain.errors import ConflictError, ValidationError
from ledgerdesk.domain.snapshot import SnapshotService, normalize_month


class TestNormalizeMonth:
    def test_month_key(self):
        assert normalize_month("2024-03") == date(2024, 3, 1)

    def test_any_day_in_month(self):
        assert normalize_month("2024-03-17") == date(2024, 3, 1)
        assert normalize_month(date(2024, 12, 31)) == date(2024, 12, 1)

    def test_invalid(self):
        with pytest.raises(ValidationError, match="Invalid snapshot month"):
            normalize_month("March")


class TestSnapshotService:
    def test_create_snapshot(self, snapshot_service, sample_catalog):
        bank = sample_catalog["Main Bank"]

        snapshot = snapshot_service.upsert_snapshot(
            "2024-03-01", [SnapshotBalance(bank.id, Decimal("500"))], True
        )

        assert isinstance(snapshot, AccountSnapshot)
        assert snapshot.month == date(2024, 3, 1)
        assert snapshot.is_locked is True
        assert snapshot.balance_for(bank.id) == Decimal("500")

    def test_resubmit_replaces_balances(self, snapshot_service, sample_catalog):
        bank = sample_catalog["Main Bank"]
        first = snapshot_service.upsert_snapshot(
            "2024-03-01", [{"accountId": bank.id, "balance": 500}], True
        )

        second = snapshot_service.upsert_snapshot(
            "2024-03-01", [{"accountId": bank.id, "balance": 600}], True
        )

        assert second.id == first.id
        assert second.balances == (SnapshotBalance(bank.id, Decimal("600")),)
        assert len(snapshot_service.list_snapshots()) == 1

    def test_resubmit_with_different_accounts(self, snapshot_service, sample_catalog):
        bank, petty = sample_catalog["Main Bank"], sample_catalog["Petty Cash"]
        snapshot_service.upsert_snapshot(
            "2024-03",
            [SnapshotBalance(bank.id, Decimal("500")), SnapshotBalance(petty.id, Decimal("20"))],
        )

        snapshot = snapshot_service.upsert_snapshot("2024-03", [SnapshotBalance(petty.id, Decimal("35"))])

        assert [b.account_id for b in snapshot.balances] == [petty.id]
        assert snapshot.balance_for(bank.id) is None

    def test_different_days_share_a_month(self, snapshot_service, sample_catalog):
        bank = sample_catalog["Main Bank"]
        snapshot_service.upsert_snapshot("2024-03-01", [SnapshotBalance(bank.id, Decimal("1"))])
        snapshot_service.upsert_snapshot("2024-03-31", [SnapshotBalance(bank.id, Decimal("2"))])

        snapshots = snapshot_service.list_snapshots()

        assert len(snapshots) == 1
        assert snapshots[0].balance_for(bank.id) == Decimal("2")

    def test_unlock_flag_is_stored(self, snapshot_service, sample_catalog):
        bank = sample_catalog["Main Bank"]
        snapshot_service.upsert_snapshot("2024-03", [SnapshotBalance(bank.id, Decimal("1"))], is_locked=False)

        assert snapshot_service.is_locked("2024-03") is False
        assert snapshot_service.is_locked("2024-04") is False

        snapshot_service.upsert_snapshot("2024-03", [SnapshotBalance(bank.id, Decimal("1"))])
        assert snapshot_service.is_locked("2024-03") is True

    def test_negative_balance_allowed(self, snapshot_service, sample_catalog):
        petty = sample_catalog["Petty Cash"]
        snapshot = snapshot_service.upsert_snapshot("2024-03", [{"account_id": petty.id, "balance": "-12.30"}])
        assert snapshot.balance_for(petty.id) == Decimal("-12.30")

    def test_empty_balance_set(self, snapshot_service):
        snapshot = snapshot_service.upsert_snapshot("2024-03", [])
        assert snapshot.balances == ()

    def test_unknown_account_rejected(self, snapshot_service, sample_catalog):
        with pytest.raises(ValidationError, match="Account 999 not found"):
            snapshot_service.upsert_snapshot("2024-03", [SnapshotBalance(999, Decimal("1"))])

        assert snapshot_service.list_snapshots() == []

    def test_duplicate_account_rejected(self, snapshot_service, sample_catalog):
        bank = sample_catalog["Main Bank"]
        with pytest.raises(ValidationError, match="more than once"):
            snapshot_service.upsert_snapshot(
                "2024-03", [SnapshotBalance(bank.id, Decimal("1")), SnapshotBalance(bank.id, Decimal("2"))]
            )

    def test_invalid_balance_rejected(self, snapshot_service, sample_catalog):
        bank = sample_catalog["Main Bank"]
        with pytest.raises(ValidationError, match="Invalid balance"):
            snapshot_service.upsert_snapshot("2024-03", [{"account_id": bank.id, "balance": "lots"}])

    def test_sub_cent_balance_rejected(self, snapshot_service, sample_catalog):
        bank = sample_catalog["Main Bank"]

        with pytest.raises(ValidationError, match="decimal places"):
            snapshot_service.upsert_snapshot("2024-03", [SnapshotBalance(bank.id, Decimal("500.005"))])

        assert snapshot_service.list_snapshots() == []

    def test_inactive_account_accepted(self, catalog_service, snapshot_service, sample_catalog):
        petty = sample_catalog["Petty Cash"]
        catalog_service.deactivate_item(CatalogKind.ACCOUNT, petty.id)

        snapshot = snapshot_service.upsert_snapshot("2024-03", [SnapshotBalance(petty.id, Decimal("5"))])

        assert snapshot.balance_for(petty.id) == Decimal("5")

    def test_enforced_lock_rejects_resubmission(self, temp_db, sample_catalog):
        bank = sample_catalog["Main Bank"]
        service = SnapshotService(temp_db, enforce_lock=True)
        service.upsert_snapshot("2024-03", [SnapshotBalance(bank.id, Decimal("500"))], is_locked=True)

        with pytest.raises(ConflictError, match="locked"):
            service.upsert_snapshot("2024-03", [SnapshotBalance(bank.id, Decimal("600"))])

        assert service.get_snapshot("2024-03").balance_for(bank.id) == Decimal("500")

    def test_enforced_lock_allows_unlocked_month(self, temp_db, sample_catalog):
        bank = sample_catalog["Main Bank"]
        service = SnapshotService(temp_db, enforce_lock=True)
        service.upsert_snapshot("2024-03", [SnapshotBalance(bank.id, Decimal("500"))], is_locked=False)

        snapshot = service.upsert_snapshot("2024-03", [SnapshotBalance(bank.id, Decimal("600"))])

        assert snapshot.balance_for(bank.id) == Decimal("600")
        assert snapshot.is_locked is True

    def test_lock_policy_from_environment(self, temp_db, monkeypatch):
        monkeypatch.setenv("LEDGERDESK_ENFORCE_SNAPSHOT_LOCK", "1")
        assert SnapshotService(temp_db).enforce_lock is True

        monkeypatch.delenv("LEDGERDESK_ENFORCE_SNAPSHOT_LOCK")
        assert SnapshotService(temp_db).enforce_lock is False

    def test_list_snapshots_newest_first(self, snapshot_service):
        snapshot_service.upsert_snapshot("2024-01", [])
        snapshot_service.upsert_snapshot("2024-03", [])
        snapshot_service.upsert_snapshot("2024-02", [])

        months = [s.month for s in snapshot_service.list_snapshots()]

        assert months == [date(2024, 3, 1), date(2024, 2, 1), date(2024, 1, 1)]

    def test_get_missing_snapshot(self, snapshot_service):
        assert snapshot_service.get_snapshot("2030-01") is None


def test_storage_rejects_duplicate_month_insert(temp_db):
    """The unique month constraint backs the one-snapshot-per-month rule."""
    temp_db.upsert_snapshot(month=date(2024, 3, 1), balances=[], is_locked=True)
    temp_db.upsert_snapshot(month=date(2024, 3, 1), balances=[], is_locked=False)

    snapshots = temp_db.list_snapshots()
    assert len(snapshots) == 1
    assert snapshots[0].is_locked is False
