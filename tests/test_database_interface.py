"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from ledgerdesk.database.factories import create_sqlite_database
from ledgerdesk.domain import entities
from ledgerdesk.domain.entities import CatalogKind, IncomeLine, SnapshotBalance
from ledgerdesk.domain.errors import ConflictError, NotFoundError


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_catalog_item_returns_domain_model(self, temp_db):
        """Test that get_catalog_item returns a domain Account entity."""
        account_id = temp_db.create_catalog_item(CatalogKind.ACCOUNT, "Main Bank", currency="USD")

        account = temp_db.get_catalog_item(CatalogKind.ACCOUNT, account_id)

        assert isinstance(account, entities.Account)
        assert account.id == account_id
        assert account.name == "Main Bank"
        assert account.type == "Bank"
        assert account.currency == "USD"
        assert isinstance(account.created_at, datetime)

    def test_list_catalog_items_returns_domain_models(self, temp_db):
        """Test that list_catalog_items returns domain entities of the right kind."""
        temp_db.create_catalog_item(CatalogKind.EXPENSE_TYPE, "Cash")
        temp_db.create_catalog_item(CatalogKind.EXPENSE_TYPE, "Cheque")

        types = temp_db.list_catalog_items(CatalogKind.EXPENSE_TYPE)

        assert [t.name for t in types] == ["Cash", "Cheque"]
        for item in types:
            assert isinstance(item, entities.ExpenseType)

    def test_get_missing_catalog_item(self, temp_db):
        """Test that a missing item returns None."""
        assert temp_db.get_catalog_item(CatalogKind.INCOME_METHOD, 99) is None

    def test_count_catalog_references(self, temp_db):
        """Test reference counting across income lines."""
        method_id = temp_db.create_catalog_item(CatalogKind.INCOME_METHOD, "Cash")
        temp_db.create_income_entry(
            date=date(2024, 3, 1), notes="", created_by="admin",
            lines=[IncomeLine(method_id, Decimal("1")), IncomeLine(method_id, Decimal("2"))],
        )

        assert temp_db.count_catalog_references(CatalogKind.INCOME_METHOD, method_id) == 2

    def test_income_entry_returns_domain_model(self, temp_db):
        """Test that get_income_entry returns a domain IncomeEntry with lines."""
        method_id = temp_db.create_catalog_item(CatalogKind.INCOME_METHOD, "Cash")
        entry_id = temp_db.create_income_entry(
            date=date(2024, 3, 1), notes="n", created_by="admin",
            lines=[IncomeLine(method_id, Decimal("10.25"))],
        )

        entry = temp_db.get_income_entry(entry_id)

        assert isinstance(entry, entities.IncomeEntry)
        assert entry.date == date(2024, 3, 1)
        assert entry.lines == (IncomeLine(method_id, Decimal("10.25")),)
        assert isinstance(entry.lines[0].amount, Decimal)

    def test_replace_income_entry_leaves_no_old_lines(self, temp_db):
        """Replacing 3 lines with 1 persists exactly 1 line."""
        method_ids = [
            temp_db.create_catalog_item(CatalogKind.INCOME_METHOD, name) for name in ("A", "B", "C")
        ]
        entry_id = temp_db.create_income_entry(
            date=date(2024, 3, 1), notes="", created_by="admin",
            lines=[IncomeLine(m, Decimal("1")) for m in method_ids],
        )

        temp_db.replace_income_entry(
            entry_id=entry_id, date=date(2024, 3, 1), notes="",
            lines=[IncomeLine(method_ids[0], Decimal("5"))],
        )

        assert len(temp_db.get_income_entry(entry_id).lines) == 1
        assert temp_db.count_catalog_references(CatalogKind.INCOME_METHOD, method_ids[1]) == 0
        assert temp_db.count_catalog_references(CatalogKind.INCOME_METHOD, method_ids[0]) == 1

    def test_replace_rolls_back_on_bad_line(self, temp_db):
        """A failing line write leaves the entry as it was."""
        method_id = temp_db.create_catalog_item(CatalogKind.INCOME_METHOD, "Cash")
        entry_id = temp_db.create_income_entry(
            date=date(2024, 3, 1), notes="before", created_by="admin",
            lines=[IncomeLine(method_id, Decimal("1"))],
        )

        with pytest.raises(ConflictError):
            temp_db.replace_income_entry(
                entry_id=entry_id, date=date(2024, 3, 9), notes="after",
                lines=[IncomeLine(999, Decimal("5"))],
            )

        entry = temp_db.get_income_entry(entry_id)
        assert entry.notes == "before"
        assert entry.date == date(2024, 3, 1)
        assert entry.lines == (IncomeLine(method_id, Decimal("1")),)

    def test_delete_income_entry_removes_lines(self, temp_db):
        """Deleting an entry deletes its lines."""
        method_id = temp_db.create_catalog_item(CatalogKind.INCOME_METHOD, "Cash")
        entry_id = temp_db.create_income_entry(
            date=date(2024, 3, 1), notes="", created_by="admin",
            lines=[IncomeLine(method_id, Decimal("1"))],
        )

        temp_db.delete_income_entry(entry_id)

        assert temp_db.get_income_entry(entry_id) is None
        assert temp_db.count_catalog_references(CatalogKind.INCOME_METHOD, method_id) == 0

    def test_replace_missing_entries(self, temp_db):
        """Test that replacing missing entries raises NotFoundError."""
        with pytest.raises(NotFoundError):
            temp_db.replace_income_entry(entry_id=1, date=date(2024, 3, 1), notes="", lines=[])
        with pytest.raises(NotFoundError):
            temp_db.delete_expense_entry(1)

    def test_snapshot_returns_domain_model(self, temp_db):
        """Test that snapshots come back with their balances."""
        account_id = temp_db.create_catalog_item(CatalogKind.ACCOUNT, "Main Bank")
        snapshot_id = temp_db.upsert_snapshot(
            month=date(2024, 3, 1),
            balances=[SnapshotBalance(account_id, Decimal("500"))],
            is_locked=True,
        )

        snapshot = temp_db.get_snapshot(snapshot_id)
        by_month = temp_db.get_snapshot_by_month(date(2024, 3, 1))

        assert isinstance(snapshot, entities.AccountSnapshot)
        assert snapshot == by_month
        assert snapshot.balances == (SnapshotBalance(account_id, Decimal("500")),)

    def test_upsert_snapshot_reject_locked(self, temp_db):
        """Test that reject_locked refuses to replace a locked month."""
        temp_db.upsert_snapshot(month=date(2024, 3, 1), balances=[], is_locked=True)

        with pytest.raises(ConflictError, match="2024-03 is locked"):
            temp_db.upsert_snapshot(month=date(2024, 3, 1), balances=[], is_locked=True, reject_locked=True)


def test_two_connections_see_committed_writes(temp_db):
    """A second database instance on the same file sees committed data."""
    temp_db.create_catalog_item(CatalogKind.EXPENSE_CATEGORY, "Rent")

    other = create_sqlite_database(database_path=temp_db.database_path)
    other.connect()
    try:
        names = [c.name for c in other.list_catalog_items(CatalogKind.EXPENSE_CATEGORY)]
    finally:
        other.disconnect()

    assert names == ["Rent"]


def test_factory_uses_environment_path(tmp_path, monkeypatch):
    """Test that LEDGERDESK_DB_PATH picks the database file."""
    db_path = tmp_path / "env.db"
    monkeypatch.setenv("LEDGERDESK_DB_PATH", str(db_path))

    db = create_sqlite_database()
    db.connect()
    db.initialize_schema()
    db.disconnect()

    assert db.database_url == f"sqlite:///{db_path}"
    assert db_path.exists()
