"""Tests for domain entities."""

import pytest
from datetime import datetime, date, UTC
from decimal import Decimal

from ledgerdesk.domain.entities import (
    AccountSnapshot,
    CatalogKind,
    IncomeEntry,
    IncomeLine,
    IncomeMethod,
    SeriesPoint,
    SnapshotBalance,
)


class TestIncomeEntry:
    """Tests for IncomeEntry entity."""

    def test_total_sums_lines(self):
        """Test that total is the sum of line amounts."""
        entry = IncomeEntry(
            id=1,
            date=date(2024, 3, 1),
            notes="",
            created_by="admin",
            lines=(IncomeLine(1, Decimal("100")), IncomeLine(2, Decimal("50.25"))),
        )
        assert entry.total == Decimal("150.25")

    def test_total_without_lines(self):
        """Test that an entry without lines totals zero."""
        entry = IncomeEntry(id=1, date=date(2024, 3, 1), notes="", created_by="admin")
        assert entry.total == Decimal("0")

    def test_immutability(self):
        """Test that IncomeEntry entities are immutable."""
        entry = IncomeEntry(id=1, date=date(2024, 3, 1), notes="", created_by="admin")
        with pytest.raises(Exception):  # dataclass frozen raises FrozenInstanceError
            entry.notes = "changed"


def test_income_method_equality():
    """Test IncomeMethod entity equality."""
    created_at = datetime.now(UTC)
    method1 = IncomeMethod(id=1, name="Cash", active=True, sort_order=1, created_at=created_at)
    method2 = IncomeMethod(id=1, name="Cash", active=True, sort_order=1, created_at=created_at)
    assert method1 == method2


def test_snapshot_balance_for():
    """Test balance lookup by account."""
    snapshot = AccountSnapshot(
        id=1,
        month=date(2024, 3, 1),
        is_locked=True,
        balances=(SnapshotBalance(1, Decimal("500")), SnapshotBalance(2, Decimal("-3"))),
    )
    assert snapshot.balance_for(2) == Decimal("-3")
    assert snapshot.balance_for(3) is None


def test_series_point_starts_at_zero():
    """Test that series points default to zero and accumulate."""
    point = SeriesPoint(date=date(2024, 3, 1))
    point.income += Decimal("5")
    assert point.income == Decimal("5")
    assert point.expense == Decimal("0")


def test_catalog_kind_labels():
    """Test the human-readable catalog labels."""
    assert CatalogKind.INCOME_METHOD.label == "Income method"
    assert CatalogKind.ACCOUNT.label == "Account"
