"""Tests for report commands."""

from decimal import Decimal

import pytest

from ledgerdesk.cli.main import cli
from ledgerdesk.domain.entities import IncomeLine


@pytest.fixture
def recorded(ledger_service, sample_catalog):
    cash, card = sample_catalog["Cash"], sample_catalog["Card"]
    ledger_service.create_income(
        "2024-03-01", "", [IncomeLine(cash.id, Decimal("100")), IncomeLine(card.id, Decimal("50"))]
    )
    ledger_service.create_expense(
        date="2024-03-05",
        vendor="Metro",
        amount="40",
        payment_type_id=sample_catalog["Cash payment"].id,
        category_id=sample_catalog["Supplies"].id,
    )
    return sample_catalog


def test_report_day(cli_runner, temp_db, recorded):
    """Test daily totals."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "report", "today", "--date", "2024-03-01"]
    )

    assert result.exit_code == 0
    assert "Income:" in result.output
    assert "150.00" in result.output


def test_report_month(cli_runner, temp_db, recorded):
    """Test month-to-date stats."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "report", "month", "--date", "2024-03-15"]
    )

    assert result.exit_code == 0
    assert "March 2024" in result.output
    assert "110.00" in result.output


def test_report_month_empty(cli_runner, temp_db):
    """Test that an empty month reports zeros."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "report", "month", "--date", "2023-01-01"]
    )

    assert result.exit_code == 0
    assert result.output.count("0.00") == 3


def test_report_series(cli_runner, temp_db, recorded):
    """Test the rolling series prints one row per day."""
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "report", "series", "--days", "7", "--end", "2024-03-05"],
    )

    assert result.exit_code == 0
    rows = [line for line in result.output.splitlines() if line.startswith("2024-")]
    assert len(rows) == 7
    assert rows[0].startswith("2024-02-28")
    assert rows[-1].startswith("2024-03-05")


def test_report_categories(cli_runner, temp_db, recorded):
    """Test category breakdown."""
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "report", "categories"])

    assert result.exit_code == 0
    assert "Supplies" in result.output
    assert "40.00" in result.output


def test_report_categories_rejects_two_periods(cli_runner, temp_db):
    """Test that period flags are mutually exclusive."""
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "report", "categories", "--this-month", "--this-year"],
    )

    assert result.exit_code == 1
    assert "Only one period option" in result.output


def test_report_monthly(cli_runner, temp_db, recorded):
    """Test the monthly summary."""
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "report", "monthly"])

    assert result.exit_code == 0
    assert "2024-03" in result.output
    assert "110.00" in result.output


def test_help_does_not_touch_database(cli_runner, tmp_path):
    """Test that --help works without creating a database."""
    db_path = tmp_path / "never.db"

    result = cli_runner.invoke(cli, ["--db-path", str(db_path), "--help"])

    assert result.exit_code == 0
    assert "income" in result.output
    assert not db_path.exists()
