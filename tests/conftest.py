"""Shared pytest fixtures for ledgerdesk tests."""

import tempfile
import os
import pytest

from ledgerdesk.database.factories import create_sqlite_database
from ledgerdesk.domain.catalog import CatalogService
from ledgerdesk.domain.ledger import LedgerService
from ledgerdesk.domain.snapshot import SnapshotService
from ledgerdesk.domain.aggregation import ReportService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def catalog_service(temp_db):
    """Create a CatalogService with a temporary database."""
    return CatalogService(temp_db)


@pytest.fixture
def ledger_service(temp_db):
    """Create a LedgerService with a temporary database."""
    return LedgerService(temp_db)


@pytest.fixture
def snapshot_service(temp_db):
    """Create a SnapshotService with locks advisory."""
    return SnapshotService(temp_db, enforce_lock=False)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService with a temporary database."""
    return ReportService(temp_db)


@pytest.fixture
def sample_catalog(catalog_service):
    """Create a small catalog and return the created items by name."""
    return {
        "Cash": catalog_service.create_income_method("Cash", sort_order=1),
        "Card": catalog_service.create_income_method("Card", sort_order=2),
        "Online": catalog_service.create_income_method("Online", sort_order=3),
        "Supplies": catalog_service.create_expense_category("Supplies"),
        "Rent": catalog_service.create_expense_category("Rent"),
        "Cash payment": catalog_service.create_expense_type("Cash payment"),
        "Cheque": catalog_service.create_expense_type("Cheque"),
        "Main Bank": catalog_service.create_account("Main Bank"),
        "Petty Cash": catalog_service.create_account("Petty Cash", type="Cash"),
    }


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
