"""Database factory functions for creating database instances."""

from typing import Optional

from ledgerdesk import config
from ledgerdesk.database.sqlalchemy_db import SQLAlchemyDatabase


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks LEDGERDESK_DB_PATH
            environment variable, then defaults to ~/.ledgerdesk/ledgerdesk.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = config.get_database_path()

    if database_path is None:
        db_dir = config.DEFAULT_DB_DIR
        db_dir.mkdir(parents=True, exist_ok=True)
        database_path = str(db_dir / config.DEFAULT_DB_NAME)

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url)
