"""
Configuration module for ledgerdesk.

Settings are read from the environment once at import time. A ``.env`` file in
the working directory is loaded first, so local overrides need no shell setup.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Database configuration
DB_PATH_ENV = "LEDGERDESK_DB_PATH"
DEFAULT_DB_DIR = Path.home() / ".ledgerdesk"
DEFAULT_DB_NAME = "ledgerdesk.db"

# Logging configuration
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

# Snapshot lock policy: advisory unless explicitly enforced
ENFORCE_SNAPSHOT_LOCK_ENV = "LEDGERDESK_ENFORCE_SNAPSHOT_LOCK"

# Reporting
DEFAULT_SERIES_DAYS = 30
UNKNOWN_CATEGORY = "Unknown"
RECENT_ENTRIES_LIMIT = 5

# Ledger defaults
DEFAULT_CREATED_BY = "admin"
CHEQUE_TYPE_NAME = "cheque"

# Catalog defaults
DEFAULT_ACCOUNT_TYPE = "Bank"
DEFAULT_CURRENCY = "EUR"
DEFAULT_SORT_ORDER = 999


def get_database_path() -> str | None:
    """Get the configured database path, or None when unset."""
    return os.environ.get(DB_PATH_ENV) or None


def enforce_snapshot_lock() -> bool:
    """Whether locked snapshots reject re-submission."""
    value = os.environ.get(ENFORCE_SNAPSHOT_LOCK_ENV, "")
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_log_level(name: str | None = None) -> int:
    """Get the configured log level."""
    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return level_map.get((name or LOG_LEVEL).upper(), logging.WARNING)
