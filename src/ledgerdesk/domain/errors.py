"""Shared domain error messages and error types."""

from datetime import date


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Malformed input, negative amount or unknown catalog reference."""


class NotFoundError(DomainError):
    """Operation targets an entry or catalog item that does not exist."""


class ConflictError(DomainError):
    """Unique-key violation or a concurrent-mutation race."""


class DependencyError(ConflictError):
    """Hard delete blocked because ledger or snapshot rows reference the item."""


def income_entry_not_found(entry_id: int) -> str:
    """Return message for missing income entry."""
    return f"Income entry {entry_id} not found"


def expense_entry_not_found(entry_id: int) -> str:
    """Return message for missing expense entry."""
    return f"Expense entry {entry_id} not found"


def catalog_item_not_found(kind: str, item_id: int) -> str:
    """Return message for a missing catalog item, e.g. ``Income method 3 not found``."""
    return f"{kind} {item_id} not found"


def negative_amount(amount) -> str:
    """Return message for a negative monetary amount."""
    return f"Amount must not be negative (got {amount})"


def snapshot_locked(month: date) -> str:
    """Return message when a locked snapshot is re-submitted."""
    return f"Snapshot for {month:%Y-%m} is locked and cannot be replaced"


def duplicate_snapshot_month(month: date) -> str:
    """Return message when two writers race to create the same month."""
    return f"A snapshot for {month:%Y-%m} already exists"


def catalog_delete_blocked(kind: str, item_id: int, reference_count: int) -> str:
    """Return message when a catalog item is still referenced."""
    return (
        f"Cannot delete {kind.lower()} {item_id}: it is referenced by "
        f"{reference_count} record{'s' if reference_count != 1 else ''}. "
        "Deactivate it instead."
    )
