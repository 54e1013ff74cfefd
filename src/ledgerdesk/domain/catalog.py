"""Catalog domain service."""

import logging
from typing import Any, Optional

from ledgerdesk import config
from ledgerdesk.database.base import Database
from ledgerdesk.domain.entities import (
    CatalogKind,
    CatalogItem,
    IncomeMethod,
    ExpenseCategory,
    ExpenseType,
    Account,
)
from ledgerdesk.domain.errors import (
    ValidationError,
    NotFoundError,
    DependencyError,
    catalog_item_not_found,
    catalog_delete_blocked,
)

logger = logging.getLogger(__name__)


class CatalogService:
    """Service for managing reference data: methods, categories, types, accounts.

    Catalog items referenced by historical entries or snapshots are never
    physically removed; they are deactivated instead. Hard delete is only
    permitted for items nothing points to.
    """

    def __init__(self, db: Database):
        """Initialize catalog service.

        Args:
            db: Database instance
        """
        self.db = db

    # Generic operations
    def create_item(self, kind: CatalogKind, name: str, **fields: Any) -> CatalogItem:
        """Create a catalog item.

        Raises:
            ValidationError: If name is blank
        """
        name = self._require_name(name)
        item_id = self.db.create_catalog_item(kind, name, **fields)
        logger.info(f"Created {kind.label.lower()} {item_id} '{name}'")
        return self.require_item(kind, item_id)

    def get_item(self, kind: CatalogKind, item_id: int) -> Optional[CatalogItem]:
        """Get a catalog item by ID, active or not."""
        return self.db.get_catalog_item(kind, item_id)

    def require_item(self, kind: CatalogKind, item_id: int) -> CatalogItem:
        """Get a catalog item by ID.

        Raises:
            NotFoundError: If the item does not exist
        """
        item = self.db.get_catalog_item(kind, item_id)
        if item is None:
            raise NotFoundError(catalog_item_not_found(kind.label, item_id))
        return item

    def list_items(self, kind: CatalogKind, include_inactive: bool = False) -> list[CatalogItem]:
        """List catalog items of one kind."""
        return self.db.list_catalog_items(kind, include_inactive=include_inactive)

    def update_item(self, kind: CatalogKind, item_id: int, **fields: Any) -> CatalogItem:
        """Update catalog item fields.

        Raises:
            NotFoundError: If the item does not exist
            ValidationError: If a new name is blank
        """
        self.require_item(kind, item_id)
        if "name" in fields:
            fields["name"] = self._require_name(fields["name"])
        self.db.update_catalog_item(kind, item_id, **fields)
        return self.require_item(kind, item_id)

    def rename_item(self, kind: CatalogKind, item_id: int, name: str) -> CatalogItem:
        """Rename a catalog item."""
        return self.update_item(kind, item_id, name=name)

    def deactivate_item(self, kind: CatalogKind, item_id: int) -> CatalogItem:
        """Soft-delete a catalog item; historical references stay valid."""
        item = self.update_item(kind, item_id, active=False)
        logger.info(f"Deactivated {kind.label.lower()} {item_id}")
        return item

    def activate_item(self, kind: CatalogKind, item_id: int) -> CatalogItem:
        """Re-activate a previously deactivated catalog item."""
        return self.update_item(kind, item_id, active=True)

    def delete_item(self, kind: CatalogKind, item_id: int) -> None:
        """Hard-delete a catalog item that nothing references.

        Raises:
            NotFoundError: If the item does not exist
            DependencyError: If any entry or snapshot balance references it
        """
        self.require_item(kind, item_id)

        reference_count = self.db.count_catalog_references(kind, item_id)
        if reference_count > 0:
            raise DependencyError(catalog_delete_blocked(kind.label, item_id, reference_count))

        self.db.delete_catalog_item(kind, item_id)
        logger.info(f"Deleted {kind.label.lower()} {item_id}")

    def known_ids(self, kind: CatalogKind) -> set[int]:
        """IDs of every item of a kind, including inactive ones."""
        return {item.id for item in self.db.list_catalog_items(kind, include_inactive=True)}

    def names_by_id(self, kind: CatalogKind) -> dict[int, str]:
        """Map of item ID to name, including inactive items (for labelling history)."""
        return {item.id: item.name for item in self.db.list_catalog_items(kind, include_inactive=True)}

    @staticmethod
    def _require_name(name: str) -> str:
        if name is None or not str(name).strip():
            raise ValidationError("Name must not be empty")
        return str(name).strip()

    # Income methods
    def create_income_method(
        self, name: str, sort_order: int = config.DEFAULT_SORT_ORDER
    ) -> IncomeMethod:
        """Create an income method."""
        return self.create_item(CatalogKind.INCOME_METHOD, name, sort_order=sort_order)

    def list_income_methods(self, include_inactive: bool = False) -> list[IncomeMethod]:
        """List income methods ordered by sort order, then name."""
        return self.list_items(CatalogKind.INCOME_METHOD, include_inactive=include_inactive)

    # Expense categories
    def create_expense_category(self, name: str) -> ExpenseCategory:
        """Create an expense category."""
        return self.create_item(CatalogKind.EXPENSE_CATEGORY, name)

    def list_expense_categories(self, include_inactive: bool = False) -> list[ExpenseCategory]:
        """List expense categories ordered by name."""
        return self.list_items(CatalogKind.EXPENSE_CATEGORY, include_inactive=include_inactive)

    # Expense types
    def create_expense_type(self, name: str) -> ExpenseType:
        """Create an expense payment type."""
        return self.create_item(CatalogKind.EXPENSE_TYPE, name)

    def list_expense_types(self, include_inactive: bool = False) -> list[ExpenseType]:
        """List expense payment types ordered by name."""
        return self.list_items(CatalogKind.EXPENSE_TYPE, include_inactive=include_inactive)

    # Accounts
    def create_account(
        self,
        name: str,
        type: str = config.DEFAULT_ACCOUNT_TYPE,
        currency: str = config.DEFAULT_CURRENCY,
        active: bool = True,
    ) -> Account:
        """Create an account.

        Args:
            name: Account name
            type: Account type, e.g. "Bank" or "Cash"
            currency: Currency code (informational; no conversion is done)
            active: Whether the account is shown for new snapshots
        """
        return self.create_item(
            CatalogKind.ACCOUNT, name, type=type, currency=currency, active=active
        )

    def list_accounts(self, include_inactive: bool = True) -> list[Account]:
        """List accounts ordered by name."""
        return self.list_items(CatalogKind.ACCOUNT, include_inactive=include_inactive)

    def update_account(
        self,
        account_id: int,
        name: Optional[str] = None,
        type: Optional[str] = None,
        currency: Optional[str] = None,
        active: Optional[bool] = None,
    ) -> Account:
        """Update the provided account fields."""
        fields = {
            key: value
            for key, value in (("name", name), ("type", type), ("currency", currency), ("active", active))
            if value is not None
        }
        return self.update_item(CatalogKind.ACCOUNT, account_id, **fields)
