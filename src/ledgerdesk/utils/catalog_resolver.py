"""Utility for resolving catalog item names to IDs."""

from ledgerdesk.domain.catalog import CatalogService
from ledgerdesk.domain.entities import CatalogKind


def resolve_catalog_item(catalog: CatalogService, kind: CatalogKind, value: str | int) -> int:
    """Resolve a catalog item name or ID to its ID.

    Numeric values are treated as IDs. Names are matched case-insensitively
    against active items first, then inactive ones, so historical entries
    can still be edited after an item was deactivated.

    Args:
        catalog: CatalogService instance
        kind: Catalog kind to search
        value: Item name (str) or ID (int or string representation of int)

    Returns:
        Item ID

    Raises:
        ValueError: If no item matches, or a name matches several items
    """
    label = kind.label
    if isinstance(value, int):
        if catalog.get_item(kind, value) is None:
            raise ValueError(f"{label} ID {value} not found")
        return value

    text = str(value).strip()
    try:
        item_id = int(text)
    except ValueError:
        item_id = None
    if item_id is not None:
        if catalog.get_item(kind, item_id) is None:
            raise ValueError(f"{label} ID {item_id} not found")
        return item_id

    items = catalog.list_items(kind, include_inactive=True)
    for active in (True, False):
        matches = [i for i in items if i.active is active and i.name.lower() == text.lower()]
        if len(matches) > 1:
            ids = ", ".join(str(i.id) for i in matches)
            raise ValueError(f"{label} name '{text}' is ambiguous (IDs {ids}); use an ID")
        if matches:
            return matches[0].id

    raise ValueError(f"{label} '{text}' not found")
