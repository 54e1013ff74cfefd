"""CLI helpers for catalog resolution and input parsing."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import click
from ledgerdesk.domain.catalog import CatalogService
from ledgerdesk.domain.entities import CatalogKind
from ledgerdesk.utils.amount_parser import parse_amount
from ledgerdesk.utils.catalog_resolver import resolve_catalog_item
from ledgerdesk.utils.date_parser import parse_date


def resolve_item_or_exit(
    ctx: click.Context, catalog: CatalogService, kind: CatalogKind, value: str | int
) -> int:
    """Resolve a catalog name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_catalog_item(catalog, kind, value)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def parse_date_or_exit(ctx: click.Context, value: str) -> date:
    """Parse a CLI date, or exit with a CLI error."""
    try:
        return parse_date(value)
    except ValueError as exc:
        click.echo(f"Error: Invalid date format: {exc}", err=True)
        ctx.exit(1)


def parse_amount_or_exit(ctx: click.Context, value: str) -> Decimal:
    """Parse a CLI amount, or exit with a CLI error."""
    try:
        return parse_amount(value)
    except ValueError as exc:
        click.echo(f"Error: Invalid amount format: {exc}", err=True)
        ctx.exit(1)


def parse_named_pair_or_exit(
    ctx: click.Context, catalog: CatalogService, kind: CatalogKind, value: str
) -> tuple[int, Decimal]:
    """Parse ``NAME_OR_ID:AMOUNT`` (e.g. ``Cash:120.50``) into an ID/amount pair."""
    name, sep, amount = value.rpartition(":")
    if not sep or not name.strip():
        click.echo(f"Error: Expected NAME_OR_ID:AMOUNT, got '{value}'", err=True)
        ctx.exit(1)
    item_id = resolve_item_or_exit(ctx, catalog, kind, name)
    return item_id, parse_amount_or_exit(ctx, amount)
