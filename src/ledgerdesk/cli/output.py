"""CLI output formatting helpers."""

from decimal import Decimal
from typing import Iterable, Mapping

import click


def format_money(amount: Decimal) -> str:
    """Format an amount with thousands separators and two decimals."""
    return f"{amount:,.2f}"


def format_pairs(pairs: Iterable[tuple[int, Decimal]], names: Mapping[int, str]) -> str:
    """Render id/amount pairs as ``Name 1,234.00, Other 5.00``."""
    return ", ".join(f"{names.get(item_id, f'#{item_id}')} {format_money(amount)}" for item_id, amount in pairs)


def echo_rule(width: int = 60) -> None:
    click.echo("-" * width)
