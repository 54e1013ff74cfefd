"""Income entry commands."""

import click
from ledgerdesk import config
from ledgerdesk.cli.date_filters import period_flags_from, period_options, resolve_cli_date_range
from ledgerdesk.cli.error_handling import handle_domain_error
from ledgerdesk.cli.output import echo_rule, format_money, format_pairs
from ledgerdesk.cli.resolution import parse_date_or_exit, parse_named_pair_or_exit
from ledgerdesk.domain.catalog import CatalogService
from ledgerdesk.domain.entities import CatalogKind, IncomeEntry, IncomeLine
from ledgerdesk.domain.errors import DomainError
from ledgerdesk.domain.ledger import LedgerService
from ledgerdesk.utils.line_codec import decode_lines


def _collect_lines(ctx, catalog: CatalogService, line: tuple[str, ...], lines: str | None) -> list[IncomeLine]:
    """Combine repeated --line options and a packed --lines value."""
    collected = []
    for value in line:
        method_id, amount = parse_named_pair_or_exit(ctx, catalog, CatalogKind.INCOME_METHOD, value)
        collected.append(IncomeLine(method_id=method_id, amount=amount))
    if lines:
        try:
            collected.extend(decode_lines(lines))
        except ValueError as e:
            click.echo(f"Error: Invalid --lines value: {e}", err=True)
            ctx.exit(1)
    return collected


def _echo_entry(entry: IncomeEntry, method_names: dict[int, str]) -> None:
    click.echo(f"  Date: {entry.date}")
    click.echo(f"  Total: {format_money(entry.total)}")
    if entry.lines:
        click.echo(
            f"  Lines: {format_pairs(((l.method_id, l.amount) for l in entry.lines), method_names)}"
        )
    if entry.notes:
        click.echo(f"  Notes: {entry.notes}")


def _line_options(command):
    command = click.option(
        "--lines", help='Packed lines, e.g. "1:100;2:50" (method ID:amount)'
    )(command)
    command = click.option(
        "--line",
        multiple=True,
        metavar="METHOD:AMOUNT",
        help="Line as method name or ID and amount, e.g. Cash:120.50 (repeatable)",
    )(command)
    return command


@click.group()
def income_group():
    """Record and manage daily income."""
    pass


@income_group.command("add")
@click.option("--date", "entry_date", required=True, help="Entry date (YYYY-MM-DD or 'today', 'yesterday')")
@click.option("--notes", default="", help="Notes")
@click.option("--created-by", default=config.DEFAULT_CREATED_BY, show_default=True)
@_line_options
@click.pass_context
def add_income(ctx, entry_date: str, notes: str, created_by: str, line: tuple[str, ...], lines: str | None):
    """Add an income entry split across payment methods.

    Examples:
        ledgerdesk income add --date today --line Cash:120 --line Card:80.50
        ledgerdesk income add --date 2024-03-01 --lines "1:100;2:50"
    """
    db = ctx.obj["db"]
    catalog = CatalogService(db)
    ledger = LedgerService(db)

    day = parse_date_or_exit(ctx, entry_date)
    income_lines = _collect_lines(ctx, catalog, line, lines)

    try:
        entry = ledger.create_income(date=day, notes=notes, lines=income_lines, created_by=created_by)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created income entry {entry.id}")
    _echo_entry(entry, catalog.names_by_id(CatalogKind.INCOME_METHOD))


@income_group.command("replace")
@click.argument("entry_id", type=int)
@click.option("--date", "entry_date", required=True, help="Entry date (YYYY-MM-DD or 'today')")
@click.option("--notes", default="", help="Notes")
@_line_options
@click.pass_context
def replace_income(ctx, entry_id: int, entry_date: str, notes: str, line: tuple[str, ...], lines: str | None):
    """Replace an income entry: date, notes and the complete set of lines.

    Lines not given again are removed.

    Examples:
        ledgerdesk income replace 3 --date 2024-03-01 --line Cash:150
    """
    db = ctx.obj["db"]
    catalog = CatalogService(db)
    ledger = LedgerService(db)

    day = parse_date_or_exit(ctx, entry_date)
    income_lines = _collect_lines(ctx, catalog, line, lines)

    try:
        entry = ledger.replace_income(entry_id, date=day, notes=notes, lines=income_lines)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Replaced income entry {entry.id}")
    _echo_entry(entry, catalog.names_by_id(CatalogKind.INCOME_METHOD))


@income_group.command("list")
@period_options
@click.pass_context
def list_income(ctx, start_date, end_date, this_month, last_month, this_year):
    """List income entries, newest first."""
    db = ctx.obj["db"]
    ledger = LedgerService(db)
    method_names = CatalogService(db).names_by_id(CatalogKind.INCOME_METHOD)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags_from(this_month, last_month, this_year),
    )
    entries = ledger.list_income(start_date=start, end_date=end)
    if not entries:
        click.echo("No income entries found.")
        return

    click.echo("\nIncome:")
    echo_rule(80)
    for entry in entries:
        breakdown = format_pairs(((l.method_id, l.amount) for l in entry.lines), method_names)
        click.echo(f"ID: {entry.id:4d} | {entry.date} | {format_money(entry.total):>12s} | {breakdown}")


@income_group.command("show")
@click.argument("entry_id", type=int)
@click.pass_context
def show_income(ctx, entry_id: int):
    """Show one income entry."""
    db = ctx.obj["db"]
    entry = LedgerService(db).get_income(entry_id)
    if entry is None:
        click.echo(f"Error: Income entry {entry_id} not found", err=True)
        ctx.exit(1)

    click.echo(f"Income entry {entry.id} (by {entry.created_by})")
    _echo_entry(entry, CatalogService(db).names_by_id(CatalogKind.INCOME_METHOD))


@income_group.command("delete")
@click.argument("entry_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_income(ctx, entry_id: int, yes: bool):
    """Delete an income entry and all of its lines."""
    ledger = LedgerService(ctx.obj["db"])

    if not yes and not click.confirm(f"Are you sure you want to delete income entry {entry_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        ledger.delete_income(entry_id)
        click.echo(f"Deleted income entry {entry_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register income commands with main CLI."""
    cli.add_command(income_group, name="income")
