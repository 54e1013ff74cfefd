"""Expense entry commands."""

from pathlib import Path

import click
from ledgerdesk import config
from ledgerdesk.cli.date_filters import period_flags_from, period_options, resolve_cli_date_range
from ledgerdesk.cli.error_handling import handle_domain_error
from ledgerdesk.cli.output import echo_rule, format_money
from ledgerdesk.cli.resolution import parse_amount_or_exit, parse_date_or_exit, resolve_item_or_exit
from ledgerdesk.domain.aggregation import entries_in_month
from ledgerdesk.domain.catalog import CatalogService
from ledgerdesk.domain.entities import CatalogKind, ExpenseEntry
from ledgerdesk.domain.errors import DomainError
from ledgerdesk.domain.ledger import LedgerService

CHEQUE_NUMBER_REQUIRED = "Cheque number is required for cheque payments"


def _expense_options(command):
    """Options shared by add and replace."""
    options = [
        click.option("--date", "entry_date", required=True, help="Entry date (YYYY-MM-DD or 'today')"),
        click.option("--vendor", required=True, help="Vendor or payee"),
        click.option("--amount", required=True, help="Amount paid"),
        click.option("--type", "payment_type", required=True, help="Payment type name or ID"),
        click.option("--category", required=True, help="Expense category name or ID"),
        click.option("--cheque-no", help="Cheque number (required for cheque payments)"),
        click.option("--reason", help="Reason or description"),
        click.option(
            "--attachment",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            help="File to store with the expense (e.g. a receipt scan)",
        ),
    ]
    for option in reversed(options):
        command = option(command)
    return command


def _resolve_expense_input(ctx, db, entry_date, vendor, amount, payment_type, category, cheque_no):
    catalog = CatalogService(db)
    ledger = LedgerService(db)

    day = parse_date_or_exit(ctx, entry_date)
    value = parse_amount_or_exit(ctx, amount)
    type_id = resolve_item_or_exit(ctx, catalog, CatalogKind.EXPENSE_TYPE, payment_type)
    category_id = resolve_item_or_exit(ctx, catalog, CatalogKind.EXPENSE_CATEGORY, category)

    if ledger.cheque_number_required(type_id) and not (cheque_no or "").strip():
        click.echo(f"Error: {CHEQUE_NUMBER_REQUIRED}", err=True)
        ctx.exit(1)

    return {
        "date": day,
        "vendor": vendor,
        "amount": value,
        "payment_type_id": type_id,
        "category_id": category_id,
    }


def _echo_entry(entry: ExpenseEntry, type_names: dict[int, str], category_names: dict[int, str]) -> None:
    click.echo(f"  Date: {entry.date}")
    click.echo(f"  Vendor: {entry.vendor}")
    click.echo(f"  Amount: {format_money(entry.amount)}")
    click.echo(f"  Type: {type_names.get(entry.payment_type_id, entry.payment_type_id)}")
    click.echo(f"  Category: {category_names.get(entry.category_id, config.UNKNOWN_CATEGORY)}")
    if entry.cheque_no:
        click.echo(f"  Cheque: {entry.cheque_no}")
    if entry.reason:
        click.echo(f"  Reason: {entry.reason}")
    if entry.attachment:
        click.echo(f"  Attachment: {len(entry.attachment)} bytes")


@click.group()
def expense_group():
    """Record and manage expenses."""
    pass


@expense_group.command("add")
@_expense_options
@click.option("--created-by", default=config.DEFAULT_CREATED_BY, show_default=True)
@click.pass_context
def add_expense(
    ctx, entry_date, vendor, amount, payment_type, category, cheque_no, reason, attachment, created_by
):
    """Add an expense entry.

    Examples:
        ledgerdesk expense add --date today --vendor "Metro" --amount 45.90 \\
            --type Cash --category Supplies
        ledgerdesk expense add --date 2024-03-02 --vendor Landlord --amount 900 \\
            --type Cheque --cheque-no 000123 --category Rent
    """
    db = ctx.obj["db"]
    catalog = CatalogService(db)
    fields = _resolve_expense_input(ctx, db, entry_date, vendor, amount, payment_type, category, cheque_no)

    try:
        entry = LedgerService(db).create_expense(
            cheque_no=cheque_no,
            reason=reason,
            attachment=attachment.read_bytes() if attachment else None,
            created_by=created_by,
            **fields,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created expense entry {entry.id}")
    _echo_entry(
        entry,
        catalog.names_by_id(CatalogKind.EXPENSE_TYPE),
        catalog.names_by_id(CatalogKind.EXPENSE_CATEGORY),
    )


@expense_group.command("replace")
@click.argument("entry_id", type=int)
@_expense_options
@click.option("--clear-attachment", is_flag=True, help="Remove the stored attachment")
@click.pass_context
def replace_expense(
    ctx, entry_id, entry_date, vendor, amount, payment_type, category, cheque_no, reason, attachment,
    clear_attachment,
):
    """Replace every field of an expense entry.

    The stored attachment is kept unless --attachment or --clear-attachment
    is given.
    """
    db = ctx.obj["db"]
    catalog = CatalogService(db)
    ledger = LedgerService(db)

    if attachment and clear_attachment:
        click.echo("Error: --attachment cannot be combined with --clear-attachment", err=True)
        ctx.exit(1)

    existing = ledger.get_expense(entry_id)
    if existing is None:
        click.echo(f"Error: Expense entry {entry_id} not found", err=True)
        ctx.exit(1)

    fields = _resolve_expense_input(ctx, db, entry_date, vendor, amount, payment_type, category, cheque_no)
    if attachment:
        content = attachment.read_bytes()
    elif clear_attachment:
        content = None
    else:
        content = existing.attachment

    try:
        entry = ledger.replace_expense(
            entry_id, cheque_no=cheque_no, reason=reason, attachment=content, **fields
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Replaced expense entry {entry.id}")
    _echo_entry(
        entry,
        catalog.names_by_id(CatalogKind.EXPENSE_TYPE),
        catalog.names_by_id(CatalogKind.EXPENSE_CATEGORY),
    )


@expense_group.command("list")
@period_options
@click.option("--month", help="Limit to one month (YYYY-MM)")
@click.pass_context
def list_expenses(ctx, start_date, end_date, this_month, last_month, this_year, month):
    """List expense entries, newest first."""
    db = ctx.obj["db"]
    catalog = CatalogService(db)
    type_names = catalog.names_by_id(CatalogKind.EXPENSE_TYPE)
    category_names = catalog.names_by_id(CatalogKind.EXPENSE_CATEGORY)

    flags = period_flags_from(this_month, last_month, this_year)
    if month and (start_date or end_date or any(flags.values())):
        click.echo("Error: --month cannot be combined with other date options.", err=True)
        ctx.exit(1)

    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date, period_flags=flags)
    entries = LedgerService(db).list_expense(start_date=start, end_date=end)
    if month:
        try:
            entries = entries_in_month(entries, month)
        except ValueError as e:
            click.echo(f"Error: Invalid month: {e}", err=True)
            ctx.exit(1)

    if not entries:
        click.echo("No expense entries found.")
        return

    click.echo("\nExpenses:")
    echo_rule(80)
    for entry in entries:
        type_name = type_names.get(entry.payment_type_id, str(entry.payment_type_id))
        category_name = category_names.get(entry.category_id, config.UNKNOWN_CATEGORY)
        cheque = f" #{entry.cheque_no}" if entry.cheque_no else ""
        click.echo(
            f"ID: {entry.id:4d} | {entry.date} | {format_money(entry.amount):>12s} | "
            f"{entry.vendor:20s} | {category_name} | {type_name}{cheque}"
        )


@expense_group.command("show")
@click.argument("entry_id", type=int)
@click.pass_context
def show_expense(ctx, entry_id: int):
    """Show one expense entry."""
    db = ctx.obj["db"]
    entry = LedgerService(db).get_expense(entry_id)
    if entry is None:
        click.echo(f"Error: Expense entry {entry_id} not found", err=True)
        ctx.exit(1)

    catalog = CatalogService(db)
    click.echo(f"Expense entry {entry.id} (by {entry.created_by})")
    _echo_entry(
        entry,
        catalog.names_by_id(CatalogKind.EXPENSE_TYPE),
        catalog.names_by_id(CatalogKind.EXPENSE_CATEGORY),
    )


@expense_group.command("delete")
@click.argument("entry_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_expense(ctx, entry_id: int, yes: bool):
    """Delete an expense entry."""
    ledger = LedgerService(ctx.obj["db"])

    if not yes and not click.confirm(f"Are you sure you want to delete expense entry {entry_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        ledger.delete_expense(entry_id)
        click.echo(f"Deleted expense entry {entry_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
