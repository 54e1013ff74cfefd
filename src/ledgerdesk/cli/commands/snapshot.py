"""Monthly account snapshot commands."""

import click
from ledgerdesk.cli.error_handling import handle_domain_error
from ledgerdesk.cli.output import echo_rule, format_money
from ledgerdesk.cli.resolution import parse_named_pair_or_exit
from ledgerdesk.domain.catalog import CatalogService
from ledgerdesk.domain.entities import AccountSnapshot, CatalogKind, SnapshotBalance
from ledgerdesk.domain.errors import DomainError
from ledgerdesk.domain.snapshot import SnapshotService
from ledgerdesk.utils.line_codec import decode_balances


def _echo_snapshot(snapshot: AccountSnapshot, account_names: dict[int, str]) -> None:
    status = "locked" if snapshot.is_locked else "unlocked"
    click.echo(f"Snapshot {snapshot.month:%Y-%m} (ID: {snapshot.id}, {status})")
    echo_rule()
    for balance in snapshot.balances:
        name = account_names.get(balance.account_id, f"#{balance.account_id}")
        click.echo(f"  {name:30s} {format_money(balance.balance):>15s}")


@click.group()
def snapshot_group():
    """Freeze monthly account balances."""
    pass


@snapshot_group.command("save")
@click.argument("month")
@click.option(
    "--balance",
    multiple=True,
    metavar="ACCOUNT:AMOUNT",
    help="Account name or ID and its balance, e.g. 'Main Bank:1500' (repeatable)",
)
@click.option("--balances", help='Packed balances, e.g. "1:1500;2:-20" (account ID:amount)')
@click.option("--unlocked", is_flag=True, help="Store the snapshot without the lock flag")
@click.pass_context
def save_snapshot(ctx, month: str, balance: tuple[str, ...], balances: str | None, unlocked: bool):
    """Create or replace the snapshot for MONTH (YYYY-MM or any date in it).

    The given balances replace the month's complete balance set.

    Examples:
        ledgerdesk snapshot save 2024-03 --balance "Main Bank:1500" --balance Cash:200
        ledgerdesk snapshot save 2024-03 --balances "1:1500;2:200" --unlocked
    """
    db = ctx.obj["db"]
    catalog = CatalogService(db)

    collected = []
    for value in balance:
        account_id, amount = parse_named_pair_or_exit(ctx, catalog, CatalogKind.ACCOUNT, value)
        collected.append(SnapshotBalance(account_id=account_id, balance=amount))
    if balances:
        try:
            collected.extend(decode_balances(balances))
        except ValueError as e:
            click.echo(f"Error: Invalid --balances value: {e}", err=True)
            ctx.exit(1)

    try:
        snapshot = SnapshotService(db).upsert_snapshot(month, collected, is_locked=not unlocked)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Saved snapshot for {snapshot.month:%Y-%m}")
    _echo_snapshot(snapshot, catalog.names_by_id(CatalogKind.ACCOUNT))


@snapshot_group.command("list")
@click.pass_context
def list_snapshots(ctx):
    """List snapshots, newest month first."""
    snapshots = SnapshotService(ctx.obj["db"]).list_snapshots()
    if not snapshots:
        click.echo("No snapshots found.")
        return

    click.echo("\nSnapshots:")
    echo_rule()
    for snapshot in snapshots:
        status = "locked" if snapshot.is_locked else "unlocked"
        total = sum((b.balance for b in snapshot.balances), start=0)
        click.echo(
            f"ID: {snapshot.id:3d} | {snapshot.month:%Y-%m} | {status:8s} | "
            f"{len(snapshot.balances)} account(s) | {format_money(total):>15s}"
        )


@snapshot_group.command("show")
@click.argument("month")
@click.pass_context
def show_snapshot(ctx, month: str):
    """Show the balances frozen for MONTH."""
    db = ctx.obj["db"]
    try:
        snapshot = SnapshotService(db).get_snapshot(month)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if snapshot is None:
        click.echo(f"Error: No snapshot for {month}", err=True)
        ctx.exit(1)

    _echo_snapshot(snapshot, CatalogService(db).names_by_id(CatalogKind.ACCOUNT))


def register_commands(cli):
    """Register snapshot commands with main CLI."""
    cli.add_command(snapshot_group, name="snapshot")
