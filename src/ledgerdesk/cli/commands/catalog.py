"""Catalog management commands: income methods, expense categories and types, accounts."""

import click
from ledgerdesk import config
from ledgerdesk.cli.error_handling import handle_domain_error
from ledgerdesk.cli.output import echo_rule
from ledgerdesk.cli.resolution import resolve_item_or_exit
from ledgerdesk.domain.catalog import CatalogService
from ledgerdesk.domain.entities import CatalogKind
from ledgerdesk.domain.errors import DomainError


PLURALS = {
    CatalogKind.INCOME_METHOD: "income methods",
    CatalogKind.EXPENSE_CATEGORY: "expense categories",
    CatalogKind.EXPENSE_TYPE: "expense types",
    CatalogKind.ACCOUNT: "accounts",
}


def _describe(item) -> str:
    status = "" if item.active else " (inactive)"
    return f"ID: {item.id:3d} | {item.name:20s}{status}"


def _add_shared_commands(group: click.Group, kind: CatalogKind) -> None:
    """Attach list/rename/deactivate/activate/delete to a catalog group."""
    noun = kind.label.lower()
    plural = PLURALS[kind]

    @group.command("list")
    @click.option("--all", "include_inactive", is_flag=True, help="Include deactivated items")
    @click.pass_context
    def list_items(ctx, include_inactive: bool):
        service = CatalogService(ctx.obj["db"])
        items = service.list_items(kind, include_inactive=include_inactive)
        if not items:
            click.echo(f"No {plural} found.")
            return

        click.echo(f"\n{plural.capitalize()}:")
        echo_rule()
        for item in items:
            line = _describe(item)
            if kind is CatalogKind.INCOME_METHOD:
                line += f" | Order: {item.sort_order}"
            elif kind is CatalogKind.ACCOUNT:
                line += f" | {item.type} | {item.currency}"
            click.echo(line)

    list_items.help = f"List {plural}."

    @group.command("rename")
    @click.argument("item", metavar="NAME_OR_ID")
    @click.argument("new_name")
    @click.pass_context
    def rename_item(ctx, item: str, new_name: str):
        service = CatalogService(ctx.obj["db"])
        item_id = resolve_item_or_exit(ctx, service, kind, item)
        try:
            renamed = service.rename_item(kind, item_id, new_name)
            click.echo(f"Renamed {noun} {item_id} to '{renamed.name}'")
        except DomainError as e:
            handle_domain_error(ctx, e)

    rename_item.help = f"Rename a {noun}."

    @group.command("deactivate")
    @click.argument("item", metavar="NAME_OR_ID")
    @click.pass_context
    def deactivate_item(ctx, item: str):
        service = CatalogService(ctx.obj["db"])
        item_id = resolve_item_or_exit(ctx, service, kind, item)
        try:
            deactivated = service.deactivate_item(kind, item_id)
            click.echo(f"Deactivated {noun} '{deactivated.name}'")
        except DomainError as e:
            handle_domain_error(ctx, e)

    deactivate_item.help = (
        f"Deactivate a {noun}. Existing entries keep referring to it, "
        "but it is hidden from new input."
    )

    @group.command("activate")
    @click.argument("item", metavar="NAME_OR_ID")
    @click.pass_context
    def activate_item(ctx, item: str):
        service = CatalogService(ctx.obj["db"])
        item_id = resolve_item_or_exit(ctx, service, kind, item)
        try:
            activated = service.activate_item(kind, item_id)
            click.echo(f"Activated {noun} '{activated.name}'")
        except DomainError as e:
            handle_domain_error(ctx, e)

    activate_item.help = f"Re-activate a deactivated {noun}."

    @group.command("delete")
    @click.argument("item", metavar="NAME_OR_ID")
    @click.option("--yes", is_flag=True, help="Do not ask for confirmation")
    @click.pass_context
    def delete_item(ctx, item: str, yes: bool):
        service = CatalogService(ctx.obj["db"])
        item_id = resolve_item_or_exit(ctx, service, kind, item)
        target = service.get_item(kind, item_id)

        if not yes and not click.confirm(
            f"Are you sure you want to delete {noun} '{target.name}' (ID: {item_id})?"
        ):
            click.echo("Deletion cancelled.")
            return

        try:
            service.delete_item(kind, item_id)
            click.echo(f"Deleted {noun} '{target.name}'")
        except DomainError as e:
            handle_domain_error(ctx, e)

    delete_item.help = (
        f"Permanently delete a {noun}. Only allowed when no entry or "
        "snapshot refers to it; use deactivate otherwise."
    )


@click.group()
def method_group():
    """Manage income methods."""
    pass


@method_group.command("create")
@click.argument("name")
@click.option("--sort-order", type=int, default=config.DEFAULT_SORT_ORDER, show_default=True)
@click.pass_context
def create_method(ctx, name: str, sort_order: int):
    """Create an income method.

    Examples:
        ledgerdesk method create "Cash" --sort-order 1
        ledgerdesk method create "Card"
    """
    service = CatalogService(ctx.obj["db"])
    try:
        method = service.create_income_method(name=name, sort_order=sort_order)
        click.echo(f"Created income method '{method.name}' (ID: {method.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@click.group()
def category_group():
    """Manage expense categories."""
    pass


@category_group.command("create")
@click.argument("name")
@click.pass_context
def create_category(ctx, name: str):
    """Create an expense category."""
    service = CatalogService(ctx.obj["db"])
    try:
        category = service.create_expense_category(name=name)
        click.echo(f"Created expense category '{category.name}' (ID: {category.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@click.group()
def type_group():
    """Manage expense payment types."""
    pass


@type_group.command("create")
@click.argument("name")
@click.pass_context
def create_type(ctx, name: str):
    """Create an expense payment type.

    A type named "Cheque" makes the cheque number mandatory on expenses.
    """
    service = CatalogService(ctx.obj["db"])
    try:
        expense_type = service.create_expense_type(name=name)
        click.echo(f"Created expense type '{expense_type.name}' (ID: {expense_type.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--type", "account_type", default=config.DEFAULT_ACCOUNT_TYPE, show_default=True)
@click.option("--currency", default=config.DEFAULT_CURRENCY, show_default=True)
@click.option("--inactive", is_flag=True, help="Create the account deactivated")
@click.pass_context
def create_account(ctx, name: str, account_type: str, currency: str, inactive: bool):
    """Create a new account.

    Examples:
        ledgerdesk account create "Main Bank"
        ledgerdesk account create "Petty Cash" --type Cash --currency USD
    """
    service = CatalogService(ctx.obj["db"])
    try:
        account = service.create_account(
            name=name, type=account_type, currency=currency, active=not inactive
        )
        click.echo(f"Created account '{account.name}' (ID: {account.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("update")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", help="New account name")
@click.option("--type", "account_type", help="New account type")
@click.option("--currency", help="New currency code")
@click.pass_context
def update_account(ctx, account: str, name: str | None, account_type: str | None, currency: str | None):
    """Update an account's name, type or currency.

    ACCOUNT can be an account name or ID.
    """
    service = CatalogService(ctx.obj["db"])
    account_id = resolve_item_or_exit(ctx, service, CatalogKind.ACCOUNT, account)
    try:
        updated = service.update_account(account_id, name=name, type=account_type, currency=currency)
        click.echo(f"Updated account '{updated.name}' ({updated.type}, {updated.currency})")
    except DomainError as e:
        handle_domain_error(ctx, e)


_add_shared_commands(method_group, CatalogKind.INCOME_METHOD)
_add_shared_commands(category_group, CatalogKind.EXPENSE_CATEGORY)
_add_shared_commands(type_group, CatalogKind.EXPENSE_TYPE)
_add_shared_commands(account_group, CatalogKind.ACCOUNT)


def register_commands(cli):
    """Register catalog commands with main CLI."""
    cli.add_command(method_group, name="method")
    cli.add_command(category_group, name="category")
    cli.add_command(type_group, name="type")
    cli.add_command(account_group, name="account")
