"""Main CLI entry point."""

import logging

import click
from ledgerdesk import config
from ledgerdesk.database.factories import create_sqlite_database

# Import and register all commands at module level
from ledgerdesk.cli.commands import (
    catalog,
    income,
    expense,
    snapshot,
    report,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {config.DB_PATH_ENV} environment variable)",
    envvar=config.DB_PATH_ENV,
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level (overrides LOG_LEVEL environment variable)",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """Ledgerdesk - Small business bookkeeping.

    Record daily income split by payment method, expenses with vendor and
    category, and freeze monthly account balances into snapshots.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(level=config.get_log_level(log_level), format=config.LOG_FORMAT)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
catalog.register_commands(cli)
income.register_commands(cli)
expense.register_commands(cli)
snapshot.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
