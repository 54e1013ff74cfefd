"""Reporting commands built on the aggregation engine."""

import click
from ledgerdesk import config
from ledgerdesk.cli.date_filters import period_flags_from, period_options, resolve_cli_date_range
from ledgerdesk.cli.output import echo_rule, format_money
from ledgerdesk.cli.resolution import parse_date_or_exit
from ledgerdesk.domain.aggregation import ReportService


@click.group()
def report_group():
    """Daily, monthly and rolling totals."""
    pass


@report_group.command("today")
@click.option("--date", "day", default="today", help="Day to report (default: today)")
@click.pass_context
def report_day(ctx, day: str):
    """Income and expense totals for one day."""
    total = ReportService(ctx.obj["db"]).daily_total(parse_date_or_exit(ctx, day))
    click.echo(f"{total.date}")
    click.echo(f"  Income:  {format_money(total.income):>15s}")
    click.echo(f"  Expense: {format_money(total.expense):>15s}")


@report_group.command("month")
@click.option("--date", "reference", default="today", help="Any day in the month (default: today)")
@click.pass_context
def report_month(ctx, reference: str):
    """Income, expenses and profit for a calendar month."""
    day = parse_date_or_exit(ctx, reference)
    stats = ReportService(ctx.obj["db"]).month_to_date_stats(day)
    click.echo(f"{day:%B %Y}")
    echo_rule(40)
    click.echo(f"  Income:   {format_money(stats.income):>15s}")
    click.echo(f"  Expenses: {format_money(stats.expenses):>15s}")
    click.echo(f"  Profit:   {format_money(stats.profit):>15s}")


@report_group.command("series")
@click.option("--days", type=int, default=config.DEFAULT_SERIES_DAYS, show_default=True)
@click.option("--end", "end_date", default="today", help="Last day of the window (default: today)")
@click.pass_context
def report_series(ctx, days: int, end_date: str):
    """Daily income and expense for the last N days, oldest first."""
    end = parse_date_or_exit(ctx, end_date)
    points = ReportService(ctx.obj["db"]).rolling_series(days, end)
    if not points:
        click.echo("No days in range.")
        return

    click.echo(f"{'Date':10s} | {'Income':>12s} | {'Expense':>12s}")
    echo_rule(40)
    for point in points:
        click.echo(f"{point.date} | {format_money(point.income):>12s} | {format_money(point.expense):>12s}")


@report_group.command("categories")
@period_options
@click.pass_context
def report_categories(ctx, start_date, end_date, this_month, last_month, this_year):
    """Expense totals per category."""
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags_from(this_month, last_month, this_year),
    )
    breakdown = ReportService(ctx.obj["db"]).category_breakdown(start, end)
    if not breakdown:
        click.echo("No expenses found.")
        return

    click.echo("\nExpenses by category:")
    echo_rule()
    for name, amount in breakdown.items():
        click.echo(f"  {name:30s} {format_money(amount):>15s}")


@report_group.command("monthly")
@click.pass_context
def report_monthly(ctx):
    """Income, expenses and profit per month, newest first."""
    rows = ReportService(ctx.obj["db"]).monthly_summary()
    if not rows:
        click.echo("No entries found.")
        return

    click.echo(f"{'Month':7s} | {'Income':>12s} | {'Expenses':>12s} | {'Profit':>12s}")
    echo_rule()
    for row in rows:
        click.echo(
            f"{row.month:7s} | {format_money(row.income):>12s} | "
            f"{format_money(row.expenses):>12s} | {format_money(row.profit):>12s}"
        )


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
