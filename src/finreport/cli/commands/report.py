"""Report commands."""

import asyncio
import logging

import click

from finreport.cli.commands.transactions import (
    print_transaction_table,
    print_transaction_totals,
)
from finreport.cli.filter_options import (
    describe_filter,
    filter_options,
    resolve_cli_filter,
)
from finreport.domain.categories import assign_colors
from finreport.domain.entities import LoadState, ReportSection, SectionStatus
from finreport.domain.report import DEFAULT_TREND_MONTHS, ReportOrchestrator
from finreport.service import AsyncDataService

logger = logging.getLogger(__name__)

TREND_MONTHS_ENV_VAR = "FINREPORT_TREND_MONTHS"

months_option = click.option(
    "--months",
    type=click.IntRange(min=1),
    default=DEFAULT_TREND_MONTHS,
    envvar=TREND_MONTHS_ENV_VAR,
    show_default=True,
    help=f"Number of months in the trend series (overrides {TREND_MONTHS_ENV_VAR})",
)


def _section_header(title: str) -> None:
    click.echo(f"\n{title}")
    click.echo("-" * 80)


def _unavailable(section: ReportSection) -> bool:
    if section.ok:
        return False
    click.echo(f"  unavailable: {section.error}")
    return True


def _format_change(pct: float) -> str:
    return f"{pct:+.1f}%"


def print_comparison(section: ReportSection) -> None:
    _section_header("Period comparison")
    if _unavailable(section):
        return
    comparison = section.data
    current = comparison.current_period
    previous = comparison.previous_period
    click.echo(f"  Current:  {current.start_date} to {current.end_date}")
    click.echo(f"  Previous: {previous.start_date} to {previous.end_date}")
    click.echo(f"  {'':<12} {'Current':>14} {'Previous':>14} {'Change':>10}")
    rows = [
        ("Income", current.total_income, previous.total_income, comparison.income_change_pct),
        ("Expenses", current.total_expense, previous.total_expense, comparison.expense_change_pct),
        ("Net savings", current.net_savings, previous.net_savings, comparison.savings_change_pct),
    ]
    for label, cur, prev, pct in rows:
        click.echo(f"  {label:<12} {cur:>14,.2f} {prev:>14,.2f} {_format_change(pct):>10}")


def print_category_shares(title: str, section: ReportSection) -> None:
    _section_header(title)
    if _unavailable(section):
        return
    if not section.data:
        click.echo("  No categorized transactions.")
        return
    for share, color in assign_colors(section.data):
        click.echo(
            f"  {color}  {share.name:<30} {share.total:>12,.2f} {share.percentage:>6.1f}%"
            f"  ({share.count} txn)"
        )


def print_trends(section: ReportSection) -> None:
    _section_header("Monthly trends")
    if _unavailable(section):
        return
    click.echo(
        f"  {'Month':<16} {'Income':>12} {'Expenses':>12} {'Net':>12} {'Saved':>8}"
    )
    for trend in section.data:
        click.echo(
            f"  {trend.month_label:<16} {trend.income:>12,.2f} {trend.expense:>12,.2f} "
            f"{trend.net:>12,.2f} {trend.savings_rate:>7.1f}%"
        )


def print_account_activity(section: ReportSection) -> None:
    _section_header("Account activity")
    if _unavailable(section):
        return
    if not section.data:
        click.echo("  No accounts found.")
        return
    click.echo(
        f"  {'Account':<20} {'Balance':>12} {'In':>12} {'Out':>12} {'Net':>12} {'Txns':>5}"
    )
    for activity in section.data:
        acc = activity.account
        summary = activity.summary
        click.echo(
            f"  {acc.name[:20]:<20} {acc.current_balance:>12,.2f} {summary.inflow:>12,.2f} "
            f"{summary.outflow:>12,.2f} {summary.net_change:>12,.2f} "
            f"{summary.total_transactions:>5d}"
        )


@click.command("report")
@filter_options
@months_option
@click.pass_context
def report(
    ctx,
    preset: str | None,
    start_date: str | None,
    end_date: str | None,
    kind: str | None,
    account: str | None,
    category: str | None,
    search: str | None,
    months: int,
):
    """Show the full report for a filter.

    Sections that cannot be loaded are reported as unavailable while
    the rest of the report is still shown.

    Examples:
        finreport report
        finreport report --preset this-week
        finreport report --start-date 2024-01-01 --end-date 2024-03-31 --months 6
    """
    filter = resolve_cli_filter(
        ctx,
        preset=preset,
        start_date=start_date,
        end_date=end_date,
        kind=kind,
        account=account,
        category=category,
        search=search,
    )
    orchestrator = ReportOrchestrator(AsyncDataService(ctx.obj["db"]), trend_months=months)
    try:
        snapshot = asyncio.run(orchestrator.load(filter))
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    if snapshot.state == LoadState.FAILED:
        click.echo(f"Error: {snapshot.error}", err=True)
        ctx.exit(1)

    click.echo(f"Report ({describe_filter(filter)})")
    print_comparison(snapshot.comparison)
    print_category_shares("Spending by category", snapshot.expense_categories)
    print_category_shares("Income by category", snapshot.income_categories)
    print_trends(snapshot.trends)
    print_account_activity(snapshot.account_activity)

    _section_header("Transactions")
    if not _unavailable(snapshot.transactions):
        if snapshot.transactions.data:
            print_transaction_totals(snapshot.transactions.data)
            print_transaction_table(snapshot.transactions.data)
        else:
            click.echo("  No transactions found.")

    if snapshot.failed_sections:
        logger.info("Report incomplete: %s", ", ".join(snapshot.failed_sections))


@click.command("trends")
@months_option
@click.pass_context
def trends(ctx, months: int):
    """Show income and expenses per month, oldest first."""
    db = ctx.obj["db"]
    try:
        series = db.get_monthly_trends(months)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    if not series:
        click.echo("No transactions found.")
        return

    print_trends(ReportSection(name="trends", status=SectionStatus.READY, data=series))


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report)
    cli.add_command(trends)
