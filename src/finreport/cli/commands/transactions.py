"""Filtered transaction listing command."""

import click

from finreport.cli.filter_options import (
    describe_filter,
    filter_options,
    resolve_cli_filter,
)
from finreport.domain.activity import totals
from finreport.domain.entities import TransactionKind, TransactionWithDetails
from finreport.domain.transaction import TransactionService


def format_transaction_row(txn: TransactionWithDetails) -> str:
    """Format one transaction as a table row."""
    if txn.kind == TransactionKind.TRANSFER:
        account = f"{txn.account_name} -> {txn.destination_account_name or '?'}"
    else:
        account = txn.account_name
    amount = txn.amount if txn.kind != TransactionKind.EXPENSE else -txn.amount
    return (
        f"{txn.id:<6} {txn.date.isoformat():<12} {txn.kind.value.lower():<9} "
        f"{amount:>12,.2f} {account[:28]:<28} {(txn.category_name or '')[:20]:<20} "
        f"{(txn.memo or '')[:30]}"
    )


def print_transaction_totals(transactions: list[TransactionWithDetails]) -> None:
    """Print the count and income/expense totals of a transaction list."""
    listed = totals(transactions)
    click.echo(
        f"{listed.count} transaction(s), income {listed.income:,.2f}, "
        f"expenses {listed.expense:,.2f}, net {listed.net:,.2f}"
    )


def print_transaction_table(transactions: list[TransactionWithDetails]) -> None:
    """Print transactions as a compact table."""
    click.echo("-" * 100)
    click.echo(
        f"{'ID':<6} {'Date':<12} {'Kind':<9} {'Amount':>12} {'Account':<28} "
        f"{'Category':<20} Memo"
    )
    click.echo("-" * 100)
    for txn in transactions:
        click.echo(format_transaction_row(txn))


@click.command("transactions")
@filter_options
@click.pass_context
def list_transactions(
    ctx,
    preset: str | None,
    start_date: str | None,
    end_date: str | None,
    kind: str | None,
    account: str | None,
    category: str | None,
    search: str | None,
):
    """List transactions matching the filter, newest first.

    Examples:
        finreport transactions
        finreport transactions --preset all --kind expense
        finreport transactions --start-date 2024-01-01 --end-date 2024-01-31 --category "Food & Dining"
        finreport transactions --account Checking --search coffee
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
    service = TransactionService(ctx.obj["db"])

    try:
        transactions = service.list_transactions(filter)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    if not transactions:
        click.echo(f"No transactions found ({describe_filter(filter)}).")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s) ({describe_filter(filter)}):")
    print_transaction_totals(transactions)
    print_transaction_table(transactions)


def register_commands(cli):
    """Register transactions command with main CLI."""
    cli.add_command(list_transactions)
