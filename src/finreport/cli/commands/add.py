"""Add transaction command."""

import click

from finreport.cli.account_resolution import (
    resolve_account_or_exit,
    resolve_category_or_exit,
)
from finreport.domain.account import AccountService
from finreport.domain.category import CategoryService
from finreport.domain.entities import TransactionKind
from finreport.domain.transaction import TransactionService
from finreport.utils.amount_parser import parse_amount
from finreport.utils.date_parser import parse_date


@click.command("add")
@click.option(
    "--kind",
    type=click.Choice(["income", "expense", "transfer"], case_sensitive=False),
    required=True,
    help="Transaction kind",
)
@click.option("--account", required=True, help="Account name or ID (source of a transfer)")
@click.option("--to-account", help="Destination account name or ID (transfers only)")
@click.option(
    "--date",
    required=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--amount", required=True, help="Transaction amount (e.g., 123.45)")
@click.option("--category", help="Category path or ID (e.g., 'Food & Dining > Groceries')")
@click.option("--memo", help="Memo")
@click.option("--attachment", help="Reference to an attached receipt")
@click.pass_context
def add_transaction(
    ctx,
    kind: str,
    account: str,
    to_account: str | None,
    date: str,
    amount: str,
    category: str | None,
    memo: str | None,
    attachment: str | None,
):
    """Add a transaction manually.

    Examples:
        finreport add --kind expense --account Checking --date today --amount 42.50 --category "Food & Dining > Groceries"
        finreport add --kind income --account 1 --date 2024-01-15 --amount 3000 --category "Income > Salary"
        finreport add --kind transfer --account Checking --to-account Savings --date 2024-01-20 --amount 500
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)
    account_service = AccountService(db)
    category_service = CategoryService(db)

    account_id = resolve_account_or_exit(ctx, account_service, account)
    to_account_id = None
    if to_account:
        to_account_id = resolve_account_or_exit(ctx, account_service, to_account)

    try:
        txn_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    category_id = None
    if category:
        category_id = resolve_category_or_exit(ctx, category_service, category)

    try:
        transaction_id = transaction_service.create_transaction(
            date=txn_date,
            kind=TransactionKind(kind.upper()),
            amount=txn_amount,
            source_account_id=account_id,
            destination_account_id=to_account_id,
            category_id=category_id,
            memo=memo,
            attachment_ref=attachment,
        )
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Kind: {kind.lower()}")
    click.echo(f"  Account: {account_service.get_account(account_id).name}")
    if to_account_id is not None:
        click.echo(f"  To account: {account_service.get_account(to_account_id).name}")
    click.echo(f"  Date: {txn_date}")
    click.echo(f"  Amount: {txn_amount:,.2f}")
    if category_id is not None:
        click.echo(f"  Category: {category_service.format_category_path(category_id)}")
    if memo:
        click.echo(f"  Memo: {memo}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
