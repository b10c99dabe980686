"""Account management commands."""

import click

from finreport.domain.account import AccountService
from finreport.utils.amount_parser import parse_amount


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--currency", default="USD", show_default=True, help="ISO currency code")
@click.option(
    "--initial-balance",
    default="0",
    help="Balance before the first recorded transaction (e.g., 1500.00)",
)
@click.pass_context
def create_account(ctx, name: str, currency: str, initial_balance: str):
    """Create a new account.

    Examples:
        finreport account create "Checking"
        finreport account create "Savings" --initial-balance 2500
        finreport account create "Travel Card" --currency EUR
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    try:
        balance = parse_amount(initial_balance)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        account_id = service.create_account(
            name=name, currency=currency, initial_balance=balance
        )
        click.echo(f"Created account '{name.strip()}' (ID: {account_id})")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts with their current balance."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts_with_balance()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        click.echo(
            f"ID: {acc.id:3d} | {acc.name:20s} | {acc.currency} {acc.current_balance:>12,.2f}"
        )


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
