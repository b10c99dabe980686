"""Utility for resolving account names to IDs."""

from finreport.domain.account import AccountService
from finreport.domain.errors import NotFoundError, account_not_found


def resolve_account(account_service: AccountService, account: str | int) -> int:
    """Resolve account name or ID to account ID.

    Args:
        account_service: AccountService instance
        account: Account name (str) or ID (int or string representation of int)

    Returns:
        Account ID

    Raises:
        NotFoundError: If account is not found
    """
    if isinstance(account, str) and account.strip().isdigit():
        account = int(account)

    if isinstance(account, int):
        if account_service.get_account(account) is None:
            raise NotFoundError(account_not_found(account))
        return account

    for acc in account_service.list_accounts():
        if acc.name == account:
            return acc.id

    raise NotFoundError(f"Account '{account}' not found")
