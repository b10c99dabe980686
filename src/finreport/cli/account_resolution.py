"""CLI helpers for account and category resolution."""

from __future__ import annotations

import click

from finreport.cli.error_handling import handle_domain_error
from finreport.domain.account import AccountService
from finreport.domain.category import CategoryService
from finreport.domain.errors import NotFoundError, category_not_found
from finreport.utils.account_resolver import resolve_account


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, account: str | int
) -> int:
    """Resolve account name or ID, or exit with a CLI error."""
    try:
        return resolve_account(account_service, account)
    except ValueError as exc:
        handle_domain_error(ctx, exc)


def resolve_category_or_exit(
    ctx: click.Context, category_service: CategoryService, category: str
) -> int:
    """Resolve category path or ID, or exit with a CLI error."""
    try:
        if category.strip().isdigit():
            category_id = int(category)
            if category_service.get_category(category_id) is None:
                raise NotFoundError(category_not_found(category_id))
            return category_id
        return category_service.require_category_by_path(category).id
    except ValueError as exc:
        handle_domain_error(ctx, exc)
