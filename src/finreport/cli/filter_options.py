"""CLI helpers turning filter options into a canonical Filter."""

from datetime import date
from typing import Callable, Optional

import click

from finreport.cli.account_resolution import (
    resolve_account_or_exit,
    resolve_category_or_exit,
)
from finreport.cli.error_handling import handle_domain_error
from finreport.domain.account import AccountService
from finreport.domain.category import CategoryService
from finreport.domain.entities import DatePreset, Filter, FilterSelection
from finreport.domain.errors import ValidationError
from finreport.domain.filters import build_filter
from finreport.utils.date_parser import parse_date

PRESET_CHOICES = [preset.value for preset in DatePreset]


def filter_options(command: Callable) -> Callable:
    """Add the shared transaction filter options to a command."""
    options = [
        click.option(
            "--preset",
            type=click.Choice(PRESET_CHOICES, case_sensitive=False),
            help="Date range preset (default: this-month, or custom when dates are given)",
        ),
        click.option("--start-date", help="Start date (YYYY-MM-DD or 'today', 'yesterday')"),
        click.option("--end-date", help="End date (YYYY-MM-DD or 'today', 'yesterday')"),
        click.option(
            "--kind",
            type=click.Choice(["income", "expense", "transfer"], case_sensitive=False),
            help="Transaction kind",
        ),
        click.option("--account", help="Account name or ID"),
        click.option("--category", help="Category path or ID (includes subcategories)"),
        click.option("--search", help="Text to find in the memo or amount"),
    ]
    for option in reversed(options):
        command = option(command)
    return command


def _to_iso(ctx: click.Context, label: str, value: Optional[str], today: date) -> str:
    if not value:
        return ""
    try:
        return parse_date(value, today=today).isoformat()
    except ValueError as e:
        click.echo(f"Error: Invalid {label} date: {e}", err=True)
        ctx.exit(1)


def resolve_cli_filter(
    ctx: click.Context,
    *,
    preset: Optional[str],
    start_date: Optional[str],
    end_date: Optional[str],
    kind: Optional[str],
    account: Optional[str],
    category: Optional[str],
    search: Optional[str],
    today: Optional[date] = None,
) -> Filter:
    """Resolve CLI filter options into a Filter, or exit with an error."""
    if today is None:
        today = date.today()

    has_dates = bool(start_date or end_date)
    if preset is None:
        chosen = DatePreset.CUSTOM if has_dates else DatePreset.THIS_MONTH
    else:
        chosen = DatePreset(preset.lower())
        if has_dates and chosen != DatePreset.CUSTOM:
            click.echo(
                "Error: --preset cannot be combined with --start-date or --end-date "
                "unless it is 'custom'.",
                err=True,
            )
            ctx.exit(1)

    db = ctx.obj["db"]
    account_id = ""
    if account:
        account_id = str(resolve_account_or_exit(ctx, AccountService(db), account))
    category_id = ""
    if category:
        category_id = str(resolve_category_or_exit(ctx, CategoryService(db), category))

    selection = FilterSelection(
        preset=chosen,
        custom_start=_to_iso(ctx, "start", start_date, today),
        custom_end=_to_iso(ctx, "end", end_date, today),
        kind=kind or "",
        account_id=account_id,
        category_id=category_id,
        search_text=search or "",
    )
    try:
        return build_filter(selection, reference_now=today)
    except ValidationError as e:
        handle_domain_error(ctx, e)


def describe_filter(filter: Filter) -> str:
    """Describe the constraints of a filter on one line."""
    parts = []
    if filter.start_date or filter.end_date:
        start = filter.start_date.isoformat() if filter.start_date else "..."
        end = filter.end_date.isoformat() if filter.end_date else "..."
        parts.append(f"{start} to {end}")
    else:
        parts.append("all dates")
    if filter.kind is not None:
        parts.append(filter.kind.value.lower())
    if filter.account_id is not None:
        parts.append(f"account {filter.account_id}")
    if filter.category_id is not None:
        parts.append(f"category {filter.category_id}")
    if filter.search_text:
        parts.append(f"matching '{filter.search_text}'")
    return ", ".join(parts)
