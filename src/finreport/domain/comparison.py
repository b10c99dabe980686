"""Period-over-period comparison."""

import asyncio
import logging
from datetime import date
from typing import Awaitable, Callable

from finreport.domain.entities import Comparison, PeriodSummary
from finreport.domain.errors import FetchError
from finreport.domain.period import previous_period

logger = logging.getLogger(__name__)

SummaryFetcher = Callable[[date, date], Awaitable[PeriodSummary]]


def percent_change(current: float, previous: float) -> float:
    """Percentage change of a non-negative total; 0 when previous is 0."""
    if previous == 0:
        return 0.0
    return (current - previous) / previous * 100


def savings_change(current: float, previous: float) -> float:
    """Percentage change of net savings.

    Net savings can be negative, so the change is taken relative to the
    magnitude of the previous value to keep the sign meaningful.
    """
    if previous == 0:
        return 0.0
    return (current - previous) / abs(previous) * 100


async def compare(
    current_start: date, current_end: date, fetch_summary: SummaryFetcher
) -> Comparison:
    """Compare a period with the equally long period right before it.

    Args:
        current_start: First day of the current period
        current_end: Last day of the current period
        fetch_summary: Coroutine function returning a PeriodSummary for a range

    Returns:
        Comparison of income, expense and net savings

    Raises:
        ValidationError: If the current range is inverted
        FetchError: If either summary could not be fetched
    """
    previous = previous_period(current_start, current_end)

    try:
        current_summary, previous_summary = await asyncio.gather(
            fetch_summary(current_start, current_end),
            fetch_summary(previous.start, previous.end),
        )
    except FetchError:
        raise
    except Exception as e:
        logger.warning("Summary fetch failed for comparison: %s", e)
        raise FetchError(f"Failed to fetch period summaries: {e}") from e

    return Comparison(
        current_period=current_summary,
        previous_period=previous_summary,
        income_change_pct=percent_change(
            current_summary.total_income, previous_summary.total_income
        ),
        expense_change_pct=percent_change(
            current_summary.total_expense, previous_summary.total_expense
        ),
        savings_change_pct=savings_change(
            current_summary.net_savings, previous_summary.net_savings
        ),
    )
