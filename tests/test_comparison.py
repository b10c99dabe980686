"""Tests for period-over-period comparison."""

import asyncio
from datetime import date

import pytest

from finreport.domain.comparison import compare, percent_change, savings_change
from finreport.domain.entities import PeriodSummary
from finreport.domain.errors import FetchError, ValidationError


def summary(start, end, income, expense):
    return PeriodSummary(
        start_date=start,
        end_date=end,
        total_income=income,
        total_expense=expense,
        net_savings=income - expense,
        transaction_count=0,
    )


def fetcher(totals):
    """Return a summary fetcher serving totals keyed by start date."""
    calls = []

    async def fetch(start, end):
        calls.append((start, end))
        income, expense = totals[start]
        return summary(start, end, income, expense)

    fetch.calls = calls
    return fetch


def test_compare_requests_previous_period():
    """Test the previous period is the equally long range before."""
    fetch = fetcher({date(2024, 6, 1): (2000.0, 500.0), date(2024, 5, 2): (1000.0, 1000.0)})

    result = asyncio.run(compare(date(2024, 6, 1), date(2024, 6, 30), fetch))

    assert sorted(fetch.calls) == [
        (date(2024, 5, 2), date(2024, 5, 31)),
        (date(2024, 6, 1), date(2024, 6, 30)),
    ]
    assert result.previous_period.start_date == date(2024, 5, 2)
    assert result.income_change_pct == 100.0
    assert result.expense_change_pct == -50.0


def test_compare_zero_previous_income():
    """Test no change is reported when there was no previous income."""
    fetch = fetcher({date(2024, 6, 1): (1000.0, 0.0), date(2024, 5, 2): (0.0, 0.0)})

    result = asyncio.run(compare(date(2024, 6, 1), date(2024, 6, 30), fetch))

    assert result.income_change_pct == 0
    assert result.expense_change_pct == 0
    assert result.savings_change_pct == 0


def test_compare_negative_previous_savings():
    """Test savings change keeps its sign when previous savings were negative."""
    fetch = fetcher({date(2024, 6, 1): (1000.0, 900.0), date(2024, 5, 2): (1000.0, 1200.0)})

    result = asyncio.run(compare(date(2024, 6, 1), date(2024, 6, 30), fetch))

    # From -200 to +100 is an improvement
    assert result.savings_change_pct == 150.0


def test_compare_rejects_inverted_range():
    """Test an inverted range fails before fetching."""
    fetch = fetcher({})

    with pytest.raises(ValidationError):
        asyncio.run(compare(date(2024, 6, 30), date(2024, 6, 1), fetch))
    assert fetch.calls == []


def test_compare_wraps_fetch_failure():
    """Test a failing fetch surfaces as FetchError."""

    async def broken(start, end):
        raise ConnectionError("database is locked")

    with pytest.raises(FetchError, match="database is locked"):
        asyncio.run(compare(date(2024, 6, 1), date(2024, 6, 30), broken))


def test_percent_change_helpers():
    """Test the percentage helpers."""
    assert percent_change(150.0, 100.0) == 50.0
    assert percent_change(5.0, 0.0) == 0.0
    assert savings_change(-50.0, -100.0) == 50.0
    assert savings_change(10.0, 0.0) == 0.0
