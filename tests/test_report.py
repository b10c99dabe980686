"""Tests for report orchestration."""

import asyncio
from datetime import date
from decimal import Decimal

import pytest

from finreport.domain.entities import (
    AccountBalance,
    CategorySpending,
    Filter,
    LoadState,
    MonthlyTrend,
    PeriodSummary,
    SectionStatus,
    TransactionKind,
    TransactionWithDetails,
)
from finreport.domain.errors import ValidationError
from finreport.domain.report import ReportOrchestrator
from finreport.service import AsyncDataService

JUNE = Filter(start_date=date(2024, 6, 1), end_date=date(2024, 6, 30))


class FakeDataService:
    """In-memory data service with switchable failures."""

    def __init__(self, fail=()):
        self.fail = set(fail)
        self.transaction_filters = []
        self.trend_months = []

    def _check(self, name):
        if name in self.fail:
            raise ConnectionError(f"{name} unavailable")

    async def get_transactions_filtered(self, filter):
        self._check("get_transactions_filtered")
        self.transaction_filters.append(filter)
        return [
            TransactionWithDetails(
                id=1,
                date=date(2024, 6, 5),
                kind=TransactionKind.EXPENSE,
                amount=Decimal("40.00"),
                source_account_id=1,
                account_name="Checking",
            ),
            TransactionWithDetails(
                id=2,
                date=date(2024, 6, 6),
                kind=TransactionKind.TRANSFER,
                amount=Decimal("10.00"),
                source_account_id=1,
                destination_account_id=2,
                account_name="Checking",
                destination_account_name="Savings",
            ),
        ]

    async def get_category_spending(self, start_date, end_date, kind):
        self._check("get_category_spending")
        if kind == TransactionKind.INCOME:
            return []
        return [
            CategorySpending(category_id=1, name="Food", total=300.0, count=3),
            CategorySpending(category_id=2, name="Transport", total=100.0, count=1),
        ]

    async def get_monthly_trends(self, months):
        self._check("get_monthly_trends")
        self.trend_months.append(months)
        return [MonthlyTrend("2024-06", "June 2024", 1000.0, 400.0, 600.0)]

    async def get_income_expense_summary(self, start_date, end_date):
        self._check("get_income_expense_summary")
        return PeriodSummary(start_date, end_date, 1000.0, 400.0, 600.0, 5)

    async def get_accounts_with_balance(self):
        self._check("get_accounts_with_balance")
        return [
            AccountBalance(id=1, name="Checking", currency="USD", current_balance=950.0),
            AccountBalance(id=2, name="Savings", currency="USD", current_balance=10.0),
        ]


def test_load_builds_every_section():
    """Test a successful load fills every section."""
    orchestrator = ReportOrchestrator(FakeDataService(), trend_months=6)

    snapshot = asyncio.run(orchestrator.load(JUNE))

    assert orchestrator.state == LoadState.READY
    assert orchestrator.snapshot is snapshot
    assert snapshot.generation == 1
    assert snapshot.failed_sections == ()
    assert all(section.ok for section in snapshot.sections)
    assert [s.percentage for s in snapshot.expense_categories.data] == [75.0, 25.0]
    assert snapshot.income_categories.data == []
    assert snapshot.comparison.data.income_change_pct == 0.0


def test_trend_window_is_passed_through():
    """Test the configured trend window reaches the data service."""
    service = FakeDataService()

    asyncio.run(ReportOrchestrator(service, trend_months=3).load(JUNE))

    assert service.trend_months == [3]


def test_trends_failure_leaves_accounts_intact():
    """Test one failing section does not blank the others."""
    orchestrator = ReportOrchestrator(FakeDataService(fail={"get_monthly_trends"}))

    snapshot = asyncio.run(orchestrator.load(JUNE))

    assert snapshot.state == LoadState.READY
    assert snapshot.trends.status == SectionStatus.FAILED
    assert "get_monthly_trends unavailable" in snapshot.trends.error
    assert snapshot.accounts.ok
    assert [acc.name for acc in snapshot.accounts.data] == ["Checking", "Savings"]
    assert snapshot.failed_sections == ("trends",)


def test_account_activity_uses_date_range_only():
    """Test activity is computed from transactions filtered by date alone."""
    service = FakeDataService()
    narrow = Filter(
        start_date=date(2024, 6, 1),
        end_date=date(2024, 6, 30),
        kind=TransactionKind.INCOME,
        search_text="salary",
    )

    snapshot = asyncio.run(ReportOrchestrator(service).load(narrow))

    assert narrow.date_only() in service.transaction_filters
    checking, savings = snapshot.account_activity.data
    assert checking.summary.outflow == Decimal("50.00")
    assert checking.summary.transfer_out_count == 1
    assert savings.summary.inflow == Decimal("10.00")


def test_account_activity_fails_with_accounts():
    """Test activity is unavailable when accounts could not be loaded."""
    snapshot = asyncio.run(
        ReportOrchestrator(FakeDataService(fail={"get_accounts_with_balance"})).load(JUNE)
    )

    assert snapshot.account_activity.status == SectionStatus.FAILED
    assert snapshot.trends.ok


def test_comparison_failure_is_isolated():
    """Test a failing summary fetch only fails the comparison section."""
    snapshot = asyncio.run(
        ReportOrchestrator(FakeDataService(fail={"get_income_expense_summary"})).load(JUNE)
    )

    assert snapshot.comparison.status == SectionStatus.FAILED
    assert snapshot.expense_categories.ok
    assert snapshot.state == LoadState.READY


def test_unbounded_filter_skips_range_sections():
    """Test range-dependent sections are skipped without a full date range."""
    snapshot = asyncio.run(ReportOrchestrator(FakeDataService()).load(Filter()))

    assert snapshot.comparison.status == SectionStatus.SKIPPED
    assert snapshot.expense_categories.status == SectionStatus.SKIPPED
    assert snapshot.income_categories.status == SectionStatus.SKIPPED
    assert snapshot.transactions.ok
    assert snapshot.failed_sections == ()


def test_all_sections_failing_fails_the_snapshot():
    """Test the snapshot fails when nothing could be loaded."""
    service = FakeDataService(
        fail={
            "get_transactions_filtered",
            "get_category_spending",
            "get_monthly_trends",
            "get_income_expense_summary",
            "get_accounts_with_balance",
        }
    )
    orchestrator = ReportOrchestrator(service)

    snapshot = asyncio.run(orchestrator.load(JUNE))

    assert snapshot.state == LoadState.FAILED
    assert orchestrator.state == LoadState.FAILED
    assert snapshot.error == "All report sections failed"


class MalformedAmountDataService(FakeDataService):
    """Data service returning an income row without an amount."""

    async def get_transactions_filtered(self, filter):
        return [
            TransactionWithDetails(
                id=7,
                date=date(2024, 6, 5),
                kind=TransactionKind.INCOME,
                amount=None,
                source_account_id=1,
                account_name="Checking",
            )
        ]


def test_unexpected_assembly_error_fails_the_load():
    """Test an error outside the section fetches ends in FAILED, not LOADING."""
    orchestrator = ReportOrchestrator(MalformedAmountDataService())

    with pytest.raises(TypeError):
        asyncio.run(orchestrator.load(JUNE))

    assert orchestrator.state == LoadState.FAILED
    assert orchestrator.error
    assert orchestrator.snapshot is None


def test_next_load_clears_recorded_error():
    """Test a successful reload replaces the recorded failure."""
    orchestrator = ReportOrchestrator(MalformedAmountDataService())
    with pytest.raises(TypeError):
        asyncio.run(orchestrator.load(JUNE))

    orchestrator.data_service = FakeDataService()
    snapshot = asyncio.run(orchestrator.load(JUNE))

    assert orchestrator.state == LoadState.READY
    assert orchestrator.error is None
    assert orchestrator.snapshot is snapshot


def test_inverted_range_is_rejected_before_loading():
    """Test validation happens before the state changes."""
    orchestrator = ReportOrchestrator(FakeDataService())
    inverted = Filter(start_date=date(2024, 6, 30), end_date=date(2024, 6, 1))

    with pytest.raises(ValidationError):
        orchestrator.begin(inverted)

    assert orchestrator.state == LoadState.IDLE
    assert orchestrator.generation == 0


class GatedDataService(FakeDataService):
    """Data service whose first trend fetch waits for a signal."""

    def __init__(self):
        super().__init__()
        self.release_first = asyncio.Event()
        self.first_started = asyncio.Event()
        self.calls = 0

    async def get_monthly_trends(self, months):
        self.calls += 1
        if self.calls == 1:
            self.first_started.set()
            await self.release_first.wait()
            return [MonthlyTrend("2024-05", "May 2024", 1.0, 1.0, 0.0)]
        return [MonthlyTrend("2024-06", "June 2024", 2.0, 1.0, 1.0)]


def test_stale_load_is_discarded():
    """Test a slow earlier load never replaces a newer snapshot."""

    async def scenario():
        service = GatedDataService()
        orchestrator = ReportOrchestrator(service)

        first = orchestrator.schedule(Filter(start_date=date(2024, 5, 1), end_date=date(2024, 5, 31)))
        assert orchestrator.state == LoadState.LOADING
        await service.first_started.wait()

        second = orchestrator.schedule(JUNE)
        second_snapshot = await second

        service.release_first.set()
        first_snapshot = await first
        return orchestrator, first_snapshot, second_snapshot

    orchestrator, first_snapshot, second_snapshot = asyncio.run(scenario())

    assert first_snapshot is None
    assert second_snapshot.generation == 2
    assert orchestrator.snapshot is second_snapshot
    assert orchestrator.snapshot.filter == JUNE
    assert orchestrator.snapshot.trends.data[0].month == "2024-06"
    assert orchestrator.state == LoadState.READY


def test_async_data_service_against_database(temp_db, sample_transactions):
    """Test the orchestrator end to end on a real database."""
    service = AsyncDataService(temp_db, today=date(2024, 6, 15))

    snapshot = asyncio.run(ReportOrchestrator(service, trend_months=2).load(JUNE))

    assert snapshot.failed_sections == ()
    assert [t.month for t in snapshot.trends.data] == ["2024-05", "2024-06"]
    assert len(snapshot.transactions.data) == 5
    comparison = snapshot.comparison.data
    assert comparison.current_period.total_income == 3000.0
    assert comparison.previous_period.total_income == 2500.0
    assert comparison.income_change_pct == pytest.approx(20.0)
    expense_names = [s.name for s in snapshot.expense_categories.data]
    assert expense_names == ["Food & Dining", "Transportation"]
