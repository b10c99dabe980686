"""Report orchestration: concurrent section fetches into one snapshot."""

import asyncio
import logging
from typing import Any, Awaitable, Optional

from finreport.domain.activity import summarize_accounts
from finreport.domain.categories import check_share_invariant, normalize_spending
from finreport.domain.comparison import compare
from finreport.domain.entities import (
    CategoryShare,
    Filter,
    LoadState,
    ReportSection,
    ReportSnapshot,
    SectionStatus,
    TransactionKind,
)
from finreport.domain.errors import DataInvariantViolation
from finreport.domain.period import validate_range
from finreport.service import DataService

logger = logging.getLogger(__name__)

DEFAULT_TREND_MONTHS = 12


class ReportOrchestrator:
    """Coordinates the data fetches behind one report view.

    Only one load is authoritative at a time. Every call to ``begin`` starts
    a new generation; a snapshot computed for an older generation is
    discarded when it arrives instead of replacing the displayed one.
    """

    def __init__(self, data_service: DataService, trend_months: int = DEFAULT_TREND_MONTHS):
        """Initialize report orchestrator.

        Args:
            data_service: Source of the report datasets
            trend_months: Number of months in the trend series
        """
        self.data_service = data_service
        self.trend_months = trend_months
        self.state = LoadState.IDLE
        self.snapshot: Optional[ReportSnapshot] = None
        self.error: Optional[str] = None
        self._generation = 0

    @property
    def generation(self) -> int:
        """Generation of the most recently requested load."""
        return self._generation

    def begin(self, filter: Filter) -> int:
        """Start a new load generation and enter the LOADING state.

        Any error recorded by an earlier generation is cleared.

        Raises:
            ValidationError: If the filter's date range is inverted; nothing
                is fetched and the state is left unchanged
        """
        validate_range(filter.start_date, filter.end_date)
        self._generation += 1
        self.state = LoadState.LOADING
        self.error = None
        return self._generation

    async def load(self, filter: Filter) -> Optional[ReportSnapshot]:
        """Load the report for a filter.

        Returns:
            The new snapshot, or None if a newer load superseded this one
        """
        token = self.begin(filter)
        return await self._run(token, filter)

    def schedule(self, filter: Filter) -> "asyncio.Task[Optional[ReportSnapshot]]":
        """Start a load in the background from a filter change.

        The state switches to LOADING before this returns.
        """
        token = self.begin(filter)
        return asyncio.get_running_loop().create_task(self._run(token, filter))

    async def _run(self, token: int, filter: Filter) -> Optional[ReportSnapshot]:
        try:
            snapshot = await self.build_snapshot(filter, token)
        except Exception as e:
            if token == self._generation:
                logger.error("Report generation %d failed: %s", token, e)
                self.state = LoadState.FAILED
                self.error = str(e) or type(e).__name__
            raise
        if token != self._generation:
            logger.debug(
                "Discarding report generation %d, generation %d is current",
                token,
                self._generation,
            )
            return None
        self.snapshot = snapshot
        self.state = snapshot.state
        self.error = snapshot.error
        return snapshot

    async def build_snapshot(self, filter: Filter, generation: int = 0) -> ReportSnapshot:
        """Fetch every section concurrently and assemble a snapshot."""
        requests: dict[str, Optional[Awaitable[Any]]] = {
            "trends": self.data_service.get_monthly_trends(self.trend_months),
            "transactions": self.data_service.get_transactions_filtered(filter),
            "accounts": self.data_service.get_accounts_with_balance(),
            "activity_transactions": self.data_service.get_transactions_filtered(
                filter.date_only()
            ),
            "comparison": None,
            "expense_categories": None,
            "income_categories": None,
        }
        if filter.is_bounded:
            requests["comparison"] = compare(
                filter.start_date,
                filter.end_date,
                self.data_service.get_income_expense_summary,
            )
            requests["expense_categories"] = self._category_shares(
                filter, TransactionKind.EXPENSE
            )
            requests["income_categories"] = self._category_shares(
                filter, TransactionKind.INCOME
            )

        pending = {name: request for name, request in requests.items() if request is not None}
        results = await asyncio.gather(*pending.values(), return_exceptions=True)

        sections: dict[str, ReportSection] = {}
        for name in requests:
            if name not in pending:
                sections[name] = ReportSection(
                    name=name,
                    status=SectionStatus.SKIPPED,
                    error="A complete date range is required",
                )
        for name, result in zip(pending, results):
            sections[name] = self._to_section(name, result)

        sections["account_activity"] = self._activity_section(
            sections["accounts"], sections.pop("activity_transactions")
        )

        fetched = [s for s in sections.values() if s.status != SectionStatus.SKIPPED]
        failed = all(s.status == SectionStatus.FAILED for s in fetched)

        return ReportSnapshot(
            filter=filter,
            generation=generation,
            state=LoadState.FAILED if failed else LoadState.READY,
            error="All report sections failed" if failed else None,
            **sections,
        )

    async def _category_shares(
        self, filter: Filter, kind: TransactionKind
    ) -> list[CategoryShare]:
        rows = await self.data_service.get_category_spending(
            filter.start_date, filter.end_date, kind
        )
        shares = normalize_spending(rows)
        check_share_invariant(shares)
        return shares

    def _to_section(self, name: str, result: Any) -> ReportSection:
        if isinstance(result, BaseException):
            if isinstance(result, DataInvariantViolation):
                logger.error("Report section %s has invalid data: %s", name, result)
            else:
                logger.warning("Report section %s failed: %s", name, result)
            return ReportSection(
                name=name, status=SectionStatus.FAILED, error=str(result) or type(result).__name__
            )
        return ReportSection(name=name, status=SectionStatus.READY, data=result)

    def _activity_section(
        self, accounts: ReportSection, transactions: ReportSection
    ) -> ReportSection:
        name = "account_activity"
        for dependency in (accounts, transactions):
            if not dependency.ok:
                return ReportSection(
                    name=name,
                    status=SectionStatus.FAILED,
                    error=f"Depends on unavailable data: {dependency.error}",
                )
        try:
            activity = summarize_accounts(transactions.data, accounts.data)
        except DataInvariantViolation as e:
            logger.error("Account activity has invalid data: %s", e)
            return ReportSection(name=name, status=SectionStatus.FAILED, error=str(e))
        return ReportSection(name=name, status=SectionStatus.READY, data=activity)
