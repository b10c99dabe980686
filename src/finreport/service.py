"""Asynchronous data service boundary consumed by the report orchestrator."""

import asyncio
import logging
from datetime import date
from typing import Optional, Protocol

from finreport.database.base import Database
from finreport.domain.entities import (
    AccountBalance,
    CategorySpending,
    Filter,
    MonthlyTrend,
    PeriodSummary,
    TransactionKind,
    TransactionWithDetails,
)

logger = logging.getLogger(__name__)


class DataService(Protocol):
    """Read queries the reporting core depends on."""

    async def get_transactions_filtered(
        self, filter: Filter
    ) -> list[TransactionWithDetails]: ...

    async def get_category_spending(
        self, start_date: date, end_date: date, kind: TransactionKind
    ) -> list[CategorySpending]: ...

    async def get_monthly_trends(self, months: int) -> list[MonthlyTrend]: ...

    async def get_income_expense_summary(
        self, start_date: date, end_date: date
    ) -> PeriodSummary: ...

    async def get_accounts_with_balance(self) -> list[AccountBalance]: ...


class AsyncDataService:
    """DataService backed by a Database, one worker thread per query.

    Queries are blocking SQLAlchemy calls; running them with
    ``asyncio.to_thread`` lets independent reads proceed concurrently.
    """

    def __init__(self, db: Database, today: Optional[date] = None):
        """Initialize data service.

        Args:
            db: Database instance
            today: Reference day for the trend window (defaults to the current day)
        """
        self.db = db
        self.today = today

    async def get_transactions_filtered(
        self, filter: Filter
    ) -> list[TransactionWithDetails]:
        return await asyncio.to_thread(self.db.get_transactions_filtered, filter)

    async def get_category_spending(
        self, start_date: date, end_date: date, kind: TransactionKind
    ) -> list[CategorySpending]:
        return await asyncio.to_thread(
            self.db.get_category_spending, start_date, end_date, kind
        )

    async def get_monthly_trends(self, months: int) -> list[MonthlyTrend]:
        return await asyncio.to_thread(self.db.get_monthly_trends, months, self.today)

    async def get_income_expense_summary(
        self, start_date: date, end_date: date
    ) -> PeriodSummary:
        logger.debug("Fetching summary for %s..%s", start_date, end_date)
        return await asyncio.to_thread(
            self.db.get_income_expense_summary, start_date, end_date
        )

    async def get_accounts_with_balance(self) -> list[AccountBalance]:
        return await asyncio.to_thread(self.db.get_accounts_with_balance)
