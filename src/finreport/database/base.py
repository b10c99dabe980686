"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from finreport.domain.entities import (
    Account,
    AccountBalance,
    Category,
    CategorySpending,
    Filter,
    MonthlyTrend,
    PeriodSummary,
    Transaction,
    TransactionKind,
    TransactionWithDetails,
)


class Database(ABC):
    """Abstract database interface for finreport."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self, name: str, currency: str, initial_balance: Decimal = Decimal("0")
    ) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts."""
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self,
        name: str,
        parent_id: Optional[int] = None,
        kind: TransactionKind = TransactionKind.EXPENSE,
    ) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_path(self, path: str) -> Optional[Category]:
        """Get category by path (e.g., 'Food & Dining > Groceries')."""
        pass

    @abstractmethod
    def list_categories(self, parent_id: Optional[int] = None) -> list[Category]:
        """List categories, optionally filtered by parent."""
        pass

    @abstractmethod
    def get_descendant_ids(self, category_id: int) -> set[int]:
        """Get the IDs of a category and all of its descendants."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        date: date,
        kind: TransactionKind,
        amount: Decimal,
        source_account_id: int,
        destination_account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        memo: Optional[str] = None,
        attachment_ref: Optional[str] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    # Report queries
    @abstractmethod
    def get_transactions_filtered(
        self, filter: Optional[Filter] = None
    ) -> list[TransactionWithDetails]:
        """List transactions matching a filter, newest first.

        The account constraint matches either side of a transfer. The search
        text matches the memo (case-insensitive) or the amount's text.
        """
        pass

    @abstractmethod
    def get_category_spending(
        self, start_date: date, end_date: date, kind: TransactionKind
    ) -> list[CategorySpending]:
        """Get per top-level category totals for INCOME or EXPENSE."""
        pass

    @abstractmethod
    def get_monthly_trends(
        self, months: int, today: Optional[date] = None
    ) -> list[MonthlyTrend]:
        """Get monthly income and expense totals, oldest month first."""
        pass

    @abstractmethod
    def get_income_expense_summary(
        self, start_date: date, end_date: date
    ) -> PeriodSummary:
        """Get income and expense totals over a date range."""
        pass

    @abstractmethod
    def get_accounts_with_balance(self) -> list[AccountBalance]:
        """List accounts with their current balance."""
        pass
