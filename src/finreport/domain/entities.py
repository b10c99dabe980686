"""Domain model entities for finreport.

These are pure data classes representing reporting concepts, independent of
the database schema. Every report value is derived and read-only: it is
recomputed on each filter or period change and never written back.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


class TransactionKind(str, Enum):
    """Kind of a transaction."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"
    TRANSFER = "TRANSFER"


class DatePreset(str, Enum):
    """Named date range choices offered by the filter controls."""

    ALL = "all"
    TODAY = "today"
    THIS_WEEK = "this-week"
    THIS_MONTH = "this-month"
    CUSTOM = "custom"


class LoadState(str, Enum):
    """Report loading state machine: IDLE -> LOADING -> READY | FAILED."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class SectionStatus(str, Enum):
    """Outcome of a single report section."""

    READY = "ready"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class Account:
    """Account domain entity."""

    id: int
    name: str
    currency: str
    initial_balance: Decimal
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class AccountBalance:
    """Account with its balance derived from all of its transactions."""

    id: int
    name: str
    currency: str
    current_balance: float


@dataclass(frozen=True)
class Category:
    """Category domain entity with hierarchical structure."""

    id: int
    name: str
    parent_id: Optional[int]
    kind: TransactionKind = TransactionKind.EXPENSE
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class FlatCategory:
    """Category positioned in a depth-first listing of the category forest."""

    category: Category
    depth: int


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    Amounts are never negative; direction follows from ``kind`` and from
    which account field matches the account being analysed.
    """

    id: int
    date: date
    kind: TransactionKind
    amount: Decimal
    source_account_id: int
    destination_account_id: Optional[int] = None
    category_id: Optional[int] = None
    memo: Optional[str] = None
    attachment_ref: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class TransactionWithDetails(Transaction):
    """Transaction with resolved account and category display names."""

    account_name: str = ""
    destination_account_name: Optional[str] = None
    category_name: Optional[str] = None


@dataclass(frozen=True)
class FilterSelection:
    """Current values of every filter control, as entered by the user.

    Ids and custom dates arrive as text, exactly as the controls hold them;
    an empty string means the control is unset.
    """

    preset: DatePreset = DatePreset.THIS_MONTH
    custom_start: str = ""
    custom_end: str = ""
    kind: str = ""
    account_id: str = ""
    category_id: str = ""
    search_text: str = ""


@dataclass(frozen=True)
class Filter:
    """Canonical transaction query. An all-empty filter means no constraint."""

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    kind: Optional[TransactionKind] = None
    account_id: Optional[int] = None
    category_id: Optional[int] = None
    include_subcategories: bool = False
    search_text: Optional[str] = None

    @property
    def is_bounded(self) -> bool:
        """Whether both ends of the date range are set."""
        return self.start_date is not None and self.end_date is not None

    def date_only(self) -> "Filter":
        """Return a filter keeping only the date range."""
        return Filter(start_date=self.start_date, end_date=self.end_date)


@dataclass(frozen=True)
class Period:
    """Closed date range; either bound may be open."""

    start: Optional[date] = None
    end: Optional[date] = None

    @property
    def days(self) -> int:
        """Number of calendar days covered, both bounds included."""
        if self.start is None or self.end is None:
            raise ValueError("Open period has no length")
        return (self.end - self.start).days + 1


@dataclass(frozen=True)
class PeriodSummary:
    """Income and expense totals over one date range."""

    start_date: date
    end_date: date
    total_income: float
    total_expense: float
    net_savings: float
    transaction_count: int


@dataclass(frozen=True)
class Comparison:
    """Current versus previous period percentage deltas."""

    current_period: PeriodSummary
    previous_period: PeriodSummary
    income_change_pct: float
    expense_change_pct: float
    savings_change_pct: float


@dataclass(frozen=True)
class CategorySpending:
    """Per-category totals as returned by the data service."""

    category_id: int
    name: str
    total: float
    count: int
    percentage: float = 0.0


@dataclass(frozen=True)
class CategoryShare:
    """A category's total and its share of the period total."""

    category_id: int
    name: str
    total: float
    count: int
    percentage: float


@dataclass(frozen=True)
class ActivitySummary:
    """Money in and out of one account over one period."""

    inflow: Decimal = Decimal("0")
    outflow: Decimal = Decimal("0")
    income_count: int = 0
    expense_count: int = 0
    transfer_in_count: int = 0
    transfer_out_count: int = 0

    @property
    def net_change(self) -> Decimal:
        return self.inflow - self.outflow

    @property
    def total_transactions(self) -> int:
        return (
            self.income_count
            + self.expense_count
            + self.transfer_in_count
            + self.transfer_out_count
        )


@dataclass(frozen=True)
class TransactionTotals:
    """Count and income/expense totals of one transaction list.

    Transfers are counted but move no money in or out of the list.
    """

    count: int = 0
    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")

    @property
    def net(self) -> Decimal:
        return self.income - self.expense


@dataclass(frozen=True)
class AccountActivity:
    """Activity summary attached to the account it describes."""

    account: AccountBalance
    summary: ActivitySummary


@dataclass(frozen=True)
class MonthlyTrend:
    """Income and expense totals for one calendar month."""

    month: str
    month_label: str
    income: float
    expense: float
    net: float
    transaction_count: int = 0

    @property
    def savings_rate(self) -> float:
        """Share of income kept, in percent. Zero when there was no income."""
        if self.income <= 0:
            return 0.0
        return (self.income - self.expense) / self.income * 100


@dataclass(frozen=True)
class ReportSection:
    """One independently fetched part of a report."""

    name: str
    status: SectionStatus
    data: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == SectionStatus.READY


@dataclass(frozen=True)
class ReportSnapshot:
    """Complete report for one filter, replaced as a whole on reload."""

    filter: Filter
    generation: int
    state: LoadState
    trends: ReportSection
    transactions: ReportSection
    accounts: ReportSection
    comparison: ReportSection
    expense_categories: ReportSection
    income_categories: ReportSection
    account_activity: ReportSection
    error: Optional[str] = None

    @property
    def sections(self) -> tuple[ReportSection, ...]:
        return (
            self.trends,
            self.transactions,
            self.accounts,
            self.comparison,
            self.expense_categories,
            self.income_categories,
            self.account_activity,
        )

    @property
    def failed_sections(self) -> tuple[str, ...]:
        return tuple(
            section.name
            for section in self.sections
            if section.status == SectionStatus.FAILED
        )
