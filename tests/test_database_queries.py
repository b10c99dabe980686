"""Tests for the report queries of the SQLAlchemy database."""

from datetime import date
from decimal import Decimal

import pytest

from finreport.domain.entities import Filter, TransactionKind
from finreport.domain.errors import ValidationError

JUNE = Filter(start_date=date(2024, 6, 1), end_date=date(2024, 6, 30))


def test_filtered_by_date_newest_first(temp_db, sample_transactions):
    """Test date bounds are inclusive and results are newest first."""
    transactions = temp_db.get_transactions_filtered(JUNE)

    assert [txn.date for txn in transactions] == [
        date(2024, 6, 20),
        date(2024, 6, 14),
        date(2024, 6, 12),
        date(2024, 6, 5),
        date(2024, 6, 1),
    ]


def test_filtered_without_constraints(temp_db, sample_transactions):
    """Test an empty filter returns everything."""
    assert len(temp_db.get_transactions_filtered(Filter())) == 7


def test_filtered_by_kind(temp_db, sample_transactions):
    """Test only transactions of the requested kind are returned."""
    transactions = temp_db.get_transactions_filtered(Filter(kind=TransactionKind.INCOME))

    assert {txn.memo for txn in transactions} == {"June salary", "May salary"}


def test_filtered_by_account_includes_incoming_transfers(
    temp_db, sample_accounts, sample_transactions
):
    """Test the account filter matches both ends of a transfer."""
    savings = sample_accounts["Savings"].id

    transactions = temp_db.get_transactions_filtered(Filter(account_id=savings))

    assert [txn.id for txn in transactions] == [sample_transactions["june_transfer"]]
    assert transactions[0].account_name == "Checking"
    assert transactions[0].destination_account_name == "Savings"


def test_filtered_by_parent_category_includes_children(
    temp_db, sample_categories, sample_transactions
):
    """Test a parent category matches its subcategories."""
    food = sample_categories["Food & Dining"]

    transactions = temp_db.get_transactions_filtered(
        Filter(category_id=food, include_subcategories=True)
    )

    assert {txn.category_name for txn in transactions} == {"Groceries", "Restaurants"}
    assert len(transactions) == 3


def test_filtered_by_exact_category(temp_db, sample_categories, sample_transactions):
    """Test subcategories are excluded unless requested."""
    food = sample_categories["Food & Dining"]

    assert temp_db.get_transactions_filtered(Filter(category_id=food)) == []


def test_filtered_by_memo_search_ignores_case(temp_db, sample_transactions):
    """Test search matches memo text regardless of case."""
    transactions = temp_db.get_transactions_filtered(Filter(search_text="GROCERIES"))

    assert {txn.id for txn in transactions} == {
        sample_transactions["june_groceries"],
        sample_transactions["may_groceries"],
    }


def test_search_matches_displayed_amount(temp_db, sample_transactions):
    """Test amounts are found by their two-decimal display text."""
    transactions = temp_db.get_transactions_filtered(Filter(search_text="50.00"))

    assert [txn.id for txn in transactions] == [sample_transactions["june_dinner"]]


def test_search_matches_amount_with_cents(
    temp_db, transaction_service, sample_accounts
):
    """Test an amount with a trailing zero cent matches with or without it."""
    txn_id = transaction_service.create_transaction(
        date=date(2024, 6, 2),
        kind=TransactionKind.EXPENSE,
        amount=Decimal("12.50"),
        source_account_id=sample_accounts["Checking"].id,
        memo="Lunch",
    )

    for text in ("12.50", "12.5"):
        transactions = temp_db.get_transactions_filtered(Filter(search_text=text))
        assert [txn.id for txn in transactions] == [txn_id]


def test_search_treats_wildcards_literally(temp_db, sample_transactions):
    """Test LIKE wildcards in the search text match only themselves."""
    assert temp_db.get_transactions_filtered(Filter(search_text="%")) == []


def test_filtered_rejects_inverted_range(temp_db):
    """Test an inverted range is rejected."""
    with pytest.raises(ValidationError):
        temp_db.get_transactions_filtered(
            Filter(start_date=date(2024, 6, 30), end_date=date(2024, 6, 1))
        )


def test_category_spending_rolls_up_to_root(temp_db, sample_transactions):
    """Test subcategory spending is reported under its top-level category."""
    rows = temp_db.get_category_spending(
        date(2024, 6, 1), date(2024, 6, 30), TransactionKind.EXPENSE
    )

    assert [(row.name, row.total, row.count) for row in rows] == [
        ("Food & Dining", 350.0, 2),
        ("Transportation", 100.0, 1),
    ]
    assert sum(row.percentage for row in rows) == pytest.approx(100.0)


def test_category_spending_income(temp_db, sample_transactions):
    """Test income is broken down separately from expenses."""
    rows = temp_db.get_category_spending(
        date(2024, 5, 1), date(2024, 6, 30), TransactionKind.INCOME
    )

    assert [(row.name, row.total, row.count, row.percentage) for row in rows] == [
        ("Income", 5500.0, 2, 100.0)
    ]


def test_category_spending_rejects_transfers(temp_db):
    """Test transfers have no category breakdown."""
    with pytest.raises(ValidationError):
        temp_db.get_category_spending(
            date(2024, 6, 1), date(2024, 6, 30), TransactionKind.TRANSFER
        )


def test_income_expense_summary(temp_db, sample_transactions):
    """Test totals exclude transfers from income and expense."""
    summary = temp_db.get_income_expense_summary(date(2024, 6, 1), date(2024, 6, 30))

    assert summary.total_income == 3000.0
    assert summary.total_expense == 450.0
    assert summary.net_savings == 2550.0
    assert summary.transaction_count == 5


def test_income_expense_summary_empty_period(temp_db, sample_transactions):
    """Test a period without transactions sums to zero."""
    summary = temp_db.get_income_expense_summary(date(2020, 1, 1), date(2020, 1, 31))

    assert summary.total_income == 0
    assert summary.total_expense == 0
    assert summary.transaction_count == 0


def test_monthly_trends(temp_db, sample_transactions):
    """Test months are bucketed oldest first."""
    trends = temp_db.get_monthly_trends(12, today=date(2024, 6, 15))

    assert [(t.month, t.month_label) for t in trends] == [
        ("2024-05", "May 2024"),
        ("2024-06", "June 2024"),
    ]
    may, june = trends
    assert (may.income, may.expense, may.net) == (2500.0, 200.0, 2300.0)
    assert (june.income, june.expense, june.net) == (3000.0, 450.0, 2550.0)
    assert june.transaction_count == 5
    assert june.savings_rate == pytest.approx(85.0)


def test_monthly_trends_window(temp_db, sample_transactions):
    """Test the window only reaches back the requested number of months."""
    trends = temp_db.get_monthly_trends(1, today=date(2024, 6, 15))

    assert [t.month for t in trends] == ["2024-06"]


def test_monthly_trends_rejects_empty_window(temp_db):
    """Test at least one month is required."""
    with pytest.raises(ValidationError):
        temp_db.get_monthly_trends(0)


def test_accounts_with_balance(temp_db, sample_transactions):
    """Test balances apply income, expenses and transfers."""
    balances = {acc.name: acc.current_balance for acc in temp_db.get_accounts_with_balance()}

    # 1000 + 5500 - 650 - 500
    assert balances == {"Checking": 5350.0, "Savings": 500.0}


def test_get_descendant_ids(temp_db, sample_categories):
    """Test descendants include the category itself."""
    food = sample_categories["Food & Dining"]

    assert temp_db.get_descendant_ids(food) == {
        food,
        sample_categories["Food & Dining > Groceries"],
        sample_categories["Food & Dining > Restaurants"],
        sample_categories["Food & Dining > Coffee & Snacks"],
    }
