"""Shared pytest fixtures for finreport tests."""

import os
import tempfile
from datetime import date
from decimal import Decimal

import pytest

from finreport.database.factories import create_sqlite_database
from finreport.domain.account import AccountService
from finreport.domain.category import CategoryService
from finreport.domain.entities import TransactionKind
from finreport.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def sample_accounts(account_service):
    """Create a checking and a savings account."""
    checking_id = account_service.create_account(
        name="Checking", initial_balance=Decimal("1000.00")
    )
    savings_id = account_service.create_account(name="Savings")
    return {
        "Checking": account_service.get_account(checking_id),
        "Savings": account_service.get_account(savings_id),
    }


@pytest.fixture
def sample_categories(category_service):
    """Initialize the default categories and return their IDs by path."""
    from finreport.cli.commands.init_categories import INITIAL_CATEGORIES

    category_ids = {}

    # Create root categories first
    for category_name, parent_name, kind in INITIAL_CATEGORIES:
        if parent_name is None:
            category_ids[category_name] = category_service.create_category(
                name=category_name, kind=kind
            )

    # Create child categories
    for category_name, parent_name, _ in INITIAL_CATEGORIES:
        if parent_name is not None:
            category_ids[f"{parent_name} > {category_name}"] = (
                category_service.create_category(name=category_name, parent_path=parent_name)
            )

    return category_ids


@pytest.fixture
def sample_transactions(transaction_service, sample_accounts, sample_categories):
    """Record a small ledger across May and June 2024.

    June 2024: salary 3000, groceries 300, gas 100, restaurants 50,
    transfer 500 from checking to savings.
    May 2024: salary 2500 (on the 3rd), groceries 200.
    """
    checking = sample_accounts["Checking"].id
    savings = sample_accounts["Savings"].id

    def add(day, kind, amount, category=None, memo=None, source=checking, dest=None):
        return transaction_service.create_transaction(
            date=day,
            kind=kind,
            amount=Decimal(amount),
            source_account_id=source,
            destination_account_id=dest,
            category_id=sample_categories[category] if category else None,
            memo=memo,
        )

    return {
        "june_salary": add(date(2024, 6, 1), TransactionKind.INCOME, "3000.00", "Income > Salary", "June salary"),
        "june_groceries": add(date(2024, 6, 5), TransactionKind.EXPENSE, "300.00", "Food & Dining > Groceries", "Weekly groceries"),
        "june_gas": add(date(2024, 6, 12), TransactionKind.EXPENSE, "100.00", "Transportation > Gas", "Fuel"),
        "june_dinner": add(date(2024, 6, 14), TransactionKind.EXPENSE, "50.00", "Food & Dining > Restaurants", "Dinner with Sam"),
        "june_transfer": add(date(2024, 6, 20), TransactionKind.TRANSFER, "500.00", memo="Monthly savings", dest=savings),
        "may_salary": add(date(2024, 5, 3), TransactionKind.INCOME, "2500.00", "Income > Salary", "May salary"),
        "may_groceries": add(date(2024, 5, 6), TransactionKind.EXPENSE, "200.00", "Food & Dining > Groceries", "Groceries"),
    }


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
