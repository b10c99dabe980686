"""Mapper functions to convert SQLAlchemy models into domain entities.

This layer isolates the conversion logic, so report code never sees ORM
objects or their lazy-loading sessions.
"""

from decimal import Decimal

from finreport.domain import entities as domain
from finreport.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    Transaction as ORMTransaction,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        currency=orm_account.currency,
        initial_balance=Decimal(orm_account.initial_balance),
        created_at=orm_account.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        parent_id=orm_category.parent_id,
        kind=domain.TransactionKind(orm_category.kind),
        created_at=orm_category.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        kind=domain.TransactionKind(orm_transaction.kind),
        amount=Decimal(orm_transaction.amount),
        source_account_id=orm_transaction.account_id,
        destination_account_id=orm_transaction.to_account_id,
        category_id=orm_transaction.category_id,
        memo=orm_transaction.memo,
        attachment_ref=orm_transaction.attachment_ref,
        created_at=orm_transaction.created_at,
    )


def transaction_to_details(
    orm_transaction: ORMTransaction,
) -> domain.TransactionWithDetails:
    """Convert a Transaction model with its related rows to a detailed entity."""
    to_account = orm_transaction.to_account
    category = orm_transaction.category
    return domain.TransactionWithDetails(
        id=orm_transaction.id,
        date=orm_transaction.date,
        kind=domain.TransactionKind(orm_transaction.kind),
        amount=Decimal(orm_transaction.amount),
        source_account_id=orm_transaction.account_id,
        destination_account_id=orm_transaction.to_account_id,
        category_id=orm_transaction.category_id,
        memo=orm_transaction.memo,
        attachment_ref=orm_transaction.attachment_ref,
        created_at=orm_transaction.created_at,
        account_name=orm_transaction.account.name,
        destination_account_name=to_account.name if to_account is not None else None,
        category_name=category.name if category is not None else None,
    )
