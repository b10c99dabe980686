"""Per-account activity aggregation."""

from decimal import Decimal
from typing import Iterable, Sequence

from finreport.domain.entities import (
    AccountActivity,
    AccountBalance,
    ActivitySummary,
    Transaction,
    TransactionKind,
    TransactionTotals,
)
from finreport.domain.errors import DataInvariantViolation, self_transfer


def involves_account(txn: Transaction, account_id: int) -> bool:
    """Check whether a transaction moves money in or out of an account."""
    return (
        txn.source_account_id == account_id
        or txn.destination_account_id == account_id
    )


def summarize(transactions: Iterable[Transaction], account_id: int) -> ActivitySummary:
    """Classify an account's transactions by kind and direction.

    The transactions are expected to belong to the account already; income
    and expense count toward it unconditionally. The reduction is exact and
    order-independent.

    Args:
        transactions: Transactions of the account
        account_id: Account under analysis

    Returns:
        ActivitySummary with per-kind counts and inflow/outflow totals

    Raises:
        DataInvariantViolation: If a transfer has no destination or
            transfers to its own source account
    """
    inflow = outflow = Decimal("0")
    income_count = expense_count = transfer_in_count = transfer_out_count = 0

    for txn in transactions:
        if txn.kind == TransactionKind.INCOME:
            inflow += txn.amount
            income_count += 1
        elif txn.kind == TransactionKind.EXPENSE:
            outflow += txn.amount
            expense_count += 1
        elif txn.kind == TransactionKind.TRANSFER:
            if txn.destination_account_id is None:
                raise DataInvariantViolation(
                    f"Transfer {txn.id} has no destination account"
                )
            if txn.source_account_id == txn.destination_account_id:
                raise DataInvariantViolation(
                    self_transfer(txn.id, txn.source_account_id)
                )
            if txn.source_account_id == account_id:
                outflow += txn.amount
                transfer_out_count += 1
            if txn.destination_account_id == account_id:
                inflow += txn.amount
                transfer_in_count += 1

    return ActivitySummary(
        inflow=inflow,
        outflow=outflow,
        income_count=income_count,
        expense_count=expense_count,
        transfer_in_count=transfer_in_count,
        transfer_out_count=transfer_out_count,
    )


def combine(first: ActivitySummary, second: ActivitySummary) -> ActivitySummary:
    """Add two summaries of disjoint transaction lists."""
    return ActivitySummary(
        inflow=first.inflow + second.inflow,
        outflow=first.outflow + second.outflow,
        income_count=first.income_count + second.income_count,
        expense_count=first.expense_count + second.expense_count,
        transfer_in_count=first.transfer_in_count + second.transfer_in_count,
        transfer_out_count=first.transfer_out_count + second.transfer_out_count,
    )


def summarize_accounts(
    transactions: Sequence[Transaction], accounts: Sequence[AccountBalance]
) -> list[AccountActivity]:
    """Summarize a shared transaction list once per account."""
    return [
        AccountActivity(
            account=account,
            summary=summarize(
                (txn for txn in transactions if involves_account(txn, account.id)),
                account.id,
            ),
        )
        for account in accounts
    ]


def totals(transactions: Iterable[Transaction]) -> TransactionTotals:
    """Count a transaction list and total its income and expenses."""
    count = 0
    income = expense = Decimal("0")
    for txn in transactions:
        count += 1
        if txn.kind == TransactionKind.INCOME:
            income += txn.amount
        elif txn.kind == TransactionKind.EXPENSE:
            expense += txn.amount
    return TransactionTotals(count=count, income=income, expense=expense)
