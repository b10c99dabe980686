"""Transaction domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional

from finreport.database.base import Database
from finreport.domain.entities import (
    Filter,
    Transaction as TransactionEntity,
    TransactionKind,
    TransactionWithDetails,
)
from finreport.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    category_not_found,
)


class TransactionService:
    """Service for recording and listing transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

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
        """Create a transaction.

        Args:
            date: Transaction date
            kind: INCOME, EXPENSE or TRANSFER
            amount: Non-negative amount
            source_account_id: Account the transaction belongs to (or
                transfers from)
            destination_account_id: Account receiving a transfer
            category_id: Optional category ID
            memo: Optional memo
            attachment_ref: Optional reference to an attached receipt

        Returns:
            Transaction ID

        Raises:
            ValidationError: If the amount is negative or the accounts do not
                fit the transaction kind
            NotFoundError: If an account or the category doesn't exist
        """
        if amount < 0:
            raise ValidationError(
                f"Amount must not be negative, got {amount}; use the kind for direction"
            )

        if kind == TransactionKind.TRANSFER:
            if destination_account_id is None:
                raise ValidationError("A transfer needs a destination account")
            if destination_account_id == source_account_id:
                raise ValidationError("A transfer cannot move money to the same account")
            if category_id is not None:
                raise ValidationError("Transfers are not categorized")
        elif destination_account_id is not None:
            raise ValidationError(
                f"Only transfers have a destination account, not {kind.value}"
            )

        for account_id in (source_account_id, destination_account_id):
            if account_id is not None and self.db.get_account(account_id) is None:
                raise NotFoundError(account_not_found(account_id))

        if category_id is not None:
            category = self.db.get_category(category_id)
            if category is None:
                raise NotFoundError(category_not_found(category_id))
            if category.kind != kind:
                raise ValidationError(
                    f"Category '{category.name}' is for {category.kind.value}, not {kind.value}"
                )

        return self.db.create_transaction(
            date=date,
            kind=kind,
            amount=amount,
            source_account_id=source_account_id,
            destination_account_id=destination_account_id,
            category_id=category_id,
            memo=memo.strip() if memo else None,
            attachment_ref=attachment_ref,
        )

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID."""
        return self.db.get_transaction(transaction_id)

    def list_transactions(self, filter: Optional[Filter] = None) -> list[TransactionWithDetails]:
        """List transactions matching a filter, newest first."""
        return self.db.get_transactions_filtered(filter or Filter())
