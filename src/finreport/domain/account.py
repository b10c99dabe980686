"""Account domain service."""

from decimal import Decimal
from typing import Optional

from finreport.database.base import Database
from finreport.domain.entities import Account as AccountEntity, AccountBalance
from finreport.domain.errors import (
    ConflictError,
    ValidationError,
    duplicate_account_name,
)


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self, name: str, currency: str = "USD", initial_balance: Decimal = Decimal("0")
    ) -> int:
        """Create a new account.

        Args:
            name: Account name
            currency: ISO currency code
            initial_balance: Balance before the first recorded transaction

        Returns:
            Account ID

        Raises:
            ValidationError: If the name is blank or the currency code is malformed
            ConflictError: If account name already exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Account name cannot be empty")
        currency = currency.strip().upper()
        if len(currency) != 3 or not currency.isalpha():
            raise ValidationError(f"Invalid currency code '{currency}'")

        for acc in self.db.list_accounts():
            if acc.name == name:
                raise ConflictError(duplicate_account_name(name))

        return self.db.create_account(
            name=name, currency=currency, initial_balance=initial_balance
        )

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts."""
        return self.db.list_accounts()

    def list_accounts_with_balance(self) -> list[AccountBalance]:
        """List all accounts with their current balance."""
        return self.db.get_accounts_with_balance()
