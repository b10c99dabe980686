"""Shared domain error messages and error types."""

from datetime import date


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input, rejected before any data service call."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class FetchError(DomainError):
    """A data service call failed or timed out."""


class DataInvariantViolation(DomainError):
    """Data that breaks a reporting invariant; a defect to report."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def category_path_not_found(path: str) -> str:
    """Return message for missing category by path."""
    return f"Category '{path}' not found"


def duplicate_account_name(name: str) -> str:
    """Return message for an account name that is already taken."""
    return f"Account with name '{name}' already exists"


def inverted_date_range(start: date, end: date) -> str:
    """Return message for a range whose start falls after its end."""
    return f"Start date {start.isoformat()} is after end date {end.isoformat()}"


def invalid_id(field_name: str, value: str) -> str:
    """Return message for an id control holding non-numeric text."""
    return f"Invalid {field_name} '{value}': expected a whole number"


def self_transfer(transaction_id: int, account_id: int) -> str:
    """Return message for a transfer whose source and destination match."""
    return (
        f"Transaction {transaction_id} transfers from account {account_id} "
        "to itself"
    )
