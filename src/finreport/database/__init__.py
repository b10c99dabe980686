"""Database layer for finreport application."""

from finreport.database.base import Database
from finreport.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
