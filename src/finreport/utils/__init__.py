"""Utility functions for finreport."""

from finreport.utils.date_parser import parse_date, parse_iso_date
from finreport.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_iso_date", "parse_amount"]
