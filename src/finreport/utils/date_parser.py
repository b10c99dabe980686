"""Date parsing utilities."""

from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser


def parse_iso_date(date_str: str) -> date:
    """Parse a boundary date in strict ``YYYY-MM-DD`` form.

    Args:
        date_str: Date text

    Returns:
        Date object

    Raises:
        ValueError: If the text is not an ISO calendar date
    """
    text = date_str.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise ValueError(f"Could not parse date '{text}': expected YYYY-MM-DD")


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a user-entered date.

    Supports:
    - Relative dates: "today", "yesterday", "tomorrow"
    - Absolute dates: "2024-01-15", "January 15, 2024", "15 Jan 2024", etc.

    Args:
        date_str: Date string in various formats
        today: Reference day for relative dates (defaults to the current day)

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    if today is None:
        today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
