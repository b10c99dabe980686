"""Amount parsing utilities."""

import re
from decimal import Decimal, InvalidOperation

CENTS = Decimal("0.01")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal rounded to cents.

    Handles "123.45", "$123.45", "1,234.56" and "Rs 1,234.56". Signs are
    kept so callers can reject negative input with their own message.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = re.sub(r"^(rs\.?|[$€£¥₹])\s*", "", amount_str.strip(), flags=re.IGNORECASE)
    cleaned = cleaned.replace(",", "").strip()

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str.strip()}'")
    if not amount.is_finite():
        raise ValueError(f"Amount must be a finite number, got '{amount_str.strip()}'")
    return amount.quantize(CENTS)
