"""Filter model: turns raw control values into one canonical query."""

from datetime import date
from typing import Optional

from finreport.domain.entities import (
    DatePreset,
    Filter,
    FilterSelection,
    TransactionKind,
)
from finreport.domain.errors import ValidationError, invalid_id
from finreport.domain.period import resolve_preset
from finreport.utils.date_parser import parse_iso_date


def parse_kind(value: str) -> Optional[TransactionKind]:
    """Parse a transaction kind control value; blank means any kind."""
    text = value.strip()
    if not text:
        return None
    try:
        return TransactionKind(text.upper())
    except ValueError:
        choices = ", ".join(kind.value for kind in TransactionKind)
        raise ValidationError(
            f"Invalid transaction kind '{text}': expected one of {choices}"
        )


def parse_id(field_name: str, value: str) -> Optional[int]:
    """Parse an id control value; blank means unset."""
    text = value.strip()
    if not text:
        return None
    # Plain ASCII digits only; int() would also take signs and underscores
    if not (text.isascii() and text.isdecimal()):
        raise ValidationError(invalid_id(field_name, text))
    return int(text)


def _parse_custom_date(label: str, value: str) -> Optional[date]:
    if not value.strip():
        return None
    try:
        return parse_iso_date(value)
    except ValueError as e:
        raise ValidationError(f"Invalid {label} date: {e}")


def build_filter(
    selection: FilterSelection, reference_now: Optional[date] = None
) -> Filter:
    """Build a canonical filter from the current control values.

    Pure function of its input: the same selection and reference day always
    give an equal filter. Callers rebuild the filter on every control change.

    Args:
        selection: Current control values
        reference_now: Day presets are relative to (defaults to today)

    Returns:
        Filter with only the constrained fields set

    Raises:
        ValidationError: On an inverted custom range, an unparsable date,
            a non-numeric id or an unknown transaction kind
    """
    if reference_now is None:
        reference_now = date.today()

    custom_start = None
    custom_end = None
    if selection.preset == DatePreset.CUSTOM:
        custom_start = _parse_custom_date("start", selection.custom_start)
        custom_end = _parse_custom_date("end", selection.custom_end)

    period = resolve_preset(
        selection.preset,
        reference_now,
        custom_start=custom_start,
        custom_end=custom_end,
    )

    category_id = parse_id("category id", selection.category_id)
    search_text = selection.search_text.strip() or None

    return Filter(
        start_date=period.start,
        end_date=period.end,
        kind=parse_kind(selection.kind),
        account_id=parse_id("account id", selection.account_id),
        category_id=category_id,
        # A parent category always pulls in its children's transactions
        include_subcategories=category_id is not None,
        search_text=search_text,
    )
