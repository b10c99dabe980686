"""Period arithmetic for date presets and period-over-period comparison."""

import calendar
from datetime import date, timedelta
from typing import Optional

from finreport.domain.entities import DatePreset, Period
from finreport.domain.errors import ValidationError, inverted_date_range

ONE_DAY = timedelta(days=1)


def week_bounds(reference: date) -> Period:
    """Return Monday..Sunday of the week containing ``reference``."""
    monday = reference - timedelta(days=reference.weekday())
    return Period(start=monday, end=monday + timedelta(days=6))


def month_bounds(reference: date) -> Period:
    """Return the first..last calendar day of the month of ``reference``."""
    last_day = calendar.monthrange(reference.year, reference.month)[1]
    return Period(
        start=reference.replace(day=1),
        end=reference.replace(day=last_day),
    )


def validate_range(start: Optional[date], end: Optional[date]) -> None:
    """Reject a range whose start falls after its end.

    Raises:
        ValidationError: If both bounds are set and inverted
    """
    if start is not None and end is not None and start > end:
        raise ValidationError(inverted_date_range(start, end))


def resolve_preset(
    preset: DatePreset,
    reference_now: date,
    custom_start: Optional[date] = None,
    custom_end: Optional[date] = None,
) -> Period:
    """Resolve a date preset into a concrete period.

    Args:
        preset: Preset chosen by the user
        reference_now: Day the preset is relative to
        custom_start: Start for the CUSTOM preset, may be unset
        custom_end: End for the CUSTOM preset, may be unset

    Returns:
        Period; both bounds are open for ALL, and either may be open for CUSTOM

    Raises:
        ValidationError: If a CUSTOM range is inverted
    """
    if preset == DatePreset.TODAY:
        return Period(start=reference_now, end=reference_now)
    if preset == DatePreset.THIS_WEEK:
        return week_bounds(reference_now)
    if preset == DatePreset.THIS_MONTH:
        return month_bounds(reference_now)
    if preset == DatePreset.CUSTOM:
        validate_range(custom_start, custom_end)
        return Period(start=custom_start, end=custom_end)
    return Period()


def previous_period(start: date, end: date) -> Period:
    """Return the period of equal length ending the day before ``start``.

    Raises:
        ValidationError: If ``start`` is after ``end``
    """
    validate_range(start, end)
    duration = end - start
    previous_end = start - ONE_DAY
    return Period(start=previous_end - duration, end=previous_end)
