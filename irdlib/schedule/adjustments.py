"""
Date adjustment functions for schedule generation.
"""

from datetime import date, datetime, timedelta
from typing import Union

from irdlib.conventions.calendars import Calendar
from irdlib.conventions.types import BusinessDayAdjustment


def adjust_date(
    dt: Union[date, datetime], adjustment: BusinessDayAdjustment, calendar: Calendar
) -> date:
    """Apply business day adjustment to a date."""
    if isinstance(dt, datetime):
        dt = dt.date()

    if adjustment == BusinessDayAdjustment.NO_ADJUSTMENT:
        return dt

    if adjustment == BusinessDayAdjustment.FOLLOWING:
        return _roll(dt, calendar, 1)

    if adjustment == BusinessDayAdjustment.PRECEDING:
        return _roll(dt, calendar, -1)

    if adjustment == BusinessDayAdjustment.MODIFIED_FOLLOWING:
        adjusted = _roll(dt, calendar, 1)
        # Month changed, go back instead
        if adjusted.month != dt.month:
            adjusted = _roll(dt, calendar, -1)
        return adjusted

    if adjustment == BusinessDayAdjustment.MODIFIED_PRECEDING:
        adjusted = _roll(dt, calendar, -1)
        if adjusted.month != dt.month:
            adjusted = _roll(dt, calendar, 1)
        return adjusted

    raise ValueError(f"Unknown business day adjustment: {adjustment}")


def _roll(dt: date, calendar: Calendar, step: int) -> date:
    while not calendar.is_business_day(dt):
        dt += timedelta(days=step)
    return dt


def get_month_end(year: int, month: int) -> date:
    """Get the last calendar day of a given month."""
    if month == 12:
        next_month = date(year + 1, 1, 1)
    else:
        next_month = date(year, month + 1, 1)

    return next_month - timedelta(days=1)


def is_end_of_month(dt: Union[date, datetime]) -> bool:
    """Check if date is end of month."""
    if isinstance(dt, datetime):
        dt = dt.date()
    return dt == get_month_end(dt.year, dt.month)


def apply_end_of_month_rule(
    dt: Union[date, datetime], months_to_add: int, apply_eom_rule: bool = True
) -> date:
    """Add months to a date, keeping month ends on month ends when requested."""
    if isinstance(dt, datetime):
        dt = dt.date()

    is_eom_start = apply_eom_rule and is_end_of_month(dt)

    month_index = dt.year * 12 + (dt.month - 1) + months_to_add
    new_year, new_month = divmod(month_index, 12)
    new_month += 1

    if is_eom_start:
        return get_month_end(new_year, new_month)

    try:
        return date(new_year, new_month, dt.day)
    except ValueError:
        # Day doesn't exist in target month (e.g. Jan 31 -> Feb 31)
        return get_month_end(new_year, new_month)


def add_tenor_months(
    start_date: Union[date, datetime],
    tenor_months: int,
    calendar: Calendar,
    business_day_adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
    end_of_month_rule: bool = True,
) -> date:
    """Add a tenor in months and adjust the result to a business day."""
    unadjusted = apply_end_of_month_rule(start_date, tenor_months, end_of_month_rule)
    return adjust_date(unadjusted, business_day_adjustment, calendar)
