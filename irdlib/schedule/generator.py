"""Schedule generation for swap legs.

This module produces the accrual periods of a leg from its effective date,
maturity date and convention, applying business day adjustments and payment
delays.
"""

from dataclasses import dataclass
from datetime import date

from irdlib.conventions.calendars import Calendar
from irdlib.conventions.types import (
    BusinessDayAdjustment,
    Frequency,
    RollConvention,
)
from irdlib.schedule.adjustments import (
    adjust_date,
    apply_end_of_month_rule,
    is_end_of_month,
)


@dataclass(frozen=True)
class Period:
    """Represents a single payment period in a leg schedule.

    Attributes:
        period_index: Sequential period number (1-based)
        unadjusted_start: Unadjusted accrual start date
        unadjusted_end: Unadjusted accrual end date
        start_date: Business day adjusted accrual start
        end_date: Business day adjusted accrual end
        payment_date: Payment date (adjusted, including any pay delay)
    """

    period_index: int
    unadjusted_start: date
    unadjusted_end: date
    start_date: date
    end_date: date
    payment_date: date


def build_schedule(
    effective_date: date,
    maturity_date: date,
    frequency: Frequency,
    calendar: Calendar,
    business_day_adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
    roll_convention: RollConvention = RollConvention.BACKWARD_EOM,
    pay_delay_days: int = 0,
) -> list[Period]:
    """Build the payment schedule of a leg.

    With ``BACKWARD_EOM`` the unadjusted dates are rolled back from the maturity
    date, so any stub sits at the front; with ``FORWARD`` they are rolled from
    the effective date and any stub sits at the back.

    Args:
        effective_date: Leg start date (unadjusted)
        maturity_date: Leg end date (unadjusted)
        frequency: Payment frequency
        calendar: Calendar for business day adjustments and pay delays
        business_day_adjustment: Adjustment applied to every accrual date
        roll_convention: Direction of date generation
        pay_delay_days: Business days between accrual end and payment

    Returns:
        List of Period objects, earliest first

    Raises:
        ValueError: If the effective date is not before the maturity date

    Examples:
        >>> periods = build_schedule(
        ...     date(2025, 8, 12), date(2027, 8, 12), Frequency.QUARTERLY, TARGET
        ... )
        >>> len(periods)
        8
    """
    if effective_date >= maturity_date:
        raise ValueError(
            f"Effective date {effective_date} must be before maturity date {maturity_date}"
        )

    unadjusted = _unadjusted_dates(
        effective_date, maturity_date, frequency.months(), roll_convention
    )

    periods: list[Period] = []
    for start_unadj, end_unadj in zip(unadjusted[:-1], unadjusted[1:], strict=True):
        start_adj = adjust_date(start_unadj, business_day_adjustment, calendar)
        end_adj = adjust_date(end_unadj, business_day_adjustment, calendar)
        if start_adj >= end_adj:
            continue

        payment_date = end_adj
        if pay_delay_days > 0:
            payment_date = calendar.add_business_days(end_adj, pay_delay_days)

        periods.append(
            Period(
                period_index=len(periods) + 1,
                unadjusted_start=start_unadj,
                unadjusted_end=end_unadj,
                start_date=start_adj,
                end_date=end_adj,
                payment_date=payment_date,
            )
        )

    return periods


def _unadjusted_dates(
    effective_date: date,
    maturity_date: date,
    period_months: int,
    roll_convention: RollConvention,
) -> list[date]:
    if roll_convention == RollConvention.BACKWARD_EOM:
        dates = [maturity_date]
        step = 1
        while True:
            candidate = apply_end_of_month_rule(
                maturity_date, -step * period_months, apply_eom_rule=True
            )
            if candidate <= effective_date:
                break
            dates.append(candidate)
            step += 1
        dates.append(effective_date)
        dates.reverse()
        return dates

    preserve_eom = is_end_of_month(effective_date)
    dates = [effective_date]
    step = 1
    while True:
        candidate = apply_end_of_month_rule(
            effective_date, step * period_months, apply_eom_rule=preserve_eom
        )
        if candidate >= maturity_date:
            break
        dates.append(candidate)
        step += 1
    dates.append(maturity_date)
    return dates
