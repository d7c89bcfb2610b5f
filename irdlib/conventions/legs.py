"""
Swap leg conventions.
"""

from dataclasses import dataclass

from irdlib.conventions.calendars import Calendar, get_calendar
from irdlib.conventions.daycount import ACT_360, THIRTY_360E, DayCountConvention
from irdlib.conventions.indices import (
    EUR_ESTR,
    EUR_EURIBOR_3M,
    EUR_EURIBOR_6M,
    IborIndex,
    OvernightIndex,
)
from irdlib.conventions.types import (
    BusinessDayAdjustment,
    CalendarType,
    Frequency,
    RollConvention,
    SwapLegType,
)


@dataclass(frozen=True)
class SwapLegConvention:
    """Market conventions of a swap leg.

    Attributes:
        leg_type: FIXED, IBOR or OVERNIGHT
        day_count: Accrual day count
        pay_frequency: Payment frequency
        business_day_adjustment: Adjustment of accrual dates
        roll_convention: Direction of date generation
        calendar: Calendar for accrual dates and payment delay
        pay_delay_days: Business days between accrual end and payment
        index: Index of a floating leg (None for fixed legs)
    """

    leg_type: SwapLegType
    day_count: DayCountConvention
    pay_frequency: Frequency
    business_day_adjustment: BusinessDayAdjustment
    roll_convention: RollConvention
    calendar: CalendarType
    pay_delay_days: int = 0
    index: IborIndex | OvernightIndex | None = None

    def __post_init__(self):
        if self.leg_type == SwapLegType.IBOR and not isinstance(self.index, IborIndex):
            raise ValueError("Ibor leg convention requires an IborIndex")
        if self.leg_type == SwapLegType.OVERNIGHT and not isinstance(
            self.index, OvernightIndex
        ):
            raise ValueError("Overnight leg convention requires an OvernightIndex")

    @property
    def calendar_obj(self) -> Calendar:
        """Get the actual calendar object."""
        return get_calendar(self.calendar.value)


# Predefined leg conventions
EUR_FIXED_1Y = SwapLegConvention(
    leg_type=SwapLegType.FIXED,
    day_count=THIRTY_360E,
    pay_frequency=Frequency.ANNUAL,
    business_day_adjustment=BusinessDayAdjustment.MODIFIED_FOLLOWING,
    roll_convention=RollConvention.BACKWARD_EOM,
    calendar=CalendarType.TARGET,
)

EUR_FIXED_3M = SwapLegConvention(
    leg_type=SwapLegType.FIXED,
    day_count=ACT_360,
    pay_frequency=Frequency.QUARTERLY,
    business_day_adjustment=BusinessDayAdjustment.MODIFIED_FOLLOWING,
    roll_convention=RollConvention.FORWARD,
    calendar=CalendarType.TARGET,
)

EURIBOR_3M_FLOATING = SwapLegConvention(
    leg_type=SwapLegType.IBOR,
    day_count=ACT_360,
    pay_frequency=Frequency.QUARTERLY,
    business_day_adjustment=BusinessDayAdjustment.MODIFIED_FOLLOWING,
    roll_convention=RollConvention.FORWARD,
    calendar=CalendarType.TARGET,
    index=EUR_EURIBOR_3M,
)

EURIBOR_6M_FLOATING = SwapLegConvention(
    leg_type=SwapLegType.IBOR,
    day_count=ACT_360,
    pay_frequency=Frequency.SEMIANNUAL,
    business_day_adjustment=BusinessDayAdjustment.MODIFIED_FOLLOWING,
    roll_convention=RollConvention.FORWARD,
    calendar=CalendarType.TARGET,
    index=EUR_EURIBOR_6M,
)

ESTR_FLOATING = SwapLegConvention(
    leg_type=SwapLegType.OVERNIGHT,
    day_count=ACT_360,
    pay_frequency=Frequency.ANNUAL,
    business_day_adjustment=BusinessDayAdjustment.MODIFIED_FOLLOWING,
    roll_convention=RollConvention.FORWARD,
    calendar=CalendarType.TARGET,
    pay_delay_days=1,
    index=EUR_ESTR,
)
