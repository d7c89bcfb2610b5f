"""
Interest rate indices and their fixing observations.
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from zoneinfo import ZoneInfo

from irdlib.conventions.calendars import TARGET, Calendar
from irdlib.conventions.daycount import ACT_360, DayCountConvention
from irdlib.conventions.types import BusinessDayAdjustment
from irdlib.schedule.adjustments import add_tenor_months


@dataclass(frozen=True)
class IborIndex:
    """Term rate index fixed in advance (e.g. EURIBOR 3M).

    Attributes:
        name: Index name, used to look up its projection curve
        currency: Currency code of the index
        tenor_months: Index tenor in months
        day_count: Accrual day count of the index
        fixing_calendar: Calendar for fixing and effective dates
        fixing_lag_days: Business days between fixing and effective date
        business_day_adjustment: Adjustment of the maturity date
        fixing_time: Local time of the fixing
        fixing_zone: Time zone name of the fixing
    """

    name: str
    currency: str
    tenor_months: int
    day_count: DayCountConvention
    fixing_calendar: Calendar
    fixing_lag_days: int = 2
    business_day_adjustment: BusinessDayAdjustment = (
        BusinessDayAdjustment.MODIFIED_FOLLOWING
    )
    fixing_time: time = time(11, 0)
    fixing_zone: str = "Europe/Brussels"

    def calculate_effective_from_fixing(self, fixing_date: date) -> date:
        return self.fixing_calendar.add_business_days(fixing_date, self.fixing_lag_days)

    def calculate_fixing_from_effective(self, effective_date: date) -> date:
        return self.fixing_calendar.add_business_days(
            effective_date, -self.fixing_lag_days
        )

    def calculate_maturity_from_effective(self, effective_date: date) -> date:
        return add_tenor_months(
            effective_date,
            self.tenor_months,
            self.fixing_calendar,
            self.business_day_adjustment,
        )

    def calculate_fixing_datetime(self, fixing_date: date) -> datetime:
        """Fixing instant as a timezone-aware datetime."""
        return datetime.combine(fixing_date, self.fixing_time, ZoneInfo(self.fixing_zone))

    def observation(self, fixing_date: date) -> "IborIndexObservation":
        """Build the observation of this index fixed on ``fixing_date``."""
        effective = self.calculate_effective_from_fixing(fixing_date)
        maturity = self.calculate_maturity_from_effective(effective)
        return IborIndexObservation(
            index=self,
            fixing_date=fixing_date,
            effective_date=effective,
            maturity_date=maturity,
            year_fraction=self.day_count.year_fraction(effective, maturity),
        )

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class IborIndexObservation:
    """A single fixing of an Ibor index and the deposit period it covers."""

    index: IborIndex
    fixing_date: date
    effective_date: date
    maturity_date: date
    year_fraction: float

    @property
    def currency(self) -> str:
        return self.index.currency


@dataclass(frozen=True)
class OvernightIndex:
    """Overnight rate index (e.g. ESTR)."""

    name: str
    currency: str
    day_count: DayCountConvention
    fixing_calendar: Calendar

    def __str__(self) -> str:
        return self.name


# Predefined indices
EUR_EURIBOR_3M = IborIndex(
    name="EUR-EURIBOR-3M",
    currency="EUR",
    tenor_months=3,
    day_count=ACT_360,
    fixing_calendar=TARGET,
)

EUR_EURIBOR_6M = IborIndex(
    name="EUR-EURIBOR-6M",
    currency="EUR",
    tenor_months=6,
    day_count=ACT_360,
    fixing_calendar=TARGET,
)

EUR_ESTR = OvernightIndex(
    name="EUR-ESTR",
    currency="EUR",
    day_count=ACT_360,
    fixing_calendar=TARGET,
)

IBOR_INDICES = {index.name: index for index in (EUR_EURIBOR_3M, EUR_EURIBOR_6M)}
OVERNIGHT_INDICES = {EUR_ESTR.name: EUR_ESTR}


def get_ibor_index(name: str) -> IborIndex:
    """Get an Ibor index by name."""
    name_upper = name.upper()
    if name_upper not in IBOR_INDICES:
        raise ValueError(
            f"Unknown Ibor index: {name}. Available: {list(IBOR_INDICES.keys())}"
        )
    return IBOR_INDICES[name_upper]


def get_overnight_index(name: str) -> OvernightIndex:
    """Get an overnight index by name."""
    name_upper = name.upper()
    if name_upper not in OVERNIGHT_INDICES:
        raise ValueError(
            f"Unknown overnight index: {name}. "
            f"Available: {list(OVERNIGHT_INDICES.keys())}"
        )
    return OVERNIGHT_INDICES[name_upper]
