"""
Holiday calendars backed by QuantLib.
"""

from datetime import date, datetime
from typing import Union

import QuantLib as ql

from irdlib.conventions.daycount import to_ql_date


def _to_py_date(ql_date: ql.Date) -> date:
    return date(ql_date.year(), ql_date.month(), ql_date.dayOfMonth())


class Calendar:
    """Business day calendar delegating to a QuantLib calendar."""

    def __init__(self, name: str, ql_calendar: ql.Calendar):
        self.name = name
        self._ql_calendar = ql_calendar

    def is_business_day(self, dt: Union[date, datetime]) -> bool:
        """Check if date is a business day (not weekend or holiday)."""
        return self._ql_calendar.isBusinessDay(to_ql_date(dt))

    def is_holiday(self, dt: Union[date, datetime]) -> bool:
        return self._ql_calendar.isHoliday(to_ql_date(dt))

    def add_business_days(self, start_date: Union[date, datetime], days: int) -> date:
        """Move by a signed number of business days."""
        ql_result = self._ql_calendar.advance(to_ql_date(start_date), days, ql.Days)
        return _to_py_date(ql_result)

    def next_or_same(self, dt: Union[date, datetime]) -> date:
        """First business day on or after the date."""
        ql_result = self._ql_calendar.adjust(to_ql_date(dt), ql.Following)
        return _to_py_date(ql_result)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Calendar({self.name!r})"


# Pre-defined calendar instances
TARGET = Calendar("TARGET", ql.TARGET())
WEEKEND_ONLY = Calendar("WEEKEND", ql.WeekendsOnly())
UK = Calendar("UK", ql.UnitedKingdom())

# Calendar registry
CALENDARS = {
    "TARGET": TARGET,
    "EUTA": TARGET,
    "EUR": TARGET,
    "WEEKEND": WEEKEND_ONLY,
    "UK": UK,
    "GBLO": UK,
}


def get_calendar(name: str) -> Calendar:
    """Get a calendar by name."""
    name_upper = name.upper()
    if name_upper not in CALENDARS:
        raise ValueError(
            f"Unknown calendar: {name}. Available: {list(CALENDARS.keys())}"
        )
    return CALENDARS[name_upper]
