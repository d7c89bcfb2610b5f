"""Conversion of calendar dates and instants into model times."""

from abc import ABC, abstractmethod
from datetime import date, datetime


class TimeMeasurement(ABC):
    """Maps a pair of dates, or a pair of instants, to a time in years."""

    @abstractmethod
    def relative_time(self, start: date | datetime, end: date | datetime) -> float:
        """Time from ``start`` to ``end``; negative if ``end`` is before ``start``."""


class ScaledSecondTime(TimeMeasurement):
    """Elapsed seconds divided by the number of seconds in a 365-day year.

    Between two dates this is the number of days divided by 365, so dates and
    instants are measured consistently. Instants must be timezone-aware.
    """

    SECONDS_PER_YEAR = 365 * 24 * 60 * 60

    def relative_time(self, start: date | datetime, end: date | datetime) -> float:
        start_is_instant = isinstance(start, datetime)
        if start_is_instant != isinstance(end, datetime):
            raise ValueError("Cannot measure time between a date and a datetime")
        if start_is_instant:
            if start.tzinfo is None or end.tzinfo is None:
                raise ValueError("Datetimes must be timezone-aware")
            return (end - start).total_seconds() / self.SECONDS_PER_YEAR
        return (end - start).days / 365.0

    def __repr__(self) -> str:
        return "ScaledSecondTime()"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ScaledSecondTime)

    def __hash__(self) -> int:
        return hash(ScaledSecondTime)


SCALED_SECOND_TIME = ScaledSecondTime()
