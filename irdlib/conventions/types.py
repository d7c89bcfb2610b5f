"""
Basic types and enums used across conventions, schedules and products.
"""

from enum import Enum


class Frequency(Enum):
    """Payment frequencies."""

    ANNUAL = 12
    SEMIANNUAL = 6
    QUARTERLY = 3
    MONTHLY = 1

    def months(self) -> int:
        return self.value


class BusinessDayAdjustment(Enum):
    """Business day adjustment rules."""

    NO_ADJUSTMENT = "NO_ADJUSTMENT"
    FOLLOWING = "FOLLOWING"
    MODIFIED_FOLLOWING = "MODIFIED_FOLLOWING"
    PRECEDING = "PRECEDING"
    MODIFIED_PRECEDING = "MODIFIED_PRECEDING"


class RollConvention(Enum):
    """Direction in which unadjusted schedule dates are generated."""

    FORWARD = "FORWARD"
    BACKWARD_EOM = "BACKWARD_EOM"


class CalendarType(Enum):
    """Predefined calendars."""

    TARGET = "TARGET"
    WEEKEND = "WEEKEND"
    UK = "UK"


class PayReceive(Enum):
    """Direction of a swap leg, as seen by the holder."""

    PAY = "PAY"
    RECEIVE = "RECEIVE"

    def normalize(self, amount: float) -> float:
        """Return the amount with the sign of the direction."""
        return -abs(amount) if self is PayReceive.PAY else abs(amount)


class LongShort(Enum):
    """Position in an option."""

    LONG = 1
    SHORT = -1

    def sign(self) -> int:
        return self.value


class SwapLegType(Enum):
    """Leg type, derived from the rate computation of its accrual periods."""

    FIXED = "FIXED"
    IBOR = "IBOR"
    OVERNIGHT = "OVERNIGHT"
    OTHER = "OTHER"
