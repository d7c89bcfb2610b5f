"""Physically settled European swaption."""

from dataclasses import dataclass
from datetime import datetime

from irdlib.conventions.types import LongShort

from .swap import ResolvedSwap


@dataclass(frozen=True)
class ResolvedSwaption:
    """Option to enter the underlying swap at expiry.

    Attributes:
        expiry: Exercise instant (timezone-aware)
        underlying: Swap entered on exercise
        long_short: Position in the option
    """

    expiry: datetime
    underlying: ResolvedSwap
    long_short: LongShort = LongShort.LONG

    def __post_init__(self):
        if self.expiry.tzinfo is None:
            raise ValueError("Swaption expiry must be timezone-aware")
        if self.expiry.date() > self.underlying.legs[0].start_date:
            raise ValueError(
                f"Swaption expiry {self.expiry.date()} is after the swap start "
                f"{self.underlying.legs[0].start_date}"
            )

    @property
    def currency(self) -> str:
        return self.underlying.legs[0].currency
