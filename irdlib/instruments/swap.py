"""Resolved swap products.

A resolved swap is a list of legs; each leg is a list of payment periods made
of accrual periods with an explicit rate computation. Notionals are signed:
negative on paid legs, positive on received legs.
"""

from dataclasses import dataclass
from datetime import date

from irdlib.conventions.types import PayReceive, SwapLegType

from .rates import RateComputation


@dataclass(frozen=True)
class NotionalExchange:
    """A known amount paid on a date.

    Attributes:
        currency: Currency code of the payment
        amount: Signed payment amount
        payment_date: Payment date
    """

    currency: str
    amount: float
    payment_date: date


@dataclass(frozen=True)
class RateAccrualPeriod:
    """Accrual period with its rate computation.

    The accrued rate is ``gearing * rate + spread``.
    """

    start_date: date
    end_date: date
    year_fraction: float
    rate_computation: RateComputation
    gearing: float = 1.0
    spread: float = 0.0

    def __post_init__(self):
        if self.start_date >= self.end_date:
            raise ValueError(
                f"Accrual start {self.start_date} must be before end {self.end_date}"
            )


@dataclass(frozen=True)
class RatePaymentPeriod:
    """Payment period, paying the interest of its accrual periods on one date."""

    payment_date: date
    accrual_periods: tuple[RateAccrualPeriod, ...]
    currency: str
    notional: float

    def __post_init__(self):
        if not self.accrual_periods:
            raise ValueError("Payment period requires at least one accrual period")

    @property
    def start_date(self) -> date:
        return self.accrual_periods[0].start_date

    @property
    def end_date(self) -> date:
        return self.accrual_periods[-1].end_date

    @property
    def year_fraction(self) -> float:
        return sum(accrual.year_fraction for accrual in self.accrual_periods)


@dataclass(frozen=True)
class ResolvedSwapLeg:
    """One leg of a resolved swap.

    The leg type is derived from the rate computations, which must all belong
    to the same leg type.
    """

    pay_receive: PayReceive
    payment_periods: tuple[RatePaymentPeriod, ...]
    payment_events: tuple[NotionalExchange, ...] = ()

    def __post_init__(self):
        if not self.payment_periods:
            raise ValueError("Swap leg requires at least one payment period")
        leg_types = {
            accrual.rate_computation.leg_type
            for period in self.payment_periods
            for accrual in period.accrual_periods
        }
        if len(leg_types) != 1:
            raise ValueError(f"Swap leg mixes rate computation types: {sorted(t.value for t in leg_types)}")
        currencies = {period.currency for period in self.payment_periods}
        if len(currencies) != 1:
            raise ValueError(f"Swap leg mixes currencies: {sorted(currencies)}")

    @property
    def type(self) -> SwapLegType:
        return self.payment_periods[0].accrual_periods[0].rate_computation.leg_type

    @property
    def currency(self) -> str:
        return self.payment_periods[0].currency

    @property
    def start_date(self) -> date:
        return self.payment_periods[0].start_date

    @property
    def end_date(self) -> date:
        return self.payment_periods[-1].end_date


@dataclass(frozen=True)
class ResolvedSwap:
    """Swap made of one or more legs."""

    legs: tuple[ResolvedSwapLeg, ...]

    def __post_init__(self):
        if not self.legs:
            raise ValueError("Swap requires at least one leg")

    def legs_of_type(self, leg_type: SwapLegType) -> list[ResolvedSwapLeg]:
        return [leg for leg in self.legs if leg.type == leg_type]

    @property
    def currencies(self) -> set[str]:
        return {leg.currency for leg in self.legs}
