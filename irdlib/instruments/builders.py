"""Builders for resolved swap legs and swaps from leg conventions.

Every builder generates the schedule with ``build_schedule``, computes the
accrual year fractions with the leg day count and signs the notional with the
leg direction.
"""

from datetime import date

from irdlib.conventions.indices import IborIndex, OvernightIndex
from irdlib.conventions.legs import SwapLegConvention
from irdlib.conventions.types import PayReceive, SwapLegType
from irdlib.schedule import Period, build_schedule

from .rates import (
    FixedRateComputation,
    IborRateComputation,
    OvernightCompoundedRateComputation,
    RateComputation,
)
from .swap import RateAccrualPeriod, RatePaymentPeriod, ResolvedSwap, ResolvedSwapLeg


def leg_schedule(
    effective_date: date, maturity_date: date, convention: SwapLegConvention
) -> list[Period]:
    """Schedule of a leg following its convention."""
    return build_schedule(
        effective_date=effective_date,
        maturity_date=maturity_date,
        frequency=convention.pay_frequency,
        calendar=convention.calendar_obj,
        business_day_adjustment=convention.business_day_adjustment,
        roll_convention=convention.roll_convention,
        pay_delay_days=convention.pay_delay_days,
    )


def ibor_fixing(index: IborIndex, period: Period) -> IborRateComputation:
    """Ibor computation fixing in advance of the period start."""
    return IborRateComputation.of(index, index.calculate_fixing_from_effective(period.start_date))


def build_leg(
    effective_date: date,
    maturity_date: date,
    convention: SwapLegConvention,
    notional: float,
    pay_receive: PayReceive,
    rate_computation,
    currency: str,
    gearing: float = 1.0,
    spread: float = 0.0,
) -> ResolvedSwapLeg:
    """Build a leg with one accrual period per payment period.

    ``rate_computation`` maps each schedule period to its rate computation.
    """
    signed_notional = pay_receive.normalize(notional)
    periods = []
    for period in leg_schedule(effective_date, maturity_date, convention):
        computation: RateComputation = rate_computation(period)
        accrual = RateAccrualPeriod(
            start_date=period.start_date,
            end_date=period.end_date,
            year_fraction=convention.day_count.year_fraction(period.start_date, period.end_date),
            rate_computation=computation,
            gearing=gearing,
            spread=spread,
        )
        periods.append(
            RatePaymentPeriod(
                payment_date=period.payment_date,
                accrual_periods=(accrual,),
                currency=currency,
                notional=signed_notional,
            )
        )
    return ResolvedSwapLeg(pay_receive=pay_receive, payment_periods=tuple(periods))


def fixed_leg(
    effective_date: date,
    maturity_date: date,
    convention: SwapLegConvention,
    notional: float,
    fixed_rate: float,
    pay_receive: PayReceive,
    currency: str = "EUR",
) -> ResolvedSwapLeg:
    if convention.leg_type != SwapLegType.FIXED:
        raise ValueError(f"Fixed leg requires a FIXED convention, got {convention.leg_type}")
    computation = FixedRateComputation(fixed_rate)
    return build_leg(
        effective_date,
        maturity_date,
        convention,
        notional,
        pay_receive,
        lambda period: computation,
        currency,
    )


def ibor_leg(
    effective_date: date,
    maturity_date: date,
    convention: SwapLegConvention,
    notional: float,
    pay_receive: PayReceive,
    spread: float = 0.0,
    gearing: float = 1.0,
) -> ResolvedSwapLeg:
    if convention.leg_type != SwapLegType.IBOR:
        raise ValueError(f"Ibor leg requires an IBOR convention, got {convention.leg_type}")
    index = convention.index
    return build_leg(
        effective_date,
        maturity_date,
        convention,
        notional,
        pay_receive,
        lambda period: ibor_fixing(index, period),
        index.currency,
        gearing=gearing,
        spread=spread,
    )


def overnight_leg(
    effective_date: date,
    maturity_date: date,
    convention: SwapLegConvention,
    notional: float,
    pay_receive: PayReceive,
    spread: float = 0.0,
) -> ResolvedSwapLeg:
    if convention.leg_type != SwapLegType.OVERNIGHT:
        raise ValueError(
            f"Overnight leg requires an OVERNIGHT convention, got {convention.leg_type}"
        )
    index: OvernightIndex = convention.index
    return build_leg(
        effective_date,
        maturity_date,
        convention,
        notional,
        pay_receive,
        lambda period: OvernightCompoundedRateComputation(
            index, period.start_date, period.end_date
        ),
        index.currency,
        spread=spread,
    )


def fixed_ibor_swap(
    effective_date: date,
    maturity_date: date,
    fixed_convention: SwapLegConvention,
    ibor_convention: SwapLegConvention,
    notional: float,
    fixed_rate: float,
    fixed_pay_receive: PayReceive = PayReceive.PAY,
    spread: float = 0.0,
) -> ResolvedSwap:
    """Fixed versus Ibor swap; the Ibor leg has the opposite direction."""
    ibor_direction = (
        PayReceive.RECEIVE if fixed_pay_receive == PayReceive.PAY else PayReceive.PAY
    )
    return ResolvedSwap(
        legs=(
            fixed_leg(
                effective_date,
                maturity_date,
                fixed_convention,
                notional,
                fixed_rate,
                fixed_pay_receive,
                currency=ibor_convention.index.currency,
            ),
            ibor_leg(
                effective_date,
                maturity_date,
                ibor_convention,
                notional,
                ibor_direction,
                spread=spread,
            ),
        )
    )

