"""Decision schedules: products decomposed into multi-curve equivalents.

A swap is decomposed leg by leg. Fixed coupons and the spread part of
floating coupons become known amounts; Ibor and overnight coupons become a
fixing with the amount paid on it. Options and coupons add their decision
time and, for CMS coupons, the coupon itself as the last known amount.
"""

import logging
from functools import singledispatch

from irdlib.conventions.types import SwapLegType
from irdlib.instruments.cms import CmsPeriod, CmsSpreadPeriod
from irdlib.instruments.rates import (
    FixedRateComputation,
    IborRateComputation,
    IborRatchetRateComputation,
    OvernightCompoundedRateComputation,
)
from irdlib.instruments.swap import NotionalExchange, RatePaymentPeriod, ResolvedSwap, ResolvedSwapLeg
from irdlib.instruments.swaption import ResolvedSwaption

from .multicurve import MulticurveEquivalent, MulticurveEquivalentSchedule

logger = logging.getLogger(__name__)

SUPPORTED_LEG_TYPES = (SwapLegType.FIXED, SwapLegType.IBOR, SwapLegType.OVERNIGHT)


def _check_leg(leg: ResolvedSwapLeg) -> None:
    if leg.type not in SUPPORTED_LEG_TYPES:
        raise ValueError(f"Swap leg type {leg.type.value} is not supported for decomposition")
    if leg.payment_events:
        raise ValueError("Swap legs with payment events are not supported for decomposition")
    for period in leg.payment_periods:
        if len(period.accrual_periods) != 1:
            raise ValueError(
                f"Payment period paying on {period.payment_date} has "
                f"{len(period.accrual_periods)} accrual periods, only one is supported"
            )


def _fixed_payment(period: RatePaymentPeriod) -> NotionalExchange:
    accrual = period.accrual_periods[0]
    computation = accrual.rate_computation
    if not isinstance(computation, FixedRateComputation):
        raise ValueError("Fixed leg payment period must use a fixed rate computation")
    amount = period.notional * accrual.year_fraction * computation.rate
    return NotionalExchange(period.currency, amount, period.payment_date)


def _spread_payment(period: RatePaymentPeriod) -> NotionalExchange | None:
    accrual = period.accrual_periods[0]
    if accrual.spread == 0.0:
        return None
    amount = period.notional * accrual.year_fraction * accrual.spread
    return NotionalExchange(period.currency, amount, period.payment_date)


def _floating_payment(period: RatePaymentPeriod) -> NotionalExchange:
    accrual = period.accrual_periods[0]
    amount = period.notional * accrual.gearing * accrual.year_fraction
    return NotionalExchange(period.currency, amount, period.payment_date)


def _ibor_leg(leg: ResolvedSwapLeg) -> MulticurveEquivalent:
    computations = []
    payments = []
    spreads = []
    for period in leg.payment_periods:
        computation = period.accrual_periods[0].rate_computation
        if not isinstance(computation, IborRateComputation):
            raise ValueError("Ibor leg payment period must use an Ibor rate computation")
        computations.append(computation)
        payments.append(_floating_payment(period))
        spread = _spread_payment(period)
        if spread is not None:
            spreads.append(spread)
    return MulticurveEquivalent(
        discount_factor_payments=spreads,
        ibor_computations=computations,
        ibor_payments=payments,
    )


def _overnight_leg(leg: ResolvedSwapLeg) -> MulticurveEquivalent:
    computations = []
    payments = []
    spreads = []
    for period in leg.payment_periods:
        computation = period.accrual_periods[0].rate_computation
        if not isinstance(computation, OvernightCompoundedRateComputation):
            raise ValueError("Overnight leg payment period must use an overnight rate computation")
        computations.append(computation)
        payments.append(_floating_payment(period))
        spread = _spread_payment(period)
        if spread is not None:
            spreads.append(spread)
    return MulticurveEquivalent(
        discount_factor_payments=spreads,
        on_computations=computations,
        on_payments=payments,
    )


_FLOATING_LEG_EQUIVALENTS = {
    SwapLegType.IBOR: _ibor_leg,
    SwapLegType.OVERNIGHT: _overnight_leg,
}


def multicurve_equivalent(swap: ResolvedSwap) -> MulticurveEquivalent:
    """Decompose a swap into a multi-curve equivalent without decision time.

    Known amounts list the fixed coupons first, then the spread parts of the
    floating coupons, each in leg order. Ibor and overnight fixings are listed
    leg by leg.

    Args:
        swap: Swap made of fixed, Ibor and overnight legs

    Returns:
        The multi-curve equivalent of the swap

    Raises:
        ValueError: If a leg has another type, payment events, or a payment
            period with more than one accrual period
    """
    for leg in swap.legs:
        _check_leg(leg)

    fixed_payments = tuple(
        _fixed_payment(period)
        for leg in swap.legs_of_type(SwapLegType.FIXED)
        for period in leg.payment_periods
    )
    floating = MulticurveEquivalent.empty()
    for leg in swap.legs:
        build = _FLOATING_LEG_EQUIVALENTS.get(leg.type)
        if build is not None:
            floating = floating.combined_with(build(leg))
    equivalent = floating.with_discount_factor_payments(
        fixed_payments + floating.discount_factor_payments
    )
    logger.debug(
        "Swap decomposed into %d known amounts, %d Ibor fixings and %d overnight periods",
        len(equivalent.discount_factor_payments),
        len(equivalent.ibor_computations),
        len(equivalent.on_computations),
    )
    return equivalent


def decision_schedule_swaption(swaption: ResolvedSwaption) -> MulticurveEquivalentSchedule:
    """Single decision at the swaption expiry on the underlying swap events."""
    equivalent = multicurve_equivalent(swaption.underlying).with_decision_time(swaption.expiry)
    return MulticurveEquivalentSchedule((equivalent,))


def decision_schedule_cms(period: CmsPeriod) -> MulticurveEquivalentSchedule:
    """Single decision at the CMS fixing instant.

    The coupon is appended as the last known amount, with amount
    ``notional * year_fraction`` on the payment date.
    """
    coupon = NotionalExchange(
        period.currency, period.notional * period.year_fraction, period.payment_date
    )
    equivalent = (
        multicurve_equivalent(period.underlying_swap)
        .with_added_discount_factor_payment(coupon)
        .with_decision_time(period.index.calculate_fixing_datetime(period.fixing_date))
    )
    return MulticurveEquivalentSchedule((equivalent,))


def decision_schedule_cms_spread(period: CmsSpreadPeriod) -> MulticurveEquivalentSchedule:
    """Single decision at the fixing instant of the first index.

    Events of the first underlying swap come first, then those of the second,
    then the coupon as the last known amount.
    """
    coupon = NotionalExchange(
        period.currency, period.notional * period.year_fraction, period.payment_date
    )
    equivalent = (
        multicurve_equivalent(period.underlying_swap1)
        .combined_with(multicurve_equivalent(period.underlying_swap2))
        .with_added_discount_factor_payment(coupon)
        .with_decision_time(period.index1.calculate_fixing_datetime(period.fixing_date))
    )
    return MulticurveEquivalentSchedule((equivalent,))


def ratchet_leg(swap: ResolvedSwap) -> ResolvedSwapLeg:
    """The single Ibor ratchet leg of a swap.

    Raises:
        ValueError: If the swap is not made of exactly one ratchet leg with
            single-accrual payment periods and no payment events
    """
    if len(swap.legs) != 1:
        raise ValueError(f"Ratchet swap must have exactly one leg, got {len(swap.legs)}")
    leg = swap.legs[0]
    if leg.payment_events:
        raise ValueError("Ratchet legs with payment events are not supported")
    for period in leg.payment_periods:
        if len(period.accrual_periods) != 1:
            raise ValueError("Ratchet payment periods must have a single accrual period")
        if not isinstance(period.accrual_periods[0].rate_computation, IborRatchetRateComputation):
            raise ValueError("Ratchet leg payment periods must use Ibor ratchet computations")
    return leg


def decision_schedule_ratchet(swap: ResolvedSwap) -> MulticurveEquivalentSchedule:
    """One decision per coupon, at the fixing instant of its Ibor rate.

    Each entry holds the Ibor fixing with the amount paid per unit of coupon
    rate and, when the coupon has a spread, the spread amount.
    """
    equivalents = []
    for period in ratchet_leg(swap).payment_periods:
        computation = period.accrual_periods[0].rate_computation
        spread = _spread_payment(period)
        equivalents.append(
            MulticurveEquivalent(
                decision_time=computation.index.calculate_fixing_datetime(computation.fixing_date),
                discount_factor_payments=() if spread is None else (spread,),
                ibor_computations=(IborRateComputation(computation.observation),),
                ibor_payments=(_floating_payment(period),),
            )
        )
    return MulticurveEquivalentSchedule(equivalents)


@singledispatch
def decision_schedule(product) -> MulticurveEquivalentSchedule:
    """Decision schedule of any supported product."""
    raise TypeError(f"No decision schedule for product type {type(product).__name__}")


decision_schedule.register(ResolvedSwaption, decision_schedule_swaption)
decision_schedule.register(CmsPeriod, decision_schedule_cms)
decision_schedule.register(CmsSpreadPeriod, decision_schedule_cms_spread)
