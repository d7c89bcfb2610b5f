"""Discounting pricer of swaps.

Coupons are projected off the Ibor and overnight curves of the rates provider
and discounted on the discount curve of their currency. Coupons paid before
the valuation date are ignored.
"""

import logging

from irdlib.conventions.types import SwapLegType
from irdlib.curves.provider import RatesProvider
from irdlib.instruments.rates import (
    FixedRateComputation,
    IborRateComputation,
    OvernightCompoundedRateComputation,
)
from irdlib.instruments.swap import RatePaymentPeriod, ResolvedSwap, ResolvedSwapLeg

from .types import CouponCashflow, LegPV, SwapPV

logger = logging.getLogger(__name__)


def price_swap(swap: ResolvedSwap, rates_provider: RatesProvider) -> SwapPV:
    """Price a swap and return its cashflow breakdown.

    Args:
        swap: Swap made of fixed, Ibor and overnight legs
        rates_provider: Curves for projection and discounting

    Returns:
        SwapPV with the total present value and one LegPV per leg

    Raises:
        ValueError: If a leg type cannot be priced by discounting or a curve
            is missing

    Examples:
        >>> result = price_swap(swap, rates_provider)
        >>> print(f"NPV: EUR {result.pv_total:,.2f}")
    """
    legs = [price_leg(leg, rates_provider) for leg in swap.legs]
    return SwapPV(pv_total=sum(leg.pv for leg in legs), legs=legs)


def price_leg(leg: ResolvedSwapLeg, rates_provider: RatesProvider) -> LegPV:
    """Price a single leg with its coupon details.

    Raises:
        ValueError: If the leg is not a fixed, Ibor or overnight leg, or if a
            future coupon fixed before the valuation date
    """
    if leg.type == SwapLegType.OTHER:
        raise ValueError("Legs of type OTHER cannot be priced by discounting")
    cashflows = []
    for idx, period in enumerate(leg.payment_periods, start=1):
        if period.payment_date < rates_provider.valuation_date:
            continue
        cashflows.append(_price_coupon(idx, period, rates_provider))
    pv = sum(cf.pv for cf in cashflows)
    logger.debug("%s %s leg: %d coupons, PV %.2f", leg.pay_receive.value, leg.type.value, len(cashflows), pv)
    return LegPV(
        leg_type=leg.type,
        pay_receive=leg.pay_receive,
        pv=pv,
        cashflows=cashflows,
    )


def present_value(swap: ResolvedSwap, rates_provider: RatesProvider) -> float:
    """Present value of a swap."""
    return price_swap(swap, rates_provider).pv_total


def par_rate(swap: ResolvedSwap, rates_provider: RatesProvider) -> float:
    """Fixed rate making the swap value zero.

    The swap must have exactly one fixed leg; its coupons are repriced at a unit
    rate to obtain the PVBP.
    """
    fixed_legs = swap.legs_of_type(SwapLegType.FIXED)
    if len(fixed_legs) != 1:
        raise ValueError(f"Par rate requires exactly one fixed leg, got {len(fixed_legs)}")
    fixed_leg = fixed_legs[0]
    pvbp = sum(
        cf.discount_factor * cf.notional * cf.accrual_fraction
        for cf in price_leg(fixed_leg, rates_provider).cashflows
    )
    if pvbp == 0.0:
        raise ValueError("Fixed leg has no remaining coupons")
    float_pv = sum(price_leg(leg, rates_provider).pv for leg in swap.legs if leg is not fixed_leg)
    return -float_pv / pvbp


def _price_coupon(idx: int, period: RatePaymentPeriod, rates_provider: RatesProvider) -> CouponCashflow:
    if len(period.accrual_periods) != 1:
        raise ValueError("Only payment periods with a single accrual period are supported")
    accrual = period.accrual_periods[0]
    computation = accrual.rate_computation

    forward_rate = None
    fixed_rate = None
    fixing_date = None
    if isinstance(computation, FixedRateComputation):
        fixed_rate = computation.rate
        effective_rate = fixed_rate
    elif isinstance(computation, IborRateComputation):
        fixing_date = computation.fixing_date
        if fixing_date < rates_provider.valuation_date:
            raise ValueError(f"Ibor fixing on {fixing_date} is before the valuation date")
        forward_rate = rates_provider.ibor_forward_rate(computation.index, computation.observation)
        effective_rate = accrual.gearing * forward_rate + accrual.spread
    elif isinstance(computation, OvernightCompoundedRateComputation):
        if computation.start_date < rates_provider.valuation_date:
            raise ValueError(
                f"Overnight period starting {computation.start_date} is before the valuation date"
            )
        forward_rate = rates_provider.overnight_compounded_period_rate(
            computation.index, computation.start_date, computation.end_date
        )
        effective_rate = accrual.gearing * forward_rate + accrual.spread
    else:
        raise ValueError(f"Unsupported rate computation {type(computation).__name__}")

    discount_factor = rates_provider.discount_factor(period.currency, period.payment_date)
    payment = period.notional * accrual.year_fraction * effective_rate
    return CouponCashflow(
        idx=idx,
        accrual_start=accrual.start_date,
        accrual_end=accrual.end_date,
        fixing_date=fixing_date,
        payment_date=period.payment_date,
        accrual_fraction=accrual.year_fraction,
        forward_rate=forward_rate,
        fixed_rate=fixed_rate,
        discount_factor=discount_factor,
        pv=payment * discount_factor,
        notional=period.notional,
        payment=payment,
    )
