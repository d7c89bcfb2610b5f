"""Ibor ratchet legs.

A ratchet coupon is described by nine coefficients, in the order
main (previous, ibor, fixed), floor (previous, ibor, fixed),
cap (previous, ibor, fixed). The previous-rate coefficients of the first
coupon must be zero as there is no previous coupon.
"""

from datetime import date
from typing import Sequence

from irdlib.conventions.legs import SwapLegConvention
from irdlib.conventions.types import PayReceive, SwapLegType

from .builders import build_leg, ibor_fixing
from .rates import IborRatchetRateComputation
from .swap import ResolvedSwapLeg

# Plain Ibor coupon: floor at -100%, cap at 100%
COEFFICIENTS_IBOR = (0.0, 1.0, 0.0, 0.0, 0.0, -1.0, 0.0, 0.0, 1.0)


def ibor_ratchet_leg(
    effective_date: date,
    maturity_date: date,
    convention: SwapLegConvention,
    notional: float,
    pay_receive: PayReceive,
    coefficients: Sequence[float],
    first_coefficients: Sequence[float] | None = None,
) -> ResolvedSwapLeg:
    """Build a ratchet leg on the Ibor index of ``convention``.

    Args:
        effective_date: Leg start date
        maturity_date: Leg end date
        convention: Ibor leg convention (schedule, day count and index)
        notional: Unsigned notional
        pay_receive: Leg direction
        coefficients: Nine coefficients applied to every coupon
        first_coefficients: Nine coefficients of the first coupon, defaults to
            ``coefficients``

    Raises:
        ValueError: If a coefficient set does not have nine entries, or if the
            first coupon refers to a previous rate
    """
    if convention.leg_type != SwapLegType.IBOR:
        raise ValueError(f"Ratchet leg requires an IBOR convention, got {convention.leg_type}")
    regular = _split(coefficients)
    first = _split(first_coefficients if first_coefficients is not None else coefficients)
    if any(part[0] != 0.0 for part in first):
        raise ValueError("Previous rate coefficients must be 0 for the first coupon")

    index = convention.index

    def computation(period) -> IborRatchetRateComputation:
        main, floor, cap = first if period.period_index == 1 else regular
        return IborRatchetRateComputation(
            observation=ibor_fixing(index, period).observation,
            main_coefficients=main,
            floor_coefficients=floor,
            cap_coefficients=cap,
        )

    return build_leg(
        effective_date,
        maturity_date,
        convention,
        notional,
        pay_receive,
        computation,
        index.currency,
    )


def _split(
    coefficients: Sequence[float],
) -> tuple[tuple[float, float, float], tuple[float, float, float], tuple[float, float, float]]:
    if len(coefficients) != 9:
        raise ValueError(f"Ratchet requires 9 coefficients, got {len(coefficients)}")
    values = tuple(float(c) for c in coefficients)
    return values[0:3], values[3:6], values[6:9]
