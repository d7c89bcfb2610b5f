"""Result types of the discounting swap pricer."""

from dataclasses import dataclass
from datetime import date

from irdlib.conventions.types import PayReceive, SwapLegType


@dataclass
class CouponCashflow:
    """A single coupon of a swap leg.

    Attributes:
        idx: Period index (1-based)
        accrual_start: Accrual start date
        accrual_end: Accrual end date
        fixing_date: Rate fixing date (None for fixed legs)
        payment_date: Payment date
        accrual_fraction: Day count fraction of the period
        forward_rate: Projected floating rate (None for fixed legs)
        fixed_rate: Fixed rate (None for floating legs)
        discount_factor: Discount factor at the payment date
        pv: Present value of the coupon
        notional: Signed notional of the period
        payment: Undiscounted coupon amount
    """

    idx: int
    accrual_start: date
    accrual_end: date
    fixing_date: date | None
    payment_date: date
    accrual_fraction: float
    forward_rate: float | None
    fixed_rate: float | None
    discount_factor: float
    pv: float
    notional: float = 0.0
    payment: float = 0.0


@dataclass
class LegPV:
    """Present value and coupons of one leg.

    Attributes:
        leg_type: Type of the leg
        pay_receive: Direction of the leg
        pv: Present value of the leg
        cashflows: Coupons not yet paid
    """

    leg_type: SwapLegType
    pay_receive: PayReceive
    pv: float
    cashflows: list[CouponCashflow]


@dataclass
class SwapPV:
    """Present value of a swap with its leg breakdown."""

    pv_total: float
    legs: list[LegPV]
