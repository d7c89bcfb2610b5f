"""Constant maturity swap (CMS) coupons and CMS spread coupons."""

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from zoneinfo import ZoneInfo

import numpy as np

from irdlib.conventions.legs import EUR_FIXED_1Y, EURIBOR_6M_FLOATING, SwapLegConvention
from irdlib.conventions.types import PayReceive
from irdlib.schedule import add_tenor_months

from .builders import fixed_ibor_swap
from .swap import ResolvedSwap


@dataclass(frozen=True)
class SwapIndex:
    """Swap rate index (e.g. EUR 10Y annual fixed versus EURIBOR 6M).

    Attributes:
        name: Index name
        tenor_years: Tenor of the underlying swap
        fixed_convention: Convention of the fixed leg
        float_convention: Convention of the Ibor leg
        spot_lag_days: Business days between fixing and swap start
        fixing_time: Local fixing time
        fixing_zone: Time zone name of the fixing
    """

    name: str
    tenor_years: int
    fixed_convention: SwapLegConvention
    float_convention: SwapLegConvention
    spot_lag_days: int = 2
    fixing_time: time = time(11, 0)
    fixing_zone: str = "Europe/Brussels"

    @property
    def currency(self) -> str:
        return self.float_convention.index.currency

    def calculate_fixing_datetime(self, fixing_date: date) -> datetime:
        return datetime.combine(fixing_date, self.fixing_time, ZoneInfo(self.fixing_zone))

    def to_swap(self, fixing_date: date, fixed_rate: float = 1.0, notional: float = 1.0) -> ResolvedSwap:
        """Underlying swap fixed on ``fixing_date``, paying fixed.

        With the default unit fixed rate the fixed leg present value is the
        swap's PVBP, so the swap rate is ``-PV(float) / PV(fixed)``.
        """
        calendar = self.float_convention.calendar_obj
        start = calendar.add_business_days(fixing_date, self.spot_lag_days)
        end = add_tenor_months(
            start,
            12 * self.tenor_years,
            calendar,
            self.float_convention.business_day_adjustment,
        )
        return fixed_ibor_swap(
            start,
            end,
            self.fixed_convention,
            self.float_convention,
            notional,
            fixed_rate,
            fixed_pay_receive=PayReceive.PAY,
        )


EUR_SWAP_2Y = SwapIndex("EUR-EURIBOR-1100-2Y", 2, EUR_FIXED_1Y, EURIBOR_6M_FLOATING)
EUR_SWAP_5Y = SwapIndex("EUR-EURIBOR-1100-5Y", 5, EUR_FIXED_1Y, EURIBOR_6M_FLOATING)
EUR_SWAP_10Y = SwapIndex("EUR-EURIBOR-1100-10Y", 10, EUR_FIXED_1Y, EURIBOR_6M_FLOATING)


class CmsPeriodType(Enum):
    COUPON = "COUPON"
    CAPLET = "CAPLET"
    FLOORLET = "FLOORLET"


@dataclass(frozen=True)
class CmsPeriod:
    """A single CMS coupon, caplet or floorlet.

    The payment is ``notional * year_fraction * payoff(swap_rate)``. The
    underlying swap must have a unit fixed rate.
    """

    currency: str
    notional: float
    start_date: date
    end_date: date
    payment_date: date
    year_fraction: float
    fixing_date: date
    index: SwapIndex
    underlying_swap: ResolvedSwap
    period_type: CmsPeriodType = CmsPeriodType.COUPON
    strike: float = 0.0

    def payoff(self, swap_rate):
        """Payoff rate for scalar or array swap rates."""
        if self.period_type == CmsPeriodType.CAPLET:
            return np.maximum(swap_rate - self.strike, 0.0)
        if self.period_type == CmsPeriodType.FLOORLET:
            return np.maximum(self.strike - swap_rate, 0.0)
        return swap_rate


@dataclass(frozen=True)
class CmsSpreadPeriod:
    """A coupon on the weighted difference of two swap rates.

    The coupon rate is ``weight1 * S1 - weight2 * S2``; with a caplet or a
    floorlet strike the period pays the call or put on that rate. The payoff
    already includes ``notional * year_fraction``.
    """

    currency: str
    notional: float
    start_date: date
    end_date: date
    payment_date: date
    year_fraction: float
    fixing_date: date
    weight1: float
    index1: SwapIndex
    underlying_swap1: ResolvedSwap
    weight2: float
    index2: SwapIndex
    underlying_swap2: ResolvedSwap
    caplet: float | None = None
    floorlet: float | None = None

    def __post_init__(self):
        if self.caplet is not None and self.floorlet is not None:
            raise ValueError("CMS spread period cannot be both a caplet and a floorlet")

    def payoff(self, swap_rate1, swap_rate2):
        """Period payoff for scalar or array swap rates."""
        swap_rate1 = np.asarray(swap_rate1, dtype=float)
        swap_rate2 = np.asarray(swap_rate2, dtype=float)
        if swap_rate1.shape != swap_rate2.shape:
            raise ValueError("Both swap rate arrays must have the same shape")
        cpn = self.weight1 * swap_rate1 - self.weight2 * swap_rate2
        if self.caplet is not None:
            return self.notional * self.year_fraction * np.maximum(cpn - self.caplet, 0.0)
        if self.floorlet is not None:
            return self.notional * self.year_fraction * np.maximum(self.floorlet - cpn, 0.0)
        return self.notional * self.year_fraction * cpn


def cms_period(
    index: SwapIndex,
    start_date: date,
    end_date: date,
    notional: float,
    period_type: CmsPeriodType = CmsPeriodType.COUPON,
    strike: float = 0.0,
) -> CmsPeriod:
    """CMS period fixing in advance and paying at the end of the accrual period."""
    day_count = index.fixed_convention.day_count
    calendar = index.float_convention.calendar_obj
    fixing_date = calendar.add_business_days(start_date, -index.spot_lag_days)
    return CmsPeriod(
        currency=index.currency,
        notional=notional,
        start_date=start_date,
        end_date=end_date,
        payment_date=end_date,
        year_fraction=day_count.year_fraction(start_date, end_date),
        fixing_date=fixing_date,
        index=index,
        underlying_swap=index.to_swap(fixing_date),
        period_type=period_type,
        strike=strike,
    )


def cms_spread_period(
    index1: SwapIndex,
    index2: SwapIndex,
    start_date: date,
    end_date: date,
    notional: float,
    weight1: float = 1.0,
    weight2: float = 1.0,
    caplet: float | None = None,
    floorlet: float | None = None,
) -> CmsSpreadPeriod:
    """CMS spread period fixing in advance on the calendar of the first index."""
    if index1.currency != index2.currency:
        raise ValueError("Both swap indices must have the same currency")
    day_count = index1.fixed_convention.day_count
    calendar = index1.float_convention.calendar_obj
    fixing_date = calendar.add_business_days(start_date, -index1.spot_lag_days)
    return CmsSpreadPeriod(
        currency=index1.currency,
        notional=notional,
        start_date=start_date,
        end_date=end_date,
        payment_date=end_date,
        year_fraction=day_count.year_fraction(start_date, end_date),
        fixing_date=fixing_date,
        weight1=weight1,
        index1=index1,
        underlying_swap1=index1.to_swap(fixing_date),
        weight2=weight2,
        index2=index2,
        underlying_swap2=index2.to_swap(fixing_date),
        caplet=caplet,
        floorlet=floorlet,
    )
