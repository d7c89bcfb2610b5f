"""
Base curve classes for discounting and projection.
"""

import math
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Sequence, Union

from irdlib.conventions.daycount import (
    ACT_365F,
    DayCountConvention,
    to_date,
)
from irdlib.interpolation import (
    DISCOUNT_FACTOR_METHODS,
    Interpolator,
    create_interpolator,
)

CurveTime = Union[datetime, date, float]


class BaseCurve(ABC):
    """Base implementation for yield curves.

    Dates are converted to curve times with ``time_day_count`` measured from
    the reference date; floats are taken as curve times directly.
    """

    def __init__(
        self,
        reference_date: date,
        name: str = "",
        time_day_count: DayCountConvention = ACT_365F,
    ):
        self.reference_date = reference_date
        self.name = name
        self._time_day_count = time_day_count

    def time(self, t: CurveTime) -> float:
        """Convert a date or datetime to the curve's time basis."""
        if isinstance(t, (int, float)):
            return float(t)
        return self._time_day_count.year_fraction(self.reference_date, to_date(t))

    @abstractmethod
    def df(self, t: CurveTime) -> float:
        """Get discount factor at time t."""

    def zero(self, t: CurveTime) -> float:
        """Continuously compounded zero rate at time t."""
        time_frac = self.time(t)
        if time_frac <= 0:
            return 0.0

        df_val = self.df(time_frac)
        if df_val <= 0:
            raise ValueError(f"Non-positive discount factor: {df_val}")

        return -math.log(df_val) / time_frac

    def forward(
        self, start: Union[date, datetime], end: Union[date, datetime], day_count: DayCountConvention
    ) -> float:
        """Simply compounded forward rate between two dates."""
        alpha = day_count.year_fraction(to_date(start), to_date(end))
        if alpha <= 0:
            raise ValueError("Forward period must be positive")

        return (self.df(start) / self.df(end) - 1.0) / alpha

    def __str__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.name})"
            if self.name
            else self.__class__.__name__
        )


class InterpolatedCurve(BaseCurve):
    """Curve defined by discount factors at pillar times.

    Methods listed in ``DISCOUNT_FACTOR_METHODS`` interpolate the discount
    factors directly, the others interpolate zero rates.
    """

    def __init__(
        self,
        reference_date: date,
        pillar_times: Sequence[float],
        discount_factors: Sequence[float],
        interpolation_method: str = "LOGLINEAR_ZERO",
        name: str = "",
        interpolator: Interpolator | None = None,
    ):
        super().__init__(reference_date, name)

        if len(pillar_times) != len(discount_factors):
            raise ValueError("Pillar times and discount factors must have same length")
        if len(pillar_times) < 2:
            raise ValueError("Need at least 2 pillar points")
        for i, df in enumerate(discount_factors):
            if df <= 0:
                raise ValueError(f"Discount factor at pillar {i} must be positive: {df}")

        self.pillar_times = list(pillar_times)
        self.discount_factors = list(discount_factors)
        self.interpolation_method = interpolation_method.upper()
        self._on_discount_factors = self.interpolation_method in DISCOUNT_FACTOR_METHODS

        if interpolator is not None:
            self.interpolator = interpolator
        elif self._on_discount_factors:
            self.interpolator = create_interpolator(
                self.interpolation_method, pillar_times, discount_factors
            )
        else:
            zero_rates = [
                -math.log(df) / t if t > 0 else 0.0
                for t, df in zip(pillar_times, discount_factors, strict=True)
            ]
            self.interpolator = create_interpolator(
                self.interpolation_method, pillar_times, zero_rates
            )

    def df(self, t: CurveTime) -> float:
        time_frac = self.time(t)
        if time_frac <= 0:
            return 1.0

        if self._on_discount_factors:
            return self.interpolator.interpolate(time_frac)
        zero_rate = self.interpolator.interpolate(time_frac)
        return math.exp(-zero_rate * time_frac)

    def get_pillar_info(self) -> list[tuple[float, float, float]]:
        """Pillar information as (time, discount_factor, zero_rate) tuples."""
        return [
            (t, df, -math.log(df) / t if t > 0 else 0.0)
            for t, df in zip(self.pillar_times, self.discount_factors, strict=True)
        ]

    def _shifted_discount_factors(self, shift_bp: float) -> list[float]:
        shift_decimal = shift_bp / 10000.0
        return [
            df * math.exp(-shift_decimal * t) if t > 0 else df
            for t, df in zip(self.pillar_times, self.discount_factors, strict=True)
        ]
