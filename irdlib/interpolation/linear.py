"""
Linear interpolation methods for yield curves.
"""
import math
from typing import Sequence

from .base import Interpolator


class LinearDiscountFactorInterpolator(Interpolator):
    """Linear interpolation on discount factors, flat outside the pillars."""

    def interpolate(self, t: float) -> float:
        if t <= self.pillars[0]:
            return float(self.values[0])
        if t >= self.pillars[-1]:
            return float(self.values[-1])

        i, weight = self._bracket(t)
        return float(self.values[i] + weight * (self.values[i + 1] - self.values[i]))


class LogLinearZeroInterpolator(Interpolator):
    """Linear interpolation on log discount factors.

    Values are continuously compounded zero rates. Outside the pillar range the
    zero rate is extrapolated flat, so a curve with a single zero rate is
    exactly flat everywhere.
    """

    def __init__(self, pillars: Sequence[float], zero_rates: Sequence[float]):
        super().__init__(pillars, zero_rates)
        self.log_dfs = -self.values * self.pillars

    def interpolate(self, t: float) -> float:
        """Interpolate zero rate at time t."""
        if t <= 0:
            return float(self.values[0])
        return -self._interpolate_log_df(t) / t

    def interpolate_discount_factor(self, t: float) -> float:
        return math.exp(self._interpolate_log_df(t))

    def _interpolate_log_df(self, t: float) -> float:
        if t <= self.pillars[0]:
            return float(-self.values[0] * t)
        if t >= self.pillars[-1]:
            return float(-self.values[-1] * t)

        i, weight = self._bracket(t)
        return float(self.log_dfs[i] + weight * (self.log_dfs[i + 1] - self.log_dfs[i]))
