"""
Step forward interpolation.
"""
import math
from typing import Sequence

import numpy as np

from .base import Interpolator


class StepForwardContinuousInterpolator(Interpolator):
    """Piecewise constant continuously compounded forwards between pillars.

    Values are discount factors. Before the first pillar the first zero rate is
    used, after the last pillar the last forward rate is extended.
    """

    def __init__(self, pillars: Sequence[float], discount_factors: Sequence[float]):
        super().__init__(pillars, discount_factors)
        self.forward_rates = np.log(self.values[:-1] / self.values[1:]) / np.diff(
            self.pillars
        )

    def interpolate(self, t: float) -> float:
        """Discount factor at time t."""
        if t <= 0:
            return 1.0
        if t <= self.pillars[0]:
            first_zero_rate = -math.log(self.values[0]) / self.pillars[0]
            return math.exp(-first_zero_rate * t)
        if t >= self.pillars[-1]:
            dt = t - self.pillars[-1]
            return float(self.values[-1] * math.exp(-self.forward_rates[-1] * dt))

        i = int(np.searchsorted(self.pillars, t)) - 1
        return float(self.values[i] * math.exp(-self.forward_rates[i] * (t - self.pillars[i])))
