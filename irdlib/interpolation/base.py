"""
Base class for curve interpolation methods.
"""
from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np


class Interpolator(ABC):
    """Base class for curve interpolation methods."""

    def __init__(self, pillars: Sequence[float], values: Sequence[float]):
        """
        Initialize interpolator.

        Args:
            pillars: Times of the pillar points (in years)
            values: Values at the pillars (discount factors, zero rates, ...)
        """
        if len(pillars) != len(values):
            raise ValueError("Pillars and values must have same length")
        if len(pillars) < 2:
            raise ValueError("Need at least 2 points for interpolation")

        order = np.argsort(np.asarray(pillars, dtype=float), kind="stable")
        self.pillars = np.asarray(pillars, dtype=float)[order]
        self.values = np.asarray(values, dtype=float)[order]

        if len(np.unique(self.pillars)) != len(self.pillars):
            raise ValueError("Duplicate pillar times not allowed")

    @abstractmethod
    def interpolate(self, t: float) -> float:
        """Interpolate value at time t."""

    def interpolate_many(self, times: Sequence[float]) -> list[float]:
        return [self.interpolate(t) for t in times]

    def _bracket(self, t: float) -> tuple[int, float]:
        """Left pillar index and linear weight of ``t`` inside the pillar range."""
        i = int(np.searchsorted(self.pillars, t)) - 1
        t1, t2 = self.pillars[i], self.pillars[i + 1]
        return i, (t - t1) / (t2 - t1)
