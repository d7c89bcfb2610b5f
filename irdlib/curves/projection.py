"""Projection curve for Ibor indices."""

import math
from datetime import date
from typing import Sequence

from irdlib.conventions.indices import IborIndexObservation

from .base import InterpolatedCurve


class IborProjectionCurve(InterpolatedCurve):
    """Pseudo-discount curve used to derive Ibor forward rates."""

    def __init__(
        self,
        reference_date: date,
        index_name: str,
        pillar_times: Sequence[float],
        pseudo_discount_factors: Sequence[float],
        interpolation_method: str = "LOGLINEAR_ZERO",
        name: str = "",
    ):
        super().__init__(
            reference_date,
            pillar_times,
            pseudo_discount_factors,
            interpolation_method=interpolation_method,
            name=name or f"{index_name}-PROJECTION",
        )
        self.index_name = index_name

    def px(self, t) -> float:
        """Pseudo-discount factor of the index at time t."""
        return self.df(t)

    def forward_rate(self, observation: IborIndexObservation) -> float:
        """Forward rate of an Ibor fixing, on the index day count."""
        return (
            self.px(observation.effective_date) / self.px(observation.maturity_date) - 1.0
        ) / observation.year_fraction

    def shift_parallel(self, shift_bp: float) -> "IborProjectionCurve":
        return IborProjectionCurve(
            reference_date=self.reference_date,
            index_name=self.index_name,
            pillar_times=self.pillar_times,
            pseudo_discount_factors=self._shifted_discount_factors(shift_bp),
            interpolation_method=self.interpolation_method,
            name=f"{self.name}_shifted_{shift_bp}bp",
        )

    def __repr__(self) -> str:
        return (
            f"IborProjectionCurve(reference_date={self.reference_date}, "
            f"index_name='{self.index_name}', "
            f"pillar_times={self.pillar_times}, "
            f"interpolation_method='{self.interpolation_method}')"
        )


def create_flat_ibor_curve(
    reference_date: date,
    index_name: str,
    flat_rate: float,
    max_time: float = 30.0,
    num_pillars: int = 10,
    name: str = "",
) -> IborProjectionCurve:
    times = [(i + 1) * max_time / num_pillars for i in range(num_pillars)]
    pseudo_discount_factors = [math.exp(-flat_rate * t) for t in times]
    return IborProjectionCurve(
        reference_date=reference_date,
        index_name=index_name,
        pillar_times=times,
        pseudo_discount_factors=pseudo_discount_factors,
        interpolation_method="LOGLINEAR_ZERO",
        name=name,
    )
