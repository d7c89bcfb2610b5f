"""Rate computations of accrual periods.

Each accrual period carries exactly one of the computations below. Together
they form a closed variant; the ``leg_type`` class attribute gives the swap leg
type the computation belongs to, so decomposition code can match on it without
isinstance chains.
"""

from dataclasses import dataclass
from datetime import date
from typing import ClassVar, Sequence, Union

import numpy as np

from irdlib.conventions.indices import IborIndex, IborIndexObservation, OvernightIndex
from irdlib.conventions.types import SwapLegType


@dataclass(frozen=True)
class FixedRateComputation:
    """Fixed rate."""

    rate: float

    leg_type: ClassVar[SwapLegType] = SwapLegType.FIXED


@dataclass(frozen=True)
class IborRateComputation:
    """Single Ibor fixing."""

    observation: IborIndexObservation

    leg_type: ClassVar[SwapLegType] = SwapLegType.IBOR

    @classmethod
    def of(cls, index: IborIndex, fixing_date: date) -> "IborRateComputation":
        return cls(index.observation(fixing_date))

    @property
    def index(self) -> IborIndex:
        return self.observation.index

    @property
    def fixing_date(self) -> date:
        return self.observation.fixing_date

    @property
    def effective_date(self) -> date:
        return self.observation.effective_date

    @property
    def maturity_date(self) -> date:
        return self.observation.maturity_date


@dataclass(frozen=True)
class OvernightCompoundedRateComputation:
    """Overnight rate compounded daily over ``[start_date, end_date)``."""

    index: OvernightIndex
    start_date: date
    end_date: date

    leg_type: ClassVar[SwapLegType] = SwapLegType.OVERNIGHT

    def __post_init__(self):
        if self.start_date >= self.end_date:
            raise ValueError(
                f"Overnight period start {self.start_date} must be before end {self.end_date}"
            )

    @property
    def year_fraction(self) -> float:
        return self.index.day_count.year_fraction(self.start_date, self.end_date)


@dataclass(frozen=True)
class IborRatchetRateComputation:
    """Ibor ratchet rate: a linear formula in the previous coupon rate and the
    current Ibor fixing, floored and capped by formulas of the same form.

    Each coefficient triple is ``(previous, ibor, fixed)`` and evaluates to
    ``previous * prev_rate + ibor * ibor_rate + fixed``. The rate is
    ``min(max(main, floor), cap)``.
    """

    observation: IborIndexObservation
    main_coefficients: tuple[float, float, float]
    floor_coefficients: tuple[float, float, float]
    cap_coefficients: tuple[float, float, float]

    leg_type: ClassVar[SwapLegType] = SwapLegType.OTHER

    def __post_init__(self):
        for name in ("main_coefficients", "floor_coefficients", "cap_coefficients"):
            if len(getattr(self, name)) != 3:
                raise ValueError(f"{name} must have exactly 3 entries")

    @property
    def index(self) -> IborIndex:
        return self.observation.index

    @property
    def fixing_date(self) -> date:
        return self.observation.fixing_date

    @property
    def previous_coefficients(self) -> tuple[float, float, float]:
        return (
            self.main_coefficients[0],
            self.floor_coefficients[0],
            self.cap_coefficients[0],
        )

    def rate(self, previous_rate, ibor_rate):
        """Ratchet rate for scalar or array inputs."""
        inputs = (previous_rate, ibor_rate, 1.0)
        main = _linear(self.main_coefficients, inputs)
        floor = _linear(self.floor_coefficients, inputs)
        cap = _linear(self.cap_coefficients, inputs)
        return np.minimum(np.maximum(main, floor), cap)


def _linear(coefficients: Sequence[float], inputs: Sequence) -> np.ndarray:
    return sum(c * x for c, x in zip(coefficients, inputs, strict=True))


RateComputation = Union[
    FixedRateComputation,
    IborRateComputation,
    OvernightCompoundedRateComputation,
    IborRatchetRateComputation,
]
