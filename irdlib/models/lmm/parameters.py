"""Parameters of the Libor Market Model with displaced diffusion and
deterministic multiplicative spreads (LMM-DDD).

The model describes the forward rates of the discounting curve over a fixed
grid of Ibor dates. Each forward ``F_i`` over ``[t_i, t_{i+1}]`` follows a
displaced diffusion ``d(F_i + a_i) = (F_i + a_i) * gamma_i(t) . dW`` under the
terminal measure. Ibor rates are obtained from the forwards through
deterministic multiplicative spreads.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
from typing import Sequence
from zoneinfo import ZoneInfo

import numpy as np

from irdlib.conventions.indices import IborIndex, OvernightIndex
from irdlib.models.time_measure import SCALED_SECOND_TIME, TimeMeasurement

# Tolerance used to match event times with grid times: 5 days
TIME_TOLERANCE = 5.0 / 350.0


def _frozen_array(values, ndim: int) -> np.ndarray:
    array = np.array(values, dtype=float, ndmin=ndim)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class LiborMarketModelParameters:
    """Immutable LMM-DDD parameters.

    Attributes:
        overnight_index: Overnight index of the discounting curve
        ibor_index: Ibor index whose rates the model generates
        valuation_date: Valuation date
        valuation_time: Local valuation time
        valuation_zone: Time zone name of the valuation
        ibor_times: Grid times t_0 < ... < t_n (n+1 values)
        accrual_factors: Accrual factor of each grid period (n values)
        multiplicative_spreads: Ibor over discounting spread of each period
        displacements: Displacement of each forward
        volatilities: Volatility matrix, one row per period, one column per factor
        mean_reversion: Mean reversion scaling the volatilities over time
        time_measure: Conversion of dates and instants into model times
        time_tolerance: Tolerance when matching times to grid times
    """

    overnight_index: OvernightIndex
    ibor_index: IborIndex
    valuation_date: date
    valuation_time: time
    valuation_zone: str
    ibor_times: np.ndarray
    accrual_factors: np.ndarray
    multiplicative_spreads: np.ndarray
    displacements: np.ndarray
    volatilities: np.ndarray
    mean_reversion: float
    time_measure: TimeMeasurement = SCALED_SECOND_TIME
    time_tolerance: float = TIME_TOLERANCE
    valuation_datetime: datetime = field(init=False)

    def __post_init__(self):
        if self.overnight_index.currency != self.ibor_index.currency:
            raise ValueError("Ibor index and overnight index must have the same currency")
        object.__setattr__(self, "ibor_times", _frozen_array(self.ibor_times, 1))
        object.__setattr__(self, "accrual_factors", _frozen_array(self.accrual_factors, 1))
        object.__setattr__(
            self, "multiplicative_spreads", _frozen_array(self.multiplicative_spreads, 1)
        )
        object.__setattr__(self, "displacements", _frozen_array(self.displacements, 1))
        object.__setattr__(self, "volatilities", _frozen_array(self.volatilities, 2))

        nb_periods = len(self.accrual_factors)
        if len(self.ibor_times) != nb_periods + 1:
            raise ValueError("Number of Ibor times must be number of accrual factors plus one")
        if np.any(np.diff(self.ibor_times) <= 0):
            raise ValueError("Ibor times must be strictly increasing")
        if len(self.displacements) != nb_periods:
            raise ValueError("Number of accrual factors must be equal to number of displacements")
        if len(self.multiplicative_spreads) != nb_periods:
            raise ValueError("Number of accrual factors must be equal to number of spreads")
        if self.volatilities.shape[0] != nb_periods:
            raise ValueError(
                "Number of accrual factors must be equal to number of volatility rows"
            )
        object.__setattr__(
            self,
            "valuation_datetime",
            datetime.combine(self.valuation_date, self.valuation_time, ZoneInfo(self.valuation_zone)),
        )

    @property
    def currency(self) -> str:
        return self.overnight_index.currency

    @property
    def factor_count(self) -> int:
        return self.volatilities.shape[1]

    @property
    def ibor_periods_count(self) -> int:
        return self.volatilities.shape[0]

    @property
    def parameter_count(self) -> int:
        return self.volatilities.size

    def relative_time(self, when: date | datetime) -> float:
        """Model time of a date (from the valuation date) or an instant (from
        the valuation instant)."""
        if isinstance(when, datetime):
            return self.time_measure.relative_time(self.valuation_datetime, when)
        return self.time_measure.relative_time(self.valuation_date, when)

    def ibor_time_index(self, times: Sequence[float] | np.ndarray) -> np.ndarray:
        """Index of the first grid time not before ``time - time_tolerance``."""
        shifted = np.asarray(times, dtype=float) - self.time_tolerance
        return np.searchsorted(self.ibor_times, shifted, side="left")

    def ibor_rate_from_dsc_forwards(self, dsc_forward, index):
        """Ibor rate of grid period ``index`` given the discounting forward.

        Both arguments may be arrays of matching shapes.
        """
        spread = self.multiplicative_spreads[index]
        accrual = self.accrual_factors[index]
        return (spread * (1.0 + accrual * dsc_forward) - 1.0) / accrual

    def parameter(self, parameter_index: int) -> float:
        """Volatility parameter, ordered by period then by factor."""
        row, column = divmod(parameter_index, self.factor_count)
        return float(self.volatilities[row, column])

    def with_parameter(
        self, parameter_index: int, new_value: float
    ) -> "LiborMarketModelParameters":
        row, column = divmod(parameter_index, self.factor_count)
        volatilities = np.array(self.volatilities)
        volatilities[row, column] = new_value
        return replace(self, volatilities=volatilities)

    def __repr__(self) -> str:
        return (
            f"LiborMarketModelParameters(ibor_index={self.ibor_index.name}, "
            f"valuation_date={self.valuation_date}, "
            f"periods={self.ibor_periods_count}, factors={self.factor_count}, "
            f"mean_reversion={self.mean_reversion})"
        )
