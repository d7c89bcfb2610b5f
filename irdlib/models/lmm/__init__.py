"""Libor Market Model with displaced diffusion and deterministic spreads."""

from .builders import ibor_dates_of_periods, lmm_hw, lmm_one_factor, lmm_two_factor_angle
from .evolution import (
    MAX_JUMP_DEFAULT,
    LiborMarketModelMonteCarloEvolution,
    NumericalInstabilityError,
)
from .parameters import TIME_TOLERANCE, LiborMarketModelParameters

__all__ = [
    "MAX_JUMP_DEFAULT",
    "TIME_TOLERANCE",
    "LiborMarketModelMonteCarloEvolution",
    "LiborMarketModelParameters",
    "NumericalInstabilityError",
    "ibor_dates_of_periods",
    "lmm_hw",
    "lmm_one_factor",
    "lmm_two_factor_angle",
]
