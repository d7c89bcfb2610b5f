"""Monte Carlo pricing framework and its LMM-DDD implementation."""

from .base import (
    DEFAULT_PATH_NUMBER_BLOCK,
    MonteCarloEuropeanPricer,
    MonteCarloMultiDatesPricer,
    MonteCarloPricer,
    MonteCarloPricingError,
)
from .lmm import LmmdddMonteCarlo, LmmdddMonteCarloEuropeanPricer, LmmdddMonteCarloMultiDatesPricer
from .rebasing import rebased_discount_factors

__all__ = [
    "DEFAULT_PATH_NUMBER_BLOCK",
    "LmmdddMonteCarlo",
    "LmmdddMonteCarloEuropeanPricer",
    "LmmdddMonteCarloMultiDatesPricer",
    "MonteCarloEuropeanPricer",
    "MonteCarloMultiDatesPricer",
    "MonteCarloPricer",
    "MonteCarloPricingError",
    "rebased_discount_factors",
]
