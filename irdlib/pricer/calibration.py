"""Calibration of LMM-DDD volatilities to swaption prices.

The model price of a swaption is matched to a market price by bisection on a
volatility level. Every model price in the search uses the same seed, so the
objective is a deterministic function of the level.
"""

import logging
from dataclasses import replace
from typing import Sequence

import numpy as np

from irdlib.curves.provider import RatesProvider
from irdlib.instruments.swaption import ResolvedSwaption
from irdlib.models.lmm.parameters import LiborMarketModelParameters

from .montecarlo.lmm import LmmdddMonteCarloEuropeanPricer

logger = logging.getLogger(__name__)


class CalibrationBracketError(ValueError):
    """Raised when the volatility bracket does not contain a solution."""

    pass


class SolverConvergenceError(RuntimeError):
    """Raised when the solver fails to converge within iteration limit."""

    pass


def model_with_level(
    model: LiborMarketModelParameters,
    level: float,
    parameter_indices: Sequence[int] | None = None,
) -> LiborMarketModelParameters:
    """Model with every listed volatility parameter set to ``level``.

    Args:
        model: Starting model
        level: Volatility value
        parameter_indices: Parameters to set, ordered by period then by
            factor; all of them by default
    """
    if parameter_indices is None:
        parameter_indices = range(model.parameter_count)
    for index in parameter_indices:
        model = model.with_parameter(index, level)
    return model


def calibrate_swaption_volatility(
    swaption: ResolvedSwaption,
    market_pv: float,
    rates_provider: RatesProvider,
    pricer: LmmdddMonteCarloEuropeanPricer,
    seed: int,
    *,
    parameter_indices: Sequence[int] | None = None,
    tolerance: float = 1e-2,
    max_iterations: int = 100,
    lower_bound: float = 1e-4,
    upper_bound: float = 1.0,
) -> tuple[float, LiborMarketModelParameters]:
    """Solve for the volatility level reproducing a swaption price.

    Uses bisection to find the level such that:
        PV(swaption, model at level) = market_pv

    Args:
        swaption: Calibration instrument
        market_pv: Target present value
        rates_provider: Curves of the pricing
        pricer: Swaption pricer; its model is the starting point of the
            calibration and its number generator is replaced by one seeded
            with ``seed`` for every price
        seed: Seed of the normal draws
        parameter_indices: Volatility parameters moved together, all of them
            by default
        tolerance: Absolute tolerance on the price difference
        max_iterations: Maximum number of bisection iterations
        lower_bound: Lower bound of the volatility search range
        upper_bound: Upper bound of the volatility search range

    Returns:
        Tuple of (level, model): the calibrated volatility level and the model
        carrying it

    Raises:
        CalibrationBracketError: If the price differences at the bounds have
            the same sign
        SolverConvergenceError: If the solver fails to converge within
            max_iterations
    """

    def objective(level: float) -> tuple[float, LiborMarketModelParameters]:
        model = model_with_level(pricer.model, level, parameter_indices)
        seeded = replace(pricer, number_generator=np.random.default_rng(seed))
        pv = seeded.present_value_double(swaption, rates_provider, model)
        logger.debug("Volatility level %.8f gives present value %.6f", level, pv)
        return pv - market_pv, model

    lower_value, lower_model = objective(lower_bound)
    upper_value, upper_model = objective(upper_bound)

    if abs(lower_value) <= tolerance:
        return lower_bound, lower_model
    if abs(upper_value) <= tolerance:
        return upper_bound, upper_model

    if lower_value * upper_value > 0:
        raise CalibrationBracketError(
            f"Volatility bracket does not contain a solution. "
            f"Price differences have same sign: "
            f"f({lower_bound:.6f})={lower_value:.6e}, "
            f"f({upper_bound:.6f})={upper_value:.6e}."
        )

    for _ in range(max_iterations):
        midpoint = 0.5 * (lower_bound + upper_bound)
        mid_value, mid_model = objective(midpoint)

        if abs(mid_value) <= tolerance:
            logger.debug("Calibrated volatility level %.8f", midpoint)
            return midpoint, mid_model

        if lower_value * mid_value <= 0:
            upper_bound = midpoint
            upper_value = mid_value
        else:
            lower_bound = midpoint
            lower_value = mid_value

    raise SolverConvergenceError(
        f"Calibration failed to converge within {max_iterations} iterations. "
        f"Final bracket: [{lower_bound:.8f}, {upper_bound:.8f}], "
        f"price differences: ({lower_value:.6e}, {upper_value:.6e})."
    )
