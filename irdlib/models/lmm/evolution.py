"""Monte Carlo evolution of the LMM-DDD forwards.

Forwards are evolved under the terminal measure with a predictor-corrector
scheme on the drift. Steps longer than ``max_jump`` are cut into equal
sub-jumps. All arrays are laid out path first: forwards have shape
``(paths, periods)``.

The normal draws of a whole path generation are taken from the generator in
one call of shape ``(paths, sub_jumps, factors)``. Generating N paths in one
call or in consecutive blocks therefore produces the same paths.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

import numpy as np

from irdlib.pricer.decomposition.multicurve import MulticurveEquivalentValues

from .parameters import LiborMarketModelParameters

logger = logging.getLogger(__name__)

MAX_JUMP_DEFAULT = 1.0


class NumericalInstabilityError(ArithmeticError):
    """Raised when an evolved forward is not finite."""


@dataclass(frozen=True)
class LiborMarketModelMonteCarloEvolution:
    """Path generator of the LMM-DDD forwards.

    Attributes:
        max_jump: Longest time step of the discretisation, in model time
    """

    max_jump: float = MAX_JUMP_DEFAULT

    def __post_init__(self):
        if not self.max_jump > 0.0:
            raise ValueError(f"Maximum jump must be positive, got {self.max_jump}")

    def evolve_one_step(
        self,
        expiry: datetime,
        initial_values: MulticurveEquivalentValues,
        model: LiborMarketModelParameters,
        number_generator: np.random.Generator,
        nb_paths: int,
    ) -> list[MulticurveEquivalentValues]:
        """Forwards at ``expiry``, one values object per path."""
        forwards = self.evolve_one_step_fast(
            expiry, initial_values, model, number_generator, nb_paths
        )
        return [MulticurveEquivalentValues(on_rates=row) for row in forwards]

    def evolve_one_step_fast(
        self,
        expiry: datetime,
        initial_values: MulticurveEquivalentValues,
        model: LiborMarketModelParameters,
        number_generator: np.random.Generator,
        nb_paths: int,
    ) -> np.ndarray:
        """Forwards at ``expiry`` as an array of shape ``(paths, periods)``."""
        step_time = model.relative_time(expiry)
        paths = self.path_generator_forwards(
            [step_time],
            _initial_forwards(initial_values, model, nb_paths),
            model,
            number_generator,
        )
        return paths[0]

    def evolve_multi_steps(
        self,
        expiries: Sequence[datetime],
        initial_values: MulticurveEquivalentValues,
        model: LiborMarketModelParameters,
        number_generator: np.random.Generator,
        nb_paths: int,
    ) -> list[list[MulticurveEquivalentValues]]:
        """Forwards at each expiry, indexed by path then by expiry."""
        forwards = self.evolve_multi_steps_fast(
            expiries, initial_values, model, number_generator, nb_paths
        )
        return [
            [MulticurveEquivalentValues(on_rates=row) for row in path]
            for path in forwards
        ]

    def evolve_multi_steps_fast(
        self,
        expiries: Sequence[datetime],
        initial_values: MulticurveEquivalentValues,
        model: LiborMarketModelParameters,
        number_generator: np.random.Generator,
        nb_paths: int,
    ) -> np.ndarray:
        """Forwards at each expiry as an array of shape ``(paths, expiries, periods)``."""
        step_times = [model.relative_time(expiry) for expiry in expiries]
        paths = self.path_generator_forwards(
            step_times,
            _initial_forwards(initial_values, model, nb_paths),
            model,
            number_generator,
        )
        return np.transpose(paths, (1, 0, 2))

    def jump_times(self, start: float, end: float) -> np.ndarray:
        """Discretisation times from ``start`` to ``end``, both included."""
        length = end - start
        if length < self.max_jump:
            return np.array([start, end])
        nb_jumps = math.ceil(length / self.max_jump)
        return start + np.arange(nb_jumps + 1) * length / nb_jumps

    def path_generator_forwards(
        self,
        step_times: Sequence[float],
        init_forwards: np.ndarray,
        model: LiborMarketModelParameters,
        number_generator: np.random.Generator,
    ) -> np.ndarray:
        """Evolve forwards through consecutive step times.

        Args:
            step_times: Non-negative, non-decreasing model times
            init_forwards: Forwards today, shape ``(paths, periods)``
            model: Model parameters
            number_generator: Source of the normal draws

        Returns:
            Forwards at each step time, shape ``(steps, paths, periods)``

        Raises:
            ValueError: If the step times are negative or decreasing
            NumericalInstabilityError: If a forward becomes non-finite
        """
        step_times = np.asarray(step_times, dtype=float)
        if np.any(step_times < 0.0):
            raise ValueError("Step times must not be before the valuation time")
        if np.any(np.diff(step_times) < 0.0):
            raise ValueError("Step times must be non-decreasing")

        forwards = np.array(init_forwards, dtype=float, ndmin=2)
        nb_paths, nb_periods = forwards.shape
        if nb_periods != model.ibor_periods_count:
            raise ValueError(
                f"Initial forwards have {nb_periods} periods, model has {model.ibor_periods_count}"
            )

        starts = np.concatenate(([0.0], step_times[:-1]))
        jumps = [self.jump_times(start, end) for start, end in zip(starts, step_times, strict=True)]
        nb_sub_jumps = sum(len(jump) - 1 for jump in jumps)
        logger.debug(
            "Generating %d paths over %d steps and %d sub-jumps",
            nb_paths,
            len(step_times),
            nb_sub_jumps,
        )
        normals = number_generator.standard_normal((nb_paths, nb_sub_jumps, model.factor_count))

        result = np.empty((len(step_times), nb_paths, nb_periods))
        offset = 0
        for step, jump in enumerate(jumps):
            nb_jumps = len(jump) - 1
            forwards = self.step_predictor_corrector(
                jump, forwards, model, normals[:, offset:offset + nb_jumps, :]
            )
            offset += nb_jumps
            result[step] = forwards
        return result

    def step_predictor_corrector(
        self,
        jump_times: np.ndarray,
        forwards: np.ndarray,
        model: LiborMarketModelParameters,
        normals: np.ndarray,
    ) -> np.ndarray:
        """Evolve forwards over consecutive jumps with a predictor-corrector drift.

        Forwards whose period starts before the end of a jump (up to the time
        tolerance) are left unchanged. The remaining ones are updated from the
        last period backwards: the last forward has no drift, each earlier one
        uses the average of the drift computed with today's forwards and the
        drift computed with the already updated later forwards.

        Args:
            jump_times: Times ``t_0 < ... < t_J``
            forwards: Forwards at ``t_0``, shape ``(paths, periods)``
            model: Model parameters
            normals: Standard normal draws, shape ``(paths, J, factors)``

        Returns:
            A new array of forwards at ``t_J``
        """
        f = np.array(forwards, dtype=float)
        gamma = model.volatilities
        displacements = model.displacements
        inv_accruals = 1.0 / model.accrual_factors
        covariance = gamma @ gamma.T
        nb_periods = model.ibor_periods_count

        for j in range(len(jump_times) - 1):
            t_end = jump_times[j + 1]
            dt = t_end - jump_times[j]
            alpha = math.exp(model.mean_reversion * t_end)
            index = int(np.searchsorted(model.ibor_times, t_end - model.time_tolerance, side="left"))
            if index >= nb_periods:
                continue
            n = nb_periods - index
            disp = displacements[index:]
            inv_delta = inv_accruals[index:]
            salpha2 = covariance[index:, index:] * alpha * alpha

            cc = math.sqrt(dt) * alpha * (normals[:, j, :] @ gamma[index:].T) - 0.5 * np.diag(salpha2) * dt
            live = f[:, index:]
            coef_predict = (live + disp) / (live + inv_delta)
            coef_correct = np.empty_like(coef_predict)

            live[:, n - 1] = (live[:, n - 1] + disp[n - 1]) * np.exp(cc[:, n - 1]) - disp[n - 1]
            for k in range(n - 2, -1, -1):
                coef_correct[:, k + 1] = (live[:, k + 1] + disp[k + 1]) / (live[:, k + 1] + inv_delta[k + 1])
                weights = salpha2[k + 1:, k]
                mu_predict = coef_predict[:, k + 1:] @ weights
                mu_correct = coef_correct[:, k + 1:] @ weights
                live[:, k] = (live[:, k] + disp[k]) * np.exp(
                    -0.5 * (mu_predict + mu_correct) * dt + cc[:, k]
                ) - disp[k]

            if not np.all(np.isfinite(live)):
                raise NumericalInstabilityError(
                    f"Non-finite forward after jump to time {t_end:.6f}"
                )
        return f


def _initial_forwards(
    initial_values: MulticurveEquivalentValues,
    model: LiborMarketModelParameters,
    nb_paths: int,
) -> np.ndarray:
    if nb_paths <= 0:
        raise ValueError(f"Number of paths must be positive, got {nb_paths}")
    forwards = np.asarray(initial_values.on_rates, dtype=float)
    if forwards.shape != (model.ibor_periods_count,):
        raise ValueError(
            f"Expected {model.ibor_periods_count} initial forwards, got {forwards.shape[0]}"
        )
    return np.tile(forwards, (nb_paths, 1))
