"""Monte Carlo pricers in the LMM-DDD model.

The model state is the vector of discounting forwards on the model grid. Path
values are expressed in units of the numeraire, the discount bond maturing on
the last grid date, so the numeraire value today is the discount factor to
that date.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Sequence

import numpy as np

from irdlib.curves.provider import RatesProvider
from irdlib.instruments.rates import IborRateComputation, OvernightCompoundedRateComputation
from irdlib.instruments.swap import NotionalExchange
from irdlib.models.lmm.evolution import LiborMarketModelMonteCarloEvolution
from irdlib.models.lmm.parameters import LiborMarketModelParameters
from irdlib.pricer.decomposition.decision_schedule import decision_schedule
from irdlib.pricer.decomposition.multicurve import (
    MulticurveEquivalent,
    MulticurveEquivalentSchedule,
    MulticurveEquivalentValues,
)

from .base import DEFAULT_PATH_NUMBER_BLOCK, MonteCarloEuropeanPricer, MonteCarloMultiDatesPricer
from .rebasing import rebased_discount_factors


class LmmdddMonteCarlo:
    """Model-side operations shared by the LMM-DDD pricers.

    Subclasses provide a ``model`` attribute.
    """

    model: LiborMarketModelParameters

    def numeraire_initial_value(self, rates_provider: RatesProvider) -> float:
        return rates_provider.discount_factor(self.model.currency, float(self.model.ibor_times[-1]))

    def with_model(self, model: LiborMarketModelParameters):
        return replace(self, model=model)

    def check_currency(self, equivalents: Sequence[MulticurveEquivalent]) -> None:
        """Reject payments in another currency than the model's.

        Raises:
            ValueError: If a payment is not in the model currency
        """
        for equivalent in equivalents:
            if equivalent.currency not in (None, self.model.currency):
                raise ValueError(
                    f"Payments in {equivalent.currency} cannot be valued in a "
                    f"{self.model.currency} model"
                )

    def model_initial_values(self, rates_provider: RatesProvider) -> MulticurveEquivalentValues:
        """Discounting forwards of the model grid read off the discount curve."""
        curve = rates_provider.discount_curve(self.model.currency)
        discount_factors = np.array([curve.df(float(t)) for t in self.model.ibor_times])
        forwards = (discount_factors[:-1] / discount_factors[1:] - 1.0) / self.model.accrual_factors
        return MulticurveEquivalentValues(on_rates=forwards)

    def discounting(self, forwards: np.ndarray) -> np.ndarray:
        """Rebased discount factors of every grid date on every path."""
        return rebased_discount_factors(forwards, self.model.accrual_factors)

    def grid_indices(self, dates: Sequence[date]) -> np.ndarray:
        """Grid index of each date.

        Raises:
            ValueError: If a date is after the last grid date
        """
        times = [self.model.relative_time(d) for d in dates]
        indices = np.asarray(self.model.ibor_time_index(times), dtype=int)
        if np.any(indices > self.model.ibor_periods_count):
            late = [d for d, i in zip(dates, indices, strict=True) if i > self.model.ibor_periods_count]
            raise ValueError(f"Dates {late} are after the last date of the model grid")
        return indices

    def discount_factor_payments_value(
        self, payments: Sequence[NotionalExchange], rebased: np.ndarray
    ) -> np.ndarray:
        """Path values of known amounts."""
        if not payments:
            return np.zeros(rebased.shape[0])
        indices = self.grid_indices([p.payment_date for p in payments])
        amounts = np.array([p.amount for p in payments])
        return rebased[:, indices] @ amounts

    def ibor_rates(
        self, computations: Sequence[IborRateComputation], forwards: np.ndarray
    ) -> np.ndarray:
        """Path Ibor rates of the fixings, shape ``(paths, fixings)``."""
        effective = self.grid_indices([c.effective_date for c in computations])
        if np.any(effective >= self.model.ibor_periods_count):
            raise ValueError("Ibor fixing starts on or after the last date of the model grid")
        return self.model.ibor_rate_from_dsc_forwards(forwards[:, effective], effective)

    def ibor_payments_value(
        self,
        computations: Sequence[IborRateComputation],
        payments: Sequence[NotionalExchange],
        forwards: np.ndarray,
        rebased: np.ndarray,
    ) -> np.ndarray:
        """Path values of amounts paid on Ibor fixings."""
        if not computations:
            return np.zeros(rebased.shape[0])
        paying = self.grid_indices([p.payment_date for p in payments])
        amounts = np.array([p.amount for p in payments])
        rates = self.ibor_rates(computations, forwards)
        return (rates * rebased[:, paying]) @ amounts

    def on_payments_value(
        self,
        computations: Sequence[OvernightCompoundedRateComputation],
        payments: Sequence[NotionalExchange],
        rebased: np.ndarray,
    ) -> np.ndarray:
        """Path values of amounts paid on compounded overnight periods.

        The compounded rate is read off the rebased discount factors of the
        period start and end dates.
        """
        if not computations:
            return np.zeros(rebased.shape[0])
        starts = self.grid_indices([c.start_date for c in computations])
        ends = self.grid_indices([c.end_date for c in computations])
        paying = self.grid_indices([p.payment_date for p in payments])
        year_fractions = np.array([c.year_fraction for c in computations])
        amounts = np.array([p.amount for p in payments])
        rates = (rebased[:, starts] / rebased[:, ends] - 1.0) / year_fractions
        return (rates * rebased[:, paying]) @ amounts

    def equivalent_value(
        self, equivalent: MulticurveEquivalent, forwards: np.ndarray, rebased: np.ndarray
    ) -> np.ndarray:
        """Path values of all the events of a multi-curve equivalent."""
        return (
            self.discount_factor_payments_value(equivalent.discount_factor_payments, rebased)
            + self.ibor_payments_value(
                equivalent.ibor_computations, equivalent.ibor_payments, forwards, rebased
            )
            + self.on_payments_value(equivalent.on_computations, equivalent.on_payments, rebased)
        )


@dataclass(frozen=True, eq=False)
class LmmdddMonteCarloEuropeanPricer(LmmdddMonteCarlo, MonteCarloEuropeanPricer):
    """European Monte Carlo pricer in the LMM-DDD model.

    Subclasses implement ``aggregation`` for a product type. The ``values``
    passed to it are the forwards at the decision time, shape
    ``(paths, periods)``.

    Attributes:
        model: Model parameters
        number_generator: Source of the normal draws, advanced by each pricing
        nb_paths: Total number of paths
        path_number_block: Number of paths generated at once
        evolution: Path generator
    """

    model: LiborMarketModelParameters
    number_generator: np.random.Generator
    nb_paths: int
    path_number_block: int = DEFAULT_PATH_NUMBER_BLOCK
    evolution: LiborMarketModelMonteCarloEvolution = field(
        default_factory=LiborMarketModelMonteCarloEvolution
    )

    def multicurve_equivalent(self, product) -> MulticurveEquivalent:
        return decision_schedule(product).schedules[0]

    def initial_values(
        self, equivalent: MulticurveEquivalent, rates_provider: RatesProvider
    ) -> MulticurveEquivalentValues:
        self.check_currency((equivalent,))
        return self.model_initial_values(rates_provider)

    def evolve(
        self, initial_values: MulticurveEquivalentValues, expiry: datetime, nb_paths: int
    ) -> np.ndarray:
        return self.evolution.evolve_one_step_fast(
            expiry, initial_values, self.model, self.number_generator, nb_paths
        )


@dataclass(frozen=True, eq=False)
class LmmdddMonteCarloMultiDatesPricer(LmmdddMonteCarlo, MonteCarloMultiDatesPricer):
    """Multi-dates Monte Carlo pricer in the LMM-DDD model.

    The ``values`` passed to ``aggregation`` are the forwards at each decision
    time, shape ``(paths, dates, periods)``.
    """

    model: LiborMarketModelParameters
    number_generator: np.random.Generator
    nb_paths: int
    path_number_block: int = DEFAULT_PATH_NUMBER_BLOCK
    evolution: LiborMarketModelMonteCarloEvolution = field(
        default_factory=LiborMarketModelMonteCarloEvolution
    )

    def initial_values(
        self, schedule: MulticurveEquivalentSchedule, rates_provider: RatesProvider
    ) -> MulticurveEquivalentValues:
        self.check_currency(schedule.schedules)
        return self.model_initial_values(rates_provider)

    def evolve(
        self,
        initial_values: MulticurveEquivalentValues,
        expiries: Sequence[datetime],
        nb_paths: int,
    ) -> np.ndarray:
        return self.evolution.evolve_multi_steps_fast(
            expiries, initial_values, self.model, self.number_generator, nb_paths
        )
