"""Block-wise Monte Carlo pricing.

Paths are generated and aggregated in blocks of ``path_number_block`` paths so
memory stays bounded; the last, smaller block takes the remaining paths. The
present value is the average of the discounted path values times the initial
value of the numeraire.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Sequence

import numpy as np

from irdlib.curves.provider import RatesProvider
from irdlib.pricer.decomposition.multicurve import (
    MulticurveEquivalent,
    MulticurveEquivalentSchedule,
    MulticurveEquivalentValues,
)

logger = logging.getLogger(__name__)

DEFAULT_PATH_NUMBER_BLOCK = 10_000


class MonteCarloPricingError(RuntimeError):
    """Raised when a block of simulated values is not finite."""


class MonteCarloPricer(ABC):
    """Path bookkeeping shared by the Monte Carlo pricers.

    Subclasses provide the ``nb_paths`` and ``path_number_block`` attributes.
    """

    nb_paths: int
    path_number_block: int

    def decomposition(self) -> tuple[int, int, int]:
        """Number of full blocks, block size and residual number of paths."""
        if self.nb_paths <= 0:
            raise ValueError(f"Number of paths must be positive, got {self.nb_paths}")
        if self.path_number_block <= 0:
            raise ValueError(f"Path block size must be positive, got {self.path_number_block}")
        nb_blocks, residual = divmod(self.nb_paths, self.path_number_block)
        return nb_blocks, self.path_number_block, residual

    def block_sizes(self) -> list[int]:
        nb_blocks, block, residual = self.decomposition()
        sizes = [block] * nb_blocks
        if residual > 0:
            sizes.append(residual)
        return sizes

    @abstractmethod
    def numeraire_initial_value(self, rates_provider: RatesProvider) -> float:
        """Today's value of the numeraire."""

    @abstractmethod
    def with_model(self, model) -> "MonteCarloPricer":
        """Copy of this pricer using another model."""

    @abstractmethod
    def present_value(self, product, rates_provider: RatesProvider, model=None) -> float:
        """Monte Carlo present value of ``product``."""

    def present_value_double(self, product, rates_provider: RatesProvider, model) -> float:
        """Present value under an explicit model, as used by calibration loops."""
        return self.present_value(product, rates_provider, model=model)

    def _average(self, block_totals: list[float], rates_provider: RatesProvider) -> float:
        pv = sum(block_totals) / self.nb_paths * self.numeraire_initial_value(rates_provider)
        logger.debug("Monte Carlo present value %.6f over %d paths", pv, self.nb_paths)
        return pv


def _block_total(values: np.ndarray, block: int) -> float:
    total = float(np.sum(values))
    if not np.isfinite(total):
        raise MonteCarloPricingError(f"Non-finite discounted values in a block of {block} paths")
    return total


class MonteCarloEuropeanPricer(MonteCarloPricer):
    """Monte Carlo pricer of products with a single decision time."""

    @abstractmethod
    def multicurve_equivalent(self, product) -> MulticurveEquivalent:
        """Multi-curve equivalent of the product, with its decision time."""

    @abstractmethod
    def initial_values(
        self, equivalent: MulticurveEquivalent, rates_provider: RatesProvider
    ) -> MulticurveEquivalentValues:
        """Model state today."""

    @abstractmethod
    def evolve(
        self, initial_values: MulticurveEquivalentValues, expiry: datetime, nb_paths: int
    ) -> np.ndarray:
        """Model state at ``expiry`` for ``nb_paths`` new paths."""

    @abstractmethod
    def aggregation(
        self, product, equivalent: MulticurveEquivalent, values: np.ndarray
    ) -> np.ndarray:
        """Numeraire-rebased value of the product on each path."""

    def present_value(self, product, rates_provider: RatesProvider, model=None) -> float:
        """Monte Carlo present value of ``product``.

        Args:
            product: Product priced by this pricer
            rates_provider: Curves giving the initial model state
            model: Model to use instead of the pricer's own

        Returns:
            Present value in the product currency

        Raises:
            MonteCarloPricingError: If a block of path values is not finite
        """
        if model is not None:
            return self.with_model(model).present_value(product, rates_provider)
        equivalent = self.multicurve_equivalent(product)
        initial = self.initial_values(equivalent, rates_provider)
        totals = []
        for block in self.block_sizes():
            logger.debug("Pricing block of %d paths", block)
            values = self.evolve(initial, equivalent.decision_time, block)
            totals.append(_block_total(self.aggregation(product, equivalent, values), block))
        return self._average(totals, rates_provider)


class MonteCarloMultiDatesPricer(MonteCarloPricer):
    """Monte Carlo pricer of products with several decision times."""

    @abstractmethod
    def decision_schedule(self, product) -> MulticurveEquivalentSchedule:
        """Chronological multi-curve equivalents of the product."""

    @abstractmethod
    def initial_values(
        self, schedule: MulticurveEquivalentSchedule, rates_provider: RatesProvider
    ) -> MulticurveEquivalentValues:
        """Model state today."""

    @abstractmethod
    def evolve(
        self,
        initial_values: MulticurveEquivalentValues,
        expiries: Sequence[datetime],
        nb_paths: int,
    ) -> np.ndarray:
        """Model state at each expiry for ``nb_paths`` new paths."""

    @abstractmethod
    def aggregation(
        self, product, schedule: MulticurveEquivalentSchedule, values: np.ndarray
    ) -> np.ndarray:
        """Numeraire-rebased value of the product on each path."""

    def present_value(self, product, rates_provider: RatesProvider, model=None) -> float:
        """Monte Carlo present value of ``product``, see the European pricer."""
        if model is not None:
            return self.with_model(model).present_value(product, rates_provider)
        schedule = self.decision_schedule(product)
        initial = self.initial_values(schedule, rates_provider)
        totals = []
        for block in self.block_sizes():
            logger.debug("Pricing block of %d paths over %d dates", block, schedule.expiries_count)
            values = self.evolve(initial, schedule.decision_times, block)
            totals.append(_block_total(self.aggregation(product, schedule, values), block))
        return self._average(totals, rates_provider)
