"""Monte Carlo pricer of physically settled swaptions in the LMM-DDD model."""

import numpy as np

from irdlib.instruments.swaption import ResolvedSwaption
from irdlib.pricer.decomposition.multicurve import MulticurveEquivalent

from .montecarlo.lmm import LmmdddMonteCarloEuropeanPricer


class LmmdddSwaptionMonteCarloPricer(LmmdddMonteCarloEuropeanPricer):
    """Physical swaption: on each path the holder enters the underlying swap
    at expiry if its value is positive.

    Examples:
        >>> pricer = LmmdddSwaptionMonteCarloPricer(
        ...     model=model,
        ...     number_generator=np.random.default_rng(1234),
        ...     nb_paths=10_000,
        ...     path_number_block=1_000,
        ... )
        >>> pv = pricer.present_value(swaption, rates_provider)
    """

    def aggregation(
        self,
        product: ResolvedSwaption,
        equivalent: MulticurveEquivalent,
        values: np.ndarray,
    ) -> np.ndarray:
        rebased = self.discounting(values)
        swap_value = self.equivalent_value(equivalent, values, rebased)
        return product.long_short.sign() * np.maximum(swap_value, 0.0)
