"""Monte Carlo pricers of CMS and CMS spread periods in the LMM-DDD model.

The underlying swaps pay a unit fixed rate, so on each path the swap rate is
minus the value of the floating leg over the value of the fixed leg.
"""

from typing import Sequence

import numpy as np

from irdlib.instruments.cms import CmsPeriod, CmsSpreadPeriod
from irdlib.instruments.rates import IborRateComputation
from irdlib.instruments.swap import NotionalExchange
from irdlib.pricer.decomposition.decision_schedule import multicurve_equivalent
from irdlib.pricer.decomposition.multicurve import MulticurveEquivalent

from .montecarlo.lmm import LmmdddMonteCarloEuropeanPricer


class _SwapRateMixin:
    """Swap rates read off the simulated forwards."""

    def swap_rate(
        self,
        fixed_payments: Sequence[NotionalExchange],
        ibor_computations: Sequence[IborRateComputation],
        ibor_payments: Sequence[NotionalExchange],
        forwards: np.ndarray,
        rebased: np.ndarray,
    ) -> np.ndarray:
        """Path swap rates of a swap with a unit fixed rate."""
        pvbp = self.discount_factor_payments_value(fixed_payments, rebased)
        float_value = self.ibor_payments_value(ibor_computations, ibor_payments, forwards, rebased)
        return -float_value / pvbp


class LmmdddCmsPeriodMonteCarloPricer(_SwapRateMixin, LmmdddMonteCarloEuropeanPricer):
    """CMS coupon, caplet or floorlet.

    The coupon amount is the last known amount of the multi-curve
    equivalent; the other known amounts are the fixed coupons of the
    underlying swap.
    """

    def aggregation(
        self,
        product: CmsPeriod,
        equivalent: MulticurveEquivalent,
        values: np.ndarray,
    ) -> np.ndarray:
        rebased = self.discounting(values)
        *fixed_payments, coupon = equivalent.discount_factor_payments
        rate = self.swap_rate(
            fixed_payments,
            equivalent.ibor_computations,
            equivalent.ibor_payments,
            values,
            rebased,
        )
        pay_index = self.grid_indices([coupon.payment_date])[0]
        return coupon.amount * rebased[:, pay_index] * product.payoff(rate)


class LmmdddCmsSpreadPeriodMonteCarloPricer(_SwapRateMixin, LmmdddMonteCarloEuropeanPricer):
    """CMS spread coupon, caplet or floorlet.

    The events of the first underlying swap come first in the multi-curve
    equivalent; their counts split the lists between the two swaps.
    """

    def aggregation(
        self,
        product: CmsSpreadPeriod,
        equivalent: MulticurveEquivalent,
        values: np.ndarray,
    ) -> np.ndarray:
        rebased = self.discounting(values)
        first = multicurve_equivalent(product.underlying_swap1)
        nb_fixed = len(first.discount_factor_payments)
        nb_ibor = len(first.ibor_computations)
        *fixed_payments, coupon = equivalent.discount_factor_payments

        rate1 = self.swap_rate(
            fixed_payments[:nb_fixed],
            equivalent.ibor_computations[:nb_ibor],
            equivalent.ibor_payments[:nb_ibor],
            values,
            rebased,
        )
        rate2 = self.swap_rate(
            fixed_payments[nb_fixed:],
            equivalent.ibor_computations[nb_ibor:],
            equivalent.ibor_payments[nb_ibor:],
            values,
            rebased,
        )
        pay_index = self.grid_indices([coupon.payment_date])[0]
        return rebased[:, pay_index] * product.payoff(rate1, rate2)
