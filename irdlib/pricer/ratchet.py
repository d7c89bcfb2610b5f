"""Monte Carlo pricer of Ibor ratchet legs in the LMM-DDD model.

Each coupon rate depends on the previous coupon rate and on the Ibor fixing
of its period, so the forwards are simulated at every fixing instant and the
coupons are computed in order along each path.
"""

import numpy as np

from irdlib.instruments.swap import ResolvedSwap
from irdlib.pricer.decomposition.decision_schedule import decision_schedule_ratchet, ratchet_leg
from irdlib.pricer.decomposition.multicurve import MulticurveEquivalentSchedule

from .montecarlo.lmm import LmmdddMonteCarloMultiDatesPricer


class LmmdddRatchetMonteCarloPricer(LmmdddMonteCarloMultiDatesPricer):
    """Swap with a single Ibor ratchet leg.

    The rate of the first coupon is computed with a previous rate of 0.
    """

    def decision_schedule(self, product: ResolvedSwap) -> MulticurveEquivalentSchedule:
        return decision_schedule_ratchet(product)

    def aggregation(
        self,
        product: ResolvedSwap,
        schedule: MulticurveEquivalentSchedule,
        values: np.ndarray,
    ) -> np.ndarray:
        periods = ratchet_leg(product).payment_periods
        nb_paths = values.shape[0]
        pv = np.zeros(nb_paths)
        previous_rate = np.zeros(nb_paths)
        for step, (equivalent, period) in enumerate(zip(schedule.schedules, periods, strict=True)):
            forwards = values[:, step, :]
            rebased = self.discounting(forwards)
            computation = period.accrual_periods[0].rate_computation
            ibor_rate = self.ibor_rates(equivalent.ibor_computations, forwards)[:, 0]
            payment = equivalent.ibor_payments[0]
            pay_index = self.grid_indices([payment.payment_date])[0]
            rate = computation.rate(previous_rate, ibor_rate)
            pv += payment.amount * rate * rebased[:, pay_index]
            pv += self.discount_factor_payments_value(equivalent.discount_factor_payments, rebased)
            previous_rate = rate
        return pv
