"""Starting values of multi-curve equivalents read off the curves."""

from typing import Sequence

from irdlib.curves.provider import RatesProvider

from .multicurve import MulticurveEquivalent, MulticurveEquivalentSchedule, MulticurveEquivalentValues


def starting_values_rates(
    equivalent: MulticurveEquivalent, rates_provider: RatesProvider
) -> MulticurveEquivalentValues:
    """Today's values of the events of one multi-curve equivalent.

    Each list is valued over its own length: one discount factor per known
    amount, one forward per Ibor fixing and one compounded rate per overnight
    period.
    """
    discount_factors = [
        rates_provider.discount_factor(payment.currency, payment.payment_date)
        for payment in equivalent.discount_factor_payments
    ]
    ibor_rates = [
        rates_provider.ibor_forward_rate(computation.index, computation.observation)
        for computation in equivalent.ibor_computations
    ]
    on_rates = [
        rates_provider.overnight_compounded_period_rate(
            computation.index, computation.start_date, computation.end_date
        )
        for computation in equivalent.on_computations
    ]
    return MulticurveEquivalentValues(discount_factors, ibor_rates, on_rates)


def starting_values(
    schedule: MulticurveEquivalentSchedule | Sequence[MulticurveEquivalent],
    rates_provider: RatesProvider,
) -> list[MulticurveEquivalentValues]:
    """Starting values of every entry of a decision schedule."""
    equivalents = schedule.schedules if isinstance(schedule, MulticurveEquivalentSchedule) else schedule
    return [starting_values_rates(equivalent, rates_provider) for equivalent in equivalents]
