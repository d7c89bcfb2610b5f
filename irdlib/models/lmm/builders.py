"""Construction of LMM-DDD parameters on a grid of Ibor dates.

All builders share the grid part: model times of the dates, accrual factors on
the Ibor index day count and multiplicative spreads implied by the curves
(ratio of the Ibor forward factor to the discounting forward factor on each
grid period). They differ by the volatility structure.
"""

from datetime import date, time
from typing import Sequence

import numpy as np

from irdlib.conventions.indices import IborIndex, OvernightIndex
from irdlib.curves.provider import RatesProvider
from irdlib.models.time_measure import SCALED_SECOND_TIME, TimeMeasurement

from .parameters import TIME_TOLERANCE, LiborMarketModelParameters


def _grid(
    ibor_dates: Sequence[date],
    ibor_index: IborIndex,
    rates_provider: RatesProvider,
    time_measure: TimeMeasurement,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    if len(ibor_dates) < 2:
        raise ValueError("At least two Ibor dates are required")
    valuation_date = rates_provider.valuation_date
    ibor_times = np.array(
        [time_measure.relative_time(valuation_date, d) for d in ibor_dates]
    )
    nb_periods = len(ibor_dates) - 1
    accrual_factors = np.empty(nb_periods)
    spreads = np.empty(nb_periods)
    for i in range(nb_periods):
        accrual_factors[i] = ibor_index.day_count.year_fraction(ibor_dates[i], ibor_dates[i + 1])
        fixing_date = ibor_index.calculate_fixing_from_effective(ibor_dates[i])
        observation = ibor_index.observation(fixing_date)
        ibor_rate = rates_provider.ibor_forward_rate(ibor_index, observation)
        df_start = rates_provider.discount_factor(ibor_index.currency, observation.effective_date)
        df_end = rates_provider.discount_factor(ibor_index.currency, observation.maturity_date)
        spreads[i] = (1.0 + accrual_factors[i] * ibor_rate) / (df_start / df_end)
    return ibor_times, accrual_factors, spreads


def _parameters(
    overnight_index: OvernightIndex,
    ibor_index: IborIndex,
    rates_provider: RatesProvider,
    valuation_zone: str,
    valuation_time: time,
    time_measure: TimeMeasurement,
    ibor_times: np.ndarray,
    accrual_factors: np.ndarray,
    spreads: np.ndarray,
    displacements: np.ndarray,
    volatilities: np.ndarray,
    mean_reversion: float,
) -> LiborMarketModelParameters:
    return LiborMarketModelParameters(
        overnight_index=overnight_index,
        ibor_index=ibor_index,
        valuation_date=rates_provider.valuation_date,
        valuation_time=valuation_time,
        valuation_zone=valuation_zone,
        ibor_times=ibor_times,
        accrual_factors=accrual_factors,
        multiplicative_spreads=spreads,
        displacements=displacements,
        volatilities=volatilities,
        mean_reversion=mean_reversion,
        time_measure=time_measure,
        time_tolerance=TIME_TOLERANCE,
    )


def lmm_hw(
    mean_reversion: float,
    sigma: float,
    ibor_dates: Sequence[date],
    overnight_index: OvernightIndex,
    ibor_index: IborIndex,
    rates_provider: RatesProvider,
    valuation_zone: str,
    valuation_time: time,
    time_measure: TimeMeasurement = SCALED_SECOND_TIME,
) -> LiborMarketModelParameters:
    """One-factor model reproducing Hull-White-like dynamics.

    Displacements are ``1 / accrual_factor`` and the volatility of period i is
    ``sigma / a * (exp(-a t_i) - exp(-a t_{i+1}))``, so the forwards move as in
    a Hull-White model with mean reversion ``a`` and volatility ``sigma``.

    Args:
        mean_reversion: Hull-White mean reversion a
        sigma: Hull-White volatility
        ibor_dates: Grid dates, first is the start of the first period
        overnight_index: Overnight index of the discounting curve
        ibor_index: Ibor index generated by the model
        rates_provider: Curves used for the multiplicative spreads
        valuation_zone: Time zone name of the valuation instant
        valuation_time: Local time of the valuation instant
        time_measure: Conversion of dates into model times

    Returns:
        The model parameters
    """
    if mean_reversion == 0.0:
        raise ValueError("Mean reversion must be non-zero")
    ibor_times, accrual_factors, spreads = _grid(
        ibor_dates, ibor_index, rates_provider, time_measure
    )
    a = mean_reversion
    volatilities = (
        sigma / a * (np.exp(-a * ibor_times[:-1]) - np.exp(-a * ibor_times[1:]))
    )[:, np.newaxis]
    return _parameters(
        overnight_index,
        ibor_index,
        rates_provider,
        valuation_zone,
        valuation_time,
        time_measure,
        ibor_times,
        accrual_factors,
        spreads,
        1.0 / accrual_factors,
        volatilities,
        mean_reversion,
    )


def lmm_one_factor(
    mean_reversion: float,
    vol_level: float,
    displacement: float,
    ibor_dates: Sequence[date],
    overnight_index: OvernightIndex,
    ibor_index: IborIndex,
    rates_provider: RatesProvider,
    valuation_zone: str,
    valuation_time: time,
    time_measure: TimeMeasurement = SCALED_SECOND_TIME,
) -> LiborMarketModelParameters:
    """One-factor model with a flat volatility and a common displacement."""
    ibor_times, accrual_factors, spreads = _grid(
        ibor_dates, ibor_index, rates_provider, time_measure
    )
    nb_periods = len(accrual_factors)
    return _parameters(
        overnight_index,
        ibor_index,
        rates_provider,
        valuation_zone,
        valuation_time,
        time_measure,
        ibor_times,
        accrual_factors,
        spreads,
        np.full(nb_periods, displacement),
        np.full((nb_periods, 1), vol_level),
        mean_reversion,
    )


def lmm_two_factor_angle(
    mean_reversion: float,
    vol_level: float,
    angle: float,
    vol_angle: float,
    displacement: float,
    ibor_dates: Sequence[date],
    overnight_index: OvernightIndex,
    ibor_index: IborIndex,
    rates_provider: RatesProvider,
    valuation_zone: str,
    valuation_time: time,
    time_measure: TimeMeasurement = SCALED_SECOND_TIME,
) -> LiborMarketModelParameters:
    """Two-factor model with factor loadings turning with maturity.

    Period i has volatilities ``vol_level + vol_angle * cos(t_i / 20 * angle)``
    and ``vol_level + vol_angle * sin(t_i / 20 * angle)``. With ``angle = 0``
    the second factor only carries ``vol_level``; with ``angle = pi / 2`` the
    short rate and the 20Y rate load on different factors.
    """
    ibor_times, accrual_factors, spreads = _grid(
        ibor_dates, ibor_index, rates_provider, time_measure
    )
    nb_periods = len(accrual_factors)
    phase = ibor_times[:-1] / 20.0 * angle
    volatilities = np.column_stack(
        (vol_level + vol_angle * np.cos(phase), vol_level + vol_angle * np.sin(phase))
    )
    return _parameters(
        overnight_index,
        ibor_index,
        rates_provider,
        valuation_zone,
        valuation_time,
        time_measure,
        ibor_times,
        accrual_factors,
        spreads,
        np.full(nb_periods, displacement),
        volatilities,
        mean_reversion,
    )


def ibor_dates_of_periods(start_dates: Sequence[date], end_date: date) -> list[date]:
    """Grid dates from the period start dates and the last period end."""
    dates = list(start_dates) + [end_date]
    if any(d1 >= d2 for d1, d2 in zip(dates[:-1], dates[1:], strict=True)):
        raise ValueError("Ibor dates must be strictly increasing")
    return dates
