"""Shared market data, products and models for the test suite."""

from datetime import date, time

import numpy as np
import pytest

from irdlib.conventions.indices import EUR_ESTR, EUR_EURIBOR_3M, EUR_EURIBOR_6M
from irdlib.conventions.legs import EURIBOR_3M_FLOATING
from irdlib.conventions.types import PayReceive
from irdlib.curves import RatesProvider, create_flat_discount_curve, create_flat_ibor_curve
from irdlib.instruments.builders import ibor_leg
from irdlib.instruments.swap import ResolvedSwap
from irdlib.models.lmm import ibor_dates_of_periods, lmm_hw

VALUATION_DATE = date(2025, 1, 15)
VALUATION_TIME = time(10, 29)
VALUATION_ZONE = "Europe/London"

DISCOUNT_RATE = 0.020
EURIBOR_3M_RATE = 0.022
EURIBOR_6M_RATE = 0.023

NOTIONAL = 1_000_000.0
MEAN_REVERSION = 0.02
HW_SIGMA = 0.01


@pytest.fixture
def valuation_date():
    return VALUATION_DATE


@pytest.fixture
def rates_provider():
    """Flat ESTR discounting with flat EURIBOR 3M and 6M projection."""
    return RatesProvider(
        valuation_date=VALUATION_DATE,
        discount_curves={
            "EUR": create_flat_discount_curve(VALUATION_DATE, "EUR", DISCOUNT_RATE, name="EUR-ESTR"),
        },
        ibor_curves={
            EUR_EURIBOR_3M.name: create_flat_ibor_curve(
                VALUATION_DATE, EUR_EURIBOR_3M.name, EURIBOR_3M_RATE
            ),
            EUR_EURIBOR_6M.name: create_flat_ibor_curve(
                VALUATION_DATE, EUR_EURIBOR_6M.name, EURIBOR_6M_RATE
            ),
        },
    )


@pytest.fixture
def ibor_leg_3m():
    """Two-year EURIBOR 3M receiver leg starting one year forward."""
    return ibor_leg(
        date(2026, 1, 15),
        date(2028, 1, 15),
        EURIBOR_3M_FLOATING,
        NOTIONAL,
        PayReceive.RECEIVE,
    )


@pytest.fixture
def ibor_swap_3m(ibor_leg_3m):
    return ResolvedSwap(legs=(ibor_leg_3m,))


def grid_of_leg(leg):
    """Model grid made of the accrual dates of a leg."""
    starts = [period.start_date for period in leg.payment_periods]
    return ibor_dates_of_periods(starts, leg.payment_periods[-1].end_date)


def hw_model(ibor_dates, ibor_index, rates_provider, sigma=HW_SIGMA):
    return lmm_hw(
        MEAN_REVERSION,
        sigma,
        ibor_dates,
        EUR_ESTR,
        ibor_index,
        rates_provider,
        VALUATION_ZONE,
        VALUATION_TIME,
    )


@pytest.fixture
def model_3m(ibor_leg_3m, rates_provider):
    """Hull-White-like model on the accrual dates of the EURIBOR 3M leg."""
    return hw_model(grid_of_leg(ibor_leg_3m), EUR_EURIBOR_3M, rates_provider)


@pytest.fixture
def rng():
    return np.random.default_rng(20250115)
