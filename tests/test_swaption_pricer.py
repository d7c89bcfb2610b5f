"""Tests for the LMM-DDD Monte Carlo swaption pricer."""

from dataclasses import replace
from datetime import date, datetime
from zoneinfo import ZoneInfo

import numpy as np
import pytest

from conftest import NOTIONAL, grid_of_leg, hw_model
from irdlib.conventions.indices import EUR_EURIBOR_3M
from irdlib.conventions.legs import EUR_FIXED_1Y, EURIBOR_3M_FLOATING
from irdlib.conventions.types import LongShort, PayReceive
from irdlib.instruments.builders import fixed_ibor_swap, fixed_leg
from irdlib.instruments.swap import ResolvedSwap
from irdlib.instruments.swaption import ResolvedSwaption
from irdlib.pricer import swap as swap_pricer
from irdlib.pricer.swaption import LmmdddSwaptionMonteCarloPricer

EXPIRY = datetime(2026, 1, 13, 11, 0, tzinfo=ZoneInfo("Europe/Brussels"))
START = date(2026, 1, 15)
END = date(2031, 1, 15)
NB_PATHS = 10_000


def _swap(rates_provider, pay_receive=PayReceive.PAY, strike=None):
    swap = fixed_ibor_swap(START, END, EUR_FIXED_1Y, EURIBOR_3M_FLOATING, NOTIONAL, 0.0, pay_receive)
    if strike is None:
        strike = swap_pricer.par_rate(swap, rates_provider)
    return fixed_ibor_swap(START, END, EUR_FIXED_1Y, EURIBOR_3M_FLOATING, NOTIONAL, strike, pay_receive)


@pytest.fixture
def payer_swap(rates_provider):
    return _swap(rates_provider)


@pytest.fixture
def model(payer_swap, rates_provider):
    return hw_model(grid_of_leg(payer_swap.legs[1]), EUR_EURIBOR_3M, rates_provider)


def _pv(model, swaption, rates_provider, seed=1234, nb_paths=NB_PATHS):
    pricer = LmmdddSwaptionMonteCarloPricer(
        model=model,
        number_generator=np.random.default_rng(seed),
        nb_paths=nb_paths,
        path_number_block=2_500,
    )
    return pricer.present_value(swaption, rates_provider)


class TestSwaptionPricer:
    """Tests for physical swaption prices."""

    def test_atm_payer_value(self, model, payer_swap, rates_provider):
        """ATM payer is close to the normal-model approximation."""
        pv = _pv(model, ResolvedSwaption(EXPIRY, payer_swap), rates_provider)
        assert 10_000 < pv < 30_000

    def test_long_short(self, model, payer_swap, rates_provider):
        long_pv = _pv(model, ResolvedSwaption(EXPIRY, payer_swap), rates_provider)
        short_pv = _pv(model, ResolvedSwaption(EXPIRY, payer_swap, LongShort.SHORT), rates_provider)
        assert short_pv == pytest.approx(-long_pv, rel=1e-12)

    def test_payer_receiver_parity(self, model, rates_provider):
        """Payer minus receiver with the same strike is the forward swap."""
        strike = 0.025
        payer = _swap(rates_provider, PayReceive.PAY, strike)
        receiver = _swap(rates_provider, PayReceive.RECEIVE, strike)
        payer_pv = _pv(model, ResolvedSwaption(EXPIRY, payer), rates_provider)
        receiver_pv = _pv(model, ResolvedSwaption(EXPIRY, receiver), rates_provider)
        swap_pv = swap_pricer.present_value(payer, rates_provider)
        assert swap_pv < 0
        assert payer_pv - receiver_pv == pytest.approx(swap_pv, abs=2_500)

    def test_deep_out_of_the_money(self, model, rates_provider):
        swaption = ResolvedSwaption(EXPIRY, _swap(rates_provider, PayReceive.PAY, 0.10))
        assert _pv(model, swaption, rates_provider, nb_paths=2_000) == pytest.approx(0.0, abs=1.0)

    def test_deep_in_the_money(self, model, rates_provider):
        """A deep in the money swaption is worth its underlying swap."""
        swap = _swap(rates_provider, PayReceive.RECEIVE, 0.10)
        pv = _pv(model, ResolvedSwaption(EXPIRY, swap), rates_provider)
        swap_pv = swap_pricer.present_value(swap, rates_provider)
        assert pv == pytest.approx(swap_pv, rel=5e-3)

    def test_higher_volatility_higher_price(self, model, payer_swap, rates_provider):
        swaption = ResolvedSwaption(EXPIRY, payer_swap)
        low = _pv(model, swaption, rates_provider)
        high = _pv(replace(model, volatilities=2.0 * model.volatilities), swaption, rates_provider)
        assert high > low

    def test_swap_beyond_model_grid(self, rates_provider):
        short_grid = fixed_ibor_swap(START, date(2029, 1, 15), EUR_FIXED_1Y, EURIBOR_3M_FLOATING, NOTIONAL, 0.02)
        model = hw_model(grid_of_leg(short_grid.legs[1]), EUR_EURIBOR_3M, rates_provider)
        swaption = ResolvedSwaption(EXPIRY, _swap(rates_provider))
        with pytest.raises(ValueError):
            _pv(model, swaption, rates_provider, nb_paths=100)

    def test_rejects_other_currency(self, model, rates_provider):
        usd_leg = fixed_leg(START, END, EUR_FIXED_1Y, NOTIONAL, 0.02, PayReceive.RECEIVE, currency="USD")
        swaption = ResolvedSwaption(EXPIRY, ResolvedSwap(legs=(usd_leg,)))
        with pytest.raises(ValueError):
            _pv(model, swaption, rates_provider, nb_paths=100)
