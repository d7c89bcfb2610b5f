"""Tests for the LMM-DDD Monte Carlo ratchet pricer."""

from datetime import date

import numpy as np
import pytest

from conftest import NOTIONAL
from irdlib.conventions.legs import EUR_FIXED_1Y, EURIBOR_3M_FLOATING
from irdlib.conventions.types import PayReceive
from irdlib.instruments.builders import fixed_ibor_swap
from irdlib.instruments.ratchet import COEFFICIENTS_IBOR, ibor_ratchet_leg
from irdlib.instruments.swap import ResolvedSwap
from irdlib.pricer import swap as swap_pricer
from irdlib.pricer.ratchet import LmmdddRatchetMonteCarloPricer

NB_PATHS = 5_000

# Ibor capped at 2.5%
COEFFICIENTS_CAPPED = (0.0, 1.0, 0.0, 0.0, 0.0, -1.0, 0.0, 0.0, 0.025)
# Ibor floored at the previous coupon rate
COEFFICIENTS_STICKY = (0.0, 1.0, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0, 1.0)


def _ratchet(coefficients, first_coefficients=COEFFICIENTS_IBOR):
    leg = ibor_ratchet_leg(
        date(2026, 1, 15),
        date(2028, 1, 15),
        EURIBOR_3M_FLOATING,
        NOTIONAL,
        PayReceive.RECEIVE,
        coefficients,
        first_coefficients,
    )
    return ResolvedSwap(legs=(leg,))


def _pv(model, product, rates_provider, seed=314, nb_paths=NB_PATHS):
    pricer = LmmdddRatchetMonteCarloPricer(
        model=model,
        number_generator=np.random.default_rng(seed),
        nb_paths=nb_paths,
        path_number_block=2_000,
    )
    return pricer.present_value(product, rates_provider)


class TestRatchetPricer:
    """Tests for Ibor ratchet legs."""

    def test_plain_ibor_ratchet_matches_ibor_leg(self, model_3m, ibor_swap_3m, rates_provider):
        pv = _pv(model_3m, _ratchet(COEFFICIENTS_IBOR), rates_provider, nb_paths=10_000)
        expected = swap_pricer.present_value(ibor_swap_3m, rates_provider)
        assert pv == pytest.approx(expected, abs=1_500.0)

    @pytest.mark.slow
    def test_plain_ibor_ratchet_converges(self, model_3m, ibor_swap_3m, rates_provider):
        """With 100,000 paths the ratchet is within 1% of the discounted Ibor leg."""
        pricer = LmmdddRatchetMonteCarloPricer(
            model=model_3m,
            number_generator=np.random.default_rng(2025),
            nb_paths=100_000,
            path_number_block=10_000,
        )
        pv = pricer.present_value(_ratchet(COEFFICIENTS_IBOR), rates_provider)
        expected = swap_pricer.present_value(ibor_swap_3m, rates_provider)
        assert pv == pytest.approx(expected, rel=1e-2)

    def test_fixed_ibor_swap_scenario(self, model_3m, rates_provider):
        """Two-year 2% payer swap with its Ibor leg priced as a ratchet."""
        swap = fixed_ibor_swap(
            date(2026, 1, 15), date(2028, 1, 15), EUR_FIXED_1Y, EURIBOR_3M_FLOATING, NOTIONAL, 0.02
        )
        fixed_pv = swap_pricer.price_leg(swap.legs[0], rates_provider).pv
        pv = fixed_pv + _pv(model_3m, _ratchet(COEFFICIENTS_IBOR), rates_provider, nb_paths=1_000)
        assert pv == pytest.approx(swap_pricer.present_value(swap, rates_provider), abs=1.5e4)

    def test_cap_lowers_value(self, model_3m, rates_provider):
        plain = _pv(model_3m, _ratchet(COEFFICIENTS_IBOR), rates_provider)
        capped = _pv(model_3m, _ratchet(COEFFICIENTS_CAPPED), rates_provider)
        assert capped < plain

    def test_sticky_floor_raises_value(self, model_3m, rates_provider):
        plain = _pv(model_3m, _ratchet(COEFFICIENTS_IBOR), rates_provider)
        sticky = _pv(model_3m, _ratchet(COEFFICIENTS_STICKY), rates_provider)
        assert sticky > plain

    def test_pay_direction(self, model_3m, rates_provider):
        receive = _pv(model_3m, _ratchet(COEFFICIENTS_CAPPED, COEFFICIENTS_CAPPED), rates_provider)
        leg = ibor_ratchet_leg(
            date(2026, 1, 15),
            date(2028, 1, 15),
            EURIBOR_3M_FLOATING,
            NOTIONAL,
            PayReceive.PAY,
            COEFFICIENTS_CAPPED,
            COEFFICIENTS_CAPPED,
        )
        pay = _pv(model_3m, ResolvedSwap(legs=(leg,)), rates_provider)
        assert pay == pytest.approx(-receive, rel=1e-12)

    def test_first_coupon_without_previous_rate(self):
        with pytest.raises(ValueError):
            _ratchet(COEFFICIENTS_STICKY, COEFFICIENTS_STICKY)

    def test_rejects_other_legs(self, model_3m, ibor_swap_3m, rates_provider):
        with pytest.raises(ValueError):
            _pv(model_3m, ibor_swap_3m, rates_provider, nb_paths=10)
