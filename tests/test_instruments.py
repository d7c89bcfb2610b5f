"""Tests for resolved swaps, ratchet legs, swaptions and CMS periods."""

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

import numpy as np
import pytest

from conftest import NOTIONAL
from irdlib.conventions.indices import EUR_EURIBOR_3M
from irdlib.conventions.legs import EUR_FIXED_1Y, ESTR_FLOATING, EURIBOR_3M_FLOATING
from irdlib.conventions.types import LongShort, PayReceive, SwapLegType
from irdlib.instruments.builders import fixed_ibor_swap, fixed_leg, ibor_leg, overnight_leg
from irdlib.instruments.cms import (
    EUR_SWAP_2Y,
    EUR_SWAP_5Y,
    EUR_SWAP_10Y,
    CmsPeriodType,
    cms_period,
    cms_spread_period,
)
from irdlib.instruments.ratchet import COEFFICIENTS_IBOR, ibor_ratchet_leg
from irdlib.instruments.rates import (
    FixedRateComputation,
    IborRatchetRateComputation,
    IborRateComputation,
)
from irdlib.instruments.swap import RateAccrualPeriod, RatePaymentPeriod, ResolvedSwap, ResolvedSwapLeg
from irdlib.instruments.swaption import ResolvedSwaption


class TestSwapBuilders:
    """Tests for leg and swap builders."""

    def test_fixed_leg_signs_notional(self):
        leg = fixed_leg(date(2026, 1, 15), date(2028, 1, 15), EUR_FIXED_1Y, NOTIONAL, 0.02, PayReceive.PAY)
        assert leg.type == SwapLegType.FIXED
        assert all(period.notional == -NOTIONAL for period in leg.payment_periods)
        assert leg.currency == "EUR"

    def test_ibor_leg_fixings(self, ibor_leg_3m):
        assert ibor_leg_3m.type == SwapLegType.IBOR
        first = ibor_leg_3m.payment_periods[0].accrual_periods[0]
        assert isinstance(first.rate_computation, IborRateComputation)
        assert first.rate_computation.fixing_date == date(2026, 1, 13)
        assert first.rate_computation.effective_date == first.start_date

    def test_overnight_leg(self):
        leg = overnight_leg(date(2026, 1, 15), date(2028, 1, 15), ESTR_FLOATING, NOTIONAL, PayReceive.RECEIVE)
        assert leg.type == SwapLegType.OVERNIGHT
        # one business day payment delay
        assert leg.payment_periods[0].payment_date == date(2027, 1, 18)

    def test_fixed_ibor_swap_directions(self):
        swap = fixed_ibor_swap(
            date(2026, 1, 15), date(2031, 1, 15), EUR_FIXED_1Y, EURIBOR_3M_FLOATING, NOTIONAL, 0.02
        )
        fixed, floating = swap.legs
        assert fixed.pay_receive == PayReceive.PAY
        assert floating.pay_receive == PayReceive.RECEIVE
        assert len(fixed.payment_periods) == 5
        assert len(floating.payment_periods) == 20
        assert swap.legs_of_type(SwapLegType.IBOR) == [floating]

    def test_leg_rejects_mixed_computations(self, ibor_leg_3m):
        fixed_period = RatePaymentPeriod(
            payment_date=date(2028, 4, 17),
            accrual_periods=(
                RateAccrualPeriod(date(2028, 1, 17), date(2028, 4, 17), 0.25, FixedRateComputation(0.01)),
            ),
            currency="EUR",
            notional=NOTIONAL,
        )
        with pytest.raises(ValueError):
            ResolvedSwapLeg(PayReceive.RECEIVE, ibor_leg_3m.payment_periods + (fixed_period,))

    def test_swap_requires_legs(self):
        with pytest.raises(ValueError):
            ResolvedSwap(legs=())


class TestRatchet:
    """Tests for Ibor ratchet legs."""

    def test_ibor_coefficients_reproduce_ibor(self):
        leg = ibor_ratchet_leg(
            date(2026, 1, 15), date(2028, 1, 15), EURIBOR_3M_FLOATING, NOTIONAL, PayReceive.RECEIVE, COEFFICIENTS_IBOR
        )
        assert leg.type == SwapLegType.OTHER
        computation = leg.payment_periods[0].accrual_periods[0].rate_computation
        assert isinstance(computation, IborRatchetRateComputation)
        assert computation.rate(0.0, 0.025) == pytest.approx(0.025)
        # floored at -1 and capped at 1
        assert computation.rate(0.0, 1.5) == pytest.approx(1.0)
        assert computation.rate(0.0, -1.5) == pytest.approx(-1.0)

    def test_rate_is_vectorised(self):
        observation = EUR_EURIBOR_3M.observation(date(2026, 1, 13))
        computation = IborRatchetRateComputation(
            observation,
            main_coefficients=(1.0, 0.0, 0.001),
            floor_coefficients=(0.0, 1.0, 0.0),
            cap_coefficients=(0.0, 0.0, 0.03),
        )
        rates = computation.rate(np.array([0.01, 0.02, 0.04]), np.array([0.02, 0.0, 0.0]))
        assert np.allclose(rates, [0.02, 0.021, 0.03])
        assert computation.previous_coefficients == (1.0, 0.0, 0.0)

    def test_first_coupon_cannot_use_previous_rate(self):
        with pytest.raises(ValueError):
            ibor_ratchet_leg(
                date(2026, 1, 15),
                date(2028, 1, 15),
                EURIBOR_3M_FLOATING,
                NOTIONAL,
                PayReceive.RECEIVE,
                (1.0, 0.0, 0.0, 0.0, 0.0, -1.0, 0.0, 0.0, 1.0),
            )

    def test_first_coefficients(self):
        regular = (1.0, 0.0, 0.0, 0.0, 0.0, -1.0, 0.0, 0.0, 1.0)
        leg = ibor_ratchet_leg(
            date(2026, 1, 15),
            date(2028, 1, 15),
            EURIBOR_3M_FLOATING,
            NOTIONAL,
            PayReceive.RECEIVE,
            regular,
            first_coefficients=COEFFICIENTS_IBOR,
        )
        computations = [p.accrual_periods[0].rate_computation for p in leg.payment_periods]
        assert computations[0].main_coefficients == (0.0, 1.0, 0.0)
        assert all(c.main_coefficients == (1.0, 0.0, 0.0) for c in computations[1:])

    def test_wrong_number_of_coefficients(self):
        with pytest.raises(ValueError):
            ibor_ratchet_leg(
                date(2026, 1, 15), date(2028, 1, 15), EURIBOR_3M_FLOATING, NOTIONAL, PayReceive.RECEIVE, (0.0, 1.0)
            )


class TestSwaption:
    """Tests for swaption validation."""

    def test_naive_expiry(self, ibor_swap_3m):
        with pytest.raises(ValueError):
            ResolvedSwaption(datetime(2026, 1, 13, 11, 0), ibor_swap_3m)

    def test_expiry_after_start(self, ibor_swap_3m):
        with pytest.raises(ValueError):
            ResolvedSwaption(datetime(2026, 2, 13, 11, 0, tzinfo=ZoneInfo("Europe/Brussels")), ibor_swap_3m)

    def test_defaults(self, ibor_swap_3m):
        swaption = ResolvedSwaption(datetime(2026, 1, 13, 11, 0, tzinfo=ZoneInfo("Europe/Brussels")), ibor_swap_3m)
        assert swaption.long_short == LongShort.LONG
        assert swaption.currency == "EUR"


class TestCms:
    """Tests for CMS and CMS spread periods."""

    def test_swap_index_underlying(self):
        swap = EUR_SWAP_2Y.to_swap(date(2027, 3, 11))
        fixed, floating = swap.legs
        assert fixed.pay_receive == PayReceive.PAY
        assert fixed.start_date == date(2027, 3, 15)
        assert fixed.end_date == date(2029, 3, 15)
        assert len(fixed.payment_periods) == 2
        assert len(floating.payment_periods) == 4

    @pytest.mark.parametrize("index", [EUR_SWAP_2Y, EUR_SWAP_5Y, EUR_SWAP_10Y])
    def test_swap_index_fixing_instant(self, index):
        fixing = index.calculate_fixing_datetime(date(2027, 3, 11))
        assert fixing == datetime(2027, 3, 11, 11, 0, tzinfo=ZoneInfo("Europe/Brussels"))
        assert fixing.utcoffset() == timedelta(hours=1)

    def test_cms_period(self):
        period = cms_period(EUR_SWAP_2Y, date(2027, 3, 15), date(2027, 9, 15), NOTIONAL)
        assert period.fixing_date == date(2027, 3, 11)
        assert period.payment_date == date(2027, 9, 15)
        assert period.year_fraction == pytest.approx(0.5)
        assert period.payoff(0.025) == pytest.approx(0.025)

    def test_cms_caplet_floorlet_payoff(self):
        caplet = cms_period(
            EUR_SWAP_2Y, date(2027, 3, 15), date(2027, 9, 15), NOTIONAL, CmsPeriodType.CAPLET, 0.02
        )
        floorlet = cms_period(
            EUR_SWAP_2Y, date(2027, 3, 15), date(2027, 9, 15), NOTIONAL, CmsPeriodType.FLOORLET, 0.02
        )
        rates = np.array([0.01, 0.03])
        assert np.allclose(caplet.payoff(rates), [0.0, 0.01])
        assert np.allclose(floorlet.payoff(rates), [0.01, 0.0])

    def test_cms_spread_payoff(self):
        period = cms_spread_period(
            EUR_SWAP_5Y, EUR_SWAP_2Y, date(2027, 3, 15), date(2027, 9, 15), NOTIONAL, caplet=0.001
        )
        payoff = period.payoff(np.array([0.03, 0.025]), np.array([0.025, 0.025]))
        assert np.allclose(payoff, [NOTIONAL * 0.5 * 0.004, 0.0])

    def test_cms_spread_cap_and_floor(self):
        with pytest.raises(ValueError):
            cms_spread_period(
                EUR_SWAP_5Y, EUR_SWAP_2Y, date(2027, 3, 15), date(2027, 9, 15), NOTIONAL, caplet=0.0, floorlet=0.0
            )
