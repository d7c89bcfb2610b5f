"""Tests for the Monte Carlo evolution of the LMM-DDD forwards."""

import math
from dataclasses import replace
from datetime import datetime
from zoneinfo import ZoneInfo

import numpy as np
import pytest

from irdlib.models.lmm import (
    MAX_JUMP_DEFAULT,
    LiborMarketModelMonteCarloEvolution,
    NumericalInstabilityError,
)
from irdlib.pricer.decomposition import MulticurveEquivalentValues
from irdlib.pricer.montecarlo.lmm import LmmdddMonteCarlo

BRUSSELS = ZoneInfo("Europe/Brussels")
FIRST_FIXING = datetime(2026, 1, 13, 11, 0, tzinfo=BRUSSELS)
FOURTH_FIXING = datetime(2026, 10, 13, 11, 0, tzinfo=BRUSSELS)


class _Initial(LmmdddMonteCarlo):
    def __init__(self, model):
        self.model = model


def _initial_values(model, rates_provider):
    return _Initial(model).model_initial_values(rates_provider)


class TestJumpTimes:
    """Tests for the time discretisation."""

    def test_short_step_is_single_jump(self):
        evolution = LiborMarketModelMonteCarloEvolution()
        assert np.allclose(evolution.jump_times(0.0, 0.5), [0.0, 0.5])

    def test_long_step_is_split_equally(self):
        evolution = LiborMarketModelMonteCarloEvolution()
        jumps = evolution.jump_times(0.5, 3.0)
        assert len(jumps) == 4
        assert np.allclose(np.diff(jumps), 2.5 / 3)
        assert jumps[-1] == pytest.approx(3.0)

    def test_step_equal_to_max_jump(self):
        evolution = LiborMarketModelMonteCarloEvolution(max_jump=0.25)
        assert np.allclose(evolution.jump_times(0.0, 0.25), [0.0, 0.25])

    def test_default_and_validation(self):
        assert LiborMarketModelMonteCarloEvolution().max_jump == MAX_JUMP_DEFAULT
        with pytest.raises(ValueError):
            LiborMarketModelMonteCarloEvolution(max_jump=0.0)


class TestEvolveOneStep:
    """Tests for the single date evolution."""

    def test_shapes(self, model_3m, rates_provider, rng):
        evolution = LiborMarketModelMonteCarloEvolution()
        initial = _initial_values(model_3m, rates_provider)
        forwards = evolution.evolve_one_step_fast(FIRST_FIXING, initial, model_3m, rng, 50)
        assert forwards.shape == (50, 8)
        values = evolution.evolve_one_step(FIRST_FIXING, initial, model_3m, rng, 5)
        assert len(values) == 5
        assert isinstance(values[0], MulticurveEquivalentValues)
        assert values[0].on_rates.shape == (8,)

    def test_deterministic_with_seed(self, model_3m, rates_provider):
        evolution = LiborMarketModelMonteCarloEvolution()
        initial = _initial_values(model_3m, rates_provider)
        first = evolution.evolve_one_step_fast(FIRST_FIXING, initial, model_3m, np.random.default_rng(7), 20)
        second = evolution.evolve_one_step_fast(FIRST_FIXING, initial, model_3m, np.random.default_rng(7), 20)
        assert np.array_equal(first, second)

    def test_blocks_reproduce_single_run(self, model_3m, rates_provider):
        evolution = LiborMarketModelMonteCarloEvolution()
        initial = _initial_values(model_3m, rates_provider)
        single = evolution.evolve_one_step_fast(FOURTH_FIXING, initial, model_3m, np.random.default_rng(11), 100)
        rng = np.random.default_rng(11)
        blocks = np.vstack(
            [
                evolution.evolve_one_step_fast(FOURTH_FIXING, initial, model_3m, rng, 60),
                evolution.evolve_one_step_fast(FOURTH_FIXING, initial, model_3m, rng, 40),
            ]
        )
        assert np.allclose(single, blocks, rtol=1e-12, atol=0.0)

    def test_fixed_forwards_unchanged(self, model_3m, rates_provider, rng):
        evolution = LiborMarketModelMonteCarloEvolution(max_jump=5.0)
        initial = _initial_values(model_3m, rates_provider)
        forwards = evolution.evolve_one_step_fast(FOURTH_FIXING, initial, model_3m, rng, 30)
        # single jump: periods starting before the fourth fixing are not evolved
        assert np.array_equal(forwards[:, :3], np.tile(initial.on_rates[:3], (30, 1)))
        assert not np.allclose(forwards[:, 3:], initial.on_rates[3:])

    def test_zero_volatility(self, model_3m, rates_provider, rng):
        model = replace(model_3m, volatilities=np.zeros((8, 1)))
        evolution = LiborMarketModelMonteCarloEvolution()
        initial = _initial_values(model, rates_provider)
        forwards = evolution.evolve_one_step_fast(FOURTH_FIXING, initial, model, rng, 10)
        assert np.allclose(forwards, initial.on_rates, rtol=1e-12)

    def test_wrong_number_of_forwards(self, model_3m, rng):
        evolution = LiborMarketModelMonteCarloEvolution()
        with pytest.raises(ValueError):
            evolution.evolve_one_step_fast(
                FIRST_FIXING, MulticurveEquivalentValues(on_rates=[0.02, 0.02]), model_3m, rng, 10
            )

    def test_expiry_before_valuation(self, model_3m, rates_provider, rng):
        evolution = LiborMarketModelMonteCarloEvolution()
        initial = _initial_values(model_3m, rates_provider)
        past = datetime(2024, 12, 13, 11, 0, tzinfo=BRUSSELS)
        with pytest.raises(ValueError):
            evolution.evolve_one_step_fast(past, initial, model_3m, rng, 10)

    def test_instability(self, model_3m, rates_provider, rng):
        model = replace(model_3m, volatilities=np.full((8, 1), 1e3))
        evolution = LiborMarketModelMonteCarloEvolution()
        initial = _initial_values(model, rates_provider)
        with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
            with pytest.raises(NumericalInstabilityError):
                evolution.evolve_one_step_fast(FOURTH_FIXING, initial, model, rng, 100)


class TestEvolveMultiSteps:
    """Tests for the multi-date evolution."""

    def test_shapes(self, model_3m, rates_provider, rng):
        evolution = LiborMarketModelMonteCarloEvolution()
        initial = _initial_values(model_3m, rates_provider)
        forwards = evolution.evolve_multi_steps_fast(
            [FIRST_FIXING, FOURTH_FIXING], initial, model_3m, rng, 25
        )
        assert forwards.shape == (25, 2, 8)
        values = evolution.evolve_multi_steps([FIRST_FIXING, FOURTH_FIXING], initial, model_3m, rng, 3)
        assert len(values) == 3
        assert len(values[0]) == 2

    def test_steps_continue_paths(self, model_3m, rates_provider, rng):
        """Forwards fixed at the first step keep their value at the second step."""
        evolution = LiborMarketModelMonteCarloEvolution()
        initial = _initial_values(model_3m, rates_provider)
        forwards = evolution.evolve_multi_steps_fast(
            [FIRST_FIXING, FOURTH_FIXING], initial, model_3m, rng, 25
        )
        assert np.array_equal(forwards[:, 1, :3], forwards[:, 0, :3])
        assert not np.array_equal(forwards[:, 1, 3:], forwards[:, 0, 3:])

    def test_decreasing_steps(self, model_3m, rates_provider, rng):
        evolution = LiborMarketModelMonteCarloEvolution()
        initial = _initial_values(model_3m, rates_provider)
        with pytest.raises(ValueError):
            evolution.evolve_multi_steps_fast([FOURTH_FIXING, FIRST_FIXING], initial, model_3m, rng, 5)


class TestPredictorCorrector:
    """Tests for a single predictor-corrector jump with given draws."""

    def test_last_forward_has_no_drift(self, model_3m, rates_provider):
        evolution = LiborMarketModelMonteCarloEvolution()
        initial = np.tile(_initial_values(model_3m, rates_provider).on_rates, (3, 1))
        normals = np.array([[[0.5]], [[-1.0]], [[0.0]]])
        dt = 0.5
        result = evolution.step_predictor_corrector(np.array([0.0, dt]), initial, model_3m, normals)

        a = model_3m.displacements[-1]
        alpha = math.exp(model_3m.mean_reversion * dt)
        sigma = model_3m.volatilities[-1, 0] * alpha
        expected = (initial[:, -1] + a) * np.exp(
            sigma * math.sqrt(dt) * normals[:, 0, 0] - 0.5 * sigma**2 * dt
        ) - a
        assert np.allclose(result[:, -1], expected, rtol=1e-12)
        # input is not modified
        assert np.array_equal(initial[0], _initial_values(model_3m, rates_provider).on_rates)

    def test_earlier_forwards_drift_down(self, model_3m, rates_provider):
        """With zero draws the terminal measure drift of earlier forwards is negative."""
        evolution = LiborMarketModelMonteCarloEvolution()
        initial = np.tile(_initial_values(model_3m, rates_provider).on_rates, (1, 1))
        normals = np.zeros((1, 1, 1))
        result = evolution.step_predictor_corrector(np.array([0.0, 0.5]), initial, model_3m, normals)
        assert np.all(result[0, :-1] < initial[0, :-1])
