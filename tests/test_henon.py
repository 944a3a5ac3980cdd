"""Tests for exact crossing location (Hénon trick) and the crossing searches."""

import math

import numpy as np
import pytest

from sam import ODE, ParameterSpec, RK4System
from sam.analysis.henon import (
    BOTH,
    CrossingParameters,
    henon_trick,
    integrate_to_crossing,
    integrate_to_crossing_conditional,
    poincare_map,
)
from sam.exceptions import CrossingSearchLimitError, LengthError, SingularCrossingError
from sam.models import CoupledHarmonicOscillatorODE, HarmonicOscillatorODE

DT = 0.01


@pytest.fixture
def single() -> RK4System:
    """omega = 1 from (1, 0): x = cos t, v = -sin t."""
    system = RK4System(HarmonicOscillatorODE, 1, 2, 1.0)
    system.set_position([1.0, 0.0])
    return system


@pytest.fixture
def pair() -> RK4System:
    """Two uncoupled oscillators with omega = 1 and omega = 2, both from (1, 0)."""
    system = RK4System(CoupledHarmonicOscillatorODE, 2, 2, [1.0, 2.0], 0.0)
    system.set_position([1.0, 0.0, 1.0, 0.0])
    return system


class Drift(ODE):
    """dx/dt = speed for every coordinate."""

    parameters = (ParameterSpec("speed"),)

    def rhs(self, x, t):
        return np.full_like(x, self.speed)


class TooLong(ODE):
    parameters = ()

    def rhs(self, x, t):
        return np.ones(x.size + 1)


def _check(crossing, t_expected, x_expected, atol=1e-3) -> None:
    t, x = crossing
    assert t == pytest.approx(t_expected, abs=1e-4)
    np.testing.assert_allclose(x, x_expected, atol=atol)


# --- henon_trick on its own ---


def test_henon_first_coordinate(single: RK4System) -> None:
    single.integrate(DT, int(math.pi / 2 / DT))
    _check(henon_trick(single), math.pi / 2, [0.0, -1.0])


def test_henon_second_coordinate(single: RK4System) -> None:
    single.integrate(DT, int(math.pi / DT))
    _check(henon_trick(single, CrossingParameters(dimension=1)), math.pi, [-1.0, 0.0])


def test_henon_does_not_modify_system(single: RK4System) -> None:
    single.integrate(DT, 157)
    x_before = single.get_position()
    t_before = single.get_time()
    t, x = henon_trick(single)
    assert x[0] == 0.0
    assert single.get_time() == t_before
    np.testing.assert_array_equal(single.get_position(), x_before)
    assert t != t_before


def test_henon_with_coarse_step(single: RK4System) -> None:
    single.integrate(0.1, 16)
    t, x = henon_trick(single)
    assert t == pytest.approx(math.pi / 2, abs=1e-5)
    assert x[1] == pytest.approx(-1.0, abs=1e-5)


@pytest.mark.parametrize(
    "n_osc, dimension, t_cross, expected",
    [
        (0, 0, math.pi / 2, [0.0, -1.0, -1.0, 0.0]),
        (0, 1, math.pi, [-1.0, 0.0, 1.0, 0.0]),
        (1, 0, math.pi / 4, [0.707, -0.707, 0.0, -2.0]),
        (1, 1, math.pi / 2, [0.0, -1.0, -1.0, 0.0]),
    ],
)
def test_henon_two_oscillators(pair: RK4System, n_osc, dimension, t_cross, expected) -> None:
    pair.integrate(DT, int(t_cross / DT))
    params = CrossingParameters(n_osc=n_osc, dimension=dimension)
    t, x = henon_trick(pair, params)
    assert t == pytest.approx(t_cross, abs=1e-4)
    np.testing.assert_allclose(x, expected, atol=1e-2)
    assert x[n_osc * 2 + dimension] == 0.0


def test_henon_singular_velocity(single: RK4System) -> None:
    # dx/dt = v = 0: the section x = 0 cannot be parametrized by x
    single.set_position([0.5, 0.0])
    with pytest.raises(SingularCrossingError):
        henon_trick(single)
    with pytest.raises(ArithmeticError):
        henon_trick(single)


def test_selector_out_of_range(single: RK4System) -> None:
    with pytest.raises(IndexError):
        henon_trick(single, CrossingParameters(n_osc=1))
    with pytest.raises(IndexError):
        integrate_to_crossing(single, DT, CrossingParameters(dimension=2))


def test_invalid_direction() -> None:
    with pytest.raises(ValueError):
        CrossingParameters(direction="sideways")


# --- searches, ascending crossings (default) ---


def test_search_from_just_before_section(single: RK4System) -> None:
    single.integrate(DT, int(math.pi / 2 / DT))
    # x is decreasing through zero at pi/2: the next ascending crossing is at 3 pi/2
    _check(integrate_to_crossing(single, DT), 3 * math.pi / 2, [0.0, 1.0])


def test_search_ascending_from_start(single: RK4System) -> None:
    _check(integrate_to_crossing(single, DT), 3 * math.pi / 2, [0.0, 1.0])


def test_search_leaves_system_on_section(single: RK4System) -> None:
    t, x = integrate_to_crossing(single, DT)
    assert single.get_time() == t
    np.testing.assert_array_equal(single.get_position(), x)


def test_conditional_search(single: RK4System) -> None:
    crossing = integrate_to_crossing_conditional(single, DT, lambda x: x[1] > 0)
    _check(crossing, 3 * math.pi / 2, [0.0, 1.0])


def test_conditional_skips_rejected_crossings(single: RK4System) -> None:
    seen = []

    def second_time(x: np.ndarray) -> bool:
        seen.append(x)
        return len(seen) == 2

    t, x = integrate_to_crossing_conditional(single, DT, second_time)
    assert len(seen) == 2
    assert t == pytest.approx(3 * math.pi / 2 + 2 * math.pi, abs=1e-4)


def test_successive_searches_advance_one_period(single: RK4System) -> None:
    t1, _ = integrate_to_crossing(single, DT)
    t2, x2 = integrate_to_crossing(single, DT)
    assert t2 - t1 == pytest.approx(2 * math.pi, abs=1e-4)
    np.testing.assert_allclose(x2, [0.0, 1.0], atol=1e-3)


# --- searches, both directions ---


def test_search_both_first_coordinate(single: RK4System) -> None:
    params = CrossingParameters(direction=BOTH)
    _check(integrate_to_crossing(single, DT, params), math.pi / 2, [0.0, -1.0])


def test_search_both_conditional(single: RK4System) -> None:
    params = CrossingParameters(direction=BOTH)
    crossing = integrate_to_crossing_conditional(single, DT, lambda x: x[1] > 0, params)
    _check(crossing, 3 * math.pi / 2, [0.0, 1.0])


def test_search_both_second_coordinate(single: RK4System) -> None:
    params = CrossingParameters(dimension=1, direction=BOTH)
    # step away from v = 0 at t = 0
    single.integrate(DT, 1)
    _check(integrate_to_crossing(single, DT, params), math.pi, [-1.0, 0.0])


def test_search_both_second_coordinate_conditional(single: RK4System) -> None:
    params = CrossingParameters(dimension=1, direction=BOTH)
    single.integrate(DT, 1)
    crossing = integrate_to_crossing_conditional(single, DT, lambda x: x[0] > 0, params)
    _check(crossing, 2 * math.pi, [1.0, 0.0])


@pytest.mark.parametrize(
    "n_osc, dimension, condition, pre_step, t_cross, expected",
    [
        (0, 0, None, False, math.pi / 2, [0.0, -1.0, -1.0, 0.0]),
        (0, 0, lambda x: x[1] > 0, False, 3 * math.pi / 2, [0.0, 1.0, -1.0, 0.0]),
        (0, 1, None, True, math.pi, [-1.0, 0.0, 1.0, 0.0]),
        (0, 1, lambda x: x[0] > 0, True, 2 * math.pi, [1.0, 0.0, 1.0, 0.0]),
        (1, 0, None, False, math.pi / 4, [0.707, -0.707, 0.0, -2.0]),
        (1, 0, lambda x: x[3] > 0, False, 3 * math.pi / 4, [-0.707, -0.707, 0.0, 2.0]),
        (1, 1, None, True, math.pi / 2, [0.0, -1.0, -1.0, 0.0]),
        (1, 1, lambda x: x[2] > 0, True, math.pi, [-1.0, 0.0, 1.0, 0.0]),
    ],
)
def test_search_both_two_oscillators(
    pair: RK4System, n_osc, dimension, condition, pre_step, t_cross, expected
) -> None:
    params = CrossingParameters(n_osc=n_osc, dimension=dimension, direction=BOTH)
    if pre_step:
        pair.integrate(DT, 1)
    if condition is None:
        crossing = integrate_to_crossing(pair, DT, params)
    else:
        crossing = integrate_to_crossing_conditional(pair, DT, condition, params)
    t, x = crossing
    assert t == pytest.approx(t_cross, abs=1e-4)
    np.testing.assert_allclose(x, expected, atol=1e-2)


def test_search_descending(single: RK4System) -> None:
    params = CrossingParameters(dimension=1, direction="descending")
    single.integrate(DT, 1)
    _check(integrate_to_crossing(single, DT, params), 2 * math.pi, [1.0, 0.0])


# --- limits ---


def test_conditional_crossing_limit(single: RK4System) -> None:
    params = CrossingParameters(max_crossings=3)
    with pytest.raises(CrossingSearchLimitError):
        integrate_to_crossing_conditional(single, DT, lambda x: False, params)
    # three full periods were searched
    assert single.get_time() == pytest.approx(3 * math.pi / 2 + 4 * math.pi, abs=1e-4)


def test_step_limit_without_crossing() -> None:
    system = RK4System(HarmonicOscillatorODE, 1, 2, 1.0)
    params = CrossingParameters(max_steps=100)
    with pytest.raises(CrossingSearchLimitError):
        integrate_to_crossing(system, DT, params)
    assert system.get_time() == pytest.approx(1.0)
    with pytest.raises(RuntimeError):
        integrate_to_crossing(system, DT, params)


# --- Poincaré map ---


def test_poincare_map_collects_crossings(single: RK4System) -> None:
    history = poincare_map(single, DT, 4)
    assert len(history) == 4
    np.testing.assert_allclose(np.diff(history.times), 2 * math.pi, atol=1e-4)
    assert history.states.shape == (4, 2)
    np.testing.assert_allclose(history.states[:, 0], 0.0, atol=1e-12)
    np.testing.assert_allclose(history.states[:, 1], 1.0, atol=1e-3)


def test_poincare_map_with_condition(pair: RK4System) -> None:
    params = CrossingParameters(n_osc=1, direction=BOTH)
    history = poincare_map(pair, DT, 3, params, condition=lambda x: x[3] > 0)
    np.testing.assert_allclose(history.times, [3 * math.pi / 4, 7 * math.pi / 4, 11 * math.pi / 4], atol=1e-4)
    assert np.all(history.states[:, 3] > 0)


def test_crossing_parameters_dict_round_trip() -> None:
    params = CrossingParameters(n_osc=2, dimension=1, direction=BOTH, max_crossings=None)
    assert CrossingParameters.from_dict(params.to_dict()) == params


# --- steps landing exactly on the section ---

# dt / 6 is exact for dt = 0.75, so two steps from -1.5 land on 0.0 exactly


def test_ascending_step_landing_on_zero_is_a_crossing() -> None:
    system = RK4System(Drift, 1, 1, 1.0)
    system.set_position([-1.5])
    params = CrossingParameters(max_steps=2)
    t, x = integrate_to_crossing(system, 0.75, params)
    assert t == 1.5
    np.testing.assert_array_equal(x, [0.0])
    assert system.get_time() == 1.5


def test_descending_step_landing_on_zero_is_a_crossing() -> None:
    system = RK4System(Drift, 1, 1, -1.0)
    system.set_position([1.5])
    params = CrossingParameters(direction="descending", max_steps=2)
    t, x = integrate_to_crossing(system, 0.75, params)
    assert t == 1.5
    np.testing.assert_array_equal(x, [0.0])


def test_start_on_section_is_not_a_crossing() -> None:
    for speed, direction in [(1.0, "ascending"), (-1.0, "descending")]:
        system = RK4System(Drift, 1, 1, speed)
        params = CrossingParameters(direction=direction, max_steps=5)
        with pytest.raises(CrossingSearchLimitError):
            integrate_to_crossing(system, 0.75, params)


def test_step_limit_applies_to_conditional_search() -> None:
    system = RK4System(Drift, 1, 1, 1.0)
    system.set_position([-1.5])
    params = CrossingParameters(max_steps=10)
    with pytest.raises(CrossingSearchLimitError):
        integrate_to_crossing_conditional(system, 0.75, lambda x: False, params)
    # the only crossing was rejected at t = 1.5, then the drift moves away forever
    assert system.get_time() == pytest.approx(7.5)


def test_default_search_has_step_budget() -> None:
    params = CrossingParameters()
    assert params.max_steps is not None
    assert params.max_steps > 0
    assert params.max_crossings is not None


# --- malformed right-hand sides ---


def test_henon_rejects_wrong_derivative_length() -> None:
    system = RK4System(TooLong, 1, 2)
    system.set_position([-0.5, 1.0])
    with pytest.raises(LengthError):
        henon_trick(system)
    with pytest.raises(LengthError):
        integrate_to_crossing(system, DT)
