"""Critical points, spinodals and stability analysis."""

# @author: Wildson Lima

import numpy as np
import pytest

from saftstate import EosError, IterationFailedError, State, ValidationError
from saftstate.constants import RGAS


@pytest.fixture(scope="module")
def propane_cp(propane):
    return State.critical_point(propane)


def test_critical_point_pure(propane_cp):
    t = propane_cp.temperature
    assert t == pytest.approx(375.124, rel=1e-4)
    assert propane_cp.pressure() == pytest.approx(4.608e6, rel=1e-3)
    rt = RGAS * t
    rho = propane_cp.density
    # dp/drho and d2p/drho2 vanish
    assert abs(propane_cp.dp_drho()) < 1e-5 * rt
    assert abs(propane_cp.d2p_drho2()) * rho < 1e-4 * rt


def test_critical_point_initial_temperature(propane, propane_cp):
    state = State.critical_point(propane, initial_temperature=350.0)
    assert state.temperature == pytest.approx(propane_cp.temperature, rel=1e-6)
    assert state.density == pytest.approx(propane_cp.density, rel=1e-5)


def test_critical_point_pure_components(propane_butane, propane_cp):
    states = State.critical_point_pure(propane_butane)
    assert len(states) == 2
    assert states[0].temperature == pytest.approx(propane_cp.temperature, rel=1e-6)
    assert states[1].temperature > states[0].temperature
    np.testing.assert_allclose(states[1].molefracs, [0.0, 1.0])


def test_critical_point_mixture(propane_butane):
    pure = State.critical_point_pure(propane_butane)
    state = State.critical_point(propane_butane, np.array([0.5, 0.5]))
    assert pure[0].temperature < state.temperature < pure[1].temperature
    np.testing.assert_allclose(state.molefracs, [0.5, 0.5])


def test_critical_point_binary_temperature(propane_butane):
    pure = State.critical_point_pure(propane_butane)
    t = 0.5 * (pure[0].temperature + pure[1].temperature)
    state = State.critical_point_binary(propane_butane, t)
    assert state.temperature == pytest.approx(t)
    assert 0.0 < state.molefracs[0] < 1.0
    # same point from the fixed composition critical point
    check = State.critical_point(propane_butane, state.moles, initial_temperature=t)
    assert check.temperature == pytest.approx(t, rel=1e-5)


def test_critical_point_binary_pressure(propane_butane):
    state = State.critical_point_binary(
        propane_butane, 4.5e6, initial_molefracs=[0.8, 0.2], is_pressure=True
    )
    assert state.pressure() == pytest.approx(4.5e6, rel=1e-6)
    assert 0.0 < state.molefracs[0] < 1.0
    check = State.critical_point(
        propane_butane, state.moles, initial_temperature=state.temperature
    )
    assert check.temperature == pytest.approx(state.temperature, rel=1e-5)
    assert check.pressure() == pytest.approx(4.5e6, rel=1e-4)


def test_critical_point_binary_temperature_and_pressure_agree(propane_butane):
    pure = State.critical_point_pure(propane_butane)
    t = 0.5 * (pure[0].temperature + pure[1].temperature)
    at_t = State.critical_point_binary(propane_butane, t)
    at_p = State.critical_point_binary(
        propane_butane,
        at_t.pressure(),
        initial_molefracs=at_t.molefracs,
        is_pressure=True,
    )
    assert at_p.temperature == pytest.approx(t, rel=1e-5)
    np.testing.assert_allclose(at_p.molefracs, at_t.molefracs, atol=1e-5)


def test_critical_point_binary_pressure_out_of_range(propane_butane):
    # far below the critical line of the mixture
    with pytest.raises(EosError):
        State.critical_point_binary(propane_butane, 1e6, is_pressure=True)


def test_critical_point_binary_needs_two_components(propane):
    with pytest.raises(ValidationError):
        State.critical_point_binary(propane, 300.0)


def test_spinodal(propane, propane_cp):
    vapor, liquid = State.spinodal(propane, 300.0)
    assert vapor.density < propane_cp.density < liquid.density
    assert vapor.pressure() >= liquid.pressure()
    rt = RGAS * 300.0
    assert abs(vapor.dp_drho()) < 1e-6 * rt
    assert abs(liquid.dp_drho()) < 1e-6 * rt


def test_spinodal_above_critical_temperature(propane, propane_cp):
    with pytest.raises(IterationFailedError):
        State.spinodal(propane, propane_cp.temperature + 20.0)


def test_stability_pure(propane):
    vapor = State.new_npt(propane, 300.0, 1e5, density_initialization="vapor")
    assert vapor.is_stable()
    assert vapor.stability_analysis() == [vapor]

    liquid = State.new_npt(propane, 300.0, 1e5, density_initialization="liquid")
    assert not liquid.is_stable()
    phases = liquid.stability_analysis()
    assert len(phases) == 1
    assert phases[0].density < 0.1 * liquid.density
    assert phases[0].total_moles == pytest.approx(liquid.total_moles)
    # the vapor has the lower Helmholtz energy at the same T, p and amount
    assert phases[0].helmholtz_energy() < liquid.helmholtz_energy()


def test_stability_mixture(propane_butane):
    z = np.array([0.5, 0.5])
    stable = State.new_npt(propane_butane, 300.0, 1e5, z)
    assert stable.is_stable()

    # between dew and bubble point
    unstable = State.new_npt(propane_butane, 300.0, 5e5, z)
    assert not unstable.is_stable()
    phases = unstable.stability_analysis()
    assert len(phases) >= 1
    mu = unstable.chemical_potential()
    p = unstable.pressure()
    for phase in phases:
        assert phase.total_moles == pytest.approx(unstable.total_moles)
        assert phase.temperature == pytest.approx(unstable.temperature)
        assert phase.pressure() == pytest.approx(p, rel=1e-8)
        # below the tangent plane of the feed: splitting the phase off the
        # feed lowers the Helmholtz energy at constant T, V and n
        plane = np.dot(phase.moles, mu) - p * phase.volume
        assert phase.helmholtz_energy() < plane
    # most negative tangent plane distance first
    rt = RGAS * unstable.temperature
    tpd = [
        (phase.helmholtz_energy() + p * phase.volume - np.dot(phase.moles, mu))
        / (phase.total_moles * rt)
        for phase in phases
    ]
    assert tpd == sorted(tpd)
