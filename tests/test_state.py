"""State properties: consistency of the Helmholtz energy derivatives."""

# @author: Wildson Lima

import numpy as np
import pytest

from saftstate import (
    Contributions,
    IncompatibleComponentsError,
    InvalidStateError,
    MissingCapabilityError,
    MissingMolarWeightError,
    MissingParameterError,
    State,
    StateVec,
)
from saftstate.constants import RGAS

from .conftest import PROPANE_DIFFUSION, PROPANE_THERMAL_CONDUCTIVITY


@pytest.fixture
def liquid(propane):
    return State.new_npt(propane, 300.0, 5e6, density_initialization="liquid")


@pytest.fixture
def mixture(propane_butane):
    return State.new_nvt(propane_butane, 320.0, 1e-3, [0.01, 0.02])


def test_invalid_states(propane, propane_butane):
    with pytest.raises(InvalidStateError):
        State(propane, -1.0, 1e-3, np.array([1.0]))
    with pytest.raises(InvalidStateError):
        State(propane, 300.0, 0.0, np.array([1.0]))
    with pytest.raises(InvalidStateError):
        State(propane, 300.0, 1e-3, np.array([-1.0]))
    with pytest.raises(IncompatibleComponentsError):
        State(propane_butane, 300.0, 1e-3, np.array([1.0]))


def test_derived_quantities(mixture):
    assert mixture.total_moles == pytest.approx(0.03)
    assert mixture.density == pytest.approx(30.0)
    np.testing.assert_allclose(mixture.partial_density, [10.0, 20.0])
    np.testing.assert_allclose(mixture.molefracs, [1.0 / 3.0, 2.0 / 3.0])


def test_pressure_is_volume_derivative(mixture):
    h = 1e-8
    t, v, n = mixture.temperature, mixture.volume, mixture.moles
    eos = mixture.eos
    a_plus = State(eos, t, v + h, n).helmholtz_energy()
    a_minus = State(eos, t, v - h, n).helmholtz_energy()
    assert mixture.pressure() == pytest.approx(-(a_plus - a_minus) / (2 * h), rel=1e-6)


def test_entropy_is_temperature_derivative(mixture):
    h = 1e-4
    t, v, n = mixture.temperature, mixture.volume, mixture.moles
    eos = mixture.eos
    a_plus = State(eos, t + h, v, n).helmholtz_energy()
    a_minus = State(eos, t - h, v, n).helmholtz_energy()
    assert mixture.entropy() == pytest.approx(-(a_plus - a_minus) / (2 * h), rel=1e-6)


def test_chemical_potential_is_moles_derivative(mixture):
    h = 1e-7
    t, v, n = mixture.temperature, mixture.volume, mixture.moles
    eos = mixture.eos
    mu = mixture.chemical_potential()
    for i in range(2):
        dn = np.zeros(2)
        dn[i] = h
        a_plus = State(eos, t, v, n + dn).helmholtz_energy()
        a_minus = State(eos, t, v, n - dn).helmholtz_energy()
        assert mu[i] == pytest.approx((a_plus - a_minus) / (2 * h), rel=1e-5)


def test_euler_relation(mixture):
    g = mixture.gibbs_energy()
    assert g == pytest.approx(np.dot(mixture.moles, mixture.chemical_potential()), rel=1e-10)
    assert mixture.enthalpy() == pytest.approx(
        mixture.internal_energy() + mixture.pressure() * mixture.volume, rel=1e-10
    )
    assert mixture.gibbs_energy() == pytest.approx(
        mixture.helmholtz_energy() + mixture.pressure() * mixture.volume, rel=1e-10
    )


def test_contributions_add_up(mixture):
    p_res = mixture.pressure(Contributions.RESIDUAL)
    p_ig = mixture.pressure(Contributions.IDEAL_GAS)
    assert mixture.pressure() == pytest.approx(p_res + p_ig, rel=1e-12)
    assert p_ig == pytest.approx(mixture.density * RGAS * mixture.temperature, rel=1e-12)

    breakdown = mixture.pressure_contributions()
    assert sum(p for _, p in breakdown) == pytest.approx(mixture.pressure(), rel=1e-12)

    residual = mixture.residual_helmholtz_energy_contributions()
    assert len(residual) == 3
    assert sum(a for _, a in residual) == pytest.approx(
        mixture.helmholtz_energy(Contributions.RESIDUAL), rel=1e-12
    )

    mu = mixture.chemical_potential()
    for i in range(2):
        parts = mixture.chemical_potential_contributions(i)
        assert sum(m for _, m in parts) == pytest.approx(mu[i], rel=1e-12)


def test_contributions_filter(mixture):
    residual = mixture.pressure_contributions(Contributions.RESIDUAL)
    assert len(residual) == 3
    assert sum(p for _, p in residual) == pytest.approx(
        mixture.pressure(Contributions.RESIDUAL), rel=1e-12
    )
    mu_res = mixture.chemical_potential(Contributions.RESIDUAL)
    mu_ig = mixture.chemical_potential(Contributions.IDEAL_GAS)
    for i in range(2):
        parts = mixture.chemical_potential_contributions(i, Contributions.RESIDUAL)
        assert [name for name, _ in parts] == [name for name, _ in residual]
        assert sum(m for _, m in parts) == pytest.approx(mu_res[i], rel=1e-12)
        ideal = mixture.chemical_potential_contributions(i, Contributions.IDEAL_GAS)
        assert len(ideal) == 1
        assert ideal[0][1] == pytest.approx(mu_ig[i], rel=1e-12)


def test_partial_molar_quantities(mixture):
    assert np.dot(mixture.moles, mixture.partial_molar_volume()) == pytest.approx(
        mixture.volume, rel=1e-10
    )
    assert np.dot(mixture.moles, mixture.partial_molar_enthalpy()) == pytest.approx(
        mixture.enthalpy(), rel=1e-10
    )
    assert np.dot(mixture.moles, mixture.partial_molar_entropy()) == pytest.approx(
        mixture.entropy(), rel=1e-10
    )


def test_fugacity_coefficient_derivatives(mixture):
    # Gibbs-Duhem at constant temperature and pressure
    dln_phi = mixture.dln_phi_dnj()
    np.testing.assert_allclose(dln_phi, dln_phi.T, rtol=1e-8)
    np.testing.assert_allclose(mixture.moles @ dln_phi, 0.0, atol=1e-8 * np.abs(dln_phi).max())


def test_fugacity_coefficient_low_density(propane):
    state = State.new_npt(propane, 300.0, 100.0)
    b = propane.residual.second_virial_coefficient(300.0)
    ln_phi = state.ln_phi()[0]
    assert ln_phi == pytest.approx(b * 100.0 / (RGAS * 300.0), rel=1e-3)


def test_heat_capacities(liquid):
    cv = liquid.molar_isochoric_heat_capacity()
    cp = liquid.molar_isobaric_heat_capacity()
    assert cp > cv > 0.0
    v = 1.0 / liquid.density
    alpha = liquid.thermal_expansivity()
    kappa_t = liquid.isothermal_compressibility()
    assert cp - cv == pytest.approx(liquid.temperature * v * alpha**2 / kappa_t, rel=1e-8)
    assert kappa_t / liquid.isentropic_compressibility() == pytest.approx(cp / cv, rel=1e-8)


def test_isothermal_compressibility(liquid):
    assert liquid.isothermal_compressibility() == pytest.approx(
        -1.0 / (liquid.volume * liquid.dp_dv()), rel=1e-12
    )
    assert liquid.dp_drho() > 0.0


def test_speed_of_sound(liquid):
    c = liquid.speed_of_sound()
    assert c == pytest.approx(
        1.0 / np.sqrt(liquid.mass_density() * liquid.isentropic_compressibility()), rel=1e-8
    )
    # liquid propane near room temperature
    assert 500.0 < c < 1500.0


def test_mass_properties(liquid):
    assert liquid.mass_density() == pytest.approx(liquid.density * 0.0440962, rel=1e-12)
    np.testing.assert_allclose(liquid.massfracs(), [1.0])
    assert liquid.specific_enthalpy() == pytest.approx(
        liquid.molar_enthalpy() / 0.0440962, rel=1e-12
    )
    assert 400.0 < liquid.mass_density() < 600.0


def test_missing_molar_weight(propane_no_mw):
    state = State.new_npt(propane_no_mw, 300.0, 1e5)
    with pytest.raises(MissingMolarWeightError):
        state.mass_density()
    with pytest.raises(MissingMolarWeightError):
        state.speed_of_sound()
    assert "mass density" not in state.to_dict()


def test_viscosity(liquid, propane_no_mw):
    eta = liquid.viscosity()
    assert 3e-5 < eta < 5e-4
    assert eta == pytest.approx(
        liquid.viscosity_reference() * np.exp(liquid.ln_viscosity_reduced()), rel=1e-12
    )
    state = State.new_npt(propane_no_mw, 300.0, 1e5)
    with pytest.raises(MissingParameterError):
        state.viscosity()


def test_diffusion_and_thermal_conductivity(liquid, propane):
    vapor = State.new_npt(propane, 300.0, 1e5, density_initialization="vapor")
    d_vapor = vapor.diffusion()
    assert 1e-6 < d_vapor < 2e-5
    assert d_vapor == pytest.approx(
        vapor.diffusion_reference() * np.exp(vapor.ln_diffusion_reduced()), rel=1e-12
    )
    assert 1e-9 < liquid.diffusion() < 1e-7

    lambda_vapor = vapor.thermal_conductivity()
    assert 0.01 < lambda_vapor < 0.03
    assert lambda_vapor == pytest.approx(
        vapor.thermal_conductivity_reference()
        * np.exp(vapor.ln_thermal_conductivity_reduced()),
        rel=1e-12,
    )
    assert 0.04 < liquid.thermal_conductivity() < 0.25
    assert liquid.thermal_conductivity() > lambda_vapor

    # the reference is the dilute gas limit
    dilute = State.new_npt(propane, 300.0, 10.0, density_initialization="vapor")
    assert dilute.ln_thermal_conductivity_reduced() == pytest.approx(
        PROPANE_THERMAL_CONDUCTIVITY[0], abs=1e-4
    )
    assert dilute.ln_diffusion_reduced() == pytest.approx(
        PROPANE_DIFFUSION[0], abs=1e-4
    )


def test_transport_needs_coefficients(propane_no_mw, propane_butane):
    state = State.new_npt(propane_no_mw, 300.0, 1e5)
    with pytest.raises(MissingParameterError):
        state.diffusion()
    with pytest.raises(MissingParameterError):
        state.thermal_conductivity()
    mixture = State.new_npt(propane_butane, 300.0, 1e5, [0.5, 0.5])
    with pytest.raises(MissingCapabilityError):
        mixture.diffusion()
    with pytest.raises(MissingCapabilityError):
        mixture.thermal_conductivity()


def test_associating_and_polar_states(water, dme):
    state = State.new_npt(water, 300.0, 1e5, density_initialization="liquid")
    assert 5e4 < state.density < 6e4
    state = State.new_npt(dme, 300.0, 1e5, density_initialization="vapor")
    assert state.compressibility() == pytest.approx(1.0, abs=0.05)


def test_to_dict_and_state_vec(liquid, propane):
    vapor = State.new_npt(propane, 300.0, 1e5)
    d = liquid.to_dict()
    assert d["temperature"] == pytest.approx(300.0)
    assert d["pressure"] == pytest.approx(5e6)
    assert "mass density" in d
    states = StateVec([vapor, liquid])
    assert len(states) == 2
    assert states[0] is vapor
    np.testing.assert_allclose(states.temperature, [300.0, 300.0])
    np.testing.assert_allclose(states.density, [vapor.density, liquid.density])
    assert states.to_dict()["pressure"] == pytest.approx([1e5, 5e6])
    np.testing.assert_allclose(
        states.compressibility(), [vapor.compressibility(), liquid.compressibility()]
    )
    np.testing.assert_allclose(states.moles, [vapor.moles, liquid.moles])
    np.testing.assert_allclose(
        states.mass_density(), [vapor.mass_density(), liquid.mass_density()]
    )
    np.testing.assert_allclose(states.massfracs(), [[1.0], [1.0]])
    np.testing.assert_allclose(
        states.specific_enthalpy(),
        [vapor.specific_enthalpy(), liquid.specific_enthalpy()],
    )
    np.testing.assert_allclose(
        states.specific_entropy(Contributions.RESIDUAL),
        [
            vapor.specific_entropy(Contributions.RESIDUAL),
            liquid.specific_entropy(Contributions.RESIDUAL),
        ],
    )
