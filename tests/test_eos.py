"""Equation of state layer: compositions, virial coefficients, PC-SAFT parameters."""

# @author: Wildson Lima

import numpy as np
import pytest

from saftstate import (
    Contributions,
    EquationOfState,
    IncompatibleComponentsError,
    InvalidStateError,
    IterationFailedError,
    MissingMolarWeightError,
    PcSaftParameters,
    State,
)
from saftstate.constants import N_AV
from saftstate.eos import DeBroglieWavelength
from saftstate.pcsaft.association import Association

from .conftest import BUTANE, PROPANE


def test_validate_moles_pure_default(propane):
    moles = propane.validate_moles(None)
    np.testing.assert_allclose(moles, [1.0 / N_AV])


def test_validate_moles_length(propane, propane_butane):
    np.testing.assert_array_equal(propane_butane.validate_moles([1.0, 2.0]), [1.0, 2.0])
    with pytest.raises(IncompatibleComponentsError):
        propane_butane.validate_moles(None)
    with pytest.raises(IncompatibleComponentsError):
        propane.validate_moles([1.0, 1.0])


def test_validate_moles_sign(propane_butane):
    np.testing.assert_array_equal(propane_butane.validate_moles([0.0, 2.0]), [0.0, 2.0])
    with pytest.raises(InvalidStateError):
        propane_butane.validate_moles([-1e-3, 1.0])
    with pytest.raises(InvalidStateError):
        propane_butane.max_density([1.0, -1.0])


def test_max_density(propane, propane_butane):
    rho_max = propane.max_density()
    assert 1e4 < rho_max < 1e5
    # independent of the amount of substance
    assert propane.max_density([3.0]) == pytest.approx(rho_max, rel=1e-12)
    assert propane_butane.max_density([1.0, 0.0]) == pytest.approx(rho_max, rel=1e-12)


def test_molar_weight(propane, propane_no_mw):
    np.testing.assert_allclose(propane.molar_weight(), [0.0440962])
    assert propane.has_molar_weight()
    assert not propane_no_mw.has_molar_weight()
    with pytest.raises(MissingMolarWeightError):
        propane_no_mw.molar_weight()


def test_second_virial_coefficient_low_density_limit(propane):
    t = 300.0
    b = propane.residual.second_virial_coefficient(t)
    assert -6e-4 < b < -2e-4
    rho = 1e-2
    state = State.new_pure(propane, t, rho)
    assert (state.compressibility() - 1.0) / rho == pytest.approx(b, rel=1e-4)


def test_virial_temperature_derivatives(propane):
    t, h = 300.0, 1e-3
    residual = propane.residual
    db_dt = residual.second_virial_coefficient_temperature_derivative(t)
    fd = (
        residual.second_virial_coefficient(t + h)
        - residual.second_virial_coefficient(t - h)
    ) / (2.0 * h)
    assert db_dt == pytest.approx(fd, rel=1e-6)
    assert db_dt > 0.0

    dc_dt = residual.third_virial_coefficient_temperature_derivative(t)
    fd = (
        residual.third_virial_coefficient(t + h) - residual.third_virial_coefficient(t - h)
    ) / (2.0 * h)
    assert dc_dt == pytest.approx(fd, rel=1e-5)


def test_virial_coefficients_mixture(propane_butane):
    t = 350.0
    b_mix = propane_butane.residual.second_virial_coefficient(t, [0.5, 0.5])
    b_1 = propane_butane.residual.second_virial_coefficient(t, [1.0, 0.0])
    b_2 = propane_butane.residual.second_virial_coefficient(t, [0.0, 1.0])
    assert b_2 < b_mix < b_1


def test_ideal_gas_only():
    eos = EquationOfState.ideal_gas_only(DeBroglieWavelength(1, np.array([0.044])))
    state = State.new_npt(eos, 300.0, 1e5, density_initialization="vapor")
    assert state.compressibility() == pytest.approx(1.0, rel=1e-12)
    assert state.pressure(Contributions.RESIDUAL) == 0.0


def test_parameters_from_lists():
    params = PcSaftParameters.from_lists([PROPANE, BUTANE], kij_matrix=[[0.0, 0.01], [0.01, 0.0]])
    assert params.components == 2
    np.testing.assert_allclose(params.molarweight, [44.0962, 58.123])
    assert params.epsilon_k_ij[0, 1] == pytest.approx(
        np.sqrt(PROPANE[2] * BUTANE[2]) * 0.99
    )
    sub = params.subset([1])
    assert sub.components == 1
    assert sub.m[0] == BUTANE[0]
    assert params.to_lists()[0] == pytest.approx(PROPANE)


def test_parameters_record_length():
    with pytest.raises(ValueError):
        PcSaftParameters.from_lists([[1.0, 3.0]])


def test_contributions_of_polar_and_associating(propane, dme, water):
    names = lambda eos: [str(c) for c in eos.residual.contributions()]  # noqa: E731
    assert len(names(propane)) == 3
    assert len(names(dme)) == 4
    assert len(names(water)) == 4


def test_association_singular_jacobian(water, monkeypatch):
    def singular(self, x_a, x_b, delta, rho_i):
        return np.zeros((2 * len(x_a), 2 * len(x_a)))

    monkeypatch.setattr(Association, "_jacobian", singular)
    state = State.new_nvt(water, 300.0, 1e-3, [0.05])
    with pytest.raises(IterationFailedError):
        state.pressure()


def test_subset(propane_butane):
    butane = propane_butane.subset([1])
    assert butane.components == 1
    np.testing.assert_allclose(butane.molar_weight(), [0.058123])
