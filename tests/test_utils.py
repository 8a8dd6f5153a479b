"""Property functions of parameter lists."""

# @author: Wildson Lima

import numpy as np
import pytest

from saftstate.pcsaft import utils

from .conftest import BUTANE, PROPANE, PROPANE_VISCOSITY

MIXTURE = [PROPANE, BUTANE]
STATE = [300.0, 2e6, 0.4, 0.6]


def test_pure_properties():
    rho = utils.pure_den(PROPANE, [280.0, 2e6])
    assert 1e4 < rho < 1.4e4
    p = utils.pure_vp(PROPANE, [300.0])
    assert 0.8e6 < p < 1.2e6
    h_lv = utils.pure_h_lv(PROPANE, [300.0])
    assert 10.0 < h_lv < 20.0
    assert utils.pure_s_lv(PROPANE, [300.0]) > 0.0


def test_critical_points_and_spinodal():
    tc, pc, dc = utils.critical_points(PROPANE)
    assert 365.0 < tc < 385.0
    assert pc > 0.0
    rho_v, rho_l = utils.pure_spinodal(PROPANE, [300.0])
    assert rho_v < dc < rho_l


def test_pure_viscosity():
    eta = utils.pure_viscosity(PROPANE, PROPANE_VISCOSITY, [300.0, 5e6])
    assert 3e-5 < eta < 5e-4


def test_mixture_properties():
    rho = utils.mix_den(MIXTURE, STATE)
    assert rho > 5e3
    ln_phi = utils.mix_ln_fugacity_coefficient(MIXTURE, STATE)
    assert ln_phi.shape == (2,)
    ln_phi_pure = utils.mix_ln_fugacity_coefficient_pure(MIXTURE, STATE)
    ln_gamma = utils.mix_ln_activity_coefficient(MIXTURE, STATE)
    np.testing.assert_allclose(ln_gamma, ln_phi - ln_phi_pure, rtol=1e-10)

    x = np.array(STATE[2:])
    g_e = utils.mix_e_gibbs_energy(MIXTURE, STATE)
    assert g_e == pytest.approx(np.dot(x, ln_gamma), rel=1e-10)
    # nearly ideal mixture of alkanes
    assert abs(g_e) < 0.05
    g_mix = utils.mix_gibbs_energy(MIXTURE, STATE)
    assert g_mix == pytest.approx(g_e + np.dot(x, np.log(x)), rel=1e-10)
    assert utils.mix_r_gibbs_energy(MIXTURE, STATE) == pytest.approx(
        np.dot(x, ln_phi), rel=1e-10
    )


def test_mixture_heat_capacity_and_critical_point():
    cp_res = utils.mix_isobaric_heat_capacity(MIXTURE, STATE)
    assert cp_res > 0.0
    tc, pc, dc = utils.mix_critical_point(MIXTURE, [0.5, 0.5])
    tc_1 = utils.critical_points(PROPANE)[0]
    tc_2 = utils.critical_points(BUTANE)[0]
    assert tc_1 < tc < tc_2
    assert pc > 0.0 and dc > 0.0


def test_kij_matrix():
    kij = [[0.0, 0.05], [0.05, 0.0]]
    g_e = utils.mix_e_gibbs_energy(MIXTURE, STATE)
    g_e_kij = utils.mix_e_gibbs_energy(MIXTURE, STATE, kij)
    # weaker cross attraction raises the excess Gibbs energy
    assert g_e_kij > g_e
