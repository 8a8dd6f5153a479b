"""Equations of state shared by the tests."""

# @author: Wildson Lima

import pytest

from saftstate.pcsaft.utils import pc_saft, pc_saft_mixture

# [m, sigma, epsilon/kB, kappa_ab, epsilon_ab/kB, dipole moment, na, nb, MW]
PROPANE = [2.001829, 3.618353, 208.1101, 0.0, 0.0, 0.0, 0.0, 0.0, 44.0962]
BUTANE = [2.331586, 3.7086010000000003, 222.8774, 0.0, 0.0, 0.0, 0.0, 0.0, 58.123]
CO2 = [1.5131, 3.1869, 163.333, 0.0, 0.0, 0.0, 0.0, 0.0, 44.0098]
DME = [2.2634, 3.2723, 210.29, 0.0, 0.0, 1.3, 0.0, 0.0, 46.0688]
WATER = [1.065587, 3.000683, 366.5121, 0.034867983, 2500.6706, 0.0, 1.0, 1.0, 18.0152]
PROPANE_VISCOSITY = [-0.8013, -1.9972, -0.2907, -0.0467]
PROPANE_DIFFUSION = [-0.675163251512047, 0.3212017677695878, 0.100175249144429, 0.0, 0.0]
PROPANE_THERMAL_CONDUCTIVITY = [-0.15348, -0.6388, 1.21342, -0.01664]


@pytest.fixture(scope="session")
def propane():
    return pc_saft(
        PROPANE,
        viscosity=PROPANE_VISCOSITY,
        diffusion=PROPANE_DIFFUSION,
        thermal_conductivity=PROPANE_THERMAL_CONDUCTIVITY,
    )


@pytest.fixture(scope="session")
def propane_no_mw():
    return pc_saft(PROPANE[:8])


@pytest.fixture(scope="session")
def water():
    return pc_saft(WATER)


@pytest.fixture(scope="session")
def dme():
    return pc_saft(DME)


@pytest.fixture(scope="session")
def propane_butane():
    return pc_saft_mixture([PROPANE, BUTANE])


@pytest.fixture(scope="session")
def co2_dme_water():
    return pc_saft_mixture([CO2, DME, WATER], kij_matrix=[[0.0, 0.0, 0.0]] * 3)
