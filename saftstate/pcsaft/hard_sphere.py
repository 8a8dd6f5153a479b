"""
Hard sphere and hard chain contributions
---------------
Boublík-Mansoori-Carnahan-Starling-Leland hard sphere mixture and the
chain term of Gross and Sadowski (2001). Both are written per molecule in
terms of the density so they stay finite at vanishing density.
"""

# @author: Wildson Lima

import numpy as np

from ..dual import log
from ..eos import Contribution


def zeta_moments(m: np.ndarray, diameter, molefracs):
    "`z_k = pi/6 sum_i x_i m_i d_i^k` for k = 0..3; `zeta_k = rho z_k`."
    xm = molefracs * m
    return [(xm * diameter**k).sum() * (np.pi / 6.0) for k in range(4)]


def hs_contact_diagonal(diameter, zeta2, zeta3):
    "Pair correlation function at contact of equal hard spheres `g_ii`."
    frac = 1.0 / (1.0 - zeta3)
    d_half = diameter * 0.5
    return frac + d_half * zeta2 * frac**2 * 3.0 + (d_half * zeta2) ** 2 * frac**3 * 2.0


def hs_contact(diameter, zeta2, zeta3):
    "Pair correlation function at contact `g_ij` of all pairs."
    frac = 1.0 / (1.0 - zeta3)
    d_i = diameter[:, np.newaxis]
    d_j = diameter[np.newaxis, :]
    d_ij = d_i * d_j / (d_i + d_j)
    return frac + d_ij * zeta2 * frac**2 * 3.0 + (d_ij * zeta2) ** 2 * frac**3 * 2.0


class HardSphere(Contribution):
    """Hard sphere contribution of the chain segments."""

    name = "Hard Sphere"

    def __init__(self, parameters):
        self.parameters = parameters

    def helmholtz_energy(self, state, properties):
        z0, z1, z2, z3 = zeta_moments(self.parameters.m, properties, state.molefracs)
        rho = state.density
        zeta3 = rho * z3
        frac = 1.0 - zeta3
        a = (
            rho * z1 * z2 * 3.0 / frac
            + rho * z2**3 / (z3 * frac**2)
            + (z2**3 / z3**2 - z0) * log(frac)
        )
        return state.total_moles * a * (6.0 / np.pi)


class HardChain(Contribution):
    """Chain formation of tangent hard sphere segments."""

    name = "Hard Chain"

    def __init__(self, parameters):
        self.parameters = parameters

    def helmholtz_energy(self, state, properties):
        m = self.parameters.m
        _, _, z2, z3 = zeta_moments(m, properties, state.molefracs)
        rho = state.density
        g_ii = hs_contact_diagonal(properties, rho * z2, rho * z3)
        return -(state.moles * (m - 1.0) * log(g_ii)).sum()
