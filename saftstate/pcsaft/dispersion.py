"Dispersion contribution of PC-SAFT (Gross and Sadowski 2001)."

# @author: Wildson Lima

import numpy as np

from ..eos import Contribution

A0 = np.asarray(
    [
        0.910563145,
        0.636128145,
        2.686134789,
        -26.54736249,
        97.75920878,
        -159.5915409,
        91.29777408,
    ]
)
A1 = np.asarray(
    [
        -0.308401692,
        0.186053116,
        -2.503004726,
        21.41979363,
        -65.25588533,
        83.31868048,
        -33.74692293,
    ]
)
A2 = np.asarray(
    [
        -0.090614835,
        0.452784281,
        0.596270073,
        -1.724182913,
        -4.130211253,
        13.77663187,
        -8.672847037,
    ]
)
B0 = np.asarray(
    [
        0.724094694,
        2.238279186,
        -4.002584949,
        -21.00357682,
        26.85564136,
        206.5513384,
        -355.6023561,
    ]
)
B1 = np.asarray(
    [
        -0.575549808,
        0.699509552,
        3.892567339,
        -17.21547165,
        192.6722645,
        -161.8264617,
        -165.2076935,
    ]
)
B2 = np.asarray(
    [
        0.097688312,
        -0.255757498,
        -9.155856153,
        20.64207597,
        -38.80443005,
        93.62677408,
        -29.66690559,
    ]
)


def horner(coefs, x):
    "`sum_k coefs[k] x^k`"
    res = coefs[-1]
    for c in coefs[-2::-1]:
        res = res * x + c
    return res


class Dispersion(Contribution):
    """Perturbation theory of Barker and Henderson to second order."""

    name = "Dispersion"

    def __init__(self, parameters):
        self.parameters = parameters

    # pylint: disable=R0914
    def helmholtz_energy(self, state, properties):
        p = self.parameters
        t = state.temperature
        x = state.molefracs
        rho = state.density
        diameter = properties

        m_avg = (x * p.m).sum()
        eta = rho * (x * p.m * diameter**3).sum() * (np.pi / 6.0)

        xx = x[:, np.newaxis] * x[np.newaxis, :]
        mm = p.m[:, np.newaxis] * p.m[np.newaxis, :] * p.sigma_ij**3
        e_t = p.epsilon_k_ij / t
        m2es3 = (xx * mm * e_t).sum()
        m2e2s3 = (xx * mm * e_t**2).sum()

        m1 = (m_avg - 1.0) / m_avg
        m2 = m1 * (m_avg - 2.0) / m_avg
        i1 = horner([m1 * A1[k] + m2 * A2[k] + A0[k] for k in range(7)], eta)
        i2 = horner([m1 * B1[k] + m2 * B2[k] + B0[k] for k in range(7)], eta)

        frac = 1.0 - eta
        c1 = 1.0 / (
            1.0
            + m_avg * (eta * 8.0 - eta**2 * 2.0) / frac**4
            + (1.0 - m_avg)
            * (eta * 20.0 - eta**2 * 27.0 + eta**3 * 12.0 - eta**4 * 2.0)
            / (frac * (2.0 - eta)) ** 2
        )

        a = -rho * np.pi * (i1 * m2es3 * 2.0 + m_avg * c1 * i2 * m2e2s3)
        return state.total_moles * a
