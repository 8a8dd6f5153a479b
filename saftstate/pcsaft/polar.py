"Polar contribution of PC-SAFT."

# @author: Wildson Lima

import numpy as np

from ..eos import Contribution

# Dipole term (Gross and Vrabec term) --------------------------------------
# Gross, Joachim, e Jadran Vrabec. “An Equation-of-State Contribution for
# Polar Components: Dipolar Molecules”. AIChE Journal 52, nº 3 (2006): 1194–1204.
#  https://doi.org/10.1002/aic.10683.

AD = np.asarray(
    [
        [0.3043504, -0.1358588, 1.4493329, 0.3556977, -2.0653308],
        [0.9534641, -1.8396383, 2.0131180, -7.3724958, 8.2374135],
        [-1.1610080, 4.5258607, 0.9751222, -12.281038, 5.9397575],
    ]
)
BD = np.asarray(
    [
        [0.2187939, -1.1896431, 1.1626889, 0.0, 0.0],
        [-0.5873164, 1.2489132, -0.5085280, 0.0, 0.0],
        [3.4869576, -14.915974, 15.372022, 0.0, 0.0],
    ]
)
CD = np.asarray(
    [
        [-0.0646774, 0.1975882, -0.8087562, 0.6902849],
        [-0.9520876, 2.9924258, -2.3802636, -0.2701261],
        [-0.6260979, 1.2924686, 1.6542783, -3.4396744],
    ]
)


def _segment_coefs(coefs: np.ndarray, m: np.ndarray) -> np.ndarray:
    "`c0 + (m-1)/m c1 + (m-1)/m (m-2)/m c2` with the order as leading axis."
    m = np.minimum(m, 2.0)
    m1 = (m - 1.0) / m
    m2 = m1 * (m - 2.0) / m
    shape = (-1,) + (1,) * m.ndim
    return (
        coefs[0].reshape(shape)
        + coefs[1].reshape(shape) * m1
        + coefs[2].reshape(shape) * m2
    )


class Dipole(Contribution):
    """
    Dipole-dipole interactions as a Padé approximation `A2 / (1 - A3 / A2)`.

    Only components with a dipole moment take part. `A2` is linear and `A3`
    quadratic in the density, the density is factored out so the term is
    zero rather than undefined at vanishing density.
    """

    name = "Dipole"

    def __init__(self, parameters):
        self.parameters = parameters
        p = parameters
        idx = p.dipole_comp
        self.comp = idx
        m = p.m[idx]
        sigma3 = p.sigma[idx] ** 3
        sigma_ij = p.sigma_ij[np.ix_(idx, idx)]
        mu2 = p.mu2[idx]
        self.epsilon_k = p.epsilon_k[idx]
        self.e_k_ij = p.e_k_ij[np.ix_(idx, idx)]

        m_ij = np.sqrt(m[:, None] * m[None, :])
        self.a_ij = _segment_coefs(AD, m_ij)
        self.b_ij = _segment_coefs(BD, m_ij)
        m_ijk = (m[:, None, None] * m[None, :, None] * m[None, None, :]) ** (1 / 3.0)
        self.c_ijk = _segment_coefs(CD, m_ijk)

        self.pref2 = (
            sigma3[:, None] * sigma3[None, :] / sigma_ij**3 * mu2[:, None] * mu2[None, :]
        )
        self.pref3 = (
            sigma3[:, None, None]
            * sigma3[None, :, None]
            * sigma3[None, None, :]
            / (
                sigma_ij[:, :, None]
                * sigma_ij[:, None, :]
                * sigma_ij[None, :, :]
            )
            * mu2[:, None, None]
            * mu2[None, :, None]
            * mu2[None, None, :]
        )

    # pylint: disable=R0914
    def helmholtz_energy(self, state, properties):
        p = self.parameters
        t = state.temperature
        rho = state.density
        eta = rho * (state.molefracs * p.m * properties**3).sum() * (np.pi / 6.0)

        x = state.molefracs[self.comp]
        e_t = self.epsilon_k / t
        xe = x * e_t
        xe_ij = xe[:, np.newaxis] * xe[np.newaxis, :]
        xe_ijk = xe[:, np.newaxis, np.newaxis] * xe_ij[np.newaxis, :, :]

        etan = [eta**k for k in range(5)]
        e_ij_t = self.e_k_ij / t
        j2 = sum(
            (e_ij_t * self.b_ij[k] + self.a_ij[k]) * etan[k] for k in range(5)
        )
        j3 = sum(etan[k] * self.c_ijk[k] for k in range(4))

        # A2 / rho and A3 / rho^2
        a2 = -(xe_ij * self.pref2 * j2).sum() * np.pi
        a3 = -(xe_ijk * self.pref3 * j3).sum() * (4.0 / 3.0 * np.pi**2)
        return state.total_moles * rho * a2 / (1.0 - rho * a3 / a2)
