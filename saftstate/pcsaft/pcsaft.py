"""
PC-SAFT residual model
---------------
Gross, Joachim, and Gabriele Sadowski. “Perturbed-Chain SAFT: An Equation
of State Based on a Perturbation Theory for Chain Molecules”. Industrial &
Engineering Chemistry Research 40, nº 4 (2001): 1244–60.
https://doi.org/10.1021/ie0003887.
"""

# @author: Wildson Lima

from typing import Optional

import ml_collections
import numpy as np

from ..configs.default import get_config
from ..constants import ANGSTROM, KB, MOLES_TO_REDUCED, N_AV, RGAS, VOLUME_TO_REDUCED
from ..dual import exp, first_derivative
from ..eos import Residual, StateHD
from ..errors import (
    MissingCapabilityError,
    MissingMolarWeightError,
    MissingParameterError,
)
from .association import Association
from .dispersion import Dispersion
from .hard_sphere import HardChain, HardSphere
from .parameters import PcSaftParameters
from .polar import Dipole


def omega22(t_red: np.ndarray) -> np.ndarray:
    "Collision integral of Neufeld et al. (1972) at reduced temperature `kT/epsilon`."
    return (
        1.16145 * t_red ** (-0.14874)
        + 0.52487 * np.exp(-0.77320 * t_red)
        + 2.16178 * np.exp(-2.43787 * t_red)
        - 6.435e-4 * t_red**0.14874 * np.sin(18.0323 * t_red ** (-0.76830) - 7.27371)
    )


def omega11(t_red: np.ndarray) -> np.ndarray:
    "Collision integral of Neufeld et al. (1972) for diffusion."
    return (
        1.06036 * t_red ** (-0.15610)
        + 0.19300 * np.exp(-0.47635 * t_red)
        + 1.03587 * np.exp(-1.52996 * t_red)
        + 1.76474 * np.exp(-3.89411 * t_red)
    )


class PcSaft(Residual):
    """
    PC-SAFT with hard sphere, hard chain, dispersion, dipole and
    association contributions. Dipole and association are only added if
    a component has a dipole moment or association sites.

    Parameters
    ----------
    parameters : PcSaftParameters
    options : ml_collections.ConfigDict, optional
        `max_eta`, `max_iter_association`, `tol_association`,
        `newton_steps_association`; `get_config().pcsaft` when not given.
    """

    def __init__(
        self,
        parameters: PcSaftParameters,
        options: Optional[ml_collections.ConfigDict] = None,
    ):
        if options is None:
            options = get_config().pcsaft
        self.parameters = parameters
        self.options = options
        self._contributions = [
            HardSphere(parameters),
            HardChain(parameters),
            Dispersion(parameters),
        ]
        if len(parameters.dipole_comp) > 0:
            self._contributions.append(Dipole(parameters))
        if len(parameters.assoc_comp) > 0:
            self._contributions.append(
                Association(
                    parameters,
                    max_iter=options.max_iter_association,
                    tol=options.tol_association,
                    newton_steps=options.newton_steps_association,
                )
            )

    @property
    def components(self) -> int:
        return self.parameters.components

    def subset(self, component_list):
        return PcSaft(self.parameters.subset(component_list), self.options)

    def contributions(self):
        return self._contributions

    def properties(self, temperature):
        "Temperature dependent segment diameter (Angstrom)."
        p = self.parameters
        return p.sigma * (1.0 - exp(p.epsilon_k * -3.0 / temperature) * 0.12)

    def compute_max_density(self, moles):
        p = self.parameters
        return (
            self.options.max_eta
            * moles.sum()
            / (np.pi / 6.0 * (p.m * p.sigma**3 * moles).sum())
        )

    def molar_weight(self):
        if self.parameters.molarweight is None:
            raise MissingMolarWeightError()
        return self.parameters.molarweight * 1e-3

    # --- entropy scaling -----------------------------------------------------
    def viscosity_reference(self, temperature, volume, moles):
        """
        Chapman-Enskog viscosity (Pa s) of the mixture, Wilke mixing rule.
        """
        self._coefficients("viscosity")
        p = self.parameters
        mw = self.molar_weight()
        x = np.asarray(moles, dtype=np.float64) / np.sum(moles)
        ce = (
            5.0
            / 16.0
            * np.sqrt(mw * KB / (N_AV * np.pi) * temperature)
            / (omega22(temperature / p.epsilon_k) * (p.sigma * ANGSTROM) ** 2)
        )
        mw_i = mw[:, None]
        mw_j = mw[None, :]
        phi = (1.0 + np.sqrt(ce[:, None] / ce[None, :]) * (mw_j / mw_i) ** 0.25) ** 2
        phi /= np.sqrt(8.0 * (1.0 + mw_i / mw_j))
        return float(np.sum(x * ce / (phi @ x)))

    def viscosity_correlation(self, s_res, molefracs):
        """
        `ln(eta / eta_ref) = A + B s + C s^2 + D s^3`

        with `s = s_res / m_avg` the reduced residual molar entropy per segment.
        """
        coefs = self._coefficients("viscosity")
        x = np.asarray(molefracs, dtype=np.float64)
        m = self.parameters.m
        m_avg = np.sum(x * m)
        s = s_res / m_avg
        pref = x * m / m_avg
        a = np.sum(coefs[:, 0] * x)
        b = np.sum(coefs[:, 1] * pref)
        c = np.sum(coefs[:, 2] * pref)
        d = np.sum(coefs[:, 3] * pref)
        return a + b * s + c * s**2 + d * s**3

    def _coefficients(self, name: str) -> np.ndarray:
        coefs = getattr(self.parameters, name)
        if coefs is None:
            raise MissingParameterError(
                f"{name.replace('_', ' ').capitalize()} needs entropy scaling "
                "coefficients for every component."
            )
        return coefs

    def _pure_only(self, name: str) -> None:
        if self.components != 1:
            raise MissingCapabilityError(
                f"Entropy scaling of the {name} is only available for pure components."
            )

    def residual_molar_entropy(self, temperature, volume, moles) -> float:
        "Residual molar entropy at constant (T, V) divided by R."
        v = volume * VOLUME_TO_REDUCED
        n = np.asarray(moles, dtype=np.float64) * MOLES_TO_REDUCED
        a, a_t = first_derivative(
            lambda t: self.evaluate(StateHD(t, v, n)), temperature
        )
        return -float(a + temperature * a_t) / n.sum()

    def diffusion_reference(self, temperature, volume, moles):
        """
        Chapman-Enskog self-diffusion coefficient (m²/s) at the density of
        the state.
        """
        self._pure_only("diffusion coefficient")
        self._coefficients("diffusion")
        p = self.parameters
        mw = self.molar_weight()[0]
        density = np.sum(moles) / volume
        return float(
            3.0
            / 8.0
            / ((p.sigma[0] * ANGSTROM) ** 2 * omega11(temperature / p.epsilon_k[0]))
            / (density * N_AV)
            * np.sqrt(RGAS * temperature / (np.pi * mw * p.m[0]))
        )

    def diffusion_correlation(self, s_res, molefracs):
        "`ln(D / D_ref) = A + B s + C s^2 + D s^3 + E s^4`, `s = s_res / m`."
        self._pure_only("diffusion coefficient")
        coefs = self._coefficients("diffusion")[0]
        s = s_res / self.parameters.m[0]
        return float(np.dot(coefs, s ** np.arange(5)))

    def thermal_conductivity_reference(self, temperature, volume, moles):
        """
        Chapman-Enskog thermal conductivity (W/(m K)) plus a correction that
        decays with the residual entropy.
        """
        self._pure_only("thermal conductivity")
        self._coefficients("thermal_conductivity")
        p = self.parameters
        m, sigma, eps_k = p.m[0], p.sigma[0], p.epsilon_k[0]
        mw = self.molar_weight()[0] * 1e3
        t_red = temperature / eps_k
        ce = (
            0.083235
            * np.sqrt(temperature * m / mw)
            / sigma**2
            / omega22(t_red)
        )
        s = self.residual_molar_entropy(temperature, volume, moles) / m
        correction = (
            (-0.0167141 * t_red / m + 0.0470581 * (t_red / m) ** 2)
            * (m * m * sigma**3 * eps_k)
            * 1e-5
        )
        return float(ce + correction * np.exp(2.0 * s))

    def thermal_conductivity_correlation(self, s_res, molefracs):
        """
        `ln(lambda / lambda_ref) = A + B s + C (1 - exp(s)) + D s^2`

        with `s = s_res / m_avg`.
        """
        coefs = self._coefficients("thermal_conductivity")
        x = np.asarray(molefracs, dtype=np.float64)
        m = self.parameters.m
        m_avg = np.sum(x * m)
        s = s_res / m_avg
        pref = x * m / m_avg
        a = np.sum(coefs[:, 0] * x)
        b = np.sum(coefs[:, 1] * pref)
        c = np.sum(coefs[:, 2] * pref)
        d = np.sum(coefs[:, 3] * pref)
        return a + b * s + c * (1.0 - np.exp(s)) + d * s**2

    def __repr__(self) -> str:
        names = ", ".join(str(c) for c in self._contributions)
        return f"PcSaft({self.components} components: {names})"
