"""
Ideal gas contributions
---------------
The ideal gas Helmholtz energy of component `i` follows from its thermal
de Broglie volume `Lambda_i^3`:

    beta A^ig = sum_i n_i (ln(rho_i Lambda_i^3) - 1)

Implementations only provide `ln_lambda3(temperature)` (Angstrom^3).
"""

# @author: Wildson Lima

from typing import Optional, Sequence

import numpy as np

from ..constants import AMU, ANGSTROM3, KB, P0, PLANCK, RGAS, T0
from ..dual import log, value
from .state_hd import StateHD


class IdealGas:
    """Base class of ideal gas models."""

    name = "Ideal gas"

    @property
    def components(self) -> int:
        "Number of components."
        raise NotImplementedError

    def subset(self, component_list: Sequence[int]) -> "IdealGas":
        "Model of the components in `component_list`."
        raise NotImplementedError

    def ln_lambda3(self, temperature):
        "Logarithm of the thermal de Broglie volume (Angstrom^3) of each component."
        raise NotImplementedError

    def evaluate(self, state: StateHD):
        "Ideal gas reduced Helmholtz energy."
        ln_lambda3 = self.ln_lambda3(state.temperature)
        # vanishing components do not contribute
        present = np.flatnonzero(value(state.moles) > 0.0)
        rho = state.partial_density[present]
        n = state.moles[present]
        terms = n * (log(rho) + ln_lambda3[present] - 1.0)
        return terms.sum()

    def __str__(self) -> str:
        return self.name


class DeBroglieWavelength(IdealGas):
    """
    Translational ideal gas.

    `Lambda = h / sqrt(2 pi m k T)` from the molar weights (kg/mol). Without
    molar weights every molecule gets the atomic mass unit, which leaves
    all properties except the absolute entropy unchanged.
    """

    name = "Ideal gas (De Broglie)"

    def __init__(self, components: int, molar_weight: Optional[np.ndarray] = None):
        self._components = components
        if molar_weight is None:
            molar_weight = np.ones(components) * 1e-3
        self.molar_weight = np.asarray(molar_weight, dtype=np.float64)

    @property
    def components(self) -> int:
        return self._components

    def subset(self, component_list):
        return DeBroglieWavelength(
            len(component_list), self.molar_weight[list(component_list)]
        )

    def ln_lambda3(self, temperature):
        mass = self.molar_weight / 1e-3 * AMU
        lambda3 = (PLANCK**2 / (2.0 * np.pi * mass * KB)) ** 1.5 / ANGSTROM3
        return np.log(lambda3) - 1.5 * log(temperature)


class Joback(IdealGas):
    """
    Ideal gas heat capacity polynomial of Joback and Reid.

    `c_p(T) = a + b T + c T^2 + d T^3 + e T^4` in J/(mol K) per component;
    the reference state is 298.15 K and 1 bar.
    """

    name = "Ideal gas (Joback)"

    def __init__(self, a, b, c, d, e):
        self.coefs = np.array(
            [np.atleast_1d(np.asarray(x, dtype=np.float64)) for x in (a, b, c, d, e)]
        )

    @property
    def components(self) -> int:
        return self.coefs.shape[1]

    def subset(self, component_list):
        return Joback(*self.coefs[:, list(component_list)])

    @classmethod
    def from_records(cls, records):
        """
        `records` is a list of `[a, b, c, d, e]`, one per component.
        """
        return cls(*np.asarray(records, dtype=np.float64).T)

    def ln_lambda3(self, temperature):
        a, b, c, d, e = self.coefs
        t = temperature
        # enthalpy and entropy integrals from T0 to T
        h = (
            a * (t - T0)
            + b / 2.0 * (t**2 - T0**2)
            + c / 3.0 * (t**3 - T0**3)
            + d / 4.0 * (t**4 - T0**4)
            + e / 5.0 * (t**5 - T0**5)
        )
        s = (
            a * (log(t) - np.log(T0))
            + b * (t - T0)
            + c / 2.0 * (t**2 - T0**2)
            + d / 3.0 * (t**3 - T0**3)
            + e / 4.0 * (t**4 - T0**4)
        )
        ln_ref = log(t * (KB / (P0 * ANGSTROM3)))
        return (h - t * s) / (RGAS * t) + ln_ref

    def heat_capacity(self, temperature: float) -> np.ndarray:
        "Ideal gas isobaric heat capacity (J/(mol K)) of each component."
        a, b, c, d, e = self.coefs
        t = temperature
        return a + b * t + c * t**2 + d * t**3 + e * t**4
