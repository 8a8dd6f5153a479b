"""
Residual Helmholtz energy models
---------------
A residual model is an ordered list of contributions to the reduced
Helmholtz energy `beta A^res`. Every contribution is written with plain
array expressions, so it can be evaluated with floats or with dual numbers
of any order.
"""

# @author: Wildson Lima

from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..constants import DENSITY_TO_REDUCED, MOLES_TO_REDUCED
from ..dual import (
    first_derivative,
    partial_second_derivative,
    second_derivative,
    second_partial_derivative,
)
from ..errors import (
    IncompatibleComponentsError,
    InvalidStateError,
    MissingMolarWeightError,
    MissingParameterError,
)
from .state_hd import StateHD


class Contribution:
    """One term of the residual Helmholtz energy."""

    name = "contribution"

    def helmholtz_energy(self, state: StateHD, properties):
        """
        Reduced Helmholtz energy of the contribution.

        Parameters
        ----------
        state : StateHD
            State in reduced units, at any dual precision.
        properties :
            Temperature dependent bundle from `Residual.properties`.
        """
        raise NotImplementedError

    def __str__(self) -> str:
        return self.name


class Residual:
    """
    Base class of residual Helmholtz energy models.

    Subclasses provide `components`, `subset`, `contributions`,
    `compute_max_density` and, optionally, `properties`, `molar_weight`
    and the entropy scaling correlations.
    """

    @property
    def components(self) -> int:
        "Number of components."
        raise NotImplementedError

    def subset(self, component_list: Sequence[int]) -> "Residual":
        "Model of the components in `component_list`, binary data preserved."
        raise NotImplementedError

    def contributions(self) -> List[Contribution]:
        "Contributions in the order they are summed."
        raise NotImplementedError

    def properties(self, temperature):
        "Temperature dependent quantities shared by the contributions."
        return None

    def compute_max_density(self, moles: np.ndarray) -> float:
        "Maximum density estimate in Angstrom^-3 for reduced `moles`."
        raise NotImplementedError

    # --- evaluation ---------------------------------------------------------
    def evaluate(self, state: StateHD):
        "Residual reduced Helmholtz energy `beta A^res`."
        properties = self.properties(state.temperature)
        a = 0.0
        for contribution in self.contributions():
            a = a + contribution.helmholtz_energy(state, properties)
        return a

    def evaluate_with_breakdown(self, state: StateHD) -> List[Tuple[str, object]]:
        "`(name, beta A)` of every contribution, in summation order."
        properties = self.properties(state.temperature)
        return [
            (str(c), c.helmholtz_energy(state, properties))
            for c in self.contributions()
        ]

    # --- composition --------------------------------------------------------
    def validate_moles(self, moles: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Checks `moles` (mol) against the number of components and rejects
        negative amounts.

        A pure component model accepts `None`, which stands for one
        molecule (`1 / N_AV` mol).
        """
        length = 1 if moles is None else len(np.atleast_1d(moles))
        if self.components != length:
            raise IncompatibleComponentsError(self.components, length)
        if moles is None:
            return np.ones(1) / MOLES_TO_REDUCED
        moles = np.array(moles, dtype=np.float64, ndmin=1)
        if np.any(moles < 0.0):
            raise InvalidStateError("validate_moles", "moles", moles)
        return moles

    def max_density(self, moles: Optional[np.ndarray] = None) -> float:
        """
        Maximum density estimate (mol/m³).

        Only used to seed iterations, it is not a bound of the model.
        """
        moles = self.validate_moles(moles) * MOLES_TO_REDUCED
        return self.compute_max_density(moles) / DENSITY_TO_REDUCED

    # --- mass -----------------------------------------------------------------
    def molar_weight(self) -> np.ndarray:
        "Molar weights (kg/mol)."
        raise MissingMolarWeightError()

    def has_molar_weight(self) -> bool:
        "Are molar weights available."
        try:
            self.molar_weight()
        except MissingMolarWeightError:
            return False
        return True

    # --- virial coefficients --------------------------------------------------
    def _virial(self, temperature, moles):
        moles = self.validate_moles(moles)
        x = moles / moles.sum()
        return lambda t, rho: self.evaluate(StateHD.virial(t, rho, x))

    def second_virial_coefficient(self, temperature: float, moles=None) -> float:
        "Second virial coefficient B (m³/mol)."
        f = self._virial(temperature, moles)
        _, b = first_derivative(lambda rho: f(temperature, rho), 0.0)
        return float(b) * DENSITY_TO_REDUCED

    def third_virial_coefficient(self, temperature: float, moles=None) -> float:
        "Third virial coefficient C (m⁶/mol²)."
        f = self._virial(temperature, moles)
        _, _, c = second_derivative(lambda rho: f(temperature, rho), 0.0)
        return float(c) * DENSITY_TO_REDUCED**2

    def second_virial_coefficient_temperature_derivative(
        self, temperature: float, moles=None
    ) -> float:
        "dB/dT (m³/mol/K)."
        f = self._virial(temperature, moles)
        _, _, _, db_dt = second_partial_derivative(f, temperature, 0.0)
        return float(db_dt) * DENSITY_TO_REDUCED

    def third_virial_coefficient_temperature_derivative(
        self, temperature: float, moles=None
    ) -> float:
        "dC/dT (m⁶/mol²/K)."
        f = self._virial(temperature, moles)
        dc_dt = partial_second_derivative(f, temperature, 0.0)[5]
        return float(dc_dt) * DENSITY_TO_REDUCED**2

    # --- entropy scaling -------------------------------------------------------
    def viscosity_reference(self, temperature: float, volume: float, moles) -> float:
        "Reference viscosity (Pa s) of entropy scaling."
        raise MissingParameterError(
            f"{type(self).__name__} provides no viscosity reference."
        )

    def viscosity_correlation(self, s_res: float, molefracs: np.ndarray) -> float:
        "Logarithm of the reduced viscosity as a function of the residual entropy."
        raise MissingParameterError(
            f"{type(self).__name__} provides no viscosity correlation."
        )

    def diffusion_reference(self, temperature: float, volume: float, moles) -> float:
        "Reference self-diffusion coefficient (m²/s) of entropy scaling."
        raise MissingParameterError(
            f"{type(self).__name__} provides no diffusion reference."
        )

    def diffusion_correlation(self, s_res: float, molefracs: np.ndarray) -> float:
        "Logarithm of the reduced diffusion coefficient."
        raise MissingParameterError(
            f"{type(self).__name__} provides no diffusion correlation."
        )

    def thermal_conductivity_reference(
        self, temperature: float, volume: float, moles
    ) -> float:
        "Reference thermal conductivity (W/(m K)) of entropy scaling."
        raise MissingParameterError(
            f"{type(self).__name__} provides no thermal conductivity reference."
        )

    def thermal_conductivity_correlation(
        self, s_res: float, molefracs: np.ndarray
    ) -> float:
        "Logarithm of the reduced thermal conductivity."
        raise MissingParameterError(
            f"{type(self).__name__} provides no thermal conductivity correlation."
        )


class NoResidual(Residual):
    """Residual model without contributions, i.e. an ideal gas."""

    def __init__(self, components: int) -> None:
        self._components = components

    @property
    def components(self) -> int:
        return self._components

    def subset(self, component_list):
        return NoResidual(len(component_list))

    def contributions(self):
        return []

    def compute_max_density(self, moles):
        return 1.0

    def __repr__(self) -> str:
        return f"NoResidual({self._components})"
