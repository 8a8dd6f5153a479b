"""
Equation of state
---------------
Pairs a residual model with an ideal gas model. The total reduced Helmholtz
energy is their sum; `Contributions` selects which part is evaluated.
"""

# @author: Wildson Lima

import enum
from typing import Optional, Sequence

import numpy as np

from ..errors import IncompatibleComponentsError
from .ideal_gas import DeBroglieWavelength, IdealGas
from .residual import NoResidual, Residual
from .state_hd import StateHD


class Contributions(enum.Enum):
    """Parts of the Helmholtz energy a property is evaluated with."""

    TOTAL = "total"
    RESIDUAL = "residual"
    IDEAL_GAS = "ideal_gas"

    @classmethod
    def parse(cls, contributions) -> "Contributions":
        "From a member or its name, e.g. `'residual'`."
        if isinstance(contributions, cls):
            return contributions
        return cls(str(contributions).lower().replace(" ", "_"))


class EquationOfState:
    """
    Residual model plus ideal gas model.

    Parameters
    ----------
    residual : Residual
        Residual Helmholtz energy model.
    ideal_gas : IdealGas, optional
        Ideal gas model; translational only (`DeBroglieWavelength`) with the
        molar weights of `residual`, if available, when not given.
    """

    def __init__(self, residual: Residual, ideal_gas: Optional[IdealGas] = None):
        if ideal_gas is None:
            molar_weight = residual.molar_weight() if residual.has_molar_weight() else None
            ideal_gas = DeBroglieWavelength(residual.components, molar_weight)
        if ideal_gas.components != residual.components:
            raise IncompatibleComponentsError(residual.components, ideal_gas.components)
        self.residual = residual
        self.ideal_gas = ideal_gas

    @classmethod
    def pcsaft(cls, parameters, ideal_gas: Optional[IdealGas] = None, options=None):
        "PC-SAFT equation of state from `PcSaftParameters`."
        # pylint: disable=import-outside-toplevel
        from ..pcsaft import PcSaft

        return cls(PcSaft(parameters, options), ideal_gas)

    @classmethod
    def ideal_gas_only(cls, ideal_gas: IdealGas):
        "Equation of state without residual contributions."
        return cls(NoResidual(ideal_gas.components), ideal_gas)

    @property
    def components(self) -> int:
        "Number of components."
        return self.residual.components

    def subset(self, component_list: Sequence[int]) -> "EquationOfState":
        "Equation of state of the components in `component_list`."
        return EquationOfState(
            self.residual.subset(component_list),
            self.ideal_gas.subset(component_list),
        )

    def evaluate(self, state: StateHD, contributions=Contributions.TOTAL):
        "Reduced Helmholtz energy of the selected contributions."
        contributions = Contributions.parse(contributions)
        if contributions is Contributions.RESIDUAL:
            return self.residual.evaluate(state)
        if contributions is Contributions.IDEAL_GAS:
            return self.ideal_gas.evaluate(state)
        return self.ideal_gas.evaluate(state) + self.residual.evaluate(state)

    def evaluate_with_breakdown(self, state: StateHD, contributions=Contributions.TOTAL):
        "`(name, beta A)` of the ideal gas and/or every residual contribution."
        contributions = Contributions.parse(contributions)
        out = []
        if contributions is not Contributions.RESIDUAL:
            out.append((str(self.ideal_gas), self.ideal_gas.evaluate(state)))
        if contributions is not Contributions.IDEAL_GAS:
            out.extend(self.residual.evaluate_with_breakdown(state))
        return out

    def validate_moles(self, moles: Optional[np.ndarray] = None) -> np.ndarray:
        "See `Residual.validate_moles`."
        return self.residual.validate_moles(moles)

    def max_density(self, moles: Optional[np.ndarray] = None) -> float:
        "Maximum density estimate (mol/m³)."
        return self.residual.max_density(moles)

    def molar_weight(self) -> np.ndarray:
        "Molar weights (kg/mol)."
        return self.residual.molar_weight()

    def has_molar_weight(self) -> bool:
        "Are molar weights available."
        return self.residual.has_molar_weight()

    def __repr__(self) -> str:
        return f"EquationOfState({self.residual!r}, {self.ideal_gas})"
