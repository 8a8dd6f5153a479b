"""Helmholtz energy models: residual, ideal gas and their pairing."""

from .equation_of_state import Contributions, EquationOfState
from .ideal_gas import DeBroglieWavelength, IdealGas, Joback
from .residual import Contribution, NoResidual, Residual
from .state_hd import StateHD
