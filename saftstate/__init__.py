"""
Thermodynamic state resolution for Helmholtz energy equations of state.

Exact derivatives by dual numbers, the PC-SAFT model, state construction
from any set of specifications, critical points, spinodals, stability
analysis, pure component phase equilibria and parameter estimation.
"""

from .eos import Contributions, EquationOfState, DeBroglieWavelength, Joback
from .errors import (
    DomainError,
    EosError,
    IncompatibleComponentsError,
    InvalidStateError,
    IterationFailedError,
    MissingCapabilityError,
    MissingMolarWeightError,
    MissingParameterError,
    NotConvergedError,
    UndeterminedStateError,
    ValidationError,
)
from .pcsaft import PcSaft, PcSaftParameters
from .state import (
    DensityInitialization,
    PhaseEquilibrium,
    SolverOptions,
    State,
    StateVec,
    Verbosity,
)

__version__ = "1.0.1"
