"""Thermodynamic states: property evaluation and state construction."""

from .options import DensityInitialization, SolverOptions, Verbosity
from .phase_equilibrium import PhaseEquilibrium
from .state import State, StateVec
