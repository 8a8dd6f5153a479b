"""
Pure component phase equilibrium
---------------
Vapor-liquid equilibrium of a pure component at given temperature: equal
pressure and chemical potential in both phases. The pressure is found by a
Newton iteration in `ln p`,

    d (g_v - g_l) / d ln p = p (v_v - v_l),

kept inside the window between the liquid and the vapor spinodal pressure.

Henry's law constants of solutes at infinite dilution in a pure solvent
follow from the fugacity coefficients in the coexisting solvent phases.
"""

# @author: Wildson Lima

import math
from typing import List, Optional

import numpy as np
from absl import logging

from ..configs.default import get_config
from ..constants import RGAS
from ..errors import (
    EosError,
    IncompatibleComponentsError,
    IterationFailedError,
    NotConvergedError,
    ValidationError,
)
from .options import DensityInitialization, SolverOptions, log_iter, log_result
from .state import State


class PhaseEquilibrium:
    """
    Coexisting vapor and liquid states.

    Parameters
    ----------
    vapor : State
    liquid : State
    """

    def __init__(self, vapor: State, liquid: State):
        self.vapor = vapor
        self.liquid = liquid

    # pylint: disable=R0914
    @classmethod
    def pure(
        cls,
        eos,
        temperature: float,
        options: Optional[SolverOptions] = None,
    ) -> "PhaseEquilibrium":
        """
        Vapor-liquid equilibrium of a pure component at temperature (K).

        Raises `IterationFailedError` above the critical temperature, where
        the isotherm has no spinodal.
        """
        if eos.components != 1:
            raise ValidationError(
                f"Pure component equilibrium needs 1 component, got {eos.components}."
            )
        max_iter, tol, verbosity = (options or SolverOptions()).unwrap_or(
            get_config().phase_equilibrium
        )
        spinodal_v, spinodal_l = State.spinodal(eos, temperature)
        p_hi = spinodal_v.pressure()
        p_lo = spinodal_l.pressure()
        ln_hi = math.log(p_hi)
        ln_lo = math.log(p_lo) if p_lo > 0.0 else -math.inf
        ln_p = math.log(0.5 * (max(p_lo, 0.0) + p_hi))
        rt = RGAS * temperature

        log_iter(verbosity, " iter |    residual    |  pressure (Pa)  ")
        log_iter(verbosity, "%s", "-" * 41)
        for k in range(1, max_iter + 1):
            p = math.exp(ln_p)
            vapor = State.new_npt(eos, temperature, p, None, DensityInitialization.VAPOR)
            liquid = State.new_npt(eos, temperature, p, None, DensityInitialization.LIQUID)
            f = (vapor.molar_gibbs_energy() - liquid.molar_gibbs_energy()) / rt
            log_iter(verbosity, " %4d | %14.8e | %15.8e", k, abs(f), p)
            df = p * (1.0 / vapor.density - 1.0 / liquid.density) / rt
            step = -f / df
            ln_new = ln_p + step
            if not ln_lo < ln_new < ln_hi:
                ln_new = 0.5 * (ln_p + (ln_hi if step > 0.0 else max(ln_lo, ln_p - 10.0)))
            if abs(f) < tol or abs(ln_new - ln_p) < tol:
                if abs(vapor.density - liquid.density) < 1e-8 * liquid.density:
                    raise IterationFailedError("phase_equilibrium", "trivial solution")
                log_result(
                    verbosity, "Phase equilibrium: converged in %d step(s), p = %e Pa", k, p
                )
                return cls(vapor, liquid)
            ln_p = ln_new
        raise NotConvergedError("phase_equilibrium")

    @classmethod
    def vapor_pressure(cls, eos, temperature: float) -> List[Optional[float]]:
        """
        Vapor pressure (Pa) of every component at temperature (K), `None`
        where no equilibrium is found.
        """
        out = []
        for i in range(eos.components):
            try:
                out.append(cls.pure(eos.subset([i]), temperature).pressure())
            except EosError as e:
                logging.warning("No vapor pressure of component %d: %s", i, e)
                out.append(None)
        return out

    def pressure(self) -> float:
        "Equilibrium pressure (Pa)."
        return self.vapor.pressure()

    @property
    def temperature(self) -> float:
        "Temperature (K)."
        return self.vapor.temperature

    def enthalpy_of_vaporization(self) -> float:
        "Molar enthalpy of vaporization (J/mol)."
        return self.vapor.molar_enthalpy() - self.liquid.molar_enthalpy()

    def entropy_of_vaporization(self) -> float:
        "Molar entropy of vaporization (J/(mol K))."
        return self.vapor.molar_entropy() - self.liquid.molar_entropy()

    def __repr__(self) -> str:
        return (
            f"PhaseEquilibrium(T = {self.temperature:.5f} K, p = {self.pressure():.5e} Pa, "
            f"rho_v = {self.vapor.density:.5e} mol/m³, rho_l = {self.liquid.density:.5e} mol/m³)"
        )


def henrys_law_constant(eos, temperature: float, molefracs) -> np.ndarray:
    """
    Henry's law constants (Pa) of every solute (`x_i = 0`) in the solvent
    given by `molefracs`, at the vapor pressure of the solvent:

        H_i = p_sat exp(ln phi_i^L - ln phi_i^V)

    with both fugacity coefficients at infinite dilution.

    Args:
        eos: EquationOfState
        temperature: K
        molefracs: composition of the solvent with `x_i = 0` for the solutes;
         one solvent component is supported
    """
    x = np.asarray(molefracs, dtype=np.float64)
    if len(x) != eos.components:
        raise IncompatibleComponentsError(eos.components, len(x))
    solvent = np.flatnonzero(x > 0.0)
    if len(solvent) != 1:
        raise ValidationError(
            f"Henry's law constants need one solvent component, got {len(solvent)}."
        )
    x = x / x.sum()
    vle = PhaseEquilibrium.pure(eos.subset(solvent.tolist()), temperature)
    liquid = State(eos, temperature, vle.liquid.volume, x * vle.liquid.total_moles)
    vapor = State(eos, temperature, vle.vapor.volume, x * vle.vapor.total_moles)
    h = vle.pressure() * np.exp(liquid.ln_phi() - vapor.ln_phi())
    return h[x == 0.0]


def henrys_law_constant_binary(eos, temperature: float) -> float:
    "Henry's law constant (Pa) of the first component in the second one."
    return float(henrys_law_constant(eos, temperature, [0.0, 1.0])[0])
