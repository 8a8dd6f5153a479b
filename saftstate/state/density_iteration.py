"""
Density iteration
---------------
Solves `p(T, rho, n) = p_target` for the density with a Newton iteration
safeguarded by a bracket. The vapor branch starts at the ideal gas density
and never crosses the vapor spinodal, the liquid branch starts at the
maximum density and stays above the liquid spinodal.
"""

# @author: Wildson Lima

import math

import numpy as np

from ..constants import RGAS
from ..errors import InvalidStateError, IterationFailedError, NotConvergedError
from .helmholtz import pressure_and_derivative
from .options import Verbosity, log_iter, log_result

VAPOR = "vapor"
LIQUID = "liquid"


def initial_density(eos, temperature: float, pressure: float, moles, branch: str) -> float:
    "Start of the iteration on `branch` (mol/m³)."
    max_density = eos.max_density(moles)
    if branch == LIQUID:
        return max_density
    rho = pressure / (RGAS * temperature)
    if not 0.0 < rho < 0.5 * max_density:
        rho = 1e-3 * max_density
    return rho


# pylint: disable=R0913,R0914,R0912
def density_iteration(
    eos,
    temperature: float,
    pressure: float,
    moles: np.ndarray,
    rho0: float,
    branch: str,
    max_iter: int,
    tol: float,
    verbosity: Verbosity = Verbosity.SILENT,
) -> float:
    """
    Density (mol/m³) on `branch` at temperature (K), pressure (Pa) and moles (mol).

    Convergence when the relative pressure residual or the relative Newton
    step falls below `tol`.
    """
    if not temperature > 0.0:
        raise InvalidStateError("density_iteration", "temperature", temperature)
    max_density = eos.max_density(moles)
    lo = 0.0
    hi = max_density if branch == VAPOR else math.inf
    rho = rho0
    scale = abs(pressure) if pressure != 0.0 else 1.0

    log_iter(verbosity, " iter |    residual    |   density (mol/m³)   ")
    log_iter(verbosity, "%s", "-" * 46)
    for k in range(1, max_iter + 1):
        p, dp_drho = pressure_and_derivative(eos, temperature, rho, moles)
        if not (math.isfinite(p) and math.isfinite(dp_drho)):
            # beyond the packing limit of the model
            hi = rho
            rho = 0.5 * (lo + hi)
            continue
        f = p - pressure
        log_iter(verbosity, " %4d | %14.8e | %20.12e", k, abs(f) / scale, rho)
        if abs(f) < tol * scale and dp_drho > 0.0:
            log_result(
                verbosity, "Density iteration: converged in %d step(s), rho = %e", k, rho
            )
            return rho

        if dp_drho <= 0.0:
            # unstable region between the spinodals
            if branch == VAPOR:
                hi = rho
            else:
                lo = rho
            rho = 0.5 * (lo + hi) if math.isfinite(hi) else 1.5 * rho
        else:
            if f > 0.0:
                hi = min(hi, rho)
            else:
                lo = max(lo, rho)
            step = -f / dp_drho
            if branch == LIQUID:
                # small steps keep the iteration on the liquid side
                step = max(min(step, 0.05 * max_density), -0.05 * max_density)
            rho_new = rho + step
            if not lo < rho_new < hi:
                rho_new = 0.5 * (lo + hi) if math.isfinite(hi) else 2.0 * rho
            if abs(rho_new - rho) < tol * rho:
                log_result(
                    verbosity,
                    "Density iteration: converged in %d step(s), rho = %e",
                    k,
                    rho_new,
                )
                return rho_new
            rho = rho_new

        if hi - lo < 1e-14 * max(hi, 1.0):
            raise IterationFailedError(
                "density_iteration", f"no {branch} root at p = {pressure} Pa"
            )
    raise NotConvergedError("density_iteration")
