"""
Spinodal
---------------
Limits of mechanical stability, `dp/drho = 0`, of an isotherm. The sign of
`dp/drho` is scanned on a logarithmic density grid, each sign change is
then refined by a Newton iteration kept inside its bracket.
"""

# @author: Wildson Lima

import math
from typing import Optional, Tuple

import numpy as np

from ..configs.default import get_config
from ..dual import third_derivative
from ..errors import InvalidStateError, IterationFailedError, NotConvergedError
from .helmholtz import helmholtz_energy, pressure_and_derivative
from .options import SolverOptions, Verbosity, log_iter, log_result


def _dp_drho(eos, temperature: float, density: float, moles) -> Tuple[float, float]:
    "`(dp/drho, d²p/drho²)` at temperature (K) and density (mol/m³)."
    nt = moles.sum()
    v = nt / density
    _, _, a_vv, a_vvv = third_derivative(
        lambda v: helmholtz_energy(eos, temperature, v, moles), v
    )
    return float(v**2 / nt * a_vv), float(v**3 / nt**2 * (-2.0 * a_vv - v * a_vvv))


def _refine(
    eos,
    temperature: float,
    moles,
    lo: float,
    hi: float,
    max_iter: int,
    tol: float,
    verbosity: Verbosity,
) -> float:
    "Root of `dp/drho` in the bracket `(lo, hi)`."
    f_lo = _dp_drho(eos, temperature, lo, moles)[0]
    rho = 0.5 * (lo + hi)
    for k in range(1, max_iter + 1):
        f, df = _dp_drho(eos, temperature, rho, moles)
        log_iter(verbosity, " %4d | %14.8e | %20.12e", k, abs(f), rho)
        if (f > 0.0) == (f_lo > 0.0):
            lo = rho
        else:
            hi = rho
        rho_new = rho - f / df if df != 0.0 else 0.5 * (lo + hi)
        if not lo < rho_new < hi:
            rho_new = 0.5 * (lo + hi)
        if abs(rho_new - rho) < tol * rho:
            log_result(verbosity, "Spinodal: converged in %d step(s), rho = %e", k, rho_new)
            return rho_new
        rho = rho_new
    raise NotConvergedError("spinodal")


def spinodal(
    cls,
    eos,
    temperature: float,
    moles=None,
    options: Optional[SolverOptions] = None,
):
    """
    `(vapor, liquid)` spinodal states at temperature (K).

    The vapor spinodal is the first maximum of the isotherm starting from
    low density, the liquid spinodal the last minimum before the maximum
    density. The pressure of the vapor spinodal is the larger one.
    """
    config = get_config().spinodal
    max_iter, tol, verbosity = (options or SolverOptions()).unwrap_or(config)
    if not temperature > 0.0:
        raise InvalidStateError("spinodal", "temperature", temperature)
    moles = eos.validate_moles(moles)
    max_density = eos.max_density(moles)
    grid = np.geomspace(config.min_density_ratio * max_density, max_density, config.grid_points)
    slope = np.array(
        [pressure_and_derivative(eos, temperature, rho, moles)[1] for rho in grid]
    )
    finite = np.isfinite(slope)
    grid, slope = grid[finite], slope[finite]

    falling = np.flatnonzero((slope[:-1] > 0.0) & (slope[1:] <= 0.0))
    rising = np.flatnonzero((slope[:-1] <= 0.0) & (slope[1:] > 0.0))
    if len(falling) == 0 or len(rising) == 0:
        raise IterationFailedError(
            "spinodal", f"no sign change of dp/drho at T = {temperature} K"
        )
    i, j = falling[0], rising[-1]
    rho_v = _refine(
        eos, temperature, moles, grid[i], grid[i + 1], max_iter, tol, verbosity
    )
    rho_l = _refine(
        eos, temperature, moles, grid[j], grid[j + 1], max_iter, tol, verbosity
    )
    if not math.isfinite(rho_v) or not math.isfinite(rho_l):
        raise IterationFailedError("spinodal", "non-finite density")
    nt = moles.sum()
    return (
        cls(eos, temperature, nt / rho_v, moles),
        cls(eos, temperature, nt / rho_l, moles),
    )
