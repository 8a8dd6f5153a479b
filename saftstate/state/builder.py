"""
State construction
---------------
Builds a `State` from specifications other than (T, V, n). Pressure based
specifications go through the density iteration; enthalpy, entropy and
internal energy specifications wrap it in a Newton iteration on the
temperature (or on the density at fixed temperature) using exact
derivatives of the state.
"""

# @author: Wildson Lima

from typing import Optional

import numpy as np

from ..configs.default import get_config
from ..dual import third_derivative
from ..errors import (
    EosError,
    InvalidStateError,
    IterationFailedError,
    NotConvergedError,
    UndeterminedStateError,
)
from .density_iteration import LIQUID, VAPOR, density_iteration, initial_density
from .helmholtz import helmholtz_energy
from .options import DensityInitialization, SolverOptions, log_iter, log_result

INITIAL_TEMPERATURE = 298.15  # K


def _options(options: Optional[SolverOptions], section: str):
    if options is None:
        options = SolverOptions()
    return options.unwrap_or(get_config()[section])


def _branch_of(eos, temperature: float, density: float, moles) -> str:
    """
    Branch of an explicit initial density: the pressure isotherm is concave
    on the vapor side and convex on the liquid side.
    """
    volume = moles.sum() / density
    _, _, a_vv, a_vvv = third_derivative(
        lambda v: helmholtz_energy(eos, temperature, v, moles), volume
    )
    d2p_drho2 = volume**3 / moles.sum() ** 2 * (-2.0 * a_vv - volume * a_vvv)
    return VAPOR if float(d2p_drho2) < 0.0 else LIQUID


# --- (T, p, n) -------------------------------------------------------------------
# pylint: disable=R0913
def npt_density(
    eos,
    temperature: float,
    pressure: float,
    moles: np.ndarray,
    density_initialization=None,
    options: Optional[SolverOptions] = None,
) -> float:
    """
    Density (mol/m³) at temperature (K), pressure (Pa) and moles (mol).

    Without hint both branches are solved and the root with the lower molar
    Gibbs energy is kept; ties and coincident roots resolve to the liquid.
    """
    max_iter, tol, verbosity = _options(options, "density_iteration")
    init = DensityInitialization.parse(density_initialization)

    def solve(branch, rho0=None):
        if rho0 is None:
            rho0 = initial_density(eos, temperature, pressure, moles, branch)
        return density_iteration(
            eos, temperature, pressure, moles, rho0, branch, max_iter, tol, verbosity
        )

    if init.kind == DensityInitialization.VAPOR:
        return solve(VAPOR)
    if init.kind == DensityInitialization.LIQUID:
        return solve(LIQUID)
    if init.kind == "density":
        return solve(_branch_of(eos, temperature, init.density, moles), init.density)

    roots = {}
    error = None
    for branch in (VAPOR, LIQUID):
        try:
            roots[branch] = solve(branch)
        except EosError as e:
            log_iter(verbosity, "%s branch failed: %s", branch, e)
            error = e
    if not roots:
        raise error
    if len(roots) == 1:
        return next(iter(roots.values()))
    rho_v, rho_l = roots[VAPOR], roots[LIQUID]
    if abs(rho_v - rho_l) < 1e-8 * rho_l:
        return rho_l

    def molar_gibbs(rho):
        volume = moles.sum() / rho
        a = helmholtz_energy(eos, temperature, volume, moles)
        return (a + pressure * volume) / moles.sum()

    return rho_v if molar_gibbs(rho_v) < molar_gibbs(rho_l) else rho_l


def new_npt(
    cls,
    eos,
    temperature: float,
    pressure: float,
    moles=None,
    density_initialization=None,
    options: Optional[SolverOptions] = None,
):
    "State at temperature (K), pressure (Pa) and moles (mol)."
    moles = eos.validate_moles(moles)
    rho = npt_density(eos, temperature, pressure, moles, density_initialization, options)
    return cls(eos, temperature, moles.sum() / rho, moles)


def new_npvx(
    cls,
    eos,
    temperature: float,
    pressure: float,
    volume: float,
    molefracs,
    density_initialization=None,
    options: Optional[SolverOptions] = None,
):
    "State at temperature (K), pressure (Pa), volume (m³) and molefracs."
    x = eos.validate_moles(molefracs)
    x = x / x.sum()
    rho = npt_density(eos, temperature, pressure, x, density_initialization, options)
    return cls(eos, temperature, volume, x * rho * volume)


# --- outer iterations on the temperature ----------------------------------------------
def _temperature_iteration(
    cls,
    routine: str,
    eos,
    pressure: float,
    target: float,
    moles,
    prop,
    derivative,
    density_initialization,
    initial_temperature: Optional[float],
    options: Optional[SolverOptions],
):
    """
    Newton iteration on the temperature at constant pressure with
    `prop(state) = target` and `derivative(state) = d prop / dT`.
    """
    max_iter, tol, verbosity = _options(options, "state")
    moles = eos.validate_moles(moles)
    t = INITIAL_TEMPERATURE if initial_temperature is None else initial_temperature
    init = DensityInitialization.parse(density_initialization)

    log_iter(verbosity, " iter |    residual    |  temperature (K)  ")
    log_iter(verbosity, "%s", "-" * 43)
    for k in range(1, max_iter + 1):
        state = new_npt(cls, eos, t, pressure, moles, init)
        f = prop(state) - target
        log_iter(verbosity, " %4d | %14.8e | %17.10f", k, abs(f), t)
        dt = -f / derivative(state)
        # keep the temperature positive and the step moderate
        dt = max(min(dt, 0.5 * t), -0.5 * t)
        t_new = t + dt
        if abs(dt) < tol * t:
            log_result(verbosity, "%s: converged in %d step(s), T = %f K", routine, k, t)
            return new_npt(cls, eos, t_new, pressure, moles, init)
        if init.kind == "density":
            init = DensityInitialization.initial_density(state.density)
        t = t_new
    raise NotConvergedError(routine)


def new_nph(
    cls,
    eos,
    pressure: float,
    molar_enthalpy: float,
    moles=None,
    density_initialization=None,
    initial_temperature: Optional[float] = None,
    options: Optional[SolverOptions] = None,
):
    "State at pressure (Pa), molar enthalpy (J/mol) and moles (mol)."
    return _temperature_iteration(
        cls,
        "new_nph",
        eos,
        pressure,
        molar_enthalpy,
        moles,
        lambda s: s.molar_enthalpy(),
        lambda s: s.molar_isobaric_heat_capacity(),
        density_initialization,
        initial_temperature,
        options,
    )


def new_nps(
    cls,
    eos,
    pressure: float,
    molar_entropy: float,
    moles=None,
    density_initialization=None,
    initial_temperature: Optional[float] = None,
    options: Optional[SolverOptions] = None,
):
    "State at pressure (Pa), molar entropy (J/(mol K)) and moles (mol)."
    return _temperature_iteration(
        cls,
        "new_nps",
        eos,
        pressure,
        molar_entropy,
        moles,
        lambda s: s.molar_entropy(),
        lambda s: s.molar_isobaric_heat_capacity() / s.temperature,
        density_initialization,
        initial_temperature,
        options,
    )


def new_nvu(
    cls,
    eos,
    volume: float,
    molar_internal_energy: float,
    moles=None,
    initial_temperature: Optional[float] = None,
    options: Optional[SolverOptions] = None,
):
    "State at volume (m³), molar internal energy (J/mol) and moles (mol)."
    max_iter, tol, verbosity = _options(options, "state")
    moles = eos.validate_moles(moles)
    t = INITIAL_TEMPERATURE if initial_temperature is None else initial_temperature
    for k in range(1, max_iter + 1):
        state = cls(eos, t, volume, moles)
        f = state.molar_internal_energy() - molar_internal_energy
        log_iter(verbosity, " %4d | %14.8e | %17.10f", k, abs(f), t)
        dt = -f / state.molar_isochoric_heat_capacity()
        dt = max(min(dt, 0.5 * t), -0.5 * t)
        if abs(dt) < tol * t:
            log_result(verbosity, "new_nvu: converged in %d step(s), T = %f K", k, t)
            return cls(eos, t + dt, volume, moles)
        t += dt
    raise NotConvergedError("new_nvu")


# --- outer iterations on the density ------------------------------------------------
def _density_iteration_at_temperature(
    cls,
    routine: str,
    eos,
    temperature: float,
    target: float,
    moles,
    prop,
    derivative,
    density_initialization,
    options: Optional[SolverOptions],
):
    """
    Newton iteration on the density at constant temperature with
    `prop(state) = target` and `derivative(state) = d prop / d rho`.

    Without hint the vapor start is tried first, then the liquid start.
    """
    max_iter, tol, verbosity = _options(options, "state")
    moles = eos.validate_moles(moles)
    if not temperature > 0.0:
        raise InvalidStateError(routine, "temperature", temperature)
    max_density = eos.max_density(moles)
    init = DensityInitialization.parse(density_initialization)
    if init.kind == "density":
        starts = [init.density]
    elif init.kind == DensityInitialization.VAPOR:
        starts = [1e-3 * max_density]
    elif init.kind == DensityInitialization.LIQUID:
        starts = [0.75 * max_density]
    else:
        starts = [1e-3 * max_density, 0.75 * max_density]

    error = None
    for rho in starts:
        try:
            for k in range(1, max_iter + 1):
                state = cls(eos, temperature, moles.sum() / rho, moles)
                f = prop(state) - target
                log_iter(verbosity, " %4d | %14.8e | %20.12e", k, abs(f), rho)
                rho_new = rho - f / derivative(state)
                if not 0.0 < rho_new < max_density:
                    rho_new = 0.5 * rho if rho_new <= 0.0 else 0.5 * (rho + max_density)
                if abs(rho_new - rho) < tol * rho:
                    state = cls(eos, temperature, moles.sum() / rho_new, moles)
                    if state.dp_drho() <= 0.0:
                        raise IterationFailedError(routine, "mechanically unstable root")
                    log_result(
                        verbosity, "%s: converged in %d step(s), rho = %e", routine, k, rho_new
                    )
                    return state
                rho = rho_new
            raise NotConvergedError(routine)
        except EosError as e:
            log_iter(verbosity, "%s: start failed: %s", routine, e)
            error = e
    raise error


def _dh_drho(state) -> float:
    v, n, rho = state.volume, state.total_moles, state.density
    return -v / (n * rho) * (state.temperature * state.dp_dt() + v * state.dp_dv())


def _ds_drho(state) -> float:
    v, n, rho = state.volume, state.total_moles, state.density
    return -v / (n * rho) * state.dp_dt()


def new_nth(
    cls,
    eos,
    temperature: float,
    molar_enthalpy: float,
    moles=None,
    density_initialization=None,
    options: Optional[SolverOptions] = None,
):
    "State at temperature (K), molar enthalpy (J/mol) and moles (mol)."
    return _density_iteration_at_temperature(
        cls,
        "new_nth",
        eos,
        temperature,
        molar_enthalpy,
        moles,
        lambda s: s.molar_enthalpy(),
        _dh_drho,
        density_initialization,
        options,
    )


def new_nts(
    cls,
    eos,
    temperature: float,
    molar_entropy: float,
    moles=None,
    density_initialization=None,
    options: Optional[SolverOptions] = None,
):
    "State at temperature (K), molar entropy (J/(mol K)) and moles (mol)."
    return _density_iteration_at_temperature(
        cls,
        "new_nts",
        eos,
        temperature,
        molar_entropy,
        moles,
        lambda s: s.molar_entropy(),
        _ds_drho,
        density_initialization,
        options,
    )


# --- any combination ------------------------------------------------------------------
def _composition(eos, partial_density, moles, molefracs):
    "`(molefracs, moles or None, density or None)` from the composition input."
    given = [c for c in (partial_density, moles, molefracs) if c is not None]
    if len(given) > 1:
        raise UndeterminedStateError(
            "Composition is given more than once: use only one of partial_density, "
            "moles and molefracs."
        )
    if partial_density is not None:
        partial_density = eos.validate_moles(partial_density)
        density = partial_density.sum()
        return partial_density / density, None, density
    if moles is not None:
        moles = eos.validate_moles(moles)
        return moles / moles.sum(), moles, None
    if molefracs is not None:
        x = eos.validate_moles(molefracs)
        return x / x.sum(), None, None
    if eos.components > 1:
        raise UndeterminedStateError("Composition of the mixture is missing.")
    return None, None, None


# pylint: disable=R0912,R0914
def new_full(
    cls,
    eos,
    temperature=None,
    volume=None,
    density=None,
    partial_density=None,
    total_moles=None,
    moles=None,
    molefracs=None,
    pressure=None,
    molar_enthalpy=None,
    molar_entropy=None,
    molar_internal_energy=None,
    density_initialization=None,
    initial_temperature=None,
    options: Optional[SolverOptions] = None,
):
    """State from any combination of quantities that determines it."""
    if density is not None and partial_density is not None:
        raise UndeterminedStateError("Both density and partial density are given.")
    if moles is not None and total_moles is not None:
        raise UndeterminedStateError("Both moles and total moles are given.")
    if density is not None and total_moles is not None and volume is not None:
        raise UndeterminedStateError("Density, total moles and volume are given.")
    volume_given = volume is not None
    amount_given = any(
        q is not None for q in (moles, total_moles, partial_density)
    )
    given = [
        name
        for name, q in (
            ("temperature", temperature),
            ("pressure", pressure),
            ("molar_enthalpy", molar_enthalpy),
            ("molar_entropy", molar_entropy),
            ("molar_internal_energy", molar_internal_energy),
        )
        if q is not None
    ]
    if volume_given or density is not None or partial_density is not None:
        given.append("volume")
    # (T, p, V, x): the volume only sets the amount of substance
    npvx = given == ["temperature", "pressure", "volume"] and not (
        density is not None or amount_given
    )
    if len(given) > 2 and not npvx:
        raise UndeterminedStateError(
            f"State is over-determined by {', '.join(given)}; two of temperature, "
            "pressure, volume or density, enthalpy, entropy and internal energy "
            "are needed."
        )

    x, n, rho = _composition(eos, partial_density, moles, molefracs)
    if rho is not None:
        density = rho
    if n is not None:
        total_moles = n.sum()

    # amount of substance and volume
    if density is not None and volume is not None:
        total_moles = density * volume
    if total_moles is None:
        total_moles = 1.0 if x is not None else eos.validate_moles(None).sum()
    if x is None:
        x = np.ones(1)
    n = x * total_moles
    if density is not None:
        volume = total_moles / density

    if temperature is not None and volume is not None and pressure is None:
        return cls(eos, temperature, volume, n)
    if temperature is not None and pressure is not None:
        if volume_given and density is None and not amount_given:
            return new_npvx(
                cls, eos, temperature, pressure, volume, x, density_initialization, options
            )
        if volume is None:
            return new_npt(
                cls, eos, temperature, pressure, n, density_initialization, options
            )
    if pressure is not None and temperature is None and volume is None:
        if molar_enthalpy is not None and molar_entropy is None:
            return new_nph(
                cls,
                eos,
                pressure,
                molar_enthalpy,
                n,
                density_initialization,
                initial_temperature,
                options,
            )
        if molar_entropy is not None and molar_enthalpy is None:
            return new_nps(
                cls,
                eos,
                pressure,
                molar_entropy,
                n,
                density_initialization,
                initial_temperature,
                options,
            )
    if temperature is not None and pressure is None and volume is None:
        if molar_enthalpy is not None and molar_entropy is None:
            return new_nth(
                cls, eos, temperature, molar_enthalpy, n, density_initialization, options
            )
        if molar_entropy is not None and molar_enthalpy is None:
            return new_nts(
                cls, eos, temperature, molar_entropy, n, density_initialization, options
            )
    if (
        volume is not None
        and molar_internal_energy is not None
        and temperature is None
        and pressure is None
    ):
        return new_nvu(
            cls, eos, volume, molar_internal_energy, n, initial_temperature, options
        )
    raise UndeterminedStateError(
        "State is not determined by the given quantities; valid combinations are "
        "(T, V), (T, p), (p, h), (p, s), (T, h), (T, s) and (V, u) with composition."
    )
