"""
Critical points
---------------
Pure components: Newton iteration on (T, V) for `dp/dV = 0` and
`d²p/dV² = 0`.

Mixtures: criteria of Heidemann and Khalil (1980). The smallest eigenvalue
of `M_ij = sqrt(z_i z_j) d²(beta A)/dn_i dn_j` vanishes and so does the
cubic form of the Helmholtz energy along its eigenvector. The eigenvalue
is differentiated with the eigenvector held fixed (Hellmann-Feynman).

All residuals are evaluated in reduced units with dual numbers seeded in
the unknowns, so every Newton step uses the exact Jacobian.
"""

# @author: Wildson Lima

from typing import List, Optional, Sequence

import numpy as np

from ..configs.default import get_config
from ..constants import (
    DENSITY_TO_REDUCED,
    KB,
    MOLES_TO_REDUCED,
    VOLUME_TO_REDUCED,
)
from ..dual import (
    DualVec,
    depth,
    first_derivative,
    hessian,
    lift,
    sqrt,
    third_derivative,
    value,
)
from ..eos import StateHD
from ..errors import EosError, IterationFailedError, NotConvergedError, ValidationError
from .options import SolverOptions, log_iter, log_result


def _lift_all(*xs):
    base = max(xs, key=depth)
    return [lift(x, base) for x in xs]


def _solve(jac: np.ndarray, f: np.ndarray, routine: str) -> np.ndarray:
    try:
        step = np.linalg.solve(jac, f)
    except np.linalg.LinAlgError as e:
        raise IterationFailedError(routine, "singular Jacobian") from e
    if not np.all(np.isfinite(step)):
        raise IterationFailedError(routine, "non-finite Newton step")
    return step


def _max_density(eos, n: np.ndarray) -> float:
    "Maximum density (1/Angstrom^3) for `n` molecules."
    return eos.max_density(n / MOLES_TO_REDUCED) * DENSITY_TO_REDUCED


def _to_state(cls, eos, t: float, v: float, n: np.ndarray):
    return cls(eos, t, v / VOLUME_TO_REDUCED, n / MOLES_TO_REDUCED)


def _trials(initial_temperature, config) -> Sequence[float]:
    if initial_temperature is not None:
        return [initial_temperature]
    return list(config.trial_temperatures)


# --- pure components ------------------------------------------------------------------
def _pure_residuals(eos, t, v, n):
    "`V²/N d²(beta A)/dV²` and `V³/N d³(beta A)/dV³`, both zero at the critical point."
    t, v = _lift_all(t, v)
    _, _, a_vv, a_vvv = third_derivative(lambda v: eos.evaluate(StateHD(t, v, n)), v)
    nt = n.sum()
    return v * v * a_vv / nt, v * v * v * a_vvv / nt


def _pure_newton(eos, t0: float, n: np.ndarray, max_iter: int, tol: float, verbosity):
    v_min = n.sum() / _max_density(eos, n)
    t, v = t0, v_min / 0.3
    log_iter(verbosity, " iter |    residual    |  temperature (K)  |  volume (A^3)  ")
    log_iter(verbosity, "%s", "-" * 62)
    for k in range(1, max_iter + 1):
        x = DualVec(np.array([t, v]), np.eye(2))
        r1, r2 = _pure_residuals(eos, x[0], x[1], n)
        f = np.array([float(r1.re), float(r2.re)])
        jac = np.array([r1.eps, r2.eps])
        log_iter(verbosity, " %4d | %14.8e | %17.10f | %14.8e", k, np.linalg.norm(f), t, v)
        dt, dv = -_solve(jac, f, "critical_point")
        dt = max(min(dt, 0.25 * t), -0.25 * t)
        v_new = v + dv
        if v_new <= v_min:
            v_new = 0.5 * (v + v_min)
        if abs(dt) < tol * t and abs(v_new - v) < tol * v:
            log_result(verbosity, "Critical point: converged in %d step(s), T = %f K", k, t)
            return t + dt, v_new
        t, v = t + dt, v_new
    raise NotConvergedError("critical_point")


def critical_point_pure(
    cls,
    eos,
    initial_temperature: Optional[float] = None,
    options: Optional[SolverOptions] = None,
) -> List:
    "Critical point of every pure component of `eos`."
    return [
        critical_point(cls, eos.subset([i]), None, initial_temperature, options)
        for i in range(eos.components)
    ]


# --- mixtures ----------------------------------------------------------------------------
def _criticality(eos, t, v, n):
    """
    Smallest eigenvalue of `M` and the cubic form along its eigenvector.

    `t`, `v` and `n` may carry derivatives with respect to the unknowns.
    """
    t, v, n = _lift_all(t, v, n)
    nt = n.sum()
    _, _, a_nn = hessian(lambda n: eos.evaluate(StateHD(t, v, n)), n)
    sqrt_z = sqrt(n / nt)
    m = a_nn * (sqrt_z[:, np.newaxis] * sqrt_z[np.newaxis, :]) * nt
    eigenvalues, eigenvectors = np.linalg.eigh(value(m))
    u = eigenvectors[:, np.argmin(eigenvalues)]
    eigenvalue = (m * np.outer(u, u)).sum()

    dn = sqrt_z * u
    s0 = lift(0.0, t)
    cubic = third_derivative(
        lambda s: eos.evaluate(StateHD(t, v, dn * s + n)), s0
    )[3]
    return eigenvalue, cubic * nt * nt


def _pressure(eos, t, v, n):
    "Pressure (Pa) in reduced volume and moles."
    t, v, n = _lift_all(t, v, n)
    _, a_v = first_derivative(lambda v: eos.evaluate(StateHD(t, v, n)), v)
    return -a_v * t * (KB * VOLUME_TO_REDUCED)


def _mixture_newton(eos, t0: float, n: np.ndarray, max_iter: int, tol: float, verbosity):
    v_min = n.sum() / _max_density(eos, n)
    t, v = t0, v_min / 0.3
    for k in range(1, max_iter + 1):
        x = DualVec(np.array([t, v]), np.eye(2))
        eigenvalue, cubic = _criticality(eos, x[0], x[1], n)
        f = np.array([float(value(eigenvalue)), float(value(cubic))])
        jac = np.array([eigenvalue.eps, cubic.eps])
        log_iter(verbosity, " %4d | %14.8e | %17.10f | %14.8e", k, np.linalg.norm(f), t, v)
        dt, dv = -_solve(jac, f, "critical_point")
        dt = max(min(dt, 0.25 * t), -0.25 * t)
        v_new = v + dv
        if v_new <= v_min:
            v_new = 0.5 * (v + v_min)
        if abs(dt) < tol * t and abs(v_new - v) < tol * v:
            log_result(verbosity, "Critical point: converged in %d step(s), T = %f K", k, t)
            return t + dt, v_new
        t, v = t + dt, v_new
    raise NotConvergedError("critical_point")


def critical_point(
    cls,
    eos,
    moles=None,
    initial_temperature: Optional[float] = None,
    options: Optional[SolverOptions] = None,
):
    """
    Critical point at fixed composition. Without initial temperature the
    trial temperatures of the configuration are tried in turn.
    """
    config = get_config().critical_point
    max_iter, tol, verbosity = (options or SolverOptions()).unwrap_or(config)
    moles = eos.validate_moles(moles)
    n = moles / moles.sum()
    error = None
    for t0 in _trials(initial_temperature, config):
        try:
            if eos.components == 1:
                t, v = _pure_newton(eos, t0, n, max_iter, tol, verbosity)
            else:
                t, v = _mixture_newton(eos, t0, n, max_iter, tol, verbosity)
            density = n.sum() / v / DENSITY_TO_REDUCED
            return cls(eos, t, moles.sum() / density, moles)
        except EosError as e:
            log_iter(verbosity, "Critical point from T = %f K failed: %s", t0, e)
            error = e
    raise error


# --- binary mixtures -----------------------------------------------------------------------
# pylint: disable=R0913,R0914
def critical_point_binary(
    cls,
    eos,
    temperature_or_pressure: float,
    is_pressure: bool = False,
    initial_temperature: Optional[float] = None,
    initial_molefracs: Optional[Sequence[float]] = None,
    options: Optional[SolverOptions] = None,
):
    """
    Critical point of a binary mixture at given temperature (K) or pressure
    (Pa). Unknowns are (V, x1) at fixed temperature and (T, V, x1) at fixed
    pressure; the composition is always `(x1, 1 - x1)`.

    At fixed pressure the iteration starts from the critical point of the
    initial composition, so only the pressure condition is violated at the
    start. Convergence is judged on the norm of the residuals.
    """
    if eos.components != 2:
        raise ValidationError(
            f"Binary critical points need 2 components, got {eos.components}."
        )
    config = get_config().critical_point_binary
    max_iter, tol, verbosity = (options or SolverOptions()).unwrap_or(config)
    x1 = 0.5 if initial_molefracs is None else float(initial_molefracs[0])
    if is_pressure:
        pressure = temperature_or_pressure
        start = critical_point(cls, eos, np.array([x1, 1.0 - x1]), initial_temperature)
        t = start.temperature
        v = 1.0 / (start.density * DENSITY_TO_REDUCED)
    else:
        pressure = None
        t = temperature_or_pressure
        v = 1.0 / (0.3 * _max_density(eos, np.array([x1, 1.0 - x1])))

    for k in range(1, max_iter + 1):
        if is_pressure:
            x = DualVec(np.array([t, v, x1]), np.eye(3))
            t_d, v_d, x1_d = x[0], x[1], x[2]
        else:
            x = DualVec(np.array([v, x1]), np.eye(2))
            t_d, v_d, x1_d = t, x[0], x[1]
        n_d = DualVec(
            np.array([x1, 1.0 - x1]),
            np.array([x1_d.eps, -x1_d.eps]),
        )
        eigenvalue, cubic = _criticality(eos, t_d, v_d, n_d)
        residuals = [eigenvalue, cubic]
        if is_pressure:
            residuals.append(_pressure(eos, t_d, v_d, n_d) / pressure - 1.0)
        f = np.array([float(value(r)) for r in residuals])
        res = np.linalg.norm(f)
        log_iter(verbosity, " %4d | %14.8e | T = %f K, x1 = %f", k, res, t, x1)
        if res < tol:
            log_result(verbosity, "Binary critical point: converged in %d step(s)", k)
            return _to_state(cls, eos, t, v, np.array([x1, 1.0 - x1]))

        jac = np.array([r.eps for r in residuals])
        step = -_solve(jac, f, "critical_point_binary")
        if is_pressure:
            dt, dv, dx = step
            t += max(min(dt, 0.25 * t), -0.25 * t)
        else:
            dv, dx = step
        # composition stays inside (0, 1)
        x1 += max(min(dx, 0.5 * (1.0 - x1)), -0.5 * x1)
        if min(x1, 1.0 - x1) < config.min_molefrac:
            raise IterationFailedError(
                "critical_point_binary",
                f"composition approaches a pure component, x1 = {x1:.3e}",
            )
        v_min = 1.0 / _max_density(eos, np.array([x1, 1.0 - x1]))
        v += dv
        if v <= v_min:
            v = 0.5 * (v - dv + v_min)
    raise NotConvergedError("critical_point_binary")
