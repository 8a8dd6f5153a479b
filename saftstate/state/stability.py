"""
Stability analysis
---------------
Michelsen, Michael L. “The Isothermal Flash Problem. Part I. Stability”.
Fluid Phase Equilibria 9, nº 1 (1982): 1–19.
https://doi.org/10.1016/0378-3812(82)85001-2.

The modified tangent plane distance

    tm(W) = 1 + sum_i W_i (ln W_i + ln phi_i(W) - d_i - 1),
    d_i = ln z_i + ln phi_i(z)

is minimized from several trial phases, first by successive substitution
and then by Newton steps in `alpha_i = 2 sqrt(W_i)`. A stationary point with
negative `tm` proves the feed unstable.
"""

# @author: Wildson Lima

from typing import List, Optional

import numpy as np

from ..configs.default import get_config
from ..errors import EosError, NotConvergedError
from .options import DensityInitialization, SolverOptions, log_iter, log_result


def _trial_state(state, moles, branch):
    return type(state).new_npt(
        state.eos, state.temperature, state.pressure(), moles, branch
    )


def _is_trivial(state, trial, tol: float = 1e-5) -> bool:
    "Trial phase that converged to the feed."
    return (
        np.max(np.abs(trial.molefracs - state.molefracs)) < tol
        and abs(trial.density - state.density) < tol * state.density
    )


# pylint: disable=R0913,R0914
def _minimize(state, d, active, w, branch, max_iter, tol, ss_steps, verbosity):
    """
    Stationary point of `tm` from the trial mole numbers `w`.

    Returns the trial state and `tm` at the stationary point.
    """
    # successive substitution
    for _ in range(ss_steps):
        trial = _trial_state(state, w, branch)
        w = np.zeros_like(w)
        w[active] = np.exp(d - trial.ln_phi()[active])

    for k in range(1, max_iter + 1):
        trial = _trial_state(state, w, branch)
        wa = w[active]
        s = np.log(wa) + trial.ln_phi()[active] - d
        sqrt_w = np.sqrt(wa)
        g = sqrt_w * s
        log_iter(verbosity, " %4d | %14.8e | %s", k, np.linalg.norm(g), branch)
        if np.linalg.norm(g) < tol:
            tm = 1.0 + np.sum(wa * (s - 1.0))
            return trial, tm
        dln_phi = trial.dln_phi_dnj()[np.ix_(active, active)]
        hess = (
            np.eye(len(wa)) * (1.0 + 0.5 * s)
            + sqrt_w[:, np.newaxis] * sqrt_w[np.newaxis, :] * dln_phi
        )
        try:
            step = np.linalg.solve(hess, -g)
        except np.linalg.LinAlgError:
            # fall back to successive substitution
            step = None
        if step is None or not np.all(np.isfinite(step)):
            wa_new = np.exp(d - trial.ln_phi()[active])
        else:
            alpha = 2.0 * sqrt_w + step
            wa_new = np.where(alpha > 0.0, 0.25 * alpha**2, 0.5 * wa)
        w = np.zeros_like(w)
        w[active] = wa_new
    raise NotConvergedError("stability_analysis")


def stability_analysis(state, options: Optional[SolverOptions] = None) -> List:
    """
    Trial phases with negative tangent plane distance of `state`, most
    negative first, or `[state]` when no such phase is found.

    Every returned phase is at the temperature and pressure of `state` and
    lies below its Helmholtz energy tangent plane,
    `A(phase) < sum_i n_i(phase) mu_i(state) - p V(phase)`, i.e. splitting
    the phase off the feed lowers the Helmholtz energy at constant T, V
    and n.

    Trials are one liquid-like phase rich in every component present and one
    vapor-like phase at the feed composition. Failed trials are logged and
    skipped.
    """
    config = get_config().stability
    max_iter, tol, verbosity = (options or SolverOptions()).unwrap_or(config)
    z = state.molefracs
    active = np.flatnonzero(z > 0.0)
    d = np.log(z[active]) + state.ln_phi()[active]

    trials = []
    for i in active:
        w = 0.1 * z
        w[i] += 0.9
        trials.append((w, DensityInitialization.LIQUID))
    trials.append((z.copy(), DensityInitialization.VAPOR))

    unstable = []
    tpd = []
    for w, branch in trials:
        try:
            trial, tm = _minimize(
                state,
                d,
                active,
                w,
                branch,
                max_iter,
                tol,
                config.successive_substitution_steps,
                verbosity,
            )
        except EosError as e:
            log_iter(verbosity, "Stability trial (%s) failed: %s", branch, e)
            continue
        if _is_trivial(state, trial) or tm >= config.zero_tpd:
            continue
        if any(_is_trivial(other, trial) for other in unstable):
            continue
        log_result(
            verbosity, "Stability analysis: unstable, tpd = %e with x = %s", tm, trial.molefracs
        )
        unstable.append(
            type(state)(
                state.eos,
                trial.temperature,
                trial.volume * state.total_moles / trial.total_moles,
                trial.molefracs * state.total_moles,
            )
        )
        tpd.append(tm)
    if not unstable:
        log_result(verbosity, "Stability analysis: stable")
        return [state]
    return [unstable[i] for i in np.argsort(tpd, kind="stable")]


def is_stable(state, options: Optional[SolverOptions] = None) -> bool:
    "No trial phase with negative tangent plane distance exists."
    result = stability_analysis(state, options)
    return len(result) == 1 and result[0] is state
