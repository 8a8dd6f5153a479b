"""
Association contribution of PC-SAFT
---------------
Wertheim's theory for components with `na` sites of type A and `nb` sites
of type B; A sites only bond with B sites.

For a single associating component the fractions of non-bonded sites have
a closed form. Otherwise they are solved with floats first and then
refined at dual precision by Newton steps with the Jacobian of the real
part, each step adds one correct derivative order.
"""

# @author: Wildson Lima

import numpy as np

from ..dual import exp, is_dual, log, sqrt, value
from ..errors import IterationFailedError
from ..eos import Contribution
from .hard_sphere import hs_contact, zeta_moments


def _site_term(x_site):
    return log(x_site) - x_site * 0.5 + 0.5


def _matvec(mat: np.ndarray, vec):
    "`mat @ vec` for a real matrix and a real or dual vector."
    if not (is_dual(mat) or is_dual(vec)):
        return mat @ vec
    return (vec[np.newaxis, :] * mat).sum(axis=1)


class Association(Contribution):
    """
    Association of the components with association volume and sites.

    Parameters
    ----------
    parameters : PcSaftParameters
    max_iter : int
        Maximum number of iterations of the float solution.
    tol : float
        Tolerance of the float solution.
    newton_steps : int
        Newton steps at dual precision.
    """

    name = "Association"

    def __init__(
        self, parameters, max_iter: int = 500, tol: float = 1e-13, newton_steps: int = 5
    ):
        self.parameters = parameters
        p = parameters
        idx = p.assoc_comp
        self.comp = idx
        self.na = p.na[idx]
        self.nb = p.nb[idx]
        sigma = p.sigma[idx]
        # kappa_ij sigma_ij^3 = sqrt(kappa_i kappa_j) (sigma_i sigma_j)^1.5
        kappa = p.kappa_ab[idx]
        self.kappa_sigma3 = np.sqrt(kappa[:, None] * kappa[None, :]) * (
            sigma[:, None] * sigma[None, :]
        ) ** 1.5
        self.epsilon_k_ab = 0.5 * (
            p.epsilon_k_ab[idx][:, None] + p.epsilon_k_ab[idx][None, :]
        )
        self.max_iter = max_iter
        self.tol = tol
        self.newton_steps = newton_steps

    def association_strength(self, state, diameter):
        "`Delta_ij` (Angstrom^3) of the associating components."
        rho = state.density
        _, _, z2, z3 = zeta_moments(self.parameters.m, diameter, state.molefracs)
        g_ij = hs_contact(diameter[self.comp], rho * z2, rho * z3)
        t = state.temperature
        return g_ij * self.kappa_sigma3 * (exp(self.epsilon_k_ab / t) - 1.0)

    def helmholtz_energy(self, state, properties):
        delta = self.association_strength(state, properties)
        rho_i = state.partial_density[self.comp]
        if len(self.comp) == 1:
            x_a, x_b = self._analytic(delta[0, 0] * rho_i[0])
        else:
            x_a, x_b = self._solve(delta, rho_i)
        n = state.moles[self.comp]
        return (n * (_site_term(x_a) * self.na + _site_term(x_b) * self.nb)).sum()

    def _analytic(self, delta_rho):
        a = delta_rho * self.na[0]
        b = delta_rho * self.nb[0]
        aux = b - a + 1.0
        x_a = 2.0 / (aux + sqrt(aux**2 + a * 4.0))
        aux = a - b + 1.0
        x_b = 2.0 / (aux + sqrt(aux**2 + b * 4.0))
        return x_a[np.newaxis], x_b[np.newaxis]

    def _residual(self, x_a, x_b, delta, rho_i):
        "`X_A (1 + sum_j rho_j nb_j Delta_ij X_B,j) - 1` and the same for B."
        f_a = x_a * (_matvec(delta, rho_i * self.nb * x_b) + 1.0) - 1.0
        f_b = x_b * (_matvec(delta, rho_i * self.na * x_a) + 1.0) - 1.0
        return f_a, f_b

    def _jacobian(self, x_a, x_b, delta, rho_i):
        k = len(x_a)
        jac = np.zeros((2 * k, 2 * k))
        jac[:k, :k] = np.diag(delta @ (rho_i * self.nb * x_b) + 1.0)
        jac[k:, k:] = np.diag(delta @ (rho_i * self.na * x_a) + 1.0)
        jac[:k, k:] = x_a[:, None] * delta * (rho_i * self.nb)[None, :]
        jac[k:, :k] = x_b[:, None] * delta * (rho_i * self.na)[None, :]
        return jac

    def _solve(self, delta, rho_i):
        k = len(self.comp)
        d = value(delta)
        r = value(rho_i)
        x_a = np.ones(k)
        x_b = np.ones(k)
        # damped successive substitution, then Newton
        for _ in range(50):
            x_a = 0.5 * x_a + 0.5 / (d @ (r * self.nb * x_b) + 1.0)
            x_b = 0.5 * x_b + 0.5 / (d @ (r * self.na * x_a) + 1.0)
        for _ in range(self.max_iter):
            f_a, f_b = self._residual(x_a, x_b, d, r)
            f = np.concatenate([f_a, f_b])
            if np.linalg.norm(f) < self.tol:
                break
            try:
                step = np.linalg.solve(self._jacobian(x_a, x_b, d, r), f)
            except np.linalg.LinAlgError as e:
                raise IterationFailedError("association", "singular Jacobian") from e
            if not np.all(np.isfinite(step)):
                raise IterationFailedError("association", "non-finite Newton step")
            x_old = np.concatenate([x_a, x_b])
            x_new = x_old - step
            x_new = np.where(x_new <= 0.0, x_old * 0.2, x_new)
            x_a, x_b = x_new[:k], x_new[k:]
        else:
            raise IterationFailedError("association", "site fractions not converged")

        if not (is_dual(delta) or is_dual(rho_i)):
            return x_a, x_b

        try:
            inv = np.linalg.inv(self._jacobian(x_a, x_b, d, r))
        except np.linalg.LinAlgError as e:
            raise IterationFailedError("association", "singular Jacobian") from e
        inv_aa, inv_ab = inv[:k, :k], inv[:k, k:]
        inv_ba, inv_bb = inv[k:, :k], inv[k:, k:]
        for _ in range(self.newton_steps):
            f_a, f_b = self._residual(x_a, x_b, delta, rho_i)
            x_a, x_b = (
                x_a - _matvec(inv_aa, f_a) - _matvec(inv_ab, f_b),
                x_b - _matvec(inv_ba, f_a) - _matvec(inv_bb, f_b),
            )
        return x_a, x_b
