"PC-SAFT parameters."

# @author: Wildson Lima

from typing import List, Optional, Sequence

import numpy as np

from ..constants import KB


# Debye² / (Angstrom³ K) to a dimensionless squared dipole moment,
# see the note below Table 2 in Gross and Vrabec 2006
DIPOLE_CONV = 1e-49 / (KB * 1e-30)  # 7242.702976750923


class PcSaftParameters:
    """
    Parameter set of the PC-SAFT equation of state.

    Parameters
    ----------
    m : array_like
        Segment number for each component.
    sigma : array_like
        Segment diameter in units of Angstrom.
    epsilon_k : array_like
        Dispersion energy in units of K.
    kappa_ab : array_like, optional
        Association volume of associating components, zero otherwise.
    epsilon_k_ab : array_like, optional
        Association energy in units of K.
    mu : array_like, optional
        Dipole moment in units of Debye.
    na, nb : array_like, optional
        Number of association sites of type A and B.
    molarweight : array_like, optional
        Molar weight in g/mol. Mass specific properties are unavailable
        without it.
    k_ij : array_like, optional
        Binary interaction parameters for the dispersion energy, shape (n, n).
    viscosity : array_like, optional
        Entropy scaling coefficients `[a, b, c, d]` of each component, shape (n, 4).
    diffusion : array_like, optional
        Entropy scaling coefficients `[a, b, c, d, e]` of the self-diffusion
        coefficient, shape (n, 5).
    thermal_conductivity : array_like, optional
        Entropy scaling coefficients `[a, b, c, d]` of the thermal
        conductivity, shape (n, 4).
    """

    def __init__(
        self,
        m,
        sigma,
        epsilon_k,
        kappa_ab=None,
        epsilon_k_ab=None,
        mu=None,
        na=None,
        nb=None,
        molarweight=None,
        k_ij=None,
        viscosity=None,
        diffusion=None,
        thermal_conductivity=None,
    ):
        self.m = _array(m)
        n = self.m.shape[0]
        self.sigma = _array(sigma)
        self.epsilon_k = _array(epsilon_k)
        self.kappa_ab = _array(kappa_ab, n)
        self.epsilon_k_ab = _array(epsilon_k_ab, n)
        self.mu = _array(mu, n)
        self.na = _array(na, n)
        self.nb = _array(nb, n)
        self.molarweight = None if molarweight is None else _array(molarweight)
        if k_ij is None:
            k_ij = np.zeros((n, n))
        self.k_ij = np.asarray(k_ij, dtype=np.float64).reshape(n, n)
        self.viscosity = _coefficients(viscosity)
        self.diffusion = _coefficients(diffusion)
        self.thermal_conductivity = _coefficients(thermal_conductivity)
        for name in ("sigma", "epsilon_k"):
            if getattr(self, name).shape[0] != n:
                raise ValueError(f"`{name}` needs {n} entries.")
        for name, cols in (("viscosity", 4), ("diffusion", 5), ("thermal_conductivity", 4)):
            coefs = getattr(self, name)
            if coefs is not None and coefs.shape != (n, cols):
                raise ValueError(f"`{name}` needs shape ({n}, {cols}).")

        # combining rules
        self.sigma_ij = 0.5 * (self.sigma[:, None] + self.sigma[None, :])
        self.e_k_ij = np.sqrt(self.epsilon_k[:, None] * self.epsilon_k[None, :])
        self.epsilon_k_ij = self.e_k_ij * (1.0 - self.k_ij)

        # dimensionless squared dipole moment
        self.mu2 = self.mu**2 / (self.m * self.sigma**3 * self.epsilon_k) * DIPOLE_CONV
        self.dipole_comp = np.flatnonzero(np.abs(self.mu2) > 0.0)
        self.assoc_comp = np.flatnonzero(
            (self.kappa_ab > 0.0) & ((self.na > 0.0) | (self.nb > 0.0))
        )

    @classmethod
    def from_lists(
        cls,
        mixture_parameters: List[List[float]],
        kij_matrix: Optional[List[List[float]]] = None,
        viscosity: Optional[List[List[float]]] = None,
        diffusion: Optional[List[List[float]]] = None,
        thermal_conductivity: Optional[List[List[float]]] = None,
    ) -> "PcSaftParameters":
        """
        Parameters from lists.

        Args:
            mixture_parameters: A list of
             `[m, sigma, epsilon/kB, kappa_ab, epsilon_ab/kB, dipole moment, na, nb, MW]`
             for each component of the mixture, `MW` (g/mol) is optional
            kij_matrix: A matrix of binary interaction parameters
            viscosity: Entropy scaling coefficients `[a, b, c, d]` of each component
            diffusion: Entropy scaling coefficients `[a, b, c, d, e]` of each component
            thermal_conductivity: Entropy scaling coefficients `[a, b, c, d]`
             of each component
        """
        records = [list(r) for r in mixture_parameters]
        has_mw = all(len(r) == 9 for r in records)
        for r in records:
            if len(r) not in (8, 9):
                raise ValueError(
                    "Records are `[m, sigma, epsilon/kB, kappa_ab, epsilon_ab/kB, "
                    "dipole moment, na, nb]` with an optional molar weight."
                )
        p = np.asarray([r[:8] for r in records], dtype=np.float64)
        return cls(
            m=p[:, 0],
            sigma=p[:, 1],
            epsilon_k=p[:, 2],
            kappa_ab=p[:, 3],
            epsilon_k_ab=p[:, 4],
            mu=p[:, 5],
            na=p[:, 6],
            nb=p[:, 7],
            molarweight=[r[8] for r in records] if has_mw else None,
            k_ij=kij_matrix,
            viscosity=viscosity,
            diffusion=diffusion,
            thermal_conductivity=thermal_conductivity,
        )

    @property
    def components(self) -> int:
        "Number of components."
        return self.m.shape[0]

    def subset(self, component_list: Sequence[int]) -> "PcSaftParameters":
        "Parameters of the components in `component_list`, `k_ij` preserved."
        idx = np.asarray(component_list, dtype=int)
        return PcSaftParameters(
            m=self.m[idx],
            sigma=self.sigma[idx],
            epsilon_k=self.epsilon_k[idx],
            kappa_ab=self.kappa_ab[idx],
            epsilon_k_ab=self.epsilon_k_ab[idx],
            mu=self.mu[idx],
            na=self.na[idx],
            nb=self.nb[idx],
            molarweight=None if self.molarweight is None else self.molarweight[idx],
            k_ij=self.k_ij[np.ix_(idx, idx)],
            viscosity=_rows(self.viscosity, idx),
            diffusion=_rows(self.diffusion, idx),
            thermal_conductivity=_rows(self.thermal_conductivity, idx),
        )

    def to_lists(self) -> List[List[float]]:
        "Inverse of `from_lists` (without `k_ij`)."
        cols = [
            self.m,
            self.sigma,
            self.epsilon_k,
            self.kappa_ab,
            self.epsilon_k_ab,
            self.mu,
            self.na,
            self.nb,
        ]
        if self.molarweight is not None:
            cols.append(self.molarweight)
        return np.stack(cols, axis=1).tolist()

    def __repr__(self) -> str:
        return f"PcSaftParameters({self.to_lists()!r})"


def _array(x, n: Optional[int] = None) -> np.ndarray:
    if x is None:
        return np.zeros(n)
    return np.atleast_1d(np.asarray(x, dtype=np.float64))


def _coefficients(x) -> Optional[np.ndarray]:
    return None if x is None else np.atleast_2d(np.asarray(x, dtype=np.float64))


def _rows(x: Optional[np.ndarray], idx: np.ndarray) -> Optional[np.ndarray]:
    return None if x is None else x[idx]
