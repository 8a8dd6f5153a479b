"""
State descriptor at dual precision
---------------
`StateHD` is what contributions are evaluated at. Temperature, volume and
moles are in reduced units (K, Angstrom^3, molecules) and share the same
dual number structure, so any derivative of the Helmholtz energy is obtained
by seeding the variable of interest before building the state.
"""

# @author: Wildson Lima

import numpy as np

from ..dual import depth, is_dual, lift


def _deepest(*values):
    return max(values, key=depth)


def _total(x):
    return x.sum() if is_dual(x) else np.sum(x)


class StateHD:
    """
    Thermodynamic state (temperature, volume, moles) at dual precision.

    Contributions only use `temperature`, `density`, `partial_density`,
    `molefracs` and `total_moles`, never the volume itself, so that the
    same code works at vanishing density (see `StateHD.virial`).
    """

    __slots__ = (
        "temperature",
        "volume",
        "moles",
        "total_moles",
        "partial_density",
        "density",
        "molefracs",
    )

    def __init__(self, temperature, volume, moles):
        if not is_dual(moles):
            moles = np.asarray(moles, dtype=np.float64)
        like = _deepest(temperature, volume, moles)
        self.temperature = lift(temperature, like)
        self.volume = lift(volume, like)
        self.moles = lift(moles, like)
        self.total_moles = _total(self.moles)
        self.partial_density = self.moles / self.volume
        self.density = self.total_moles / self.volume
        self.molefracs = self.moles / self.total_moles

    @classmethod
    def virial(cls, temperature, density, molefracs):
        """
        State of one molecule specified by its density.

        Usable at `density == 0`, where the Helmholtz energy per molecule and
        its density derivatives give the virial coefficients.
        """
        like = _deepest(temperature, density, molefracs)
        state = cls.__new__(cls)
        state.temperature = lift(temperature, like)
        state.density = lift(density, like)
        state.molefracs = lift(np.asarray(molefracs, dtype=np.float64), like)
        state.moles = state.molefracs
        state.total_moles = _total(state.moles)
        state.partial_density = state.molefracs * state.density
        state.volume = np.inf
        return state

    def __repr__(self) -> str:
        return (
            f"StateHD(temperature={self.temperature!r}, "
            f"density={self.density!r}, molefracs={self.molefracs!r})"
        )
