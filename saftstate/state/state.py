"""
Thermodynamic state
---------------
A `State` is an immutable (temperature, volume, moles) triple in SI units
(K, m³, mol) with all properties derived from the Helmholtz energy of an
equation of state. Derivatives are exact, obtained with dual numbers, and
memoized per state.
"""

# @author: Wildson Lima

from typing import Dict, List, Optional, Sequence

import numpy as np

from ..constants import KB, MOLES_TO_REDUCED, VOLUME_TO_REDUCED
from ..dual import (
    first_derivative,
    gradient,
    hessian,
    partial_gradient,
    second_derivative,
    second_partial_derivative,
    third_derivative,
)
from ..eos import Contributions, EquationOfState, StateHD
from ..errors import IncompatibleComponentsError, InvalidStateError
from . import builder, critical_point, spinodal, stability
from .helmholtz import helmholtz_energy
from .options import SolverOptions
from .properties import StateProperties


def _readonly(x) -> np.ndarray:
    x = np.array(x, dtype=np.float64, ndmin=1)
    x.setflags(write=False)
    return x


class State(StateProperties):
    """
    Thermodynamic state of a mixture.

    Parameters
    ----------
    eos : EquationOfState
    temperature : float
        Temperature (K).
    volume : float
        Volume (m³).
    moles : array_like
        Mole numbers (mol), one entry per component.

    Use `State.new_full` and the named constructors to create states from
    other specifications, e.g. temperature and pressure.
    """

    def __init__(self, eos: EquationOfState, temperature: float, volume: float, moles):
        moles = _readonly(moles)
        if len(moles) != eos.components:
            raise IncompatibleComponentsError(eos.components, len(moles))
        for name, val in (("temperature", temperature), ("volume", volume)):
            if not (np.isfinite(val) and val > 0.0):
                raise InvalidStateError("State", name, val)
        if np.any(moles < 0.0) or not moles.sum() > 0.0:
            raise InvalidStateError("State", "moles", moles)
        self._eos = eos
        self._temperature = float(temperature)
        self._volume = float(volume)
        self._moles = moles
        self._total_moles = float(moles.sum())
        self._molefracs = _readonly(moles / self._total_moles)
        self._partial_density = _readonly(moles / self._volume)
        self._cache: Dict[tuple, object] = {}

    # --- read access ---------------------------------------------------------
    @property
    def eos(self) -> EquationOfState:
        "Equation of state."
        return self._eos

    @property
    def temperature(self) -> float:
        "Temperature (K)."
        return self._temperature

    @property
    def volume(self) -> float:
        "Volume (m³)."
        return self._volume

    @property
    def moles(self) -> np.ndarray:
        "Mole numbers (mol)."
        return self._moles

    @property
    def total_moles(self) -> float:
        "Total moles (mol)."
        return self._total_moles

    @property
    def density(self) -> float:
        "Molar density (mol/m³)."
        return self._total_moles / self._volume

    @property
    def partial_density(self) -> np.ndarray:
        "Partial molar densities (mol/m³)."
        return self._partial_density

    @property
    def molefracs(self) -> np.ndarray:
        "Mole fractions."
        return self._molefracs

    # --- Helmholtz energy derivatives ---------------------------------------------
    def _f(self, contributions):
        eos = self._eos
        return lambda t, v, n: helmholtz_energy(eos, t, v, n, contributions)

    def _get(self, key: str, contributions=Contributions.TOTAL):
        contributions = Contributions.parse(contributions)
        k = (key, contributions)
        if k not in self._cache:
            self._compute(key, contributions)
        return self._cache[k]

    # pylint: disable=R0914
    def _compute(self, key: str, c: Contributions) -> None:
        f = self._f(c)
        t, v, n = self._temperature, self._volume, self._moles
        cache = self._cache

        def store(**values):
            for name, val in values.items():
                cache[(name, c)] = val if np.ndim(val) else float(val)

        if key == "a":
            store(a=f(t, v, n))
        elif key == "a_v":
            a, a_v = first_derivative(lambda v: f(t, v, n), v)
            store(a=a, a_v=a_v)
        elif key == "a_t":
            a, a_t = first_derivative(lambda t: f(t, v, n), t)
            store(a=a, a_t=a_t)
        elif key == "a_n":
            a, a_n = gradient(lambda n: f(t, v, n), n)
            store(a=a, a_n=a_n)
        elif key == "a_vv":
            a, a_v, a_vv = second_derivative(lambda v: f(t, v, n), v)
            store(a=a, a_v=a_v, a_vv=a_vv)
        elif key == "a_tt":
            a, a_t, a_tt = second_derivative(lambda t: f(t, v, n), t)
            store(a=a, a_t=a_t, a_tt=a_tt)
        elif key == "a_tv":
            a, a_t, a_v, a_tv = second_partial_derivative(
                lambda t, v: f(t, v, n), t, v
            )
            store(a=a, a_t=a_t, a_v=a_v, a_tv=a_tv)
        elif key == "a_vn":
            a, a_v, a_n, a_vn = partial_gradient(lambda v, n: f(t, v, n), v, n)
            store(a=a, a_v=a_v, a_n=a_n, a_vn=a_vn)
        elif key == "a_tn":
            a, a_t, a_n, a_tn = partial_gradient(lambda t, n: f(t, v, n), t, n)
            store(a=a, a_t=a_t, a_n=a_n, a_tn=a_tn)
        elif key == "a_nn":
            a, a_n, a_nn = hessian(lambda n: f(t, v, n), n)
            store(a=a, a_n=a_n, a_nn=a_nn)
        elif key == "a_vvv":
            a, a_v, a_vv, a_vvv = third_derivative(lambda v: f(t, v, n), v)
            store(a=a, a_v=a_v, a_vv=a_vv, a_vvv=a_vvv)
        elif key == "a_ttt":
            a, a_t, a_tt, a_ttt = third_derivative(lambda t: f(t, v, n), t)
            store(a=a, a_t=a_t, a_tt=a_tt, a_ttt=a_ttt)
        else:
            raise KeyError(key)

    def _breakdown(
        self, variable: Optional[str] = None, contributions=Contributions.TOTAL
    ) -> List[tuple]:
        """
        `(name, A)` or `(name, dA/dx)` of every contribution, with `x` the
        volume (`'v'`) or the moles (`'n'`).
        """
        eos = self._eos
        contributions = Contributions.parse(contributions)
        t, v, n = self._temperature, self._volume, self._moles

        # pylint: disable=cell-var-from-loop
        def f(i, v, n):
            state = StateHD(t, v * VOLUME_TO_REDUCED, n * MOLES_TO_REDUCED)
            breakdown = eos.evaluate_with_breakdown(state, contributions)
            if i is None:
                return breakdown
            return breakdown[i][1] * (t * KB)

        names = [name for name, _ in f(None, v, n)]
        if variable is None:
            return [(name, float(f(i, v, n))) for i, name in enumerate(names)]
        if variable == "v":
            return [
                (name, float(first_derivative(lambda v: f(i, v, n), v)[1]))
                for i, name in enumerate(names)
            ]
        return [
            (name, gradient(lambda n: f(i, v, n), n)[1]) for i, name in enumerate(names)
        ]

    # --- constructors ------------------------------------------------------------
    # pylint: disable=R0913
    @classmethod
    def new_full(
        cls,
        eos: EquationOfState,
        temperature: Optional[float] = None,
        volume: Optional[float] = None,
        density: Optional[float] = None,
        partial_density: Optional[Sequence[float]] = None,
        total_moles: Optional[float] = None,
        moles: Optional[Sequence[float]] = None,
        molefracs: Optional[Sequence[float]] = None,
        pressure: Optional[float] = None,
        molar_enthalpy: Optional[float] = None,
        molar_entropy: Optional[float] = None,
        molar_internal_energy: Optional[float] = None,
        density_initialization=None,
        initial_temperature: Optional[float] = None,
        options: Optional[SolverOptions] = None,
    ) -> "State":
        """
        State from any valid combination of specified quantities (SI units).

        Exactly enough information to fix temperature, volume and moles must
        be given, e.g. temperature, pressure and molefracs. Raises
        `UndeterminedStateError` otherwise.
        """
        return builder.new_full(
            cls,
            eos,
            temperature=temperature,
            volume=volume,
            density=density,
            partial_density=partial_density,
            total_moles=total_moles,
            moles=moles,
            molefracs=molefracs,
            pressure=pressure,
            molar_enthalpy=molar_enthalpy,
            molar_entropy=molar_entropy,
            molar_internal_energy=molar_internal_energy,
            density_initialization=density_initialization,
            initial_temperature=initial_temperature,
            options=options,
        )

    @classmethod
    def new_nvt(cls, eos, temperature: float, volume: float, moles=None) -> "State":
        "State from temperature (K), volume (m³) and moles (mol)."
        return cls(eos, temperature, volume, eos.validate_moles(moles))

    @classmethod
    def new_pure(cls, eos, temperature: float, density: float) -> "State":
        "Pure component state from temperature (K) and density (mol/m³)."
        moles = eos.validate_moles(None)
        return cls(eos, temperature, moles.sum() / density, moles)

    @classmethod
    def new_npt(
        cls,
        eos,
        temperature: float,
        pressure: float,
        moles=None,
        density_initialization=None,
        options: Optional[SolverOptions] = None,
    ) -> "State":
        "State from temperature (K), pressure (Pa) and moles (mol)."
        return builder.new_npt(
            cls, eos, temperature, pressure, moles, density_initialization, options
        )

    @classmethod
    def new_npvx(
        cls,
        eos,
        temperature: float,
        pressure: float,
        volume: float,
        molefracs,
        density_initialization=None,
        options: Optional[SolverOptions] = None,
    ) -> "State":
        "State from temperature (K), pressure (Pa), volume (m³) and molefracs."
        return builder.new_npvx(
            cls,
            eos,
            temperature,
            pressure,
            volume,
            molefracs,
            density_initialization,
            options,
        )

    @classmethod
    def new_nph(
        cls,
        eos,
        pressure: float,
        molar_enthalpy: float,
        moles=None,
        density_initialization=None,
        initial_temperature: Optional[float] = None,
        options: Optional[SolverOptions] = None,
    ) -> "State":
        "State from pressure (Pa), molar enthalpy (J/mol) and moles (mol)."
        return builder.new_nph(
            cls,
            eos,
            pressure,
            molar_enthalpy,
            moles,
            density_initialization,
            initial_temperature,
            options,
        )

    @classmethod
    def new_nps(
        cls,
        eos,
        pressure: float,
        molar_entropy: float,
        moles=None,
        density_initialization=None,
        initial_temperature: Optional[float] = None,
        options: Optional[SolverOptions] = None,
    ) -> "State":
        "State from pressure (Pa), molar entropy (J/(mol K)) and moles (mol)."
        return builder.new_nps(
            cls,
            eos,
            pressure,
            molar_entropy,
            moles,
            density_initialization,
            initial_temperature,
            options,
        )

    @classmethod
    def new_nth(
        cls,
        eos,
        temperature: float,
        molar_enthalpy: float,
        moles=None,
        density_initialization=None,
        options: Optional[SolverOptions] = None,
    ) -> "State":
        "State from temperature (K), molar enthalpy (J/mol) and moles (mol)."
        return builder.new_nth(
            cls, eos, temperature, molar_enthalpy, moles, density_initialization, options
        )

    @classmethod
    def new_nts(
        cls,
        eos,
        temperature: float,
        molar_entropy: float,
        moles=None,
        density_initialization=None,
        options: Optional[SolverOptions] = None,
    ) -> "State":
        "State from temperature (K), molar entropy (J/(mol K)) and moles (mol)."
        return builder.new_nts(
            cls, eos, temperature, molar_entropy, moles, density_initialization, options
        )

    @classmethod
    def new_nvu(
        cls,
        eos,
        volume: float,
        molar_internal_energy: float,
        moles=None,
        initial_temperature: Optional[float] = None,
        options: Optional[SolverOptions] = None,
    ) -> "State":
        "State from volume (m³), molar internal energy (J/mol) and moles (mol)."
        return builder.new_nvu(
            cls, eos, volume, molar_internal_energy, moles, initial_temperature, options
        )

    # --- critical points, spinodal, stability ----------------------------------------
    @classmethod
    def critical_point_pure(
        cls,
        eos,
        initial_temperature: Optional[float] = None,
        options: Optional[SolverOptions] = None,
    ) -> List["State"]:
        "Critical point of every pure component of `eos`."
        return critical_point.critical_point_pure(cls, eos, initial_temperature, options)

    @classmethod
    def critical_point(
        cls,
        eos,
        moles=None,
        initial_temperature: Optional[float] = None,
        options: Optional[SolverOptions] = None,
    ) -> "State":
        "Critical point of a mixture of fixed composition."
        return critical_point.critical_point(cls, eos, moles, initial_temperature, options)

    @classmethod
    def critical_point_binary(
        cls,
        eos,
        temperature_or_pressure: float,
        initial_temperature: Optional[float] = None,
        initial_molefracs: Optional[Sequence[float]] = None,
        options: Optional[SolverOptions] = None,
        is_pressure: bool = False,
    ) -> "State":
        """
        Critical point of a binary mixture at given temperature (K) or, with
        `is_pressure`, at given pressure (Pa).
        """
        return critical_point.critical_point_binary(
            cls,
            eos,
            temperature_or_pressure,
            is_pressure,
            initial_temperature,
            initial_molefracs,
            options,
        )

    @classmethod
    def spinodal(
        cls,
        eos,
        temperature: float,
        moles=None,
        options: Optional[SolverOptions] = None,
    ) -> tuple:
        "`(vapor, liquid)` spinodal states at temperature (K)."
        return spinodal.spinodal(cls, eos, temperature, moles, options)


    def henrys_law_constant(eos, temperature: float, molefracs) -> np.ndarray:
        """
        Henry's law constants (Pa) of every solute (`x_i = 0`) in the
        solvent given by `molefracs` (`x_i > 0`) at temperature (K).
        """
        # pylint: disable=import-outside-toplevel
        from .phase_equilibrium import henrys_law_constant

        return henrys_law_constant(eos, temperature, molefracs)


    def henrys_law_constant_binary(eos, temperature: float) -> float:
        """
        Henry's law constant (Pa) of a binary mixture, the first component
        being the solute and the second the solvent.
        """
        # pylint: disable=import-outside-toplevel
        from .phase_equilibrium import henrys_law_constant_binary

        return henrys_law_constant_binary(eos, temperature)

    def stability_analysis(self, options: Optional[SolverOptions] = None) -> List["State"]:
        """
        Tangent plane distance analysis.

        Returns the trial phases with negative tangent plane distance or
        `[self]` if none is found.
        """
        return stability.stability_analysis(self, options)

    def is_stable(self, options: Optional[SolverOptions] = None) -> bool:
        "No trial phase with negative tangent plane distance exists."
        return stability.is_stable(self, options)

    # --- output ---------------------------------------------------------------------------
    def to_dict(self, contributions=Contributions.TOTAL) -> Dict[str, object]:
        "Main properties of the state, SI units."
        out = {
            "temperature": self.temperature,
            "pressure": self.pressure(),
            "density": self.density,
            "molefracs": self.molefracs.tolist(),
            "molar enthalpy": self.molar_enthalpy(contributions),
            "molar entropy": self.molar_entropy(contributions),
        }
        if self.eos.has_molar_weight():
            out["mass density"] = self.mass_density()
            out["specific enthalpy"] = self.specific_enthalpy(contributions)
            out["specific entropy"] = self.specific_entropy(contributions)
        return out

    def __repr__(self) -> str:
        if self.eos.components == 1:
            return (
                f"T = {self.temperature:.5f} K, rho = {self.density:.5e} mol/m³"
            )
        return (
            f"T = {self.temperature:.5f} K, rho = {self.density:.5e} mol/m³, "
            f"x = {np.array2string(self.molefracs, precision=5)}"
        )


class StateVec:
    """Ordered collection of states, e.g. the points of a phase diagram."""

    def __init__(self, states: Sequence[State]):
        self.states = list(states)

    def __len__(self) -> int:
        return len(self.states)

    def __getitem__(self, idx):
        return self.states[idx]

    def __iter__(self):
        return iter(self.states)

    @property
    def temperature(self) -> np.ndarray:
        "Temperatures (K)."
        return np.array([s.temperature for s in self.states])

    def pressure(self) -> np.ndarray:
        "Pressures (Pa)."
        return np.array([s.pressure() for s in self.states])

    @property
    def density(self) -> np.ndarray:
        "Densities (mol/m³)."
        return np.array([s.density for s in self.states])

    @property
    def molefracs(self) -> np.ndarray:
        "Mole fractions, one row per state."
        return np.array([s.molefracs for s in self.states])

    @property
    def moles(self) -> np.ndarray:
        "Mole numbers (mol), one row per state."
        return np.array([s.moles for s in self.states])

    def compressibility(self, contributions=Contributions.TOTAL) -> np.ndarray:
        "Compressibility factors."
        return np.array([s.compressibility(contributions) for s in self.states])

    def mass_density(self) -> np.ndarray:
        "Mass densities (kg/m³)."
        return np.array([s.mass_density() for s in self.states])

    def massfracs(self) -> np.ndarray:
        "Mass fractions, one row per state."
        return np.array([s.massfracs() for s in self.states])

    def molar_enthalpy(self, contributions=Contributions.TOTAL) -> np.ndarray:
        "Molar enthalpies (J/mol)."
        return np.array([s.molar_enthalpy(contributions) for s in self.states])

    def molar_entropy(self, contributions=Contributions.TOTAL) -> np.ndarray:
        "Molar entropies (J/(mol K))."
        return np.array([s.molar_entropy(contributions) for s in self.states])

    def specific_enthalpy(self, contributions=Contributions.TOTAL) -> np.ndarray:
        "Specific enthalpies (J/kg)."
        return np.array([s.specific_enthalpy(contributions) for s in self.states])

    def specific_entropy(self, contributions=Contributions.TOTAL) -> np.ndarray:
        "Specific entropies (J/(kg K))."
        return np.array([s.specific_entropy(contributions) for s in self.states])

    def to_dict(self, contributions=Contributions.TOTAL) -> Dict[str, list]:
        "Properties of all states by name."
        out: Dict[str, list] = {}
        for s in self.states:
            for key, val in s.to_dict(contributions).items():
                out.setdefault(key, []).append(val)
        return out


__all__ = ["State", "StateVec"]
