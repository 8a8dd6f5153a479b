"Module to calculate properties with PCSAFT from parameter lists."

# @author: Wildson Lima

from typing import List, Optional

import numpy as np

from ..eos import Contributions, EquationOfState
from ..state import DensityInitialization, PhaseEquilibrium, State
from .parameters import PcSaftParameters


def pc_saft(
    parameters: List[float],
    viscosity: Optional[List[float]] = None,
    diffusion: Optional[List[float]] = None,
    thermal_conductivity: Optional[List[float]] = None,
) -> EquationOfState:
    """
    Returns a PCSAFT equation of state.

    Args:
        parameters: A list with
         `[m, sigma, epsilon/kB, kappa_ab, epsilon_ab/kB, dipole moment, na, nb]`
         and, optionally, the molar weight `MW` (g/mol)
        viscosity: Entropy scaling coefficients `[a, b, c, d]`
        diffusion: Entropy scaling coefficients `[a, b, c, d, e]`
        thermal_conductivity: Entropy scaling coefficients `[a, b, c, d]`
    """

    def _row(coefs):
        return None if coefs is None else [coefs]

    return pc_saft_mixture(
        [parameters],
        viscosity=_row(viscosity),
        diffusion=_row(diffusion),
        thermal_conductivity=_row(thermal_conductivity),
    )


def pc_saft_mixture(
    mixture_parameters: List[List[float]],
    kij_matrix: Optional[List[List[float]]] = None,
    viscosity: Optional[List[List[float]]] = None,
    diffusion: Optional[List[List[float]]] = None,
    thermal_conductivity: Optional[List[List[float]]] = None,
) -> EquationOfState:
    """
    Returns a PCSAFT equation of state.

    Args:
        mixture_parameters: A list of
         `[m, sigma, epsilon/kB, kappa_ab, epsilon_ab/kB, dipole moment, na, nb, MW]`
         for each component of the mixture
        kij_matrix: A matrix of binary interaction parameters
        viscosity: Entropy scaling coefficients `[a, b, c, d]` of each component
        diffusion: Entropy scaling coefficients `[a, b, c, d, e]` of each component
        thermal_conductivity: Entropy scaling coefficients `[a, b, c, d]` of
         each component
    """
    params = PcSaftParameters.from_lists(
        mixture_parameters, kij_matrix, viscosity, diffusion, thermal_conductivity
    )
    return EquationOfState.pcsaft(params)


def _npt(eos, state: List[float], density_initialization=None) -> State:
    t = state[0]  # Temperature, K
    p = state[1]  # Pa
    x = np.asarray(state[2:], dtype=np.float64) if len(state) > 2 else None
    return State.new_npt(eos, t, p, x, density_initialization)


def pure_den(parameters: List[float], state: List[float]) -> float:
    """
    Calculates pure component liquid density (mol/m³) with PCSAFT.

    Args:
        parameters: A list with
         `[m, sigma, epsilon/kB, kappa_ab, epsilon_ab/kB, dipole moment, na, nb]`
        state: A list with `[Temperature (K), Pressure (Pa)]`
    """
    eos = pc_saft(parameters)
    return _npt(eos, state[:2], DensityInitialization.LIQUID).density


def pure_vp(parameters: List[float], state: List[float]) -> float:
    """
    Calculates pure component vapor pressure (Pa) with PCSAFT.

    Args:
        parameters: A list with
         `[m, sigma, epsilon/kB, kappa_ab, epsilon_ab/kB, dipole moment, na, nb]`
        state: A list with `[Temperature (K)]`
    """
    vle = PhaseEquilibrium.pure(pc_saft(parameters), state[0])
    return vle.liquid.pressure()


def pure_h_lv(parameters: List[float], state: List[float]) -> float:
    """
    Calculates pure component enthalpy of vaporization (kJ/mol) with PCSAFT.

    Args:
        parameters: A list with
         `[m, sigma, epsilon/kB, kappa_ab, epsilon_ab/kB, dipole moment, na, nb]`
        state: A list with `[Temperature (K)]`
    """
    vle = PhaseEquilibrium.pure(pc_saft(parameters), state[0])
    return (
        vle.vapor.molar_enthalpy(Contributions.RESIDUAL)
        - vle.liquid.molar_enthalpy(Contributions.RESIDUAL)
    ) * 1e-3


def pure_s_lv(parameters: List[float], state: List[float]) -> float:
    """
    Calcules pure component entropy of vaporization (J/mol*K) with PCSAFT.

    Args:
        parameters: A list with
         `[m, sigma, epsilon/kB, kappa_ab, epsilon_ab/kB, dipole moment, na, nb]`
        state: A list with `[Temperature (K)]`
    """
    vle = PhaseEquilibrium.pure(pc_saft(parameters), state[0])
    return vle.vapor.molar_entropy(Contributions.RESIDUAL) - vle.liquid.molar_entropy(
        Contributions.RESIDUAL
    )


def critical_points(parameters: List[float]) -> List[float]:
    """
    Calculates critical points `[Tc (K), Pc (Pa), Dc (mol/m³)]` with PCSAFT.

    Args:
        parameters: A list with
         `[m, sigma, epsilon/kB, kappa_ab, epsilon_ab/kB, dipole moment, na, nb]`
    """
    critical_point = State.critical_point(pc_saft(parameters))
    return [
        critical_point.temperature,
        critical_point.pressure(),
        critical_point.density,
    ]


def pure_spinodal(parameters: List[float], state: List[float]) -> List[float]:
    """
    Calculates spinodal densities `[vapor (mol/m³), liquid (mol/m³)]` with PCSAFT.

    Args:
        parameters: A list with
         `[m, sigma, epsilon/kB, kappa_ab, epsilon_ab/kB, dipole moment, na, nb]`
        state: A list with `[Temperature (K)]`
    """
    vapor, liquid = State.spinodal(pc_saft(parameters), state[0])
    return [vapor.density, liquid.density]


def pure_viscosity(
    parameters: List[float], viscosity: List[float], state: List[float]
) -> float:
    """
    Calcules pure component viscosity (Pa*s) with PCSAFT and entropy scaling.

    Args:
        parameters: A list with
         `[m, sigma, epsilon/kB, kappa_ab, epsilon_ab/kB, dipole moment, na, nb, MW]`
        viscosity: Entropy scaling coefficients `[a, b, c, d]`
        state: A list with `[Temperature (K), Pressure (Pa)]`
    """
    eos = pc_saft(parameters, viscosity)
    return _npt(eos, state[:2], DensityInitialization.LIQUID).viscosity()


def mix_den(
    parameters: List[List[float]],
    state: List[float],
    kij_matrix: Optional[List[List[float]]] = None,
) -> float:
    """
    Calculates mixture liquid density (mol/m³) with PCSAFT.

    Args:
        parameters: A list of
         `[m, sigma, epsilon/kB, kappa_ab, epsilon_ab/kB, dipole moment, na, nb, MW]`
         for each component of the mixture
        state: A list with
         `[Temperature (K), Pressure (Pa), mole_fractions_1, mole_fractions_2, ...]`
        kij_matrix: A matrix of binary interaction parameters
    """
    eos = pc_saft_mixture(parameters, kij_matrix)
    return _npt(eos, state, DensityInitialization.LIQUID).density


def mix_ln_fugacity_coefficient(
    parameters: List[List[float]],
    state: List[float],
    kij_matrix: Optional[List[List[float]]] = None,
) -> np.ndarray:
    """
    Calculates mixture `ln(fugacity coefficient)` with PCSAFT for each component.

    Args:
        parameters: A list of
         `[m, sigma, epsilon/kB, kappa_ab, epsilon_ab/kB, dipole moment, na, nb, MW]`
         for each component of the mixture
        state: A list with
         `[Temperature (K), Pressure (Pa), mole_fractions_1, mole_fractions_2, ...]`
        kij_matrix: A matrix of binary interaction parameters
    """
    eos = pc_saft_mixture(parameters, kij_matrix)
    return _npt(eos, state, DensityInitialization.LIQUID).ln_phi()


def mix_ln_fugacity_coefficient_pure(
    parameters: List[List[float]],
    state: List[float],
    kij_matrix: Optional[List[List[float]]] = None,
) -> np.ndarray:
    """
    Calculates `ln(fugacity coefficient)` of each pure liquid component with PCSAFT.

    Args:
        parameters: A list of
         `[m, sigma, epsilon/kB, kappa_ab, epsilon_ab/kB, dipole moment, na, nb, MW]`
         for each component of the mixture
        state: A list with
         `[Temperature (K), Pressure (Pa), mole_fractions_1, mole_fractions_2, ...]`
        kij_matrix: A matrix of binary interaction parameters
    """
    eos = pc_saft_mixture(parameters, kij_matrix)
    return _npt(eos, state, DensityInitialization.LIQUID).ln_phi_pure_liquid()


def mix_ln_activity_coefficient(
    parameters: List[List[float]],
    state: List[float],
    kij_matrix: Optional[List[List[float]]] = None,
) -> np.ndarray:
    """
    Calculates mixture `ln(activity coefficient)` with PCSAFT for each component.

    Args:
        parameters: A list of
         `[m, sigma, epsilon/kB, kappa_ab, epsilon_ab/kB, dipole moment, na, nb, MW]`
         for each component of the mixture
        state: A list with
         `[Temperature (K), Pressure (Pa), mole_fractions_1, mole_fractions_2, ...]`
        kij_matrix: A matrix of binary interaction parameters
    """
    eos = pc_saft_mixture(parameters, kij_matrix)
    return _npt(eos, state, DensityInitialization.LIQUID).ln_symmetric_activity_coefficient()


def mix_e_gibbs_energy(
    parameters: List[List[float]],
    state: List[float],
    kij_matrix: Optional[List[List[float]]] = None,
) -> float:
    """
    Calculates mixture `Molar Excess Gibbs Energy/RT` with PCSAFT.

    Args:
        parameters: A list of
         `[m, sigma, epsilon/kB, kappa_ab, epsilon_ab/kB, dipole moment, na, nb, MW]`
         for each component of the mixture
        state: A list with
         `[Temperature (K), Pressure (Pa), mole_fractions_1, mole_fractions_2, ...]`
        kij_matrix: A matrix of binary interaction parameters
    """
    x = np.asarray(state[2:], dtype=np.float64)  # mole fractions
    return float(np.sum(mix_ln_activity_coefficient(parameters, state, kij_matrix) * x))


def mix_gibbs_energy(
    parameters: List[List[float]],
    state: List[float],
    kij_matrix: Optional[List[List[float]]] = None,
) -> float:
    """
    Calculates mixture `Molar Gibbs Energy of mixing/RT` with PCSAFT.

    Args:
        parameters: A list of
         `[m, sigma, epsilon/kB, kappa_ab, epsilon_ab/kB, dipole moment, na, nb, MW]`
         for each component of the mixture
        state: A list with
         `[Temperature (K), Pressure (Pa), mole_fractions_1, mole_fractions_2, ...]`
        kij_matrix: A matrix of binary interaction parameters
    """
    x = np.asarray(state[2:], dtype=np.float64)  # mole fractions
    excess_g = mix_e_gibbs_energy(parameters, state, kij_matrix)
    return excess_g + float(np.sum(x * np.log(x)))


def mix_r_gibbs_energy(
    parameters: List[List[float]],
    state: List[float],
    kij_matrix: Optional[List[List[float]]] = None,
) -> float:
    """
    Calculates mixture `Molar Residual Gibbs Energy/RT` with PCSAFT.

    Args:
        parameters: A list of
         `[m, sigma, epsilon/kB, kappa_ab, epsilon_ab/kB, dipole moment, na, nb, MW]`
         for each component of the mixture
        state: A list with
         `[Temperature (K), Pressure (Pa), mole_fractions_1, mole_fractions_2, ...]`
        kij_matrix: A matrix of binary interaction parameters
    """
    x = np.asarray(state[2:], dtype=np.float64)  # mole fractions
    return float(np.sum(mix_ln_fugacity_coefficient(parameters, state, kij_matrix) * x))


def mix_isobaric_heat_capacity(
    parameters: List[List[float]],
    state: List[float],
    kij_matrix: Optional[List[List[float]]] = None,
) -> float:
    """
    Calculates mixture residual molar isobaric heat capacity (J / (mol*K)) with PCSAFT

    Args:
        parameters: A list of
          `[m, sigma, epsilon/kB, kappa_ab, epsilon_ab/kB, dipole moment, na, nb]`
          for each component of the mixture
        state:
          A list with `[Temperature (K), Pressure (Pa), mole_fractions_1, mole_fractions_2, ...]`
        kij_matrix: A matrix of binary interaction parameters
    """
    eos = pc_saft_mixture(parameters, kij_matrix)
    return _npt(eos, state).molar_isobaric_heat_capacity(Contributions.RESIDUAL)


def mix_critical_point(
    parameters: List[List[float]],
    state: List[float],
    kij_matrix: Optional[List[List[float]]] = None,
) -> List[float]:
    """
    Calculates the mixture critical point `[Tc (K), Pc (Pa), Dc (mol/m³)]` with PCSAFT.

    Args:
        parameters: A list of
          `[m, sigma, epsilon/kB, kappa_ab, epsilon_ab/kB, dipole moment, na, nb]`
          for each component of the mixture
        state: A list with `[mole_fractions_1, mole_fractions_2, ...]`
        kij_matrix: A matrix of binary interaction parameters
    """
    eos = pc_saft_mixture(parameters, kij_matrix)
    critical_point = State.critical_point(eos, np.asarray(state, dtype=np.float64))
    return [
        critical_point.temperature,
        critical_point.pressure(),
        critical_point.density,
    ]
