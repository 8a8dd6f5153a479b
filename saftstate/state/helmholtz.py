"Helmholtz energy in SI units at any dual precision."

# @author: Wildson Lima

from ..constants import KB, MOLES_TO_REDUCED, VOLUME_TO_REDUCED
from ..dual import second_derivative
from ..eos import Contributions, StateHD


def helmholtz_energy(eos, temperature, volume, moles, contributions=Contributions.TOTAL):
    """
    Helmholtz energy (J).

    Args:
        eos: EquationOfState
        temperature: K
        volume: m³
        moles: mol, one entry per component
        contributions: parts of the Helmholtz energy to include
    """
    state = StateHD(temperature, volume * VOLUME_TO_REDUCED, moles * MOLES_TO_REDUCED)
    return eos.evaluate(state, contributions) * temperature * KB


def pressure_and_derivative(eos, temperature: float, density: float, moles):
    """
    `(p (Pa), dp/drho (Pa m³/mol))` at temperature (K) and density (mol/m³).
    """
    total_moles = moles.sum()
    volume = total_moles / density
    _, a_v, a_vv = second_derivative(
        lambda v: helmholtz_energy(eos, temperature, v, moles), volume
    )
    return float(-a_v), float(a_vv * volume**2 / total_moles)
