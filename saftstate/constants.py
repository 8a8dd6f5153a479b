"""Physical constants and the fixed conversion between SI and reduced units.

Reduced units: temperature in K, length in Å, amount in molecules and
energy in units of k_B·K.
"""

# @author: Wildson Lima

KB = 1.380648465952442093e-23  # Boltzmann constant, J K^-1
N_AV = 6.022140857e23  # Avogadro's number
RGAS = KB * N_AV  # J mol^-1 K^-1
PLANCK = 6.62607015e-34  # J s
ANGSTROM = 1e-10  # m
ANGSTROM3 = ANGSTROM**3  # m³
AMU = 1e-3 / N_AV  # kg, mass of 1 g/mol per molecule

# SI -> reduced
VOLUME_TO_REDUCED = 1.0 / ANGSTROM3  # m³ -> Å³
MOLES_TO_REDUCED = N_AV  # mol -> molecules
DENSITY_TO_REDUCED = ANGSTROM3 * N_AV  # mol/m³ -> Å^-3
PRESSURE_TO_REDUCED = ANGSTROM3 / KB  # Pa -> K Å^-3

# reference state of ideal gas heat capacity integrals
T0 = 298.15  # K
P0 = 1e5  # Pa
