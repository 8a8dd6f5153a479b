"""
State properties
---------------
Thermodynamic properties as combinations of the derivatives of the
Helmholtz energy `A(T, V, n)` in SI units:

    p = -A_V,  S = -A_T,  mu_i = A_n_i

Properties with a `contributions` argument can be evaluated for the total,
the residual or the ideal gas part of the Helmholtz energy.
"""

# @author: Wildson Lima

from typing import List, Tuple

import numpy as np

from ..constants import RGAS
from ..eos import Contributions
from ..errors import MissingMolarWeightError

TOTAL = Contributions.TOTAL
RESIDUAL = Contributions.RESIDUAL
IDEAL_GAS = Contributions.IDEAL_GAS


# pylint: disable=R0904,no-member
class StateProperties:
    """
    Property accessors of `State`.

    Relies on `_get(key, contributions)` returning the memoized Helmholtz
    energy derivative `key` (e.g. `'a_tv'`) and on `_breakdown`.
    """

    # --- pressure -------------------------------------------------------------
    def pressure(self, contributions=TOTAL) -> float:
        "Pressure (Pa)."
        return -self._get("a_v", contributions)

    def pressure_contributions(self, contributions=TOTAL) -> List[Tuple[str, float]]:
        "`(name, p)` of the ideal gas and every residual contribution (Pa)."
        return [(name, -a_v) for name, a_v in self._breakdown("v", contributions)]

    def compressibility(self, contributions=TOTAL) -> float:
        "Compressibility factor `pV / (nRT)`."
        return (
            self.pressure(contributions)
            * self.volume
            / (self.total_moles * RGAS * self.temperature)
        )

    def dp_dv(self, contributions=TOTAL) -> float:
        "Partial derivative of pressure w.r.t. volume (Pa/m³)."
        return -self._get("a_vv", contributions)

    def dp_drho(self, contributions=TOTAL) -> float:
        "Partial derivative of pressure w.r.t. density (Pa m³/mol)."
        return -self.volume**2 / self.total_moles * self.dp_dv(contributions)

    def dp_dt(self, contributions=TOTAL) -> float:
        "Partial derivative of pressure w.r.t. temperature (Pa/K)."
        return -self._get("a_tv", contributions)

    def dp_dni(self, contributions=TOTAL) -> np.ndarray:
        "Partial derivative of pressure w.r.t. moles (Pa/mol)."
        return -self._get("a_vn", contributions)

    def d2p_dv2(self, contributions=TOTAL) -> float:
        "Second partial derivative of pressure w.r.t. volume (Pa/m⁶)."
        return -self._get("a_vvv", contributions)

    def d2p_drho2(self, contributions=TOTAL) -> float:
        "Second partial derivative of pressure w.r.t. density (Pa m⁶/mol²)."
        v, n = self.volume, self.total_moles
        return (
            v**3
            / n**2
            * (2.0 * self.dp_dv(contributions) + v * self.d2p_dv2(contributions))
        )

    def partial_molar_volume(self) -> np.ndarray:
        "Partial molar volume (m³/mol)."
        return -self.dp_dni() / self.dp_dv()

    # --- chemical potential and fugacity -----------------------------------------
    def chemical_potential(self, contributions=TOTAL) -> np.ndarray:
        "Chemical potential (J/mol)."
        return self._get("a_n", contributions)

    def chemical_potential_contributions(
        self, component: int, contributions=TOTAL
    ) -> List[Tuple[str, float]]:
        "`(name, mu_i)` of the ideal gas and every residual contribution (J/mol)."
        return [
            (name, float(a_n[component]))
            for name, a_n in self._breakdown("n", contributions)
        ]

    def dmu_dt(self, contributions=TOTAL) -> np.ndarray:
        "Partial derivative of chemical potential w.r.t. temperature (J/mol/K)."
        return self._get("a_tn", contributions)

    def dmu_dni(self, contributions=TOTAL) -> np.ndarray:
        "Partial derivatives of chemical potential w.r.t. moles (J/mol²)."
        return self._get("a_nn", contributions)

    def ln_phi(self) -> np.ndarray:
        "Logarithm of the fugacity coefficient."
        return self.chemical_potential(RESIDUAL) / (
            RGAS * self.temperature
        ) - np.log(self.compressibility())

    def ln_phi_pure_liquid(self) -> np.ndarray:
        "Logarithm of the fugacity coefficient of every pure liquid at T and p."
        p = self.pressure()
        out = np.zeros(self.eos.components)
        for i in range(self.eos.components):
            pure = type(self).new_npt(
                self.eos.subset([i]),
                self.temperature,
                p,
                density_initialization="liquid",
            )
            out[i] = pure.ln_phi()[0]
        return out

    def ln_symmetric_activity_coefficient(self) -> np.ndarray:
        "Logarithm of the activity coefficient, pure liquids as reference."
        return self.ln_phi() - self.ln_phi_pure_liquid()

    def dln_phi_dt(self) -> np.ndarray:
        "Partial derivative of `ln_phi` w.r.t. temperature at constant pressure (1/K)."
        t, v = self.temperature, self.volume
        rt = RGAS * t
        mu_res = self.chemical_potential(RESIDUAL)
        dv_dt = -self.dp_dt() / self.dp_dv()
        dmu_res_dv = -self.dp_dni(RESIDUAL)
        return (
            (self.dmu_dt(RESIDUAL) - mu_res / t) / rt
            + dv_dt * (dmu_res_dv / rt - 1.0 / v)
            + 1.0 / t
        )

    def dln_phi_dp(self) -> np.ndarray:
        "Partial derivative of `ln_phi` w.r.t. pressure (1/Pa)."
        return self.partial_molar_volume() / (RGAS * self.temperature) - 1.0 / self.pressure()

    def dln_phi_dnj(self) -> np.ndarray:
        "Partial derivatives of `ln_phi` w.r.t. moles at constant T and p (1/mol)."
        dp_dn = self.dp_dni()
        return (
            self.dmu_dni(RESIDUAL) / (RGAS * self.temperature)
            + np.outer(dp_dn, dp_dn) / (self.dp_dv() * RGAS * self.temperature)
            + 1.0 / self.total_moles
        )

    def thermodynamic_factor(self) -> np.ndarray:
        """
        Thermodynamic factor

        `Gamma_ij = delta_ij + x_i n (dln_phi_i/dn_j - dln_phi_i/dn_N)`

        for `i, j < N`, with `N` the last component.
        """
        dln_phi = self.dln_phi_dnj()
        k = self.eos.components - 1
        return np.eye(k) + self.molefracs[:k, np.newaxis] * self.total_moles * (
            dln_phi[:k, :k] - dln_phi[:k, k:]
        )

    # --- energies -------------------------------------------------------------
    def helmholtz_energy(self, contributions=TOTAL) -> float:
        "Helmholtz energy (J)."
        return self._get("a", contributions)

    def molar_helmholtz_energy(self, contributions=TOTAL) -> float:
        "Molar Helmholtz energy (J/mol)."
        return self.helmholtz_energy(contributions) / self.total_moles

    def residual_helmholtz_energy_contributions(self) -> List[Tuple[str, float]]:
        "`(name, A)` of every residual contribution (J)."
        return self._breakdown(contributions=RESIDUAL)

    def entropy(self, contributions=TOTAL) -> float:
        "Entropy (J/K)."
        return -self._get("a_t", contributions)

    def molar_entropy(self, contributions=TOTAL) -> float:
        "Molar entropy (J/(mol K))."
        return self.entropy(contributions) / self.total_moles

    def ds_dt(self, contributions=TOTAL) -> float:
        "Partial derivative of entropy w.r.t. temperature (J/K²)."
        return -self._get("a_tt", contributions)

    def partial_molar_entropy(self, contributions=TOTAL) -> np.ndarray:
        "Partial molar entropy (J/(mol K))."
        return -(
            self.dmu_dt(contributions)
            + self.dp_dni(contributions) * (self.dp_dt() / self.dp_dv())
        )

    def enthalpy(self, contributions=TOTAL) -> float:
        "Enthalpy (J)."
        t, v = self.temperature, self.volume
        return (
            self._get("a", contributions)
            - t * self._get("a_t", contributions)
            - v * self._get("a_v", contributions)
        )

    def molar_enthalpy(self, contributions=TOTAL) -> float:
        "Molar enthalpy (J/mol)."
        return self.enthalpy(contributions) / self.total_moles

    def partial_molar_enthalpy(self, contributions=TOTAL) -> np.ndarray:
        "Partial molar enthalpy (J/mol)."
        return self.chemical_potential(contributions) + self.temperature * (
            self.partial_molar_entropy(contributions)
        )

    def internal_energy(self, contributions=TOTAL) -> float:
        "Internal energy (J)."
        return self._get("a", contributions) - self.temperature * self._get(
            "a_t", contributions
        )

    def molar_internal_energy(self, contributions=TOTAL) -> float:
        "Molar internal energy (J/mol)."
        return self.internal_energy(contributions) / self.total_moles

    def gibbs_energy(self, contributions=TOTAL) -> float:
        "Gibbs energy (J)."
        return self._get("a", contributions) - self.volume * self._get(
            "a_v", contributions
        )

    def molar_gibbs_energy(self, contributions=TOTAL) -> float:
        "Molar Gibbs energy (J/mol)."
        return self.gibbs_energy(contributions) / self.total_moles

    # --- heat capacities and response functions --------------------------------
    def molar_isochoric_heat_capacity(self, contributions=TOTAL) -> float:
        "Molar isochoric heat capacity (J/(mol K))."
        return -self.temperature * self._get("a_tt", contributions) / self.total_moles

    def dc_v_dt(self, contributions=TOTAL) -> float:
        "Partial derivative of the molar isochoric heat capacity w.r.t. temperature."
        return (
            -(
                self._get("a_tt", contributions)
                + self.temperature * self._get("a_ttt", contributions)
            )
            / self.total_moles
        )

    def molar_isobaric_heat_capacity(self, contributions=TOTAL) -> float:
        "Molar isobaric heat capacity (J/(mol K))."
        contributions = Contributions.parse(contributions)
        if contributions is RESIDUAL:
            return self.molar_isobaric_heat_capacity(
                TOTAL
            ) - self.molar_isobaric_heat_capacity(IDEAL_GAS)
        return self.molar_isochoric_heat_capacity(
            contributions
        ) - self.temperature * self.dp_dt(contributions) ** 2 / (
            self.dp_dv(contributions) * self.total_moles
        )

    def joule_thomson(self) -> float:
        "Joule-Thomson coefficient (K/Pa)."
        return -(self.volume + self.temperature * self.dp_dt() / self.dp_dv()) / (
            self.total_moles * self.molar_isobaric_heat_capacity()
        )

    def isothermal_compressibility(self) -> float:
        "Isothermal compressibility (1/Pa)."
        return -1.0 / (self.volume * self.dp_dv())

    def isentropic_compressibility(self) -> float:
        "Isentropic compressibility (1/Pa)."
        return (
            self.isothermal_compressibility()
            * self.molar_isochoric_heat_capacity()
            / self.molar_isobaric_heat_capacity()
        )

    def isenthalpic_compressibility(self) -> float:
        "Isenthalpic compressibility (1/Pa)."
        return (
            self.isothermal_compressibility()
            - self.thermal_expansivity() * self.joule_thomson()
        )

    def thermal_expansivity(self) -> float:
        "Thermal expansivity (1/K)."
        return -self.dp_dt() / (self.volume * self.dp_dv())

    def grueneisen_parameter(self) -> float:
        "Grüneisen parameter."
        return (
            self.volume
            * self.dp_dt()
            / (self.total_moles * self.molar_isochoric_heat_capacity())
        )

    def structure_factor(self) -> float:
        "Structure factor at zero wave vector, `rho R T kappa_T`."
        return -(self.total_moles * RGAS * self.temperature) / (
            self.volume**2 * self.dp_dv()
        )

    # --- mass based ---------------------------------------------------------------
    def _molar_weight(self) -> np.ndarray:
        if not self.eos.has_molar_weight():
            raise MissingMolarWeightError()
        return self.eos.molar_weight()

    def total_molar_weight(self) -> float:
        "Mean molar weight (kg/mol)."
        return float((self._molar_weight() * self.molefracs).sum())

    def mass(self) -> np.ndarray:
        "Mass of every component (kg)."
        return self._molar_weight() * self.moles

    def total_mass(self) -> float:
        "Total mass (kg)."
        return float(self.mass().sum())

    def mass_density(self) -> float:
        "Mass density (kg/m³)."
        return self.density * self.total_molar_weight()

    def massfracs(self) -> np.ndarray:
        "Mass fractions."
        return self.mass() / self.total_mass()

    def speed_of_sound(self) -> float:
        "Speed of sound (m/s)."
        return np.sqrt(
            -self.volume**2
            * self.dp_dv()
            * self.molar_isobaric_heat_capacity()
            / self.molar_isochoric_heat_capacity()
            / (self.total_moles * self.total_molar_weight())
        )

    def specific_helmholtz_energy(self, contributions=TOTAL) -> float:
        "Specific Helmholtz energy (J/kg)."
        return self.molar_helmholtz_energy(contributions) / self.total_molar_weight()

    def specific_entropy(self, contributions=TOTAL) -> float:
        "Specific entropy (J/(kg K))."
        return self.molar_entropy(contributions) / self.total_molar_weight()

    def specific_internal_energy(self, contributions=TOTAL) -> float:
        "Specific internal energy (J/kg)."
        return self.molar_internal_energy(contributions) / self.total_molar_weight()

    def specific_gibbs_energy(self, contributions=TOTAL) -> float:
        "Specific Gibbs energy (J/kg)."
        return self.molar_gibbs_energy(contributions) / self.total_molar_weight()

    def specific_enthalpy(self, contributions=TOTAL) -> float:
        "Specific enthalpy (J/kg)."
        return self.molar_enthalpy(contributions) / self.total_molar_weight()

    def specific_isochoric_heat_capacity(self, contributions=TOTAL) -> float:
        "Specific isochoric heat capacity (J/(kg K))."
        return (
            self.molar_isochoric_heat_capacity(contributions) / self.total_molar_weight()
        )

    def specific_isobaric_heat_capacity(self, contributions=TOTAL) -> float:
        "Specific isobaric heat capacity (J/(kg K))."
        return (
            self.molar_isobaric_heat_capacity(contributions) / self.total_molar_weight()
        )

    # --- transport ------------------------------------------------------------------
    def viscosity_reference(self) -> float:
        "Reference viscosity of entropy scaling (Pa s)."
        return self.eos.residual.viscosity_reference(
            self.temperature, self.volume, self.moles
        )

    def ln_viscosity_reduced(self) -> float:
        "Logarithm of the viscosity divided by the reference viscosity."
        s_res = self.molar_entropy(RESIDUAL) / RGAS
        return self.eos.residual.viscosity_correlation(s_res, self.molefracs)

    def viscosity(self) -> float:
        "Viscosity (Pa s), entropy scaling."
        return self.viscosity_reference() * np.exp(self.ln_viscosity_reduced())

    def diffusion_reference(self) -> float:
        "Reference self-diffusion coefficient of entropy scaling (m²/s)."
        return self.eos.residual.diffusion_reference(
            self.temperature, self.volume, self.moles
        )

    def ln_diffusion_reduced(self) -> float:
        "Logarithm of the self-diffusion coefficient divided by its reference."
        s_res = self.molar_entropy(RESIDUAL) / RGAS
        return self.eos.residual.diffusion_correlation(s_res, self.molefracs)

    def diffusion(self) -> float:
        "Self-diffusion coefficient (m²/s), entropy scaling."
        return self.diffusion_reference() * np.exp(self.ln_diffusion_reduced())

    def thermal_conductivity_reference(self) -> float:
        "Reference thermal conductivity of entropy scaling (W/(m K))."
        return self.eos.residual.thermal_conductivity_reference(
            self.temperature, self.volume, self.moles
        )

    def ln_thermal_conductivity_reduced(self) -> float:
        "Logarithm of the thermal conductivity divided by its reference."
        s_res = self.molar_entropy(RESIDUAL) / RGAS
        return self.eos.residual.thermal_conductivity_correlation(s_res, self.molefracs)

    def thermal_conductivity(self) -> float:
        "Thermal conductivity (W/(m K)), entropy scaling."
        return self.thermal_conductivity_reference() * np.exp(
            self.ln_thermal_conductivity_reduced()
        )
