# spraytower/core/constants.py
"""
Physical constants and property tables for spray tower design.

Tables are wrapped in read-only mappings and bundled in a PropertyLibrary.
Calculations take the library as an argument (DEFAULT_LIBRARY unless a
caller injects its own), so no stage reads a mutable global.

Units:
  - Henry constant: Pa·m³/mol
  - Diffusivity: m²/s (in air)
  - Molar mass: g/mol
  - Nozzle k: m³/(h·bar^0.5), flow = k·sqrt(ΔP)
  - Emission limits: mg/Nm³
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .enums import PollutantType, RegulatoryFramework, ApplicationType
from .validation import InputError, UnknownPollutantError, UnknownNozzleError


# ============================================================================
# Physical constants
# ============================================================================

R_GAS = 8.314462618            # J/(mol·K)
M_AIR = 0.02897                # kg/mol
MU_GAS_DEFAULT = 1.85e-5       # Pa·s, air near 40 °C
GRAVITY = 9.80665              # m/s²

# Normal (standard) conditions for Nm³
T_STANDARD = 273.15            # K
P_STANDARD = 101325.0          # Pa

# Droplet physics is evaluated over an assumed spray height before the
# required height is known.
ASSUMED_SPRAY_HEIGHT = 5.0     # m

# Empirical KGa correlation: KGa = 0.1586 * G_m^0.8 * L^0.4
#   G_m: approximate molar gas flux, kmol/(s·m²) = rho_g * v_g / 29
#   L:   liquid flux, L/(s·m²)
#   KGa: 1/s
# Dimensional, application specific; do not rescale.
KGA_COEFFICIENT = 0.1586
KGA_GAS_EXPONENT = 0.8
KGA_LIQUID_EXPONENT = 0.4
KGA_MOLAR_MASS_DIVISOR = 29.0  # kg/kmol


@dataclass(frozen=True)
class PollutantData:
    henry_constant: float      # Pa·m³/mol
    diffusivity: float         # m²/s
    molar_mass: float          # g/mol


@dataclass(frozen=True)
class NozzleData:
    name: str
    k: float                   # m³/(h·bar^0.5)
    description: str = ""


@dataclass(frozen=True)
class FrameworkData:
    """
    Regulatory framework: emission limits and vessel code thresholds.

    emission_limits are what the compliance check grades against; a
    pollutant missing from it passes. target_limits are what the compliance
    search aims below and fall back to emission_limits per pollutant.
    """
    name: str
    emission_limits: Mapping[PollutantType, float]     # mg/Nm³
    pressure_vessel_threshold: float                   # Pa, absolute
    pressure_vessel_code: str
    safety_classification: str
    atmospheric_code: str = "Atmospheric vessel"
    target_limits: Mapping[PollutantType, float] = field(default_factory=dict)  # mg/Nm³


POLLUTANTS: Mapping[PollutantType, PollutantData] = MappingProxyType({
    PollutantType.SO2: PollutantData(1230.0, 1.2e-5, 64.066),
    PollutantType.HCL: PollutantData(0.194, 1.6e-5, 36.461),
    PollutantType.NH3: PollutantData(6600.0, 2.1e-5, 17.031),
    PollutantType.H2S: PollutantData(930.0, 1.4e-5, 34.08),
})

NOZZLES: Mapping[str, NozzleData] = MappingProxyType({
    "FullCone-1/2-15": NozzleData("FullCone-1/2-15", 1.5, "Medium flow"),
    "HollowCone-3/4-25": NozzleData("HollowCone-3/4-25", 2.6, "Higher flow"),
    "Spiral-1/2-10": NozzleData("Spiral-1/2-10", 1.2, "Fine droplets"),
})

FRAMEWORKS: Mapping[RegulatoryFramework, FrameworkData] = MappingProxyType({
    RegulatoryFramework.EU: FrameworkData(
        name="European Union",
        emission_limits=MappingProxyType({
            PollutantType.SO2: 200.0,
            PollutantType.HCL: 10.0,
            PollutantType.NH3: 50.0,
            PollutantType.H2S: 5.0,
        }),
        pressure_vessel_threshold=50000.0,
        pressure_vessel_code="EU PED (>0.5 bar)",
        safety_classification="ATEX assessment required for flammable gases",
    ),
    RegulatoryFramework.US: FrameworkData(
        name="United States",
        # No federal limits are graded; plant limits converted from ppmvd
        # only steer the compliance search
        emission_limits=MappingProxyType({}),
        target_limits=MappingProxyType({
            PollutantType.SO2: 400.0,
            PollutantType.HCL: 25.0,
            PollutantType.NH3: 100.0,
            PollutantType.H2S: 15.0,
        }),
        pressure_vessel_threshold=103421.0,
        pressure_vessel_code="ASME BPVC Section VIII",
        safety_classification="OSHA/NFPA compliance required",
    ),
})


@dataclass(frozen=True)
class PropertyLibrary:
    """Immutable bundle of the lookup tables used by one evaluation"""
    pollutants: Mapping[PollutantType, PollutantData] = field(default_factory=lambda: POLLUTANTS)
    nozzles: Mapping[str, NozzleData] = field(default_factory=lambda: NOZZLES)
    frameworks: Mapping[RegulatoryFramework, FrameworkData] = field(default_factory=lambda: FRAMEWORKS)

    def pollutant(self, pollutant_type: PollutantType) -> PollutantData:
        try:
            return self.pollutants[pollutant_type]
        except KeyError:
            raise UnknownPollutantError(
                f"No property data for pollutant {pollutant_type!s}"
            ) from None

    def nozzle(self, nozzle_type: str) -> NozzleData:
        try:
            return self.nozzles[nozzle_type]
        except KeyError:
            known = ", ".join(sorted(self.nozzles))
            raise UnknownNozzleError(
                f"Unknown nozzle type {nozzle_type!r}; known types: {known}"
            ) from None

    def framework(self, framework: RegulatoryFramework) -> FrameworkData:
        try:
            return self.frameworks[framework]
        except KeyError:
            known = ", ".join(str(f) for f in self.frameworks)
            raise InputError(
                f"No data for regulatory framework {framework!s}; known: {known}"
            ) from None

    def emission_limit(
        self,
        framework: RegulatoryFramework,
        pollutant_type: PollutantType,
    ) -> Optional[float]:
        """Emission limit (mg/Nm³), or None when the framework sets none"""
        return self.framework(framework).emission_limits.get(pollutant_type)

    def target_limit(
        self,
        framework: RegulatoryFramework,
        pollutant_type: PollutantType,
    ) -> Optional[float]:
        """Limit the compliance search aims below (mg/Nm³), or None"""
        data = self.framework(framework)
        limit = data.target_limits.get(pollutant_type)
        if limit is None:
            limit = data.emission_limits.get(pollutant_type)
        return limit


DEFAULT_LIBRARY = PropertyLibrary()


# ============================================================================
# Recommended ranges
# ============================================================================

# (min, max) outside of which an input is unusual, not invalid
VALIDATION_RANGES: Mapping[str, Tuple[float, float]] = MappingProxyType({
    "gas_flow_rate": (100.0, 1.0e6),      # Nm³/h
    "temperature": (0.0, 200.0),          # °C
    "pressure": (50.0, 500.0),            # kPa
    "target_efficiency": (0.1, 0.99),     # -
    "lg_ratio": (0.001, 0.1),             # m³/m³
    "gas_velocity": (1.0, 10.0),          # m/s
    "droplet_size": (0.1, 5.0),           # mm
})

ENTRAINMENT_VELOCITY = 2.3  # m/s, droplet carry-over risk above this

# Per-application ranges: L/G in L/m³, velocity in m/s, droplet in mm
APPLICATION_RECOMMENDATIONS: Mapping[ApplicationType, Mapping[str, Tuple[float, float]]] = MappingProxyType({
    ApplicationType.GAS_ABSORPTION: MappingProxyType({
        "lg_ratio_L_per_m3": (3.0, 20.0),
        "gas_velocity": (0.3, 1.2),
        "droplet_size": (0.5, 1.0),
    }),
    ApplicationType.PARTICULATE_REMOVAL: MappingProxyType({
        "lg_ratio_L_per_m3": (0.1, 1.0),
        "gas_velocity": (0.5, 2.0),
        "droplet_size": (0.3, 0.8),
    }),
    ApplicationType.COOLING: MappingProxyType({
        "lg_ratio_L_per_m3": (0.1, 0.5),
        "gas_velocity": (1.0, 2.3),
        "droplet_size": (0.5, 2.0),
    }),
    ApplicationType.ODOR_CONTROL: MappingProxyType({
        "lg_ratio_L_per_m3": (0.1, 0.5),
        "gas_velocity": (0.5, 1.5),
        "droplet_size": (0.5, 1.0),
    }),
})
