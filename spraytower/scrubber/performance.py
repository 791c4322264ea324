# spraytower/scrubber/performance.py
"""Spray tower performance: height, pressure drop and mass balance"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Dict, Any
import logging
import math

from spraytower.core.base import SpecificationBase
from spraytower.core.constants import DEFAULT_LIBRARY, PropertyLibrary
from spraytower.core.numerical import Guarded, guarded_divide
from spraytower.core.properties import molar_flow_kmol
from .specs import PollutantSpec, TowerDesignSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PerformanceSpec(SpecificationBase):
    """
    Everything the performance stage needs from the earlier stages.

    Height (NTU method, gas-phase control):
      NTU = ln(C_in / C_out)
      V   = G_m · NTU / KGa       spray-zone volume
      H   = V / A
    """
    pollutant: PollutantSpec
    tower: TowerDesignSpec
    gas_flow_rate: float        # Nm³/h
    gas_velocity: float         # m/s
    tower_diameter: float       # m
    tower_area: float           # m²
    gas_density: float          # kg/m³
    liquid_rate: float          # m³/h
    overall_kga: float          # 1/s
    operating_gas_flow: float   # m³/s
    operating_temperature: float  # K
    operating_pressure: float   # Pa


@dataclass(frozen=True)
class PerformanceResult(SpecificationBase):
    outlet_concentration: float         # mg/Nm³
    number_of_transfer_units: Guarded   # NTU
    molar_gas_flow: float               # kmol/s
    spray_zone_volume: Guarded          # m³
    required_height: Guarded            # m
    gas_residence_time: Guarded         # s
    pressure_drop: float                # Pa
    moles_removed: float                # mol/h
    reagent_consumption: float          # mol/h
    nozzle_flow_per_nozzle: Optional[float] = None  # m³/h
    required_nozzles: Optional[int] = None


def outlet_concentration(C_in: float, efficiency: float) -> float:
    """C_out = C_in·(1 - eta), the removal target applied directly"""
    return C_in * (1.0 - efficiency)


def number_of_transfer_units(C_in: float, C_out: float) -> Guarded:
    """NTU = ln(C_in/C_out); undefined for complete removal"""
    if C_out > 0:
        return Guarded.computed(math.log(C_in / C_out))
    return Guarded.undefined("outlet concentration is zero, NTU undefined")


def spray_zone_volume(G_m: float, NTU: Guarded, KGa: float) -> Guarded:
    """V = G_m·NTU/KGa"""
    if NTU.degenerate:
        return Guarded.undefined(NTU.reason)
    if NTU.value <= 0:
        return Guarded.undefined("no transfer units required")
    return guarded_divide(G_m * NTU.value, KGa, "KGa is zero, spray volume undefined")


def darcy_pressure_drop(
    friction_factor: float,
    height: float,
    diameter: float,
    rho_gas: float,
    v_gas: float,
) -> float:
    """dP = f · (H/D) · (rho·v²/2)"""
    if diameter <= 0:
        return 0.0
    return friction_factor * (height / diameter) * (rho_gas * v_gas ** 2 / 2.0)


def moles_removed(Q_normal_h: float, delta_C: float, MW: float) -> float:
    """
    Pollutant removed (mol/h).

    Q [Nm³/h] · dC [mg/Nm³] = mg/h; / 1000 -> g/h; / MW [g/mol] -> mol/h
    """
    return Q_normal_h * delta_C / 1000.0 / MW


def nozzle_sizing(
    nozzle_type: Optional[str],
    nozzle_pressure: float,
    liquid_rate: float,
    library: PropertyLibrary = DEFAULT_LIBRARY,
) -> Dict[str, Any]:
    """
    Per-nozzle flow q = k·sqrt(dP_bar) and the number needed for the liquid rate.

    Returns empty values when no nozzle is selected.
    """
    if nozzle_type is None:
        return {"nozzle_flow_per_nozzle": None, "required_nozzles": None}

    nozzle = library.nozzle(nozzle_type)
    q = nozzle.k * math.sqrt(nozzle_pressure)
    n = math.ceil(liquid_rate / q) if q > 0 else None
    return {"nozzle_flow_per_nozzle": q, "required_nozzles": n}


class PerformanceSolver:
    """Solver for tower height, pressure drop and reagent demand"""

    def __init__(self, spec: PerformanceSpec, library: PropertyLibrary = DEFAULT_LIBRARY):
        self.spec = spec
        self.library = library

    def solve(self) -> PerformanceResult:
        s = self.spec
        data = self.library.pollutant(s.pollutant.type)

        C_in = s.pollutant.inlet_concentration
        C_out = outlet_concentration(C_in, s.pollutant.target_efficiency)
        NTU = number_of_transfer_units(C_in, C_out)

        G_m = molar_flow_kmol(s.operating_gas_flow, s.operating_temperature,
                              s.operating_pressure)
        V = spray_zone_volume(G_m, NTU, s.overall_kga)

        if V.degenerate:
            H = Guarded.undefined(f"required height is zero: {V.reason}")
        else:
            H = guarded_divide(V.value, s.tower_area,
                               "required height is zero: tower area is zero")
        if H.degenerate:
            logger.warning("%s", H.reason)

        t_res = guarded_divide(H.value, s.gas_velocity,
                               "gas velocity is zero, residence time undefined")

        dP = darcy_pressure_drop(s.tower.friction_factor, H.value, s.tower_diameter,
                                 s.gas_density, s.gas_velocity)

        removed = moles_removed(s.gas_flow_rate, C_in - C_out, data.molar_mass)
        reagent = removed * s.tower.reagent_stoichiometry

        nozzles = nozzle_sizing(s.tower.nozzle_type, s.tower.nozzle_pressure,
                                s.liquid_rate, self.library)

        logger.debug("performance: NTU=%.3f H=%.3f m dP=%.1f Pa removed=%.1f mol/h",
                     NTU.value, H.value, dP, removed)
        return PerformanceResult(
            outlet_concentration=C_out,
            number_of_transfer_units=NTU,
            molar_gas_flow=G_m,
            spray_zone_volume=V,
            required_height=H,
            gas_residence_time=t_res,
            pressure_drop=dP,
            moles_removed=removed,
            reagent_consumption=reagent,
            **nozzles,
        )
