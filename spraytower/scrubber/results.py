# spraytower/scrubber/results.py
"""Calculation result record and its projection between unit systems"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple, Dict

from spraytower.core.base import SpecificationBase
from spraytower.core.conversions import convert_quantity, unit_label
from spraytower.core.enums import UnitSystem
from .compliance import ComplianceResult
from .particulate import ParticulateEfficiency


@dataclass(frozen=True)
class CalculationResult(SpecificationBase):
    """
    All derived quantities of one evaluation.

    Dimensional fields listed in QUANTITY_KINDS are expressed in
    `unit_system`; concentrations (mg/Nm³), times (s), molar rates (mol/h),
    coefficients in 1/s and dimensionless groups are the same in both systems.
    """
    unit_system: UnitSystem

    # Primary
    tower_diameter: float
    required_height: float
    gas_residence_time: float           # s
    pressure_drop: float
    outlet_concentration: float         # mg/Nm³
    outlet_concentration_ppmv: float

    # Secondary
    overall_kga: float                  # 1/s
    interfacial_area: float             # 1/m
    gas_density: float
    liquid_rate: float
    reagent_consumption: float          # mol/h

    # Additional
    operating_gas_flow: float
    tower_area: float
    liquid_flow_rate: float
    moles_removed: float                # mol/h

    # Mass transfer and droplets
    number_of_transfer_units: float
    gas_film_coefficient: float
    reynolds_number: float
    schmidt_number: float
    sherwood_number: float
    droplet_terminal_velocity: float
    relative_velocity: float
    droplet_contact_time: float         # s
    droplet_iterations: int
    droplet_converged: bool

    nozzle_flow_per_nozzle: Optional[float] = None
    required_nozzles: Optional[int] = None
    particulate_efficiency: Optional[ParticulateEfficiency] = None
    compliance: Optional[ComplianceResult] = None
    warnings: Tuple[str, ...] = ()

    @property
    def emission_limits_met(self) -> bool:
        return self.compliance is not None and self.compliance.emission_limits_met

    def units(self) -> Dict[str, str]:
        """Unit label of every projected field in this result's system"""
        return {name: unit_label(kind, self.unit_system)
                for name, kind in QUANTITY_KINDS.items()}


QUANTITY_KINDS: Dict[str, str] = {
    "tower_diameter": "length",
    "required_height": "length",
    "tower_area": "area",
    "pressure_drop": "pressure",
    "gas_density": "density",
    "droplet_terminal_velocity": "velocity",
    "relative_velocity": "velocity",
    "gas_film_coefficient": "velocity",
    "operating_gas_flow": "gas_flow",
    "liquid_rate": "liquid_rate",
    "nozzle_flow_per_nozzle": "liquid_rate",
    "liquid_flow_rate": "liquid_flow",
}


def convert_result(result: CalculationResult, target) -> CalculationResult:
    """
    Project every dimensional field of a result into the target unit system.

    Converting metric -> imperial -> metric recovers the original values to
    floating-point precision.
    """
    target = UnitSystem.coerce(target)
    if result.unit_system is target:
        return result

    changes = {}
    for name, kind in QUANTITY_KINDS.items():
        value = getattr(result, name)
        if value is not None:
            changes[name] = convert_quantity(value, kind, result.unit_system, target)
    return replace(result, unit_system=target, **changes)
