# spraytower/scrubber/compliance.py
"""Regulatory compliance of the treated gas and vessel code selection"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from spraytower.core.base import SpecificationBase
from spraytower.core.constants import DEFAULT_LIBRARY, PropertyLibrary
from spraytower.core.enums import PollutantType, RegulatoryFramework


@dataclass(frozen=True)
class ComplianceResult(SpecificationBase):
    framework: RegulatoryFramework
    emission_limits_met: bool
    pressure_vessel_code: str
    emission_limit: Optional[float] = None      # mg/Nm³, None if the framework sets none
    safety_classification: Optional[str] = None


def pressure_vessel_code(
    framework: RegulatoryFramework,
    operating_pressure: float,
    library: PropertyLibrary = DEFAULT_LIBRARY,
) -> str:
    """Vessel code by absolute operating pressure (Pa) against the framework threshold"""
    data = library.framework(framework)
    if operating_pressure > data.pressure_vessel_threshold:
        return data.pressure_vessel_code
    return data.atmospheric_code


def evaluate_compliance(
    framework: RegulatoryFramework,
    outlet_concentration: float,
    operating_pressure: float,
    pollutant_type: PollutantType,
    library: PropertyLibrary = DEFAULT_LIBRARY,
) -> ComplianceResult:
    """
    Compare the outlet concentration (mg/Nm³) with the framework's limit.

    A pollutant without a tabulated limit is treated as compliant; the
    vessel code check is independent of the emission check.
    """
    framework = RegulatoryFramework.coerce(framework)
    limit = library.emission_limit(framework, pollutant_type)
    met = limit is None or outlet_concentration <= limit

    return ComplianceResult(
        framework=framework,
        emission_limits_met=met,
        pressure_vessel_code=pressure_vessel_code(framework, operating_pressure, library),
        emission_limit=limit,
        safety_classification=library.framework(framework).safety_classification,
    )
