# spraytower/scrubber/screening.py
"""Range warnings for design inputs and sanity checks for results"""
from __future__ import annotations

from typing import List

from spraytower.core.constants import (
    VALIDATION_RANGES, APPLICATION_RECOMMENDATIONS, ENTRAINMENT_VELOCITY,
)
from spraytower.core.conversions import m3_to_L
from .specs import ScrubberInput

# Metric bounds for result sanity checks
MAX_TOWER_DIAMETER = 50.0     # m
MAX_TOWER_HEIGHT = 100.0      # m
MAX_PRESSURE_DROP = 10000.0   # Pa


def _outside(value: float, bounds) -> bool:
    lo, hi = bounds
    return value < lo or value > hi


def range_warnings(inp: ScrubberInput) -> List[str]:
    """
    Warnings for inputs that are valid but outside the usual design range.

    Covers the general ranges, droplet entrainment and the recommended
    ranges of the selected application.
    """
    values = {
        "gas_flow_rate": (inp.gas_stream.gas_flow_rate, "Nm³/h"),
        "temperature": (inp.gas_stream.temperature, "°C"),
        "pressure": (inp.gas_stream.pressure, "kPa"),
        "target_efficiency": (inp.pollutant.target_efficiency, ""),
        "lg_ratio": (inp.tower.lg_ratio, "m³/m³"),
        "gas_velocity": (inp.tower.gas_velocity, "m/s"),
        "droplet_size": (inp.tower.droplet_size, "mm"),
    }
    out = []
    for name, (value, unit) in values.items():
        bounds = VALIDATION_RANGES[name]
        if _outside(value, bounds):
            suffix = f" {unit}" if unit else ""
            out.append(f"{name} {value:g}{suffix} outside typical range "
                       f"{bounds[0]:g}-{bounds[1]:g}{suffix}")

    if inp.tower.gas_velocity > ENTRAINMENT_VELOCITY:
        out.append(f"gas_velocity above {ENTRAINMENT_VELOCITY:g} m/s may cause "
                   f"droplet entrainment")

    app = inp.settings.application_type
    rec = APPLICATION_RECOMMENDATIONS[app]
    lg_L = m3_to_L(inp.tower.lg_ratio)
    if _outside(lg_L, rec["lg_ratio_L_per_m3"]):
        lo, hi = rec["lg_ratio_L_per_m3"]
        out.append(f"L/G {lg_L:g} L/m³ outside {app} recommendation {lo:g}-{hi:g} L/m³")
    if _outside(inp.tower.gas_velocity, rec["gas_velocity"]):
        lo, hi = rec["gas_velocity"]
        out.append(f"gas_velocity {inp.tower.gas_velocity:g} m/s outside {app} "
                   f"recommendation {lo:g}-{hi:g} m/s")
    if _outside(inp.tower.droplet_size, rec["droplet_size"]):
        lo, hi = rec["droplet_size"]
        out.append(f"droplet_size {inp.tower.droplet_size:g} mm outside {app} "
                   f"recommendation {lo:g}-{hi:g} mm")
    return out


def check_results(
    tower_diameter: float,
    required_height: float,
    overall_kga: float,
    pressure_drop: float,
    reynolds_number: float,
    schmidt_number: float,
) -> List[str]:
    """Physical reasonableness of a metric design (m, 1/s, Pa)"""
    out = []
    if tower_diameter <= 0 or tower_diameter > MAX_TOWER_DIAMETER:
        out.append(f"tower diameter {tower_diameter:.3g} m outside 0-{MAX_TOWER_DIAMETER:g} m")
    if required_height <= 0 or required_height > MAX_TOWER_HEIGHT:
        out.append(f"required height {required_height:.3g} m outside 0-{MAX_TOWER_HEIGHT:g} m")
    if overall_kga <= 0:
        out.append("overall KGa is not positive")
    if pressure_drop < 0 or pressure_drop > MAX_PRESSURE_DROP:
        out.append(f"pressure drop {pressure_drop:.3g} Pa outside 0-{MAX_PRESSURE_DROP:g} Pa")
    if reynolds_number <= 0:
        out.append("Reynolds number is not positive")
    if schmidt_number <= 0:
        out.append("Schmidt number is not positive")
    return out
