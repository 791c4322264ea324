# spraytower/scrubber/tower_sizing.py
"""Tower cross-section, diameter and liquid loading"""
from __future__ import annotations

from dataclasses import dataclass
import math

from spraytower.core.base import SpecificationBase
from spraytower.core.conversions import per_second_to_per_hour
from spraytower.core.validation import check_positive, check_non_negative


@dataclass(frozen=True)
class TowerSizing(SpecificationBase):
    tower_area: float           # m²
    tower_diameter: float       # m
    liquid_flow_rate: float     # m³/s
    liquid_rate: float          # m³/h
    liquid_flux: float          # m/s (m³ liquid per m² per s)


def cross_sectional_area(Q_gas: float, v_gas: float) -> float:
    """A = Q / v. A zero velocity has no tower and is rejected."""
    check_non_negative("operating_gas_flow", Q_gas)
    check_positive("gas_velocity", v_gas)
    return Q_gas / v_gas


def diameter_from_cross_sectional_area(A_cs: float) -> float:
    check_non_negative("tower_area", A_cs)
    return math.sqrt((4.0 * A_cs) / math.pi)


def calculate_tower_sizing(
    operating_gas_flow: float,
    gas_velocity: float,
    lg_ratio: float,
) -> TowerSizing:
    """
    Size the tower from the actual gas flow and design velocity.

      A = Q_op / v_g,  D = sqrt(4A/pi)
      Q_L = (L/G) · Q_op,  flux = Q_L / A

    Args:
        operating_gas_flow: Actual gas flow (m³/s)
        gas_velocity: Superficial gas velocity (m/s), must be > 0
        lg_ratio: Liquid-to-gas volumetric ratio (m³/m³)
    """
    A = cross_sectional_area(operating_gas_flow, gas_velocity)
    D = diameter_from_cross_sectional_area(A)

    Q_L = float(lg_ratio) * operating_gas_flow
    flux = Q_L / A if A > 0 else 0.0

    return TowerSizing(
        tower_area=A,
        tower_diameter=D,
        liquid_flow_rate=Q_L,
        liquid_rate=per_second_to_per_hour(Q_L),
        liquid_flux=flux,
    )
