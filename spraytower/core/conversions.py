# spraytower/core/conversions.py
"""Unit conversion utilities for spray tower calculations"""

from typing import Union, Dict

from .enums import UnitSystem
from .validation import check_positive


# ============================================================================
# Temperature and Pressure Conversions
# ============================================================================

def C_to_K(T_C: Union[float, int]) -> float:
    """Convert Celsius to Kelvin"""
    return float(T_C) + 273.15

def kPa_to_Pa(P_kPa: Union[float, int]) -> float:
    """Convert kPa to Pa"""
    return float(P_kPa) * 1000.0

# ============================================================================
# Length and Flow Conversions
# ============================================================================

def mm_to_m(L_mm: Union[float, int]) -> float:
    """Convert millimetres to metres"""
    return float(L_mm) / 1000.0

def m3_to_L(V_m3: Union[float, int]) -> float:
    """Convert cubic metres to litres"""
    return float(V_m3) * 1000.0

def per_hour_to_per_second(rate_h: Union[float, int]) -> float:
    """Convert a rate per hour (e.g. Nm³/h) to per second"""
    return float(rate_h) / 3600.0

def per_second_to_per_hour(rate_s: Union[float, int]) -> float:
    """Convert a rate per second (e.g. m³/s) to per hour"""
    return float(rate_s) * 3600.0


# ============================================================================
# Concentration Conversions (ideal gas at 0 °C, 1 atm: 22.4 L/mol)
# ============================================================================

MOLAR_VOLUME_STP = 22.4  # L/mol

def mg_Nm3_to_ppmv(c_mg_Nm3: float, MW: float) -> float:
    """
    Convert mg/Nm³ to ppmv.

    Args:
        c_mg_Nm3: Concentration (mg/Nm³)
        MW: Molar mass (g/mol)
    """
    check_positive("MW", MW)
    return float(c_mg_Nm3) * MOLAR_VOLUME_STP / MW

def ppmv_to_mg_Nm3(c_ppmv: float, MW: float) -> float:
    """Convert ppmv to mg/Nm³ (MW in g/mol)"""
    check_positive("MW", MW)
    return float(c_ppmv) * MW / MOLAR_VOLUME_STP


# ============================================================================
# Metric -> Imperial projection factors
# ============================================================================

PA_TO_INH2O = 0.00401463

# Multiply a metric value by the factor to get the imperial value.
IMPERIAL_FACTORS: Dict[str, float] = {
    "length": 3.28084,               # m -> ft
    "area": 10.7639,                 # m² -> ft²
    "pressure": PA_TO_INH2O,         # Pa -> in H₂O
    "density": 0.062428,             # kg/m³ -> lb/ft³
    "velocity": 3.28084,             # m/s -> ft/s
    "gas_flow": 35.3147 * 60.0,      # m³/s -> ACFM
    "liquid_rate": 4.40287,          # m³/h -> US gpm
    "liquid_flow": 4.40287 * 3600.0, # m³/s -> US gpm
}

METRIC_UNITS: Dict[str, str] = {
    "length": "m",
    "area": "m²",
    "pressure": "Pa",
    "density": "kg/m³",
    "velocity": "m/s",
    "gas_flow": "m³/s",
    "liquid_rate": "m³/h",
    "liquid_flow": "m³/s",
}

IMPERIAL_UNITS: Dict[str, str] = {
    "length": "ft",
    "area": "ft²",
    "pressure": "in H₂O",
    "density": "lb/ft³",
    "velocity": "ft/s",
    "gas_flow": "ACFM",
    "liquid_rate": "gpm",
    "liquid_flow": "gpm",
}


def convert_quantity(
    value: float,
    quantity: str,
    source: UnitSystem,
    target: UnitSystem,
) -> float:
    """
    Project a value of the given quantity kind between unit systems.

    Args:
        value: Value expressed in the source system
        quantity: Key of IMPERIAL_FACTORS ("length", "pressure", ...)
        source, target: UnitSystem members
    """
    factor = IMPERIAL_FACTORS[quantity]
    if source is target:
        return float(value)
    if target is UnitSystem.IMPERIAL:
        return float(value) * factor
    return float(value) / factor


def unit_label(quantity: str, system: UnitSystem) -> str:
    """Unit string for a quantity kind in the given system"""
    table = IMPERIAL_UNITS if system is UnitSystem.IMPERIAL else METRIC_UNITS
    return table[quantity]
