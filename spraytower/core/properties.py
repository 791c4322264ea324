# spraytower/core/properties.py
"""Physical property calculations for the gas phase"""

from typing import Union

from .constants import R_GAS, M_AIR, T_STANDARD, P_STANDARD
from .validation import check_positive


def ideal_gas_density(
    P_Pa: Union[float, int],
    T_K: Union[float, int],
    MW: float = M_AIR,
) -> float:
    """
    Density of an ideal gas (kg/m³): rho = P·M / (R·T)

    Args:
        P_Pa: Absolute pressure (Pa)
        T_K: Temperature (K)
        MW: Molecular weight (kg/mol), air by default
    """
    check_positive("MW", MW)
    return float(P_Pa) * MW / (R_GAS * float(T_K))


def actual_flow_from_normal(
    Q_normal: float,
    T_K: float,
    P_Pa: float,
) -> float:
    """
    Convert a normal volumetric flow (0 °C, 101.325 kPa) to operating conditions.

    Q_op = Q_n · (T / T_std) · (P_std / P)
    Units of the result follow Q_normal (Nm³/s -> m³/s).
    """
    return float(Q_normal) * (float(T_K) / T_STANDARD) * (P_STANDARD / float(P_Pa))


def molar_flow_kmol(Q_m3_s: float, T_K: float, P_Pa: float) -> float:
    """
    Molar flow (kmol/s) of an ideal gas at operating conditions.

    n = P·Q / (R·T), with R in J/(kmol·K)
    """
    return float(P_Pa) * float(Q_m3_s) / (R_GAS * 1000.0 * float(T_K))
