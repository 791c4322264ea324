# spraytower/scrubber/gas_properties.py
"""Gas-phase properties at operating conditions"""
from __future__ import annotations

from dataclasses import dataclass
import logging

from spraytower.core.base import SpecificationBase
from spraytower.core.constants import MU_GAS_DEFAULT
from spraytower.core.conversions import C_to_K, kPa_to_Pa, per_hour_to_per_second
from spraytower.core.properties import ideal_gas_density, actual_flow_from_normal
from .specs import GasStreamSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GasProperties(SpecificationBase):
    operating_temperature: float    # K
    operating_pressure: float       # Pa
    gas_density: float              # kg/m³
    operating_gas_flow: float       # m³/s, actual
    gas_viscosity: float            # Pa·s, effective


def calculate_gas_properties(gas_stream: GasStreamSpec) -> GasProperties:
    """
    Convert the normal-condition gas stream to operating conditions.

      T = T_C + 273.15
      P = P_kPa · 1000
      rho = P·M_air / (R·T)
      Q_op = Q_n · (T / 273.15) · (101325 / P)

    The viscosity override is used only when present; otherwise air at
    ~40 °C is assumed.
    """
    T = C_to_K(gas_stream.temperature)
    P = kPa_to_Pa(gas_stream.pressure)

    rho = ideal_gas_density(P, T)
    Q_normal = per_hour_to_per_second(gas_stream.gas_flow_rate)
    Q_op = actual_flow_from_normal(Q_normal, T, P)

    if gas_stream.gas_viscosity is not None:
        mu = float(gas_stream.gas_viscosity)
    else:
        mu = MU_GAS_DEFAULT

    logger.debug("gas properties: T=%.2f K, P=%.0f Pa, rho=%.4f kg/m3, Q=%.4f m3/s",
                 T, P, rho, Q_op)
    return GasProperties(
        operating_temperature=T,
        operating_pressure=P,
        gas_density=rho,
        operating_gas_flow=Q_op,
        gas_viscosity=mu,
    )
