# spraytower/scrubber/particulate.py
"""Size-banded particulate collection efficiency of a spray tower"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from spraytower.core.base import SpecificationBase

# Collection intensity: N_t = min(cap, P·t·scale / d_mm)
#   P = liquid flux · relative velocity (contacting power proxy)
#   t = spray height / max(gas velocity, 0.1)
# Efficiency: eta = min(ceiling, 1 - exp(-N_t))
#
#                    coarse >10 um, medium ~2 um, fine <1 um
_SCALE = np.array([50.0, 10.0, 2.0])
_NT_CAP = np.array([10.0, 5.0, 2.0])
_CEILING = np.array([0.99, 0.80, 0.20])

MIN_RESIDENCE_VELOCITY = 0.1  # m/s


@dataclass(frozen=True)
class ParticulateEfficiency(SpecificationBase):
    coarse_10um: float
    medium_2um: float
    fine_1um: float


def calculate_particulate_efficiency(
    droplet_size: float,
    gas_velocity: float,
    liquid_flux: float,
    spray_height: float,
    relative_velocity: float,
) -> ParticulateEfficiency:
    """
    Empirical inertial-impaction efficiency for three particle classes.

    Args:
        droplet_size: Sauter mean droplet diameter (mm)
        gas_velocity: Superficial gas velocity (m/s)
        liquid_flux: Liquid superficial velocity (m/s)
        spray_height: Height of the spray zone (m)
        relative_velocity: Droplet-gas relative velocity (m/s)

    Ceilings of 0.99 / 0.80 / 0.20 reflect what impaction on spray
    droplets can capture for each size class.
    """
    contacting_power = liquid_flux * relative_velocity
    residence_time = spray_height / max(gas_velocity, MIN_RESIDENCE_VELOCITY)

    n_t = np.minimum(_NT_CAP, contacting_power * residence_time * _SCALE / droplet_size)
    eta = np.minimum(_CEILING, 1.0 - np.exp(-n_t))

    coarse, medium, fine = (float(v) for v in eta)
    return ParticulateEfficiency(coarse_10um=coarse, medium_2um=medium, fine_1um=fine)
