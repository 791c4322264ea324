# spraytower/scrubber/mass_transfer.py
"""Mass transfer coefficients for a droplet spray"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import math

from spraytower.core.base import SpecificationBase
from spraytower.core.constants import (
    DEFAULT_LIBRARY, PropertyLibrary,
    KGA_COEFFICIENT, KGA_GAS_EXPONENT, KGA_LIQUID_EXPONENT, KGA_MOLAR_MASS_DIVISOR,
)
from spraytower.core.conversions import mm_to_m, m3_to_L
from spraytower.core.numerical import Guarded, guarded_divide
from spraytower.core.validation import check_positive, InputError
from .specs import PollutantSpec, TowerDesignSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MassTransferState(SpecificationBase):
    """
    Dimensionless groups and coefficients for one evaluation.

    Key variables:
    - Re = rho·v·d/mu, Sc = mu/(rho·D), Sh = 2 + 0.6 Re^0.5 Sc^(1/3)
    - k_g = Sh·D/d (gas film coefficient)
    - a = 6·flux/(v_rel·d) (interfacial area per tower volume)
    - KGa (overall volumetric coefficient)
    """
    droplet_diameter: float         # m
    relative_velocity: float        # m/s
    reynolds_number: float
    schmidt_number: float
    sherwood_number: float
    gas_film_coefficient: float     # m/s
    interfacial_area: Guarded       # 1/m
    overall_kga: Guarded            # 1/s
    kga_from_override: bool = False


def reynolds_number(rho: float, v: float, d: float, mu: float) -> float:
    """Re = rho·v·d / mu"""
    check_positive("mu", mu)
    return rho * v * d / mu


def schmidt_number(mu: float, rho: float, D: float) -> float:
    """Sc = mu / (rho·D)"""
    check_positive("rho", rho)
    check_positive("D", D)
    return mu / (rho * D)


def sherwood_number(Re: float, Sc: float) -> float:
    """
    Frössling-type correlation for a sphere:
      Sh = 2 + 0.6 Re^0.5 Sc^(1/3)
    Re = 0 leaves the pure-diffusion limit Sh = 2.
    """
    if Re < 0 or Sc < 0:
        raise InputError(f"Re and Sc must be >= 0, got Re={Re}, Sc={Sc}")
    return 2.0 + 0.6 * math.sqrt(Re) * Sc ** (1.0 / 3.0)


def interfacial_area(liquid_flux: float, v_rel: float, d: float) -> Guarded:
    """a = 6·flux / (v_rel·d); undefined when the droplets do not move relative to the gas"""
    return guarded_divide(
        6.0 * liquid_flux,
        v_rel * d if v_rel > 0 else 0.0,
        "relative velocity is zero, no interfacial area",
    )


def kga_correlation(gas_density: float, gas_velocity: float, liquid_flux: float) -> Guarded:
    """
    Empirical overall coefficient for gas absorption in spray towers.

      KGa = 0.1586 · G_m^0.8 · L^0.4      [1/s]

      G_m = rho_g · v_g / 29   approximate molar gas flux, kmol/(s·m²)
      L   = flux · 1000        liquid flux, L/(s·m²)

    The correlation is dimensional; the constants are kept as published.
    """
    if liquid_flux <= 0:
        return Guarded.undefined("no liquid flux, KGa correlation undefined")

    G_m = gas_density * gas_velocity / KGA_MOLAR_MASS_DIVISOR
    L_flux = m3_to_L(liquid_flux)
    return Guarded.computed(
        KGA_COEFFICIENT * G_m ** KGA_GAS_EXPONENT * L_flux ** KGA_LIQUID_EXPONENT
    )


def calculate_mass_transfer(
    pollutant: PollutantSpec,
    tower: TowerDesignSpec,
    gas_density: float,
    gas_viscosity: float,
    gas_velocity: float,
    liquid_flux: float,
    library: PropertyLibrary = DEFAULT_LIBRARY,
) -> MassTransferState:
    """
    Mass transfer between the gas and the falling droplets.

    Counter-current flow: the gas velocity is taken as the droplet-gas slip
    velocity for the film correlation and interfacial area.

    A KGa override is used verbatim when given (including 0.0).
    """
    data = library.pollutant(pollutant.type)
    D = data.diffusivity

    d = mm_to_m(tower.droplet_size)
    v_rel = float(gas_velocity)

    Re = reynolds_number(gas_density, v_rel, d, gas_viscosity)
    Sc = schmidt_number(gas_viscosity, gas_density, D)
    Sh = sherwood_number(Re, Sc)
    k_g = Sh * D / d

    a = interfacial_area(liquid_flux, v_rel, d)

    if tower.kga_override is not None:
        kga = Guarded.computed(tower.kga_override)
        from_override = True
    else:
        kga = kga_correlation(gas_density, gas_velocity, liquid_flux)
        from_override = False

    logger.debug("mass transfer: Re=%.1f Sc=%.3f Sh=%.2f kg=%.4g KGa=%.4g%s",
                 Re, Sc, Sh, k_g, kga.value, " (override)" if from_override else "")
    return MassTransferState(
        droplet_diameter=d,
        relative_velocity=v_rel,
        reynolds_number=Re,
        schmidt_number=Sc,
        sherwood_number=Sh,
        gas_film_coefficient=k_g,
        interfacial_area=a,
        overall_kga=kga,
        kga_from_override=from_override,
    )
