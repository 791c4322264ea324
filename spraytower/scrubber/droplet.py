# spraytower/scrubber/droplet.py
"""Droplet terminal velocity and contact time in a counter-current spray"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import logging
import math

from scipy.optimize import brentq

from spraytower.core.base import SolverBase, SpecificationBase
from spraytower.core.constants import GRAVITY, ASSUMED_SPRAY_HEIGHT
from spraytower.core.conversions import mm_to_m
from spraytower.core.numerical import fixed_point
from spraytower.core.validation import (
    check_positive, check_non_negative, InputError, ConvergenceError,
)

logger = logging.getLogger(__name__)

SCHILLER_NAUMANN_RE_MAX = 1000.0
NEWTON_DRAG = 0.44


@dataclass(frozen=True)
class DropletSpec(SpecificationBase):
    """
    Single droplet falling against a rising gas.

    Terminal velocity from the force balance
      v_t = sqrt(4·g·d·(rho_L - rho_G) / (3·Cd·rho_G))
    with Schiller-Naumann drag
      Cd = 24/Re·(1 + 0.15 Re^0.687)  for Re <= 1000
      Cd = 0.44                       for Re > 1000
    solved by fixed-point iteration from v_t = 1 m/s.
    """
    droplet_size: float                 # mm
    gas_velocity: float                 # m/s
    gas_density: float                  # kg/m³
    gas_viscosity: float                # Pa·s
    liquid_density: float               # kg/m³
    spray_height: float = ASSUMED_SPRAY_HEIGHT  # m

    # Numerical
    v0: float = 1.0                     # m/s, initial guess
    tol: float = 1e-3                   # m/s
    maxiter: int = 10


@dataclass(frozen=True)
class DropletState(SpecificationBase):
    terminal_velocity: float        # m/s
    relative_velocity: float        # m/s, max(0, v_t - v_gas)
    contact_time: float             # s, 0 when droplets are carried up
    reynolds_number: float          # at terminal velocity
    iterations: int
    converged: bool
    exact_terminal_velocity: Optional[float] = None  # m/s, only when not converged


def drag_coefficient(Re: float) -> float:
    """Schiller-Naumann drag with a Newton-regime cutoff above Re = 1000"""
    check_positive("Re", Re)
    if Re > SCHILLER_NAUMANN_RE_MAX:
        return NEWTON_DRAG
    return 24.0 / Re * (1.0 + 0.15 * Re ** 0.687)


class DropletPhysicsSolver(SolverBase):
    """Bounded fixed-point solver for droplet terminal velocity"""

    def __init__(self, spec: DropletSpec):
        self.spec = spec
        self.validate()
        self.d = mm_to_m(spec.droplet_size)

    def validate(self) -> None:
        check_positive("droplet_size", self.spec.droplet_size)
        check_positive("gas_density", self.spec.gas_density)
        check_positive("gas_viscosity", self.spec.gas_viscosity)
        check_non_negative("gas_velocity", self.spec.gas_velocity)
        check_non_negative("spray_height", self.spec.spray_height)
        if self.spec.liquid_density <= self.spec.gas_density:
            raise InputError(
                f"liquid_density must exceed gas_density, got "
                f"{self.spec.liquid_density} <= {self.spec.gas_density}"
            )

    def reynolds(self, v: float) -> float:
        s = self.spec
        return s.gas_density * v * self.d / s.gas_viscosity

    def velocity_update(self, v: float) -> float:
        """One force-balance update v -> v_t(Cd(Re(v)))"""
        s = self.spec
        Cd = drag_coefficient(self.reynolds(v))
        return math.sqrt(
            4.0 * GRAVITY * self.d * (s.liquid_density - s.gas_density)
            / (3.0 * Cd * s.gas_density)
        )

    def exact_terminal_velocity(self) -> Optional[float]:
        """
        Root of v - v_t(v) = 0 by Brent's method.

        Returns None when the residual does not change sign on the bracket.
        Raises ConvergenceError if Brent's method itself fails.
        """
        def residual(v: float) -> float:
            return v - self.velocity_update(v)

        lo, hi = 1e-9, 1e3
        if residual(lo) * residual(hi) > 0:
            return None
        try:
            return brentq(residual, lo, hi, xtol=1e-12)
        except RuntimeError as exc:
            raise ConvergenceError(f"terminal velocity root not found: {exc}") from exc

    def solve(self) -> DropletState:
        s = self.spec
        fp = fixed_point(self.velocity_update, s.v0, tol=s.tol, maxiter=s.maxiter)
        v_t = fp.value

        exact = None
        if not fp.converged:
            exact = self.exact_terminal_velocity()
            logger.warning(
                "droplet terminal velocity not converged after %d iterations "
                "(last step %.3g m/s); force-balance root is %s m/s",
                fp.iterations, fp.last_step,
                "unavailable" if exact is None else f"{exact:.4f}",
            )

        v_rel = max(0.0, v_t - s.gas_velocity)
        t_contact = s.spray_height / v_rel if v_rel > 0 else 0.0

        return DropletState(
            terminal_velocity=v_t,
            relative_velocity=v_rel,
            contact_time=t_contact,
            reynolds_number=self.reynolds(v_t),
            iterations=fp.iterations,
            converged=fp.converged,
            exact_terminal_velocity=exact,
        )


def calculate_droplet_physics(
    droplet_size: float,
    gas_velocity: float,
    gas_density: float,
    gas_viscosity: float,
    liquid_density: float,
    spray_height: float = ASSUMED_SPRAY_HEIGHT,
) -> DropletState:
    """Convenience wrapper around DropletPhysicsSolver"""
    spec = DropletSpec(
        droplet_size=droplet_size,
        gas_velocity=gas_velocity,
        gas_density=gas_density,
        gas_viscosity=gas_viscosity,
        liquid_density=liquid_density,
        spray_height=spray_height,
    )
    return DropletPhysicsSolver(spec).solve()
