# spraytower/scrubber/optimizer.py
"""
Compliance optimizer for spray tower designs.

Re-runs the design pipeline under a three-phase heuristic until the outlet
concentration meets the framework's emission limit or the iteration budget
is spent:

  phase 1  L/G ratio scaled up by (1 + step·i), removal efficiency pinned
           to the value needed for the target outlet
  phase 2  gas velocity scaled down, floor at min_scale
  phase 3  droplet size scaled down, floor at min_scale

Non-convergence is never an error: the best design seen is returned with
convergence_reached=False.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple
import logging

from spraytower.core.base import SpecificationBase
from spraytower.core.constants import DEFAULT_LIBRARY, PropertyLibrary
from spraytower.core.enums import OptimizationStatus
from spraytower.core.validation import (
    check_positive, check_non_negative, check_non_negative_int, InputError,
)
from .calculator import calculate_spray_tower
from .results import CalculationResult
from .specs import ScrubberInput

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptimizationSpec(SpecificationBase):
    """Knobs of the compliance search"""
    max_iterations: int = 20
    target_margin: float = 0.9              # aim for this fraction of the limit
    lg_phase_fraction: float = 0.4          # share of iterations scaling L/G
    velocity_phase_fraction: float = 0.3    # share scaling gas velocity
    lg_step: float = 0.1
    velocity_step: float = 0.05
    droplet_step: float = 0.1
    min_scale: float = 0.5
    divergence_after: int = 5
    divergence_factor: float = 2.0

    def validate(self) -> None:
        check_non_negative_int("max_iterations", self.max_iterations)
        check_non_negative_int("divergence_after", self.divergence_after)
        check_positive("target_margin", self.target_margin)
        check_non_negative("lg_phase_fraction", self.lg_phase_fraction)
        check_non_negative("velocity_phase_fraction", self.velocity_phase_fraction)
        if self.lg_phase_fraction + self.velocity_phase_fraction > 1.0:
            raise InputError("lg_phase_fraction + velocity_phase_fraction must not exceed 1")
        check_non_negative("lg_step", self.lg_step)
        check_non_negative("velocity_step", self.velocity_step)
        check_non_negative("droplet_step", self.droplet_step)
        check_positive("min_scale", self.min_scale)
        check_positive("divergence_factor", self.divergence_factor)


@dataclass(frozen=True)
class TraceEntry(SpecificationBase):
    """One evaluated parameter set"""
    iteration: int
    phase: str                      # "lg_ratio", "gas_velocity" or "droplet_size"
    value: float                    # mutated parameter after scaling
    outlet_concentration: float     # mg/Nm³
    required_height: float          # in the result's unit system
    compliant: bool

    def describe(self) -> str:
        labels = {
            "lg_ratio": ("Increasing L/G ratio to", "{:.4f}"),
            "gas_velocity": ("Adjusting gas velocity to", "{:.2f} m/s"),
            "droplet_size": ("Reducing droplet size to", "{:.2f} mm"),
        }
        text, fmt = labels[self.phase]
        return f"Iteration {self.iteration}: {text} {fmt.format(self.value)}"


@dataclass(frozen=True)
class OptimizationResult(SpecificationBase):
    results: CalculationResult
    optimized_input: ScrubberInput
    original_input: ScrubberInput
    iterations: int
    convergence_reached: bool
    status: OptimizationStatus
    log: Tuple[str, ...] = ()
    trace: Tuple[TraceEntry, ...] = ()

    @property
    def was_optimized(self) -> bool:
        """True when the returned design differs from the caller's input"""
        return self.iterations > 0


def optimization_target(limit: float, margin: float = 0.9) -> float:
    """Outlet concentration the search aims for (mg/Nm³)"""
    return limit * margin


def required_efficiency(inlet_concentration: float, target: float) -> float:
    """eta = 1 - C_target/C_in"""
    return 1.0 - target / inlet_concentration


def _mutate(
    i: int,
    base: ScrubberInput,
    current: ScrubberInput,
    spec: OptimizationSpec,
    eta_required: float,
) -> Tuple[str, float, ScrubberInput]:
    """Apply the phase step for iteration i; scales are taken from the base input"""
    n = spec.max_iterations
    lg_end = n * spec.lg_phase_fraction
    velocity_end = n * (spec.lg_phase_fraction + spec.velocity_phase_fraction)

    if i <= lg_end:
        lg = base.tower.lg_ratio * (1.0 + spec.lg_step * i)
        updated = current.with_tower(lg_ratio=lg).with_pollutant(
            target_efficiency=eta_required)
        return "lg_ratio", lg, updated

    if i <= velocity_end:
        factor = max(spec.min_scale, 1.0 - (i - lg_end) * spec.velocity_step)
        v = base.tower.gas_velocity * factor
        return "gas_velocity", v, current.with_tower(gas_velocity=v)

    factor = max(spec.min_scale, 1.0 - (i - velocity_end) * spec.droplet_step)
    d = base.tower.droplet_size * factor
    return "droplet_size", d, current.with_tower(droplet_size=d)


def optimize_for_compliance(
    inp: ScrubberInput,
    max_iterations: Optional[int] = None,
    spec: Optional[OptimizationSpec] = None,
    library: PropertyLibrary = DEFAULT_LIBRARY,
) -> OptimizationResult:
    """
    Search for a compliant design starting from `inp`.

    Parameters
    ----------
    inp : design to start from (never mutated)
    max_iterations : overrides spec.max_iterations when given
    spec : search knobs, defaults to OptimizationSpec()
    library : property tables used for every evaluation

    Returns
    -------
    OptimizationResult with the compliant design, or the design with the
    lowest outlet concentration when the search diverges or runs out of
    iterations.
    """
    spec = spec or OptimizationSpec()
    if max_iterations is not None:
        spec = replace(spec, max_iterations=max_iterations)
    spec.validate()

    framework = inp.settings.regulatory_framework
    pollutant = inp.pollutant
    log = [
        f"Starting compliance optimization for {framework} framework",
        f"Target pollutant: {pollutant.type}, "
        f"target efficiency: {pollutant.target_efficiency * 100:.1f}%",
    ]
    logger.info("compliance optimization: %s %s, max %d iterations",
                framework, pollutant.type, spec.max_iterations)

    results = calculate_spray_tower(inp, library)
    log.append(f"Initial calculation - outlet: {results.outlet_concentration:.1f} mg/Nm³, "
               f"compliance: {results.emission_limits_met}")

    if results.emission_limits_met:
        log.append("Initial design already meets regulatory requirements")
        logger.info("initial design already compliant")
        return OptimizationResult(
            results=results,
            optimized_input=inp,
            original_input=inp,
            iterations=0,
            convergence_reached=True,
            status=OptimizationStatus.COMPLIANT,
            log=tuple(log),
        )

    limit = library.target_limit(framework, pollutant.type)
    target = optimization_target(limit, spec.target_margin)
    eta_required = required_efficiency(pollutant.inlet_concentration, target)
    log.append(f"Regulatory limit: {limit:g} mg/Nm³, target: {target:.1f} mg/Nm³")
    log.append(f"Required efficiency: {eta_required * 100:.1f}%")

    current = inp
    best: Optional[Tuple[CalculationResult, ScrubberInput]] = None
    trace = []
    status = OptimizationStatus.EXHAUSTED_ITERATIONS
    iterations = spec.max_iterations

    for i in range(1, spec.max_iterations + 1):
        phase, value, current = _mutate(i, inp, current, spec, eta_required)
        results = calculate_spray_tower(current, library)

        entry = TraceEntry(i, phase, value, results.outlet_concentration,
                           results.required_height, results.emission_limits_met)
        trace.append(entry)
        log.append(entry.describe())
        log.append(f"  Result: outlet {results.outlet_concentration:.1f} mg/Nm³, "
                   f"height {results.required_height:.1f}, "
                   f"compliance: {results.emission_limits_met}")
        logger.debug("iteration %d: %s=%.4g outlet=%.1f mg/Nm3",
                     i, phase, value, results.outlet_concentration)

        if results.emission_limits_met:
            best = (results, current)
            status = OptimizationStatus.COMPLIANT
            iterations = i
            log.append(f"Compliance achieved in {i} iterations")
            break

        if best is None or results.outlet_concentration < best[0].outlet_concentration:
            best = (results, current)

        if (i > spec.divergence_after
                and results.outlet_concentration > target * spec.divergence_factor):
            status = OptimizationStatus.DIVERGING
            iterations = i
            log.append("Optimization diverging, using best result found")
            break

    converged = status is OptimizationStatus.COMPLIANT
    if best is None:
        # zero-iteration budget
        best = (results, current)
    results, current = best
    if not converged:
        log.append(f"Could not achieve full compliance in {iterations} iterations")
        log.append(f"Using best result: {results.outlet_concentration:.1f} mg/Nm³ "
                   f"(vs limit {limit:g} mg/Nm³)")
        logger.warning("compliance not reached (%s), best outlet %.1f mg/Nm3",
                       status, results.outlet_concentration)
    else:
        logger.info("compliance reached after %d iterations", iterations)

    return OptimizationResult(
        results=results,
        optimized_input=current,
        original_input=inp,
        iterations=iterations,
        convergence_reached=converged,
        status=status,
        log=tuple(log),
        trace=tuple(trace),
    )


def should_optimize_for_compliance(
    inp: ScrubberInput,
    library: PropertyLibrary = DEFAULT_LIBRARY,
) -> bool:
    """True when the design as given misses the emission limit"""
    return not calculate_spray_tower(inp, library).emission_limits_met
