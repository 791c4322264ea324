# spraytower/scrubber/calculator.py
"""Spray tower design pipeline"""
from __future__ import annotations

from typing import List
import logging

from spraytower.core.base import SolverBase
from spraytower.core.constants import DEFAULT_LIBRARY, PropertyLibrary, ASSUMED_SPRAY_HEIGHT
from spraytower.core.conversions import mg_Nm3_to_ppmv
from spraytower.core.enums import UnitSystem
from .compliance import evaluate_compliance
from .droplet import calculate_droplet_physics
from .gas_properties import calculate_gas_properties
from .mass_transfer import calculate_mass_transfer
from .particulate import calculate_particulate_efficiency
from .performance import PerformanceSolver, PerformanceSpec
from .results import CalculationResult, convert_result
from .screening import check_results
from .specs import ScrubberInput
from .tower_sizing import calculate_tower_sizing

logger = logging.getLogger(__name__)


class SprayTowerCalculator(SolverBase):
    """
    Fixed pipeline from one input snapshot to one result record:

      gas properties -> tower sizing -> mass transfer -> droplet physics
      -> performance -> particulate efficiency -> compliance
      -> projection into the requested unit system

    Deterministic and free of side effects other than logging.
    """

    def __init__(self, inp: ScrubberInput, library: PropertyLibrary = DEFAULT_LIBRARY):
        self.inp = inp
        self.library = library

    def solve(self) -> CalculationResult:
        inp = self.inp
        tower = inp.tower
        data = self.library.pollutant(inp.pollutant.type)

        # Step 1: gas at operating conditions
        gas = calculate_gas_properties(inp.gas_stream)

        # Step 2: cross-section and liquid loading
        sizing = calculate_tower_sizing(gas.operating_gas_flow, tower.gas_velocity,
                                        tower.lg_ratio)

        # Step 3: film coefficient, interfacial area, KGa
        mt = calculate_mass_transfer(
            inp.pollutant, tower,
            gas.gas_density, gas.gas_viscosity, tower.gas_velocity,
            sizing.liquid_flux, self.library,
        )

        # Step 4: droplets over the assumed spray height
        droplet = calculate_droplet_physics(
            tower.droplet_size, tower.gas_velocity,
            gas.gas_density, gas.gas_viscosity, tower.liquid_density,
            ASSUMED_SPRAY_HEIGHT,
        )

        # Step 5: height, pressure drop, mass balance
        perf = PerformanceSolver(PerformanceSpec(
            pollutant=inp.pollutant,
            tower=tower,
            gas_flow_rate=inp.gas_stream.gas_flow_rate,
            gas_velocity=tower.gas_velocity,
            tower_diameter=sizing.tower_diameter,
            tower_area=sizing.tower_area,
            gas_density=gas.gas_density,
            liquid_rate=sizing.liquid_rate,
            overall_kga=mt.overall_kga.value,
            operating_gas_flow=gas.operating_gas_flow,
            operating_temperature=gas.operating_temperature,
            operating_pressure=gas.operating_pressure,
        ), self.library).solve()

        # Step 6: particulate capture over the required height
        particulate = calculate_particulate_efficiency(
            tower.droplet_size, tower.gas_velocity, sizing.liquid_flux,
            perf.required_height.value, droplet.relative_velocity,
        )

        # Step 7: regulatory status
        compliance = evaluate_compliance(
            inp.settings.regulatory_framework,
            perf.outlet_concentration,
            gas.operating_pressure,
            inp.pollutant.type,
            self.library,
        )

        warnings: List[str] = []
        for outcome in (mt.interfacial_area, mt.overall_kga, perf.required_height):
            if outcome.degenerate:
                warnings.append(outcome.reason)
        if not droplet.converged:
            msg = (f"droplet terminal velocity not converged after "
                   f"{droplet.iterations} iterations")
            if droplet.exact_terminal_velocity is not None:
                msg += f" (force-balance root {droplet.exact_terminal_velocity:.4f} m/s)"
            warnings.append(msg)
        warnings.extend(check_results(
            sizing.tower_diameter, perf.required_height.value, mt.overall_kga.value,
            perf.pressure_drop, mt.reynolds_number, mt.schmidt_number,
        ))

        result = CalculationResult(
            unit_system=UnitSystem.METRIC,
            tower_diameter=sizing.tower_diameter,
            required_height=perf.required_height.value,
            gas_residence_time=perf.gas_residence_time.value,
            pressure_drop=perf.pressure_drop,
            outlet_concentration=perf.outlet_concentration,
            outlet_concentration_ppmv=mg_Nm3_to_ppmv(perf.outlet_concentration,
                                                     data.molar_mass),
            overall_kga=mt.overall_kga.value,
            interfacial_area=mt.interfacial_area.value,
            gas_density=gas.gas_density,
            liquid_rate=sizing.liquid_rate,
            reagent_consumption=perf.reagent_consumption,
            operating_gas_flow=gas.operating_gas_flow,
            tower_area=sizing.tower_area,
            liquid_flow_rate=sizing.liquid_flow_rate,
            moles_removed=perf.moles_removed,
            number_of_transfer_units=perf.number_of_transfer_units.value,
            gas_film_coefficient=mt.gas_film_coefficient,
            reynolds_number=mt.reynolds_number,
            schmidt_number=mt.schmidt_number,
            sherwood_number=mt.sherwood_number,
            droplet_terminal_velocity=droplet.terminal_velocity,
            relative_velocity=droplet.relative_velocity,
            droplet_contact_time=droplet.contact_time,
            droplet_iterations=droplet.iterations,
            droplet_converged=droplet.converged,
            nozzle_flow_per_nozzle=perf.nozzle_flow_per_nozzle,
            required_nozzles=perf.required_nozzles,
            particulate_efficiency=particulate,
            compliance=compliance,
            warnings=tuple(warnings),
        )

        logger.debug("spray tower: D=%.3f m H=%.3f m outlet=%.1f mg/Nm3 compliant=%s",
                     result.tower_diameter, result.required_height,
                     result.outlet_concentration, compliance.emission_limits_met)
        return convert_result(result, inp.settings.unit_system)


def calculate_spray_tower(
    inp: ScrubberInput,
    library: PropertyLibrary = DEFAULT_LIBRARY,
) -> CalculationResult:
    """
    Evaluate one design.

    Raises only for structurally invalid input (unknown pollutant or nozzle,
    zero gas velocity, liquid lighter than gas). Degenerate numerics yield
    zeros plus an entry in `warnings`.
    """
    return SprayTowerCalculator(inp, library).solve()


evaluate = calculate_spray_tower
