# spraytower/scrubber/__init__.py
"""Counter-current spray tower scrubber design"""

from .specs import (
    GasStreamSpec,
    PollutantSpec,
    TowerDesignSpec,
    DesignSettings,
    ScrubberInput,
)

from .gas_properties import GasProperties, calculate_gas_properties
from .tower_sizing import (
    TowerSizing,
    cross_sectional_area,
    diameter_from_cross_sectional_area,
    calculate_tower_sizing,
)
from .mass_transfer import (
    MassTransferState,
    reynolds_number,
    schmidt_number,
    sherwood_number,
    interfacial_area,
    kga_correlation,
    calculate_mass_transfer,
)
from .droplet import (
    DropletSpec,
    DropletState,
    DropletPhysicsSolver,
    drag_coefficient,
    calculate_droplet_physics,
)
from .particulate import ParticulateEfficiency, calculate_particulate_efficiency
from .performance import (
    PerformanceSpec,
    PerformanceResult,
    PerformanceSolver,
    outlet_concentration,
    number_of_transfer_units,
    darcy_pressure_drop,
    moles_removed,
    nozzle_sizing,
)
from .compliance import ComplianceResult, evaluate_compliance, pressure_vessel_code
from .results import CalculationResult, convert_result
from .screening import range_warnings, check_results

# Pipeline and compliance search
from .calculator import (
    SprayTowerCalculator,
    calculate_spray_tower,
    evaluate,
)
from .optimizer import (
    OptimizationSpec,
    OptimizationResult,
    TraceEntry,
    optimize_for_compliance,
    should_optimize_for_compliance,
)

__all__ = [
    'GasStreamSpec', 'PollutantSpec', 'TowerDesignSpec', 'DesignSettings', 'ScrubberInput',
    'GasProperties', 'calculate_gas_properties',
    'TowerSizing', 'cross_sectional_area', 'diameter_from_cross_sectional_area',
    'calculate_tower_sizing',
    'MassTransferState', 'reynolds_number', 'schmidt_number', 'sherwood_number',
    'interfacial_area', 'kga_correlation', 'calculate_mass_transfer',
    'DropletSpec', 'DropletState', 'DropletPhysicsSolver', 'drag_coefficient',
    'calculate_droplet_physics',
    'ParticulateEfficiency', 'calculate_particulate_efficiency',
    'PerformanceSpec', 'PerformanceResult', 'PerformanceSolver',
    'outlet_concentration', 'number_of_transfer_units', 'darcy_pressure_drop',
    'moles_removed', 'nozzle_sizing',
    'ComplianceResult', 'evaluate_compliance', 'pressure_vessel_code',
    'CalculationResult', 'convert_result',
    'range_warnings', 'check_results',
    'SprayTowerCalculator', 'calculate_spray_tower', 'evaluate',
    'OptimizationSpec', 'OptimizationResult', 'TraceEntry',
    'optimize_for_compliance', 'should_optimize_for_compliance',
]
