# spraytower/__init__.py
"""
spraytower - counter-current spray tower scrubber design

    from spraytower import ScrubberInput, evaluate, optimize_for_compliance

    inp = ScrubberInput().with_pollutant(target_efficiency=0.5)
    result = evaluate(inp)
    if not result.emission_limits_met:
        result = optimize_for_compliance(inp).results
"""

__version__ = "0.1.0"

from .core import (
    ScrubberError,
    InputError,
    UnknownPollutantError,
    UnknownNozzleError,
    ConvergenceError,
    PollutantType,
    RegulatoryFramework,
    UnitSystem,
    ApplicationType,
    OptimizationStatus,
    PropertyLibrary,
    DEFAULT_LIBRARY,
)

from .scrubber import (
    GasStreamSpec,
    PollutantSpec,
    TowerDesignSpec,
    DesignSettings,
    ScrubberInput,
    CalculationResult,
    convert_result,
    range_warnings,
    calculate_spray_tower,
    evaluate,
    OptimizationSpec,
    OptimizationResult,
    optimize_for_compliance,
    should_optimize_for_compliance,
)

__all__ = [
    'ScrubberError', 'InputError', 'UnknownPollutantError', 'UnknownNozzleError',
    'ConvergenceError',
    'PollutantType', 'RegulatoryFramework', 'UnitSystem', 'ApplicationType',
    'OptimizationStatus', 'PropertyLibrary', 'DEFAULT_LIBRARY',
    'GasStreamSpec', 'PollutantSpec', 'TowerDesignSpec', 'DesignSettings', 'ScrubberInput',
    'CalculationResult', 'convert_result', 'range_warnings',
    'calculate_spray_tower', 'evaluate',
    'OptimizationSpec', 'OptimizationResult',
    'optimize_for_compliance', 'should_optimize_for_compliance',
]
