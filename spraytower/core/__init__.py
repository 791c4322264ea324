# spraytower/core/__init__.py
"""Core utilities shared by the scrubber calculations"""

from .validation import (
    check_finite,
    check_positive,
    check_non_negative,
    check_non_negative_int,
    check_in_open_01,
    check_known_keys,
    ScrubberError,
    InputError,
    UnknownPollutantError,
    UnknownNozzleError,
    ConvergenceError,
)

from .numerical import (
    Guarded,
    guarded_divide,
    FixedPointResult,
    fixed_point,
)

from .conversions import (
    # Temperature and pressure
    C_to_K, kPa_to_Pa,
    # Length and volume
    mm_to_m, m3_to_L,
    # Rates
    per_hour_to_per_second, per_second_to_per_hour,
    # Concentration
    mg_Nm3_to_ppmv, ppmv_to_mg_Nm3,
    # Unit systems
    convert_quantity, unit_label,
)

from .properties import (
    ideal_gas_density,
    actual_flow_from_normal,
    molar_flow_kmol,
)

from .enums import (
    PollutantType,
    RegulatoryFramework,
    UnitSystem,
    ApplicationType,
    OptimizationStatus,
)

from .constants import (
    PollutantData,
    NozzleData,
    FrameworkData,
    PropertyLibrary,
    DEFAULT_LIBRARY,
)

from .base import SolverBase, SpecificationBase

__all__ = [
    # Validation
    'check_finite', 'check_positive', 'check_non_negative', 'check_non_negative_int',
    'check_in_open_01',
    'check_known_keys',
    'ScrubberError', 'InputError', 'UnknownPollutantError', 'UnknownNozzleError',
    'ConvergenceError',
    # Numerical
    'Guarded', 'guarded_divide', 'FixedPointResult', 'fixed_point',
    # Conversions
    'C_to_K', 'kPa_to_Pa',
    'mm_to_m', 'm3_to_L',
    'per_hour_to_per_second', 'per_second_to_per_hour',
    'mg_Nm3_to_ppmv', 'ppmv_to_mg_Nm3',
    'convert_quantity', 'unit_label',
    # Properties
    'ideal_gas_density', 'actual_flow_from_normal', 'molar_flow_kmol',
    # Enums
    'PollutantType', 'RegulatoryFramework', 'UnitSystem', 'ApplicationType',
    'OptimizationStatus',
    # Tables
    'PollutantData', 'NozzleData', 'FrameworkData', 'PropertyLibrary', 'DEFAULT_LIBRARY',
    # Base classes
    'SolverBase', 'SpecificationBase',
]
