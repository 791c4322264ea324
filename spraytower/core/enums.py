# spraytower/core/enums.py
"""
Enumerations shared across the scrubber stages.

All enums are str-valued so they compare equal to, and serialise as, the
plain strings used in input mappings:

    PollutantType("SO2") is PollutantType.SO2
    DesignSettings(unit_system="imperial").unit_system is UnitSystem.IMPERIAL
"""
from enum import Enum

from .validation import InputError, UnknownPollutantError


class _StrEnum(str, Enum):

    def __str__(self) -> str:
        return self.value

    @classmethod
    def coerce(cls, value):
        """Accept a member or its value, raising InputError otherwise"""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(m.value for m in cls)
            raise InputError(
                f"{cls.__name__} must be one of {allowed}; got {value!r}"
            ) from None


class PollutantType(_StrEnum):
    """Absorbable gaseous pollutants with tabulated properties"""
    SO2 = "SO2"
    HCL = "HCl"
    NH3 = "NH3"
    H2S = "H2S"

    @classmethod
    def coerce(cls, value):
        try:
            return super().coerce(value)
        except InputError as exc:
            raise UnknownPollutantError(str(exc)) from None


class RegulatoryFramework(_StrEnum):
    EU = "EU"
    US = "US"


class UnitSystem(_StrEnum):
    METRIC = "metric"
    IMPERIAL = "imperial"


class ApplicationType(_StrEnum):
    """Service the tower is designed for (drives recommended ranges only)"""
    GAS_ABSORPTION = "gas_absorption"
    PARTICULATE_REMOVAL = "particulate_removal"
    COOLING = "cooling"
    ODOR_CONTROL = "odor_control"


class OptimizationStatus(_StrEnum):
    """Terminal states of the compliance search"""
    COMPLIANT = "compliant"
    DIVERGING = "diverging"
    EXHAUSTED_ITERATIONS = "exhausted_iterations"
