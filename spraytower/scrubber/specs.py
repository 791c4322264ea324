# spraytower/scrubber/specs.py
"""Input specifications for spray tower design"""
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Dict, Any, Optional, Mapping

from pydantic import TypeAdapter, ValidationError

from spraytower.core.base import SpecificationBase
from spraytower.core.enums import (
    PollutantType, RegulatoryFramework, UnitSystem, ApplicationType,
)
from spraytower.core.validation import (
    check_positive, check_non_negative, check_in_open_01, check_known_keys,
    InputError,
)


@dataclass(frozen=True)
class GasStreamSpec(SpecificationBase):
    """
    Gas stream entering the tower.

    Flow is given at normal conditions (0 °C, 101.325 kPa); temperature and
    pressure are the operating conditions in the tower.
    """
    gas_flow_rate: float = 20000.0          # Nm³/h
    temperature: float = 40.0               # °C
    pressure: float = 101.325               # kPa, absolute
    gas_viscosity: Optional[float] = None   # Pa·s, overrides the default

    def validate(self) -> None:
        check_positive("gas_flow_rate", self.gas_flow_rate)
        check_positive("temperature (K)", self.temperature + 273.15)
        check_positive("pressure", self.pressure)
        if self.gas_viscosity is not None:
            check_positive("gas_viscosity", self.gas_viscosity)


@dataclass(frozen=True)
class PollutantSpec(SpecificationBase):
    """Pollutant to be absorbed and its removal target"""
    type: PollutantType = PollutantType.SO2
    inlet_concentration: float = 1500.0     # mg/Nm³
    target_efficiency: float = 0.9          # fraction removed, 0-1

    def __post_init__(self):
        object.__setattr__(self, "type", PollutantType.coerce(self.type))

    def validate(self) -> None:
        check_positive("inlet_concentration", self.inlet_concentration)
        check_in_open_01("target_efficiency", self.target_efficiency)


@dataclass(frozen=True)
class TowerDesignSpec(SpecificationBase):
    """
    Tower design parameters.

    Key variables:
    - lg_ratio: liquid-to-gas volumetric ratio (m³ liquid per m³ operating gas)
    - gas_velocity: superficial gas velocity, sets the cross-section
    - droplet_size: Sauter mean diameter of the spray
    """
    lg_ratio: float = 0.015                 # m³/m³
    liquid_density: float = 1000.0          # kg/m³
    liquid_viscosity: float = 0.001         # Pa·s
    gas_velocity: float = 3.0               # m/s
    droplet_size: float = 0.8               # mm
    nozzle_type: Optional[str] = None       # key of the nozzle library
    nozzle_pressure: float = 1.5            # bar
    kga_override: Optional[float] = None    # 1/s, used verbatim when given
    friction_factor: float = 0.02           # -
    pump_head: float = 10.0                 # m
    reagent_stoichiometry: float = 1.0      # mol reagent / mol pollutant

    def validate(self) -> None:
        check_positive("lg_ratio", self.lg_ratio)
        check_positive("liquid_density", self.liquid_density)
        check_positive("liquid_viscosity", self.liquid_viscosity)
        check_positive("gas_velocity", self.gas_velocity)
        check_positive("droplet_size", self.droplet_size)
        check_positive("nozzle_pressure", self.nozzle_pressure)
        check_non_negative("friction_factor", self.friction_factor)
        check_non_negative("pump_head", self.pump_head)
        check_non_negative("reagent_stoichiometry", self.reagent_stoichiometry)
        if self.kga_override is not None:
            check_non_negative("kga_override", self.kga_override)


@dataclass(frozen=True)
class DesignSettings(SpecificationBase):
    unit_system: UnitSystem = UnitSystem.METRIC
    regulatory_framework: RegulatoryFramework = RegulatoryFramework.EU
    application_type: ApplicationType = ApplicationType.GAS_ABSORPTION

    def __post_init__(self):
        object.__setattr__(self, "unit_system", UnitSystem.coerce(self.unit_system))
        object.__setattr__(
            self, "regulatory_framework",
            RegulatoryFramework.coerce(self.regulatory_framework),
        )
        object.__setattr__(
            self, "application_type", ApplicationType.coerce(self.application_type),
        )


_SECTIONS = {
    "gas_stream": GasStreamSpec,
    "pollutant": PollutantSpec,
    "tower": TowerDesignSpec,
    "settings": DesignSettings,
}

# Typed loaders for mapping input: numeric strings are converted, anything
# that is not a number where a number is expected is rejected
_LOADERS = {name: TypeAdapter(spec_cls) for name, spec_cls in _SECTIONS.items()}


def _load_section(name: str, values: Mapping[str, Any]):
    if name == "pollutant" and "type" in values:
        values = {**values, "type": PollutantType.coerce(values["type"])}
    try:
        return _LOADERS[name].validate_python(dict(values))
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        raise InputError(f"Invalid {name} section: {problems}") from None


@dataclass(frozen=True)
class ScrubberInput(SpecificationBase):
    """Complete input snapshot for one evaluation"""
    gas_stream: GasStreamSpec = field(default_factory=GasStreamSpec)
    pollutant: PollutantSpec = field(default_factory=PollutantSpec)
    tower: TowerDesignSpec = field(default_factory=TowerDesignSpec)
    settings: DesignSettings = field(default_factory=DesignSettings)

    def validate(self) -> None:
        """Structural checks; evaluation itself assumes validated input"""
        self.gas_stream.validate()
        self.pollutant.validate()
        self.tower.validate()
        self.settings.validate()

    def with_tower(self, **changes) -> "ScrubberInput":
        return replace(self, tower=replace(self.tower, **changes))

    def with_pollutant(self, **changes) -> "ScrubberInput":
        return replace(self, pollutant=replace(self.pollutant, **changes))

    def with_settings(self, **changes) -> "ScrubberInput":
        return replace(self, settings=replace(self.settings, **changes))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ScrubberInput":
        """
        Build an input from a nested mapping, e.g. parsed JSON:

            {"gas_stream": {"gas_flow_rate": 20000},
             "pollutant": {"type": "SO2", "target_efficiency": 0.9},
             "settings": {"regulatory_framework": "EU"}}

        Missing sections and fields take their defaults. Values are type
        checked as the sections are built: "20000" is read as 20000.0, while
        "fast" for a velocity raises InputError.
        """
        check_known_keys("input section", data, _SECTIONS)
        sections: Dict[str, Any] = {}
        for name, spec_cls in _SECTIONS.items():
            values = data.get(name) or {}
            if not isinstance(values, Mapping):
                raise InputError(f"Section {name!r} must be a mapping")
            check_known_keys(name, values, [f.name for f in fields(spec_cls)])
            sections[name] = _load_section(name, values)
        return cls(**sections)
