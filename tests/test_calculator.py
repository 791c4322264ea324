"""
End-to-end tests for the design pipeline, compliance and unit projection.
"""

import math

import pytest

from spraytower.core.constants import (
    DEFAULT_LIBRARY, PropertyLibrary, FrameworkData, FRAMEWORKS, POLLUTANTS,
)
from spraytower.core.enums import PollutantType, RegulatoryFramework, UnitSystem
from spraytower.core.validation import UnknownPollutantError, UnknownNozzleError
from spraytower.scrubber.calculator import calculate_spray_tower, evaluate
from spraytower.scrubber.compliance import evaluate_compliance, pressure_vessel_code
from spraytower.scrubber.results import convert_result, QUANTITY_KINDS
from spraytower.scrubber.screening import range_warnings, check_results


@pytest.mark.scenario
class TestReferenceDesign:

    def test_sizing(self, default_input):
        r = evaluate(default_input)
        assert r.operating_gas_flow == pytest.approx(6.369, rel=5e-3)
        assert r.tower_area == pytest.approx(2.123, rel=5e-3)
        assert r.tower_diameter == pytest.approx(1.644, rel=5e-3)
        assert r.liquid_rate == pytest.approx(343.9, rel=5e-3)

    def test_efficiency_and_compliance(self, default_input):
        r = evaluate(default_input)
        assert r.outlet_concentration == pytest.approx(150.0)
        assert r.number_of_transfer_units == pytest.approx(math.log(10))
        assert r.emission_limits_met
        assert r.compliance.framework is RegulatoryFramework.EU
        assert r.compliance.emission_limit == 200.0

    def test_derived_fields(self, default_input):
        r = evaluate(default_input)
        assert r.unit_system is UnitSystem.METRIC
        assert r.required_height > 0
        assert r.gas_residence_time == pytest.approx(r.required_height / 3.0)
        assert r.outlet_concentration_ppmv == pytest.approx(150.0 * 22.4 / 64.066)
        assert r.moles_removed == pytest.approx(20000.0 * 1350.0 / 1000.0 / 64.066)
        assert r.droplet_converged
        assert r.droplet_iterations <= 10
        assert r.particulate_efficiency is not None
        assert r.required_nozzles is None
        assert r.warnings == ()

    def test_non_compliant(self, non_compliant_input):
        r = evaluate(non_compliant_input)
        assert r.outlet_concentration == pytest.approx(750.0)
        assert not r.emission_limits_met

    def test_idempotent(self, default_input):
        assert evaluate(default_input) == evaluate(default_input)

    def test_alias(self):
        assert evaluate is calculate_spray_tower


class TestEdgeCases:

    def test_zero_kga_override_surfaces_warning(self, default_input):
        r = evaluate(default_input.with_tower(kga_override=0.0))
        assert r.overall_kga == 0.0
        assert r.required_height == 0.0
        assert any("required height is zero" in w for w in r.warnings)
        assert "overall KGa is not positive" in r.warnings

    def test_kga_override_used(self, default_input):
        base = evaluate(default_input)
        doubled = evaluate(default_input.with_tower(kga_override=2 * base.overall_kga))
        assert doubled.required_height == pytest.approx(base.required_height / 2)

    def test_nozzles(self, default_input):
        r = evaluate(default_input.with_tower(nozzle_type="HollowCone-3/4-25"))
        q = 2.6 * math.sqrt(1.5)
        assert r.nozzle_flow_per_nozzle == pytest.approx(q)
        assert r.required_nozzles == math.ceil(r.liquid_rate / q)

    def test_unknown_nozzle(self, default_input):
        with pytest.raises(UnknownNozzleError):
            evaluate(default_input.with_tower(nozzle_type="Mystery-Nozzle"))

    def test_pollutant_missing_from_library(self, default_input):
        lib = PropertyLibrary(pollutants={PollutantType.HCL: POLLUTANTS[PollutantType.HCL]})
        with pytest.raises(UnknownPollutantError):
            calculate_spray_tower(default_input, lib)

    def test_carried_droplets_have_no_contact_time(self, default_input):
        r = evaluate(default_input.with_tower(droplet_size=0.2))
        assert r.relative_velocity == 0.0
        assert r.droplet_contact_time == 0.0
        assert r.particulate_efficiency.coarse_10um == 0.0


class TestCompliance:

    def test_us_grades_no_limits(self, default_input):
        us = default_input.with_settings(regulatory_framework="US")
        r = evaluate(us.with_pollutant(target_efficiency=0.5))
        assert r.outlet_concentration == pytest.approx(750.0)
        assert r.emission_limits_met
        assert r.compliance.emission_limit is None
        assert r.compliance.pressure_vessel_code == "Atmospheric vessel"

    def test_hcl_eu(self, default_input):
        hcl = default_input.with_pollutant(type="HCl", inlet_concentration=100.0,
                                           target_efficiency=0.95)
        r = evaluate(hcl)
        assert r.outlet_concentration == pytest.approx(5.0)
        assert r.emission_limits_met

    def test_pressure_vessel_codes(self):
        assert pressure_vessel_code(RegulatoryFramework.EU, 101325.0) == "EU PED (>0.5 bar)"
        assert pressure_vessel_code(RegulatoryFramework.EU, 40000.0) == "Atmospheric vessel"
        assert pressure_vessel_code(RegulatoryFramework.US, 101325.0) == "Atmospheric vessel"
        assert pressure_vessel_code(RegulatoryFramework.US, 200000.0) == "ASME BPVC Section VIII"

    def test_framework_without_limit(self):
        eu = FRAMEWORKS[RegulatoryFramework.EU]
        bare = FrameworkData(eu.name, {}, eu.pressure_vessel_threshold,
                             eu.pressure_vessel_code, eu.safety_classification)
        lib = PropertyLibrary(frameworks={RegulatoryFramework.EU: bare})
        res = evaluate_compliance("EU", 1e6, 101325.0, PollutantType.SO2, lib)
        assert res.emission_limits_met
        assert res.emission_limit is None

    def test_boundary_is_compliant(self):
        res = evaluate_compliance(RegulatoryFramework.EU, 200.0, 101325.0,
                                  PollutantType.SO2, DEFAULT_LIBRARY)
        assert res.emission_limits_met


class TestUnitProjection:

    def test_imperial_result(self, default_input):
        metric = evaluate(default_input)
        imperial = evaluate(default_input.with_settings(unit_system="imperial"))
        assert imperial.unit_system is UnitSystem.IMPERIAL
        assert imperial.tower_diameter == pytest.approx(metric.tower_diameter * 3.28084)
        assert imperial.pressure_drop == pytest.approx(metric.pressure_drop * 0.00401463)
        assert imperial.outlet_concentration == metric.outlet_concentration
        assert imperial.units()["tower_diameter"] == "ft"

    def test_round_trip(self, default_input):
        metric = evaluate(default_input.with_tower(nozzle_type="Spiral-1/2-10"))
        back = convert_result(convert_result(metric, "imperial"), "metric")
        for name in QUANTITY_KINDS:
            assert getattr(back, name) == pytest.approx(getattr(metric, name), rel=1e-12)

    def test_same_system_is_identity(self, default_input):
        r = evaluate(default_input)
        assert convert_result(r, UnitSystem.METRIC) is r


class TestScreening:

    def test_reference_range_warnings(self, default_input):
        warnings = range_warnings(default_input)
        assert any("entrainment" in w for w in warnings)
        assert any("gas_absorption recommendation" in w and "gas_velocity" in w
                   for w in warnings)
        assert not any(w.startswith("L/G") for w in warnings)

    def test_out_of_range_input(self, default_input):
        warnings = range_warnings(default_input.with_tower(droplet_size=8.0))
        assert any(w.startswith("droplet_size 8 mm outside typical range") for w in warnings)

    def test_check_results_clean(self):
        assert check_results(1.6, 2.0, 0.13, 1.0, 150.0, 1.4) == []

    def test_check_results_flags(self):
        warnings = check_results(60.0, 150.0, 0.0, -1.0, 0.0, 0.0)
        assert len(warnings) == 6
