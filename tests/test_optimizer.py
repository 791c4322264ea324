"""
Tests for the compliance optimizer.
"""

import pytest

from spraytower.core.enums import OptimizationStatus
from spraytower.core.validation import InputError
from spraytower.scrubber.optimizer import (
    OptimizationSpec, optimize_for_compliance, should_optimize_for_compliance,
    optimization_target, required_efficiency,
)


class TestHelpers:

    def test_target_and_efficiency(self):
        target = optimization_target(200.0)
        assert target == pytest.approx(180.0)
        assert required_efficiency(1500.0, target) == pytest.approx(0.88)

    def test_should_optimize(self, default_input, non_compliant_input):
        assert not should_optimize_for_compliance(default_input)
        assert should_optimize_for_compliance(non_compliant_input)

    def test_spec_validation(self):
        with pytest.raises(InputError):
            OptimizationSpec(lg_phase_fraction=0.8, velocity_phase_fraction=0.5).validate()

    @pytest.mark.parametrize("value", [2.5, True, -1, "20"])
    def test_max_iterations_must_be_int(self, value):
        with pytest.raises(InputError, match="max_iterations"):
            OptimizationSpec(max_iterations=value).validate()

    def test_divergence_after_must_be_int(self):
        with pytest.raises(InputError, match="divergence_after"):
            OptimizationSpec(divergence_after=1.5).validate()


class TestOptimizer:

    def test_already_compliant(self, default_input):
        res = optimize_for_compliance(default_input)
        assert res.iterations == 0
        assert res.convergence_reached
        assert res.status is OptimizationStatus.COMPLIANT
        assert res.optimized_input is default_input
        assert not res.was_optimized
        assert res.trace == ()
        assert "already meets" in res.log[-1]

    def test_converges_in_lg_phase(self, non_compliant_input):
        res = optimize_for_compliance(non_compliant_input)
        assert res.convergence_reached
        assert res.status is OptimizationStatus.COMPLIANT
        assert res.iterations == 1
        assert res.was_optimized
        assert res.original_input is non_compliant_input
        assert res.optimized_input.tower.lg_ratio == pytest.approx(0.015 * 1.1)
        assert res.optimized_input.pollutant.target_efficiency == pytest.approx(0.88)
        assert res.results.outlet_concentration == pytest.approx(180.0)
        assert res.results.emission_limits_met
        assert res.trace[0].phase == "lg_ratio"
        # the caller's input is never modified
        assert non_compliant_input.tower.lg_ratio == 0.015

    def test_exhausted_iterations(self, non_compliant_input):
        res = optimize_for_compliance(non_compliant_input, max_iterations=2)
        assert not res.convergence_reached
        assert res.status is OptimizationStatus.EXHAUSTED_ITERATIONS
        assert res.iterations == 2
        assert [e.phase for e in res.trace] == ["gas_velocity", "droplet_size"]
        assert res.results.outlet_concentration == pytest.approx(750.0)
        assert res.optimized_input.tower.gas_velocity == pytest.approx(3.0 * 0.99)
        assert any("Could not achieve" in line for line in res.log)

    def test_diverging(self, non_compliant_input):
        spec = OptimizationSpec(lg_phase_fraction=0.0)
        res = optimize_for_compliance(non_compliant_input, spec=spec)
        assert not res.convergence_reached
        assert res.status is OptimizationStatus.DIVERGING
        assert res.iterations == 6
        assert len(res.trace) == 6
        assert any("diverging" in line for line in res.log)

    def test_best_result_has_lowest_outlet(self, non_compliant_input):
        spec = OptimizationSpec(lg_phase_fraction=0.0)
        res = optimize_for_compliance(non_compliant_input, spec=spec)
        assert res.results.outlet_concentration == min(
            e.outlet_concentration for e in res.trace)

    def test_log_is_not_empty(self, non_compliant_input):
        res = optimize_for_compliance(non_compliant_input, max_iterations=1)
        assert res.iterations >= 1
        assert len(res.log) > 3

    def test_phase_floor(self, non_compliant_input):
        spec = OptimizationSpec(lg_phase_fraction=0.0, velocity_phase_fraction=1.0,
                                velocity_step=0.5, divergence_after=100)
        res = optimize_for_compliance(non_compliant_input, max_iterations=4, spec=spec)
        velocities = [e.value for e in res.trace]
        assert velocities == pytest.approx([1.5, 1.5, 1.5, 1.5])

    def test_fractional_iteration_override(self, non_compliant_input):
        with pytest.raises(InputError, match="max_iterations"):
            optimize_for_compliance(non_compliant_input, max_iterations=2.5)

    def test_us_framework_is_never_searched(self, non_compliant_input):
        us = non_compliant_input.with_settings(regulatory_framework="US")
        res = optimize_for_compliance(us)
        assert res.iterations == 0
        assert res.convergence_reached
        assert res.optimized_input.pollutant.target_efficiency == 0.5
        assert not should_optimize_for_compliance(us)
