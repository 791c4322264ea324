"""
Unit tests for the individual pipeline stages.

Reference scenario: 20000 Nm³/h, 40 °C, 101.325 kPa, 3 m/s, L/G 0.015.
"""

import math

import pytest

from spraytower.core.constants import DEFAULT_LIBRARY
from spraytower.core.enums import PollutantType
from spraytower.core.validation import InputError, UnknownNozzleError
from spraytower.scrubber.gas_properties import calculate_gas_properties
from spraytower.scrubber.tower_sizing import calculate_tower_sizing
from spraytower.scrubber.mass_transfer import (
    calculate_mass_transfer, sherwood_number, interfacial_area, kga_correlation,
)
from spraytower.scrubber.particulate import calculate_particulate_efficiency
from spraytower.scrubber.performance import (
    PerformanceSolver, PerformanceSpec, number_of_transfer_units, moles_removed,
    nozzle_sizing, outlet_concentration,
)
from spraytower.scrubber.specs import GasStreamSpec, PollutantSpec, TowerDesignSpec


@pytest.fixture
def gas():
    return calculate_gas_properties(GasStreamSpec())


@pytest.fixture
def sizing(gas):
    return calculate_tower_sizing(gas.operating_gas_flow, 3.0, 0.015)


class TestGasProperties:

    def test_operating_conditions(self, gas):
        assert gas.operating_temperature == pytest.approx(313.15)
        assert gas.operating_pressure == pytest.approx(101325.0)
        assert gas.operating_gas_flow == pytest.approx(6.369, rel=5e-3)
        assert gas.gas_viscosity == pytest.approx(1.85e-5)

    def test_viscosity_override(self):
        props = calculate_gas_properties(GasStreamSpec(gas_viscosity=2.0e-5))
        assert props.gas_viscosity == 2.0e-5

    def test_pressure_compresses_flow(self):
        low = calculate_gas_properties(GasStreamSpec(pressure=101.325))
        high = calculate_gas_properties(GasStreamSpec(pressure=202.65))
        assert high.operating_gas_flow == pytest.approx(low.operating_gas_flow / 2)
        assert high.gas_density == pytest.approx(low.gas_density * 2)


class TestTowerSizing:

    def test_reference_scenario(self, sizing):
        assert sizing.tower_area == pytest.approx(2.123, rel=5e-3)
        assert sizing.tower_diameter == pytest.approx(1.644, rel=5e-3)
        assert sizing.liquid_rate == pytest.approx(343.9, rel=5e-3)

    def test_flux_is_lg_times_velocity(self, sizing):
        assert sizing.liquid_flux == pytest.approx(0.015 * 3.0)

    def test_zero_velocity_rejected(self):
        with pytest.raises(InputError):
            calculate_tower_sizing(6.0, 0.0, 0.015)


class TestMassTransfer:

    def test_sherwood_diffusion_limit(self):
        assert sherwood_number(0.0, 1.0) == 2.0

    def test_interfacial_area_zero_guard(self):
        a = interfacial_area(0.045, 0.0, 8e-4)
        assert a.degenerate and a.value == 0.0

    def test_interfacial_area(self):
        assert interfacial_area(0.045, 3.0, 8e-4).value == pytest.approx(6 * 0.045 / (3.0 * 8e-4))

    def test_kga_correlation(self, gas):
        G_m = gas.gas_density * 3.0 / 29.0
        expected = 0.1586 * G_m ** 0.8 * 45.0 ** 0.4
        assert kga_correlation(gas.gas_density, 3.0, 0.045).value == pytest.approx(expected)

    def test_kga_without_flux(self):
        assert kga_correlation(1.1, 3.0, 0.0).degenerate

    def test_reference_state(self, gas, sizing):
        mt = calculate_mass_transfer(PollutantSpec(), TowerDesignSpec(), gas.gas_density,
                                     gas.gas_viscosity, 3.0, sizing.liquid_flux)
        D = DEFAULT_LIBRARY.pollutant(PollutantType.SO2).diffusivity
        assert mt.reynolds_number == pytest.approx(gas.gas_density * 3.0 * 8e-4 / 1.85e-5)
        assert mt.schmidt_number == pytest.approx(1.85e-5 / (gas.gas_density * D))
        assert mt.gas_film_coefficient == pytest.approx(mt.sherwood_number * D / 8e-4)
        assert mt.overall_kga.value > 0
        assert not mt.kga_from_override

    def test_zero_override_is_used(self, gas, sizing):
        mt = calculate_mass_transfer(PollutantSpec(), TowerDesignSpec(kga_override=0.0),
                                     gas.gas_density, gas.gas_viscosity, 3.0,
                                     sizing.liquid_flux)
        assert mt.kga_from_override
        assert mt.overall_kga.value == 0.0


class TestParticulate:

    def test_ceilings(self):
        eff = calculate_particulate_efficiency(0.5, 1.0, 10.0, 10.0, 10.0)
        assert eff.coarse_10um == pytest.approx(0.99)
        assert eff.medium_2um == pytest.approx(0.80)
        assert eff.fine_1um == pytest.approx(0.20)

    def test_no_relative_motion(self):
        eff = calculate_particulate_efficiency(0.8, 3.0, 0.045, 5.0, 0.0)
        assert (eff.coarse_10um, eff.medium_2um, eff.fine_1um) == (0.0, 0.0, 0.0)

    def test_ordering(self):
        eff = calculate_particulate_efficiency(0.8, 3.0, 0.045, 2.0, 0.2)
        assert eff.coarse_10um >= eff.medium_2um >= eff.fine_1um >= 0.0


def _performance_spec(gas, sizing, **overrides):
    values = dict(
        pollutant=PollutantSpec(),
        tower=TowerDesignSpec(),
        gas_flow_rate=20000.0,
        gas_velocity=3.0,
        tower_diameter=sizing.tower_diameter,
        tower_area=sizing.tower_area,
        gas_density=gas.gas_density,
        liquid_rate=sizing.liquid_rate,
        overall_kga=0.13,
        operating_gas_flow=gas.operating_gas_flow,
        operating_temperature=gas.operating_temperature,
        operating_pressure=gas.operating_pressure,
    )
    values.update(overrides)
    return PerformanceSpec(**values)


class TestPerformance:

    @pytest.mark.parametrize("eta", [0.1, 0.5, 0.9, 0.999])
    def test_mass_balance(self, eta):
        C_out = outlet_concentration(1500.0, eta)
        assert C_out == pytest.approx(1500.0 * (1 - eta))
        assert 0.0 <= C_out <= 1500.0

    def test_ntu_identity(self):
        assert number_of_transfer_units(1500.0, 150.0).value == pytest.approx(math.log(10))
        complete = number_of_transfer_units(1500.0, 0.0)
        assert complete.degenerate and complete.value == 0.0

    def test_moles_removed(self):
        # 20000 Nm³/h · 1350 mg/Nm³ = 27 kg/h SO2
        assert moles_removed(20000.0, 1350.0, 64.066) == pytest.approx(27000.0 / 64.066)

    def test_reference_height(self, gas, sizing):
        res = PerformanceSolver(_performance_spec(gas, sizing)).solve()
        G_m = 101325.0 * gas.operating_gas_flow / (8314.462618 * 313.15)
        expected_H = G_m * math.log(10) / 0.13 / sizing.tower_area
        assert res.outlet_concentration == pytest.approx(150.0)
        assert res.required_height.value == pytest.approx(expected_H)
        assert res.gas_residence_time.value == pytest.approx(expected_H / 3.0)
        assert res.pressure_drop == pytest.approx(
            0.02 * expected_H / sizing.tower_diameter * gas.gas_density * 9.0 / 2.0)
        assert res.reagent_consumption == pytest.approx(res.moles_removed)

    def test_spec_to_dict(self, gas, sizing):
        data = _performance_spec(gas, sizing).to_dict()
        assert data["pollutant"]["type"] == "SO2"
        assert data["tower"]["lg_ratio"] == 0.015
        assert data["overall_kga"] == 0.13
        assert "operating_pressure" in data

    def test_zero_kga_gives_degenerate_height(self, gas, sizing, caplog):
        res = PerformanceSolver(_performance_spec(gas, sizing, overall_kga=0.0)).solve()
        assert res.required_height.degenerate
        assert res.required_height.value == 0.0
        assert res.pressure_drop == 0.0
        assert "required height is zero" in caplog.text

    def test_nozzle_sizing(self):
        out = nozzle_sizing("FullCone-1/2-15", 1.5, 343.9)
        q = 1.5 * math.sqrt(1.5)
        assert out["nozzle_flow_per_nozzle"] == pytest.approx(q)
        assert out["required_nozzles"] == math.ceil(343.9 / q)

    def test_no_nozzle(self):
        assert nozzle_sizing(None, 1.5, 343.9) == {
            "nozzle_flow_per_nozzle": None, "required_nozzles": None}

    def test_unknown_nozzle(self):
        with pytest.raises(UnknownNozzleError):
            nozzle_sizing("Mystery-Nozzle", 1.5, 343.9)
