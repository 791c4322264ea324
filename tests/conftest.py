"""
Pytest configuration and fixtures for spraytower testing.
"""

import pytest

from spraytower.scrubber.specs import ScrubberInput


def pytest_configure(config):
    """Configure pytest settings."""
    config.addinivalue_line(
        "markers", "scenario: end-to-end design scenarios"
    )


@pytest.fixture
def default_input():
    """Reference design: 20000 Nm³/h at 40 °C, SO2 1500 mg/Nm³ at 90 %, EU."""
    return ScrubberInput()


@pytest.fixture
def non_compliant_input(default_input):
    """Same design with 50 % removal (750 mg/Nm³ outlet, above the EU limit)."""
    return default_input.with_pollutant(target_efficiency=0.5)
