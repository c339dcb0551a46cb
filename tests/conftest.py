"""
Shared fixtures for the fetchclimate test suite.

Every HTTP exchange is mocked with respx; no test reaches a real
FetchClimate instance.
"""

import pytest

from fetchclimate.config.settings import FetchClimateConfig

BASE_URL = "http://fetchclimate.test"


@pytest.fixture
def base_url():
    return BASE_URL


@pytest.fixture
def fc_config():
    """Config without poll delay so job polling tests run instantly."""
    return FetchClimateConfig(
        base_url=BASE_URL,
        timeout=5,
        poll_interval=0,
        max_wait=None,
    )


@pytest.fixture
def configuration_json():
    """Abridged /api/configuration reply."""
    return {
        "DataSources": [
            {
                "ID": 1,
                "Name": "CRU CL 2.0",
                "Description": "High resolution climatology",
                "Copyright": "Climatic Research Unit",
                "ProvidedVariables": ["airt", "prate", "relhum"],
            },
            {
                "ID": 2,
                "Name": "WorldClim 1.4",
                "Description": "Global climate layers",
                "Copyright": "WorldClim",
                "ProvidedVariables": ["airt", "prate"],
            },
            {
                "ID": 7,
                "Name": "GTOPO30",
                "Description": "Global elevation",
                "Copyright": "USGS",
                "ProvidedVariables": ["elev"],
            },
        ],
        "EnvironmentalVariables": [
            {
                "Name": "airt",
                "Description": "Air temperature near surface",
                "Units": "Degrees C",
            },
            {
                "Name": "prate",
                "Description": "Precipitation rate",
                "Units": "mm/month",
            },
        ],
    }


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "api: API related tests")


def pytest_collection_modifyitems(config, items):
    """Mark tests based on their location."""
    for item in items:
        if "/api/" in item.nodeid or "test_api" in item.nodeid:
            item.add_marker(pytest.mark.api)
        if "unit" in item.nodeid:
            item.add_marker(pytest.mark.unit)
