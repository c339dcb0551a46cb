"""Tests for the /api/configuration client (respx mocks)."""

import httpx
import pytest
import respx
from httpx import Response

from fetchclimate.api.services.configuration.configuration_client import (
    ConfigurationClient,
    FetchClimateConfiguration,
)


@pytest.mark.asyncio
async def test_latest_configuration_sends_no_timestamp(
    fc_config, base_url, configuration_json
):
    with respx.mock(base_url=base_url) as mock:
        route = mock.get("/api/configuration").mock(
            return_value=Response(200, json=configuration_json)
        )

        async with ConfigurationClient(config=fc_config) as client:
            configuration = await client.get_configuration("NOW")

    assert route.call_count == 1
    assert "timestamp" not in route.calls.last.request.url.params
    assert len(configuration.data_sources) == 3
    assert configuration.data_sources[0].provided_variables == [
        "airt",
        "prate",
        "relhum",
    ]
    assert configuration.variables[0].units == "Degrees C"


@pytest.mark.asyncio
async def test_historical_configuration_sends_minute_timestamp(
    fc_config, base_url, configuration_json
):
    with respx.mock(base_url=base_url) as mock:
        route = mock.get("/api/configuration").mock(
            return_value=Response(200, json=configuration_json)
        )

        async with ConfigurationClient(config=fc_config) as client:
            await client.get_configuration("2016-06-01")

    params = route.calls.last.request.url.params
    assert params["timestamp"] == "2016-06-01T00:00Z"


@pytest.mark.asyncio
async def test_http_error_propagates(fc_config, base_url):
    with respx.mock(base_url=base_url) as mock:
        mock.get("/api/configuration").mock(return_value=Response(503))

        async with ConfigurationClient(config=fc_config) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await client.get_configuration()


@pytest.mark.asyncio
async def test_connection_error_propagates(fc_config, base_url):
    with respx.mock(base_url=base_url) as mock:
        route = mock.get("/api/configuration").mock(
            side_effect=httpx.ConnectError("unreachable")
        )

        async with ConfigurationClient(config=fc_config) as client:
            with pytest.raises(httpx.ConnectError):
                await client.get_configuration()

    # no retry at this layer
    assert route.call_count == 1


def test_catalog_listings(configuration_json):
    configuration = FetchClimateConfiguration.model_validate(configuration_json)

    data_sets = configuration.data_sets()
    assert list(data_sets) == ["CRU CL 2.0", "WorldClim 1.4", "GTOPO30"]
    assert data_sets["GTOPO30"] == {
        "Name": "GTOPO30",
        "Description": "Global elevation",
        "Copyright": "USGS",
        "Variables": ["elev"],
    }

    variables = configuration.variables_by_name()
    assert variables["prate"]["Units"] == "mm/month"

    assert configuration.get_data_source_id("WorldClim 1.4") == 2
    assert configuration.get_data_source_id("missing") is None
