"""
FetchClimate configuration client.

API: GET {base_url}/api/configuration[?timestamp=YYYY-MM-DDTHH:MMZ]

The configuration lists the data sources and the environmental variables
available on a service instance at a given reproducibility timestamp.
Omitting the timestamp returns the latest configuration.

Response (abridged):
    {
      "DataSources": [
        {"ID": 1, "Name": "CRU CL 2.0", "Description": "...",
         "Copyright": "...", "ProvidedVariables": ["airt", "prate"]}
      ],
      "EnvironmentalVariables": [
        {"Name": "airt", "Description": "Air temperature near surface",
         "Units": "Degrees C"}
      ]
    }

No retries: a failed request propagates httpx.HTTPError to the caller.
"""

from typing import Any

import httpx
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from fetchclimate.config.settings import FetchClimateConfig
from fetchclimate.core.request.request_builder import (
    NOW,
    Timestamp,
    format_configuration_timestamp,
)


class DataSourceInfo(BaseModel):
    """Data source entry of the configuration catalog."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., alias="ID")
    name: str = Field(..., alias="Name")
    description: str | None = Field(None, alias="Description")
    copyright: str | None = Field(None, alias="Copyright")
    provided_variables: list[str] = Field(
        default_factory=list, alias="ProvidedVariables"
    )


class VariableInfo(BaseModel):
    """Environmental variable entry of the configuration catalog."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., alias="Name")
    description: str | None = Field(None, alias="Description")
    units: str | None = Field(None, alias="Units")


class FetchClimateConfiguration(BaseModel):
    """Catalog of one service instance at one reproducibility timestamp."""

    model_config = ConfigDict(populate_by_name=True)

    data_sources: list[DataSourceInfo] = Field(
        default_factory=list, alias="DataSources"
    )
    variables: list[VariableInfo] = Field(
        default_factory=list, alias="EnvironmentalVariables"
    )

    def get_data_source_id(self, name: str) -> int | None:
        for source in self.data_sources:
            if source.name == name:
                return source.id
        return None

    def data_sets(self) -> dict[str, dict[str, Any]]:
        """Data sources keyed by name."""
        return {
            source.name: {
                "Name": source.name,
                "Description": source.description,
                "Copyright": source.copyright,
                "Variables": list(source.provided_variables),
            }
            for source in self.data_sources
        }

    def variables_by_name(self) -> dict[str, dict[str, Any]]:
        """Environmental variables keyed by name."""
        return {
            variable.name: {
                "Name": variable.name,
                "Description": variable.description,
                "Units": variable.units,
            }
            for variable in self.variables
        }


class ConfigurationClient:
    """Client for the /api/configuration endpoint."""

    def __init__(
        self,
        config: FetchClimateConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Args:
            config: Service configuration (base URL, timeout)
            client: Shared AsyncClient; a private one is created otherwise
        """
        self.config = config or FetchClimateConfig()
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
        )

    async def close(self):
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def get_configuration(
        self, reproduce_for: Timestamp = NOW
    ) -> FetchClimateConfiguration:
        """
        Fetch the configuration catalog.

        Args:
            reproduce_for: "NOW" or a historical timestamp

        Returns:
            FetchClimateConfiguration

        Raises:
            httpx.HTTPError: Connection failure or non-2xx status
        """
        params = {}
        timestamp = format_configuration_timestamp(reproduce_for)
        if timestamp is not None:
            params["timestamp"] = timestamp

        logger.info(f"Fetching FetchClimate configuration | params={params}")

        try:
            response = await self.client.get(
                "/api/configuration",
                params=params,
                headers={"Accept": "application/json"},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Configuration request failed: {e}")
            raise

        configuration = FetchClimateConfiguration.model_validate(
            response.json()
        )
        logger.debug(
            f"Configuration: {len(configuration.data_sources)} data sources, "
            f"{len(configuration.variables)} variables"
        )
        return configuration
