"""
fetchclimate - Python client for the FetchClimate Web service.

Extracts averaged environmental data (air temperature, precipitation rate,
wind speed, ...) published by a FetchClimate service for geo-locations and
time bounds, stitched from different data sets.

Time series: fetch_time_series_yearly, fetch_time_series_daily,
fetch_time_series_hourly
Gridded data: fetch_grid
Available data: fetch_data_sets, fetch_variables
"""

from fetchclimate.api.services.compute.compute_client import (
    ComputationTimeoutError,
    FetchClimateProtocolError,
    RemoteComputationError,
)
from fetchclimate.api.services.data_download import (
    fetch_data_sets,
    fetch_grid,
    fetch_time_series_daily,
    fetch_time_series_hourly,
    fetch_time_series_yearly,
    fetch_variables,
)
from fetchclimate.api.services.fetchclimate_client import (
    FetchClimateClient,
    TimeSeriesResult,
)
from fetchclimate.config.settings import FetchClimateConfig

__version__ = "0.2.0"

__all__ = [
    "ComputationTimeoutError",
    "FetchClimateClient",
    "FetchClimateConfig",
    "FetchClimateProtocolError",
    "RemoteComputationError",
    "TimeSeriesResult",
    "fetch_data_sets",
    "fetch_grid",
    "fetch_time_series_daily",
    "fetch_time_series_hourly",
    "fetch_time_series_yearly",
    "fetch_variables",
]
