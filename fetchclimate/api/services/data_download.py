"""
Public FetchClimate functions.

Blocking helpers over FetchClimateSyncAdapter. The service address comes
from the FetchClimateConfig passed in (FETCHCLIMATE_URL by default); the url
argument overrides it for a single call.

Examples:
    # Whole year averages, 1950..2000, one point
    result = fetch_time_series_yearly(
        "airt", latitude=75.5, longitude=57.7,
        first_year=1950, last_year=2000,
    )
    result.values.shape  # (1, 51)
    result.labels        # [1950, ..., 2000]

    # Diurnal cycle in Moscow, July 2008
    fetch_time_series_hourly(
        "airt", latitude=55.5, longitude=37.3,
        start_hour=0, stop_hour=23,
        first_day=183, last_day=213,
        first_year=2008, last_year=2008,
    )

    # Potential evapotranspiration, northern Africa, Januaries 2000-2010
    fetch_grid(
        "pet",
        latitude_from=0, latitude_to=35, latitude_by=1,
        longitude_from=-25, longitude_to=50, longitude_by=1,
        first_day=1, last_day=31, first_year=2000, last_year=2010,
    )
"""

from typing import Any

import pandas as pd
import xarray as xr
from loguru import logger

from fetchclimate.api.services.fetchclimate_client import TimeSeriesResult
from fetchclimate.api.services.fetchclimate_sync_adapter import (
    FetchClimateSyncAdapter,
)
from fetchclimate.config.settings import FetchClimateConfig
from fetchclimate.core.request.request_builder import (
    ANY_DATA_SOURCE,
    NOW,
    DataSets,
    Timestamp,
)


def _adapter(
    config: FetchClimateConfig | None, url: str | None, verbose: bool
) -> FetchClimateSyncAdapter:
    config = (config or FetchClimateConfig()).with_url(url)
    return FetchClimateSyncAdapter(config=config, verbose=verbose)


def fetch_data_sets(
    url: str | None = None,
    timestamp: Timestamp = NOW,
    config: FetchClimateConfig | None = None,
) -> dict[str, dict[str, Any]]:
    """
    Data sources available on the service, keyed by name.

    Each entry has Name, Description, Copyright and Variables (the
    variables the source provides).

    Args:
        url: Service address (overrides config.base_url)
        timestamp: "NOW" (latest configuration) or a date such as
            "2016-06-01"
        config: Service configuration
    """
    return _adapter(config, url, False).list_data_sets_sync(timestamp)


def fetch_variables(
    url: str | None = None,
    timestamp: Timestamp = NOW,
    config: FetchClimateConfig | None = None,
) -> dict[str, dict[str, Any]]:
    """Environmental variables keyed by name (Name, Description, Units)."""
    return _adapter(config, url, False).list_variables_sync(timestamp)


def fetch_time_series_yearly(
    variable: str,
    latitude,
    longitude,
    first_year: int,
    last_year: int,
    first_day: int = 1,
    last_day: int = 365,
    start_hour: int = 0,
    stop_hour: int = 23,
    url: str | None = None,
    data_sets: DataSets = ANY_DATA_SOURCE,
    reproduce_for: Timestamp = NOW,
    verbose: bool = False,
    config: FetchClimateConfig | None = None,
) -> TimeSeriesResult:
    """
    Yearly time series for a point set.

    All bounds are inclusive. result.labels holds the years.

    Args:
        variable: Variable identifier (see fetch_variables())
        latitude: Latitude(s) of the points
        longitude: Longitude(s) of the points, same length as latitude
        first_year: First year of the series
        last_year: Last year of the series
        first_day: First day of the within-year averaging window
        last_day: Last day of the within-year averaging window
        start_hour: First hour of the within-day averaging window
        stop_hour: Last hour of the within-day averaging window
        url: Service address (overrides config.base_url)
        data_sets: "ANY" to stitch all sources, or data set name(s)
        reproduce_for: "NOW" or the date the result must correspond to
        verbose: Log requests and job status at INFO level
        config: Service configuration

    Returns:
        TimeSeriesResult with N x M values, sd and provenance
    """
    logger.info(
        f"Yearly time series '{variable}' | {first_year}-{last_year}"
    )
    return _adapter(config, url, verbose).get_time_series_yearly_sync(
        variable,
        latitude,
        longitude,
        first_year=first_year,
        last_year=last_year,
        first_day=first_day,
        last_day=last_day,
        start_hour=start_hour,
        stop_hour=stop_hour,
        data_sets=data_sets,
        reproduce_for=reproduce_for,
    )


def fetch_time_series_daily(
    variable: str,
    latitude,
    longitude,
    first_day: int = 1,
    last_day: int = 365,
    first_year: int = 1961,
    last_year: int = 1990,
    start_hour: int = 0,
    stop_hour: int = 23,
    url: str | None = None,
    data_sets: DataSets = ANY_DATA_SOURCE,
    reproduce_for: Timestamp = NOW,
    verbose: bool = False,
    config: FetchClimateConfig | None = None,
) -> TimeSeriesResult:
    """Day-of-year time series; result.labels holds the days."""
    logger.info(f"Daily time series '{variable}' | days {first_day}-{last_day}")
    return _adapter(config, url, verbose).get_time_series_daily_sync(
        variable,
        latitude,
        longitude,
        first_day=first_day,
        last_day=last_day,
        first_year=first_year,
        last_year=last_year,
        start_hour=start_hour,
        stop_hour=stop_hour,
        data_sets=data_sets,
        reproduce_for=reproduce_for,
    )


def fetch_time_series_hourly(
    variable: str,
    latitude,
    longitude,
    start_hour: int,
    stop_hour: int,
    first_year: int = 1961,
    last_year: int = 1990,
    first_day: int = 1,
    last_day: int = 365,
    url: str | None = None,
    data_sets: DataSets = ANY_DATA_SOURCE,
    reproduce_for: Timestamp = NOW,
    verbose: bool = False,
    config: FetchClimateConfig | None = None,
) -> TimeSeriesResult:
    """Hour-of-day time series; result.labels holds the hours."""
    logger.info(
        f"Hourly time series '{variable}' | hours {start_hour}-{stop_hour}"
    )
    return _adapter(config, url, verbose).get_time_series_hourly_sync(
        variable,
        latitude,
        longitude,
        start_hour=start_hour,
        stop_hour=stop_hour,
        first_year=first_year,
        last_year=last_year,
        first_day=first_day,
        last_day=last_day,
        data_sets=data_sets,
        reproduce_for=reproduce_for,
    )


def fetch_grid(
    variable: str,
    latitude_from: float,
    latitude_to: float,
    latitude_by: float,
    longitude_from: float,
    longitude_to: float,
    longitude_by: float,
    first_year: int = 1961,
    last_year: int = 1990,
    first_day: int = 1,
    last_day: int = 365,
    start_hour: int = 0,
    stop_hour: int = 24,
    url: str | None = None,
    data_sets: DataSets = ANY_DATA_SOURCE,
    reproduce_for: Timestamp = NOW,
    verbose: bool = False,
    config: FetchClimateConfig | None = None,
    as_frame: bool = False,
) -> xr.Dataset | pd.DataFrame:
    """
    Average over one time window on a regular lon/lat grid.

    Args:
        latitude_from, latitude_to, latitude_by: Latitude axis (inclusive)
        longitude_from, longitude_to, longitude_by: Longitude axis (inclusive)
        stop_hour: Exclusive upper hour boundary (24 = whole day)
        as_frame: Return the flat lon/lat table instead of a Dataset
        (other arguments as in fetch_time_series_yearly)

    Returns:
        xarray Dataset indexed by lon/lat with values, sd and provenance,
        or a DataFrame with the same columns when as_frame is set
    """
    logger.info(
        f"Grid '{variable}' | lat {latitude_from}..{latitude_to} by "
        f"{latitude_by} | lon {longitude_from}..{longitude_to} by "
        f"{longitude_by}"
    )
    kwargs = dict(
        latitude_from=latitude_from,
        latitude_to=latitude_to,
        latitude_by=latitude_by,
        longitude_from=longitude_from,
        longitude_to=longitude_to,
        longitude_by=longitude_by,
        first_year=first_year,
        last_year=last_year,
        first_day=first_day,
        last_day=last_day,
        start_hour=start_hour,
        stop_hour=stop_hour,
        data_sets=data_sets,
        reproduce_for=reproduce_for,
    )
    adapter = _adapter(config, url, verbose)
    if as_frame:
        return adapter.get_grid_frame_sync(variable, **kwargs)
    return adapter.get_grid_sync(variable, **kwargs)
