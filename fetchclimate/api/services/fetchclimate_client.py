"""
FetchClimate client - time series and grids with provenance.

One logical fetch performs, in order:
1. GET /api/configuration (catalog for the reproducibility timestamp)
2. POST /api/compute and GET /api/status until the job is terminal
3. GET /jsproxy/data (values, sd and, for multi-source requests, provenance)

The raw arrays are reshaped into point x time matrices or a lon/lat raster,
and data source ids are replaced with data source names.

Defaults of the yearly/daily/hourly helpers follow the FetchClimate R
client: climatology window 1961-1990, whole year (days 1-365), whole day
(hours 0-23).
"""

from dataclasses import dataclass, field
from typing import Any, Sequence

import httpx
import numpy as np
import pandas as pd
import xarray as xr
from loguru import logger

from fetchclimate.api.services.compute.compute_client import ComputeClient
from fetchclimate.api.services.configuration.configuration_client import (
    ConfigurationClient,
    FetchClimateConfiguration,
)
from fetchclimate.config.settings import FetchClimateConfig
from fetchclimate.core.data_processing.provenance import (
    as_categorical,
    replace_provenance_ids_with_names,
)
from fetchclimate.core.data_processing.response_reshaper import (
    grid_to_dataset,
    reshape_points_timeseries,
    stretch_grid,
)
from fetchclimate.core.request.request_builder import (
    ANY_DATA_SOURCE,
    NOW,
    DataSets,
    SpatialRegionType,
    Timestamp,
    build_request_body,
    normalize_data_sets,
    request_provenance,
)
from fetchclimate.core.request.time_bins import (
    bin_labels,
    inclusive_axis,
    interval_bins,
    single_bin,
)


@dataclass
class TimeSeriesResult:
    """
    Point time series.

    values, sd and provenance are N x M arrays (N = number of points,
    M = number of time bins). labels holds the lower bound of each bin of
    the varied axis ("years", "days" or "hours").
    """

    values: np.ndarray
    sd: np.ndarray
    provenance: np.ndarray
    axis: str
    labels: list[int]
    latitude: np.ndarray = field(default_factory=lambda: np.empty(0))
    longitude: np.ndarray = field(default_factory=lambda: np.empty(0))

    def to_dataset(self) -> xr.Dataset:
        dims = ("point", self.axis)
        return xr.Dataset(
            {
                "values": (dims, self.values),
                "sd": (dims, self.sd),
                "provenance": (dims, self.provenance),
            },
            coords={
                self.axis: self.labels,
                "lat": ("point", self.latitude),
                "lon": ("point", self.longitude),
            },
        )


def _as_points(values: Any) -> np.ndarray:
    return np.atleast_1d(np.asarray(values, dtype=float))


class FetchClimateClient:
    """
    Async FetchClimate client.

    Example:
        async with FetchClimateClient() as client:
            result = await client.get_time_series_yearly(
                "airt", latitude=75.5, longitude=57.7,
                first_year=1950, last_year=2000,
            )
    """

    def __init__(self, config: FetchClimateConfig | None = None, verbose: bool = False):
        self.config = config or FetchClimateConfig()
        self.verbose = verbose
        self.client = httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
        )
        self.configuration_client = ConfigurationClient(
            config=self.config, client=self.client
        )
        self.compute_client = ComputeClient(
            config=self.config, client=self.client, verbose=verbose
        )
        logger.info(
            f"FetchClimateClient initialized | base_url={self.config.base_url}"
        )

    async def close(self):
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def get_configuration(
        self, reproduce_for: Timestamp = NOW
    ) -> FetchClimateConfiguration:
        return await self.configuration_client.get_configuration(reproduce_for)

    async def list_data_sets(
        self, reproduce_for: Timestamp = NOW
    ) -> dict[str, dict[str, Any]]:
        """Data sources available at reproduce_for, keyed by name."""
        configuration = await self.get_configuration(reproduce_for)
        return configuration.data_sets()

    async def list_variables(
        self, reproduce_for: Timestamp = NOW
    ) -> dict[str, dict[str, Any]]:
        """Environmental variables available at reproduce_for, keyed by name."""
        configuration = await self.get_configuration(reproduce_for)
        return configuration.variables_by_name()

    def _explicit_provenance(
        self, configuration: FetchClimateConfiguration, data_sets: DataSets
    ) -> int | None:
        if request_provenance(data_sets):
            return None

        name = normalize_data_sets(data_sets)[0]
        source_id = configuration.get_data_source_id(name)
        if source_id is None:
            msg = f"Unknown data source: {name!r}"
            logger.error(msg)
            raise ValueError(msg)
        return source_id

    def _log_request(self, body: dict[str, Any]):
        level = "INFO" if self.verbose else "DEBUG"
        logger.log(level, f"Request JSON: {body}")

    async def get_time_series(
        self,
        variable: str,
        latitude,
        longitude,
        years: Sequence[int],
        days: Sequence[int],
        hours: Sequence[int],
        data_sets: DataSets = ANY_DATA_SOURCE,
        reproduce_for: Timestamp = NOW,
        axis: str = "years",
    ) -> TimeSeriesResult:
        """
        Fetch a time series for a point set.

        Args:
            variable: Environmental variable name
            latitude: Latitude or sequence of latitudes
            longitude: Longitude or sequence of longitudes (same length)
            years: Year bin boundaries
            days: Day-of-year bin boundaries
            hours: Hour-of-day bin boundaries
            data_sets: "ANY" or data source name(s)
            reproduce_for: "NOW" or a historical timestamp
            axis: Which of years/days/hours is varied

        Returns:
            TimeSeriesResult

        Raises:
            ValueError: latitude/longitude length mismatch, unknown source
        """
        lats = _as_points(latitude)
        lons = _as_points(longitude)
        if len(lats) != len(lons):
            raise ValueError("lon and lat must be the same length")

        bounds = {"years": years, "days": days, "hours": hours}
        if axis not in bounds:
            raise ValueError(f"axis must be one of {sorted(bounds)}")

        body = build_request_body(
            variable,
            lats,
            lons,
            years,
            days,
            hours,
            spatial_region_type=SpatialRegionType.POINTS,
            data_sets=data_sets,
            reproduce_for=reproduce_for,
        )
        self._log_request(body)

        configuration = await self.get_configuration(reproduce_for)
        explicit_id = self._explicit_provenance(configuration, data_sets)

        payload = await self.compute_client.compute(
            body, request_provenance=explicit_id is None
        )
        matrices = reshape_points_timeseries(payload, explicit_id)
        provenance = replace_provenance_ids_with_names(
            matrices.provenance, configuration
        )

        logger.info(
            f"Time series '{variable}' | points={len(lats)} | "
            f"{axis}={matrices.values.shape[1]}"
        )
        return TimeSeriesResult(
            values=matrices.values,
            sd=matrices.sd,
            provenance=provenance,
            axis=axis,
            labels=bin_labels(list(bounds[axis])),
            latitude=lats,
            longitude=lons,
        )

    async def get_time_series_yearly(
        self,
        variable: str,
        latitude,
        longitude,
        first_year: int,
        last_year: int,
        first_day: int = 1,
        last_day: int = 365,
        start_hour: int = 0,
        stop_hour: int = 23,
        data_sets: DataSets = ANY_DATA_SOURCE,
        reproduce_for: Timestamp = NOW,
    ) -> TimeSeriesResult:
        """One bin per year from first_year to last_year inclusive."""
        return await self.get_time_series(
            variable,
            latitude,
            longitude,
            years=interval_bins(first_year, last_year),
            days=single_bin(first_day, last_day),
            hours=single_bin(start_hour, stop_hour),
            data_sets=data_sets,
            reproduce_for=reproduce_for,
            axis="years",
        )

    async def get_time_series_daily(
        self,
        variable: str,
        latitude,
        longitude,
        first_day: int = 1,
        last_day: int = 365,
        first_year: int = 1961,
        last_year: int = 1990,
        start_hour: int = 0,
        stop_hour: int = 23,
        data_sets: DataSets = ANY_DATA_SOURCE,
        reproduce_for: Timestamp = NOW,
    ) -> TimeSeriesResult:
        """One bin per day of year, averaged over first_year..last_year."""
        return await self.get_time_series(
            variable,
            latitude,
            longitude,
            years=single_bin(first_year, last_year),
            days=interval_bins(first_day, last_day),
            hours=single_bin(start_hour, stop_hour),
            data_sets=data_sets,
            reproduce_for=reproduce_for,
            axis="days",
        )

    async def get_time_series_hourly(
        self,
        variable: str,
        latitude,
        longitude,
        start_hour: int,
        stop_hour: int,
        first_year: int = 1961,
        last_year: int = 1990,
        first_day: int = 1,
        last_day: int = 365,
        data_sets: DataSets = ANY_DATA_SOURCE,
        reproduce_for: Timestamp = NOW,
    ) -> TimeSeriesResult:
        """One bin per hour of day (diurnal cycle)."""
        return await self.get_time_series(
            variable,
            latitude,
            longitude,
            years=single_bin(first_year, last_year),
            days=single_bin(first_day, last_day),
            hours=interval_bins(start_hour, stop_hour),
            data_sets=data_sets,
            reproduce_for=reproduce_for,
            axis="hours",
        )

    async def get_grid_frame(
        self,
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
        data_sets: DataSets = ANY_DATA_SOURCE,
        reproduce_for: Timestamp = NOW,
    ) -> pd.DataFrame:
        """
        Fetch a grid average as a flat (lon, lat) table.

        The hour bounds are passed through as given: stop_hour is already the
        exclusive upper boundary (24 = end of day).

        Returns:
            DataFrame with columns lon, lat, values, sd, provenance
            (provenance as a categorical of data source names)
        """
        lats = inclusive_axis(latitude_from, latitude_to, latitude_by)
        lons = inclusive_axis(longitude_from, longitude_to, longitude_by)

        body = build_request_body(
            variable,
            lats,
            lons,
            years=single_bin(first_year, last_year),
            days=single_bin(first_day, last_day),
            hours=[start_hour, stop_hour],
            spatial_region_type=SpatialRegionType.POINT_GRID,
            data_sets=data_sets,
            reproduce_for=reproduce_for,
        )
        self._log_request(body)

        configuration = await self.get_configuration(reproduce_for)
        explicit_id = self._explicit_provenance(configuration, data_sets)

        payload = await self.compute_client.compute(
            body, request_provenance=explicit_id is None
        )
        frame = stretch_grid(payload, lats, lons, explicit_id)
        frame["provenance"] = as_categorical(
            replace_provenance_ids_with_names(
                frame["provenance"].to_numpy(), configuration
            )
        )

        logger.info(
            f"Grid '{variable}' | {len(lats)} lats x {len(lons)} lons"
        )
        return frame

    async def get_grid(self, variable: str, *args, **kwargs) -> xr.Dataset:
        """
        Fetch a grid average as an xarray Dataset indexed by lon/lat.

        Accepts the same arguments as get_grid_frame(). The Dataset carries
        values, sd and provenance (data source names) variables and the
        attributes crs="+proj=longlat" and gridded=True.
        """
        frame = await self.get_grid_frame(variable, *args, **kwargs)
        frame["provenance"] = np.asarray(frame["provenance"], dtype=object)
        dataset = grid_to_dataset(frame)
        dataset.attrs["variable"] = variable
        return dataset
