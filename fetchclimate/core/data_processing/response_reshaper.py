"""
Reshaping of FetchClimate result arrays.

Missing values arrive as JSON null and become NaN as soon as the payload is
turned into numpy arrays; NaN is the only missing-value marker used after
this point.

Point requests return one row per location and one column per time bin.
Grid requests return one row per longitude and one column per latitude,
which is stretched into a flat (lon, lat) table and then into an xarray
Dataset addressable by lon/lat.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np
import pandas as pd
import xarray as xr
from loguru import logger

from fetchclimate.api.services.compute.compute_client import (
    ComputeResultPayload,
)

UNPROJECTED_CRS = "+proj=longlat"


@dataclass
class PointMatrices:
    """N x M matrices: row = location, column = time bin."""

    values: np.ndarray
    sd: np.ndarray
    provenance: np.ndarray


def to_missing(rows: Sequence[Sequence[float | None]]) -> np.ndarray:
    """Nested sequences with None -> float matrix with NaN."""
    matrix = np.array(rows, dtype=float)
    if matrix.ndim != 2:
        raise ValueError(
            f"Expected a nested array of rows, got {matrix.ndim} dimensions"
        )
    return matrix


def _provenance_matrix(
    payload: ComputeResultPayload,
    shape: tuple[int, int],
    explicit_provenance: int | None,
) -> np.ndarray:
    # A single explicit source means provenance was never requested
    if explicit_provenance is not None:
        return np.full(shape, float(explicit_provenance))

    if payload.provenance is None:
        raise ValueError("Result payload carries no provenance field")

    provenance = to_missing(payload.provenance)
    if provenance.shape != shape:
        raise ValueError(
            f"Provenance shape {provenance.shape} does not match values {shape}"
        )
    return provenance


def reshape_points_timeseries(
    payload: ComputeResultPayload,
    explicit_provenance: int | None = None,
) -> PointMatrices:
    """
    Convert a point request result into values/sd/provenance matrices.

    Args:
        payload: Decoded /jsproxy/data reply
        explicit_provenance: Data source id when a single source was used

    Returns:
        PointMatrices with N x M arrays
    """
    values = to_missing(payload.values)
    sd = to_missing(payload.sd)
    if sd.shape != values.shape:
        raise ValueError(f"sd shape {sd.shape} does not match {values.shape}")

    provenance = _provenance_matrix(payload, values.shape, explicit_provenance)

    n_points, n_bins = values.shape
    logger.debug(f"Reshaped time series | points={n_points} | bins={n_bins}")
    return PointMatrices(values=values, sd=sd, provenance=provenance)


def stretch_grid(
    payload: ComputeResultPayload,
    lats: Sequence[float],
    lons: Sequence[float],
    explicit_provenance: int | None = None,
) -> pd.DataFrame:
    """
    Flatten a grid result into (lon, lat, values, sd, provenance) rows.

    Rows are ordered with longitude as the outer loop and latitude as the
    inner loop, which is the order of the service arrays.
    """
    lats = np.asarray(lats, dtype=float)
    lons = np.asarray(lons, dtype=float)
    shape = (len(lons), len(lats))

    values = to_missing(payload.values)
    sd = to_missing(payload.sd)
    if values.shape != shape or sd.shape != shape:
        raise ValueError(
            f"Grid result shape {values.shape} does not match "
            f"{len(lons)} lons x {len(lats)} lats"
        )

    provenance = _provenance_matrix(payload, shape, explicit_provenance)

    frame = pd.DataFrame(
        {
            "lon": np.repeat(lons, len(lats)),
            "lat": np.tile(lats, len(lons)),
            "values": values.ravel(),
            "sd": sd.ravel(),
            "provenance": provenance.ravel(),
        }
    )
    logger.debug(f"Stretched grid | cells={len(frame)}")
    return frame


def grid_to_dataset(frame: pd.DataFrame) -> xr.Dataset:
    """Promote a stretched grid table to a regular lon/lat raster."""
    dataset = frame.set_index(["lon", "lat"]).to_xarray()
    dataset.attrs["crs"] = UNPROJECTED_CRS
    dataset.attrs["gridded"] = True
    dataset["lon"].attrs["units"] = "degrees_east"
    dataset["lat"].attrs["units"] = "degrees_north"
    return dataset


def reshape_grid(
    payload: ComputeResultPayload,
    lats: Sequence[float],
    lons: Sequence[float],
    explicit_provenance: int | None = None,
) -> xr.Dataset:
    return grid_to_dataset(
        stretch_grid(payload, lats, lons, explicit_provenance)
    )
