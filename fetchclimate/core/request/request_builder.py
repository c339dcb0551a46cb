"""
Request body construction for the FetchClimate compute endpoint.

The JSON shape is the one produced by the service's own request form
(http://fetchclimate2.cloudapp.net/form):

    {
      "EnvironmentVariableName": "airt",
      "ParticularDataSources": "",              # "" = any source (stitching)
      "Domain": {
        "Lats": [...], "Lats2": null,
        "Lons": [...], "Lons2": null,
        "TimeRegion": {"Years": [...], "Days": [...], "Hours": [...],
                       "IsIntervalsGridYears": true, ...},
        "Mask": null,
        "SpatialRegionType": "Points" | "PointGrid"
      },
      "ReproducibilityTimestamp": 253404979199999 | "/Date(...+0000)/"
    }

Inputs are assumed well formed; callers validate lengths.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Sequence, Union

from loguru import logger

ANY_DATA_SOURCE = "ANY"
NOW = "NOW"

# DateTime.MaxValue on the service side, meaning "latest configuration"
MAX_TIMESTAMP = 253404979199999

Timestamp = Union[str, datetime]
DataSets = Union[str, Sequence[str]]


class SpatialRegionType(str, Enum):
    POINTS = "Points"
    POINT_GRID = "PointGrid"


def is_now(reproduce_for: Timestamp) -> bool:
    return isinstance(reproduce_for, str) and reproduce_for.upper() == NOW


def parse_timestamp(reproduce_for: Timestamp) -> datetime:
    """Interpret a historical timestamp as a UTC datetime."""
    if isinstance(reproduce_for, datetime):
        moment = reproduce_for
    else:
        moment = datetime.fromisoformat(reproduce_for)

    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def encode_reproducibility_timestamp(reproduce_for: Timestamp) -> int | str:
    """
    Encode the reproducibility timestamp for the request body.

    "NOW" maps to the fixed maximum instant. Historical instants use the
    WCF date wrapper "/Date(<ms since epoch>+0000)/".
    """
    if is_now(reproduce_for):
        return MAX_TIMESTAMP

    moment = parse_timestamp(reproduce_for)
    milliseconds = int(round(moment.timestamp() * 1000))
    return f"/Date({milliseconds}+0000)/"


def format_configuration_timestamp(reproduce_for: Timestamp) -> str | None:
    """Minute resolution timestamp for /api/configuration, None for NOW."""
    if is_now(reproduce_for):
        return None
    return parse_timestamp(reproduce_for).strftime("%Y-%m-%dT%H:%MZ")


def normalize_data_sets(data_sets: DataSets) -> list[str]:
    if isinstance(data_sets, str):
        return [data_sets]
    return list(data_sets)


def request_provenance(data_sets: DataSets) -> bool:
    """Provenance is only meaningful when several sources may contribute."""
    names = normalize_data_sets(data_sets)
    return len(names) > 1 or names == [ANY_DATA_SOURCE]


def encode_data_sets(data_sets: DataSets) -> str | list[str]:
    names = normalize_data_sets(data_sets)
    if names == [ANY_DATA_SOURCE]:
        return ""
    return names


def _as_list(values: Sequence[float]) -> list:
    # numpy arrays and ranges serialise as plain JSON lists
    return [v.item() if hasattr(v, "item") else v for v in values]


def build_request_body(
    variable: str,
    lats: Sequence[float],
    lons: Sequence[float],
    years: Sequence[int],
    days: Sequence[int],
    hours: Sequence[int],
    spatial_region_type: SpatialRegionType,
    data_sets: DataSets = ANY_DATA_SOURCE,
    reproduce_for: Timestamp = NOW,
) -> dict[str, Any]:
    """
    Build the compute request for a point set or a rectilinear grid.

    Args:
        variable: Environmental variable name (e.g. "airt")
        lats: Latitudes of the points, or the grid latitude axis
        lons: Longitudes of the points, or the grid longitude axis
        years: Year bin boundaries (K+1 values for K bins)
        days: Day-of-year bin boundaries
        hours: Hour-of-day bin boundaries
        spatial_region_type: Points or PointGrid
        data_sets: "ANY" or one or more data source names
        reproduce_for: "NOW" or a historical timestamp

    Returns:
        dict ready to be sent as the JSON body of POST /api/compute
    """
    time_region = {
        "Years": _as_list(years),
        "Days": _as_list(days),
        "Hours": _as_list(hours),
        "IsIntervalsGridYears": True,
        "IsIntervalsGridDays": True,
        "IsIntervalsGridHours": True,
    }

    domain = {
        "Lats": _as_list(lats),
        "Lats2": None,
        "Lons": _as_list(lons),
        "Lons2": None,
        "TimeRegion": time_region,
        "Mask": None,
        "SpatialRegionType": SpatialRegionType(spatial_region_type).value,
    }

    body = {
        "EnvironmentVariableName": variable,
        "ParticularDataSources": encode_data_sets(data_sets),
        "Domain": domain,
        "ReproducibilityTimestamp": encode_reproducibility_timestamp(
            reproduce_for
        ),
    }

    logger.debug(
        f"Request built | variable={variable} | "
        f"region={domain['SpatialRegionType']} | "
        f"lats={len(domain['Lats'])} lons={len(domain['Lons'])}"
    )
    return body
