from .request_builder import (
    ANY_DATA_SOURCE,
    MAX_TIMESTAMP,
    NOW,
    SpatialRegionType,
    build_request_body,
    encode_reproducibility_timestamp,
    format_configuration_timestamp,
    request_provenance,
)
from .time_bins import bin_labels, inclusive_axis, interval_bins, single_bin

__all__ = [
    "ANY_DATA_SOURCE",
    "MAX_TIMESTAMP",
    "NOW",
    "SpatialRegionType",
    "bin_labels",
    "build_request_body",
    "encode_reproducibility_timestamp",
    "format_configuration_timestamp",
    "inclusive_axis",
    "interval_bins",
    "request_provenance",
    "single_bin",
]
