from .provenance import as_categorical, replace_provenance_ids_with_names
from .response_reshaper import (
    PointMatrices,
    grid_to_dataset,
    reshape_grid,
    reshape_points_timeseries,
    stretch_grid,
    to_missing,
)

__all__ = [
    "PointMatrices",
    "as_categorical",
    "grid_to_dataset",
    "replace_provenance_ids_with_names",
    "reshape_grid",
    "reshape_points_timeseries",
    "stretch_grid",
    "to_missing",
]
