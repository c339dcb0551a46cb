"""Data source id -> data source name resolution."""

import numpy as np
import pandas as pd

from fetchclimate.api.services.configuration.configuration_client import (
    FetchClimateConfiguration,
)


def replace_provenance_ids_with_names(
    ids, configuration: FetchClimateConfiguration
) -> np.ndarray:
    """
    Replace every data source id by its catalog name.

    Ids missing from the catalog keep their numeric value; NaN stays NaN.

    Args:
        ids: Array (any shape) or scalar of numeric data source ids
        configuration: Catalog fetched for the same reproducibility timestamp

    Returns:
        Object array of the same shape as ids
    """
    ids = np.asarray(ids, dtype=float)
    names = ids.astype(object)
    for source in configuration.data_sources:
        names[ids == source.id] = source.name
    return names


def as_categorical(names) -> pd.Categorical:
    """Flat categorical view of resolved provenance names."""
    return pd.Categorical(np.asarray(names, dtype=object).ravel())
