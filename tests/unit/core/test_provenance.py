import numpy as np
import pytest

from fetchclimate.api.services.configuration.configuration_client import (
    FetchClimateConfiguration,
)
from fetchclimate.core.data_processing.provenance import (
    as_categorical,
    replace_provenance_ids_with_names,
)


@pytest.fixture
def configuration(configuration_json):
    return FetchClimateConfiguration.model_validate(configuration_json)


def test_ids_replaced_by_names(configuration):
    ids = np.array([[1.0, 2.0], [7.0, 1.0]])
    names = replace_provenance_ids_with_names(ids, configuration)

    assert names.shape == (2, 2)
    assert names.tolist() == [
        ["CRU CL 2.0", "WorldClim 1.4"],
        ["GTOPO30", "CRU CL 2.0"],
    ]


def test_unknown_id_keeps_raw_value(configuration):
    names = replace_provenance_ids_with_names([1.0, 42.0], configuration)
    assert names[0] == "CRU CL 2.0"
    assert names[1] == 42.0


def test_missing_stays_missing(configuration):
    names = replace_provenance_ids_with_names([np.nan, 2.0], configuration)
    assert np.isnan(names[0])
    assert names[1] == "WorldClim 1.4"


def test_uniform_explicit_id(configuration):
    names = replace_provenance_ids_with_names(np.full((3, 4), 2.0), configuration)
    assert set(names.ravel()) == {"WorldClim 1.4"}


def test_as_categorical(configuration):
    names = replace_provenance_ids_with_names([1.0, 2.0, 1.0], configuration)
    categorical = as_categorical(names)

    assert sorted(categorical.categories) == ["CRU CL 2.0", "WorldClim 1.4"]
    assert list(categorical) == ["CRU CL 2.0", "WorldClim 1.4", "CRU CL 2.0"]
