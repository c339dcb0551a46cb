"""Tests for the compute request body."""

import json
from datetime import datetime, timezone
from unittest.mock import patch

import numpy as np
import pytest

from fetchclimate.core.request.request_builder import (
    MAX_TIMESTAMP,
    SpatialRegionType,
    build_request_body,
    encode_reproducibility_timestamp,
    format_configuration_timestamp,
    request_provenance,
)


def _points_body(**overrides):
    kwargs = dict(
        variable="airt",
        lats=[55.5, 75.5],
        lons=[37.3, 57.7],
        years=[1950, 1951, 1952, 1953],
        days=[1, 366],
        hours=[0, 24],
        spatial_region_type=SpatialRegionType.POINTS,
    )
    kwargs.update(overrides)
    return build_request_body(**kwargs)


class TestBuildRequestBody:
    def test_body_layout(self):
        body = _points_body()

        assert body["EnvironmentVariableName"] == "airt"
        domain = body["Domain"]
        assert domain["Lats"] == [55.5, 75.5]
        assert domain["Lons"] == [37.3, 57.7]
        assert domain["Lats2"] is None
        assert domain["Lons2"] is None
        assert domain["Mask"] is None
        assert domain["SpatialRegionType"] == "Points"

        time_region = domain["TimeRegion"]
        assert time_region["Years"] == [1950, 1951, 1952, 1953]
        assert time_region["Days"] == [1, 366]
        assert time_region["Hours"] == [0, 24]
        assert time_region["IsIntervalsGridYears"] is True
        assert time_region["IsIntervalsGridDays"] is True
        assert time_region["IsIntervalsGridHours"] is True

    def test_any_data_source_serializes_to_empty_string(self):
        body = _points_body(data_sets="ANY")
        assert body["ParticularDataSources"] == ""

    def test_explicit_data_sources_serialize_as_list(self):
        assert _points_body(data_sets="CRU CL 2.0")[
            "ParticularDataSources"
        ] == ["CRU CL 2.0"]
        assert _points_body(data_sets=["CRU CL 2.0", "WorldClim 1.4"])[
            "ParticularDataSources"
        ] == ["CRU CL 2.0", "WorldClim 1.4"]

    def test_grid_region_type(self):
        body = _points_body(
            lats=[0.0, 1.0],
            lons=[10.0, 11.0, 12.0],
            spatial_region_type=SpatialRegionType.POINT_GRID,
        )
        assert body["Domain"]["SpatialRegionType"] == "PointGrid"
        assert body["Domain"]["Lons"] == [10.0, 11.0, 12.0]

    def test_numpy_inputs_are_json_serializable(self):
        body = _points_body(
            lats=np.array([1.5, 2.5]),
            lons=np.array([3.5, 4.5]),
            years=np.arange(2000, 2003),
        )
        decoded = json.loads(json.dumps(body))
        assert decoded["Domain"]["Lats"] == [1.5, 2.5]
        assert decoded["Domain"]["TimeRegion"]["Years"] == [2000, 2001, 2002]


class TestReproducibilityTimestamp:
    def test_now_is_max_sentinel(self):
        assert encode_reproducibility_timestamp("NOW") == 253404979199999
        assert _points_body()["ReproducibilityTimestamp"] == MAX_TIMESTAMP

    def test_now_does_not_depend_on_wall_clock(self):
        with patch(
            "fetchclimate.core.request.request_builder.datetime"
        ) as fake_datetime:
            fake_datetime.now.return_value = datetime(1999, 1, 1)
            assert encode_reproducibility_timestamp("NOW") == MAX_TIMESTAMP

    def test_historical_date_is_wrapped(self):
        encoded = encode_reproducibility_timestamp("2016-06-01")
        assert encoded == "/Date(1464739200000+0000)/"

    def test_aware_datetime_is_converted_to_utc(self):
        moment = datetime(2016, 6, 1, 0, 0, tzinfo=timezone.utc)
        assert (
            encode_reproducibility_timestamp(moment)
            == "/Date(1464739200000+0000)/"
        )

    def test_configuration_timestamp(self):
        assert format_configuration_timestamp("NOW") is None
        assert (
            format_configuration_timestamp("2016-06-01")
            == "2016-06-01T00:00Z"
        )
        assert (
            format_configuration_timestamp(datetime(2014, 3, 2, 10, 45))
            == "2014-03-02T10:45Z"
        )


@pytest.mark.parametrize(
    "data_sets, expected",
    [
        ("ANY", True),
        (["ANY"], True),
        ("CRU CL 2.0", False),
        (["CRU CL 2.0"], False),
        (["CRU CL 2.0", "WorldClim 1.4"], True),
    ],
)
def test_request_provenance(data_sets, expected):
    assert request_provenance(data_sets) is expected
