"""Tests for the command line and the settings it builds."""

import pytest
import respx
from httpx import Response

from fetchclimate.__main__ import build_parser, main
from fetchclimate.config.settings import DEFAULT_URL, FetchClimateConfig


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in (
            "FETCHCLIMATE_URL",
            "FETCHCLIMATE_TIMEOUT",
            "FETCHCLIMATE_POLL_INTERVAL",
            "FETCHCLIMATE_MAX_WAIT",
        ):
            monkeypatch.delenv(name, raising=False)

        config = FetchClimateConfig()
        assert config.base_url == DEFAULT_URL
        assert config.poll_interval == 5
        assert config.max_wait is None

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("FETCHCLIMATE_URL", "http://private.test/")
        monkeypatch.setenv("FETCHCLIMATE_MAX_WAIT", "120")

        config = FetchClimateConfig()
        assert config.base_url == "http://private.test/"
        assert config.max_wait == 120.0

    def test_with_url(self, fc_config):
        assert fc_config.with_url(None) is fc_config
        other = fc_config.with_url("http://other.test")
        assert other.base_url == "http://other.test"
        assert other.poll_interval == fc_config.poll_interval


class TestParser:
    def test_grid_defaults_to_whole_day(self):
        args = build_parser().parse_args(
            ["grid", "pet", "--lat-range", "0", "35", "1",
             "--lon-range", "-25", "50", "1"]
        )
        assert args.stop_hour == 24
        assert args.lat_range == [0.0, 35.0, 1.0]
        assert args.data_sets == ["ANY"]

    def test_point_commands_require_coordinates(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["yearly", "airt"])


def test_datasets_command(base_url, configuration_json, capsys):
    with respx.mock(base_url=base_url) as mock:
        mock.get("/api/configuration").mock(
            return_value=Response(200, json=configuration_json)
        )
        code = main(["datasets", "--url", base_url])

    assert code == 0
    out = capsys.readouterr().out
    assert "CRU CL 2.0" in out
    assert "GTOPO30" in out


def test_yearly_command(base_url, configuration_json, capsys):
    with respx.mock(base_url=base_url) as mock:
        mock.get("/api/configuration").mock(
            return_value=Response(200, json=configuration_json)
        )
        mock.post("/api/compute").mock(
            return_value=Response(200, text="completed=msds:az?name=1")
        )
        mock.get("/jsproxy/data").mock(
            return_value=Response(
                200,
                json={
                    "values": [[1.5, 2.5]],
                    "sd": [[0.1, 0.2]],
                    "provenance": [[1, 2]],
                },
            )
        )
        code = main(
            ["yearly", "airt", "--lat", "75.5", "--lon", "57.7",
             "--first-year", "1950", "--last-year", "1951",
             "--url", base_url, "--poll-interval", "0"]
        )

    assert code == 0
    out = capsys.readouterr().out
    assert "1950" in out
    assert "WorldClim 1.4" in out


def test_service_error_returns_nonzero(base_url):
    with respx.mock(base_url=base_url) as mock:
        mock.get("/api/configuration").mock(return_value=Response(500))
        code = main(["variables", "--url", base_url])

    assert code == 1
