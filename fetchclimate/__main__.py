"""
FetchClimate command line.

Usage:
    python -m fetchclimate datasets
    python -m fetchclimate variables --timestamp 2016-06-01
    python -m fetchclimate yearly airt --lat 75.5 --lon 57.7 \
        --first-year 1950 --last-year 1960
    python -m fetchclimate hourly airt --lat 55.5 --lon 37.3 \
        --start-hour 0 --stop-hour 23 --first-day 183 --last-day 213 \
        --first-year 2008 --last-year 2008
    python -m fetchclimate grid pet --lat-range 0 35 1 --lon-range -25 50 1 \
        --first-day 1 --last-day 31 --first-year 2000 --last-year 2010
"""

import argparse
import sys

import pandas as pd
from loguru import logger

from fetchclimate.api.services.data_download import (
    fetch_data_sets,
    fetch_grid,
    fetch_time_series_daily,
    fetch_time_series_hourly,
    fetch_time_series_yearly,
    fetch_variables,
)
from fetchclimate.api.services.fetchclimate_client import TimeSeriesResult
from fetchclimate.config.logging_config import setup_logging
from fetchclimate.config.settings import FetchClimateConfig


def _add_service_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--url", help="FetchClimate service address")
    parser.add_argument(
        "--timestamp",
        default="NOW",
        help='Reproducibility timestamp ("NOW" or YYYY-MM-DD)',
    )
    parser.add_argument(
        "--poll-interval",
        type=float,
        help="Seconds between job status requests",
    )
    parser.add_argument(
        "--max-wait",
        type=float,
        help="Give up when the job is not done after this many seconds",
    )
    parser.add_argument("--verbose", action="store_true")


def _add_window_arguments(parser: argparse.ArgumentParser, stop_hour: int):
    parser.add_argument("variable", help='Variable identifier, e.g. "airt"')
    parser.add_argument(
        "--data-sets",
        nargs="+",
        default=["ANY"],
        help='Data set names, or "ANY" to stitch all sources',
    )
    parser.add_argument("--first-year", type=int, default=1961)
    parser.add_argument("--last-year", type=int, default=1990)
    parser.add_argument("--first-day", type=int, default=1)
    parser.add_argument("--last-day", type=int, default=365)
    parser.add_argument("--start-hour", type=int, default=0)
    parser.add_argument("--stop-hour", type=int, default=stop_hour)
    _add_service_arguments(parser)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fetchclimate",
        description="Fetch averaged environmental data from FetchClimate",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    for name, text in (
        ("datasets", "List available data sets"),
        ("variables", "List available variables"),
    ):
        _add_service_arguments(commands.add_parser(name, help=text))

    for name, text in (
        ("yearly", "Time series varying by year"),
        ("daily", "Time series varying by day of year"),
        ("hourly", "Time series varying by hour of day"),
    ):
        points = commands.add_parser(name, help=text)
        _add_window_arguments(points, stop_hour=23)
        points.add_argument("--lat", type=float, nargs="+", required=True)
        points.add_argument("--lon", type=float, nargs="+", required=True)

    grid = commands.add_parser("grid", help="Grid average over one window")
    _add_window_arguments(grid, stop_hour=24)
    grid.add_argument(
        "--lat-range",
        type=float,
        nargs=3,
        metavar=("FROM", "TO", "BY"),
        required=True,
    )
    grid.add_argument(
        "--lon-range",
        type=float,
        nargs=3,
        metavar=("FROM", "TO", "BY"),
        required=True,
    )
    return parser


def _config(args) -> FetchClimateConfig:
    config = FetchClimateConfig().with_url(args.url)
    updates = {}
    if args.poll_interval is not None:
        updates["poll_interval"] = args.poll_interval
    if args.max_wait is not None:
        updates["max_wait"] = args.max_wait
    return config.model_copy(update=updates)


def time_series_table(result: TimeSeriesResult) -> pd.DataFrame:
    """Long table: one row per (point, time bin)."""
    frames = []
    for i, (lat, lon) in enumerate(zip(result.latitude, result.longitude)):
        frames.append(
            pd.DataFrame(
                {
                    "lat": lat,
                    "lon": lon,
                    result.axis: result.labels,
                    "values": result.values[i],
                    "sd": result.sd[i],
                    "provenance": result.provenance[i],
                }
            )
        )
    return pd.concat(frames, ignore_index=True)


def run(args) -> pd.DataFrame:
    config = _config(args)

    if args.command == "datasets":
        data_sets = fetch_data_sets(timestamp=args.timestamp, config=config)
        return pd.DataFrame(data_sets.values())
    if args.command == "variables":
        variables = fetch_variables(timestamp=args.timestamp, config=config)
        return pd.DataFrame(variables.values())

    common = dict(
        first_year=args.first_year,
        last_year=args.last_year,
        first_day=args.first_day,
        last_day=args.last_day,
        start_hour=args.start_hour,
        stop_hour=args.stop_hour,
        data_sets=args.data_sets,
        reproduce_for=args.timestamp,
        verbose=args.verbose,
        config=config,
    )

    if args.command == "grid":
        lat_from, lat_to, lat_by = args.lat_range
        lon_from, lon_to, lon_by = args.lon_range
        return fetch_grid(
            args.variable,
            latitude_from=lat_from,
            latitude_to=lat_to,
            latitude_by=lat_by,
            longitude_from=lon_from,
            longitude_to=lon_to,
            longitude_by=lon_by,
            as_frame=True,
            **common,
        )

    fetchers = {
        "yearly": fetch_time_series_yearly,
        "daily": fetch_time_series_daily,
        "hourly": fetch_time_series_hourly,
    }
    result = fetchers[args.command](
        args.variable, args.lat, args.lon, **common
    )
    return time_series_table(result)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(log_level="INFO" if args.verbose else "WARNING")

    try:
        table = run(args)
    except Exception as e:
        logger.error(f"{args.command} failed: {e}")
        return 1

    print(table.to_string(index=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
