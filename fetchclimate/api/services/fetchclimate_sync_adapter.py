"""
Sync Adapter for the FetchClimate client.

Converts the asynchronous calls of FetchClimateClient into blocking methods
for scripts, notebooks and the command line. Each call opens its own HTTP
client and closes it when done; no state is shared between calls.
"""

import asyncio
import concurrent.futures
from typing import Any, Awaitable, Callable, TypeVar

import pandas as pd
import xarray as xr
from loguru import logger

from fetchclimate.api.services.fetchclimate_client import (
    FetchClimateClient,
    TimeSeriesResult,
)
from fetchclimate.config.settings import FetchClimateConfig

T = TypeVar("T")


class FetchClimateSyncAdapter:
    """Synchronous adapter for FetchClimateClient."""

    def __init__(
        self, config: FetchClimateConfig | None = None, verbose: bool = False
    ):
        self.config = config or FetchClimateConfig()
        self.verbose = verbose
        logger.debug(
            f"FetchClimateSyncAdapter initialized | "
            f"base_url={self.config.base_url}"
        )

    def _run(self, call: Callable[[FetchClimateClient], Awaitable[T]]) -> T:
        """Run call(client) to completion on an event loop."""

        async def runner() -> T:
            async with FetchClimateClient(
                config=self.config, verbose=self.verbose
            ) as client:
                return await call(client)

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is not None:
            # Already inside an event loop (notebook, async server):
            # run on a private loop in a worker thread
            with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
                future = executor.submit(asyncio.run, runner())
                return future.result()

        return asyncio.run(runner())

    def list_data_sets_sync(self, reproduce_for="NOW") -> dict[str, dict[str, Any]]:
        return self._run(lambda client: client.list_data_sets(reproduce_for))

    def list_variables_sync(self, reproduce_for="NOW") -> dict[str, dict[str, Any]]:
        return self._run(lambda client: client.list_variables(reproduce_for))

    def get_time_series_yearly_sync(self, *args, **kwargs) -> TimeSeriesResult:
        return self._run(
            lambda client: client.get_time_series_yearly(*args, **kwargs)
        )

    def get_time_series_daily_sync(self, *args, **kwargs) -> TimeSeriesResult:
        return self._run(
            lambda client: client.get_time_series_daily(*args, **kwargs)
        )

    def get_time_series_hourly_sync(self, *args, **kwargs) -> TimeSeriesResult:
        return self._run(
            lambda client: client.get_time_series_hourly(*args, **kwargs)
        )

    def get_grid_sync(self, *args, **kwargs) -> xr.Dataset:
        return self._run(lambda client: client.get_grid(*args, **kwargs))

    def get_grid_frame_sync(self, *args, **kwargs) -> pd.DataFrame:
        return self._run(lambda client: client.get_grid_frame(*args, **kwargs))
