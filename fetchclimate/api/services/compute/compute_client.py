"""
FetchClimate compute client - asynchronous job submission and polling.

Endpoints:
- POST /api/compute            -> submit a request (JSON body)
- GET  /api/status?hash=<id>   -> job status
- GET  /jsproxy/data?uri=<msds>&variables=values,sd[,provenance]
                               -> result arrays

Job lifecycle:
    submit -> pending/progress (poll every poll_interval) -> completed | failed

Status replies are short text lines:
    "pending, hash=5A1F..."
    "progress: 42%, hash=5A1F..."
    "completed=msds:az?name=...&key=..."
    "failed: <reason>"

They are decoded once into a JobStatus; nothing downstream looks at the raw
text. The poll loop runs until a terminal state unless FetchClimateConfig
sets a max_wait deadline. Only the status request is repeated; the
submission is never retried.
"""

import asyncio
from enum import Enum
from typing import Any

import httpx
from loguru import logger
from pydantic import BaseModel, Field

from fetchclimate.config.settings import FetchClimateConfig

COMPLETED_PREFIX_LENGTH = len("completed=")


class RemoteComputationError(RuntimeError):
    """The service reported a failed job or an unrecognised status."""

    def __init__(self, message: str):
        super().__init__(f"Remote computation failed: {message}")
        self.message = message


class ComputationTimeoutError(TimeoutError):
    """The job did not finish within FetchClimateConfig.max_wait."""

    def __init__(self, job_hash: str | None, max_wait: float):
        super().__init__(
            f"Job {job_hash} did not complete within {max_wait} seconds"
        )
        self.job_hash = job_hash
        self.max_wait = max_wait


class FetchClimateProtocolError(ValueError):
    """A status reply could not be interpreted."""


class JobState(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "progress"
    COMPLETED = "completed"
    FAILED = "failed"
    UNKNOWN = "unknown"


class JobStatus(BaseModel):
    """Decoded status reply of the compute service."""

    state: JobState
    raw: str
    hash: str | None = None
    result_uri: str | None = None

    @property
    def is_running(self) -> bool:
        return self.state in (JobState.PENDING, JobState.IN_PROGRESS)

    @classmethod
    def parse(cls, text: str) -> "JobStatus":
        reply = text.strip()

        job_hash = None
        if "hash=" in reply:
            job_hash = reply.split("hash=", 1)[1].strip()

        if reply.startswith(JobState.PENDING.value):
            return cls(state=JobState.PENDING, raw=reply, hash=job_hash)
        if reply.startswith(JobState.IN_PROGRESS.value):
            return cls(state=JobState.IN_PROGRESS, raw=reply, hash=job_hash)
        if reply.startswith(JobState.COMPLETED.value):
            return cls(
                state=JobState.COMPLETED,
                raw=reply,
                result_uri=reply[COMPLETED_PREFIX_LENGTH:],
            )
        if reply.startswith(JobState.FAILED.value):
            return cls(state=JobState.FAILED, raw=reply)
        return cls(state=JobState.UNKNOWN, raw=reply)


class ComputeResultPayload(BaseModel):
    """
    Raw result arrays.

    Point requests: one inner list per location, one element per time bin.
    Grid requests: one inner list per longitude, one element per latitude.
    None marks a missing value.
    """

    values: list[list[float | None]]
    sd: list[list[float | None]]
    provenance: list[list[float | None]] | None = Field(
        None, description="Data source id per element (multi-source only)"
    )


class ComputeClient:
    """
    Async client for the FetchClimate compute protocol.

    Example:
        async with ComputeClient() as client:
            payload = await client.compute(body, request_provenance=True)
    """

    def __init__(
        self,
        config: FetchClimateConfig | None = None,
        client: httpx.AsyncClient | None = None,
        verbose: bool = False,
    ):
        self.config = config or FetchClimateConfig()
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
        )
        self._log_level = "INFO" if verbose else "DEBUG"

    async def close(self):
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def submit(self, body: dict[str, Any]) -> JobStatus:
        """POST the request body; returns the first job status."""
        try:
            response = await self.client.post(
                "/api/compute",
                json=body,
                headers={"Accept": "text/plain"},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Compute submission failed: {e}")
            raise

        status = JobStatus.parse(response.text)
        logger.log(self._log_level, f"Compute reply: {status.raw}")
        return status

    async def get_status(self, job_hash: str) -> JobStatus:
        try:
            response = await self.client.get(
                "/api/status",
                params={"hash": job_hash},
                headers={"Accept": "text/plain"},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Status request failed for job {job_hash}: {e}")
            raise

        status = JobStatus.parse(response.text)
        logger.log(self._log_level, f"Status reply: {status.raw}")
        return status

    async def _wait_poll_interval(self):
        await asyncio.sleep(self.config.poll_interval)

    async def _poll(self, status: JobStatus) -> JobStatus:
        while status.is_running:
            if not status.hash:
                msg = f"Status reply without job hash: {status.raw!r}"
                raise FetchClimateProtocolError(msg)

            await self._wait_poll_interval()
            status = await self.get_status(status.hash)
        return status

    async def wait_for_completion(self, status: JobStatus) -> JobStatus:
        """
        Poll until the job leaves the pending/progress states.

        Args:
            status: Status returned by submit()

        Returns:
            Terminal JobStatus (completed, failed or unknown)

        Raises:
            ComputationTimeoutError: max_wait elapsed before a terminal state
            FetchClimateProtocolError: running status without a job hash
        """
        max_wait = self.config.max_wait
        if max_wait is None:
            return await self._poll(status)

        try:
            return await asyncio.wait_for(self._poll(status), timeout=max_wait)
        except asyncio.TimeoutError as e:
            logger.error(f"Job {status.hash} still running after {max_wait}s")
            raise ComputationTimeoutError(status.hash, max_wait) from e

    async def fetch_result(
        self, result_uri: str, request_provenance: bool
    ) -> ComputeResultPayload:
        """GET the result arrays referenced by a completed job."""
        variables = "values,provenance,sd" if request_provenance else "values,sd"
        logger.log(self._log_level, f"Receiving data | variables={variables}")

        try:
            response = await self.client.get(
                "/jsproxy/data",
                params={"uri": result_uri, "variables": variables},
                headers={"Accept-Encoding": "identity"},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Result download failed: {e}")
            raise

        return ComputeResultPayload.model_validate(response.json())

    async def compute(
        self, body: dict[str, Any], request_provenance: bool
    ) -> ComputeResultPayload:
        """
        Submit a request, wait for the job and download its result.

        Raises:
            RemoteComputationError: Job failed or status not recognised
            ComputationTimeoutError: max_wait exceeded
            httpx.HTTPError: Any round trip failed
        """
        status = await self.submit(body)
        status = await self.wait_for_completion(status)

        if status.state is not JobState.COMPLETED:
            logger.error(f"FetchClimate job ended with: {status.raw}")
            raise RemoteComputationError(status.raw)

        return await self.fetch_result(status.result_uri, request_provenance)
