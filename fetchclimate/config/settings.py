"""
FetchClimate client settings.

Every client receives a FetchClimateConfig explicitly. Defaults come from
environment variables so deployments can point at a private FetchClimate
instance without code changes:

- FETCHCLIMATE_URL: service base address
- FETCHCLIMATE_TIMEOUT: HTTP timeout per round trip (seconds)
- FETCHCLIMATE_POLL_INTERVAL: delay between job status requests (seconds)
- FETCHCLIMATE_MAX_WAIT: deadline for a running job (seconds, unset = none)
"""

import os

from pydantic import BaseModel, Field

DEFAULT_URL = "http://fetchclimate2.cloudapp.net/"


def _optional_float(name: str) -> float | None:
    value = os.getenv(name)
    if value in (None, ""):
        return None
    return float(value)


class FetchClimateConfig(BaseModel):
    """FetchClimate service configuration."""

    base_url: str = Field(
        default_factory=lambda: os.getenv("FETCHCLIMATE_URL", DEFAULT_URL)
    )
    timeout: float = Field(
        default_factory=lambda: float(os.getenv("FETCHCLIMATE_TIMEOUT", "60"))
    )
    poll_interval: float = Field(
        default_factory=lambda: float(
            os.getenv("FETCHCLIMATE_POLL_INTERVAL", "5")
        ),
        description="Seconds between two job status requests",
    )
    max_wait: float | None = Field(
        default_factory=lambda: _optional_float("FETCHCLIMATE_MAX_WAIT"),
        description="Seconds to wait for a job before giving up (None = forever)",
    )

    def with_url(self, url: str | None) -> "FetchClimateConfig":
        """Return a copy pointing at another service instance."""
        if not url:
            return self
        return self.model_copy(update={"base_url": url})
