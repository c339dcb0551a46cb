from .compute_client import (
    ComputationTimeoutError,
    ComputeClient,
    ComputeResultPayload,
    FetchClimateProtocolError,
    JobState,
    JobStatus,
    RemoteComputationError,
)

__all__ = [
    "ComputationTimeoutError",
    "ComputeClient",
    "ComputeResultPayload",
    "FetchClimateProtocolError",
    "JobState",
    "JobStatus",
    "RemoteComputationError",
]
