"""
FetchClimate service clients.

ARCHITECTURE OVERVIEW:
======================

Protocol clients (one per endpoint family):
├── configuration.ConfigurationClient  - GET /api/configuration
└── compute.ComputeClient              - POST /api/compute, GET /api/status,
                                         GET /jsproxy/data

Orchestration:
├── FetchClimateClient       - async: request -> job -> reshape -> provenance
├── FetchClimateSyncAdapter  - blocking wrapper around FetchClimateClient
└── data_download            - public functions (time series, grid, catalog)

ERROR HANDLING:
==============
- httpx.HTTPError propagates from every round trip (no retries)
- RemoteComputationError for failed jobs
- ComputationTimeoutError when max_wait is configured and exceeded
- Logging with loguru
"""
