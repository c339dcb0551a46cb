from .configuration_client import (
    ConfigurationClient,
    DataSourceInfo,
    FetchClimateConfiguration,
    VariableInfo,
)

__all__ = [
    "ConfigurationClient",
    "DataSourceInfo",
    "FetchClimateConfiguration",
    "VariableInfo",
]
