from .logging_config import get_logger, setup_logging
from .settings import DEFAULT_URL, FetchClimateConfig

__all__ = ["DEFAULT_URL", "FetchClimateConfig", "get_logger", "setup_logging"]
