"""Loguru setup shared by the library and the command line."""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}"


def setup_logging(
    log_level: str = "INFO",
    log_dir: str | None = None,
    json_logs: bool = False,
) -> None:
    """
    Configure loguru sinks.

    Args:
        log_level: Minimum level for the console sink
        log_dir: Optional directory for a rotating file sink
        json_logs: Serialize the file sink records as JSON
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        colorize=True,
        format=CONSOLE_FORMAT,
    )

    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        logger.add(
            Path(log_dir) / "fetchclimate.log",
            level="DEBUG",
            rotation="10 MB",
            retention=5,
            serialize=json_logs,
        )

    logger.debug(f"Logging configured | level={log_level} | dir={log_dir}")


def get_logger():
    return logger
