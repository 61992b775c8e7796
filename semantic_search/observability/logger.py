"""
Logger configuration.

Provides configured logging with ISO timestamps, persistent service
attributes and correlation key injection.

Dependencies: logging (stdlib)
System role: Centralized logging configuration
"""

import logging
import sys

from semantic_search.observability.correlation import get_correlation

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s%(correlation)s"


class CorrelationFilter(logging.Filter):
    """Attach correlation keys and persistent attributes to each record."""

    def __init__(self, persistent: dict[str, str] | None = None) -> None:
        super().__init__()
        self._persistent = persistent or {}

    def filter(self, record: logging.LogRecord) -> bool:
        keys = get_correlation()
        record.correlation_keys = keys
        for key, value in self._persistent.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        record.correlation = (
            " [" + " ".join(f"{k}={v}" for k, v in sorted(keys.items())) + "]" if keys else ""
        )
        return True


def configure_logging(
    level: str = "INFO",
    environment: str = "N/A",
    aws_account_id: str = "N/A",
) -> None:
    """
    Configure Python logging with ISO timestamp and correlation-aware format.

    Args:
        level: Root log level name
        environment: Deployment environment attached to every record
        aws_account_id: AWS account ID attached to every record
    """
    # Remove any existing handlers to avoid duplicates
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    handler.addFilter(
        CorrelationFilter({"environment": environment, "aws_account_id": aws_account_id})
    )
    handler.setFormatter(
        logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z")
    )

    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    # Reduce noise from verbose third-party libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)

