"""Structured JSON logging configuration.

Provides centralized logging setup for session consumers with JSON formatting.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from ..config import Settings, get_settings


class JSONFormatter(logging.Formatter):
    """Format log records as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON string.

        Args:
            record: Log record to format

        Returns:
            str: JSON-formatted log message
        """
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "message": record.getMessage(),
        }

        # Add exception info if present
        if record.exc_info:
            log_data["error"] = str(record.exc_info[1])
            log_data["traceback"] = self.formatException(record.exc_info)

        # Add any extra fields
        if hasattr(record, "host_port"):
            log_data["host_port"] = record.host_port
        if hasattr(record, "path"):
            log_data["path"] = record.path

        return json.dumps(log_data)


def configure_logging(level: str = "INFO", json_format: bool = True) -> None:
    """Configure application-wide logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: If True, use JSON formatter; otherwise use simple format
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(getattr(logging, level.upper()))

    if json_format:
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(name)s - %(funcName)s - %(message)s'
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # paramiko logs every transport negotiation step at INFO
    logging.getLogger("paramiko.transport").setLevel(logging.WARNING)


def configure_logging_from_settings(settings: Optional[Settings] = None) -> None:
    """Configure logging from LOG_LEVEL and LOG_JSON settings."""
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL, json_format=settings.LOG_JSON)

