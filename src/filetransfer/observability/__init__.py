"""Observability module - logging setup."""

from .logging_config import JSONFormatter, configure_logging, configure_logging_from_settings

__all__ = ["JSONFormatter", "configure_logging", "configure_logging_from_settings"]
