"""Logging infrastructure for indexsql.

This module provides structured logging with JSON output, context tracking
and OpenTelemetry trace correlation.
"""

from indexsql.logging.filters import ContextFilter
from indexsql.logging.logger import CustomJsonFormatter, get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "CustomJsonFormatter",
    "ContextFilter",
]
