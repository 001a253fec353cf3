"""Logging filters for context injection.

This module provides filters that inject context variables into log records,
enabling correlation of logs emitted while building a given source.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from indexsql.__version__ import __version__

source_name_var: ContextVar[Optional[str]] = ContextVar("source_name", default=None)


class ContextFilter(logging.Filter):
    """Logging filter that adds context variables to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Add context variables to the log record.

        Args:
            record: Log record to enhance

        Returns:
            Always True (doesn't filter out any records)
        """
        setattr(record, "source_name", source_name_var.get())
        setattr(record, "sdk_name", "indexsql")
        setattr(record, "indexsql_version", __version__)

        return True


@contextmanager
def source_context(source_name: Optional[str]) -> Iterator[None]:
    """Bind ``source_name`` to every record logged inside the block."""
    token = source_name_var.set(source_name)
    try:
        yield
    finally:
        source_name_var.reset(token)
