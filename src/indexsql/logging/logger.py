"""Core logging setup and configuration.

Builders log through the standard library under the ``indexsql`` logger
hierarchy. ``setup_logging`` is optional: it installs a JSON console
handler for applications that do not configure logging themselves.
Generated statements are attached to records as the ``sql`` extra and
truncated by the formatter, since main queries over wide sources run to
many kilobytes.
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Set

from opentelemetry import trace

DEFAULT_MAX_SQL_LENGTH = 2000

# LogRecord attributes that are not user extras
_RESERVED_LOG_RECORD_KEYS: Set[str] = set(
    logging.LogRecord("indexsql", logging.INFO, __file__, 0, "", (), None).__dict__
) | {"asctime", "message"}


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class CustomJsonFormatter(logging.Formatter):
    """One JSON object per record, with extras, trace ids and truncated SQL.

    Args:
        max_sql_length: Longest ``sql`` extra written out in full; longer
            statements are cut and suffixed with their original length.
            None disables truncation.
    """

    def __init__(self, max_sql_length: Optional[int] = DEFAULT_MAX_SQL_LENGTH, **kwargs: Any):
        super().__init__(**kwargs)
        self.max_sql_length = max_sql_length

    def format(self, record: logging.LogRecord) -> str:
        log_record: Dict[str, Any] = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_LOG_RECORD_KEYS
        }

        log_record["timestamp"] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["message"] = record.getMessage()

        if isinstance(log_record.get("sql"), str):
            log_record["sql"] = self._truncate(log_record["sql"])

        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            log_record["trace_id"] = format(span_context.trace_id, "032x")
            log_record["span_id"] = format(span_context.span_id, "016x")

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record, default=str)

    def _truncate(self, sql: str) -> str:
        if self.max_sql_length is None or len(sql) <= self.max_sql_length:
            return sql
        return f"{sql[:self.max_sql_length]}... ({len(sql)} chars)"


def setup_logging(level: Optional[str] = None, max_sql_length: Optional[int] = DEFAULT_MAX_SQL_LENGTH) -> None:
    """Configure structured logging backed by ``logging.config.dictConfig``.

    Args:
        level: Level of the ``indexsql`` loggers (DEBUG, INFO, WARNING,
            ERROR, CRITICAL). Defaults to the ``log_level`` setting.
        max_sql_length: Truncation limit for logged statements
    """
    if level is None:
        from indexsql.settings import get_settings
        level = get_settings().log_level

    config_dict: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "indexsql_json": {
                "()": "indexsql.logging.logger.CustomJsonFormatter",
                "max_sql_length": max_sql_length,
            }
        },
        "filters": {
            "indexsql_context": {
                "()": "indexsql.logging.filters.ContextFilter",
            }
        },
        "handlers": {
            "indexsql_console": {
                "class": "logging.StreamHandler",
                "level": level.upper(),
                "formatter": "indexsql_json",
                "filters": ["indexsql_context"],
                "stream": "ext://sys.stdout",
            }
        },
        "loggers": {
            "indexsql": {
                "level": level.upper(),
                "handlers": ["indexsql_console"],
                "propagate": False,
            }
        },
    }

    logging.config.dictConfig(config_dict)
