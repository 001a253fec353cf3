"""Settings for indexsql built on Pydantic Settings.

Configuration Sources (precedence order):
    1. Source definition options (``group_concat_max_len``, ``utf8?``)
    2. Environment Variables (``INDEXSQL_*``)
    3. Default Values in code (lowest priority)

Quick Start:
    >>> from indexsql.settings import get_settings
    >>> settings = get_settings()
    >>> settings.escape_newlines
    True
"""

from indexsql.settings.main import IndexSQLSettings, get_settings

__all__ = [
    "IndexSQLSettings",
    "get_settings",
]
