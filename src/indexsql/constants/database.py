"""Database and delta strategy constants.

This module defines the enumerations used to select the pluggable
strategies (dialect adapters and delta processors) for a source.
"""

from enum import Enum


class DatabaseType(str, Enum):
    """Database dialect backing a source.

    Values:
        MYSQL: MySQL / MariaDB
            - Backtick identifier quoting
            - Supports SQL_NO_CACHE and ORDER BY NULL hints
            - GROUP_CONCAT aggregation

        POSTGRESQL: PostgreSQL
            - Double-quote identifier quoting
            - array_agg based aggregation
            - No query hints
    """

    MYSQL = "mysql"
    POSTGRESQL = "postgresql"

    @property
    def sqlglot_dialect(self) -> str:
        """Dialect name understood by sqlglot."""
        return _SQLGLOT_DIALECTS[self]


_SQLGLOT_DIALECTS = {
    DatabaseType.MYSQL: "mysql",
    DatabaseType.POSTGRESQL: "postgres",
}


class DeltaType(str, Enum):
    """Delta processing strategy.

    Values:
        DEFAULT: Boolean flag column marking rows changed since the last
            main index run. Main index builds reset the flag.
        TIMESTAMP: Timestamp column compared against a rolling threshold.
            Nothing to reset.
    """

    DEFAULT = "default"
    TIMESTAMP = "timestamp"
