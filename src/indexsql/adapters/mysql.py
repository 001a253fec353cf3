"""MySQL dialect adapter."""

from typing import List

from indexsql.adapters.base import BaseDatabaseAdapter
from indexsql.constants import DatabaseType


class MySQLAdapter(BaseDatabaseAdapter):
    """Adapter for MySQL and MariaDB.

    MySQL sorts GROUP BY results implicitly and caches SELECT results, both
    wasted work for an indexer reading every row once, so the main query
    carries ``SQL_NO_CACHE`` and ``ORDER BY NULL``.
    """

    database_type = DatabaseType.MYSQL

    @property
    def supports_query_hints(self) -> bool:
        return True

    def convert_nulls(self, clause: str, default: object = "''") -> str:
        return f"IFNULL({clause}, {default})"

    def utf8_query_pre(self) -> List[str]:
        return ["SET NAMES utf8"]

    def group_concat(self, clause: str, separator: str = " ") -> str:
        return f"GROUP_CONCAT(DISTINCT {clause} SEPARATOR '{separator}')"

    def concatenate(self, clause: str, separator: str = " ") -> str:
        return f"CONCAT_WS('{separator}', {clause})"

    def cast_to_string(self, clause: str) -> str:
        return f"CAST({clause} AS char)"

    def cast_to_timestamp(self, clause: str) -> str:
        return f"UNIX_TIMESTAMP({clause})"

    def boolean_value(self, value: bool) -> str:
        return "1" if value else "0"

    def time_difference(self, seconds: int) -> str:
        return f"DATE_SUB(NOW(), INTERVAL {seconds} SECOND)"
