"""PostgreSQL dialect adapter."""

from indexsql.adapters.base import BaseDatabaseAdapter
from indexsql.constants import DatabaseType


class PostgreSQLAdapter(BaseDatabaseAdapter):
    """Adapter for PostgreSQL."""

    database_type = DatabaseType.POSTGRESQL

    def convert_nulls(self, clause: str, default: object = "''") -> str:
        return f"COALESCE({clause}, {default})"

    def group_concat(self, clause: str, separator: str = " ") -> str:
        return f"array_to_string(array_agg(DISTINCT {clause}), '{separator}')"

    def concatenate(self, clause: str, separator: str = " ") -> str:
        return f"concat_ws('{separator}', {clause})"

    def cast_to_string(self, clause: str) -> str:
        return f"{clause}::varchar"

    def cast_to_timestamp(self, clause: str) -> str:
        return f"extract(epoch from {clause})::int"

    def boolean_value(self, value: bool) -> str:
        return "TRUE" if value else "FALSE"

    def time_difference(self, seconds: int) -> str:
        return f"current_timestamp - interval '{seconds} seconds'"
