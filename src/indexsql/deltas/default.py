"""Boolean flag delta processor."""

from typing import Optional

from indexsql.protocols import DatabaseAdapter
from indexsql.types import DeltaConfiguration


class DefaultDelta:
    """Delta processing through a boolean column.

    The application sets the flag whenever a row changes. The delta index
    picks up flagged rows, the main index the others, and a main build
    clears every flag before it runs.
    """

    def __init__(self, adapter: DatabaseAdapter, table_name: str, config: DeltaConfiguration):
        self.adapter = adapter
        self.table_name = table_name
        self.column = config.column_name

    @property
    def _quoted_table(self) -> str:
        return self.adapter.quoted_table_name(self.table_name)

    @property
    def _quoted_column(self) -> str:
        return self.adapter.quote(self.column)

    def clause(self, delta_index: bool) -> Optional[str]:
        return f"{self._quoted_table}.{self._quoted_column} = {self.adapter.boolean_value(delta_index)}"

    def reset_query(self) -> Optional[str]:
        return (
            f"UPDATE {self._quoted_table} SET {self._quoted_column} = {self.adapter.boolean_value(False)} "
            f"WHERE {self._quoted_column} = {self.adapter.boolean_value(True)}"
        )
