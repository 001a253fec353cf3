"""Timestamp window delta processor."""

from typing import Optional

from indexsql.protocols import DatabaseAdapter
from indexsql.types import DeltaConfiguration


class TimestampDelta:
    """Delta processing through an update timestamp.

    The delta index covers rows changed within ``threshold`` seconds. The
    main index is unrestricted and there is no marker to reset; the
    threshold must exceed the interval between main builds.
    """

    def __init__(self, adapter: DatabaseAdapter, table_name: str, config: DeltaConfiguration):
        self.adapter = adapter
        self.table_name = table_name
        self.column = config.column_name
        self.threshold = config.threshold

    def clause(self, delta_index: bool) -> Optional[str]:
        if not delta_index:
            return None
        column = f"{self.adapter.quoted_table_name(self.table_name)}.{self.adapter.quote(self.column)}"
        return f"{column} > {self.adapter.time_difference(self.threshold)}"

    def reset_query(self) -> Optional[str]:
        return None
