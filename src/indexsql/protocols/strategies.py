"""Strategy protocol definitions.

This module defines the interfaces of the strategies injected into a query
builder per source: the dialect adapter and the delta processor. Concrete
implementations are selected from strategy tables keyed by
``DatabaseType`` and ``DeltaType``.
"""

from typing import List, Optional, Protocol, runtime_checkable

from indexsql.constants import DatabaseType


@runtime_checkable
class DatabaseAdapter(Protocol):
    """Dialect-specific SQL behavior.

    Only a minority of the generated SQL depends on the dialect; everything
    that does goes through this interface.
    """

    database_type: DatabaseType

    @property
    def supports_query_hints(self) -> bool:
        """Whether SQL_NO_CACHE and ORDER BY NULL are emitted."""
        ...

    def quote(self, identifier: str) -> str:
        """Quote a single column or table name for safe embedding."""
        ...

    def quoted_table_name(self, table_name: str) -> str:
        """Quote a possibly schema-qualified table name."""
        ...

    def convert_nulls(self, clause: str, default: object = "") -> str:
        ...

    def utf8_query_pre(self) -> List[str]:
        """Session statements switching the connection to UTF-8."""
        ...

    def group_concat(self, clause: str, separator: str = " ") -> str:
        """Aggregate distinct values of ``clause`` into one string."""
        ...

    def concatenate(self, clause: str, separator: str = " ") -> str:
        ...

    def cast_to_string(self, clause: str) -> str:
        ...

    def cast_to_timestamp(self, clause: str) -> str:
        ...

    def boolean_value(self, value: bool) -> str:
        ...

    def time_difference(self, seconds: int) -> str:
        """Expression for the current time minus ``seconds``."""
        ...


@runtime_checkable
class DeltaProcessor(Protocol):
    """Separates delta-index rows from main-index rows."""

    def clause(self, delta_index: bool) -> Optional[str]:
        """WHERE predicate restricting rows to the delta or main index.

        Args:
            delta_index: True when building the delta index

        Returns:
            SQL predicate, or None when no restriction applies
        """
        ...

    def reset_query(self) -> Optional[str]:
        """Statement clearing pending delta markers before a main build."""
        ...
