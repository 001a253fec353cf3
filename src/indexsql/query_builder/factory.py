"""Query builder factory.

Wires the dialect adapter and delta processor for a source from the
strategy tables and returns a ready builder.
"""

from typing import List, Optional

from indexsql.query_builder.sql_builder import SourceQueries, SQLBuilder
from indexsql.settings import IndexSQLSettings
from indexsql.types import SourceDefinition


class QueryBuilderFactory:
    """Factory for source query builders.

    Example:
        >>> builder = QueryBuilderFactory.create(source)
        >>> builder.sql_query_pre()
        []
    """

    @staticmethod
    def create(source: SourceDefinition, settings: Optional[IndexSQLSettings] = None) -> SQLBuilder:
        """Create a builder with the strategies named by the source.

        Raises:
            ConfigurationError: If the source is malformed or names an
                unsupported dialect or delta type
        """
        return SQLBuilder(source, settings=settings)

    @staticmethod
    def create_all(
        sources: List[SourceDefinition],
        settings: Optional[IndexSQLSettings] = None,
    ) -> List[SQLBuilder]:
        return [QueryBuilderFactory.create(source, settings) for source in sources]


def get_sql_builder(source: SourceDefinition, settings: Optional[IndexSQLSettings] = None) -> SQLBuilder:
    """Get a builder configured for ``source``."""
    return QueryBuilderFactory.create(source, settings)


def build_queries(source: SourceDefinition, settings: Optional[IndexSQLSettings] = None) -> SourceQueries:
    """Generate every statement for ``source`` in one call."""
    return get_sql_builder(source, settings).build()
