"""Source query builder.

Composes the statements an indexer runs for one source out of the clause
builder, property presenters, join tree, document id codec, dialect adapter
and delta processor.
"""

from contextlib import contextmanager
from typing import Iterator, List, Optional

from opentelemetry.trace import Span

from indexsql.adapters import get_adapter
from indexsql.common.exceptions import ErrorCode, configuration_error, unknown_column_error
from indexsql.constants import (
    RANGE_END_PLACEHOLDER,
    RANGE_NULL_FALLBACK,
    RANGE_START_PLACEHOLDER,
    QueryKind,
)
from indexsql.deltas import get_delta_processor
from indexsql.logging import get_logger
from indexsql.logging.filters import source_context
from indexsql.protocols import DatabaseAdapter, DeltaProcessor
from indexsql.query_builder.associations import Associations
from indexsql.query_builder.clause_builder import ClauseBuilder
from indexsql.query_builder.document_id import DocumentIdCodec
from indexsql.query_builder.presenter import PropertySQLPresenter
from indexsql.settings import IndexSQLSettings, get_settings
from indexsql.telemetry import query_span
from indexsql.types import IndexSQLBaseModel, SourceDefinition

logger = get_logger(__name__)


class SourceQueries(IndexSQLBaseModel):
    """All statements generated for one source."""
    sql_query: str
    sql_query_range: Optional[str] = None
    sql_query_info: str
    sql_query_pre: List[str]


class SQLBuilder:
    """Build the indexer queries for a source definition.

    Everything derived from the source (strategies, join tree, presenters,
    SELECT and GROUP BY lists) is computed in the constructor, so malformed
    configuration fails here and a built instance is read-only and safe to
    share between threads.

    Args:
        source: Source definition
        adapter: Dialect adapter; picked by ``source.database_type`` (or the
            configured default dialect) when omitted
        delta_processor: Delta strategy; picked by ``source.delta`` when omitted
        settings: Package settings; the global settings when omitted

    Raises:
        ConfigurationError: If the source is malformed

    Example:
        >>> builder = SQLBuilder(source)
        >>> builder.sql_query_range()
        'SELECT IFNULL(MIN(`articles`.`id`), 1), IFNULL(MAX(`articles`.`id`), 1) FROM `articles`'
    """

    def __init__(
        self,
        source: SourceDefinition,
        adapter: Optional[DatabaseAdapter] = None,
        delta_processor: Optional[DeltaProcessor] = None,
        settings: Optional[IndexSQLSettings] = None,
    ):
        self.source = source
        self.model = source.model
        self.settings = settings or get_settings()

        with source_context(source.name):
            self._validate_source()
            self.adapter = adapter or get_adapter(source.database_type or self.settings.default_database_type)
            self.delta_processor = delta_processor or get_delta_processor(
                self.adapter, self.model.table_name, source.delta
            )
            self.codec = DocumentIdCodec(source.index_count, source.offset)

            self.associations = Associations(self.model, self.adapter)
            for association in source.associations:
                if not association.is_raw:
                    self.associations.add_join_to(association.stack)
            self.custom_joins = [association.sql for association in source.associations if association.is_raw]

            self.presenters = [
                PropertySQLPresenter(prop, self.adapter, self.associations) for prop in source.properties
            ]

            self._select_clause = self._build_select_clause()
            self._group_clause = self._build_group_clause()
            self._joins = [*self.associations.join_values(), *self.custom_joins]

            logger.debug(
                "Prepared source %s: %d properties, %d joins",
                source.name,
                len(self.presenters),
                len(self._joins),
            )

    def sql_query(self) -> str:
        """Main query feeding the index build.

        Unless ranging is disabled the WHERE clause carries the
        ``$start``/``$end`` placeholders the indexer fills in per batch.
        Embedded newlines are escaped as backslash-newline.
        """
        with self._span(QueryKind.MAIN) as span:
            parts = [f"SELECT {self._pre_select()}{self._select_clause}", f"FROM {self.quoted_table_name}"]
            parts.extend(self._joins)
            where = self._where_clause()
            if where:
                parts.append(f"WHERE {where}")
            parts.append(f"GROUP BY {self._group_clause}")
            if self.adapter.supports_query_hints:
                parts.append("ORDER BY NULL")

            sql = " ".join(parts)
            if self.settings.escape_newlines:
                sql = sql.replace("\n", "\\\n")
            return self._emit(span, QueryKind.MAIN, sql)

    def sql_query_range(self) -> Optional[str]:
        """Primary key bounds query, None when ranging is disabled."""
        if self.source.disable_range:
            return None

        with self._span(QueryKind.RANGE) as span:
            minimum = self.adapter.convert_nulls(f"MIN({self.quoted_primary_key})", RANGE_NULL_FALLBACK)
            maximum = self.adapter.convert_nulls(f"MAX({self.quoted_primary_key})", RANGE_NULL_FALLBACK)
            sql = f"SELECT {minimum}, {maximum} FROM {self.quoted_table_name}"
            where = self._where_clause(for_range=True)
            if where:
                sql = f"{sql} WHERE {where}"
            return self._emit(span, QueryKind.RANGE, sql)

    def sql_query_info(self) -> str:
        """Single document lookup keyed by the indexer's ``$id``."""
        with self._span(QueryKind.INFO) as span:
            sql = (
                f"SELECT {self.quoted_table_name}.* FROM {self.quoted_table_name} "
                f"WHERE {self.quoted_primary_key} = {self.codec.reverse_expression()}"
            )
            return self._emit(span, QueryKind.INFO, sql)

    def sql_query_pre(self) -> List[str]:
        """Setup statements, in execution order.

        The delta reset only runs ahead of a main index build, before any
        statement that could depend on the delta markers.
        """
        with self._span(QueryKind.PRE) as span:
            queries: List[Optional[str]] = []
            if self.delta_processor is not None and not self.source.delta_index:
                queries.append(self.delta_processor.reset_query())

            max_len = self.source.options.get("group_concat_max_len", self.settings.group_concat_max_len)
            if max_len:
                queries.append(f"SET SESSION group_concat_max_len = {max_len}")

            if self.source.options.get("utf8?", self.settings.utf8):
                queries.extend(self.adapter.utf8_query_pre())

            statements = [query for query in queries if query]
            span.set_attribute("indexsql.statement_count", len(statements))
            logger.debug("Generated %d pre-queries for %s", len(statements), self.source.name)
            return statements

    def build(self) -> SourceQueries:
        return SourceQueries(
            sql_query=self.sql_query(),
            sql_query_range=self.sql_query_range(),
            sql_query_info=self.sql_query_info(),
            sql_query_pre=self.sql_query_pre(),
        )

    @property
    def quoted_table_name(self) -> str:
        return self.adapter.quoted_table_name(self.model.table_name)

    @property
    def quoted_primary_key(self) -> str:
        return f"{self.quoted_table_name}.{self.adapter.quote(self.source.primary_key)}"

    @property
    def quoted_inheritance_column(self) -> str:
        return f"{self.quoted_table_name}.{self.adapter.quote(self.model.inheritance_column)}"

    def _validate_source(self) -> None:
        if not self.model.table_name or not self.model.table_name.strip():
            raise configuration_error(
                f"Source {self.source.name} has no table",
                config_key="model.table_name",
                error_code=ErrorCode.CONFIG_MISSING,
            )
        if not self.model.primary_key or not self.model.primary_key.strip():
            raise configuration_error(
                f"Source {self.source.name} has no primary key",
                config_key="model.primary_key",
                error_code=ErrorCode.CONFIG_MISSING,
            )
        if not self.model.has_column(self.model.primary_key):
            raise unknown_column_error(self.model.table_name, self.model.primary_key)
        if self.source.delta is not None and not self.model.has_column(self.source.delta.column_name):
            raise unknown_column_error(self.model.table_name, self.source.delta.column_name)
        if not self.model.sti_base and not self.model.has_column(self.model.inheritance_column):
            raise unknown_column_error(self.model.table_name, self.model.inheritance_column)

    def _pre_select(self) -> str:
        return "SQL_NO_CACHE " if self.adapter.supports_query_hints else ""

    def _document_id(self) -> str:
        return self.codec.select_expression(self.quoted_primary_key, self.adapter.quote(self.source.primary_key))

    def _build_select_clause(self) -> str:
        return ClauseBuilder(self._document_id()).compose(
            [presenter.to_select() for presenter in self.presenters],
        ).separated()

    def _build_group_clause(self) -> str:
        return ClauseBuilder(self.quoted_primary_key).compose(
            [presenter.to_group() for presenter in self.presenters],
            self._groupings(),
        ).separated()

    def _groupings(self) -> List[str]:
        groupings = list(self.source.groupings)
        if self.model.has_inheritance_column:
            groupings.append(self.quoted_inheritance_column)
        return groupings

    def _where_clause(self, for_range: bool = False) -> str:
        builder = ClauseBuilder(None)
        if not self.model.sti_base:
            builder.add_clause(self._inheritance_column_condition())
        if self.delta_processor is not None:
            builder.add_clause(self.delta_processor.clause(self.source.delta_index))
        if not for_range:
            builder.add_clause(self._range_condition())
        return builder.separated(" AND ")

    def _inheritance_column_condition(self) -> str:
        return f"{self.quoted_inheritance_column} = '{self.model.sti_name}'"

    def _range_condition(self) -> List[str]:
        condition: List[str] = []
        if not self.source.disable_range:
            condition.append(
                f"{self.quoted_primary_key} BETWEEN {RANGE_START_PLACEHOLDER} AND {RANGE_END_PLACEHOLDER}"
            )
        condition.extend(self.source.conditions)
        return condition

    @contextmanager
    def _span(self, kind: QueryKind) -> Iterator[Span]:
        attributes = {
            "indexsql.source": self.source.name,
            "indexsql.database_type": self.adapter.database_type.value,
        }
        with source_context(self.source.name), query_span(kind.value, attributes) as span:
            yield span

    def _emit(self, span: Span, kind: QueryKind, sql: str) -> str:
        span.set_attribute("indexsql.sql_length", len(sql))
        logger.debug("Generated %s for %s", kind.value, self.source.name, extra={"sql": sql})
        return sql
