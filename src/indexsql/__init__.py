from indexsql.__version__ import __version__

from indexsql.common.exceptions import ConfigurationError, ErrorCode, IndexSQLError
from indexsql.constants import AttributeType, DatabaseType, DeltaType, RelationKind
from indexsql.query_builder import (
    QueryBuilderFactory,
    SourceQueries,
    SQLBuilder,
    build_queries,
    get_sql_builder,
)
from indexsql.types import (
    AssociationReference,
    Attribute,
    Column,
    DeltaConfiguration,
    Field,
    ModelSchema,
    Relation,
    SourceDefinition,
)

__all__ = [
    "__version__",

    # Builders
    "SQLBuilder",
    "SourceQueries",
    "QueryBuilderFactory",
    "get_sql_builder",
    "build_queries",

    # Source definitions
    "SourceDefinition",
    "ModelSchema",
    "Relation",
    "Column",
    "Field",
    "Attribute",
    "AssociationReference",
    "DeltaConfiguration",

    # Constants
    "DatabaseType",
    "DeltaType",
    "AttributeType",
    "RelationKind",

    # Exceptions (public API)
    "IndexSQLError",
    "ConfigurationError",
    "ErrorCode",
]
