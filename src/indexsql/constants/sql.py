"""SQL and query-related constants.

Enumerations for the property, relation and query kinds handled by the
query builders, plus the placeholder tokens the indexer substitutes at
run time.
"""

from enum import Enum


# Placeholders substituted by the indexer, never by this package
RANGE_START_PLACEHOLDER = "$start"
RANGE_END_PLACEHOLDER = "$end"
DOCUMENT_ID_PLACEHOLDER = "$id"

# Fallback bound used when a range query finds no rows
RANGE_NULL_FALLBACK = 1


class QueryKind(str, Enum):
    """Kind of statement produced for a source.

    Values:
        MAIN: Primary SELECT feeding the index build
        RANGE: MIN/MAX primary key bounds query
        INFO: Single document lookup keyed by the global document id
        PRE: Setup statements run before MAIN and RANGE
    """

    MAIN = "sql_query"
    RANGE = "sql_query_range"
    INFO = "sql_query_info"
    PRE = "sql_query_pre"


class AttributeType(str, Enum):
    """Type of an index attribute."""

    INTEGER = "integer"
    BIGINT = "bigint"
    FLOAT = "float"
    BOOLEAN = "boolean"
    STRING = "string"
    TIMESTAMP = "timestamp"
    JSON = "json"


class RelationKind(str, Enum):
    """Kind of relation between two models.

    Collections (HAS_MANY, HAS_AND_BELONGS_TO_MANY) fan out to several rows
    per document, so anything sourced through them must be aggregated.
    """

    BELONGS_TO = "belongs_to"
    HAS_ONE = "has_one"
    HAS_MANY = "has_many"
    HAS_AND_BELONGS_TO_MANY = "has_and_belongs_to_many"

    @property
    def is_collection(self) -> bool:
        return self in (RelationKind.HAS_MANY, RelationKind.HAS_AND_BELONGS_TO_MANY)
