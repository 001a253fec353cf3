"""Constants module for indexsql.

This module contains all constant values and enumerations used throughout
the package. It has no dependencies on other indexsql modules.

Organization:
    - database: Dialect and delta strategy selectors
    - sql: Query kinds, attribute and relation types, placeholders
"""

from indexsql.constants.database import DatabaseType, DeltaType
from indexsql.constants.sql import (
    DOCUMENT_ID_PLACEHOLDER,
    RANGE_END_PLACEHOLDER,
    RANGE_NULL_FALLBACK,
    RANGE_START_PLACEHOLDER,
    AttributeType,
    QueryKind,
    RelationKind,
)

__all__ = [
    # Database
    "DatabaseType",
    "DeltaType",
    # SQL
    "QueryKind",
    "AttributeType",
    "RelationKind",
    "RANGE_START_PLACEHOLDER",
    "RANGE_END_PLACEHOLDER",
    "DOCUMENT_ID_PLACEHOLDER",
    "RANGE_NULL_FALLBACK",
]
