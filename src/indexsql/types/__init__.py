"""Data model for source definitions."""

from indexsql.types.base import IndexSQLBaseModel
from indexsql.types.schema import ModelSchema, Relation, underscore
from indexsql.types.source import (
    AssociationReference,
    Attribute,
    Column,
    DeltaConfiguration,
    Field,
    Property,
    SourceDefinition,
)

__all__ = [
    "IndexSQLBaseModel",
    "ModelSchema",
    "Relation",
    "underscore",
    "Column",
    "Property",
    "Field",
    "Attribute",
    "AssociationReference",
    "DeltaConfiguration",
    "SourceDefinition",
]
