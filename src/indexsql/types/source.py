"""Source definition models.

A source definition is the read-only description of one searchable model
consumed by the query builders: which columns become full-text fields or
attributes, which relations to join, which rows belong to the delta index
and which dialect renders the SQL.
"""

from typing import Any, Dict, List, Optional

from pydantic import Field as PydanticField, field_validator

from indexsql.constants import AttributeType, DatabaseType, DeltaType
from indexsql.types.base import IndexSQLBaseModel
from indexsql.types.schema import ModelSchema


class Column(IndexSQLBaseModel):
    """A column reference inside a property.

    Attributes:
        name: Column name on the model reached through ``stack``, or a
            verbatim SQL expression when ``raw`` is set
        stack: Relation path from the source model, empty for own columns
        raw: Treat ``name`` as SQL; raw columns are never quoted or checked
    """
    name: str
    stack: List[str] = PydanticField(default_factory=list)
    raw: bool = False

    @classmethod
    def from_path(cls, path: str) -> "Column":
        """Build a column from a dotted path.

        Example:
            >>> Column.from_path("taggings.tag.name")
            Column(name='name', stack=['taggings', 'tag'], raw=False)
        """
        *stack, name = path.split(".")
        return cls(name=name, stack=stack)

    @classmethod
    def sql(cls, expression: str) -> "Column":
        return cls(name=expression, raw=True)


class Property(IndexSQLBaseModel):
    """Shared shape of fields and attributes.

    Attributes:
        name: Alias the indexer sees
        columns: One or more columns; several columns are concatenated
        multi: Explicit multi-valued flag. None infers it from the columns:
            a property reached through a has_many or HABTM relation spans
            several rows and is aggregated.
    """
    name: str
    columns: List[Column]
    multi: Optional[bool] = None

    @field_validator("columns", mode="before")
    @classmethod
    def coerce_columns(cls, v: Any) -> Any:
        """Accept dotted path strings in place of Column models."""
        if isinstance(v, (str, Column)):
            v = [v]
        return [Column.from_path(item) if isinstance(item, str) else item for item in v]

    @field_validator("columns")
    @classmethod
    def validate_columns(cls, v: List[Column]) -> List[Column]:
        if not v:
            raise ValueError("A property needs at least one column")
        return v


class Field(Property):
    """Full-text field."""


class Attribute(Property):
    """Filterable/sortable attribute."""
    type: AttributeType = AttributeType.INTEGER


class AssociationReference(IndexSQLBaseModel):
    """A join requested by the source.

    Either a structured relation ``stack`` merged into the shared join tree,
    or a raw ``sql`` join string appended verbatim.
    """
    stack: List[str] = PydanticField(default_factory=list)
    sql: Optional[str] = None

    @property
    def is_raw(self) -> bool:
        return self.sql is not None

    @classmethod
    def from_path(cls, path: str) -> "AssociationReference":
        return cls(stack=path.split("."))

    def __str__(self) -> str:
        return self.sql if self.is_raw else ".".join(self.stack)


class DeltaConfiguration(IndexSQLBaseModel):
    """Delta processor settings for a source.

    Attributes:
        type: Strategy selecting the processor implementation
        column: Flag column (default strategy) or timestamp column
            (timestamp strategy). Defaults per strategy when omitted.
        threshold: Look-back window in seconds (timestamp strategy only)
    """
    type: DeltaType = DeltaType.DEFAULT
    column: Optional[str] = None
    threshold: int = PydanticField(default=86400, gt=0)

    @property
    def column_name(self) -> str:
        if self.column:
            return self.column
        return "updated_at" if self.type == DeltaType.TIMESTAMP else "delta"


class SourceDefinition(IndexSQLBaseModel):
    """Everything needed to generate the queries of one index source.

    Attributes:
        name: Source name, used for logging
        model: Backing model schema
        database_type: Dialect tag selecting the adapter; the configured
            default dialect when omitted
        offset: Position of this source's index in the global numbering
        index_count: Total number of indices sharing the numbering
        delta_index: True when this source feeds the delta index
        delta: Delta processor settings; None disables delta processing
        disable_range: Skip range batching (no range query, no placeholder)
        conditions: Extra raw SQL WHERE fragments
        groupings: Extra GROUP BY expressions
        fields: Full-text fields
        attributes: Attributes
        associations: Explicit joins (structured paths or raw strings)
        options: Free-form options (``group_concat_max_len``, ``utf8?``)
    """
    name: str
    model: ModelSchema
    database_type: Optional[DatabaseType] = None
    offset: int = 0
    index_count: int = 1
    delta_index: bool = False
    delta: Optional[DeltaConfiguration] = None
    disable_range: bool = False
    conditions: List[str] = PydanticField(default_factory=list)
    groupings: List[str] = PydanticField(default_factory=list)
    fields: List[Field] = PydanticField(default_factory=list)
    attributes: List[Attribute] = PydanticField(default_factory=list)
    associations: List[AssociationReference] = PydanticField(default_factory=list)
    options: Dict[str, Any] = PydanticField(default_factory=dict)

    @field_validator("associations", mode="before")
    @classmethod
    def coerce_associations(cls, v: Any) -> Any:
        """Accept dotted relation paths in place of AssociationReference models."""
        return [AssociationReference.from_path(item) if isinstance(item, str) else item for item in v]

    @property
    def primary_key(self) -> str:
        return self.model.primary_key

    @property
    def properties(self) -> List[Property]:
        return [*self.fields, *self.attributes]
