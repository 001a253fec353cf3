"""SQL presentation of fields and attributes."""

from typing import List, Optional

from indexsql.common.exceptions import unknown_column_error
from indexsql.constants import AttributeType
from indexsql.protocols import DatabaseAdapter
from indexsql.query_builder.associations import Associations
from indexsql.types import Attribute, Column, Property


class PropertySQLPresenter:
    """Render one field or attribute as SELECT and GROUP BY expressions.

    A search document is a single row. Properties sourced through a
    has_many or HABTM relation span several rows, so their values are
    collapsed server-side with a distinct group-concat and left out of the
    GROUP BY; single-valued properties are grouped as-is.

    Args:
        property: Field or attribute definition
        adapter: Dialect adapter of the source
        associations: Join tree of the source, used to qualify columns

    Raises:
        ConfigurationError: If a column is missing from a model that
            declares its columns, or a column's relation path is unknown
    """

    def __init__(self, property: Property, adapter: DatabaseAdapter, associations: Associations):
        self.property = property
        self.adapter = adapter
        self.associations = associations
        self._columns = [self._column_with_table(column) for column in property.columns]

    @property
    def is_attribute(self) -> bool:
        return isinstance(self.property, Attribute)

    @property
    def aggregate(self) -> bool:
        """Whether the property is multi-valued."""
        if self.property.multi is not None:
            return self.property.multi
        return any(
            self.associations.aggregate_for(column.stack)
            for column in self.property.columns
            if not column.raw
        )

    @property
    def aggregate_separator(self) -> str:
        return "," if self.is_attribute else " "

    def to_select(self) -> str:
        return f"{self._casted_column_with_table()} AS {self.adapter.quote(self.property.name)}"

    def to_group(self) -> Optional[str]:
        """GROUP BY entry, or None for aggregated properties."""
        if self.aggregate:
            return None
        return self._columns_with_table()

    def _columns_with_table(self) -> str:
        return ", ".join(self._columns)

    def _casted_column_with_table(self) -> str:
        parts = list(self._columns)
        if self.is_attribute and self.property.type == AttributeType.TIMESTAMP:
            parts = [self.adapter.cast_to_timestamp(part) for part in parts]
        clause = self._concatenate(parts)
        if self.aggregate:
            clause = self.adapter.group_concat(clause, self.aggregate_separator)
        return clause

    def _concatenate(self, parts: List[str]) -> str:
        if len(parts) < 2:
            return ", ".join(parts)
        if not self.is_attribute:
            return self.adapter.concatenate(", ".join(parts), " ")
        return self.adapter.concatenate(", ".join(self.adapter.cast_to_string(part) for part in parts), ",")

    def _column_with_table(self, column: Column) -> str:
        if column.raw:
            return column.name
        model = self.associations.model_for(column.stack)
        if not model.has_column(column.name):
            raise unknown_column_error(model.table_name, column.name)
        return f"{self.associations.alias_for(column.stack)}.{self.adapter.quote(column.name)}"
