"""Introspected model schema.

These models describe what the surrounding configuration layer knows about
an ORM model: its table, primary key, known columns, single-table
inheritance setup and the relations usable in association paths.
"""

import re
from typing import Dict, List, Optional

from pydantic import Field

from indexsql.constants import RelationKind
from indexsql.types.base import IndexSQLBaseModel


def underscore(name: str) -> str:
    """Snake-case the last segment of a (possibly namespaced) class name.

    Example:
        >>> underscore("Admin::BlogPost")
        'blog_post'
    """
    word = name.split("::")[-1].split(".")[-1]
    word = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", word)
    word = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", word)
    return word.lower()


class ModelSchema(IndexSQLBaseModel):
    """A model backing a source.

    Attributes:
        name: Class name, possibly namespaced (``Admin::Article``)
        table_name: Backing table, optionally schema qualified
        primary_key: Primary key column
        columns: Known column names; empty means the columns are unknown
            and references are not checked
        inheritance_column: Single-table inheritance discriminator column
        sti_base: False when the model is an STI subclass sharing its
            parent's table
        store_full_sti_class: Whether the discriminator stores the
            namespaced class name
        relations: Relations reachable from this model, by name
    """
    name: str
    table_name: str
    primary_key: str = "id"
    columns: List[str] = Field(default_factory=list)
    inheritance_column: str = "type"
    sti_base: bool = True
    store_full_sti_class: bool = True
    relations: Dict[str, "Relation"] = Field(default_factory=dict)

    @property
    def underscored_name(self) -> str:
        return underscore(self.name)

    @property
    def sti_name(self) -> str:
        """Value stored in the inheritance column for this model."""
        if self.store_full_sti_class:
            return self.name
        return self.name.split("::")[-1]

    @property
    def has_inheritance_column(self) -> bool:
        return self.inheritance_column in self.columns

    def has_column(self, column: str) -> bool:
        """Whether ``column`` may be referenced on this model.

        Models that do not declare their columns accept any name.
        """
        return not self.columns or column in self.columns

    def relation(self, name: str) -> Optional["Relation"]:
        return self.relations.get(name)


class Relation(IndexSQLBaseModel):
    """A named relation from an owner model to a target model.

    Key defaults follow the usual ORM conventions: ``<name>_id`` on the
    owner for belongs_to, ``<owner>_id`` (or ``<as>_id`` when polymorphic)
    on the target for has_one/has_many, and a join table named after both
    tables for has_and_belongs_to_many.
    """
    name: str
    kind: RelationKind
    target: ModelSchema
    foreign_key: Optional[str] = None
    primary_key: Optional[str] = None
    join_table: Optional[str] = None
    association_foreign_key: Optional[str] = None
    polymorphic_as: Optional[str] = None

    @property
    def is_collection(self) -> bool:
        return self.kind.is_collection

    def foreign_key_for(self, owner: ModelSchema) -> str:
        if self.foreign_key:
            return self.foreign_key
        if self.kind == RelationKind.BELONGS_TO:
            return f"{self.name}_id"
        if self.polymorphic_as:
            return f"{self.polymorphic_as}_id"
        return f"{owner.underscored_name}_id"

    def primary_key_for(self, owner: ModelSchema) -> str:
        """Key the foreign key points at."""
        if self.primary_key:
            return self.primary_key
        if self.kind == RelationKind.BELONGS_TO:
            return self.target.primary_key
        return owner.primary_key

    def join_table_for(self, owner: ModelSchema) -> str:
        if self.join_table:
            return self.join_table
        return "_".join(sorted([owner.table_name, self.target.table_name]))

    @property
    def association_key(self) -> str:
        """Join table column pointing at the target (HABTM only)."""
        return self.association_foreign_key or f"{self.target.underscored_name}_id"


ModelSchema.model_rebuild()
