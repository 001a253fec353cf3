"""Association resolution.

Relation paths referenced by a source (explicit joins, property columns)
are merged into one join tree keyed by path, so each relation chain is
joined exactly once however many properties reach through it.
"""

from typing import Dict, List, Optional, Sequence, Set, Tuple

from indexsql.common.exceptions import unknown_relation_error
from indexsql.constants import RelationKind
from indexsql.logging import get_logger
from indexsql.protocols import DatabaseAdapter
from indexsql.types import ModelSchema, Relation

logger = get_logger(__name__)

Path = Tuple[str, ...]


class JoinNode:
    """One joined relation in the tree.

    Attributes:
        path: Relation names leading to this node from the source model
        relation: Relation joined by this node
        owner: Model the relation is declared on
        alias: Table alias (equal to the table name when unaliased)
        join_table_alias: Alias of the intermediate table (HABTM only)
    """

    def __init__(
        self,
        path: Path,
        relation: Relation,
        owner: ModelSchema,
        alias: str,
        join_table_alias: Optional[str] = None,
    ):
        self.path = path
        self.relation = relation
        self.owner = owner
        self.alias = alias
        self.join_table_alias = join_table_alias

    @property
    def model(self) -> ModelSchema:
        return self.relation.target

    @property
    def aliased(self) -> bool:
        return self.alias != self.model.table_name

    def __repr__(self) -> str:
        return f"JoinNode({'.'.join(self.path)} AS {self.alias})"


class Associations:
    """Join tree rooted at a source model.

    Example:
        >>> associations = Associations(article, adapter)
        >>> associations.add_join_to(["taggings", "tag"])
        JoinNode(taggings.tag AS tags)
        >>> len(associations.join_values())
        2
        >>> associations.alias_for(["taggings", "tag"])
        '`tags`'
    """

    def __init__(self, model: ModelSchema, adapter: DatabaseAdapter):
        self.model = model
        self.adapter = adapter
        self._nodes: Dict[Path, JoinNode] = {}
        self._aliases: Set[str] = {model.table_name}

    @property
    def base_alias(self) -> str:
        return self.adapter.quoted_table_name(self.model.table_name)

    def add_join_to(self, stack: Sequence[str]) -> Optional[JoinNode]:
        """Ensure every relation along ``stack`` is joined.

        Args:
            stack: Relation names starting at the source model

        Returns:
            Node of the last relation, or None for an empty stack

        Raises:
            ConfigurationError: If a name is not a relation of the model
                reached so far
        """
        path: Path = tuple(stack)
        node: Optional[JoinNode] = None
        owner = self.model
        for depth, name in enumerate(path, start=1):
            prefix = path[:depth]
            node = self._nodes.get(prefix)
            if node is None:
                relation = owner.relation(name)
                if relation is None:
                    raise unknown_relation_error(owner.name, name, path)
                node = self._build_node(prefix, relation, owner)
                self._nodes[prefix] = node
                logger.debug("Joined %s as %s", ".".join(prefix), node.alias)
            owner = node.model
        return node

    def alias_for(self, stack: Sequence[str]) -> str:
        """Quoted table alias to qualify columns reached through ``stack``."""
        node = self.add_join_to(stack)
        if node is None:
            return self.base_alias
        return self._quoted_alias(node)

    def model_for(self, stack: Sequence[str]) -> ModelSchema:
        node = self.add_join_to(stack)
        return self.model if node is None else node.model

    def aggregate_for(self, stack: Sequence[str]) -> bool:
        """Whether ``stack`` crosses a collection, yielding several rows per document."""
        self.add_join_to(stack)
        path: Path = tuple(stack)
        return any(self._nodes[path[:depth]].relation.is_collection for depth in range(1, len(path) + 1))

    @property
    def nodes(self) -> List[JoinNode]:
        return list(self._nodes.values())

    def join_values(self) -> List[str]:
        """Rendered joins, each parent before its children."""
        joins: List[str] = []
        for node in self._nodes.values():
            joins.extend(self._join_sql(node))
        return joins

    def _build_node(self, path: Path, relation: Relation, owner: ModelSchema) -> JoinNode:
        parent_alias = self._plain_alias(path[:-1])
        join_table_alias = None
        if relation.kind == RelationKind.HAS_AND_BELONGS_TO_MANY:
            join_table_alias = self._allocate_alias(
                relation.join_table_for(owner), f"{relation.name}_{parent_alias}_join"
            )
        alias = self._allocate_alias(relation.target.table_name, f"{relation.name}_{parent_alias}")
        return JoinNode(path, relation, owner, alias, join_table_alias)

    def _allocate_alias(self, table_name: str, fallback: str) -> str:
        candidate = table_name if table_name not in self._aliases else fallback
        suffix = 2
        while candidate in self._aliases:
            candidate = f"{fallback}_{suffix}"
            suffix += 1
        self._aliases.add(candidate)
        return candidate

    def _plain_alias(self, path: Path) -> str:
        if not path:
            return self.model.table_name.split(".")[-1]
        return self._nodes[path].alias.split(".")[-1]

    def _quoted_alias(self, node: JoinNode) -> str:
        if node.aliased:
            return self.adapter.quote(node.alias)
        return self.adapter.quoted_table_name(node.alias)

    def _parent_alias(self, node: JoinNode) -> str:
        parent = self._nodes.get(node.path[:-1])
        return self.base_alias if parent is None else self._quoted_alias(parent)

    def _table_sql(self, table_name: str, alias: str) -> str:
        table = self.adapter.quoted_table_name(table_name)
        if alias == table_name:
            return table
        return f"{table} {self.adapter.quote(alias)}"

    def _join_sql(self, node: JoinNode) -> List[str]:
        quote = self.adapter.quote
        relation, owner = node.relation, node.owner
        parent = self._parent_alias(node)
        target = self._quoted_alias(node)
        table = self._table_sql(node.model.table_name, node.alias)
        foreign_key = relation.foreign_key_for(owner)

        if relation.kind == RelationKind.BELONGS_TO:
            condition = f"{target}.{quote(relation.primary_key_for(owner))} = {parent}.{quote(foreign_key)}"
            return [f"LEFT OUTER JOIN {table} ON {condition}"]

        if relation.kind == RelationKind.HAS_AND_BELONGS_TO_MANY:
            join_table_name = relation.join_table_for(owner)
            join_table = self._table_sql(join_table_name, node.join_table_alias)
            join_alias = (
                self.adapter.quoted_table_name(join_table_name)
                if node.join_table_alias == join_table_name
                else quote(node.join_table_alias)
            )
            return [
                f"LEFT OUTER JOIN {join_table} ON "
                f"{join_alias}.{quote(foreign_key)} = {parent}.{quote(owner.primary_key)}",
                f"LEFT OUTER JOIN {table} ON "
                f"{target}.{quote(node.model.primary_key)} = {join_alias}.{quote(relation.association_key)}",
            ]

        condition = f"{target}.{quote(foreign_key)} = {parent}.{quote(relation.primary_key_for(owner))}"
        if relation.polymorphic_as:
            condition += f" AND {target}.{quote(relation.polymorphic_as + '_type')} = '{owner.name}'"
        return [f"LEFT OUTER JOIN {table} ON {condition}"]
