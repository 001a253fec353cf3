"""Shared fixtures for query builder tests."""

import pytest

from indexsql.adapters import MySQLAdapter, PostgreSQLAdapter
from indexsql.constants import AttributeType, RelationKind
from indexsql.settings import IndexSQLSettings
from indexsql.types import Attribute, Field, ModelSchema, Relation, SourceDefinition


@pytest.fixture
def settings() -> IndexSQLSettings:
    return IndexSQLSettings(_env_file=None)


@pytest.fixture
def mysql() -> MySQLAdapter:
    return MySQLAdapter()


@pytest.fixture
def postgresql() -> PostgreSQLAdapter:
    return PostgreSQLAdapter()


@pytest.fixture
def tag() -> ModelSchema:
    return ModelSchema(name="Tag", table_name="tags", columns=["id", "name"])


@pytest.fixture
def user() -> ModelSchema:
    return ModelSchema(name="User", table_name="users", columns=["id", "name", "manager_id"])


@pytest.fixture
def tagging(tag: ModelSchema) -> ModelSchema:
    return ModelSchema(
        name="Tagging",
        table_name="taggings",
        columns=["id", "article_id", "tag_id"],
        relations={"tag": Relation(name="tag", kind=RelationKind.BELONGS_TO, target=tag)},
    )


@pytest.fixture
def article(tagging: ModelSchema, tag: ModelSchema, user: ModelSchema) -> ModelSchema:
    return ModelSchema(
        name="Article",
        table_name="articles",
        columns=["id", "title", "body", "published_at", "user_id", "delta", "updated_at"],
        relations={
            "taggings": Relation(name="taggings", kind=RelationKind.HAS_MANY, target=tagging),
            "user": Relation(name="user", kind=RelationKind.BELONGS_TO, target=user),
            "tags": Relation(name="tags", kind=RelationKind.HAS_AND_BELONGS_TO_MANY, target=tag),
        },
    )


@pytest.fixture
def article_source(article: ModelSchema) -> SourceDefinition:
    """Article source with one field and one single-valued attribute."""
    return SourceDefinition(
        name="article_core_0",
        model=article,
        database_type="mysql",
        fields=[Field(name="title", columns="title")],
        attributes=[Attribute(name="published_at", columns="published_at", type=AttributeType.TIMESTAMP)],
    )
