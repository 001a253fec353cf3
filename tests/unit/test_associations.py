"""Unit tests for join tree resolution."""

import pytest

from indexsql.common.exceptions import ConfigurationError, ErrorCode
from indexsql.constants import RelationKind
from indexsql.query_builder import Associations
from indexsql.types import ModelSchema, Relation


class TestAssociations:
    """Test joins derived from relation paths."""

    @pytest.fixture
    def associations(self, article, mysql):
        return Associations(article, mysql)

    def test_empty_stack_uses_base_table(self, associations):
        """Test that an empty path resolves to the source table without joins."""
        assert associations.add_join_to([]) is None
        assert associations.alias_for([]) == "`articles`"
        assert associations.join_values() == []

    def test_belongs_to_join(self, associations):
        """Test the owner-side foreign key of a belongs_to join."""
        associations.add_join_to(["user"])
        assert associations.join_values() == ["LEFT OUTER JOIN `users` ON `users`.`id` = `articles`.`user_id`"]

    def test_nested_has_many_join(self, associations):
        """Test that a nested path joins parents before children."""
        associations.add_join_to(["taggings", "tag"])
        assert associations.join_values() == [
            "LEFT OUTER JOIN `taggings` ON `taggings`.`article_id` = `articles`.`id`",
            "LEFT OUTER JOIN `tags` ON `tags`.`id` = `taggings`.`tag_id`",
        ]
        assert associations.alias_for(["taggings", "tag"]) == "`tags`"
        assert associations.model_for(["taggings", "tag"]).name == "Tag"

    @pytest.mark.parametrize(
        "stacks",
        [
            [["taggings", "tag"], ["taggings", "tag"]],
            [["taggings"], ["taggings", "tag"]],
            [["taggings", "tag"], ["taggings"]],
            [["user"], ["taggings", "tag"], ["user"], ["taggings"]],
        ],
    )
    def test_same_path_joined_once(self, associations, stacks):
        """Test that overlapping paths share their joins."""
        for stack in stacks:
            associations.add_join_to(stack)
        joins = associations.join_values()
        assert len(joins) == len(set(joins))
        assert sum("JOIN `taggings`" in join for join in joins) == 1
        assert len(associations.nodes) == len({node.path for node in associations.nodes})

    def test_unknown_relation(self, associations):
        """Test that the error names the model the lookup failed on."""
        with pytest.raises(ConfigurationError) as exc_info:
            associations.add_join_to(["taggings", "author"])
        assert exc_info.value.error_code == ErrorCode.UNKNOWN_RELATION
        assert exc_info.value.details["model"] == "Tagging"

    def test_aggregate_for(self, associations):
        """Test that only paths crossing a collection are multi-valued."""
        assert associations.aggregate_for([]) is False
        assert associations.aggregate_for(["user"]) is False
        assert associations.aggregate_for(["taggings", "tag"]) is True
        assert associations.aggregate_for(["tags"]) is True

    def test_has_and_belongs_to_many(self, associations):
        """Test that HABTM joins go through the join table."""
        associations.add_join_to(["tags"])
        assert associations.join_values() == [
            "LEFT OUTER JOIN `articles_tags` ON `articles_tags`.`article_id` = `articles`.`id`",
            "LEFT OUTER JOIN `tags` ON `tags`.`id` = `articles_tags`.`tag_id`",
        ]

    def test_repeated_table_gets_alias(self, associations):
        """Test that a table joined twice is aliased the second time."""
        associations.add_join_to(["taggings", "tag"])
        associations.add_join_to(["tags"])
        joins = associations.join_values()
        assert joins[-1] == (
            "LEFT OUTER JOIN `tags` `tags_articles` ON `tags_articles`.`id` = `articles_tags`.`tag_id`"
        )
        assert associations.alias_for(["tags"]) == "`tags_articles`"
        assert associations.alias_for(["taggings", "tag"]) == "`tags`"


class TestRelationVariants:
    """Test self joins, polymorphic relations and explicit keys."""

    def test_self_join_aliased(self, mysql):
        manager = ModelSchema(name="User", table_name="users")
        user = ModelSchema(
            name="User",
            table_name="users",
            relations={"manager": Relation(name="manager", kind=RelationKind.BELONGS_TO, target=manager)},
        )
        associations = Associations(user, mysql)
        associations.add_join_to(["manager"])
        assert associations.join_values() == [
            "LEFT OUTER JOIN `users` `manager_users` ON `manager_users`.`id` = `users`.`manager_id`"
        ]

    def test_polymorphic_has_many(self, mysql):
        """Test that polymorphic joins also match the owner type."""
        comment = ModelSchema(name="Comment", table_name="comments")
        article = ModelSchema(
            name="Article",
            table_name="articles",
            relations={
                "comments": Relation(
                    name="comments",
                    kind=RelationKind.HAS_MANY,
                    target=comment,
                    polymorphic_as="commentable",
                )
            },
        )
        associations = Associations(article, mysql)
        associations.add_join_to(["comments"])
        assert associations.join_values() == [
            "LEFT OUTER JOIN `comments` ON `comments`.`commentable_id` = `articles`.`id` "
            "AND `comments`.`commentable_type` = 'Article'"
        ]

    def test_explicit_keys(self, mysql):
        author = ModelSchema(name="Person", table_name="people", primary_key="person_id")
        book = ModelSchema(
            name="Book",
            table_name="books",
            relations={
                "author": Relation(
                    name="author", kind=RelationKind.BELONGS_TO, target=author, foreign_key="written_by"
                )
            },
        )
        associations = Associations(book, mysql)
        associations.add_join_to(["author"])
        assert associations.join_values() == [
            "LEFT OUTER JOIN `people` ON `people`.`person_id` = `books`.`written_by`"
        ]

    def test_reserved_names_on_postgresql(self, postgresql):
        """Test that reserved table and column names are quoted in join conditions."""
        group = ModelSchema(name="Group", table_name="group", primary_key="order")
        user = ModelSchema(
            name="User",
            table_name="user",
            relations={"group": Relation(name="group", kind=RelationKind.BELONGS_TO, target=group)},
        )
        associations = Associations(user, postgresql)
        associations.add_join_to(["group"])
        assert associations.join_values() == [
            'LEFT OUTER JOIN "group" ON "group"."order" = "user"."group_id"'
        ]
