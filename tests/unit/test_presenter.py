"""Unit tests for PropertySQLPresenter."""

import pytest

from indexsql.common.exceptions import ConfigurationError, ErrorCode
from indexsql.constants import AttributeType
from indexsql.query_builder import Associations, PropertySQLPresenter
from indexsql.types import Attribute, Column, Field


class TestPropertySQLPresenter:
    """Test SELECT and GROUP BY forms of fields and attributes."""

    @pytest.fixture
    def associations(self, article, mysql):
        return Associations(article, mysql)

    @pytest.fixture
    def present(self, mysql, associations):
        return lambda prop: PropertySQLPresenter(prop, mysql, associations)

    def test_single_valued_field(self, present):
        """Test that a plain column is aliased and grouped."""
        presenter = present(Field(name="title", columns="title"))
        assert presenter.to_select() == "`articles`.`title` AS `title`"
        assert presenter.to_group() == "`articles`.`title`"

    def test_multi_valued_attribute_through_has_many(self, present):
        """Test that collection columns are aggregated and not grouped."""
        presenter = present(Attribute(name="tags", columns="taggings.tag.name", type=AttributeType.STRING))
        assert presenter.aggregate is True
        assert presenter.to_select() == "GROUP_CONCAT(DISTINCT `tags`.`name` SEPARATOR ',') AS `tags`"
        assert presenter.to_group() is None

    def test_multi_valued_field_uses_space_separator(self, present):
        presenter = present(Field(name="tag_names", columns="taggings.tag.name"))
        assert presenter.to_select() == "GROUP_CONCAT(DISTINCT `tags`.`name` SEPARATOR ' ') AS `tag_names`"

    def test_belongs_to_column_is_single_valued(self, present):
        presenter = present(Field(name="author", columns="user.name"))
        assert presenter.to_select() == "`users`.`name` AS `author`"
        assert presenter.to_group() == "`users`.`name`"

    def test_explicit_multi_flag_wins(self, present):
        """Test that an explicit multi flag overrides inference."""
        presenter = present(Attribute(name="tag_ids", columns="taggings.tag_id", multi=False))
        assert presenter.to_select() == "`taggings`.`tag_id` AS `tag_ids`"
        assert presenter.to_group() == "`taggings`.`tag_id`"

    def test_timestamp_attribute_cast(self, present):
        """Test that timestamps are cast in SELECT but grouped raw."""
        presenter = present(Attribute(name="published_at", columns="published_at", type=AttributeType.TIMESTAMP))
        assert presenter.to_select() == "UNIX_TIMESTAMP(`articles`.`published_at`) AS `published_at`"
        assert presenter.to_group() == "`articles`.`published_at`"

    def test_field_columns_concatenated(self, present):
        presenter = present(Field(name="content", columns=["title", "body"]))
        assert presenter.to_select() == "CONCAT_WS(' ', `articles`.`title`, `articles`.`body`) AS `content`"
        assert presenter.to_group() == "`articles`.`title`, `articles`.`body`"

    def test_attribute_columns_cast_and_concatenated(self, present):
        """Test that attribute parts are cast to strings before concatenation."""
        presenter = present(Attribute(name="refs", columns=["id", "user_id"]))
        assert presenter.to_select() == (
            "CONCAT_WS(',', CAST(`articles`.`id` AS char), CAST(`articles`.`user_id` AS char)) AS `refs`"
        )

    def test_raw_column_passed_through(self, present):
        """Test that raw SQL columns are neither qualified nor checked."""
        presenter = present(Field(name="slug", columns=[Column.sql("LOWER(articles.title)")]))
        assert presenter.to_select() == "LOWER(articles.title) AS `slug`"
        assert presenter.to_group() == "LOWER(articles.title)"

    def test_unknown_column(self, present):
        with pytest.raises(ConfigurationError) as exc_info:
            present(Field(name="summary", columns="summary"))
        assert exc_info.value.error_code == ErrorCode.UNKNOWN_COLUMN

    def test_unknown_relation_in_column(self, present):
        with pytest.raises(ConfigurationError) as exc_info:
            present(Field(name="editor", columns="editor.name"))
        assert exc_info.value.error_code == ErrorCode.UNKNOWN_RELATION


def test_multi_valued_postgresql(article, postgresql):
    associations = Associations(article, postgresql)
    tags = Attribute(name="tags", columns="taggings.tag.name", type=AttributeType.STRING)
    presenter = PropertySQLPresenter(tags, postgresql, associations)
    assert presenter.to_select() == 'array_to_string(array_agg(DISTINCT "tags"."name"), \',\') AS "tags"'


def test_reserved_alias_postgresql(article, postgresql):
    """Test that a property named after a reserved word is quoted as an alias."""
    associations = Associations(article, postgresql)
    presenter = PropertySQLPresenter(Field(name="order", columns="title"), postgresql, associations)
    assert presenter.to_select() == '"articles"."title" AS "order"'
    assert presenter.to_group() == '"articles"."title"'
