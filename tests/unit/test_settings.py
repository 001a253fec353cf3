"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from indexsql.constants import DatabaseType
from indexsql.query_builder import SQLBuilder
from indexsql.settings import IndexSQLSettings, get_settings


def test_defaults(settings):
    assert settings.log_level == "INFO"
    assert settings.escape_newlines is True
    assert settings.default_database_type == DatabaseType.MYSQL
    assert settings.group_concat_max_len is None
    assert settings.utf8 is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("INDEXSQL_LOG_LEVEL", "debug")
    monkeypatch.setenv("INDEXSQL_ESCAPE_NEWLINES", "false")
    monkeypatch.setenv("INDEXSQL_DEFAULT_DATABASE_TYPE", "postgresql")
    monkeypatch.setenv("INDEXSQL_GROUP_CONCAT_MAX_LEN", "8192")

    settings = IndexSQLSettings(_env_file=None)
    assert settings.log_level == "DEBUG"
    assert settings.escape_newlines is False
    assert settings.default_database_type == DatabaseType.POSTGRESQL
    assert settings.group_concat_max_len == 8192


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        IndexSQLSettings(_env_file=None, log_level="chatty")


def test_group_concat_max_len_must_be_positive():
    with pytest.raises(ValidationError):
        IndexSQLSettings(_env_file=None, group_concat_max_len=0)


def test_get_settings_is_cached(monkeypatch):
    first = get_settings(force_reload=True)
    assert get_settings() is first

    monkeypatch.setenv("INDEXSQL_UTF8", "true")
    reloaded = get_settings(force_reload=True)
    assert reloaded is not first
    assert reloaded.utf8 is True
    get_settings(force_reload=True)


def test_default_dialect_applies_to_untagged_sources(article_source):
    source = article_source.model_copy(update={"database_type": None})
    settings = IndexSQLSettings(_env_file=None, default_database_type=DatabaseType.POSTGRESQL)
    builder = SQLBuilder(source, settings=settings)
    assert builder.adapter.database_type == DatabaseType.POSTGRESQL
    assert builder.sql_query_range().startswith('SELECT COALESCE(MIN("articles"."id"), 1)')
