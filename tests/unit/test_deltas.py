"""Unit tests for delta processors."""

import pytest

from indexsql.common.exceptions import ConfigurationError, ErrorCode
from indexsql.constants import DeltaType
from indexsql.deltas import DefaultDelta, TimestampDelta, get_delta_processor
from indexsql.deltas import factory
from indexsql.protocols import DeltaProcessor
from indexsql.types import DeltaConfiguration


class TestDefaultDelta:
    """Test the boolean flag delta."""

    def test_clauses_and_reset(self, mysql):
        """Test delta/main clauses and the reset statement on MySQL."""
        processor = get_delta_processor(mysql, "articles", DeltaConfiguration())
        assert isinstance(processor, DefaultDelta)
        assert isinstance(processor, DeltaProcessor)
        assert processor.clause(True) == "`articles`.`delta` = 1"
        assert processor.clause(False) == "`articles`.`delta` = 0"
        assert processor.reset_query() == "UPDATE `articles` SET `delta` = 0 WHERE `delta` = 1"

    def test_custom_column(self, postgresql):
        """Test a renamed flag column with PostgreSQL boolean literals."""
        processor = DefaultDelta(postgresql, "articles", DeltaConfiguration(column="dirty"))
        assert processor.clause(True) == '"articles"."dirty" = TRUE'
        assert processor.reset_query() == 'UPDATE "articles" SET "dirty" = FALSE WHERE "dirty" = TRUE'


class TestTimestampDelta:
    """Test the look-back window delta."""

    def test_clauses(self, mysql):
        """Test that only the delta index is restricted and nothing is reset."""
        config = DeltaConfiguration(type=DeltaType.TIMESTAMP, threshold=3600)
        processor = get_delta_processor(mysql, "articles", config)
        assert isinstance(processor, TimestampDelta)
        assert processor.clause(True) == "`articles`.`updated_at` > DATE_SUB(NOW(), INTERVAL 3600 SECOND)"
        assert processor.clause(False) is None
        assert processor.reset_query() is None

    def test_postgresql_window(self, postgresql):
        """Test the PostgreSQL interval form."""
        processor = TimestampDelta(postgresql, "articles", DeltaConfiguration(type=DeltaType.TIMESTAMP, threshold=60))
        assert processor.clause(True) == "\"articles\".\"updated_at\" > current_timestamp - interval '60 seconds'"


class TestDeltaFactory:
    """Test delta processor selection."""

    def test_no_configuration_means_no_processor(self, mysql):
        """Test that sources without delta settings get no processor."""
        assert get_delta_processor(mysql, "articles", None) is None

    def test_unregistered_delta_type(self, mysql, monkeypatch):
        """Test that a delta type without an implementation is rejected."""
        monkeypatch.delitem(factory.DELTA_PROCESSORS, DeltaType.TIMESTAMP)
        with pytest.raises(ConfigurationError) as exc_info:
            get_delta_processor(mysql, "articles", DeltaConfiguration(type=DeltaType.TIMESTAMP))
        assert exc_info.value.error_code == ErrorCode.UNSUPPORTED_DELTA
