"""Common utilities and exceptions for indexsql.

Exception Design:
    The exception system uses error codes for categorization rather than
    numerous specific exception classes. All exceptions inherit from
    IndexSQLError and include structured error information.
    ConfigurationError marks malformed source definitions.
"""

from indexsql.common.exceptions import (
    ConfigurationError,
    ErrorCode,
    IndexSQLError,
    # Helper functions
    configuration_error,
    unknown_column_error,
    unknown_relation_error,
    unsupported_strategy_error,
    validation_error,
)

__all__ = [
    # Base Exception and Error Codes
    "IndexSQLError",
    "ConfigurationError",
    "ErrorCode",
    # Helper functions
    "configuration_error",
    "validation_error",
    "unknown_relation_error",
    "unknown_column_error",
    "unsupported_strategy_error",
]
