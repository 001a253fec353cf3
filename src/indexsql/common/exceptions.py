from enum import Enum
from typing import Any, Dict, Optional

from indexsql.logging import get_logger

logger = get_logger(__name__)


class ErrorCode(Enum):
    """Standard error codes for indexsql.

    This enum provides categorized error codes that can be used
    to identify error types without creating numerous exception classes.
    Each category has a specific prefix for easy identification.

    Attributes:
        CONFIG_*: Malformed source configuration (1xxx)
        VALIDATION_*: Invalid input values (2xxx)
        RESOLUTION_*: Relation and column resolution errors (3xxx)
        STRATEGY_*: Unsupported dialect or delta strategies (4xxx)
    """
    # Configuration errors (1xxx)
    CONFIG_ERROR = "CONFIG_001"
    CONFIG_MISSING = "CONFIG_002"
    CONFIG_INVALID = "CONFIG_003"

    # Validation errors (2xxx)
    VALIDATION_ERROR = "VALIDATION_001"
    INVALID_DOCUMENT_ID = "VALIDATION_002"

    # Resolution errors (3xxx)
    UNKNOWN_RELATION = "RESOLUTION_001"
    UNKNOWN_COLUMN = "RESOLUTION_002"

    # Strategy errors (4xxx)
    UNSUPPORTED_DATABASE = "STRATEGY_001"
    UNSUPPORTED_DELTA = "STRATEGY_002"


class IndexSQLError(Exception):
    """Base exception for all indexsql errors.

    This exception class uses error codes for categorization
    instead of creating numerous specific exception classes.

    Attributes:
        message: Error message
        error_code: Error code from ErrorCode enum
        details: Additional error details
        cause: Optional underlying exception
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause

        logger.error(
            message,
            extra={"error_code": error_code.value, "details": self.details},
            exc_info=cause is not None,
        )

    def __str__(self) -> str:
        """String representation of the error."""
        msg = f"[{self.error_code.value}] {self.message}"
        if self.cause:
            msg = f"{msg} (caused by: {type(self.cause).__name__}: {str(self.cause)})"
        return msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "error_name": self.error_code.name,
            "details": self.details,
        }


class ConfigurationError(IndexSQLError):
    """Malformed source configuration.

    Raised at builder construction (or resolution) time instead of
    emitting SQL that would only fail once the database executes it.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONFIG_ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, error_code=error_code, details=details, cause=cause)


# Helper constructors. Each returns the error so call sites read ``raise helper(...)``.
def configuration_error(
    message: str,
    config_key: Optional[str] = None,
    error_code: ErrorCode = ErrorCode.CONFIG_ERROR,
    cause: Optional[Exception] = None,
) -> ConfigurationError:
    """Create a configuration error.

    Args:
        message: Error message
        config_key: Dotted path of the offending source setting
        error_code: Specific CONFIG_* code
        cause: Optional underlying exception
    """
    details = {"config_key": config_key} if config_key else {}
    return ConfigurationError(message, error_code=error_code, details=details, cause=cause)


def validation_error(
    message: str,
    field: Optional[str] = None,
    value: Any = None,
    error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
) -> IndexSQLError:
    """Create an error for a bad runtime value, e.g. a foreign document id."""
    details: Dict[str, Any] = {}
    if field:
        details["field"] = field
    if value is not None:
        details["value"] = str(value)
    return IndexSQLError(message, error_code=error_code, details=details)


def unknown_relation_error(model: str, relation: str, stack: Any) -> ConfigurationError:
    """Create an error for a relation path naming an unknown relation."""
    return ConfigurationError(
        message=f"Unknown relation '{relation}' on model {model} (path: {'.'.join(stack)})",
        error_code=ErrorCode.UNKNOWN_RELATION,
        details={"model": model, "relation": relation, "stack": list(stack)},
    )


def unknown_column_error(table: str, column: str) -> ConfigurationError:
    """Create an error for a column the model does not declare."""
    return ConfigurationError(
        message=f"Column '{column}' does not exist on table {table}",
        error_code=ErrorCode.UNKNOWN_COLUMN,
        details={"table": table, "column": column},
    )


def unsupported_strategy_error(kind: str, value: Any, supported: Any) -> ConfigurationError:
    """Create an error for an unknown dialect or delta strategy.

    Args:
        kind: Strategy family ("database" or "delta")
        value: Requested strategy key
        supported: Keys with a registered implementation
    """
    code = ErrorCode.UNSUPPORTED_DATABASE if kind == "database" else ErrorCode.UNSUPPORTED_DELTA
    names = ", ".join(str(getattr(key, "value", key)) for key in supported)
    return ConfigurationError(
        message=f"Unsupported {kind} type: {value}. Supported types: {names}",
        error_code=code,
        details={"kind": kind, "value": str(getattr(value, "value", value))},
    )
