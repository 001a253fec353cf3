"""Dialect adapter factory.

Adapters are picked from a strategy table keyed by ``DatabaseType`` when a
builder is constructed, never by inspecting types at query time.
"""

from typing import Dict, Type, Union

from indexsql.adapters.base import BaseDatabaseAdapter
from indexsql.adapters.mysql import MySQLAdapter
from indexsql.adapters.postgresql import PostgreSQLAdapter
from indexsql.common.exceptions import unsupported_strategy_error
from indexsql.constants import DatabaseType

ADAPTERS: Dict[DatabaseType, Type[BaseDatabaseAdapter]] = {
    DatabaseType.MYSQL: MySQLAdapter,
    DatabaseType.POSTGRESQL: PostgreSQLAdapter,
}


def get_adapter(database_type: Union[DatabaseType, str]) -> BaseDatabaseAdapter:
    """Create the adapter for a dialect.

    Args:
        database_type: Dialect enum member or its value (``"mysql"``)

    Returns:
        Adapter instance for the dialect

    Raises:
        ConfigurationError: If no adapter is registered for the dialect
    """
    try:
        key = DatabaseType(database_type)
    except ValueError:
        raise unsupported_strategy_error("database", database_type, ADAPTERS) from None

    adapter_class = ADAPTERS.get(key)
    if adapter_class is None:
        raise unsupported_strategy_error("database", database_type, ADAPTERS)
    return adapter_class()
