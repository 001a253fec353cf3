"""Dialect adapters.

Available Adapters:
    - MySQLAdapter: MySQL / MariaDB (query hints, GROUP_CONCAT)
    - PostgreSQLAdapter: PostgreSQL (array_agg, COALESCE)

Example:
    >>> from indexsql.adapters import get_adapter
    >>> get_adapter("mysql").convert_nulls("MIN(id)", 1)
    'IFNULL(MIN(id), 1)'
"""

from indexsql.adapters.base import BaseDatabaseAdapter
from indexsql.adapters.factory import ADAPTERS, get_adapter
from indexsql.adapters.mysql import MySQLAdapter
from indexsql.adapters.postgresql import PostgreSQLAdapter

__all__ = [
    "BaseDatabaseAdapter",
    "MySQLAdapter",
    "PostgreSQLAdapter",
    "ADAPTERS",
    "get_adapter",
]
