"""Base dialect adapter.

Identifiers are always quoted, through sqlglot's dialect generators, so
reserved words and mixed-case names reach the database as written.
"""

from abc import ABC, abstractmethod
from typing import List

from sqlglot import exp

from indexsql.common.exceptions import configuration_error
from indexsql.constants import DatabaseType


class BaseDatabaseAdapter(ABC):
    """Base class for dialect adapters.

    Subclasses set ``database_type`` and implement the dialect-specific
    expressions. Adapters are stateless and safe to share between builders.
    """

    database_type: DatabaseType

    @property
    def supports_query_hints(self) -> bool:
        return False

    def quote(self, identifier: str) -> str:
        """Quote an identifier for safe SQL usage.

        Args:
            identifier: Unquoted column or table name

        Returns:
            The identifier in the dialect's quote characters

        Raises:
            ConfigurationError: If the identifier is blank
        """
        if not identifier or not identifier.strip():
            raise configuration_error("Empty identifier", config_key="identifier")
        return exp.to_identifier(identifier, quoted=True).sql(dialect=self.database_type.sqlglot_dialect)

    def quoted_table_name(self, table_name: str) -> str:
        return ".".join(self.quote(part) for part in table_name.split("."))

    @abstractmethod
    def convert_nulls(self, clause: str, default: object = "''") -> str:
        """Replace NULL results of ``clause`` with ``default``."""
        pass

    def utf8_query_pre(self) -> List[str]:
        return []

    @abstractmethod
    def group_concat(self, clause: str, separator: str = " ") -> str:
        pass

    @abstractmethod
    def concatenate(self, clause: str, separator: str = " ") -> str:
        pass

    @abstractmethod
    def cast_to_string(self, clause: str) -> str:
        pass

    @abstractmethod
    def cast_to_timestamp(self, clause: str) -> str:
        pass

    @abstractmethod
    def boolean_value(self, value: bool) -> str:
        pass

    @abstractmethod
    def time_difference(self, seconds: int) -> str:
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
