"""Protocols for the strategies plugged into the query builders."""

from indexsql.protocols.strategies import DatabaseAdapter, DeltaProcessor

__all__ = [
    "DatabaseAdapter",
    "DeltaProcessor",
]
