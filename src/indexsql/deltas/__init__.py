"""Delta processors.

Available Processors:
    - DefaultDelta: boolean flag column, reset after each main build
    - TimestampDelta: rows updated within a rolling window
"""

from indexsql.deltas.default import DefaultDelta
from indexsql.deltas.factory import DELTA_PROCESSORS, get_delta_processor
from indexsql.deltas.timestamp import TimestampDelta

__all__ = [
    "DefaultDelta",
    "TimestampDelta",
    "DELTA_PROCESSORS",
    "get_delta_processor",
]
