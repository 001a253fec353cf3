"""Delta processor factory.

Processors are picked from a strategy table keyed by ``DeltaType``.
"""

from typing import Callable, Dict, Optional

from indexsql.common.exceptions import unsupported_strategy_error
from indexsql.constants import DeltaType
from indexsql.deltas.default import DefaultDelta
from indexsql.deltas.timestamp import TimestampDelta
from indexsql.protocols import DatabaseAdapter, DeltaProcessor
from indexsql.types import DeltaConfiguration

DELTA_PROCESSORS: Dict[DeltaType, Callable[..., DeltaProcessor]] = {
    DeltaType.DEFAULT: DefaultDelta,
    DeltaType.TIMESTAMP: TimestampDelta,
}


def get_delta_processor(
    adapter: DatabaseAdapter,
    table_name: str,
    config: Optional[DeltaConfiguration],
) -> Optional[DeltaProcessor]:
    """Create the delta processor for a source.

    Args:
        adapter: Dialect adapter of the source
        table_name: Backing table of the source model
        config: Delta settings, None when the source has no delta index

    Returns:
        Processor instance, or None when delta processing is off

    Raises:
        ConfigurationError: If no processor is registered for the type
    """
    if config is None:
        return None

    processor_class = DELTA_PROCESSORS.get(config.type)
    if processor_class is None:
        raise unsupported_strategy_error("delta", config.type, DELTA_PROCESSORS)
    return processor_class(adapter, table_name, config)
