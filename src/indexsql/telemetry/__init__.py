"""OpenTelemetry helpers for query generation.

Without an OpenTelemetry SDK configured by the host application these
resolve to no-op tracers and spans.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from opentelemetry import trace
from opentelemetry.trace import Span

from indexsql.__version__ import __version__

__all__ = [
    "TRACER_NAME",
    "get_tracer",
    "query_span",
]

TRACER_NAME = "indexsql"


def get_tracer(name: str = TRACER_NAME, version: Optional[str] = None):
    """Return a tracer from the active OpenTelemetry provider."""
    return trace.get_tracer(name, version or __version__)


@contextmanager
def query_span(kind: str, attributes: Optional[Dict[str, Any]] = None) -> Iterator[Span]:
    """Run the block inside an ``indexsql.<kind>`` span.

    Args:
        kind: Query kind, e.g. ``sql_query_range``
        attributes: Initial span attributes
    """
    with get_tracer().start_as_current_span(f"indexsql.{kind}", attributes=attributes) as span:
        yield span
