"""Observabilidade: correlation_id e métricas como logs estruturados.

Uso:
    from app.observability import correlation_scope, get_correlation_id
    from app.observability import record_latency, record_dispatch_outcome
"""

from app.observability.correlation import (
    CORRELATION_HEADER,
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_dispatch_outcome,
    record_latency,
    record_lifecycle_transition,
)

__all__ = [
    "CORRELATION_HEADER",
    "correlation_scope",
    "generate_correlation_id",
    "get_correlation_id",
    "record_dispatch_outcome",
    "record_latency",
    "record_lifecycle_transition",
    "reset_correlation_id",
    "set_correlation_id",
]
