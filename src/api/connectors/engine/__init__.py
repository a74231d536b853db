"""Connector de eventos do sidecar do engine (webhook assinado)."""

from api.connectors.engine.receive import (
    EngineEvent,
    EngineEventRequestError,
    InvalidEventError,
    InvalidJsonError,
    InvalidSignatureError,
    parse_engine_event,
)
from api.connectors.engine.signature import (
    SIGNATURE_HEADER,
    compute_signature,
    verify_signature,
)

__all__ = [
    "SIGNATURE_HEADER",
    "EngineEvent",
    "EngineEventRequestError",
    "InvalidEventError",
    "InvalidJsonError",
    "InvalidSignatureError",
    "compute_signature",
    "parse_engine_event",
    "verify_signature",
]
