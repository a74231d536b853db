"""Parse e validação inicial dos eventos do sidecar (sem PII)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from api.connectors.engine.signature import SIGNATURE_HEADER, verify_signature

if TYPE_CHECKING:
    from collections.abc import Mapping


class EngineEventRequestError(ValueError):
    """Erro base para falhas do webhook de eventos."""


class InvalidSignatureError(EngineEventRequestError):
    """Assinatura ausente ou inválida."""


class InvalidJsonError(EngineEventRequestError):
    """JSON inválido ou não objeto."""


class InvalidEventError(EngineEventRequestError):
    """Payload sem nome de evento."""


@dataclass(frozen=True, slots=True)
class EngineEvent:
    """Evento do engine: nome + dados."""

    event: str
    data: dict[str, Any] = field(default_factory=dict)


def parse_engine_event(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
) -> EngineEvent:
    """Valida assinatura e parseia `{"event": ..., "data": {...}}`.

    Sem secret configurado a assinatura não é verificada (apenas dev).

    Raises:
        InvalidSignatureError: assinatura inválida
        InvalidJsonError: JSON inválido ou não objeto
        InvalidEventError: campo `event` ausente
    """
    if secret:
        signature = headers.get(SIGNATURE_HEADER.lower()) or headers.get(SIGNATURE_HEADER) or ""
        if not verify_signature(raw_body, signature, secret):
            raise InvalidSignatureError("invalid_signature")

    try:
        payload = json.loads(raw_body or b"{}")
    except json.JSONDecodeError as exc:
        raise InvalidJsonError("invalid_json") from exc

    if not isinstance(payload, dict):
        raise InvalidJsonError("payload_not_object")

    event = payload.get("event")
    if not isinstance(event, str) or not event:
        raise InvalidEventError("missing_event")

    data = payload.get("data") or {}
    if not isinstance(data, dict):
        raise InvalidJsonError("data_not_object")

    return EngineEvent(event=event, data=data)
