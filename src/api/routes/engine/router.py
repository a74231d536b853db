"""Webhook de eventos do sidecar do engine.

POST /engine/events: eventos de ciclo de vida e mensagens recebidas,
assinados com HMAC-SHA256 no header X-Engine-Signature.

Segurança:
- Assinatura obrigatória quando ENGINE_EVENTS_SECRET está definido
- Só aceito quando o engine ativo recebe eventos por webhook
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from api.connectors.engine import (
    InvalidEventError,
    InvalidJsonError,
    InvalidSignatureError,
    parse_engine_event,
)
from app.observability import get_correlation_id

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/events", response_model=None)
async def receive_engine_event(request: Request) -> JSONResponse | dict[str, Any]:
    """Recebe um evento do sidecar e repassa ao engine."""
    runtime = request.app.state.runtime
    dispatch_event = getattr(runtime.engine, "dispatch_event", None)
    if not callable(dispatch_event):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"status": False, "message": "Engine events are not enabled"},
        )

    raw_body = await request.body()
    try:
        event = parse_engine_event(
            raw_body=raw_body,
            headers=request.headers,
            secret=runtime.engine_settings.events_secret or None,
        )
    except InvalidSignatureError:
        logger.warning(
            "engine_event_signature_invalid",
            extra={"correlation_id": get_correlation_id()},
        )
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"status": False, "message": "Invalid signature"},
        )
    except (InvalidJsonError, InvalidEventError) as exc:
        logger.warning(
            "engine_event_invalid",
            extra={"correlation_id": get_correlation_id(), "error": str(exc)},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"status": False, "message": str(exc)},
        )

    accepted = await dispatch_event(event.event, event.data)
    logger.info(
        "engine_event_received",
        extra={"engine_event": event.event, "accepted": accepted, "payload_size": len(raw_body)},
    )
    return {"status": True, "accepted": accepted}
