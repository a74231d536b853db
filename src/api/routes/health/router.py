"""Endpoints de health check e status da sessão."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Request
from pydantic import BaseModel

from config.settings import get_base_settings

logger = logging.getLogger(__name__)

router = APIRouter()

CLIENT_READY_TEXT = "WhatsApp client is ready"
CLIENT_NOT_READY_TEXT = "WhatsApp client is not ready yet"


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


class StatusResponse(BaseModel):
    """Estado da sessão do engine."""

    status: bool
    client_ready: bool
    message: str
    state: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness: verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service=get_base_settings().service_name,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/status", response_model=StatusResponse)
async def session_status(request: Request) -> StatusResponse:
    """Informa se o engine está pronto para dispatch."""
    runtime = request.app.state.runtime
    ready = runtime.gate.is_ready()
    return StatusResponse(
        status=True,
        client_ready=ready,
        message=CLIENT_READY_TEXT if ready else CLIENT_NOT_READY_TEXT,
        state=runtime.machine.current_state.name,
    )
