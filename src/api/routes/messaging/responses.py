"""Tradução de DispatchResult em respostas HTTP `{status, ...}`."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import status
from fastapi.responses import JSONResponse

from utils.errors import (
    GatewayError,
    GroupNotFoundError,
    MediaRejectedError,
    RecipientNotRegisteredError,
    SessionNotReadyError,
    ValidationError,
)

if TYPE_CHECKING:
    from app.use_cases.dispatch import DispatchResult

logger = logging.getLogger(__name__)

UNPROCESSABLE = 422

# Primeira classe compatível vence; demais falhas são 500
_STATUS_BY_FAILURE: tuple[tuple[type[GatewayError], int], ...] = (
    (SessionNotReadyError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (ValidationError, UNPROCESSABLE),
    (RecipientNotRegisteredError, UNPROCESSABLE),
    (MediaRejectedError, UNPROCESSABLE),
    (GroupNotFoundError, UNPROCESSABLE),
)


def status_for(failure: GatewayError) -> int:
    """Status HTTP para um erro de domínio."""
    for error_type, status_code in _STATUS_BY_FAILURE:
        if isinstance(failure, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def failure_response(failure: GatewayError) -> JSONResponse:
    return JSONResponse(
        status_code=status_for(failure),
        content={"status": False, "message": failure.message},
    )


def validation_response(errors: dict[str, str]) -> JSONResponse:
    logger.info("request_validation_failed", extra={"fields": sorted(errors)})
    return JSONResponse(
        status_code=UNPROCESSABLE,
        content={"status": False, "message": errors},
    )


def dispatch_response(result: DispatchResult, key: str = "response") -> JSONResponse:
    """200 com `{status: true, <key>: payload}` ou falha mapeada.

    Para key="message" o payload deve ser `{"message": ...}`.
    """
    # DispatchResult garante failure quando ok=False
    if result.failure is not None:
        return failure_response(result.failure)

    payload: Any = result.payload
    if key == "message" and isinstance(payload, dict):
        payload = payload.get("message")
    return JSONResponse(status_code=status.HTTP_200_OK, content={"status": True, key: payload})
