"""Endpoints das operações outbound.

Endpoints:
- POST /is-registered
- POST /send-message
- POST /send-media (multipart)
- POST /send-group-message
- POST /add-to-group
- POST /clear-message

Bodies aceitos como JSON ou formulário. Toda resposta segue
`{status: bool, ...}`; falhas nunca propagam exceção.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from api.routes.messaging.responses import dispatch_response, validation_response
from api.routes.messaging.schemas import (
    AddToGroupRequest,
    NumberRequest,
    RequestValidationFailed,
    SendGroupMessageRequest,
    SendMediaRequest,
    SendMessageRequest,
    parse_request,
)
from app.domain import UploadedFile

if TYPE_CHECKING:
    from app.use_cases.dispatch import MessageDispatcher

router = APIRouter()

UPLOAD_FIELD = "file"


def _dispatcher(request: Request) -> MessageDispatcher:
    return request.app.state.runtime.dispatcher


async def _read_body(request: Request) -> dict[str, Any]:
    """Lê o body como JSON ou formulário (urlencoded/multipart)."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            data = await request.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}

    form = await request.form()
    return dict(form.items())


async def _to_uploaded_file(value: Any, max_bytes: int) -> UploadedFile:
    """Converte o upload multipart lendo no máximo `max_bytes + 1` bytes.

    Acima do maior teto o conteúdo não é carregado; o pipeline recusa
    pelo tamanho declarado.
    """
    if not isinstance(value, UploadFile):
        return UploadedFile()
    if value.size is not None and value.size > max_bytes:
        return UploadedFile(
            content_type=value.content_type or "",
            filename=value.filename or "",
            declared_size=value.size,
        )
    data = await value.read(max_bytes + 1)
    return UploadedFile(
        data=data,
        content_type=value.content_type or "",
        filename=value.filename or "",
        declared_size=value.size if value.size is not None else len(data),
    )


@router.post("/is-registered", response_model=None)
async def is_registered(request: Request) -> JSONResponse:
    """Consulta se o número possui conta registrada."""
    try:
        body = parse_request(NumberRequest, await _read_body(request))
    except RequestValidationFailed as exc:
        return validation_response(exc.errors)

    result = await _dispatcher(request).check_registration(body.number)
    return dispatch_response(result, key="message")


@router.post("/send-message", response_model=None)
async def send_message(request: Request) -> JSONResponse:
    """Envia mensagem de texto."""
    try:
        body = parse_request(SendMessageRequest, await _read_body(request))
    except RequestValidationFailed as exc:
        return validation_response(exc.errors)

    result = await _dispatcher(request).send_text(body.number, body.message)
    return dispatch_response(result)


@router.post("/send-media", response_model=None)
async def send_media(request: Request) -> JSONResponse:
    """Envia mídia enviada como upload multipart (campo `file`)."""
    raw = await _read_body(request)
    try:
        body = parse_request(SendMediaRequest, raw)
    except RequestValidationFailed as exc:
        return validation_response(exc.errors)

    settings = request.app.state.runtime.whatsapp_settings
    upload = await _to_uploaded_file(raw.get(UPLOAD_FIELD), settings.upload_max_bytes)
    result = await _dispatcher(request).send_media(
        body.number,
        upload,
        caption=body.caption,
    )
    return dispatch_response(result, key="message")


@router.post("/send-group-message", response_model=None)
async def send_group_message(request: Request) -> JSONResponse:
    """Envia texto para grupo por `id` ou `name`."""
    try:
        body = parse_request(SendGroupMessageRequest, await _read_body(request))
    except RequestValidationFailed as exc:
        return validation_response(exc.errors)

    result = await _dispatcher(request).send_to_group(
        body.message,
        group_id=body.id,
        name=body.name,
    )
    return dispatch_response(result)


@router.post("/add-to-group", response_model=None)
async def add_to_group(request: Request) -> JSONResponse:
    """Adiciona o número ao grupo."""
    try:
        body = parse_request(AddToGroupRequest, await _read_body(request))
    except RequestValidationFailed as exc:
        return validation_response(exc.errors)

    result = await _dispatcher(request).add_to_group(body.number, body.groupid)
    return dispatch_response(result, key="message")


@router.post("/clear-message", response_model=None)
async def clear_message(request: Request) -> JSONResponse:
    """Limpa as mensagens do chat com o número."""
    try:
        body = parse_request(NumberRequest, await _read_body(request))
    except RequestValidationFailed as exc:
        return validation_response(exc.errors)

    result = await _dispatcher(request).clear_messages(body.number)
    return dispatch_response(result)
