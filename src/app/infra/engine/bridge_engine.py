"""Engine de chat via sidecar HTTP.

O sidecar roda a automação do WhatsApp Web e expõe uma API JSON:

- POST /session/start, POST /session/stop
- GET  /contacts/{id}/registered → {"registered": bool}
- POST /messages → mensagem enviada
- GET  /chats, GET /chats/{id}
- POST /chats/{id}/participants, POST /chats/{id}/clear
- POST /messages/{id}/reply

Eventos de ciclo de vida e mensagens recebidas chegam pelo webhook
assinado `/engine/events` e são repassados via `dispatch_event`.
Erros do sidecar vêm como `{"error": "<mensagem>"}` e viram EngineError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx

from app.domain import MediaEnvelope
from app.infra.engine.emitter import AsyncEventEmitter
from app.infra.engine.http_client import EngineHttpClient, HttpClientConfig

if TYPE_CHECKING:
    from app.protocols import EngineListener
    from config.settings import EngineSettings

logger = logging.getLogger(__name__)

LIFECYCLE_EVENTS = frozenset({"qr", "authenticated", "ready", "auth_failure", "disconnected"})


def _path_id(value: str) -> str:
    return quote(value, safe="@.-")


@dataclass
class BridgeChat:
    """Chat remoto acessado via sidecar."""

    id: str
    name: str
    is_group: bool
    _client: EngineHttpClient = field(repr=False)

    async def add_participants(self, participant_ids: list[str], comment: str) -> dict[str, Any]:
        return await self._client.post(
            f"/chats/{_path_id(self.id)}/participants",
            json={"participants": participant_ids, "comment": comment},
        )

    async def clear_messages(self) -> bool:
        body = await self._client.post(f"/chats/{_path_id(self.id)}/clear")
        return bool(body.get("cleared", False))


@dataclass
class BridgeInboundMessage:
    """Mensagem recebida entregue pelo webhook."""

    id: str
    sender: str
    body: str
    _client: EngineHttpClient = field(repr=False)

    async def reply(self, text: str) -> dict[str, Any]:
        return await self._client.post(
            f"/messages/{_path_id(self.id)}/reply",
            json={"chat_id": self.sender, "body": text},
        )


class BridgeChatEngine:
    """Implementação de ChatEngineProtocol sobre o sidecar HTTP."""

    def __init__(
        self,
        client: EngineHttpClient,
        emitter: AsyncEventEmitter | None = None,
        media_timeout_seconds: float | None = None,
    ) -> None:
        self._client = client
        self._emitter = emitter or AsyncEventEmitter()
        # Envio de mídia não usa o timeout curto do cliente; None = sem limite HTTP
        self._media_timeout_seconds = media_timeout_seconds
        self._info: dict[str, Any] | None = None

    @classmethod
    def from_settings(
        cls,
        settings: EngineSettings,
        transport: httpx.AsyncBaseTransport | None = None,
        media_timeout_seconds: float | None = None,
    ) -> BridgeChatEngine:
        headers = {"Accept": "application/json"}
        if settings.bridge_token:
            headers["Authorization"] = f"Bearer {settings.bridge_token}"
        config = HttpClientConfig(
            base_url=settings.bridge_url,
            timeout_seconds=settings.request_timeout_seconds,
            max_retries=settings.max_retries,
            default_headers=headers,
        )
        return cls(
            EngineHttpClient(config, transport=transport),
            media_timeout_seconds=media_timeout_seconds,
        )

    @property
    def info(self) -> dict[str, Any] | None:
        return self._info

    def on(self, event: str, listener: EngineListener) -> None:
        self._emitter.on(event, listener)

    async def initialize(self) -> None:
        await self._client.post("/session/start")

    async def destroy(self) -> None:
        self._info = None
        await self._client.post("/session/stop")

    async def aclose(self) -> None:
        await self._client.aclose()

    async def is_registered_user(self, chat_id: str) -> bool:
        body = await self._client.get(f"/contacts/{_path_id(chat_id)}/registered")
        return bool(body.get("registered", False))

    async def send_message(
        self,
        chat_id: str,
        content: str | MediaEnvelope,
        caption: str | None = None,
    ) -> dict[str, Any]:
        timeout: Any = httpx.USE_CLIENT_DEFAULT
        if isinstance(content, MediaEnvelope):
            timeout = self._media_timeout_seconds
            payload_content: dict[str, Any] = {
                "type": "media",
                "mimetype": content.content_type,
                "data": content.data,
                "filename": content.filename,
            }
        else:
            payload_content = {"type": "text", "body": content}

        payload: dict[str, Any] = {"chat_id": chat_id, "content": payload_content}
        if caption:
            payload["caption"] = caption
        return await self._client.post("/messages", json=payload, timeout=timeout)

    async def get_chat_by_id(self, chat_id: str) -> BridgeChat:
        body = await self._client.get(f"/chats/{_path_id(chat_id)}")
        return self._to_chat(body)

    async def get_chats(self) -> list[BridgeChat]:
        body = await self._client.get("/chats")
        return [self._to_chat(item) for item in body.get("chats", [])]

    async def dispatch_event(self, event: str, payload: dict[str, Any]) -> bool:
        """Repassa evento recebido pelo webhook aos listeners.

        Returns:
            False se o evento é desconhecido.
        """
        if event == "qr":
            await self._emitter.emit("qr", str(payload.get("qr", "")))
        elif event == "authenticated":
            await self._emitter.emit("authenticated")
        elif event == "ready":
            self._info = payload.get("info") or {"wid": payload.get("wid", "")}
            await self._emitter.emit("ready")
        elif event == "auth_failure":
            self._info = None
            await self._emitter.emit("auth_failure", str(payload.get("message", "")))
        elif event == "disconnected":
            self._info = None
            await self._emitter.emit("disconnected", str(payload.get("reason", "")))
        elif event == "message":
            message = BridgeInboundMessage(
                id=str(payload.get("id", "")),
                sender=str(payload.get("from", "")),
                body=str(payload.get("body", "")),
                _client=self._client,
            )
            await self._emitter.emit("message", message)
        else:
            logger.warning(
                "engine_event_unknown",
                extra={"component": "engine_bridge", "engine_event": event},
            )
            return False
        return True

    def _to_chat(self, data: dict[str, Any]) -> BridgeChat:
        return BridgeChat(
            id=str(data.get("id", "")),
            name=str(data.get("name") or ""),
            is_group=bool(data.get("is_group", False)),
            _client=self._client,
        )
