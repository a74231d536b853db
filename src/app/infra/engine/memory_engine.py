"""Engine de chat em memória (desenvolvimento e testes).

Simula as capacidades do engine sem rede: números registrados, chats,
envio com log local e emissão dos eventos de ciclo de vida. Os métodos
`simulate_*` e `receive_message` disparam eventos como o engine real.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from app.domain import MediaEnvelope
from app.infra.engine.emitter import AsyncEventEmitter
from utils.errors import EngineError

if TYPE_CHECKING:
    from app.protocols import EngineListener

logger = logging.getLogger(__name__)

DEFAULT_ACCOUNT_ID = "6280000000000@c.us"


@dataclass
class MemoryChat:
    """Chat mantido em memória."""

    id: str
    name: str = ""
    is_group: bool = False
    participants: list[str] = field(default_factory=list)
    messages: list[dict[str, Any]] = field(default_factory=list)

    async def add_participants(self, participant_ids: list[str], comment: str) -> dict[str, Any]:
        if not self.is_group:
            raise EngineError("Chat is not a group")
        for pid in participant_ids:
            if pid not in self.participants:
                self.participants.append(pid)
        return {pid: {"code": 200, "message": comment} for pid in participant_ids}

    async def clear_messages(self) -> bool:
        self.messages.clear()
        return True


@dataclass
class MemoryInboundMessage:
    """Mensagem recebida simulada; respostas ficam em `replies`."""

    id: str
    sender: str
    body: str
    replies: list[str] = field(default_factory=list)

    async def reply(self, text: str) -> dict[str, Any]:
        self.replies.append(text)
        return {"to": self.sender, "body": text}


@dataclass(frozen=True, slots=True)
class SentMessage:
    chat_id: str
    content: str | MediaEnvelope
    caption: str | None


class MemoryChatEngine:
    """Implementação em memória de ChatEngineProtocol."""

    def __init__(
        self,
        *,
        auto_ready: bool = True,
        registered_numbers: tuple[str, ...] | list[str] = (),
        chats: tuple[MemoryChat, ...] | list[MemoryChat] = (),
        account_id: str = DEFAULT_ACCOUNT_ID,
        send_delay_seconds: float = 0.0,
    ) -> None:
        self._emitter = AsyncEventEmitter()
        self._auto_ready = auto_ready
        self._registered = set(registered_numbers)
        self._chats: dict[str, MemoryChat] = {chat.id: chat for chat in chats}
        self._account_id = account_id
        self._info: dict[str, Any] | None = None
        self._ids = itertools.count(1)
        self.send_delay_seconds = send_delay_seconds
        self.send_error: Exception | None = None
        self.registration_error: Exception | None = None
        self.sent: list[SentMessage] = []
        self.initialize_count = 0
        self.destroy_count = 0

    # ──────────────────────────────────────────────────────────────────
    # ChatEngineProtocol
    # ──────────────────────────────────────────────────────────────────

    @property
    def info(self) -> dict[str, Any] | None:
        return self._info

    def on(self, event: str, listener: EngineListener) -> None:
        self._emitter.on(event, listener)

    async def initialize(self) -> None:
        self.initialize_count += 1
        logger.info("memory_engine_initialize", extra={"auto_ready": self._auto_ready})
        if self._auto_ready:
            await self.complete_login()
        else:
            await self._emitter.emit("qr", f"memory-qr-{next(self._ids)}")

    async def destroy(self) -> None:
        self.destroy_count += 1
        self._info = None

    async def is_registered_user(self, chat_id: str) -> bool:
        if self.registration_error is not None:
            raise self.registration_error
        return chat_id in self._registered

    async def send_message(
        self,
        chat_id: str,
        content: str | MediaEnvelope,
        caption: str | None = None,
    ) -> dict[str, Any]:
        if self.send_delay_seconds:
            await asyncio.sleep(self.send_delay_seconds)
        if self.send_error is not None:
            raise self.send_error

        self.sent.append(SentMessage(chat_id=chat_id, content=content, caption=caption))
        message_id = f"memory-{next(self._ids)}"
        chat = self._chats.get(chat_id)
        if isinstance(content, MediaEnvelope):
            record = {"type": content.category.value, "body": caption or ""}
        else:
            record = {"type": "chat", "body": content}
        if chat is not None:
            chat.messages.append(record)
        return {
            "id": message_id,
            "from": self._account_id,
            "to": chat_id,
            "timestamp": int(time.time()),
            **record,
        }

    async def get_chat_by_id(self, chat_id: str) -> MemoryChat:
        chat = self._chats.get(chat_id)
        if chat is None:
            if not chat_id.endswith("@c.us"):
                raise EngineError(f"Chat not found: {chat_id}", status_code=404)
            chat = MemoryChat(id=chat_id)
            self._chats[chat_id] = chat
        return chat

    async def get_chats(self) -> list[MemoryChat]:
        return list(self._chats.values())

    # ──────────────────────────────────────────────────────────────────
    # Simulação
    # ──────────────────────────────────────────────────────────────────

    def register(self, *chat_ids: str) -> None:
        self._registered.update(chat_ids)

    def add_chat(self, chat: MemoryChat) -> None:
        self._chats[chat.id] = chat

    async def complete_login(self) -> None:
        """Simula leitura do QR: authenticated seguido de ready."""
        await self._emitter.emit("authenticated")
        self._info = {"wid": self._account_id, "platform": "memory"}
        await self._emitter.emit("ready")

    async def simulate_qr(self, token: str | None = None) -> None:
        await self._emitter.emit("qr", token or f"memory-qr-{next(self._ids)}")

    async def simulate_auth_failure(self, message: str = "auth failure") -> None:
        self._info = None
        await self._emitter.emit("auth_failure", message)

    async def simulate_disconnect(self, reason: str = "NAVIGATION") -> None:
        self._info = None
        await self._emitter.emit("disconnected", reason)

    async def receive_message(self, sender: str, body: str) -> MemoryInboundMessage:
        message = MemoryInboundMessage(id=f"memory-in-{next(self._ids)}", sender=sender, body=body)
        await self._emitter.emit("message", message)
        return message
