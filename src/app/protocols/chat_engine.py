"""Contrato do engine de chat (colaborador externo).

O gateway não implementa o protocolo do WhatsApp: consome um engine
opaco que expõe consulta de registro, envio, chats e eventos de ciclo
de vida. Eventos emitidos via `on`:

- qr(token: str)
- authenticated()
- ready()
- auth_failure(message: str)
- disconnected(reason: str)
- message(message: InboundMessageProtocol)
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.domain.media import MediaEnvelope

EngineListener = Callable[..., Awaitable[None]] | Callable[..., None]


class ChatProtocol(Protocol):
    """Chat individual ou grupo."""

    @property
    def id(self) -> str: ...

    @property
    def name(self) -> str: ...

    @property
    def is_group(self) -> bool: ...

    async def add_participants(self, participant_ids: list[str], comment: str) -> Any: ...

    async def clear_messages(self) -> bool: ...


class InboundMessageProtocol(Protocol):
    """Mensagem recebida pelo engine."""

    @property
    def id(self) -> str: ...

    @property
    def sender(self) -> str: ...

    @property
    def body(self) -> str: ...

    async def reply(self, text: str) -> Any: ...


class ChatEngineProtocol(Protocol):
    """Capacidades do engine consumidas pelo gateway."""

    @property
    def info(self) -> dict[str, Any] | None:
        """Handle de info da conta conectada (None enquanto não pronto)."""
        ...

    async def initialize(self) -> None: ...

    async def destroy(self) -> None: ...

    async def is_registered_user(self, chat_id: str) -> bool: ...

    async def send_message(
        self,
        chat_id: str,
        content: str | MediaEnvelope,
        caption: str | None = None,
    ) -> dict[str, Any]: ...

    async def get_chat_by_id(self, chat_id: str) -> ChatProtocol: ...

    async def get_chats(self) -> list[ChatProtocol]: ...

    def on(self, event: str, listener: EngineListener) -> None: ...
