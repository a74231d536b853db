"""Orquestrador de dispatch outbound.

Ponto único de entrada das operações que tocam o engine. Sequência por
operação: gate → normalização → registro (quando aplicável) → ação →
DispatchResult. Toda falha de domínio é capturada aqui e devolvida como
`DispatchResult(ok=False)`; nada propaga para a camada API.

Sem deduplicação: um reenvio pelo chamador pode duplicar a mensagem.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from app.domain import from_group_id, from_phone_number
from app.observability import get_correlation_id, record_dispatch_outcome, record_latency
from app.use_cases.dispatch.cancellation import CancellationToken, OrphanedSendTracker
from app.use_cases.dispatch.failures import translate_send_failure
from app.use_cases.dispatch.result import DispatchResult
from utils.errors import (
    ChatOperationFailedError,
    GatewayError,
    GroupMutationFailedError,
    GroupNotFoundError,
    RecipientNotRegisteredError,
    SendFailedError,
    ValidationError,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from app.domain import AddressableId, UploadedFile
    from app.protocols import ChatEngineProtocol, ChatProtocol
    from app.services.media_ingestion import MediaIngestionPipeline
    from app.services.readiness_gate import ReadinessGate
    from app.services.registration_checker import RegistrationChecker
    from config.settings import WhatsAppSettings

logger = logging.getLogger(__name__)

GROUP_SELECTOR_REQUIRED = "Invalid value, you can use `id` or `name`"


class MessageDispatcher:
    """Executa operações outbound com gate, registro e falhas tipadas."""

    def __init__(
        self,
        *,
        engine: ChatEngineProtocol,
        gate: ReadinessGate,
        registration: RegistrationChecker,
        media: MediaIngestionPipeline,
        settings: WhatsAppSettings,
        orphans: OrphanedSendTracker | None = None,
    ) -> None:
        self._engine = engine
        self._gate = gate
        self._registration = registration
        self._media = media
        self._settings = settings
        self._orphans = orphans if orphans is not None else OrphanedSendTracker()

    @property
    def orphans(self) -> OrphanedSendTracker:
        """Envios de mídia abandonados pelo chamador, ainda em andamento."""
        return self._orphans

    # ──────────────────────────────────────────────────────────────────
    # Operações públicas
    # ──────────────────────────────────────────────────────────────────

    async def check_registration(self, raw_number: str) -> DispatchResult:
        """Consulta se o número possui conta registrada."""

        async def _op() -> dict[str, Any]:
            self._gate.require_ready()
            recipient = from_phone_number(raw_number, self._settings)
            await self._require_registered(recipient)
            return {"message": "The number is registered"}

        return await self._run("check_registration", _op)

    async def send_text(self, raw_number: str, text: str) -> DispatchResult:
        """Envia mensagem de texto para um número individual."""

        async def _op() -> Any:
            self._gate.require_ready()
            recipient = from_phone_number(raw_number, self._settings)
            await self._require_registered(recipient)
            try:
                return await self._engine.send_message(recipient.value, text)
            except Exception as exc:
                raise SendFailedError(str(exc)) from exc

        return await self._run("send_text", _op)

    async def send_media(
        self,
        raw_number: str,
        upload: UploadedFile,
        caption: str | None = None,
        cancellation: CancellationToken | None = None,
    ) -> DispatchResult:
        """Envia mídia com prazo de espera do chamador.

        O registro é verificado uma única vez, depois da ingestão.
        """

        async def _op() -> dict[str, Any]:
            self._gate.require_ready()
            recipient = from_phone_number(raw_number, self._settings)
            envelope = await self._media.ingest(upload)
            await self._require_registered(recipient)

            token = cancellation or CancellationToken(self._settings.media_send_timeout_seconds)
            try:
                await token.race(
                    self._engine.send_message(recipient.value, envelope, caption=caption or ""),
                    operation="send_media",
                    orphans=self._orphans,
                )
            except GatewayError:
                raise
            except Exception as exc:
                raise translate_send_failure(exc) from exc
            return {"message": "Media sent successfully"}

        return await self._run("send_media", _op)

    async def send_to_group(
        self,
        text: str,
        *,
        group_id: str | None = None,
        name: str | None = None,
    ) -> DispatchResult:
        """Envia texto para um grupo pelo id ou pelo nome.

        Id explícito é usado direto; nome é comparado sem diferenciar
        maiúsculas entre os grupos ativos (primeiro match vence).
        """

        async def _op() -> Any:
            self._gate.require_ready()
            if group_id:
                chat_id = from_group_id(group_id).value
            elif name:
                chat_id = (await self._find_group_by_name(name)).id
            else:
                raise ValidationError(GROUP_SELECTOR_REQUIRED)

            try:
                return await self._engine.send_message(chat_id, text)
            except Exception as exc:
                raise SendFailedError(str(exc)) from exc

        return await self._run("send_to_group", _op)

    async def add_to_group(self, raw_number: str, group_id: str) -> DispatchResult:
        """Adiciona um participante registrado ao grupo."""

        async def _op() -> dict[str, Any]:
            self._gate.require_ready()
            recipient = from_phone_number(raw_number, self._settings)
            group = from_group_id(group_id)
            await self._require_registered(recipient)
            try:
                chat = await self._engine.get_chat_by_id(group.value)
                if not chat.is_group:
                    raise GroupMutationFailedError("Chat is not a group")
                await chat.add_participants(
                    [recipient.value],
                    self._settings.group_invite_comment,
                )
            except GatewayError:
                raise
            except Exception as exc:
                raise GroupMutationFailedError("Failed to add number to group") from exc
            return {"message": "Number added to group"}

        return await self._run("add_to_group", _op)

    async def clear_messages(self, raw_number: str) -> DispatchResult:
        """Limpa as mensagens do chat com o número."""

        async def _op() -> bool:
            self._gate.require_ready()
            recipient = from_phone_number(raw_number, self._settings)
            await self._require_registered(recipient)
            try:
                chat = await self._engine.get_chat_by_id(recipient.value)
                return bool(await chat.clear_messages())
            except Exception as exc:
                raise ChatOperationFailedError(f"Failed to clear messages: {exc}") from exc

        return await self._run("clear_messages", _op)

    async def list_groups(self) -> DispatchResult:
        """Lista os grupos ativos como [{id, name}]."""

        async def _op() -> list[dict[str, str]]:
            self._gate.require_ready()
            groups = await self._group_chats()
            return [{"id": chat.id, "name": chat.name} for chat in groups]

        return await self._run("list_groups", _op)

    # ──────────────────────────────────────────────────────────────────
    # Helpers
    # ──────────────────────────────────────────────────────────────────

    async def _require_registered(self, recipient: AddressableId) -> None:
        if not await self._registration.is_registered(recipient):
            raise RecipientNotRegisteredError()

    async def _group_chats(self) -> list[ChatProtocol]:
        try:
            chats = await self._engine.get_chats()
        except Exception as exc:
            raise ChatOperationFailedError(f"Failed to list chats: {exc}") from exc
        return [chat for chat in chats if chat.is_group]

    async def _find_group_by_name(self, name: str) -> ChatProtocol:
        wanted = name.lower()
        for chat in await self._group_chats():
            if (chat.name or "").lower() == wanted:
                return chat
        raise GroupNotFoundError(name)

    async def _run(
        self,
        operation: str,
        op: Callable[[], Awaitable[Any]],
    ) -> DispatchResult:
        started_at = time.perf_counter()
        try:
            payload = await op()
            result = DispatchResult.success(payload)
        except GatewayError as exc:
            result = DispatchResult.failed(exc)
        except Exception as exc:
            logger.exception(
                "dispatch_unexpected_error",
                extra={"component": "dispatch", "operation": operation},
            )
            result = DispatchResult.failed(GatewayError(f"Error processing request: {exc}"))

        latency_ms = (time.perf_counter() - started_at) * 1000
        record_latency("dispatch", operation, latency_ms, get_correlation_id() or None)
        record_dispatch_outcome(operation, result.ok, result.failure_code)
        logger.info(
            "dispatch_completed",
            extra={
                "component": "dispatch",
                "operation": operation,
                "outcome": "ok" if result.ok else "failed",
                "failure_code": result.failure_code,
            },
        )
        return result
