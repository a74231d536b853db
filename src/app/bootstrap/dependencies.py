"""Factories do runtime do gateway: criação e wiring dos componentes.

Um runtime por processo: um engine, uma máquina de estados da sessão,
um registro de observadores. Testes constroem runtimes isolados
passando um engine próprio.

Referência: app/bootstrap é o único lugar que conhece implementações
concretas.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.infra.engine import BridgeChatEngine, MemoryChatEngine
from app.lifecycle import LifecycleEventBridge, ObserverRegistry
from app.services import (
    InboundAutoResponder,
    MediaIngestionPipeline,
    ReadinessGate,
    RegistrationChecker,
)
from app.use_cases.dispatch import MessageDispatcher, OrphanedSendTracker
from config.settings import get_engine_settings, get_whatsapp_settings
from fsm import FSMStateMachine, create_fsm

if TYPE_CHECKING:
    from app.protocols import ChatEngineProtocol
    from app.services.auto_replies import AutoRepliesConfig
    from config.settings import EngineSettings, WhatsAppSettings

logger = logging.getLogger(__name__)

SESSION_ID = "default"


@dataclass
class GatewayRuntime:
    """Componentes conectados de uma sessão do gateway."""

    engine: ChatEngineProtocol
    machine: FSMStateMachine
    registry: ObserverRegistry
    gate: ReadinessGate
    dispatcher: MessageDispatcher
    responder: InboundAutoResponder
    bridge: LifecycleEventBridge
    orphans: OrphanedSendTracker
    whatsapp_settings: WhatsAppSettings
    engine_settings: EngineSettings


def create_chat_engine(
    settings: EngineSettings,
    media_timeout_seconds: float | None = None,
) -> ChatEngineProtocol:
    """Cria o engine conforme ENGINE_BACKEND.

    - "memory": MemoryChatEngine (dev/test)
    - "bridge": BridgeChatEngine (sidecar HTTP); envios de mídia usam
      `media_timeout_seconds` no lugar do timeout das demais chamadas
    """
    if settings.backend == "bridge":
        engine: ChatEngineProtocol = BridgeChatEngine.from_settings(
            settings,
            media_timeout_seconds=media_timeout_seconds,
        )
        logger.info("chat_engine_created", extra={"backend": "bridge"})
        return engine

    if settings.backend == "memory":
        logger.info("chat_engine_created", extra={"backend": "memory"})
        return MemoryChatEngine(auto_ready=settings.memory_auto_ready)

    msg = f"ENGINE_BACKEND inválido: {settings.backend}"
    raise ValueError(msg)


def build_runtime(
    *,
    engine: ChatEngineProtocol | None = None,
    whatsapp_settings: WhatsAppSettings | None = None,
    engine_settings: EngineSettings | None = None,
    auto_replies: AutoRepliesConfig | None = None,
) -> GatewayRuntime:
    """Monta o runtime completo (sem iniciar o engine)."""
    wa_settings = whatsapp_settings or get_whatsapp_settings()
    eng_settings = engine_settings or get_engine_settings()
    if engine is not None:
        chat_engine = engine
    else:
        chat_engine = create_chat_engine(eng_settings, wa_settings.media_send_timeout_seconds)

    machine = create_fsm(SESSION_ID)
    registry = ObserverRegistry()
    gate = ReadinessGate(machine, chat_engine)
    orphans = OrphanedSendTracker()
    dispatcher = MessageDispatcher(
        engine=chat_engine,
        gate=gate,
        registration=RegistrationChecker(chat_engine),
        media=MediaIngestionPipeline(wa_settings),
        settings=wa_settings,
        orphans=orphans,
    )
    responder = InboundAutoResponder(dispatcher, auto_replies)
    bridge = LifecycleEventBridge(chat_engine, machine, registry, responder)

    return GatewayRuntime(
        engine=chat_engine,
        machine=machine,
        registry=registry,
        gate=gate,
        dispatcher=dispatcher,
        responder=responder,
        bridge=bridge,
        orphans=orphans,
        whatsapp_settings=wa_settings,
        engine_settings=eng_settings,
    )
