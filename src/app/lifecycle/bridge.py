"""Ponte entre eventos do engine e a sessão/observadores.

Assina os eventos do engine uma única vez por processo. Cada sinal gera
uma transição na máquina de estados e é repassado imediatamente a todos
os observadores conectados:

- qr → AUTHENTICATING + ChallengePresented (QR renderizado)
- authenticated → AUTHENTICATED + Authenticated
- ready → READY + Ready
- auth_failure → AuthFailed; sessão AUTHENTICATED volta a AUTHENTICATING
- disconnected → DISCONNECTED + Disconnected, depois destroy + initialize
  (reconexão completa em task de background)

Sinal recusado pela máquina de estados não é repassado aos observadores.
Mensagens recebidas (evento `message`) vão para o auto-responder.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING, Any

from app.lifecycle.challenge import render_challenge
from app.lifecycle.events import (
    AuthFailed,
    Authenticated,
    ChallengePresented,
    Disconnected,
    Ready,
)
from app.observability import record_lifecycle_transition
from fsm import SessionState

if TYPE_CHECKING:
    from app.lifecycle.observers import ObserverRegistry
    from app.protocols import ChatEngineProtocol, InboundMessageProtocol
    from app.services.auto_replies import InboundAutoResponder
    from fsm import FSMStateMachine

logger = logging.getLogger(__name__)


class LifecycleEventBridge:
    """Traduz sinais do engine em transições e eventos para observadores."""

    def __init__(
        self,
        engine: ChatEngineProtocol,
        machine: FSMStateMachine,
        registry: ObserverRegistry,
        responder: InboundAutoResponder | None = None,
    ) -> None:
        self._engine = engine
        self._machine = machine
        self._registry = registry
        self._responder = responder
        self._subscribed = False
        self._tasks: set[asyncio.Task[Any]] = set()
        self._reconnect_task: asyncio.Task[None] | None = None

    @property
    def subscribed(self) -> bool:
        return self._subscribed

    def subscribe(self) -> None:
        """Registra os listeners no engine (idempotente)."""
        if self._subscribed:
            return
        self._engine.on("qr", self._on_qr)
        self._engine.on("authenticated", self._on_authenticated)
        self._engine.on("ready", self._on_ready)
        self._engine.on("auth_failure", self._on_auth_failure)
        self._engine.on("disconnected", self._on_disconnected)
        self._engine.on("message", self._on_message)
        self._subscribed = True

    async def start(self) -> None:
        """Assina eventos e faz a primeira inicialização do engine."""
        self.subscribe()
        await self._initialize_engine("engine_initialize")

    async def stop(self, timeout_seconds: float = 30.0) -> None:
        """Aguarda reconexões pendentes e encerra o engine."""
        await self.drain(timeout_seconds)
        try:
            await self._engine.destroy()
        except Exception as exc:
            logger.warning(
                "engine_destroy_failed",
                extra={"component": "lifecycle", "error_type": type(exc).__name__},
            )

    async def drain(self, timeout_seconds: float = 30.0) -> None:
        """Aguarda tasks de reconexão em andamento."""
        if not self._tasks:
            return
        pending_now = list(self._tasks)
        _, pending = await asyncio.wait(pending_now, timeout=timeout_seconds)
        if not pending:
            return
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        logger.warning(
            "lifecycle_drain_cancelled",
            extra={"component": "lifecycle", "cancelled_tasks": len(pending)},
        )

    # ──────────────────────────────────────────────────────────────────
    # Handlers de eventos do engine
    # ──────────────────────────────────────────────────────────────────

    async def _on_qr(self, token: str) -> None:
        # qrcode levanta erros próprios (ex: DataOverflowError) além de ValueError
        try:
            rendered = await render_challenge(token)
        except Exception as exc:
            logger.warning(
                "lifecycle_qr_render_failed",
                extra={"component": "lifecycle", "error_type": type(exc).__name__},
            )
            return
        if self._machine.current_state != SessionState.AUTHENTICATING and not self._transition(
            SessionState.AUTHENTICATING, "engine_qr"
        ):
            return
        self._registry.publish(ChallengePresented(rendered))

    async def _on_authenticated(self, *_: Any) -> None:
        if self._transition(SessionState.AUTHENTICATED, "engine_authenticated"):
            self._registry.publish(Authenticated())

    async def _on_ready(self, *_: Any) -> None:
        if self._transition(SessionState.READY, "engine_ready"):
            self._registry.publish(Ready())

    async def _on_auth_failure(self, message: str = "", *_: Any) -> None:
        self._registry.publish(AuthFailed(message or ""))
        if self._machine.current_state == SessionState.AUTHENTICATED:
            self._transition(SessionState.AUTHENTICATING, "engine_auth_failure")

    async def _on_disconnected(self, reason: str = "", *_: Any) -> None:
        if not self._transition(
            SessionState.DISCONNECTED,
            "engine_disconnected",
            {"reason": reason or ""},
        ):
            return
        self._registry.publish(Disconnected(reason or ""))
        self._schedule_reconnect()

    async def _on_message(self, message: InboundMessageProtocol) -> None:
        if self._responder is None:
            return
        try:
            await self._responder.handle(message)
        except Exception as exc:
            logger.error(
                "inbound_auto_reply_failed",
                extra={"component": "lifecycle", "error_type": type(exc).__name__},
            )

    # ──────────────────────────────────────────────────────────────────
    # Reconexão
    # ──────────────────────────────────────────────────────────────────

    def _schedule_reconnect(self) -> None:
        if self._reconnect_task is not None and not self._reconnect_task.done():
            logger.info("lifecycle_reconnect_already_running", extra={"component": "lifecycle"})
            return
        task = asyncio.create_task(self._reconnect())
        self._reconnect_task = task
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

    async def _reconnect(self) -> None:
        try:
            await self._engine.destroy()
        except Exception as exc:
            logger.warning(
                "engine_destroy_failed",
                extra={"component": "lifecycle", "error_type": type(exc).__name__},
            )
        await self._initialize_engine("engine_reinitialize")

    async def _initialize_engine(self, trigger: str) -> None:
        if self._machine.current_state != SessionState.AUTHENTICATING:
            self._transition(SessionState.AUTHENTICATING, trigger)
        try:
            await self._engine.initialize()
        except Exception as exc:
            logger.error(
                "engine_initialize_failed",
                extra={
                    "component": "lifecycle",
                    "trigger": trigger,
                    "error_type": type(exc).__name__,
                },
            )
            self._transition(
                SessionState.DISCONNECTED,
                "engine_initialize_failed",
                {"error_type": type(exc).__name__},
            )

    def _on_task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        with contextlib.suppress(asyncio.CancelledError):
            exc = task.exception()
            if exc is not None:
                logger.error(
                    "lifecycle_task_failed",
                    extra={"component": "lifecycle", "error_type": type(exc).__name__},
                )

    def _transition(
        self,
        target: SessionState,
        trigger: str,
        metadata: dict[str, Any] | None = None,
    ) -> bool:
        result = self._machine.transition(target, trigger, metadata)
        if not result.success or result.transition is None:
            logger.warning(
                "lifecycle_transition_rejected",
                extra={
                    "component": "lifecycle",
                    **self._machine.get_state_summary(),
                    "to_state": target.name,
                    "trigger": trigger,
                    "reason": result.error_reason,
                },
            )
            return False

        transition = result.transition
        record_lifecycle_transition(
            transition.from_state.name,
            transition.to_state.name,
            transition.trigger,
        )
        logger.info(
            "lifecycle_transition",
            extra={"component": "lifecycle", **transition.to_log_dict()},
        )
        return True
