"""Emissor de eventos assíncrono usado pelos engines.

Listeners podem ser síncronos ou corrotinas; `emit` aguarda os
assíncronos em ordem de registro. Falha de um listener é registrada em
log e não impede os seguintes.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections import defaultdict
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.protocols import EngineListener

logger = logging.getLogger(__name__)


class AsyncEventEmitter:
    """Emissor mínimo com on/off/emit."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[EngineListener]] = defaultdict(list)

    def on(self, event: str, listener: EngineListener) -> None:
        self._listeners[event].append(listener)

    def off(self, event: str, listener: EngineListener) -> None:
        listeners = self._listeners.get(event)
        if not listeners:
            return
        with contextlib.suppress(ValueError):
            listeners.remove(listener)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, []))

    def remove_all_listeners(self, event: str | None = None) -> None:
        if event is None:
            self._listeners.clear()
            return
        self._listeners.pop(event, None)

    async def emit(self, event: str, *args: Any) -> bool:
        """Dispara o evento. Retorna True se algum listener foi chamado."""
        any_triggered = False
        for listener in list(self._listeners.get(event, [])):
            any_triggered = True
            try:
                res = listener(*args)
                if asyncio.iscoroutine(res):
                    await res
            except Exception as exc:
                logger.error(
                    "engine_listener_failed",
                    extra={
                        "component": "engine_emitter",
                        "engine_event": event,
                        "error_type": type(exc).__name__,
                    },
                )
        return any_triggered
