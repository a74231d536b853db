"""Registro de observadores do canal em tempo real.

Cada observador tem sua própria fila ordenada; publicar um evento
enfileira seus frames em todas as filas. Observadores novos não recebem
replay, apenas o aviso sintético de conexão.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from typing import TYPE_CHECKING

from app.lifecycle.events import Connecting

if TYPE_CHECKING:
    from app.lifecycle.events import ChannelFrame, LifecycleEvent

logger = logging.getLogger(__name__)


class ObserverHandle:
    """Handle de um observador conectado (fila própria, FIFO)."""

    __slots__ = ("_queue", "observer_id")

    def __init__(self, observer_id: str) -> None:
        self.observer_id = observer_id
        self._queue: asyncio.Queue[ChannelFrame] = asyncio.Queue()

    def offer(self, frame: ChannelFrame) -> None:
        self._queue.put_nowait(frame)

    async def next_frame(self) -> ChannelFrame:
        """Aguarda o próximo frame na ordem de publicação."""
        return await self._queue.get()

    @property
    def pending(self) -> int:
        return self._queue.qsize()


class ObserverRegistry:
    """Fan-out de eventos de ciclo de vida por observador."""

    def __init__(self) -> None:
        self._observers: dict[str, ObserverHandle] = {}
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._observers)

    def attach(self) -> ObserverHandle:
        """Registra um observador e enfileira o aviso de conexão."""
        handle = ObserverHandle(f"observer-{next(self._ids)}")
        for frame in Connecting().to_frames():
            handle.offer(frame)
        self._observers[handle.observer_id] = handle
        logger.info(
            "observer_attached",
            extra={"component": "lifecycle", "observer_count": len(self._observers)},
        )
        return handle

    def detach(self, handle: ObserverHandle) -> None:
        if self._observers.pop(handle.observer_id, None) is not None:
            logger.info(
                "observer_detached",
                extra={"component": "lifecycle", "observer_count": len(self._observers)},
            )

    def publish(self, event: LifecycleEvent) -> int:
        """Enfileira os frames do evento em todos os observadores.

        Returns:
            Quantidade de observadores que receberam o evento.
        """
        frames = event.to_frames()
        observers = list(self._observers.values())
        for handle in observers:
            for frame in frames:
                handle.offer(frame)
        logger.debug(
            "lifecycle_event_published",
            extra={
                "component": "lifecycle",
                "lifecycle_event": event.name,
                "observer_count": len(observers),
            },
        )
        return len(observers)
