"""Token de cancelamento para a espera do chamador.

O token corre o envio contra um prazo e um cancelamento explícito.
Quando o chamador desiste, o envio em andamento NÃO é interrompido: a
task continua e seu resultado tardio é apenas registrado em log. Um
reenvio pelo chamador pode, portanto, duplicar a mensagem.

Envios abandonados ficam num OrphanedSendTracker pertencente ao runtime
(via MessageDispatcher), drenado no shutdown.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING, Any, TypeVar

from utils.errors import DispatchCancelledError, SendTimeoutError

if TYPE_CHECKING:
    from collections.abc import Awaitable

logger = logging.getLogger(__name__)

T = TypeVar("T")


class OrphanedSendTracker:
    """Envios cujo chamador desistiu e que ainda estão em andamento."""

    def __init__(self) -> None:
        self._tasks: set[asyncio.Future[Any]] = set()

    def __len__(self) -> int:
        return len(self._tasks)

    def track(self, task: asyncio.Future[Any], operation: str) -> None:
        """Passa a acompanhar o envio; resultado tardio vai para o log."""
        if task.done():
            _log_late_outcome(task, operation)
            return
        self._tasks.add(task)
        task.add_done_callback(lambda finished: self._on_done(finished, operation))
        logger.warning(
            "dispatch_wait_abandoned",
            extra={
                "component": "dispatch",
                "operation": operation,
                "orphaned_sends": len(self._tasks),
            },
        )

    def _on_done(self, task: asyncio.Future[Any], operation: str) -> None:
        self._tasks.discard(task)
        _log_late_outcome(task, operation)

    async def drain(self, timeout_seconds: float = 30.0) -> None:
        """Aguarda envios abandonados durante shutdown do processo."""
        if not self._tasks:
            return

        pending_now = list(self._tasks)
        logger.info(
            "dispatch_orphans_shutdown_wait",
            extra={"pending_sends": len(pending_now), "timeout_seconds": timeout_seconds},
        )
        _, pending = await asyncio.wait(pending_now, timeout=timeout_seconds)
        if not pending:
            return

        for task in pending:
            task.cancel()
        with contextlib.suppress(Exception):
            await asyncio.gather(*pending, return_exceptions=True)
        logger.warning(
            "dispatch_orphans_shutdown_cancelled",
            extra={"cancelled_sends": len(pending)},
        )


class CancellationToken:
    """Prazo + cancelamento explícito para uma única espera."""

    def __init__(
        self,
        timeout_seconds: float | None = None,
        orphans: OrphanedSendTracker | None = None,
    ) -> None:
        self._timeout_seconds = timeout_seconds
        self._cancelled = asyncio.Event()
        self._orphans = orphans if orphans is not None else OrphanedSendTracker()

    @property
    def timeout_seconds(self) -> float | None:
        return self._timeout_seconds

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def orphans(self) -> OrphanedSendTracker:
        return self._orphans

    def cancel(self) -> None:
        """Encerra a espera do chamador (o envio segue em background)."""
        self._cancelled.set()

    async def race(
        self,
        awaitable: Awaitable[T],
        *,
        operation: str = "send",
        orphans: OrphanedSendTracker | None = None,
    ) -> T:
        """Aguarda o awaitable até o prazo ou cancelamento.

        Envio abandonado vai para `orphans` (ou o tracker do próprio token).

        Raises:
            SendTimeoutError: prazo esgotado antes do resultado.
            DispatchCancelledError: cancel() chamado antes do resultado.
        """
        tracker = orphans if orphans is not None else self._orphans
        task: asyncio.Future[T] = asyncio.ensure_future(awaitable)
        if self._cancelled.is_set():
            tracker.track(task, operation)
            raise DispatchCancelledError()

        waiter = asyncio.create_task(self._cancelled.wait())
        try:
            done, _ = await asyncio.wait(
                {task, waiter},
                timeout=self._timeout_seconds,
                return_when=asyncio.FIRST_COMPLETED,
            )
        except asyncio.CancelledError:
            tracker.track(task, operation)
            raise
        finally:
            waiter.cancel()

        if task in done:
            return task.result()

        tracker.track(task, operation)
        if self._cancelled.is_set():
            raise DispatchCancelledError()
        raise SendTimeoutError()


def _log_late_outcome(task: asyncio.Future[Any], operation: str) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error(
            "dispatch_late_send_failed",
            extra={
                "component": "dispatch",
                "operation": operation,
                "error_type": type(exc).__name__,
            },
        )
        return
    logger.info(
        "dispatch_late_send_completed",
        extra={"component": "dispatch", "operation": operation},
    )
