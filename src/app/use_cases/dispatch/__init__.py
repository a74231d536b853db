"""Casos de uso de dispatch outbound (mensagens, mídia, grupos, chats)."""

from app.use_cases.dispatch.cancellation import CancellationToken, OrphanedSendTracker
from app.use_cases.dispatch.failures import translate_send_failure
from app.use_cases.dispatch.orchestrator import MessageDispatcher
from app.use_cases.dispatch.result import DispatchResult

__all__ = [
    "CancellationToken",
    "DispatchResult",
    "MessageDispatcher",
    "OrphanedSendTracker",
    "translate_send_failure",
]
