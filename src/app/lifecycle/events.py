"""Eventos de ciclo de vida e frames do canal em tempo real.

Cada evento vira um ou mais frames `{"event", "data"}` entregues aos
observadores. Eventos são efêmeros, nunca armazenados.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

MESSAGE_EVENT = "message"

CONNECTING_TEXT = "Connecting..."
QR_RECEIVED_TEXT = "QR Code received, scan please!"
AUTHENTICATED_TEXT = "Whatsapp is authenticated!"
READY_TEXT = "Whatsapp is ready!"
AUTH_FAILURE_TEXT = "Auth failure, restarting..."
DISCONNECTED_TEXT = "Whatsapp is disconnected!"


@dataclass(frozen=True, slots=True)
class ChannelFrame:
    """Frame enviado ao observador."""

    event: str
    data: Any

    def to_dict(self) -> dict[str, Any]:
        return {"event": self.event, "data": self.data}


class LifecycleEvent:
    """Base dos eventos de ciclo de vida."""

    name: str = "lifecycle"

    def to_frames(self) -> tuple[ChannelFrame, ...]:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class Connecting(LifecycleEvent):
    """Aviso sintético enviado a cada observador recém-conectado."""

    name = "connecting"

    def to_frames(self) -> tuple[ChannelFrame, ...]:
        return (ChannelFrame(MESSAGE_EVENT, CONNECTING_TEXT),)


@dataclass(frozen=True, slots=True)
class ChallengePresented(LifecycleEvent):
    """QR de autenticação renderizado como data URL."""

    rendered_challenge: str
    name = "challenge_presented"

    def to_frames(self) -> tuple[ChannelFrame, ...]:
        return (
            ChannelFrame("qr", self.rendered_challenge),
            ChannelFrame(MESSAGE_EVENT, QR_RECEIVED_TEXT),
        )


@dataclass(frozen=True, slots=True)
class Authenticated(LifecycleEvent):
    name = "authenticated"

    def to_frames(self) -> tuple[ChannelFrame, ...]:
        return (
            ChannelFrame("authenticated", AUTHENTICATED_TEXT),
            ChannelFrame(MESSAGE_EVENT, AUTHENTICATED_TEXT),
        )


@dataclass(frozen=True, slots=True)
class Ready(LifecycleEvent):
    name = "ready"

    def to_frames(self) -> tuple[ChannelFrame, ...]:
        return (
            ChannelFrame("ready", READY_TEXT),
            ChannelFrame(MESSAGE_EVENT, READY_TEXT),
        )


@dataclass(frozen=True, slots=True)
class AuthFailed(LifecycleEvent):
    message: str = ""
    name = "auth_failed"

    def to_frames(self) -> tuple[ChannelFrame, ...]:
        return (ChannelFrame(MESSAGE_EVENT, AUTH_FAILURE_TEXT),)


@dataclass(frozen=True, slots=True)
class Disconnected(LifecycleEvent):
    reason: str = ""
    name = "disconnected"

    def to_frames(self) -> tuple[ChannelFrame, ...]:
        return (ChannelFrame(MESSAGE_EVENT, DISCONNECTED_TEXT),)
