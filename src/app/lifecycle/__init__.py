"""Ciclo de vida da sessão: eventos, observadores e ponte com o engine."""

from app.lifecycle.bridge import LifecycleEventBridge
from app.lifecycle.challenge import render_challenge
from app.lifecycle.events import (
    AuthFailed,
    Authenticated,
    ChallengePresented,
    ChannelFrame,
    Connecting,
    Disconnected,
    LifecycleEvent,
    Ready,
)
from app.lifecycle.observers import ObserverHandle, ObserverRegistry

__all__ = [
    "AuthFailed",
    "Authenticated",
    "ChallengePresented",
    "ChannelFrame",
    "Connecting",
    "Disconnected",
    "LifecycleEvent",
    "LifecycleEventBridge",
    "ObserverHandle",
    "ObserverRegistry",
    "Ready",
    "render_challenge",
]
