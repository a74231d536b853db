"""Implementações concretas do engine de chat."""

from app.infra.engine.bridge_engine import BridgeChat, BridgeChatEngine, BridgeInboundMessage
from app.infra.engine.emitter import AsyncEventEmitter
from app.infra.engine.http_client import EngineHttpClient, HttpClientConfig
from app.infra.engine.memory_engine import (
    MemoryChat,
    MemoryChatEngine,
    MemoryInboundMessage,
    SentMessage,
)

__all__ = [
    "AsyncEventEmitter",
    "BridgeChat",
    "BridgeChatEngine",
    "BridgeInboundMessage",
    "EngineHttpClient",
    "HttpClientConfig",
    "MemoryChat",
    "MemoryChatEngine",
    "MemoryInboundMessage",
    "SentMessage",
]
