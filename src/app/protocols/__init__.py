"""Protocolos e contratos do core da aplicação."""

from .chat_engine import (
    ChatEngineProtocol,
    ChatProtocol,
    EngineListener,
    InboundMessageProtocol,
)

__all__ = [
    "ChatEngineProtocol",
    "ChatProtocol",
    "EngineListener",
    "InboundMessageProtocol",
]
