"""Tradução de falhas de envio do engine em erros tipados."""

from __future__ import annotations

from utils.errors import (
    ConnectionLostError,
    EvaluationFailedError,
    SendFailedError,
    SendTimeoutError,
    TransportError,
    TransportProtocolError,
)

# Ordem importa: primeira substring encontrada vence (sem diferenciar maiúsculas)
_FAILURE_PATTERNS: tuple[tuple[str, type[TransportError]], ...] = (
    ("timeout", SendTimeoutError),
    ("Evaluation failed", EvaluationFailedError),
    ("Protocol error", TransportProtocolError),
    ("Target closed", ConnectionLostError),
)

GENERIC_MEDIA_FAILURE = "Error sending media"


def translate_send_failure(
    exc: BaseException,
    fallback_message: str = GENERIC_MEDIA_FAILURE,
) -> TransportError:
    """Mapeia a mensagem do erro do engine para um TransportError."""
    if isinstance(exc, TransportError):
        return exc

    text = str(exc).lower()
    for needle, error_type in _FAILURE_PATTERNS:
        if needle.lower() in text:
            return error_type()

    return SendFailedError(fallback_message)
