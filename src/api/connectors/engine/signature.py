"""Assinatura HMAC-SHA256 dos eventos entregues pelo sidecar."""

from __future__ import annotations

import hashlib
import hmac

SIGNATURE_HEADER = "X-Engine-Signature"
SIGNATURE_PREFIX = "sha256="


def compute_signature(payload: bytes, secret: str) -> str:
    """Calcula o valor do header de assinatura para o payload."""
    digest = hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_PREFIX}{digest}"


def verify_signature(payload: bytes, signature: str, secret: str) -> bool:
    """Valida assinatura `sha256=<hex>` do corpo bruto.

    Args:
        payload: Corpo bruto da requisição
        signature: Valor do header X-Engine-Signature
        secret: Secret compartilhado com o sidecar

    Returns:
        True se assinatura válida
    """
    if not signature or not signature.startswith(SIGNATURE_PREFIX):
        return False

    expected = signature[len(SIGNATURE_PREFIX):]
    computed = hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()
    return hmac.compare_digest(computed, expected)
