"""Renderização do QR de autenticação em imagem exibível."""

from __future__ import annotations

import asyncio
import base64

import qrcode
from qrcode.image.svg import SvgImage

DATA_URL_PREFIX = "data:image/svg+xml;base64,"


def render_challenge_sync(token: str) -> str:
    """Gera data URL SVG do QR para o token do engine."""
    if not token:
        raise ValueError("token do QR não pode ser vazio")
    image = qrcode.make(token, image_factory=SvgImage)
    svg_bytes = image.to_string()
    return DATA_URL_PREFIX + base64.b64encode(svg_bytes).decode("ascii")


async def render_challenge(token: str) -> str:
    """Versão assíncrona (renderização roda fora do event loop)."""
    return await asyncio.to_thread(render_challenge_sync, token)
