"""Settings específicas de WhatsApp.

Políticas de endereçamento, tetos de mídia e prazos de envio.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

MIB: int = 1024 * 1024

# Limites do WhatsApp Web por categoria de mídia
IMAGE_MAX_BYTES: int = 16 * MIB
VIDEO_MAX_BYTES: int = 64 * MIB
AUDIO_MAX_BYTES: int = 64 * MIB
DOCUMENT_MAX_BYTES: int = 100 * MIB

DEFAULT_GROUP_INVITE_COMMENT = "You have been invited to join this group"


@dataclass(frozen=True)
class WhatsAppSettings:
    """Configurações do canal WhatsApp.

    Attributes:
        default_country_code: DDI aplicado a números com prefixo de tronco
        trunk_prefix: Prefixo nacional substituído pelo DDI (ex: "0")
        min_phone_digits: Mínimo de dígitos aceitos após limpeza
        image_max_bytes: Teto para imagens
        video_max_bytes: Teto para vídeos
        audio_max_bytes: Teto para áudios
        document_max_bytes: Teto para demais arquivos
        media_send_timeout_seconds: Prazo de espera do chamador no envio de mídia
        group_invite_comment: Comentário fixo do convite ao adicionar participante
    """

    # Endereçamento
    default_country_code: str = "62"
    trunk_prefix: str = "0"
    min_phone_digits: int = 8

    # Tetos de mídia
    image_max_bytes: int = IMAGE_MAX_BYTES
    video_max_bytes: int = VIDEO_MAX_BYTES
    audio_max_bytes: int = AUDIO_MAX_BYTES
    document_max_bytes: int = DOCUMENT_MAX_BYTES

    # Envio
    media_send_timeout_seconds: float = 120.0

    # Grupos
    group_invite_comment: str = DEFAULT_GROUP_INVITE_COMMENT

    @property
    def upload_max_bytes(self) -> int:
        """Maior teto entre as categorias (limite do upload HTTP)."""
        return max(
            self.image_max_bytes,
            self.video_max_bytes,
            self.audio_max_bytes,
            self.document_max_bytes,
        )

    def validate(self) -> list[str]:
        """Valida configurações de WhatsApp.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if self.default_country_code and not self.default_country_code.isdigit():
            errors.append("DEFAULT_COUNTRY_CODE deve conter apenas dígitos")

        if self.min_phone_digits < 1:
            errors.append("MIN_PHONE_DIGITS deve ser >= 1")

        for name in ("image", "video", "audio", "document"):
            if getattr(self, f"{name}_max_bytes") <= 0:
                errors.append(f"{name.upper()}_MAX_BYTES deve ser > 0")

        if self.media_send_timeout_seconds <= 0:
            errors.append("MEDIA_SEND_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _load_from_env() -> WhatsAppSettings:
    """Carrega WhatsAppSettings a partir de variáveis de ambiente."""
    return WhatsAppSettings(
        default_country_code=os.getenv("DEFAULT_COUNTRY_CODE", "62"),
        trunk_prefix=os.getenv("TRUNK_PREFIX", "0"),
        min_phone_digits=int(os.getenv("MIN_PHONE_DIGITS", "8")),
        image_max_bytes=int(os.getenv("IMAGE_MAX_BYTES", str(IMAGE_MAX_BYTES))),
        video_max_bytes=int(os.getenv("VIDEO_MAX_BYTES", str(VIDEO_MAX_BYTES))),
        audio_max_bytes=int(os.getenv("AUDIO_MAX_BYTES", str(AUDIO_MAX_BYTES))),
        document_max_bytes=int(
            os.getenv("DOCUMENT_MAX_BYTES", str(DOCUMENT_MAX_BYTES))
        ),
        media_send_timeout_seconds=float(
            os.getenv("MEDIA_SEND_TIMEOUT_SECONDS", "120")
        ),
        group_invite_comment=os.getenv(
            "GROUP_INVITE_COMMENT", DEFAULT_GROUP_INVITE_COMMENT
        ),
    )


@lru_cache(maxsize=1)
def get_whatsapp_settings() -> WhatsAppSettings:
    """Retorna instância cacheada de WhatsAppSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
