"""Modelos de mídia: upload recebido e envelope pronto para o engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class MediaCategory(StrEnum):
    """Categoria de mídia derivada do prefixo do content-type."""

    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    DOCUMENT = "document"


def classify_content_type(content_type: str) -> MediaCategory:
    """Classifica pelo tipo principal do MIME; desconhecidos são documento."""
    major = (content_type or "").split("/", 1)[0].strip().lower()
    try:
        category = MediaCategory(major)
    except ValueError:
        return MediaCategory.DOCUMENT
    return category


@dataclass(frozen=True, slots=True)
class UploadedFile:
    """Upload como recebido pela camada HTTP.

    Attributes:
        data: Bytes em memória (pode ser vazio)
        content_type: MIME declarado pelo cliente
        filename: Nome original do arquivo
        declared_size: Tamanho declarado (0 se desconhecido)
        temp_file_path: Arquivo temporário com o conteúdo, quando os bytes
            não foram mantidos em memória
    """

    data: bytes = b""
    content_type: str = ""
    filename: str = ""
    declared_size: int = 0
    temp_file_path: str | None = None


@dataclass(frozen=True, slots=True)
class MediaEnvelope:
    """Mídia verificada e codificada para handoff ao engine."""

    content_type: str
    data: str
    filename: str
    size_bytes: int
    category: MediaCategory

    def __post_init__(self) -> None:
        if not self.data:
            raise ValueError("MediaEnvelope.data não pode ser vazio")
        if self.size_bytes <= 0:
            raise ValueError("MediaEnvelope.size_bytes deve ser > 0")

    def to_log_dict(self) -> dict[str, object]:
        """Metadados seguros para log (sem conteúdo)."""
        return {
            "content_type": self.content_type,
            "size_bytes": self.size_bytes,
            "category": self.category.value,
        }
