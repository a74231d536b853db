"""Pipeline de ingestão de mídia.

Transforma um upload arbitrário em MediaEnvelope verificado:
tamanho dentro do teto da categoria, content-type reparado e conteúdo
codificado em base64 não vazio. Nada é persistido em disco.
"""

from __future__ import annotations

import asyncio
import base64
import logging
import mimetypes
from pathlib import Path
from typing import TYPE_CHECKING

from app.domain import MediaCategory, MediaEnvelope, classify_content_type
from utils.errors import EmptyUploadError, EncodingFailedError, PayloadTooLargeError

if TYPE_CHECKING:
    from app.domain import UploadedFile
    from config.settings import WhatsAppSettings

logger = logging.getLogger(__name__)

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
XLS_CONTENT_TYPE = "application/vnd.ms-excel"
FALLBACK_CONTENT_TYPE = "application/octet-stream"


def repair_content_type(filename: str, declared: str) -> str:
    """Corrige MIMEs conhecidos como errados para planilhas Excel.

    Sem content-type declarado, tenta adivinhar pela extensão.
    """
    content_type = (declared or "").strip()
    name = (filename or "").lower()

    if name.endswith(".xlsx") and "spreadsheetml" not in content_type:
        return XLSX_CONTENT_TYPE
    if name.endswith(".xls") and "excel" not in content_type:
        return XLS_CONTENT_TYPE

    if not content_type:
        guessed, _ = mimetypes.guess_type(name)
        return guessed or FALLBACK_CONTENT_TYPE

    return content_type


def ceiling_for(category: MediaCategory, settings: WhatsAppSettings) -> int:
    """Teto em bytes da categoria."""
    return {
        MediaCategory.IMAGE: settings.image_max_bytes,
        MediaCategory.VIDEO: settings.video_max_bytes,
        MediaCategory.AUDIO: settings.audio_max_bytes,
        MediaCategory.DOCUMENT: settings.document_max_bytes,
    }[category]


def _encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


class MediaIngestionPipeline:
    """Valida, repara e codifica uploads para envio."""

    def __init__(self, settings: WhatsAppSettings) -> None:
        self._settings = settings

    async def ingest(self, upload: UploadedFile) -> MediaEnvelope:
        """Produz o envelope ou falha com MediaRejectedError.

        Raises:
            EmptyUploadError: sem bytes em memória nem arquivo temporário.
            PayloadTooLargeError: tamanho declarado ou real acima do teto.
            EncodingFailedError: base64 vazio para entrada não vazia.
        """
        content_type = repair_content_type(upload.filename, upload.content_type)
        category = classify_content_type(content_type)
        limit = ceiling_for(category, self._settings)
        major_type = content_type.split("/", 1)[0]

        if upload.declared_size > limit:
            raise PayloadTooLargeError(category.value, limit, major_type)

        data = await self._resolve_payload(upload)
        if len(data) > limit:
            raise PayloadTooLargeError(category.value, limit, major_type)

        encoded = await asyncio.to_thread(_encode, data)
        if not encoded:
            raise EncodingFailedError()

        envelope = MediaEnvelope(
            content_type=content_type,
            data=encoded,
            filename=upload.filename,
            size_bytes=len(data),
            category=category,
        )
        logger.info(
            "media_ingested",
            extra={"component": "media_ingestion", **envelope.to_log_dict()},
        )
        return envelope

    async def _resolve_payload(self, upload: UploadedFile) -> bytes:
        if upload.data:
            return upload.data

        if upload.temp_file_path:
            try:
                data = await asyncio.to_thread(Path(upload.temp_file_path).read_bytes)
            except OSError as exc:
                logger.warning(
                    "media_temp_file_unreadable",
                    extra={"component": "media_ingestion", "error_type": type(exc).__name__},
                )
                raise EmptyUploadError("Failed to read uploaded file.") from exc
            if data:
                return data

        raise EmptyUploadError()
