"""Testes do pipeline de ingestão de mídia."""

from __future__ import annotations

import base64

import pytest

from app.domain import MediaCategory, UploadedFile
from app.services import MediaIngestionPipeline, repair_content_type
from app.services.media_ingestion import (
    FALLBACK_CONTENT_TYPE,
    XLS_CONTENT_TYPE,
    XLSX_CONTENT_TYPE,
    ceiling_for,
)
from config.settings import MIB, WhatsAppSettings
from utils.errors import (
    EmptyUploadError,
    MediaRejectedError,
    PayloadTooLargeError,
)


class TestRepairContentType:
    def test_xlsx_with_wrong_type_is_repaired(self) -> None:
        assert repair_content_type("report.xlsx", "application/zip") == XLSX_CONTENT_TYPE

    def test_xls_with_octet_stream_is_repaired(self) -> None:
        assert repair_content_type("REPORT.XLS", "application/octet-stream") == XLS_CONTENT_TYPE

    def test_correct_types_are_kept(self) -> None:
        assert repair_content_type("report.xlsx", XLSX_CONTENT_TYPE) == XLSX_CONTENT_TYPE
        assert repair_content_type("photo.png", "image/png") == "image/png"

    def test_missing_type_is_guessed_from_extension(self) -> None:
        assert repair_content_type("photo.png", "") == "image/png"
        assert repair_content_type("blob", "") == FALLBACK_CONTENT_TYPE


class TestCeilings:
    def test_default_ceilings(self, whatsapp_settings) -> None:
        assert ceiling_for(MediaCategory.IMAGE, whatsapp_settings) == 16 * MIB
        assert ceiling_for(MediaCategory.VIDEO, whatsapp_settings) == 64 * MIB
        assert ceiling_for(MediaCategory.AUDIO, whatsapp_settings) == 64 * MIB
        assert ceiling_for(MediaCategory.DOCUMENT, whatsapp_settings) == 100 * MIB
        assert whatsapp_settings.upload_max_bytes == 100 * MIB


class TestIngest:
    @pytest.mark.asyncio
    async def test_exact_ceiling_passes_and_one_more_byte_fails(self) -> None:
        settings = WhatsAppSettings(image_max_bytes=8)
        pipeline = MediaIngestionPipeline(settings)

        envelope = await pipeline.ingest(
            UploadedFile(data=b"x" * 8, content_type="image/png", filename="a.png")
        )
        assert envelope.size_bytes == 8
        assert envelope.category == MediaCategory.IMAGE
        assert base64.b64decode(envelope.data) == b"x" * 8

        with pytest.raises(PayloadTooLargeError):
            await pipeline.ingest(
                UploadedFile(data=b"x" * 9, content_type="image/png", filename="a.png")
            )

    @pytest.mark.asyncio
    async def test_declared_size_is_checked_before_reading(self, whatsapp_settings) -> None:
        pipeline = MediaIngestionPipeline(whatsapp_settings)

        with pytest.raises(PayloadTooLargeError) as exc_info:
            await pipeline.ingest(
                UploadedFile(
                    data=b"tiny",
                    content_type="image/jpeg",
                    filename="big.jpg",
                    declared_size=17 * MIB,
                )
            )

        assert "16MB" in exc_info.value.message
        assert "image" in exc_info.value.message
        assert exc_info.value.category == "image"

    @pytest.mark.asyncio
    async def test_empty_upload_is_rejected(self, whatsapp_settings) -> None:
        pipeline = MediaIngestionPipeline(whatsapp_settings)

        with pytest.raises(EmptyUploadError) as exc_info:
            await pipeline.ingest(UploadedFile(content_type="image/png", filename="a.png"))

        assert exc_info.value.message == "No file uploaded. Please upload a file."
        assert isinstance(exc_info.value, MediaRejectedError)

    @pytest.mark.asyncio
    async def test_temp_file_fallback(self, tmp_path, whatsapp_settings) -> None:
        temp_file = tmp_path / "upload.pdf"
        temp_file.write_bytes(b"%PDF-1.4")
        pipeline = MediaIngestionPipeline(whatsapp_settings)

        envelope = await pipeline.ingest(
            UploadedFile(
                content_type="application/pdf",
                filename="doc.pdf",
                temp_file_path=str(temp_file),
            )
        )

        assert envelope.category == MediaCategory.DOCUMENT
        assert base64.b64decode(envelope.data) == b"%PDF-1.4"

    @pytest.mark.asyncio
    async def test_unreadable_temp_file(self, tmp_path, whatsapp_settings) -> None:
        pipeline = MediaIngestionPipeline(whatsapp_settings)

        with pytest.raises(EmptyUploadError, match="Failed to read uploaded file"):
            await pipeline.ingest(
                UploadedFile(
                    content_type="application/pdf",
                    filename="doc.pdf",
                    temp_file_path=str(tmp_path / "missing.pdf"),
                )
            )

    @pytest.mark.asyncio
    async def test_spreadsheet_is_repaired_and_classified_as_document(
        self, whatsapp_settings
    ) -> None:
        pipeline = MediaIngestionPipeline(whatsapp_settings)

        envelope = await pipeline.ingest(
            UploadedFile(
                data=b"PK\x03\x04",
                content_type="application/octet-stream",
                filename="report.xlsx",
            )
        )

        assert envelope.content_type == XLSX_CONTENT_TYPE
        assert envelope.category == MediaCategory.DOCUMENT
        assert envelope.filename == "report.xlsx"
