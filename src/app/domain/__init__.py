"""Tipos de domínio do gateway (sem IO)."""

from app.domain.addressable_id import (
    AddressableId,
    AddressKind,
    from_group_id,
    from_phone_number,
    normalize_identifier,
)
from app.domain.media import (
    MediaCategory,
    MediaEnvelope,
    UploadedFile,
    classify_content_type,
)

__all__ = [
    "AddressKind",
    "AddressableId",
    "MediaCategory",
    "MediaEnvelope",
    "UploadedFile",
    "classify_content_type",
    "from_group_id",
    "from_phone_number",
    "normalize_identifier",
]
