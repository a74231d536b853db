"""Testes da normalização de destinatários."""

from __future__ import annotations

import pytest

from app.domain import (
    AddressableId,
    AddressKind,
    from_group_id,
    from_phone_number,
    normalize_identifier,
)
from config.settings import WhatsAppSettings
from utils.errors import InvalidIdentifierError, ValidationError


class TestFromPhoneNumber:
    def test_local_number_gets_country_code(self, whatsapp_settings) -> None:
        result = from_phone_number("0812-345-6789", whatsapp_settings)
        assert result.value == "628123456789@c.us"
        assert result.kind == AddressKind.INDIVIDUAL
        assert not result.is_group

    @pytest.mark.parametrize(
        "raw",
        ["+62 812 3456 789", "628123456789", "(62) 812.3456.789", "628123456789@c.us"],
    )
    def test_formats_collapse_to_same_id(self, raw: str, whatsapp_settings) -> None:
        assert str(from_phone_number(raw, whatsapp_settings)) == "628123456789@c.us"

    @pytest.mark.parametrize("raw", ["", "   ", "abc", "--"])
    def test_empty_after_cleanup_is_invalid(self, raw: str, whatsapp_settings) -> None:
        with pytest.raises(InvalidIdentifierError) as exc_info:
            from_phone_number(raw, whatsapp_settings)
        assert exc_info.value.reason == "number is empty"
        assert isinstance(exc_info.value, ValidationError)

    def test_short_number_is_invalid(self, whatsapp_settings) -> None:
        with pytest.raises(InvalidIdentifierError, match="at least 8 digits"):
            from_phone_number("12345", whatsapp_settings)

    def test_trunk_prefix_follows_settings(self) -> None:
        settings = WhatsAppSettings(default_country_code="55", trunk_prefix="0")
        assert from_phone_number("011 98765 4321", settings).value == "5511987654321@c.us"

    def test_no_country_code_keeps_digits(self) -> None:
        settings = WhatsAppSettings(default_country_code="")
        assert from_phone_number("08123456789", settings).value == "08123456789@c.us"


class TestFromGroupId:
    def test_canonical_group_id(self) -> None:
        result = from_group_id("120363041234567890@g.us")
        assert result.is_group
        assert result.value == "120363041234567890@g.us"

    def test_suffix_is_appended_and_whitespace_removed(self) -> None:
        assert from_group_id(" 6281234-1600000000 ").value == "6281234-1600000000@g.us"

    @pytest.mark.parametrize("raw", ["", "abc@g.us", "123@c.us", "12-34-56"])
    def test_malformed_group_ids(self, raw: str) -> None:
        with pytest.raises(InvalidIdentifierError):
            from_group_id(raw)


class TestNormalizeIdentifier:
    def test_dispatches_on_group_suffix(self, whatsapp_settings) -> None:
        group = normalize_identifier("123-456@g.us", whatsapp_settings)
        person = normalize_identifier("0812-345-6789", whatsapp_settings)
        assert group.kind == AddressKind.GROUP
        assert person.kind == AddressKind.INDIVIDUAL

    def test_direct_construction_validates_format(self) -> None:
        with pytest.raises(InvalidIdentifierError):
            AddressableId(value="628123@g.us", kind=AddressKind.INDIVIDUAL)
