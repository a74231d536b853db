"""Testes de assinatura e parse dos eventos do sidecar."""

from __future__ import annotations

import json

import pytest

from api.connectors.engine import (
    SIGNATURE_HEADER,
    EngineEvent,
    InvalidEventError,
    InvalidJsonError,
    InvalidSignatureError,
    compute_signature,
    parse_engine_event,
    verify_signature,
)

SECRET = "s3cret"


def _signed(payload: dict) -> tuple[bytes, dict[str, str]]:
    body = json.dumps(payload).encode("utf-8")
    return body, {SIGNATURE_HEADER.lower(): compute_signature(body, SECRET)}


class TestSignature:
    def test_roundtrip(self) -> None:
        signature = compute_signature(b"{}", SECRET)
        assert signature.startswith("sha256=")
        assert verify_signature(b"{}", signature, SECRET) is True

    @pytest.mark.parametrize("signature", ["", "sha1=abc", "sha256=deadbeef"])
    def test_rejects_bad_signatures(self, signature: str) -> None:
        assert verify_signature(b"{}", signature, SECRET) is False

    def test_rejects_other_secret(self) -> None:
        assert verify_signature(b"{}", compute_signature(b"{}", "other"), SECRET) is False


class TestParseEngineEvent:
    def test_signed_event(self) -> None:
        body, headers = _signed({"event": "ready", "data": {"info": {"wid": "x"}}})

        event = parse_engine_event(body, headers, SECRET)

        assert event == EngineEvent(event="ready", data={"info": {"wid": "x"}})

    def test_missing_signature(self) -> None:
        body = json.dumps({"event": "ready"}).encode()
        with pytest.raises(InvalidSignatureError):
            parse_engine_event(body, {}, SECRET)

    def test_unsigned_allowed_without_secret(self) -> None:
        event = parse_engine_event(b'{"event": "qr", "data": {"qr": "t"}}', {}, None)
        assert event.event == "qr"

    @pytest.mark.parametrize(
        ("raw", "error"),
        [
            (b"not json", InvalidJsonError),
            (b"[1, 2]", InvalidJsonError),
            (b'{"data": {}}', InvalidEventError),
            (b'{"event": "qr", "data": "x"}', InvalidJsonError),
        ],
    )
    def test_invalid_payloads(self, raw: bytes, error: type) -> None:
        with pytest.raises(error):
            parse_engine_event(raw, {}, None)

    def test_missing_data_defaults_to_empty(self) -> None:
        assert parse_engine_event(b'{"event": "authenticated"}', {}, None).data == {}
