"""Testes da renderização do QR."""

from __future__ import annotations

import base64

import pytest

from app.lifecycle import render_challenge
from app.lifecycle.challenge import DATA_URL_PREFIX, render_challenge_sync


def test_render_produces_svg_data_url() -> None:
    rendered = render_challenge_sync("2@abc,def,ghi")

    assert rendered.startswith(DATA_URL_PREFIX)
    svg = base64.b64decode(rendered[len(DATA_URL_PREFIX):])
    assert b"<svg" in svg


def test_empty_token_is_rejected() -> None:
    with pytest.raises(ValueError):
        render_challenge_sync("")


@pytest.mark.asyncio
async def test_async_render() -> None:
    rendered = await render_challenge("token")
    assert rendered.startswith("data:image/svg+xml;base64,")
