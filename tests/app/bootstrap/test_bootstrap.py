"""Testes do composition root."""

from __future__ import annotations

import pytest

from app.bootstrap import build_runtime, create_chat_engine, validate_runtime_settings
from app.infra.engine import BridgeChatEngine, MemoryChatEngine
from config.settings import (
    EngineSettings,
    WhatsAppSettings,
    get_base_settings,
    get_engine_settings,
)
from fsm import SessionState


class TestCreateChatEngine:
    def test_memory_backend(self) -> None:
        engine = create_chat_engine(EngineSettings(backend="memory", memory_auto_ready=False))
        assert isinstance(engine, MemoryChatEngine)

    def test_bridge_backend(self) -> None:
        engine = create_chat_engine(
            EngineSettings(backend="bridge", bridge_url="http://sidecar.local")
        )
        assert isinstance(engine, BridgeChatEngine)

    def test_bridge_backend_keeps_media_deadline(self) -> None:
        runtime = build_runtime(
            whatsapp_settings=WhatsAppSettings(media_send_timeout_seconds=90.0),
            engine_settings=EngineSettings(backend="bridge", bridge_url="http://sidecar.local"),
        )
        assert isinstance(runtime.engine, BridgeChatEngine)
        assert runtime.engine._media_timeout_seconds == 90.0

    def test_unknown_backend(self) -> None:
        with pytest.raises(ValueError):
            create_chat_engine(EngineSettings(backend="puppeteer"))  # type: ignore[arg-type]


def test_build_runtime_wires_shared_state() -> None:
    engine = MemoryChatEngine()
    runtime = build_runtime(
        engine=engine,
        whatsapp_settings=WhatsAppSettings(),
        engine_settings=EngineSettings(),
    )

    assert runtime.engine is engine
    assert runtime.machine.current_state == SessionState.UNINITIALIZED
    assert runtime.gate.state == SessionState.UNINITIALIZED
    assert len(runtime.registry) == 0
    assert runtime.bridge.subscribed is False


def test_isolated_runtimes_do_not_share_session() -> None:
    first = build_runtime(engine=MemoryChatEngine(), engine_settings=EngineSettings())
    second = build_runtime(engine=MemoryChatEngine(), engine_settings=EngineSettings())

    assert first.machine is not second.machine
    assert first.registry is not second.registry


class TestValidateRuntimeSettings:
    @pytest.fixture(autouse=True)
    def _clear_cache(self):
        get_base_settings.cache_clear()
        get_engine_settings.cache_clear()
        yield
        get_base_settings.cache_clear()
        get_engine_settings.cache_clear()

    def test_development_only_warns(self, monkeypatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "development")
        monkeypatch.setenv("ENGINE_BACKEND", "bridge")
        monkeypatch.delenv("ENGINE_BRIDGE_URL", raising=False)

        validate_runtime_settings()

    def test_production_fails_fast(self, monkeypatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("ENGINE_BACKEND", "memory")

        with pytest.raises(RuntimeError, match="memory proibido"):
            validate_runtime_settings()
