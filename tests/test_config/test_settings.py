"""Testes das settings (carregamento do ambiente e validação)."""

from __future__ import annotations

import pytest

from config.settings import (
    BaseSettings,
    EngineSettings,
    ServerSettings,
    WhatsAppSettings,
    get_base_settings,
    get_engine_settings,
    get_server_settings,
    get_whatsapp_settings,
    port_variable_for,
)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    getters = (get_base_settings, get_engine_settings, get_server_settings, get_whatsapp_settings)
    for getter in getters:
        getter.cache_clear()
    yield
    for getter in getters:
        getter.cache_clear()


class TestServerSettings:
    def test_port_comes_from_app_specific_variable(self, monkeypatch) -> None:
        monkeypatch.setenv("APP_NAME", "SALES")
        monkeypatch.setenv("SALES-APP_PORT", "9100")
        monkeypatch.setenv("APP_PORT", "9000")

        settings = get_server_settings()

        assert settings.app_name == "SALES"
        assert settings.port == 9100
        assert settings.port_variable == "SALES-APP_PORT"

    def test_port_falls_back_to_generic_variable(self, monkeypatch) -> None:
        monkeypatch.setenv("APP_NAME", "SUPPORT")
        monkeypatch.delenv("SUPPORT-APP_PORT", raising=False)
        monkeypatch.setenv("APP_PORT", "9000")

        assert get_server_settings().port == 9000

    def test_validation(self) -> None:
        assert ServerSettings().validate() == []
        assert ServerSettings(port=0).validate() == ["Porta inválida: 0"]
        assert port_variable_for("WA-API") == "WA-API-APP_PORT"


class TestWhatsAppSettings:
    def test_env_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("DEFAULT_COUNTRY_CODE", "55")
        monkeypatch.setenv("IMAGE_MAX_BYTES", "1024")
        monkeypatch.setenv("MEDIA_SEND_TIMEOUT_SECONDS", "5")

        settings = get_whatsapp_settings()

        assert settings.default_country_code == "55"
        assert settings.image_max_bytes == 1024
        assert settings.media_send_timeout_seconds == 5.0
        assert get_whatsapp_settings() is settings

    def test_validation(self) -> None:
        assert WhatsAppSettings().validate() == []
        errors = WhatsAppSettings(
            default_country_code="+62",
            video_max_bytes=0,
            media_send_timeout_seconds=0,
        ).validate()
        assert len(errors) == 3


class TestEngineSettings:
    def test_memory_is_refused_outside_development(self) -> None:
        production = BaseSettings(environment="production")
        assert EngineSettings().validate(BaseSettings()) == []
        assert EngineSettings().validate(production) == [
            "ENGINE_BACKEND=memory proibido em staging/production"
        ]

    def test_bridge_requires_url_and_secret_outside_development(self) -> None:
        errors = EngineSettings(backend="bridge").validate(BaseSettings(environment="staging"))
        assert "ENGINE_BACKEND=bridge requer ENGINE_BRIDGE_URL" in errors
        assert "ENGINE_EVENTS_SECRET obrigatório fora de development" in errors

    def test_env_loading(self, monkeypatch) -> None:
        monkeypatch.setenv("ENGINE_BACKEND", "BRIDGE")
        monkeypatch.setenv("ENGINE_BRIDGE_URL", "http://sidecar:3000/")
        monkeypatch.setenv("ENGINE_MEMORY_AUTO_READY", "false")

        settings = get_engine_settings()

        assert settings.backend == "bridge"
        assert settings.bridge_url == "http://sidecar:3000"
        assert settings.memory_auto_ready is False


class TestBaseSettings:
    def test_environment_aliases(self, monkeypatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "prod")
        monkeypatch.setenv("LOG_FORMAT", "TEXT")

        settings = get_base_settings()

        assert settings.is_production
        assert settings.is_strict
        assert settings.log_format == "text"

    def test_validation(self) -> None:
        assert BaseSettings().validate() == []
        assert BaseSettings(log_format="xml").validate() == ["LOG_FORMAT inválido: xml"]
