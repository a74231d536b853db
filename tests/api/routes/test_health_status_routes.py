"""Testes de health, status da sessão e correlation id."""

from __future__ import annotations

from fastapi.testclient import TestClient

from app.app import create_app
from app.bootstrap import build_runtime
from app.infra.engine import MemoryChatEngine
from config.settings import EngineSettings, WhatsAppSettings


def _app(engine: MemoryChatEngine):
    return create_app(
        build_runtime(
            engine=engine,
            whatsapp_settings=WhatsAppSettings(),
            engine_settings=EngineSettings(),
        )
    )


def test_health() -> None:
    with TestClient(_app(MemoryChatEngine())) as client:
        response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_status_ready() -> None:
    with TestClient(_app(MemoryChatEngine())) as client:
        response = client.get("/status")

    assert response.json() == {
        "status": True,
        "client_ready": True,
        "message": "WhatsApp client is ready",
        "state": "READY",
    }


def test_status_waiting_for_qr() -> None:
    with TestClient(_app(MemoryChatEngine(auto_ready=False))) as client:
        response = client.get("/status")

    body = response.json()
    assert body["client_ready"] is False
    assert body["message"] == "WhatsApp client is not ready yet"
    assert body["state"] == "AUTHENTICATING"


def test_correlation_id_is_echoed() -> None:
    with TestClient(_app(MemoryChatEngine())) as client:
        given = client.get("/health", headers={"X-Correlation-ID": "abc-123"})
        generated = client.get("/health")

    assert given.headers["x-correlation-id"] == "abc-123"
    assert generated.headers["x-correlation-id"]


def test_shutdown_destroys_engine() -> None:
    engine = MemoryChatEngine()
    with TestClient(_app(engine)):
        pass

    assert engine.destroy_count == 1
