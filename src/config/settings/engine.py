"""Settings do engine de chat.

O engine é um colaborador externo. Dois backends:
- memory: engine em processo (dev/test), sem rede
- bridge: sidecar de automação acessado via HTTP, que entrega eventos
  de ciclo de vida no webhook assinado /engine/events
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

EngineBackend = Literal["memory", "bridge"]


@dataclass(frozen=True)
class EngineSettings:
    """Configurações do engine.

    Attributes:
        backend: Backend do engine (memory|bridge)
        bridge_url: URL base do sidecar
        bridge_token: Bearer token enviado ao sidecar
        events_secret: Secret HMAC dos eventos recebidos do sidecar
        request_timeout_seconds: Timeout das chamadas HTTP ao sidecar
        max_retries: Tentativas extras em leituras idempotentes
        memory_auto_ready: Engine em memória autentica sozinho ao inicializar
    """

    backend: EngineBackend = "memory"
    bridge_url: str = ""
    bridge_token: str = ""
    events_secret: str = ""
    request_timeout_seconds: float = 30.0
    max_retries: int = 2
    memory_auto_ready: bool = True

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações do engine.

        Args:
            base: BaseSettings para verificar ambiente.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.backend not in ("memory", "bridge"):
            errors.append(f"ENGINE_BACKEND inválido: {self.backend}")

        if self.backend == "memory" and not base.is_development:
            errors.append("ENGINE_BACKEND=memory proibido em staging/production")

        if self.backend == "bridge":
            if not self.bridge_url:
                errors.append("ENGINE_BACKEND=bridge requer ENGINE_BRIDGE_URL")
            if not self.events_secret and not base.is_development:
                errors.append("ENGINE_EVENTS_SECRET obrigatório fora de development")

        if self.request_timeout_seconds <= 0:
            errors.append("ENGINE_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("ENGINE_MAX_RETRIES deve ser >= 0")

        return errors


def _load_engine_from_env() -> EngineSettings:
    """Carrega EngineSettings de variáveis de ambiente."""
    backend_str = os.getenv("ENGINE_BACKEND", "memory").lower()
    backend: EngineBackend = backend_str if backend_str in ("memory", "bridge") else "memory"
    return EngineSettings(
        backend=backend,
        bridge_url=os.getenv("ENGINE_BRIDGE_URL", "").rstrip("/"),
        bridge_token=os.getenv("ENGINE_BRIDGE_TOKEN", ""),
        events_secret=os.getenv("ENGINE_EVENTS_SECRET", ""),
        request_timeout_seconds=float(
            os.getenv("ENGINE_REQUEST_TIMEOUT_SECONDS", "30")
        ),
        max_retries=int(os.getenv("ENGINE_MAX_RETRIES", "2")),
        memory_auto_ready=os.getenv("ENGINE_MEMORY_AUTO_READY", "true").lower()
        in ("true", "1", "yes"),
    )


@lru_cache(maxsize=1)
def get_engine_settings() -> EngineSettings:
    """Retorna instância cacheada de EngineSettings."""
    return _load_engine_from_env()
