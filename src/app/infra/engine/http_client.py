"""Cliente HTTP do sidecar do engine.

Retry com backoff exponencial apenas em leituras idempotentes; envios
nunca são repetidos automaticamente (risco de duplicar mensagem).
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from utils.errors import EngineError

logger = logging.getLogger(__name__)


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    base_url: str
    timeout_seconds: float = 30.0
    max_retries: int = 2
    backoff_base_seconds: float = 0.5
    backoff_max_seconds: float = 10.0
    default_headers: dict[str, str] = field(default_factory=dict)


class EngineHttpClient:
    """Chamadas JSON ao sidecar com tradução de erros para EngineError."""

    def __init__(
        self,
        config: HttpClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            headers=config.default_headers,
            timeout=config.timeout_seconds,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(self, path: str) -> dict[str, Any]:
        """GET idempotente (com retry)."""
        return await self._request("GET", path, retry=True)

    async def post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        *,
        timeout: Any = httpx.USE_CLIENT_DEFAULT,
    ) -> dict[str, Any]:
        """POST sem retry.

        `timeout` sobrescreve o timeout do cliente nesta chamada
        (None = sem timeout HTTP).
        """
        return await self._request("POST", path, json=json, retry=False, timeout=timeout)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        retry: bool,
        timeout: Any = httpx.USE_CLIENT_DEFAULT,
    ) -> dict[str, Any]:
        attempts = self._config.max_retries + 1 if retry else 1
        for attempt in range(attempts):
            try:
                response = await self._client.request(method, path, json=json, timeout=timeout)
            except httpx.TransportError as exc:
                if attempt + 1 >= attempts:
                    kind = "timeout" if isinstance(exc, httpx.TimeoutException) else "connection error"
                    raise EngineError(f"Engine {kind}: {type(exc).__name__}") from exc
                await _backoff_sleep(
                    attempt,
                    self._config.backoff_base_seconds,
                    self._config.backoff_max_seconds,
                )
                continue

            if (response.status_code == 429 or response.status_code >= 500) and (
                attempt + 1 < attempts
            ):
                await _backoff_sleep(
                    attempt,
                    self._config.backoff_base_seconds,
                    self._config.backoff_max_seconds,
                )
                continue

            return _parse_response(response)

        raise EngineError("Engine retry exhausted")


def _parse_response(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json() if response.content else {}
    except ValueError:
        body = {}

    if response.is_error:
        message = body.get("error") if isinstance(body, dict) else None
        logger.warning(
            "engine_http_error",
            extra={"component": "engine_bridge", "status_code": response.status_code},
        )
        raise EngineError(
            message or f"Engine request failed with status {response.status_code}",
            status_code=response.status_code,
        )

    if not isinstance(body, dict):
        return {"result": body}
    return body


async def _backoff_sleep(attempt: int, base: float, max_seconds: float) -> None:
    backoff = min((2**attempt) * base, max_seconds)
    logger.info("engine_http_backoff", extra={"backoff_seconds": backoff})
    await asyncio.sleep(backoff)
