"""Entrypoint da aplicação do gateway de sessão WhatsApp.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8000

Uso (desenvolvimento):
    python -m app.app

A porta vem de `<APP_NAME>-APP_PORT`, depois `APP_PORT`, depois 8000.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routes import create_api_router
from app.bootstrap import build_runtime, initialize_app, validate_runtime_settings
from app.observability import CORRELATION_HEADER, correlation_scope
from config.logging import get_logger
from config.settings import get_server_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from starlette.responses import Response

    from app.bootstrap import GatewayRuntime

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)

SHUTDOWN_TIMEOUT_SECONDS = 30.0


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações
    - Monta o runtime (se não injetado) e inicia a ponte de ciclo de vida

    Shutdown:
    - Aguarda reconexões e envios abandonados
    - Encerra o engine
    """
    server = get_server_settings()
    logger.info("app_starting", extra={"app_name": server.app_name})
    validate_runtime_settings()

    runtime: GatewayRuntime | None = getattr(app.state, "runtime", None)
    if runtime is None:
        runtime = build_runtime()
        app.state.runtime = runtime

    await runtime.bridge.start()

    yield

    logger.info("app_shutting_down", extra={"app_name": server.app_name})
    await runtime.bridge.stop(timeout_seconds=SHUTDOWN_TIMEOUT_SECONDS)
    await runtime.orphans.drain(timeout_seconds=SHUTDOWN_TIMEOUT_SECONDS)
    close_async = getattr(runtime.engine, "aclose", None)
    if callable(close_async):
        await close_async()


async def _validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    errors: dict[str, str] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query")]
        errors.setdefault(loc[0] if loc else "body", str(error.get("msg", "Invalid value")))
    return JSONResponse(status_code=422, content={"status": False, "message": errors})


def create_app(runtime: GatewayRuntime | None = None) -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Args:
        runtime: Runtime já montado (testes). Sem ele, o lifespan monta
            um a partir das settings.

    Returns:
        Aplicação FastAPI configurada.
    """
    server = get_server_settings()
    fastapi_app = FastAPI(
        title=server.app_name,
        description="Gateway HTTP e tempo real para uma sessão WhatsApp",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    if runtime is not None:
        fastapi_app.state.runtime = runtime

    # A página de QR pode ser servida de outra origem
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @fastapi_app.middleware("http")
    async def correlation_middleware(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        with correlation_scope(request.headers.get(CORRELATION_HEADER)) as correlation_id:
            response = await call_next(request)
            response.headers[CORRELATION_HEADER] = correlation_id
            return response

    fastapi_app.add_exception_handler(RequestValidationError, _validation_error_handler)

    # Registra todas as rotas
    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"app_name": server.app_name})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    server = get_server_settings()
    logger.info(
        "server_starting",
        extra={"app_name": server.app_name, "host": server.host, "port": server.port},
    )
    uvicorn.run(
        "app.app:app",
        host=server.host,
        port=server.port,
    )


if __name__ == "__main__":
    main()
