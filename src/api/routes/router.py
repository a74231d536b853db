"""Agregador de rotas: registra todos os routers.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.engine.router import router as engine_router
from api.routes.health.router import router as health_router
from api.routes.messaging.router import router as messaging_router
from api.routes.realtime.router import router as realtime_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados.

    Returns:
        APIRouter configurado com todos os endpoints.
    """
    api_router = APIRouter()

    # Health e status da sessão (na raiz)
    api_router.include_router(health_router, tags=["health"])

    # Operações outbound (na raiz, caminhos herdados dos clientes existentes)
    api_router.include_router(messaging_router, tags=["messaging"])

    # Canal em tempo real
    api_router.include_router(realtime_router, tags=["realtime"])

    # Eventos do sidecar
    api_router.include_router(engine_router, prefix="/engine", tags=["engine"])

    return api_router
