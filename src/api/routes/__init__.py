"""Rotas HTTP da API: adapters de entrada.

Estrutura:
- routes/messaging/: operações outbound (mensagens, mídia, grupos)
- routes/realtime/: canal WebSocket de ciclo de vida da sessão
- routes/engine/: webhook de eventos do sidecar do engine
- routes/health/: health check e status da sessão

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
