"""Connectors: adapters de borda para sistemas externos.

Estrutura:
- engine/: eventos do sidecar do engine (webhook assinado)
"""

__all__: list[str] = []
