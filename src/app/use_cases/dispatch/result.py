"""Resultado tipado de uma operação de dispatch (não persistido)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from utils.errors import GatewayError


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """Sucesso com payload ou falha com erro de domínio.

    Attributes:
        ok: True se a operação foi concluída
        payload: Resposta da operação (se ok)
        failure: Erro de domínio (se não ok)
    """

    ok: bool
    payload: Any = None
    failure: GatewayError | None = None

    def __post_init__(self) -> None:
        if not self.ok and self.failure is None:
            raise ValueError("DispatchResult com falha deve incluir failure")
        if self.ok and self.failure is not None:
            raise ValueError("DispatchResult com sucesso não aceita failure")

    @classmethod
    def success(cls, payload: Any = None) -> DispatchResult:
        return cls(ok=True, payload=payload)

    @classmethod
    def failed(cls, failure: GatewayError) -> DispatchResult:
        return cls(ok=False, failure=failure)

    @property
    def message(self) -> str | None:
        """Mensagem segura da falha (None em sucesso)."""
        return self.failure.message if self.failure is not None else None

    @property
    def failure_code(self) -> str | None:
        return type(self.failure).__name__ if self.failure is not None else None
