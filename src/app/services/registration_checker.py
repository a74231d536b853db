"""Consulta de registro do destinatário no engine (sem cache)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from utils.errors import RegistrationCheckFailedError

if TYPE_CHECKING:
    from app.domain import AddressableId
    from app.protocols import ChatEngineProtocol

logger = logging.getLogger(__name__)


class RegistrationChecker:
    """Pergunta ao engine se o id é um destinatário válido.

    `False` é uma resposta negativa válida; falha do engine é
    `RegistrationCheckFailedError`, distinta de "não registrado".
    """

    def __init__(self, engine: ChatEngineProtocol) -> None:
        self._engine = engine

    async def is_registered(self, recipient: AddressableId) -> bool:
        try:
            registered = await self._engine.is_registered_user(recipient.value)
        except Exception as exc:
            logger.warning(
                "registration_check_failed",
                extra={"component": "registration", "error_type": type(exc).__name__},
            )
            raise RegistrationCheckFailedError(exc) from exc
        return bool(registered)
