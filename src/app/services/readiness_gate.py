"""Gate de prontidão da sessão.

Toda operação de dispatch passa por `require_ready()` antes de tocar no
engine. O estado vem da máquina de estados injetada (escrita apenas pela
ponte de ciclo de vida).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fsm import SessionState
from utils.errors import SessionNeverInitializedError, SessionNotReadyError

if TYPE_CHECKING:
    from app.protocols import ChatEngineProtocol
    from fsm import FSMStateMachine


class ReadinessGate:
    """Recusa operações fora do estado READY."""

    def __init__(self, machine: FSMStateMachine, engine: ChatEngineProtocol) -> None:
        self._machine = machine
        self._engine = engine

    @property
    def state(self) -> SessionState:
        return self._machine.current_state

    def is_ready(self) -> bool:
        """True quando READY e o engine expõe o handle de info."""
        return self._machine.current_state == SessionState.READY and self._engine.info is not None

    def require_ready(self) -> None:
        """Falha com SessionNotReadyError (ou subtipo) se não estiver pronto.

        Raises:
            SessionNeverInitializedError: engine nunca inicializado.
            SessionNotReadyError: qualquer outro estado diferente de READY,
                ou READY sem handle de info.
        """
        state = self._machine.current_state
        if state == SessionState.UNINITIALIZED:
            raise SessionNeverInitializedError()
        if not self.is_ready():
            raise SessionNotReadyError(state=state.name)
