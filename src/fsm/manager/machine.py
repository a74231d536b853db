"""
Máquina de estados da sessão do engine.

Uma instância por runtime do gateway; é o handle de estado injetado no
gate de prontidão (leitura) e na ponte de ciclo de vida (escrita).
"""

from collections import deque
from typing import Any

from fsm.rules.guards import GuardResult, evaluate_guards
from fsm.states.session import DEFAULT_INITIAL_STATE, SessionState
from fsm.transitions.rules import get_valid_targets, is_transition_valid
from fsm.types.transition import StateTransition, TransitionResult

# Reconexões repetem o ciclo indefinidamente; histórico é limitado
DEFAULT_HISTORY_LIMIT = 100


class FSMStateMachine:
    """
    Máquina de estados da sessão.

    Attributes:
        current_state: Estado atual
        history: Últimas transições realizadas (limitado)
    """

    __slots__ = ("_current_state", "_history", "_session_id")

    def __init__(
        self,
        initial_state: SessionState | None = None,
        session_id: str = "",
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> None:
        self._current_state = initial_state or DEFAULT_INITIAL_STATE
        self._history: deque[StateTransition] = deque(maxlen=history_limit)
        self._session_id = session_id

    @property
    def current_state(self) -> SessionState:
        """Estado atual da máquina."""
        return self._current_state

    @property
    def history(self) -> list[StateTransition]:
        """Histórico de transições (cópia)."""
        return list(self._history)

    @property
    def session_id(self) -> str:
        """Identificador da sessão."""
        return self._session_id

    def get_valid_targets(self) -> frozenset[SessionState]:
        """Retorna estados de destino válidos a partir do estado atual."""
        return get_valid_targets(self._current_state)

    def transition(
        self,
        target: SessionState,
        trigger: str,
        metadata: dict[str, Any] | None = None,
    ) -> TransitionResult:
        """
        Tenta realizar uma transição de estado.

        Args:
            target: Estado de destino
            trigger: Sinal que causou a transição (ex: 'engine_disconnected')
            metadata: Dados adicionais para auditoria (nunca PII)

        Returns:
            TransitionResult com sucesso/falha e dados da transição
        """
        guard_result: GuardResult = evaluate_guards(self._current_state, target)
        if not guard_result.allowed:
            return TransitionResult(success=False, error_reason=guard_result.reason)

        if not is_transition_valid(self._current_state, target):
            return TransitionResult(
                success=False,
                error_reason=(
                    f"Transição inválida: {self._current_state.name} → {target.name}"
                ),
            )

        transition = StateTransition(
            from_state=self._current_state,
            to_state=target,
            trigger=trigger,
            metadata=metadata or {},
        )

        self._current_state = target
        self._history.append(transition)

        return TransitionResult(success=True, transition=transition)

    def get_state_summary(self) -> dict[str, Any]:
        """Resumo do estado atual para observability."""
        return {
            "session_id": self._session_id,
            "current_state": self._current_state.name,
            "transition_count": len(self._history),
            "valid_targets": sorted(s.name for s in self.get_valid_targets()),
        }


def create_fsm(
    session_id: str,
    initial_state: SessionState | None = None,
) -> FSMStateMachine:
    """Factory para criar a máquina de estados da sessão."""
    return FSMStateMachine(
        initial_state=initial_state,
        session_id=session_id,
    )
