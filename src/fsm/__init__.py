"""
Módulo FSM: máquina de estados da sessão do engine de chat.

Estrutura:
    - states/: SessionState enum
    - transitions/: VALID_TRANSITIONS
    - rules/: guards
    - manager/: FSMStateMachine (handle de estado injetável)
    - types/: StateTransition, TransitionResult
"""

from fsm.manager import (
    DEFAULT_HISTORY_LIMIT,
    FSMStateMachine,
    create_fsm,
)
from fsm.rules import (
    GuardResult,
    evaluate_guards,
)
from fsm.states import (
    CONNECTING_STATES,
    DEFAULT_INITIAL_STATE,
    SessionState,
    is_ready,
    is_valid_state,
)
from fsm.transitions import (
    VALID_TRANSITIONS,
    get_valid_targets,
    is_transition_valid,
    validate_transition_map,
)
from fsm.types import (
    StateTransition,
    TransitionResult,
)

__all__ = [
    "CONNECTING_STATES",
    "DEFAULT_HISTORY_LIMIT",
    "DEFAULT_INITIAL_STATE",
    "VALID_TRANSITIONS",
    "FSMStateMachine",
    "GuardResult",
    "SessionState",
    "StateTransition",
    "TransitionResult",
    "create_fsm",
    "evaluate_guards",
    "get_valid_targets",
    "is_ready",
    "is_transition_valid",
    "is_valid_state",
    "validate_transition_map",
]
