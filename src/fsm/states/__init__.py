"""
Exports públicos do módulo fsm/states.

Estados canônicos da sessão do engine.
"""

from fsm.states.session import (
    CONNECTING_STATES,
    DEFAULT_INITIAL_STATE,
    SessionState,
    is_ready,
    is_valid_state,
)

__all__ = [
    "CONNECTING_STATES",
    "DEFAULT_INITIAL_STATE",
    "SessionState",
    "is_ready",
    "is_valid_state",
]
