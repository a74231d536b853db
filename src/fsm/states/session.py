"""
Estados canônicos da sessão do engine de chat.

A sessão é única por processo (um engine, um número conectado). O estado
é mutado apenas pela ponte de ciclo de vida e lido pelo gate de prontidão.
"""

from enum import StrEnum


class SessionState(StrEnum):
    """
    Estados da sessão do engine.

    - UNINITIALIZED: engine nunca foi inicializado neste processo
    - AUTHENTICATING: engine inicializando, aguardando leitura do QR
    - AUTHENTICATED: credenciais aceitas, sincronizando
    - READY: pronto para envio (único estado que libera dispatch)
    - DISCONNECTED: conexão perdida; reconexão completa em seguida

    Nenhum estado é terminal: após DISCONNECTED a sessão volta para
    AUTHENTICATING quando o engine é reinicializado.
    """

    UNINITIALIZED = "UNINITIALIZED"
    AUTHENTICATING = "AUTHENTICATING"
    AUTHENTICATED = "AUTHENTICATED"
    READY = "READY"
    DISCONNECTED = "DISCONNECTED"

    def __str__(self) -> str:
        return self.value


# Estado inicial de todo processo
DEFAULT_INITIAL_STATE: SessionState = SessionState.UNINITIALIZED

# Estados em que o engine ainda está conectando
CONNECTING_STATES: frozenset[SessionState] = frozenset({
    SessionState.AUTHENTICATING,
    SessionState.AUTHENTICATED,
})


def is_ready(state: SessionState) -> bool:
    """Verifica se o estado libera operações de dispatch."""
    return state == SessionState.READY


def is_valid_state(state: SessionState) -> bool:
    """Verifica se o valor é um estado válido do enum."""
    return isinstance(state, SessionState)
