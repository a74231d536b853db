"""
Regras de transição válidas entre estados da sessão.

Cada transição corresponde a um sinal do engine (qr, authenticated,
ready, auth_failure, disconnected) ou à (re)inicialização feita pela
ponte de ciclo de vida.
"""

from fsm.states.session import SessionState

# Tipagem explícita do mapa de transições
TransitionMap = dict[SessionState, frozenset[SessionState]]

# Chave: estado de origem
# Valor: conjunto de estados de destino permitidos
VALID_TRANSITIONS: TransitionMap = {
    # Primeira inicialização (ou sessão salva que autentica direto)
    SessionState.UNINITIALIZED: frozenset({
        SessionState.AUTHENTICATING,
        SessionState.AUTHENTICATED,
        SessionState.DISCONNECTED,
    }),

    # QR apresentado: aguarda leitura; ready pode chegar sem authenticated
    SessionState.AUTHENTICATING: frozenset({
        SessionState.AUTHENTICATED,
        SessionState.READY,
        SessionState.DISCONNECTED,
    }),

    # auth_failure devolve para AUTHENTICATING (engine reinicia sozinho)
    SessionState.AUTHENTICATED: frozenset({
        SessionState.READY,
        SessionState.AUTHENTICATING,
        SessionState.DISCONNECTED,
    }),

    SessionState.READY: frozenset({
        SessionState.DISCONNECTED,
    }),

    # Reconexão completa (destroy + initialize)
    SessionState.DISCONNECTED: frozenset({
        SessionState.AUTHENTICATING,
        SessionState.AUTHENTICATED,
    }),
}


def get_valid_targets(state: SessionState) -> frozenset[SessionState]:
    """Retorna os estados de destino válidos para um estado de origem."""
    return VALID_TRANSITIONS.get(state, frozenset())


def is_transition_valid(from_state: SessionState, to_state: SessionState) -> bool:
    """Verifica se uma transição é permitida pelo mapa."""
    return to_state in get_valid_targets(from_state)


def validate_transition_map() -> list[str]:
    """
    Valida a integridade do mapa de transições.

    Verifica:
    - Todos os estados do enum estão no mapa
    - Todo estado tem ao menos uma saída (nenhum estado é terminal)
    - READY só é alcançável a partir de estados de conexão

    Returns:
        Lista de erros encontrados (vazia se válido)
    """
    errors: list[str] = []

    for state in SessionState:
        if state not in VALID_TRANSITIONS:
            errors.append(f"Estado {state.name} ausente em VALID_TRANSITIONS")
        elif not VALID_TRANSITIONS[state]:
            errors.append(f"Estado {state.name} sem transições de saída")

    for from_state, targets in VALID_TRANSITIONS.items():
        if SessionState.READY in targets and from_state not in (
            SessionState.AUTHENTICATING,
            SessionState.AUTHENTICATED,
        ):
            errors.append(f"READY alcançável a partir de {from_state.name}")

    return errors
