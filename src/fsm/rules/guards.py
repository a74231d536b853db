"""
Guards para transições de estado da sessão.

Guards rodam depois do mapa de transições e podem negar transições
que o mapa permitiria.
"""

from fsm.states.session import SessionState


class GuardResult:
    """
    Resultado da avaliação de um guard.

    Attributes:
        allowed: Se a transição é permitida
        reason: Motivo do bloqueio (se allowed=False)
    """

    __slots__ = ("allowed", "reason")

    def __init__(self, allowed: bool, reason: str | None = None) -> None:
        self.allowed = allowed
        self.reason = reason

    @classmethod
    def allow(cls) -> "GuardResult":
        """Cria resultado permitindo a transição."""
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> "GuardResult":
        """Cria resultado negando a transição."""
        return cls(allowed=False, reason=reason)


def guard_valid_state(
    from_state: SessionState,
    to_state: SessionState,
) -> GuardResult:
    """Guard: ambos os estados devem pertencer ao enum."""
    if not isinstance(from_state, SessionState):
        return GuardResult.deny(f"Estado de origem inválido: {from_state}")

    if not isinstance(to_state, SessionState):
        return GuardResult.deny(f"Estado de destino inválido: {to_state}")

    return GuardResult.allow()


def guard_same_state(
    from_state: SessionState,
    to_state: SessionState,
) -> GuardResult:
    """Guard: transição reflexiva não é registrada.

    QR renovado enquanto AUTHENTICATING não muda o estado; a ponte
    emite o evento sem transitar.
    """
    if from_state == to_state:
        return GuardResult.deny(
            f"Transição reflexiva não permitida: {from_state.name} → {to_state.name}"
        )
    return GuardResult.allow()


# Todos devem retornar allow() para a transição prosseguir
DEFAULT_GUARDS = [
    guard_valid_state,
    guard_same_state,
]


def evaluate_guards(
    from_state: SessionState,
    to_state: SessionState,
    guards: list | None = None,
) -> GuardResult:
    """
    Avalia guards em ordem.

    Returns:
        GuardResult do primeiro guard que negar, ou allow() se todos passarem
    """
    guards_to_apply = guards if guards is not None else DEFAULT_GUARDS

    for guard in guards_to_apply:
        result = guard(from_state, to_state)
        if not result.allowed:
            return result

    return GuardResult.allow()
