"""Exceções de domínio do gateway de sessão WhatsApp.

Hierarquia:
- GatewayError: base de toda falha de domínio (sempre carrega mensagem
  segura para o chamador, sem PII).
- InfrastructureError: falhas do engine/sidecar, traduzidas pelo
  orquestrador antes de chegar à API.

O mapeamento para status HTTP fica na camada API (api/routes/messaging).
"""

from __future__ import annotations


class GatewayError(Exception):
    """Base para falhas de domínio do gateway."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# ──────────────────────────────────────────────────────────────────────────────
# Entrada inválida (caller deve corrigir input)
# ──────────────────────────────────────────────────────────────────────────────


class ValidationError(GatewayError):
    """Entrada malformada."""


class InvalidIdentifierError(ValidationError):
    """Número de telefone ou id de grupo não normalizável."""

    def __init__(self, raw: str, reason: str) -> None:
        super().__init__(f"Invalid identifier: {reason}")
        self.raw = raw
        self.reason = reason


# ──────────────────────────────────────────────────────────────────────────────
# Prontidão da sessão
# ──────────────────────────────────────────────────────────────────────────────


class SessionNotReadyError(GatewayError):
    """Sessão fora do estado READY (ou sem handle de info do engine)."""

    def __init__(
        self,
        message: str = (
            "WhatsApp client is not ready yet. "
            "Please wait for initialization to complete."
        ),
        state: str | None = None,
    ) -> None:
        super().__init__(message)
        self.state = state


class SessionNeverInitializedError(SessionNotReadyError):
    """Engine nunca foi inicializado neste processo."""

    def __init__(self) -> None:
        super().__init__(
            "WhatsApp client has not been initialized yet.",
            state="UNINITIALIZED",
        )


# ──────────────────────────────────────────────────────────────────────────────
# Registro do destinatário
# ──────────────────────────────────────────────────────────────────────────────


class RecipientNotRegisteredError(GatewayError):
    """Destinatário não possui conta registrada (resultado terminal)."""

    def __init__(self) -> None:
        super().__init__("The number is not registered")


class RegistrationCheckFailedError(GatewayError):
    """Falha transitória ao consultar registro no engine."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Error checking number registration: {cause}")
        self.cause = cause


# ──────────────────────────────────────────────────────────────────────────────
# Ingestão de mídia
# ──────────────────────────────────────────────────────────────────────────────


class MediaRejectedError(GatewayError):
    """Base para uploads recusados pelo pipeline de mídia."""


class EmptyUploadError(MediaRejectedError):
    """Upload sem bytes (nem em memória nem em arquivo temporário)."""

    def __init__(self, message: str = "No file uploaded. Please upload a file.") -> None:
        super().__init__(message)


class PayloadTooLargeError(MediaRejectedError):
    """Upload excede o teto da categoria."""

    def __init__(self, category: str, limit_bytes: int, major_type: str | None = None) -> None:
        limit_mb = round(limit_bytes / (1024 * 1024))
        label = major_type or category
        super().__init__(
            f"File size too large. Maximum size for {label} files is {limit_mb}MB."
        )
        self.category = category
        self.limit_bytes = limit_bytes


class EncodingFailedError(MediaRejectedError):
    """Codificação base64 produziu resultado vazio."""

    def __init__(self) -> None:
        super().__init__("Failed to process uploaded file: failed to convert file to base64")


# ──────────────────────────────────────────────────────────────────────────────
# Transporte (transitórios, caller pode repetir)
# ──────────────────────────────────────────────────────────────────────────────


class TransportError(GatewayError):
    """Base para falhas de envio via engine."""


class SendTimeoutError(TransportError):
    """Envio excedeu o prazo do chamador."""

    def __init__(
        self,
        message: str = "Media sending timeout. Large files may take longer to process.",
    ) -> None:
        super().__init__(message)


class DispatchCancelledError(TransportError):
    """Chamador cancelou a espera pelo envio."""

    def __init__(self) -> None:
        super().__init__("Dispatch cancelled by caller")


class EvaluationFailedError(TransportError):
    """Engine falhou ao avaliar o envio no contexto de automação."""

    def __init__(self) -> None:
        super().__init__(
            "WhatsApp Web failed to process the media file. "
            "This may happen with very large files or unsupported formats."
        )


class TransportProtocolError(TransportError):
    """Erro de protocolo entre engine e WhatsApp Web."""

    def __init__(self) -> None:
        super().__init__("Connection error with WhatsApp Web. Please try again.")


class ConnectionLostError(TransportError):
    """Contexto do engine fechado durante o envio."""

    def __init__(self) -> None:
        super().__init__(
            "WhatsApp Web connection lost. Please check your connection and try again."
        )


class SendFailedError(TransportError):
    """Falha genérica de envio."""


# ──────────────────────────────────────────────────────────────────────────────
# Grupos e chats
# ──────────────────────────────────────────────────────────────────────────────


class GroupNotFoundError(GatewayError):
    """Nenhum grupo com o nome informado."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No group found with name: {name}")
        self.name = name


class GroupMutationFailedError(GatewayError):
    """Falha ao alterar participantes do grupo."""


class ChatOperationFailedError(GatewayError):
    """Falha em operação sobre chat (ex: limpar mensagens)."""


# ──────────────────────────────────────────────────────────────────────────────
# Infraestrutura (engine)
# ──────────────────────────────────────────────────────────────────────────────


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class EngineError(InfrastructureError):
    """Falha reportada pelo engine de chat (mensagem original preservada)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
