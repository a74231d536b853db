"""Exceções compartilhadas do gateway."""

from .exceptions import (
    ChatOperationFailedError,
    ConnectionLostError,
    DispatchCancelledError,
    EmptyUploadError,
    EncodingFailedError,
    EngineError,
    EvaluationFailedError,
    GatewayError,
    GroupMutationFailedError,
    GroupNotFoundError,
    InfrastructureError,
    InvalidIdentifierError,
    MediaRejectedError,
    PayloadTooLargeError,
    RecipientNotRegisteredError,
    RegistrationCheckFailedError,
    SendFailedError,
    SendTimeoutError,
    SessionNeverInitializedError,
    SessionNotReadyError,
    TransportError,
    TransportProtocolError,
    ValidationError,
)

__all__ = [
    "ChatOperationFailedError",
    "ConnectionLostError",
    "DispatchCancelledError",
    "EmptyUploadError",
    "EncodingFailedError",
    "EngineError",
    "EvaluationFailedError",
    "GatewayError",
    "GroupMutationFailedError",
    "GroupNotFoundError",
    "InfrastructureError",
    "InvalidIdentifierError",
    "MediaRejectedError",
    "PayloadTooLargeError",
    "RecipientNotRegisteredError",
    "RegistrationCheckFailedError",
    "SendFailedError",
    "SendTimeoutError",
    "SessionNeverInitializedError",
    "SessionNotReadyError",
    "TransportError",
    "TransportProtocolError",
    "ValidationError",
]
