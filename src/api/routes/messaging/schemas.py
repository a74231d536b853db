"""Schemas de request das operações outbound.

Bodies chegam como JSON ou formulário; os valores são validados aqui e
erros viram `{campo: mensagem}` na resposta 422.
"""

from __future__ import annotations

from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from app.use_cases.dispatch.orchestrator import GROUP_SELECTOR_REQUIRED

REQUIRED_MESSAGES: dict[str, str] = {
    "number": "Number is required",
    "message": "Message is required",
    "groupid": "Group ID is required",
}

_REQUIRED_ERROR_TYPES = frozenset({"missing", "string_too_short"})

T = TypeVar("T", bound="MessagingRequest")


class MessagingRequest(BaseModel):
    """Base dos requests: strip de strings, campos extras ignorados."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    # Campo que recebe erros do validador do modelo inteiro
    root_error_field: ClassVar[str] = "body"

    @model_validator(mode="before")
    @classmethod
    def _coerce_numbers(cls, data: Any) -> Any:
        # Números em JSON (ex: {"number": 628123}) viram texto
        if isinstance(data, dict):
            return {
                key: str(value) if isinstance(value, int | float) and not isinstance(value, bool)
                else value
                for key, value in data.items()
            }
        return data


class NumberRequest(MessagingRequest):
    number: str = Field(..., min_length=1)


class SendMessageRequest(NumberRequest):
    message: str = Field(..., min_length=1)


class SendMediaRequest(NumberRequest):
    caption: str = ""


class AddToGroupRequest(NumberRequest):
    groupid: str = Field(..., min_length=1)


class SendGroupMessageRequest(MessagingRequest):
    """Grupo por `id` ou `name` (id tem precedência)."""

    root_error_field: ClassVar[str] = "id"

    id: str | None = None
    name: str | None = None
    message: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def _require_selector(self) -> SendGroupMessageRequest:
        if not self.id and not self.name:
            raise ValueError(GROUP_SELECTOR_REQUIRED)
        return self


class RequestValidationFailed(Exception):
    """Body inválido; `errors` mapeia campo → mensagem."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("request_validation_failed")
        self.errors = errors


def format_validation_errors(
    exc: PydanticValidationError,
    root_field: str = "body",
) -> dict[str, str]:
    """Converte erros do pydantic em `{campo: mensagem}` (primeiro por campo)."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        loc = error.get("loc") or ()
        field_name = str(loc[0]) if loc else root_field
        if field_name in errors:
            continue
        if error.get("type") in _REQUIRED_ERROR_TYPES:
            message = REQUIRED_MESSAGES.get(field_name, f"{field_name} is required")
        elif error.get("type") == "value_error":
            message = str(error.get("ctx", {}).get("error", error.get("msg", "")))
        else:
            message = str(error.get("msg", "Invalid value"))
        errors[field_name] = message
    return errors


def parse_request(model: type[T], data: dict[str, Any]) -> T:
    """Valida o body no schema.

    Raises:
        RequestValidationFailed: com o mapa campo → mensagem.
    """
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise RequestValidationFailed(
            format_validation_errors(exc, model.root_error_field)
        ) from exc
