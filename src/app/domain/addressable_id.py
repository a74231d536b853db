"""Normalização de destinatários para o formato endereçável do WhatsApp.

Números individuais viram `<dígitos>@c.us`; grupos viram
`<dígitos[-dígitos]>@g.us`. A construção valida o formato, então todo
AddressableId em circulação já passou por uma das factories abaixo.

Funções puras, sem IO.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from utils.errors import InvalidIdentifierError

if TYPE_CHECKING:
    from config.settings import WhatsAppSettings

INDIVIDUAL_SUFFIX = "@c.us"
GROUP_SUFFIX = "@g.us"

_NON_DIGITS = re.compile(r"\D+")
_INDIVIDUAL_PATTERN = re.compile(r"^\d+@c\.us$")
_GROUP_PATTERN = re.compile(r"^\d+(-\d+)?@g\.us$")


class AddressKind(StrEnum):
    """Tipo de destinatário."""

    INDIVIDUAL = "individual"
    GROUP = "group"


@dataclass(frozen=True, slots=True)
class AddressableId:
    """Referência normalizada a um destinatário (individual ou grupo)."""

    value: str
    kind: AddressKind

    def __post_init__(self) -> None:
        pattern = _INDIVIDUAL_PATTERN if self.kind == AddressKind.INDIVIDUAL else _GROUP_PATTERN
        if not pattern.match(self.value):
            raise InvalidIdentifierError(self.value, f"malformed {self.kind.value} id")

    @property
    def is_group(self) -> bool:
        return self.kind == AddressKind.GROUP

    def __str__(self) -> str:
        return self.value


def from_phone_number(raw: str, settings: WhatsAppSettings) -> AddressableId:
    """Normaliza número de telefone em qualquer formato humano.

    Remove tudo que não é dígito, troca o prefixo de tronco pelo DDI
    padrão e acrescenta o sufixo individual.

    Exemplo (DDI 62, tronco 0): "0812-345-6789" → "628123456789@c.us"

    Raises:
        InvalidIdentifierError: vazio após limpeza ou curto demais.
    """
    raw_text = raw or ""
    local_part = raw_text.strip()
    if local_part.endswith(INDIVIDUAL_SUFFIX):
        local_part = local_part[: -len(INDIVIDUAL_SUFFIX)]

    digits = _NON_DIGITS.sub("", local_part)
    if not digits:
        raise InvalidIdentifierError(raw_text, "number is empty")

    if len(digits) < settings.min_phone_digits:
        raise InvalidIdentifierError(
            raw_text,
            f"number must have at least {settings.min_phone_digits} digits",
        )

    prefix = settings.trunk_prefix
    if prefix and settings.default_country_code and digits.startswith(prefix):
        digits = settings.default_country_code + digits[len(prefix):]

    return AddressableId(value=f"{digits}{INDIVIDUAL_SUFFIX}", kind=AddressKind.INDIVIDUAL)


def from_group_id(raw: str) -> AddressableId:
    """Valida id de grupo já canônico (sufixo @g.us opcional na entrada)."""
    raw_text = raw or ""
    candidate = "".join(raw_text.split())
    if not candidate:
        raise InvalidIdentifierError(raw_text, "group id is empty")

    if "@" not in candidate:
        candidate = f"{candidate}{GROUP_SUFFIX}"

    if not _GROUP_PATTERN.match(candidate):
        raise InvalidIdentifierError(raw_text, "malformed group id")

    return AddressableId(value=candidate, kind=AddressKind.GROUP)


def normalize_identifier(raw: str, settings: WhatsAppSettings) -> AddressableId:
    """Ids de grupo passam direto; o resto é tratado como telefone."""
    if (raw or "").strip().endswith(GROUP_SUFFIX):
        return from_group_id(raw)
    return from_phone_number(raw, settings)
