"""Respostas automáticas a mensagens recebidas pelo engine.

Respostas fixas vêm de `app/contexts/auto_replies.yaml`; o comando de
listagem de grupos consulta o orquestrador (operação com gate).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from app.protocols import InboundMessageProtocol
    from app.use_cases.dispatch import MessageDispatcher

logger = logging.getLogger(__name__)

_AUTO_REPLIES_PATH = Path(__file__).resolve().parents[1] / "contexts" / "auto_replies.yaml"


class AutoRepliesConfigError(Exception):
    """Erro ao carregar configuração de respostas automáticas."""


@dataclass(frozen=True, slots=True)
class FixedReply:
    """Resposta fixa para um gatilho exato."""

    key: str
    trigger: str
    response: str


@dataclass(frozen=True, slots=True)
class GroupsListing:
    """Formato da resposta do comando de listagem de grupos."""

    trigger: str
    header: str
    entry: str
    footer: str
    empty: str

    def render(self, groups: list[dict[str, str]]) -> str:
        if not groups:
            return self.empty
        entries = "".join(
            self.entry.format(id=group["id"], name=group["name"]) + "\n\n" for group in groups
        )
        return f"{self.header}\n\n{entries}{self.footer}"


@dataclass(frozen=True, slots=True)
class AutoRepliesConfig:
    replies: tuple[FixedReply, ...]
    groups_listing: GroupsListing | None


def _normalize_trigger(text: str) -> str:
    return " ".join((text or "").strip().lower().split())


def parse_auto_replies(data: Any) -> AutoRepliesConfig:
    """Valida o conteúdo do YAML e monta a configuração.

    Raises:
        AutoRepliesConfigError: estrutura inválida.
    """
    if not isinstance(data, dict):
        raise AutoRepliesConfigError("YAML deve ser um dicionário")

    replies: list[FixedReply] = []
    for item in data.get("replies") or []:
        if not isinstance(item, dict) or not item.get("trigger") or not item.get("response"):
            raise AutoRepliesConfigError(f"Resposta inválida: {item!r}")
        replies.append(
            FixedReply(
                key=str(item.get("key") or item["trigger"]),
                trigger=str(item["trigger"]),
                response=str(item["response"]),
            )
        )

    listing_data = data.get("groups_listing")
    listing = None
    if listing_data:
        try:
            listing = GroupsListing(
                trigger=str(listing_data["trigger"]),
                header=str(listing_data["header"]),
                entry=str(listing_data["entry"]),
                footer=str(listing_data["footer"]),
                empty=str(listing_data["empty"]),
            )
        except (KeyError, TypeError) as exc:
            raise AutoRepliesConfigError(f"groups_listing inválido: {exc}") from exc

    return AutoRepliesConfig(replies=tuple(replies), groups_listing=listing)


@lru_cache(maxsize=1)
def load_auto_replies(path: Path = _AUTO_REPLIES_PATH) -> AutoRepliesConfig:
    """Carrega configuração do YAML (cached)."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise AutoRepliesConfigError(f"Falha ao carregar {path.name}: {exc}") from exc
    return parse_auto_replies(data)


class InboundAutoResponder:
    """Responde comandos conhecidos em mensagens recebidas."""

    def __init__(
        self,
        dispatcher: MessageDispatcher,
        config: AutoRepliesConfig | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._config = config or load_auto_replies()
        self._index = {_normalize_trigger(r.trigger): r for r in self._config.replies}

    def match(self, body: str) -> FixedReply | None:
        return self._index.get(_normalize_trigger(body))

    def groups_listing_for(self, body: str) -> GroupsListing | None:
        """Listing configurado se `body` for o comando de grupos."""
        listing = self._config.groups_listing
        if listing is None or _normalize_trigger(body) != _normalize_trigger(listing.trigger):
            return None
        return listing

    async def handle(self, message: InboundMessageProtocol) -> bool:
        """Responde a mensagem se houver gatilho. Retorna True se respondeu."""
        body = message.body or ""

        fixed = self.match(body)
        if fixed is not None:
            await message.reply(fixed.response)
            logger.info(
                "auto_reply_sent",
                extra={"component": "auto_replies", "reply_key": fixed.key},
            )
            return True

        listing = self.groups_listing_for(body)
        if listing is not None:
            return await self._reply_groups(message, listing)

        return False

    async def _reply_groups(
        self,
        message: InboundMessageProtocol,
        listing: GroupsListing,
    ) -> bool:
        result = await self._dispatcher.list_groups()
        if not result.ok:
            logger.warning(
                "auto_reply_groups_failed",
                extra={"component": "auto_replies", "failure_code": result.failure_code},
            )
            return False
        await message.reply(listing.render(result.payload))
        logger.info(
            "auto_reply_sent",
            extra={
                "component": "auto_replies",
                "reply_key": "groups",
                "group_count": len(result.payload),
            },
        )
        return True
