"""Testes das respostas automáticas a mensagens recebidas."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from app.infra.engine import MemoryInboundMessage
from app.services import InboundAutoResponder, load_auto_replies
from app.services.auto_replies import (
    AutoRepliesConfig,
    AutoRepliesConfigError,
    GroupsListing,
    parse_auto_replies,
)
from app.use_cases.dispatch import DispatchResult
from utils.errors import SessionNotReadyError

LISTING = GroupsListing(
    trigger="!groups",
    header="*YOUR GROUPS*",
    entry="ID: {id}\nName: {name}",
    footer="_You can use the group id to send a message to the group._",
    empty="You have no group yet.",
)


def _dispatcher(result: DispatchResult) -> AsyncMock:
    dispatcher = AsyncMock()
    dispatcher.list_groups.return_value = result
    return dispatcher


def _message(body: str) -> MemoryInboundMessage:
    return MemoryInboundMessage(id="in-1", sender="628123456789@c.us", body=body)


class TestConfigLoading:
    def test_bundled_yaml_loads(self) -> None:
        config = load_auto_replies()
        triggers = {reply.trigger for reply in config.replies}
        assert "!ping" in triggers
        assert config.groups_listing is not None
        assert config.groups_listing.trigger == "!groups"

    def test_invalid_structures(self) -> None:
        with pytest.raises(AutoRepliesConfigError):
            parse_auto_replies(["not", "a", "dict"])
        with pytest.raises(AutoRepliesConfigError):
            parse_auto_replies({"replies": [{"trigger": "!x"}]})
        with pytest.raises(AutoRepliesConfigError):
            parse_auto_replies({"groups_listing": {"trigger": "!g"}})

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(AutoRepliesConfigError):
            load_auto_replies.__wrapped__(tmp_path / "missing.yaml")


class TestGroupsListing:
    def test_render_with_groups(self) -> None:
        text = LISTING.render(
            [
                {"id": "111-222@g.us", "name": "Family"},
                {"id": "333@g.us", "name": "Work"},
            ]
        )
        assert text == (
            "*YOUR GROUPS*\n\n"
            "ID: 111-222@g.us\nName: Family\n\n"
            "ID: 333@g.us\nName: Work\n\n"
            "_You can use the group id to send a message to the group._"
        )

    def test_render_without_groups(self) -> None:
        assert LISTING.render([]) == "You have no group yet."


class TestInboundAutoResponder:
    @pytest.mark.asyncio
    async def test_ping_gets_pong(self) -> None:
        responder = InboundAutoResponder(_dispatcher(DispatchResult.success([])))
        message = _message("!ping")

        assert await responder.handle(message) is True
        assert message.replies == ["pong"]

    @pytest.mark.asyncio
    async def test_trigger_matching_ignores_case_and_spacing(self) -> None:
        responder = InboundAutoResponder(_dispatcher(DispatchResult.success([])))
        message = _message("  Good   Morning ")

        assert await responder.handle(message) is True
        assert message.replies == ["selamat pagi"]

    @pytest.mark.asyncio
    async def test_unknown_text_is_ignored(self) -> None:
        dispatcher = _dispatcher(DispatchResult.success([]))
        responder = InboundAutoResponder(dispatcher)
        message = _message("hello there")

        assert await responder.handle(message) is False
        assert message.replies == []
        dispatcher.list_groups.assert_not_called()

    @pytest.mark.asyncio
    async def test_groups_command_lists_groups(self) -> None:
        dispatcher = _dispatcher(
            DispatchResult.success([{"id": "111-222@g.us", "name": "Family"}])
        )
        responder = InboundAutoResponder(dispatcher)
        message = _message("!groups")

        assert await responder.handle(message) is True
        assert message.replies[0].startswith("*YOUR GROUPS*\n\nID: 111-222@g.us\nName: Family")
        dispatcher.list_groups.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_groups_command_without_groups(self) -> None:
        responder = InboundAutoResponder(_dispatcher(DispatchResult.success([])))
        message = _message("!groups")

        await responder.handle(message)
        assert message.replies == ["You have no group yet."]

    @pytest.mark.asyncio
    async def test_groups_command_when_not_ready_does_not_reply(self) -> None:
        responder = InboundAutoResponder(
            _dispatcher(DispatchResult.failed(SessionNotReadyError()))
        )
        message = _message("!groups")

        assert await responder.handle(message) is False
        assert message.replies == []

    @pytest.mark.asyncio
    async def test_groups_command_without_listing_config(self) -> None:
        dispatcher = _dispatcher(DispatchResult.success([]))
        config = parse_auto_replies({"replies": [{"trigger": "!ping", "response": "pong"}]})
        responder = InboundAutoResponder(dispatcher, config)
        message = _message("!groups")

        assert responder.groups_listing_for("!groups") is None
        assert await responder.handle(message) is False
        assert message.replies == []
        dispatcher.list_groups.assert_not_called()

    def test_groups_listing_for_matches_trigger(self) -> None:
        config = parse_auto_replies({})
        responder = InboundAutoResponder(AsyncMock(), config)
        assert responder.groups_listing_for("!groups") is None

        with_listing = InboundAutoResponder(
            AsyncMock(),
            AutoRepliesConfig(replies=(), groups_listing=LISTING),
        )
        assert with_listing.groups_listing_for("  !GROUPS ") is LISTING
        assert with_listing.groups_listing_for("!group") is None
