"""Testes dos schemas de request e do mapeamento de falhas para HTTP."""

from __future__ import annotations

import json

import pytest

from api.routes.messaging.responses import dispatch_response, status_for
from api.routes.messaging.schemas import (
    RequestValidationFailed,
    SendGroupMessageRequest,
    SendMessageRequest,
    parse_request,
)
from app.use_cases.dispatch import DispatchResult
from utils.errors import (
    EncodingFailedError,
    GroupMutationFailedError,
    GroupNotFoundError,
    InvalidIdentifierError,
    RecipientNotRegisteredError,
    SendTimeoutError,
    SessionNeverInitializedError,
    SessionNotReadyError,
)


class TestParseRequest:
    def test_strips_and_coerces(self) -> None:
        body = parse_request(
            SendMessageRequest,
            {"number": 628123456789, "message": "  hi  ", "extra": "ignored"},
        )
        assert body.number == "628123456789"
        assert body.message == "hi"

    def test_booleans_are_not_coerced(self) -> None:
        with pytest.raises(RequestValidationFailed) as exc_info:
            parse_request(SendMessageRequest, {"number": True, "message": "hi"})
        assert "number" in exc_info.value.errors

    def test_group_selector(self) -> None:
        with pytest.raises(RequestValidationFailed) as exc_info:
            parse_request(SendGroupMessageRequest, {"message": "go", "name": " "})
        assert exc_info.value.errors == {"id": "Invalid value, you can use `id` or `name`"}

        body = parse_request(SendGroupMessageRequest, {"message": "go", "id": "123@g.us"})
        assert body.id == "123@g.us"
        assert body.name is None


class TestStatusMapping:
    @pytest.mark.parametrize(
        ("failure", "expected"),
        [
            (SessionNotReadyError(), 503),
            (SessionNeverInitializedError(), 503),
            (InvalidIdentifierError("x", "number is empty"), 422),
            (RecipientNotRegisteredError(), 422),
            (EncodingFailedError(), 422),
            (GroupNotFoundError("Ops"), 422),
            (SendTimeoutError(), 500),
            (GroupMutationFailedError("Chat is not a group"), 500),
        ],
    )
    def test_status_for(self, failure, expected: int) -> None:
        assert status_for(failure) == expected

    def test_success_with_message_key(self) -> None:
        response = dispatch_response(
            DispatchResult.success({"message": "Media sent successfully"}),
            key="message",
        )
        assert response.status_code == 200
        assert json.loads(response.body) == {
            "status": True,
            "message": "Media sent successfully",
        }

    def test_failure_maps_status_and_message(self) -> None:
        response = dispatch_response(DispatchResult.failed(SessionNotReadyError()), key="message")

        assert response.status_code == 503
        body = json.loads(response.body)
        assert body["status"] is False
        assert body["message"] == SessionNotReadyError().message
