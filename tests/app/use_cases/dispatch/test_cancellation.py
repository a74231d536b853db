"""Testes do token de cancelamento e dos envios abandonados."""

from __future__ import annotations

import asyncio
import logging

import pytest

from app.use_cases.dispatch import (
    CancellationToken,
    DispatchResult,
    OrphanedSendTracker,
    translate_send_failure,
)
from utils.errors import (
    ConnectionLostError,
    DispatchCancelledError,
    EvaluationFailedError,
    SendFailedError,
    SendTimeoutError,
    TransportProtocolError,
)

CANCELLATION_LOGGER = "app.use_cases.dispatch.cancellation"


async def _slow(value: str, delay: float = 0.05) -> str:
    await asyncio.sleep(delay)
    return value


async def _slow_failure(delay: float = 0.05) -> None:
    await asyncio.sleep(delay)
    raise RuntimeError("Evaluation failed: late")


class TestCancellationToken:
    @pytest.mark.asyncio
    async def test_result_within_deadline(self) -> None:
        token = CancellationToken(timeout_seconds=1.0)

        assert await token.race(_slow("ok", delay=0)) == "ok"
        assert len(token.orphans) == 0

    @pytest.mark.asyncio
    async def test_deadline_abandons_wait_and_logs_late_success(self, caplog) -> None:
        token = CancellationToken(timeout_seconds=0.001)

        with caplog.at_level(logging.INFO, logger=CANCELLATION_LOGGER):
            with pytest.raises(SendTimeoutError):
                await token.race(_slow("late"), operation="send_media")
            assert len(token.orphans) == 1

            await token.orphans.drain(timeout_seconds=1.0)
            await asyncio.sleep(0)

        messages = [record.getMessage() for record in caplog.records]
        assert "dispatch_wait_abandoned" in messages
        assert "dispatch_late_send_completed" in messages
        assert len(token.orphans) == 0

    @pytest.mark.asyncio
    async def test_late_failure_is_logged(self, caplog) -> None:
        token = CancellationToken(timeout_seconds=0.001)

        with caplog.at_level(logging.INFO, logger=CANCELLATION_LOGGER):
            with pytest.raises(SendTimeoutError):
                await token.race(_slow_failure())
            await token.orphans.drain(timeout_seconds=1.0)
            await asyncio.sleep(0)

        failed = [r for r in caplog.records if r.getMessage() == "dispatch_late_send_failed"]
        assert failed
        assert failed[0].error_type == "RuntimeError"

    @pytest.mark.asyncio
    async def test_explicit_cancel(self) -> None:
        token = CancellationToken()

        waiting = asyncio.create_task(token.race(_slow("late")))
        await asyncio.sleep(0)
        token.cancel()

        with pytest.raises(DispatchCancelledError):
            await waiting
        assert token.cancelled is True
        await token.orphans.drain(timeout_seconds=1.0)

    @pytest.mark.asyncio
    async def test_already_cancelled_token_fails_fast(self) -> None:
        token = CancellationToken(timeout_seconds=10)
        token.cancel()

        with pytest.raises(DispatchCancelledError):
            await token.race(_slow("late"))
        await token.orphans.drain(timeout_seconds=1.0)

    @pytest.mark.asyncio
    async def test_drain_cancels_sends_past_timeout(self) -> None:
        token = CancellationToken(timeout_seconds=0.001)

        with pytest.raises(SendTimeoutError):
            await token.race(_slow("never", delay=10))

        await token.orphans.drain(timeout_seconds=0.01)
        await asyncio.sleep(0)
        assert len(token.orphans) == 0


class TestOrphanedSendTracker:
    @pytest.mark.asyncio
    async def test_abandoned_send_goes_to_given_tracker(self) -> None:
        owned = OrphanedSendTracker()
        token = CancellationToken(timeout_seconds=0.001)

        with pytest.raises(SendTimeoutError):
            await token.race(_slow("late"), orphans=owned)

        assert len(owned) == 1
        assert len(token.orphans) == 0
        await owned.drain(timeout_seconds=1.0)
        assert len(owned) == 0

    @pytest.mark.asyncio
    async def test_trackers_are_independent(self) -> None:
        first = OrphanedSendTracker()
        second = OrphanedSendTracker()

        with pytest.raises(SendTimeoutError):
            await CancellationToken(0.001, orphans=first).race(_slow("late"))

        assert len(first) == 1
        assert len(second) == 0
        await second.drain(timeout_seconds=0.01)
        assert len(first) == 1
        await first.drain(timeout_seconds=1.0)

    @pytest.mark.asyncio
    async def test_empty_tracker_is_kept_by_token(self) -> None:
        tracker = OrphanedSendTracker()
        assert CancellationToken(orphans=tracker).orphans is tracker


class TestTranslateSendFailure:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Navigation timeout of 30000 ms exceeded", SendTimeoutError),
            ("Evaluation failed: TypeError", EvaluationFailedError),
            ("Protocol error (Runtime.callFunctionOn)", TransportProtocolError),
            ("Target closed", ConnectionLostError),
        ],
    )
    def test_known_engine_messages(self, text: str, expected: type) -> None:
        assert isinstance(translate_send_failure(RuntimeError(text)), expected)

    def test_unknown_failure_uses_generic_message(self) -> None:
        failure = translate_send_failure(RuntimeError("something odd"))
        assert isinstance(failure, SendFailedError)
        assert failure.message == "Error sending media"

    def test_transport_errors_pass_through(self) -> None:
        original = ConnectionLostError()
        assert translate_send_failure(original) is original


class TestDispatchResult:
    def test_success_and_failure(self) -> None:
        ok = DispatchResult.success({"id": "1"})
        failed = DispatchResult.failed(SendFailedError("x"))

        assert ok.message is None
        assert ok.failure_code is None
        assert failed.message == "x"
        assert failed.failure_code == "SendFailedError"

    def test_failure_requires_error(self) -> None:
        with pytest.raises(ValueError):
            DispatchResult(ok=False)

    def test_success_rejects_error(self) -> None:
        with pytest.raises(ValueError):
            DispatchResult(ok=True, failure=SendFailedError("x"))
