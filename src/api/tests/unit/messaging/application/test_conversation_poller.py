"""Unit tests for ConversationPoller."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, create_autospec

import pytest

from messaging.application import ConversationPoller, MessagingService
from messaging.application.observability import (
    ConversationPollerProbe,
    DefaultConversationPollerProbe,
)
from messaging.domain import Message
from shared_kernel.errors import TransportError


def _message(message_id: str, ts: int) -> Message:
    return Message(message_id, "inst_nfsu", "u_rohan", "u_priya", "hi", ts)


@pytest.fixture
def probe():
    return create_autospec(ConversationPollerProbe, instance=True)


@pytest.fixture
def service():
    return create_autospec(MessagingService, instance=True)


@pytest.fixture
def caller(make_profile):
    return make_profile()


class TestRefresh:
    """Tests for a single refresh."""

    @pytest.mark.asyncio
    async def test_callback_only_on_change(self, service, caller, probe):
        on_update = AsyncMock()
        thread = [_message("m1", 1)]
        service.get_messages.return_value = thread
        poller = ConversationPoller(service, caller, "u_priya", on_update, probe=probe)

        assert await poller.refresh() is True
        assert await poller.refresh() is False

        thread = [_message("m1", 1), _message("m2", 2)]
        service.get_messages.return_value = thread
        assert await poller.refresh() is True

        assert on_update.await_count == 2
        on_update.assert_awaited_with(thread)
        service.get_messages.assert_awaited_with(caller, "u_priya")

    @pytest.mark.asyncio
    async def test_empty_thread_reported_once(self, service, caller, probe):
        on_update = AsyncMock()
        service.get_messages.return_value = []
        poller = ConversationPoller(service, caller, "u_priya", on_update, probe=probe)

        await poller.refresh()
        await poller.refresh()

        on_update.assert_awaited_once_with([])

    def test_interval_must_be_positive(self, service, caller):
        with pytest.raises(ValueError):
            ConversationPoller(service, caller, "u_priya", AsyncMock(), 0)


class TestPolling:
    """Tests for the background task lifecycle."""

    @pytest.mark.asyncio
    async def test_polls_until_stopped(self, service, caller, probe):
        updates = asyncio.Event()

        async def on_update(messages):
            updates.set()

        service.get_messages.return_value = [_message("m1", 1)]
        poller = ConversationPoller(
            service, caller, "u_priya", on_update, interval_seconds=0.01, probe=probe
        )

        async with poller:
            assert poller.running
            await asyncio.wait_for(updates.wait(), timeout=1)
            while service.get_messages.await_count < 3:
                await asyncio.sleep(0.01)

        assert not poller.running
        calls = service.get_messages.await_count
        await asyncio.sleep(0.05)
        assert service.get_messages.await_count == calls
        probe.poller_started.assert_called_once()
        probe.poller_stopped.assert_called_once()

    @pytest.mark.asyncio
    async def test_failed_refresh_keeps_polling(self, service, caller, probe):
        error = TransportError("storage_unavailable")
        outcomes = [error]

        async def get_messages(caller, other_user_id):
            if outcomes:
                raise outcomes.pop()
            return [_message("m1", 1)]

        service.get_messages.side_effect = get_messages
        received = asyncio.Event()

        async def on_update(messages):
            received.set()

        poller = ConversationPoller(
            service, caller, "u_priya", on_update, interval_seconds=0.01, probe=probe
        )

        await poller.start()
        try:
            await asyncio.wait_for(received.wait(), timeout=1)
        finally:
            await poller.stop()

        probe.poll_failed.assert_called_once_with(
            user_id=caller.uid, other_user_id="u_priya", error=error
        )

    @pytest.mark.asyncio
    async def test_start_twice_and_stop_twice(self, service, caller, probe):
        service.get_messages.return_value = []
        poller = ConversationPoller(
            service, caller, "u_priya", AsyncMock(), interval_seconds=0.01, probe=probe
        )

        await poller.start()
        await poller.start()
        await poller.stop()
        await poller.stop()

        probe.poller_started.assert_called_once()
        probe.poller_stopped.assert_called_once()


class TestDefaultConversationPollerProbe:
    """Tests for the structlog-backed probe."""

    def test_uses_custom_logger(self):
        custom_logger = MagicMock()

        probe = DefaultConversationPollerProbe(logger=custom_logger)

        assert probe._logger is custom_logger
