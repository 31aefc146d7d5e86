"""Polling refresh for an open conversation.

There is no push channel, so an open conversation re-fetches its thread on
a fixed interval. The poller owns exactly one asyncio task and must be
stopped when the conversation view goes away.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from messaging.application.observability import (
    ConversationPollerProbe,
    DefaultConversationPollerProbe,
)
from messaging.application.services.messaging_service import MessagingService
from messaging.domain.message import Message
from shared_kernel.authorization import Caller

ThreadCallback = Callable[[list[Message]], Awaitable[None]]


class ConversationPoller:
    """Re-fetches one thread periodically and reports changes.

    The callback receives the whole thread (oldest first) on the first
    refresh and afterwards only when the set of messages changed.

    Usage::

        async with ConversationPoller(service, caller, other_id, render):
            ...  # view is open
    """

    def __init__(
        self,
        service: MessagingService,
        caller: Caller,
        other_user_id: str,
        on_update: ThreadCallback,
        interval_seconds: float = 1.0,
        probe: ConversationPollerProbe | None = None,
    ) -> None:
        """Initialize the poller.

        Args:
            service: Messaging service used to fetch the thread
            caller: The member viewing the conversation
            other_user_id: The counterpart
            on_update: Awaited with the thread whenever it changed
            interval_seconds: Delay between refreshes
            probe: Optional domain probe for observability
        """
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._service = service
        self._caller = caller
        self._other_user_id = other_user_id
        self._on_update = on_update
        self._interval = interval_seconds
        self._probe = probe or DefaultConversationPollerProbe()
        self._last_seen: tuple[str, ...] | None = None
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start polling; calling start on a running poller does nothing."""
        if self.running:
            return
        self._probe.poller_started(
            user_id=self._caller.uid,
            other_user_id=self._other_user_id,
            interval=self._interval,
        )
        self._task = asyncio.create_task(self._poll_loop())

    async def stop(self) -> None:
        """Cancel the polling task and wait for it to finish."""
        task, self._task = self._task, None
        if task is None:
            return

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

        self._probe.poller_stopped(
            user_id=self._caller.uid, other_user_id=self._other_user_id
        )

    async def refresh(self) -> bool:
        """Fetch the thread once.

        Returns:
            True if the callback was invoked with a changed thread
        """
        messages = await self._service.get_messages(self._caller, self._other_user_id)
        seen = tuple(m.id for m in messages)
        if seen == self._last_seen:
            return False

        self._last_seen = seen
        self._probe.thread_changed(
            user_id=self._caller.uid,
            other_user_id=self._other_user_id,
            count=len(messages),
        )
        await self._on_update(messages)
        return True

    async def _poll_loop(self) -> None:
        while True:
            try:
                await self.refresh()
            except Exception as e:
                # Keep polling; the next refresh may succeed.
                self._probe.poll_failed(
                    user_id=self._caller.uid,
                    other_user_id=self._other_user_id,
                    error=e,
                )
            await asyncio.sleep(self._interval)

    async def __aenter__(self) -> ConversationPoller:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()
