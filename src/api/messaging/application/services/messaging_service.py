"""Messaging application service.

Strictly pairwise conversations; there are no channels or groups.
"""

from __future__ import annotations

from identity.ports.repositories import IUserProfileRepository
from messaging.application.observability import (
    DefaultMessagingServiceProbe,
    MessagingServiceProbe,
)
from messaging.domain.message import Message
from messaging.ports.repositories import IMessageRepository
from shared_kernel.authorization import AccessPolicy, Caller
from shared_kernel.errors import AccessDeniedError, require_fields
from shared_kernel.identifiers import Clock, generate_id, now_millis


class MessagingService:
    """Application service for direct messages."""

    def __init__(
        self,
        message_repository: IMessageRepository,
        profile_repository: IUserProfileRepository,
        access_policy: AccessPolicy | None = None,
        clock: Clock = now_millis,
        probe: MessagingServiceProbe | None = None,
    ):
        """Initialize MessagingService with dependencies.

        Args:
            message_repository: Repository for message persistence
            profile_repository: Used to check the receiver's institution
            access_policy: Block-status guard
            clock: Source of epoch-millisecond timestamps
            probe: Optional domain probe for observability
        """
        self._messages = message_repository
        self._profiles = profile_repository
        self._policy = access_policy or AccessPolicy()
        self._clock = clock
        self._probe = probe or DefaultMessagingServiceProbe()

    async def send_message(self, caller: Caller, receiver_id: str, text: str) -> Message:
        """Send ``text`` from the caller to ``receiver_id``.

        Raises:
            ValidationFailedError: If the receiver or text is blank
            AccessDeniedError: If the caller is blocked or the receiver is
                not a member of the caller's institution
        """
        require_fields(receiver_id=receiver_id, text=text)
        self._policy.require_active(caller)

        receiver = await self._profiles.get_by_id(receiver_id)
        if receiver is None or receiver.institution_id != caller.institution_id:
            self._probe.recipient_unavailable(sender_id=caller.uid, receiver_id=receiver_id)
            raise AccessDeniedError("recipient_unavailable")

        message = Message(
            id=generate_id(),
            institution_id=caller.institution_id,
            sender_id=caller.uid,
            receiver_id=receiver_id,
            text=text,
            timestamp=self._clock(),
        )
        await self._messages.save(message)

        self._probe.message_sent(
            message_id=message.id, sender_id=caller.uid, receiver_id=receiver_id
        )
        return message

    async def get_messages(self, caller: Caller, other_user_id: str) -> list[Message]:
        """The thread between the caller and ``other_user_id``, oldest first."""
        self._policy.require_active(caller)
        messages = await self._messages.list_for_participant(caller.uid)
        thread = [m for m in messages if m.involves(caller.uid, other_user_id)]
        return sorted(thread, key=lambda m: (m.timestamp, m.id))

    async def get_conversations(self, caller: Caller) -> list[str]:
        """Distinct counterparts of the caller, most recent conversation first."""
        self._policy.require_active(caller)
        messages = await self._messages.list_for_participant(caller.uid)
        messages.sort(key=lambda m: m.timestamp, reverse=True)
        counterparts = (m.counterpart_of(caller.uid) for m in messages)
        return list(dict.fromkeys(uid for uid in counterparts if uid is not None))
