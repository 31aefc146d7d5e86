"""Application layer for the messaging context."""

from messaging.application.services import (
    ConversationPoller,
    MessagingService,
    ThreadCallback,
)

__all__ = ["ConversationPoller", "MessagingService", "ThreadCallback"]
