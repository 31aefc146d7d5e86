"""Application services for the messaging context."""

from messaging.application.services.conversation_poller import (
    ConversationPoller,
    ThreadCallback,
)
from messaging.application.services.messaging_service import MessagingService

__all__ = [
    "ConversationPoller",
    "MessagingService",
    "ThreadCallback",
]
