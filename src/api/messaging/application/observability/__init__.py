"""Observability for messaging application services."""

from messaging.application.observability.conversation_poller_probe import (
    ConversationPollerProbe,
    DefaultConversationPollerProbe,
)
from messaging.application.observability.messaging_service_probe import (
    DefaultMessagingServiceProbe,
    MessagingServiceProbe,
)

__all__ = [
    "ConversationPollerProbe",
    "DefaultConversationPollerProbe",
    "DefaultMessagingServiceProbe",
    "MessagingServiceProbe",
]
