"""Messaging infrastructure adapters."""

from messaging.infrastructure.message_repository import MessageRepository

__all__ = ["MessageRepository"]
