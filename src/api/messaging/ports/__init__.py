"""Ports for the messaging context."""

from messaging.ports.repositories import IMessageRepository

__all__ = ["IMessageRepository"]
