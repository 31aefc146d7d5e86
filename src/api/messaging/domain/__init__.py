"""Messaging domain."""

from messaging.domain.message import Message

__all__ = ["Message"]
