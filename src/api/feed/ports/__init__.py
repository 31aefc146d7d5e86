"""Ports for the feed context."""

from feed.ports.repositories import IPostRepository

__all__ = ["IPostRepository"]
