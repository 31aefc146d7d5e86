"""Explicit authentication session.

The presentation layer owns one AuthSession per signed-in client and passes
it into the login, signup and logout operations. Services stay stateless;
everything they know about "who is signed in" comes from this object.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from identity.domain.value_objects import Identity

SessionListener = Callable[[Identity | None], Awaitable[None]]


class AuthSession:
    """Holds the current identity and notifies listeners on every transition."""

    def __init__(self, identity: Identity | None = None):
        self._identity = identity
        self._listeners: list[SessionListener] = []

    @property
    def identity(self) -> Identity | None:
        return self._identity

    @property
    def is_authenticated(self) -> bool:
        return self._identity is not None

    def add_listener(self, listener: SessionListener) -> Callable[[], None]:
        """Register a transition listener.

        Returns:
            A callable that removes the listener again
        """
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    async def establish(self, identity: Identity) -> None:
        """Sign an identity in, replacing any previous one."""
        self._identity = identity
        await self._notify(identity)

    async def end(self) -> None:
        """Sign out; a no-op when nobody is signed in."""
        if self._identity is None:
            return
        self._identity = None
        await self._notify(None)

    async def _notify(self, identity: Identity | None) -> None:
        for listener in list(self._listeners):
            # A listener may itself trigger a newer transition (e.g. ending
            # a blocked session); stop delivering the stale one.
            if self._identity is not identity:
                return
            await listener(identity)
