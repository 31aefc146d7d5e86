"""Builds a ``Db`` from environment settings.

The firestore backend authenticates against Firebase Authentication; the
local backends keep bcrypt credentials in the document store itself.
"""

from __future__ import annotations

from facade.db import Db
from identity.infrastructure import FirebaseIdentityProvider, LocalIdentityProvider
from identity.ports import IdentityProvider
from infrastructure.dependencies import open_document_store
from infrastructure.logging import configure_logging
from infrastructure.settings import (
    FirebaseSettings,
    PlatformSettings,
    StorageSettings,
    get_firebase_settings,
    get_storage_settings,
)
from shared_kernel.documents import DocumentStore


def create_identity_provider(
    store: DocumentStore,
    storage: StorageSettings,
    firebase: FirebaseSettings,
) -> IdentityProvider:
    """Pick the identity provider matching the storage backend."""
    if storage.backend == "firestore":
        return FirebaseIdentityProvider.from_settings(firebase)
    return LocalIdentityProvider(store)


async def create_db(
    storage: StorageSettings | None = None,
    firebase: FirebaseSettings | None = None,
    platform: PlatformSettings | None = None,
    log_level: str | None = "INFO",
) -> Db:
    """Open the configured backend and return a ready façade.

    Args:
        storage: Storage settings (defaults to environment settings)
        firebase: Firebase settings (defaults to environment settings)
        platform: Platform settings (defaults to environment settings)
        log_level: Configure structlog at this level; None leaves logging
            configuration to the host application
    """
    if log_level is not None:
        configure_logging(log_level)

    storage = storage or get_storage_settings()
    firebase = firebase or get_firebase_settings()

    store = await open_document_store(storage, firebase)
    provider = create_identity_provider(store, storage, firebase)
    return Db(store, provider, settings=platform)
