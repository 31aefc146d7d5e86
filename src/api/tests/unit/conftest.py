"""Unit test fixtures: in-memory store, fake clock and entity factories."""

from functools import partial
from unittest.mock import create_autospec

import bcrypt
import pytest
from pydantic import SecretStr

from identity.domain import UserProfile
from infrastructure.documents import InMemoryDocumentStore
from infrastructure.observability import DocumentStoreProbe
from infrastructure.settings import PlatformSettings
from institutions.domain import Institution
from institutions.infrastructure import InstitutionRepository
from shared_kernel.authorization import UserRole


class FakeClock:
    """Deterministic epoch-millisecond clock advancing one second per call."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        self.now += 1_000
        return self.now


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    """Use the cheapest bcrypt cost so credential tests stay fast."""
    monkeypatch.setattr(bcrypt, "gensalt", partial(bcrypt.gensalt, rounds=4))


@pytest.fixture
def store_probe():
    """Autospecced document store probe."""
    return create_autospec(DocumentStoreProbe, instance=True)


@pytest.fixture
def store(store_probe):
    """Fresh in-memory document store."""
    return InMemoryDocumentStore(probe=store_probe)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def platform_settings():
    """Platform settings independent of the environment."""
    return PlatformSettings(
        super_admin_email="superadmin@nexora.com",
        super_admin_password=SecretStr("squadran_root"),
        institution_admin_email="admin@nexora.com",
        admin_bootstrap_enabled=True,
        message_poll_interval_seconds=0.01,
        default_theme_color="#4AA4F2",
        onboarding_palette=["#FF725E", "#4AA4F2", "#6C63FF", "#43D9AD", "#FFC75F"],
    )


@pytest.fixture
def make_profile():
    """Factory for UserProfile values."""

    def _make(
        uid: str = "u_rohan",
        institution_id: str = "inst_nfsu",
        role: UserRole = UserRole.STUDENT,
        **fields,
    ) -> UserProfile:
        fields.setdefault("name", uid)
        return UserProfile(uid=uid, institution_id=institution_id, role=role, **fields)

    return _make


@pytest.fixture
def seed_institution(store):
    """Factory committing an institution (with its code reservation)."""
    repository = InstitutionRepository(store)

    async def _seed(
        institution_id: str = "inst_nfsu",
        code: str = "NFSU",
        email_domain: str | None = None,
    ) -> Institution:
        institution = Institution(
            id=institution_id,
            name=f"{code} University",
            code=code,
            logo="",
            description="",
            theme_color="#4AA4F2",
            email_domain=email_domain,
        )
        await store.commit(repository.creation_writes(institution))
        return institution

    return _seed
