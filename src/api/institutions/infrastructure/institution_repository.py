"""DocumentStore implementation of IInstitutionRepository.

Institutions live in ``institutions`` keyed by id. Code uniqueness is
enforced by a reservation document in ``institution_codes`` keyed by the
normalized code, created in the same batch as the institution.
"""

from __future__ import annotations

from typing import Any

from institutions.domain.institution import Institution, normalize_code
from institutions.ports.repositories import IInstitutionRepository
from shared_kernel.documents import (
    CreateDocument,
    DeleteDocument,
    DocumentStore,
    DocumentWrite,
)

INSTITUTIONS = "institutions"
INSTITUTION_CODES = "institution_codes"


def institution_to_document(institution: Institution) -> dict[str, Any]:
    document: dict[str, Any] = {
        "id": institution.id,
        "name": institution.name,
        "code": institution.code,
        "logo": institution.logo,
        "description": institution.description,
        "themeColor": institution.theme_color,
    }
    if institution.email_domain:
        document["emailDomain"] = institution.email_domain
    return document


def institution_from_document(document: dict[str, Any]) -> Institution:
    return Institution(
        id=document["id"],
        name=document.get("name", ""),
        code=document.get("code", ""),
        logo=document.get("logo", ""),
        description=document.get("description", ""),
        theme_color=document.get("themeColor", ""),
        email_domain=document.get("emailDomain"),
    )


class InstitutionRepository(IInstitutionRepository):
    """Repository for institutions over a DocumentStore."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def creation_writes(self, institution: Institution) -> list[DocumentWrite]:
        reservation = {
            "code": institution.normalized_code,
            "institutionId": institution.id,
        }
        return [
            CreateDocument(
                INSTITUTION_CODES, institution.normalized_code, reservation
            ),
            CreateDocument(
                INSTITUTIONS, institution.id, institution_to_document(institution)
            ),
        ]

    def deletion_writes(self, institution: Institution) -> list[DocumentWrite]:
        return [
            DeleteDocument(INSTITUTIONS, institution.id),
            DeleteDocument(INSTITUTION_CODES, institution.normalized_code),
        ]

    async def get_by_id(self, institution_id: str) -> Institution | None:
        document = await self._store.get(INSTITUTIONS, institution_id)
        return institution_from_document(document) if document is not None else None

    async def list_all(self) -> list[Institution]:
        documents = await self._store.query(INSTITUTIONS)
        return [institution_from_document(document) for document in documents]

    async def find_by_code(self, code: str) -> Institution | None:
        # Institutions created before code reservations have no reservation.
        wanted = normalize_code(code)
        for institution in await self.list_all():
            if institution.normalized_code == wanted:
                return institution
        return None
