"""DocumentStore implementation of IOnboardingRequestRepository."""

from __future__ import annotations

from typing import Any

from institutions.domain.onboarding_request import OnboardingRequest, RequestStatus
from institutions.ports.repositories import IOnboardingRequestRepository
from shared_kernel.documents import (
    CreateDocument,
    DocumentStore,
    DocumentWrite,
    SetDocument,
    eq,
)

REQUESTS = "requests"


def request_to_document(request: OnboardingRequest) -> dict[str, Any]:
    document: dict[str, Any] = {
        "id": request.id,
        "instituteName": request.institute_name,
        "contactName": request.contact_name,
        "email": request.email,
        "status": request.status.value,
    }
    if request.email_domain:
        document["emailDomain"] = request.email_domain
    return document


def request_from_document(document: dict[str, Any]) -> OnboardingRequest:
    return OnboardingRequest(
        id=document["id"],
        institute_name=document.get("instituteName", ""),
        contact_name=document.get("contactName", ""),
        email=document.get("email", ""),
        status=RequestStatus.parse(document.get("status")),
        email_domain=document.get("emailDomain"),
    )


class OnboardingRequestRepository(IOnboardingRequestRepository):
    """Repository for onboarding requests over a DocumentStore."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def save(self, request: OnboardingRequest) -> None:
        await self._store.commit(
            [CreateDocument(REQUESTS, request.id, request_to_document(request))]
        )

    async def get_by_id(self, request_id: str) -> OnboardingRequest | None:
        document = await self._store.get(REQUESTS, request_id)
        return request_from_document(document) if document is not None else None

    async def list_by_status(self, status: RequestStatus) -> list[OnboardingRequest]:
        documents = await self._store.query(REQUESTS, [eq("status", status.value)])
        return [request_from_document(document) for document in documents]

    def replacement_write(self, request: OnboardingRequest) -> DocumentWrite:
        return SetDocument(REQUESTS, request.id, request_to_document(request))
