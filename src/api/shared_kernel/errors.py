"""Failure taxonomy shared by every bounded context.

Application services raise ``ServiceError`` subclasses. The façade turns the
expected business failures into ``Failure`` values so callers can branch on a
classification instead of catching exceptions; programmer-error conditions
(a write whose parent document is missing) and transport problems keep
propagating as exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class FailureKind(StrEnum):
    """Classification of everything that can go wrong in a façade call."""

    NOT_FOUND = "not_found"
    ACCESS_DENIED = "access_denied"
    VALIDATION_FAILED = "validation_failed"
    CONFLICT = "conflict"
    TRANSPORT_FAILURE = "transport_failure"


class ServiceError(Exception):
    """Base class for typed failures raised by application services.

    Attributes:
        kind: The failure classification
        reason: Short machine-readable code (e.g. ``"blocked"``)
    """

    kind: FailureKind = FailureKind.VALIDATION_FAILED

    def __init__(self, reason: str, message: str | None = None):
        super().__init__(message or reason)
        self.reason = reason


class NotFoundError(ServiceError):
    """Raised when a write expects an existing document that is absent."""

    kind = FailureKind.NOT_FOUND


class AccessDeniedError(ServiceError):
    """Raised on role, institution, email-domain mismatch or blocked accounts."""

    kind = FailureKind.ACCESS_DENIED


class ValidationFailedError(ServiceError):
    """Raised when a required input field is missing or malformed."""

    kind = FailureKind.VALIDATION_FAILED


class ConflictError(ServiceError):
    """Raised on duplicate unique keys or disallowed state transitions."""

    kind = FailureKind.CONFLICT


class TransportError(ServiceError):
    """Raised when the persistence layer or identity provider is unreachable.

    The façade never retries; callers may impose their own retry policy.
    """

    kind = FailureKind.TRANSPORT_FAILURE


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Expected business failure carrying only a classification."""

    kind: FailureKind
    reason: str

    @property
    def ok(self) -> bool:
        return False

    @classmethod
    def from_error(cls, error: ServiceError) -> Failure:
        """Build a Failure from a raised ServiceError."""
        return cls(kind=error.kind, reason=error.reason)


Result = Union[Ok[T], Failure]


def require_fields(**fields: str | None) -> None:
    """Raise ValidationFailedError naming the first blank field.

    Args:
        **fields: Field name to submitted value

    Raises:
        ValidationFailedError: If any value is None or only whitespace
    """
    for name, value in fields.items():
        if value is None or not str(value).strip():
            raise ValidationFailedError(f"missing_{name}")
