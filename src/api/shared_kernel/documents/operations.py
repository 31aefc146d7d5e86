"""Document store operation value objects.

These immutable value objects describe filters, field transforms, batch
writes and transactional mutations. Services build them; every
``DocumentStore`` backend interprets them with its own native primitives.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class FilterOp(StrEnum):
    """Supported query predicates."""

    EQUAL = "=="
    ARRAY_CONTAINS = "array_contains"


@dataclass(frozen=True)
class FieldFilter:
    """A single predicate over a top-level document field.

    Attributes:
        field: Document field name (stored key, e.g. ``institutionId``)
        op: Predicate operator
        value: Value to compare against
    """

    field: str
    op: FilterOp
    value: Any

    def matches(self, document: dict[str, Any]) -> bool:
        """Evaluate the predicate against an in-process document."""
        current = document.get(self.field)
        if self.op == FilterOp.EQUAL:
            return current == self.value
        if self.op == FilterOp.ARRAY_CONTAINS:
            return isinstance(current, list) and self.value in current
        raise ValueError(f"Unsupported filter operator: {self.op}")


def eq(field_name: str, value: Any) -> FieldFilter:
    """Build an equality filter."""
    return FieldFilter(field=field_name, op=FilterOp.EQUAL, value=value)


def array_contains(field_name: str, value: Any) -> FieldFilter:
    """Build an array-membership filter."""
    return FieldFilter(field=field_name, op=FilterOp.ARRAY_CONTAINS, value=value)


# --- Field transforms used by DocumentStore.update ---


@dataclass(frozen=True)
class Increment:
    """Add ``amount`` to a numeric field (missing fields count as zero)."""

    amount: int = 1


@dataclass(frozen=True)
class ArrayUnion:
    """Append each value not already present, preserving arrival order."""

    values: tuple[Any, ...]


@dataclass(frozen=True)
class ArrayRemove:
    """Remove every occurrence of each value."""

    values: tuple[Any, ...]


FieldTransform = Increment | ArrayUnion | ArrayRemove


def apply_transform(current: Any, transform: FieldTransform) -> Any:
    """Apply a field transform to an in-process value.

    Used by the backends that have no native transform support.
    """
    if isinstance(transform, Increment):
        return (current or 0) + transform.amount
    items = list(current) if isinstance(current, list) else []
    if isinstance(transform, ArrayUnion):
        for value in transform.values:
            if value not in items:
                items.append(value)
        return items
    if isinstance(transform, ArrayRemove):
        return [item for item in items if item not in transform.values]
    raise TypeError(f"Unsupported field transform: {transform!r}")


def apply_changes(
    document: dict[str, Any], changes: dict[str, Any]
) -> dict[str, Any]:
    """Return a copy of ``document`` with plain values and transforms applied."""
    updated = dict(document)
    for key, value in changes.items():
        if isinstance(value, (Increment, ArrayUnion, ArrayRemove)):
            updated[key] = apply_transform(updated.get(key), value)
        else:
            updated[key] = value
    return updated


# --- Batch writes used by DocumentStore.commit ---


@dataclass(frozen=True)
class CreateDocument:
    """Create a document; the whole batch fails if it already exists."""

    collection: str
    document_id: str
    data: dict[str, Any] = field(hash=False)


@dataclass(frozen=True)
class SetDocument:
    """Create or overwrite a document."""

    collection: str
    document_id: str
    data: dict[str, Any] = field(hash=False)


@dataclass(frozen=True)
class DeleteDocument:
    """Delete a document if present."""

    collection: str
    document_id: str


DocumentWrite = CreateDocument | SetDocument | DeleteDocument


# --- Mutations returned from DocumentStore.transact callbacks ---


@dataclass(frozen=True)
class Replace:
    """Replace the transacted document with ``data``."""

    data: dict[str, Any] = field(hash=False)


@dataclass(frozen=True)
class Delete:
    """Delete the transacted document."""


Mutation = Replace | Delete | None
