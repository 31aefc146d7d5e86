"""Identifier and timestamp generation shared across bounded contexts.

Document ids are ULIDs: sortable and safe to generate without coordination.
Timestamps are integer epoch milliseconds, the unit the stored documents use.
"""

from __future__ import annotations

import time
from collections.abc import Callable

from ulid import ULID

Clock = Callable[[], int]


def generate_id() -> str:
    """Generate a new opaque document id."""
    return str(ULID())


def now_millis() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000
