"""Domain Types — priorities, identity types, and engine constants.

Invariants:
    - Priority is a closed set: urgent, high, medium, low
    - REQUIRED_PRIORITIES is the canonical order (most to least urgent)
    - All sizing constants for the render queue live here — single source of truth

Design Decisions:
    - str Enum: Priority.URGENT == "urgent", so plain strings from callers still match
    - NewType for ItemId: zero runtime cost, full type-checker support
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ItemId = NewType("ItemId", str)


# ─── Enums ───────────────────────────────────────────────────────

class Priority(str, Enum):
    """Item priority — each priority owns exactly one bucket per cycle."""
    URGENT = "urgent"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


REQUIRED_PRIORITIES: tuple[Priority, ...] = (
    Priority.URGENT,
    Priority.HIGH,
    Priority.MEDIUM,
    Priority.LOW,
)


# ─── Engine Constants ────────────────────────────────────────────

MS_PER_DAY: int = 1000 * 60 * 60 * 24

PAGE_SIZE: int = 6                  # items appended per load_more
MAX_RENDER_QUEUE_SIZE: int = 36     # render queue bound after pruning
KEEP_BEHIND_COUNT: int = 10         # visited entries kept behind the cursor
READ_AHEAD_MIN: int = 2             # load more when this few remain ahead

PROGRESS_VISIBLE_DOTS: int = 5


def coerce_priority(value: object) -> Priority | None:
    """Map a Priority or its string value to Priority. None when unknown."""
    if isinstance(value, Priority):
        return value
    try:
        return Priority(value)
    except ValueError:
        return None
