"""Boundary Protocols — contracts between the scheduling core and its callers.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - The engine only READS items; it never mutates or copies them
    - The pool is owned by the caller and supplied on every call that may build a cycle

Design Decisions:
    - Protocol over ABC: structural subtyping, any record with the right attributes works
    - Timestamps are plain floats in milliseconds since epoch: no datetime parsing in core
"""

from typing import Callable, Protocol, Sequence


class SchedulableItem(Protocol):
    """Structural contract for anything the engine can schedule."""
    id: str
    priority: str
    created_at: float | None
    activity_at: Sequence[float]


class ItemSource(Protocol):
    """Contract for the pool provider — implemented by the host application.

    Must return only items that should currently circulate (already filtered
    to active ones).
    """
    def active_items(self) -> Sequence[SchedulableItem]: ...


Clock = Callable[[], float]
