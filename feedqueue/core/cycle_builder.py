"""Cycle Builder — partitions a pool snapshot into sorted per-priority buckets.

Invariants:
    - Config is validated before any state is built (ConfigurationError propagates)
    - Each item lands in exactly one bucket; items with an unknown priority are skipped
    - Buckets are sorted ascending by (score, last_activity_at, -created_at):
      the next entry to pop is always at the tail
    - remaining == sum(len(bucket) for bucket in buckets.values())

Design Decisions:
    - Deck is an immutable tuple plus an integer cursor (deck_index), not an iterator:
      trivially inspectable and serializable in tests
    - Tie-break order (more recently active, then older-created, pops first) is preserved
      from existing behavior as observed
"""

import math
from dataclasses import dataclass, field
from typing import Mapping, Sequence

from feedqueue.core.domain_types import Priority, coerce_priority
from feedqueue.core.item_protocols import SchedulableItem
from feedqueue.core.queue_config import (
    DEFAULT_QUEUE_CONFIG, QueueConfig, validate_queue_config,
)
from feedqueue.core.score_model import compute_score, last_activity_at


@dataclass(frozen=True)
class ScoredEntry:
    """An item wrapped with the values it is ordered by for one cycle."""
    item: SchedulableItem
    score: float
    last_activity_at: float
    created_at: float


@dataclass
class CycleState:
    """One pass over the pool — consumed in place by the selector."""
    buckets: dict[Priority, list[ScoredEntry]] = field(default_factory=dict)
    remaining: int = 0
    deck: tuple[Priority, ...] = ()
    deck_index: int = 0
    priority_order: tuple[Priority, ...] = ()
    interleave_window: float = 0.0
    max_run_length: int = 0
    last_priority_picked: Priority | None = None
    current_run_length: int = 0

    @property
    def exhausted(self) -> bool:
        return self.remaining <= 0


def build_interleave_deck(
    weights: Mapping, priority_order: Sequence[Priority],
) -> tuple[Priority, ...]:
    """Repeat each priority floor(weight) times, in priority order."""
    deck: list[Priority] = []
    for priority in priority_order:
        count = max(0, math.floor(weights.get(priority) or 0))
        deck.extend([priority] * count)
    return tuple(deck) if deck else tuple(priority_order)


def build_scored_entry(item: SchedulableItem, now: float, config: QueueConfig) -> ScoredEntry:
    return ScoredEntry(
        item=item,
        score=compute_score(item, now, config),
        last_activity_at=last_activity_at(item),
        created_at=getattr(item, "created_at", None) or 0,
    )


def sort_bucket(bucket: list[ScoredEntry]) -> None:
    bucket.sort(key=lambda e: (e.score, e.last_activity_at, -e.created_at))


def create_cycle_state(
    pool: Sequence[SchedulableItem], *, now: float, config: QueueConfig = DEFAULT_QUEUE_CONFIG,
) -> CycleState:
    """Build a fresh cycle over `pool`. Pure — the pool is never mutated."""
    validate_queue_config(config)
    priority_order = tuple(config.priority_order)
    buckets: dict[Priority, list[ScoredEntry]] = {p: [] for p in priority_order}

    remaining = 0
    for item in pool:
        priority = coerce_priority(item.priority)
        if priority not in buckets:
            continue
        buckets[priority].append(build_scored_entry(item, now, config))
        remaining += 1

    for bucket in buckets.values():
        sort_bucket(bucket)

    return CycleState(
        buckets=buckets,
        remaining=remaining,
        deck=build_interleave_deck(config.interleave_weights, priority_order),
        deck_index=0,
        priority_order=priority_order,
        interleave_window=config.interleave_window,
        max_run_length=config.max_run_length,
        last_priority_picked=None,
        current_run_length=0,
    )
