"""Queue Engine — state transitions over a caller-owned QueueState.

Invariants:
    - Every transition is synchronous and finite; no IO, no clock reads except via `now`
    - len(render_queue) <= MAX_RENDER_QUEUE_SIZE after every load_more
    - The current entry and the KEEP_BEHIND_COUNT entries behind it survive pruning
    - cycle_count increments only when an exhausted cycle is replaced by one with work
    - Removing an id absent from both the render queue and the live cycle is a no-op

Design Decisions:
    - Free functions over an explicit state struct, mirroring the selector's style
    - `now` is a callable, invoked once per cycle build: replayable with a fixed clock
    - navigate_to_index trusts the caller for range checks (shell validates)
"""

import time
from typing import Callable, Sequence

from feedqueue.core.cycle_builder import create_cycle_state
from feedqueue.core.domain_types import (
    KEEP_BEHIND_COUNT, MAX_RENDER_QUEUE_SIZE, PAGE_SIZE, READ_AHEAD_MIN,
)
from feedqueue.core.item_protocols import SchedulableItem
from feedqueue.core.queue_config import DEFAULT_QUEUE_CONFIG, QueueConfig
from feedqueue.core.queue_state import QueueItem, QueueState, get_current_item
from feedqueue.core.selector import pick_next_from_cycle, remove_from_cycle


def wall_clock_ms() -> float:
    return time.time() * 1000


def prune_render_queue(state: QueueState) -> None:
    """Trim to MAX_RENDER_QUEUE_SIZE: visited entries first, then unvisited tail."""
    overflow = len(state.render_queue) - MAX_RENDER_QUEUE_SIZE
    if overflow <= 0:
        return

    removable_from_front = max(0, state.current_index - KEEP_BEHIND_COUNT)
    drop_from_front = min(overflow, removable_from_front)
    if drop_from_front > 0:
        del state.render_queue[:drop_from_front]
        state.current_index -= drop_from_front

    remaining_overflow = len(state.render_queue) - MAX_RENDER_QUEUE_SIZE
    if remaining_overflow > 0:
        del state.render_queue[-remaining_overflow:]


def ensure_cycle_ready(
    state: QueueState,
    pool: Sequence[SchedulableItem],
    *,
    now: Callable[[], float] = wall_clock_ms,
    config: QueueConfig = DEFAULT_QUEUE_CONFIG,
) -> bool:
    """Build a cycle when none is live. Returns whether work is available.

    A rebuilt cycle with nothing schedulable is discarded and cycle_count is
    left alone, so a pool of unknown priorities never advances the count.
    """
    if state.cycle_state is None or state.cycle_state.exhausted:
        if not pool:
            state.cycle_state = None
            return False
        fresh = create_cycle_state(pool, now=now(), config=config)
        if fresh.exhausted:
            return False
        if state.cycle_state is not None:
            state.cycle_count += 1
        state.cycle_state = fresh
    return True


def load_more(
    state: QueueState,
    pool: Sequence[SchedulableItem],
    *,
    now: Callable[[], float] = wall_clock_ms,
    config: QueueConfig = DEFAULT_QUEUE_CONFIG,
) -> int:
    """Append up to PAGE_SIZE picks, then prune. Returns how many were appended."""
    if not pool:
        return 0
    batch: list[QueueItem] = []
    while len(batch) < PAGE_SIZE:
        if not ensure_cycle_ready(state, pool, now=now, config=config):
            break
        item = pick_next_from_cycle(state.cycle_state)
        if item is None:
            break
        batch.append(QueueItem(item=item, cycle=state.cycle_count))
    if batch:
        state.render_queue.extend(batch)
        prune_render_queue(state)
    return len(batch)


def reset_feed(
    state: QueueState,
    pool: Sequence[SchedulableItem],
    *,
    now: Callable[[], float] = wall_clock_ms,
    config: QueueConfig = DEFAULT_QUEUE_CONFIG,
) -> None:
    state.render_queue = []
    state.cycle_state = None
    state.cycle_count = 0
    state.current_index = 0
    if pool:
        load_more(state, pool, now=now, config=config)


def _read_ahead(state: QueueState, pool: Sequence[SchedulableItem], now, config) -> None:
    if len(state.render_queue) - state.current_index <= READ_AHEAD_MIN:
        load_more(state, pool, now=now, config=config)


def next_card(
    state: QueueState,
    pool: Sequence[SchedulableItem],
    *,
    now: Callable[[], float] = wall_clock_ms,
    config: QueueConfig = DEFAULT_QUEUE_CONFIG,
) -> None:
    if len(state.render_queue) <= 1:
        return
    if state.current_index < len(state.render_queue) - 1:
        state.current_index += 1
    else:
        # At the tail: only step forward if the load actually produced something
        if load_more(state, pool, now=now, config=config) > 0:
            state.current_index += 1
    _read_ahead(state, pool, now, config)


def previous_card(state: QueueState) -> None:
    if state.current_index <= 0:
        return
    state.current_index = max(0, state.current_index - 1)


def navigate_to_index(
    state: QueueState,
    index: int,
    pool: Sequence[SchedulableItem],
    *,
    now: Callable[[], float] = wall_clock_ms,
    config: QueueConfig = DEFAULT_QUEUE_CONFIG,
) -> None:
    if index == state.current_index:
        return
    state.current_index = index
    _read_ahead(state, pool, now, config)


def remove_request_from_queue(state: QueueState, item_id: str) -> None:
    """Remove every occurrence of `item_id` and keep the cursor on a sane entry.

    The item also leaves the live cycle, even when it has not been shown yet.
    """
    remove_from_cycle(state.cycle_state, item_id)

    old_queue = state.render_queue
    if not old_queue:
        state.current_index = 0
        return

    removed_indices = [i for i, qi in enumerate(old_queue) if qi.item.id == item_id]
    if not removed_indices:
        return

    was_current_removed = state.current_index in removed_indices
    removed_before_current = sum(1 for i in removed_indices if i < state.current_index)

    new_queue = [qi for qi in old_queue if qi.item.id != item_id]
    state.render_queue = new_queue

    if not new_queue:
        state.current_index = 0
    else:
        next_index = state.current_index - removed_before_current
        if was_current_removed and next_index >= len(new_queue):
            next_index = 0
        state.current_index = max(0, min(next_index, len(new_queue) - 1))


def insert_request(state: QueueState, item: SchedulableItem) -> None:
    """Show `item` right after the current entry (or as the only entry)."""
    if state.render_queue:
        current = get_current_item(state)
        cycle = current.cycle if current is not None else state.cycle_count
        state.render_queue.insert(state.current_index + 1, QueueItem(item=item, cycle=cycle))
    else:
        state.render_queue = [QueueItem(item=item, cycle=0)]
        state.current_index = 0
