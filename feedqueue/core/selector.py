"""Selector — picks the next item from a cycle with weighted interleaving.

Invariants:
    - A priority that just ran max_run_length times in a row is skipped,
      unless skipping it would leave nothing to pick (forward progress wins)
    - Only priorities whose top score is within interleave_window of the best are eligible
    - deck_index persists across picks: the deck is walked round-robin, never restarted
    - remaining is decremented exactly once per popped entry
    - Never raises: no work is signaled by returning None

Design Decisions:
    - The fallback can pick the run-capped priority again when it is the only
      non-empty bucket (accepted starvation avoidance, tested explicitly)
"""

from feedqueue.core.cycle_builder import CycleState, ScoredEntry
from feedqueue.core.domain_types import Priority
from feedqueue.core.item_protocols import SchedulableItem


def bucket_top_score(bucket: list[ScoredEntry]) -> float | None:
    return bucket[-1].score if bucket else None


def _top_scores(state: CycleState, apply_run_cap: bool) -> list[tuple[Priority, float]]:
    scored = []
    for priority in state.priority_order:
        if (
            apply_run_cap
            and state.last_priority_picked == priority
            and state.current_run_length >= state.max_run_length
        ):
            continue
        score = bucket_top_score(state.buckets.get(priority, []))
        if score is not None:
            scored.append((priority, score))
    return scored


def _pick_priority_from_deck(state: CycleState, eligible: set[Priority]) -> Priority | None:
    """Walk the deck once from deck_index; advance the cursor past the hit."""
    deck = state.deck
    if not deck:
        return None
    for offset in range(len(deck)):
        idx = (state.deck_index + offset) % len(deck)
        if deck[idx] in eligible:
            state.deck_index = (idx + 1) % len(deck)
            return deck[idx]
    return None


def select_next_priority(state: CycleState) -> Priority | None:
    """Choose the bucket to draw from. Advances deck_index; does not pop."""
    scored = _top_scores(state, apply_run_cap=True)
    if not scored:
        scored = _top_scores(state, apply_run_cap=False)
        if not scored:
            return None

    max_score = max(score for _, score in scored)
    threshold = max_score * (1 - state.interleave_window)
    eligible = {priority for priority, score in scored if score >= threshold}

    picked = _pick_priority_from_deck(state, eligible)
    if picked is not None:
        return picked

    # First strictly-highest in priority order
    best_priority, best_score = scored[0]
    for priority, score in scored:
        if score > best_score:
            best_priority, best_score = priority, score
    return best_priority


def pick_next_from_cycle(state: CycleState | None) -> SchedulableItem | None:
    """Pop the next item from the cycle, or None when nothing is left."""
    if state is None or state.remaining <= 0:
        return None
    priority = select_next_priority(state)
    if priority is None:
        return None
    bucket = state.buckets[priority]
    if not bucket:
        return None
    entry = bucket.pop()
    state.remaining -= 1

    if state.last_priority_picked == priority:
        state.current_run_length += 1
    else:
        state.last_priority_picked = priority
        state.current_run_length = 1

    return entry.item


def remove_from_cycle(state: CycleState | None, item_id: str) -> None:
    """Drop the first entry with `item_id` so it cannot resurface this cycle."""
    if state is None:
        return
    for priority in state.priority_order:
        bucket = state.buckets.get(priority, [])
        for idx, entry in enumerate(bucket):
            if entry.item.id == item_id:
                del bucket[idx]
                state.remaining = max(0, state.remaining - 1)
                return
