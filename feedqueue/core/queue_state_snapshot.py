"""Queue State Snapshot — serialization / deserialization for QueueState.

Invariants:
    - to_snapshot produces a JSON-safe dict (item ids only, no item objects)
    - from_snapshot drops ids missing from the live item lookup and clamps current_index
    - cycle_state is never snapshotted: it is rebuilt from the pool on the next load
    - A restored non-empty queue resumes in a NEW cycle, numbered above every kept entry,
      so items already shown are never tagged with their old cycle again
    - Missing keys fall back to QueueState defaults (forward-compatible)
"""

from typing import Mapping

from feedqueue.core.queue_state import QueueItem, QueueState


def queue_state_to_snapshot(state: QueueState) -> dict:
    """Serialize QueueState to JSON-safe dict. Pure, no IO."""
    return {
        "render_queue": [
            {"item_id": qi.item.id, "cycle": qi.cycle} for qi in state.render_queue
        ],
        "current_index": state.current_index,
        "cycle_count": state.cycle_count,
    }


def queue_state_from_snapshot(data: dict | None, items_by_id: Mapping[str, object]) -> QueueState:
    """Reconstruct QueueState from a snapshot and the live items it refers to."""
    state = QueueState()
    if not data:
        return state

    current_index = data.get("current_index", 0)
    kept: list[QueueItem] = []
    for position, entry in enumerate(data.get("render_queue", [])):
        item = items_by_id.get(entry.get("item_id"))
        if item is None:
            # Entries before the cursor that vanished shift the cursor back
            if position < data.get("current_index", 0):
                current_index -= 1
            continue
        kept.append(QueueItem(item=item, cycle=entry.get("cycle", 0)))

    state.render_queue = kept
    state.cycle_count = data.get("cycle_count", 0)
    if kept:
        # The interrupted cycle is gone: the next build starts a fresh one
        state.cycle_count = max(state.cycle_count, *(qi.cycle for qi in kept)) + 1
    state.current_index = max(0, min(current_index, len(kept) - 1)) if kept else 0
    return state
