"""Queue State — the caller-owned render queue and its read-only accessors.

Invariants:
    - 0 <= current_index < len(render_queue) whenever render_queue is non-empty
    - Cycle numbers along render_queue never decrease
    - cycle_state is None until the first load, and is rebuilt once exhausted

Design Decisions:
    - Plain mutable dataclass passed into free functions: no module-level singleton,
      any number of independent queues can coexist
"""

from dataclasses import dataclass, field

from feedqueue.core.cycle_builder import CycleState
from feedqueue.core.item_protocols import SchedulableItem


@dataclass(frozen=True)
class QueueItem:
    """A picked item tagged with the pass over the pool that produced it."""
    item: SchedulableItem
    cycle: int


@dataclass
class QueueState:
    """Per-feed navigation state — pure dataclass, no IO."""
    render_queue: list[QueueItem] = field(default_factory=list)
    current_index: int = 0
    cycle_count: int = 0
    cycle_state: CycleState | None = None


def create_queue_state() -> QueueState:
    return QueueState()


def get_current_item(state: QueueState) -> QueueItem | None:
    if 0 <= state.current_index < len(state.render_queue):
        return state.render_queue[state.current_index]
    return None


def can_go_previous(state: QueueState) -> bool:
    return state.current_index > 0


def can_go_next(state: QueueState) -> bool:
    """True whenever there is anything to move to (the feed never ends)."""
    return len(state.render_queue) > 1
