"""Shared test factories — items with timestamps relative to a fixed NOW."""

from feedqueue.core.domain_types import MS_PER_DAY
from feedqueue.schemas.item import FeedItem

NOW: float = 1_700_000_000_000.0


def fixed_clock() -> float:
    return NOW


def make_item(
    item_id: str,
    priority: str = "medium",
    created_days_ago: float = 1.0,
    activity_days_ago: tuple[float, ...] = (),
) -> FeedItem:
    return FeedItem(
        id=item_id,
        priority=priority,
        created_at=NOW - created_days_ago * MS_PER_DAY,
        activity_at=tuple(NOW - d * MS_PER_DAY for d in activity_days_ago),
    )


def ids(items) -> list[str]:
    return [item.id for item in items]


def queue_ids(state) -> list[str]:
    return [qi.item.id for qi in state.render_queue]


def queue_cycles(state) -> list[int]:
    return [qi.cycle for qi in state.render_queue]


class StaticSource:
    """ItemSource backed by a mutable list."""

    def __init__(self, items):
        self.items = list(items)
        self.calls = 0

    def active_items(self):
        self.calls += 1
        return self.items
