"""Service test fixtures — in-memory item source and a fixed-clock FeedService.

Invariants:
    - Every test gets a fresh source and service (no shared QueueState)
    - The clock is fixed: cycles are fully deterministic

Design Decisions:
    - StaticSource (tests/helpers.py) is a plain list wrapper: tests mutate `items`
      to simulate the host changing the pool between calls
"""

import pytest

from feedqueue.core.queue_config import DEFAULT_QUEUE_CONFIG
from feedqueue.services.feed_service import FeedService
from tests.helpers import StaticSource, fixed_clock, make_item


@pytest.fixture
def source():
    return StaticSource([
        make_item("u", "urgent", created_days_ago=1),
        make_item("h", "high", created_days_ago=2),
        make_item("m", "medium", created_days_ago=3),
    ])


@pytest.fixture
def service(source):
    return FeedService(source, clock=fixed_clock, config=DEFAULT_QUEUE_CONFIG)
