"""Feed Service — imperative shell around one QueueState.

Invariants:
    - The pool is re-read from the ItemSource on every call that may build a cycle
    - The clock is only read here and passed into the core as `now`
    - Every mutation is logged with queue fields; cycle rollover logged at INFO
    - ConfigurationError is logged and re-raised unchanged (fatal)

Design Decisions:
    - Thin wrapper: all scheduling decisions stay in core/queue_engine (functional core,
      imperative shell)
    - navigate_to validates the index: the core trusts its caller, the shell does not
"""

import logging

from feedqueue.config import build_queue_config, get_settings
from feedqueue.core.errors import ConfigurationError, QueueIndexError
from feedqueue.core.item_protocols import Clock, ItemSource
from feedqueue.core.progress_window import ProgressDot, build_progress_dots
from feedqueue.core.queue_config import QueueConfig
from feedqueue.core.queue_engine import (
    insert_request, load_more, navigate_to_index, next_card, previous_card,
    remove_request_from_queue, reset_feed, wall_clock_ms,
)
from feedqueue.core.queue_state import (
    QueueItem, can_go_next, can_go_previous, create_queue_state, get_current_item,
)

logger = logging.getLogger(__name__)


class FeedService:
    """Owns one feed's navigation state and drives the scheduling core."""

    def __init__(
        self,
        source: ItemSource,
        *,
        clock: Clock | None = None,
        config: QueueConfig | None = None,
    ):
        self.source = source
        self.clock = clock or wall_clock_ms
        self.config = config or build_queue_config(get_settings())
        self.state = create_queue_state()

    # --- Read side -------------------------------------------------------------

    @property
    def render_queue(self) -> list[QueueItem]:
        return self.state.render_queue

    @property
    def current_index(self) -> int:
        return self.state.current_index

    @property
    def cycle_count(self) -> int:
        return self.state.cycle_count

    @property
    def current_item(self) -> QueueItem | None:
        return get_current_item(self.state)

    @property
    def can_go_previous(self) -> bool:
        return can_go_previous(self.state)

    @property
    def can_go_next(self) -> bool:
        return can_go_next(self.state)

    @property
    def progress_dots(self) -> list[ProgressDot]:
        return build_progress_dots(self.state)

    # --- Transitions -----------------------------------------------------------

    def reset(self) -> None:
        self._run(reset_feed, "Feed reset", cycle_before=0)

    def load_more(self) -> int:
        appended = self._run(load_more, "Loaded more items")
        if not appended:
            logger.debug("Nothing to schedule", extra=self._fields())
        return appended

    def next(self) -> None:
        self._run(next_card, "Advanced to next item")

    def previous(self) -> None:
        previous_card(self.state)
        logger.debug("Moved to previous item", extra=self._fields())

    def navigate_to(self, index: int) -> None:
        if not 0 <= index < len(self.state.render_queue):
            raise QueueIndexError(index, len(self.state.render_queue))
        self._run(
            lambda state, pool, **opts: navigate_to_index(state, index, pool, **opts),
            "Navigated to index",
        )

    def remove(self, item_id: str) -> None:
        remove_request_from_queue(self.state, item_id)
        logger.info("Item removed from feed", extra={**self._fields(), "item_id": item_id})

    def insert(self, item) -> None:
        insert_request(self.state, item)
        logger.info("Item inserted into feed", extra={**self._fields(), "item_id": item.id})

    # --- Helpers ---------------------------------------------------------------

    def _run(self, transition, message: str, cycle_before: int | None = None):
        """Apply a pool-reading transition, logging rollover and config failures."""
        pool = list(self.source.active_items())
        if cycle_before is None:
            cycle_before = self.state.cycle_count
        try:
            result = transition(self.state, pool, now=self.clock, config=self.config)
        except ConfigurationError as e:
            logger.error(
                f"Queue configuration rejected: {e.message}",
                extra={"error_code": e.code, "field": e.field},
            )
            raise
        if self.state.cycle_count > cycle_before:
            logger.info("Started new cycle", extra=self._fields())
        logger.debug(message, extra=self._fields())
        return result

    def _fields(self) -> dict:
        current = get_current_item(self.state)
        fields = {
            "cycle": self.state.cycle_count,
            "current_index": self.state.current_index,
            "queue_length": len(self.state.render_queue),
        }
        if current is not None:
            fields["item_id"] = current.item.id
        return fields
