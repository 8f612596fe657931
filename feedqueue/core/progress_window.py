"""Progress Window — the 7-slot position indicator derived from a QueueState.

Invariants:
    - Always exactly 7 dots: slot 0 (left overflow), slots 1-5 (window), slot 6 (right overflow)
    - The window starts 2 behind the cursor and is shifted left when it would pass the tail
    - A loop point is index 0 or any index whose cycle differs from its predecessor
    - Pure: reads the state, never mutates it
"""

from dataclasses import dataclass

from feedqueue.core.domain_types import PROGRESS_VISIBLE_DOTS
from feedqueue.core.queue_state import QueueState


@dataclass(frozen=True)
class ProgressDot:
    slot: int
    index: int | None
    is_before_queue_start: bool = False
    is_after_queue_end: bool = False
    is_current: bool = False
    is_loop_point: bool = False
    is_placeholder: bool = False


def is_loop_point(state: QueueState, index: int) -> bool:
    if index <= 0:
        return True
    if index >= len(state.render_queue):
        return False
    return state.render_queue[index].cycle != state.render_queue[index - 1].cycle


def _window_bounds(current_index: int, total: int) -> tuple[int, int]:
    start = max(0, current_index - 2)
    end = start + PROGRESS_VISIBLE_DOTS
    if end > total:
        end = total
        start = max(0, end - PROGRESS_VISIBLE_DOTS)
    return start, end


def build_progress_dots(state: QueueState) -> list[ProgressDot]:
    total = len(state.render_queue)
    start, end = _window_bounds(state.current_index, total)
    has_left_overflow = start > 0
    has_right_overflow = end < total

    dots = [ProgressDot(
        slot=0,
        index=None,
        is_before_queue_start=not has_left_overflow,
        is_loop_point=has_left_overflow and is_loop_point(state, start - 1),
        is_placeholder=not has_left_overflow,
    )]

    for offset in range(PROGRESS_VISIBLE_DOTS):
        index = start + offset
        if index < end:
            dots.append(ProgressDot(
                slot=offset + 1,
                index=index,
                is_current=index == state.current_index,
                is_loop_point=is_loop_point(state, index),
            ))
        else:
            dots.append(ProgressDot(slot=offset + 1, index=None, is_placeholder=True))

    dots.append(ProgressDot(
        slot=PROGRESS_VISIBLE_DOTS + 1,
        index=None,
        is_after_queue_end=not has_right_overflow,
        is_loop_point=has_right_overflow and is_loop_point(state, end),
    ))
    return dots
