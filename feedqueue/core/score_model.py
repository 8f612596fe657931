"""Score Model — priority weight times a recency multiplier, per item.

Invariants:
    - compute_score is PURE: same item, now, and config always give the same score
    - Never raises: missing weight scores 0, missing recovery window scores recency_max
    - An item with no activity has last activity 0 and gets the maximum multiplier

Design Decisions:
    - Time is a parameter (ms since epoch), never read from the clock here
"""

from typing import Sequence

from feedqueue.core.domain_types import MS_PER_DAY, coerce_priority
from feedqueue.core.queue_config import DEFAULT_QUEUE_CONFIG, QueueConfig


def last_activity_at(item) -> float:
    """Most recent activity timestamp, 0 when the item was never acted upon."""
    activity: Sequence[float] = getattr(item, "activity_at", None) or ()
    return max(activity) if activity else 0


def compute_days_since(last_activity: float | None, now: float) -> float:
    if last_activity is None:
        return 0.0
    return max(0.0, (now - last_activity) / MS_PER_DAY)


def compute_recency_scale(
    days_since: float, recovery_days: float, recency_min: float, recency_max: float,
) -> float:
    """Linear ramp from recency_min to recency_max over twice the recovery window."""
    if not recovery_days or recovery_days <= 0:
        return recency_max
    cap = recovery_days * 2
    ratio = min(days_since, cap) / cap
    return recency_min + ratio * (recency_max - recency_min)


def compute_score(item, now: float, config: QueueConfig = DEFAULT_QUEUE_CONFIG) -> float:
    priority = coerce_priority(item.priority)
    days_since = compute_days_since(last_activity_at(item), now)
    recency = compute_recency_scale(
        days_since, config.recovery_days_for(priority),
        config.recency_min, config.recency_max,
    )
    return config.weight_for(priority) * recency
