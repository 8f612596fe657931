"""Queue Config — tunable scheduling parameters and their eager validation.

Invariants:
    - priority_order holds each of the 4 required priorities exactly once
    - priority_weights and interleave_weights are finite and > 0 for every required priority
    - validate_queue_config runs before any cycle state is built (fail fast)

Design Decisions:
    - Frozen dataclass: a config is a value, shared freely between queues
    - Mapping keys normalized to Priority in __post_init__: callers may pass plain strings
    - Invalid priorities survive construction unchanged so validation can name them
"""

import math
from dataclasses import dataclass, field
from typing import Mapping

from feedqueue.core.domain_types import Priority, REQUIRED_PRIORITIES, coerce_priority
from feedqueue.core.errors import ConfigurationError


def _normalize_keys(weights: Mapping) -> dict:
    normalized = {}
    for key, value in dict(weights or {}).items():
        normalized[coerce_priority(key) or key] = value
    return normalized


@dataclass(frozen=True)
class QueueConfig:
    """Scheduling parameters — see DEFAULT_QUEUE_CONFIG for the shipped values."""

    priority_order: tuple = REQUIRED_PRIORITIES
    priority_weights: Mapping = field(default_factory=lambda: {
        Priority.URGENT: 100, Priority.HIGH: 70, Priority.MEDIUM: 40, Priority.LOW: 20,
    })
    recovery_days: Mapping = field(default_factory=lambda: {
        Priority.URGENT: 3, Priority.HIGH: 7, Priority.MEDIUM: 10, Priority.LOW: 14,
    })
    recency_min: float = 0.1
    recency_max: float = 2.0
    interleave_window: float = 0.4
    interleave_weights: Mapping = field(default_factory=lambda: {
        Priority.URGENT: 4, Priority.HIGH: 3, Priority.MEDIUM: 2, Priority.LOW: 1,
    })
    # Carried for compatibility with stored settings; scoring does not apply it.
    new_item_boost: float = 1.25
    max_run_length: int = 3

    def __post_init__(self):
        if isinstance(self.priority_order, (list, tuple)):
            object.__setattr__(self, "priority_order", tuple(
                coerce_priority(p) or p for p in self.priority_order
            ))
        for name in ("priority_weights", "recovery_days", "interleave_weights"):
            object.__setattr__(self, name, _normalize_keys(getattr(self, name)))

    def weight_for(self, priority: Priority) -> float:
        return self.priority_weights.get(priority) or 0

    def recovery_days_for(self, priority: Priority) -> float:
        return self.recovery_days.get(priority) or 0


DEFAULT_QUEUE_CONFIG = QueueConfig()


# ─── Validation ──────────────────────────────────────────────────

def _validate_priority_order(priority_order: object) -> None:
    if not isinstance(priority_order, (list, tuple)):
        raise ConfigurationError(
            "QueueConfig priority_order must be a list of priorities",
            "priority_order",
        )
    invalid = [str(p) for p in priority_order if coerce_priority(p) is None]
    if invalid:
        raise ConfigurationError(
            f"QueueConfig priority_order has invalid priorities: {', '.join(invalid)}",
            "priority_order",
        )
    missing = [p.value for p in REQUIRED_PRIORITIES if p not in priority_order]
    if missing:
        raise ConfigurationError(
            f"QueueConfig priority_order missing priorities: {', '.join(missing)}",
            "priority_order",
        )
    if len(set(priority_order)) != len(priority_order):
        raise ConfigurationError(
            "QueueConfig priority_order contains duplicate priorities",
            "priority_order",
        )


def _is_positive_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


def _validate_positive_weights(weights: Mapping, label: str) -> None:
    for priority in REQUIRED_PRIORITIES:
        if not _is_positive_number(weights.get(priority)):
            raise ConfigurationError(
                f"QueueConfig {label}.{priority.value} must be a positive number",
                f"{label}.{priority.value}",
            )


def validate_queue_config(config: QueueConfig) -> None:
    """Raise ConfigurationError on the first invalid field. Pure — no mutation."""
    _validate_priority_order(config.priority_order)
    _validate_positive_weights(config.priority_weights, "priority_weights")
    _validate_positive_weights(config.interleave_weights, "interleave_weights")
