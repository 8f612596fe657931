"""Item Schemas — Pydantic models for items entering the scheduler from outside.

Invariants:
    - FeedItem satisfies SchedulableItem: id, priority, created_at, activity_at
    - id is stripped and non-empty; timestamps are non-negative ms since epoch
    - FeedItem is frozen: the engine carries references and must never see them change
    - An item circulates only while active and unexpired: is_active_at(now)

Design Decisions:
    - Priority enum from core/ for the priority field: single source of truth
    - activity_at stored as a tuple: hashable, immutable, order preserved
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from feedqueue.core.domain_types import Priority


class FeedItem(BaseModel):
    """A schedulable record — the reference implementation of SchedulableItem."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1, max_length=200)
    priority: Priority
    created_at: float | None = Field(None, ge=0)
    activity_at: tuple[float, ...] = ()

    # Descriptive fields carried through for the consumer; ignored by the engine
    title: str = Field("", max_length=500)
    status: Literal["active", "answered", "archived"] = "active"
    expires_at: float | None = Field(None, ge=0)
    updated_at: float | None = Field(None, ge=0)

    @field_validator("id")
    @classmethod
    def strip_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("id cannot be empty or whitespace")
        return v

    @field_validator("activity_at")
    @classmethod
    def non_negative_activity(cls, v: tuple[float, ...]) -> tuple[float, ...]:
        if any(ts < 0 for ts in v):
            raise ValueError("activity timestamps must be >= 0")
        return v

    def is_active_at(self, now: float) -> bool:
        """Active and not yet expired at `now` (ms since epoch)."""
        return self.status == "active" and (self.expires_at is None or self.expires_at > now)
