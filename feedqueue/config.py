"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every QueueConfig parameter can be overridden with a FEEDQUEUE_* env var
    - get_settings() is cached (lru_cache) — single instance per process
    - build_queue_config() validates eagerly: a bad override fails at startup, not mid-feed

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Mapping fields parsed from JSON env values, e.g. FEEDQUEUE_PRIORITY_WEIGHTS='{"urgent": 90, ...}'
    - Defaults mirror DEFAULT_QUEUE_CONFIG: works out-of-the-box with no environment
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from feedqueue.core.queue_config import DEFAULT_QUEUE_CONFIG, QueueConfig, validate_queue_config


def _default_mapping(name: str) -> dict[str, float]:
    return {p.value: w for p, w in getattr(DEFAULT_QUEUE_CONFIG, name).items()}


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="FEEDQUEUE_", case_sensitive=False, extra="ignore",
    )

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    # Scheduling
    priority_order: list[str] = Field(
        default_factory=lambda: [p.value for p in DEFAULT_QUEUE_CONFIG.priority_order],
    )
    priority_weights: dict[str, float] = Field(
        default_factory=lambda: _default_mapping("priority_weights"),
    )
    recovery_days: dict[str, float] = Field(
        default_factory=lambda: _default_mapping("recovery_days"),
    )
    recency_min: float = DEFAULT_QUEUE_CONFIG.recency_min
    recency_max: float = DEFAULT_QUEUE_CONFIG.recency_max
    interleave_window: float = Field(DEFAULT_QUEUE_CONFIG.interleave_window, ge=0, le=1)
    interleave_weights: dict[str, float] = Field(
        default_factory=lambda: _default_mapping("interleave_weights"),
    )
    new_item_boost: float = DEFAULT_QUEUE_CONFIG.new_item_boost
    max_run_length: int = Field(DEFAULT_QUEUE_CONFIG.max_run_length, ge=1)


def build_queue_config(settings: Settings) -> QueueConfig:
    """Convert settings into a validated QueueConfig. Raises ConfigurationError."""
    config = QueueConfig(
        priority_order=tuple(settings.priority_order),
        priority_weights=settings.priority_weights,
        recovery_days=settings.recovery_days,
        recency_min=settings.recency_min,
        recency_max=settings.recency_max,
        interleave_window=settings.interleave_window,
        interleave_weights=settings.interleave_weights,
        new_item_boost=settings.new_item_boost,
        max_run_length=settings.max_run_length,
    )
    validate_queue_config(config)
    return config


@lru_cache
def get_settings() -> Settings:
    return Settings()
