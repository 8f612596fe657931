"""Settings — tests for env-driven configuration and QueueConfig construction.

Tests cover:
    - Defaults mirror DEFAULT_QUEUE_CONFIG
    - FEEDQUEUE_* env overrides (scalars and JSON mappings)
    - Pydantic range checks on interleave_window / max_run_length
    - build_queue_config raises ConfigurationError for invalid overrides
    - get_settings caching
"""

import pytest
from pydantic import ValidationError

from feedqueue.config import Settings, build_queue_config, get_settings
from feedqueue.core.domain_types import Priority
from feedqueue.core.errors import ConfigurationError
from feedqueue.core.queue_config import DEFAULT_QUEUE_CONFIG


def test_default_settings_build_default_config():
    assert build_queue_config(Settings()) == DEFAULT_QUEUE_CONFIG


def test_default_observability_settings():
    settings = Settings()
    assert settings.log_level == "INFO"
    assert settings.log_format == "json"


def test_scalar_env_override(monkeypatch):
    monkeypatch.setenv("FEEDQUEUE_MAX_RUN_LENGTH", "2")
    monkeypatch.setenv("FEEDQUEUE_INTERLEAVE_WINDOW", "0.25")
    config = build_queue_config(Settings())
    assert config.max_run_length == 2
    assert config.interleave_window == 0.25


def test_mapping_env_override(monkeypatch):
    monkeypatch.setenv(
        "FEEDQUEUE_PRIORITY_WEIGHTS",
        '{"urgent": 90, "high": 60, "medium": 30, "low": 10}',
    )
    config = build_queue_config(Settings())
    assert config.priority_weights[Priority.URGENT] == 90
    assert config.priority_weights[Priority.LOW] == 10


def test_zero_weight_override_rejected(monkeypatch):
    monkeypatch.setenv(
        "FEEDQUEUE_PRIORITY_WEIGHTS",
        '{"urgent": 100, "high": 70, "medium": 40, "low": 0}',
    )
    with pytest.raises(ConfigurationError) as exc:
        build_queue_config(Settings())
    assert exc.value.field == "priority_weights.low"


def test_incomplete_priority_order_rejected(monkeypatch):
    monkeypatch.setenv("FEEDQUEUE_PRIORITY_ORDER", '["urgent", "high", "medium"]')
    with pytest.raises(ConfigurationError, match="low"):
        build_queue_config(Settings())


@pytest.mark.parametrize("window", ["-0.1", "1.5"])
def test_interleave_window_out_of_range(monkeypatch, window):
    monkeypatch.setenv("FEEDQUEUE_INTERLEAVE_WINDOW", window)
    with pytest.raises(ValidationError):
        Settings()


def test_max_run_length_must_be_positive(monkeypatch):
    monkeypatch.setenv("FEEDQUEUE_MAX_RUN_LENGTH", "0")
    with pytest.raises(ValidationError):
        Settings()


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
