"""Root conftest — shared test configuration."""

import pytest

from feedqueue.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are lru_cached per process — env overrides need a clean cache."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
