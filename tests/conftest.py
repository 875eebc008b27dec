"""Shared pytest fixtures for mrwant tests."""

import pytest

from mrwant.config.constants import ENV_VAR_DEFINITIONS
from mrwant.config.settings import get_settings


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every Mr. Want variable so tests start from defaults."""
    for name in ENV_VAR_DEFINITIONS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()
