"""Shared fixtures."""

import pytest
import structlog

from ragcore.config import get_settings
from ragcore.service import get_embedding_generator, get_query_expander


@pytest.fixture
def reset_structlog():
    """Restore structlog's default configuration after the test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def fresh_settings(monkeypatch, reset_structlog):
    """Rebuild settings and shared components from the current environment."""
    monkeypatch.setenv("EMBEDDING_BACKEND", "features")
    monkeypatch.setenv("OLLAMA_BINARY", "ollama-binary-that-does-not-exist")

    def clear():
        get_settings.cache_clear()
        get_embedding_generator.cache_clear()
        get_query_expander.cache_clear()

    clear()
    yield monkeypatch
    clear()
