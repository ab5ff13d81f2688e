"""Tests for configuration."""

import pytest
from pydantic import ValidationError

from ragcore.config import Settings, get_settings
from ragcore.models import ExpanderConfig


class TestExpanderConfig:
    """Test expander configuration."""

    def test_defaults(self):
        config = ExpanderConfig()

        assert config.model == "llama2"
        assert config.url == "http://localhost:11434"
        assert config.num_variations == 3
        assert config.timeout == 120.0

    @pytest.mark.parametrize("requested, expected", [
        (0, 2),
        (1, 2),
        (2, 2),
        (4, 4),
        (5, 5),
        (10, 5),
        (-3, 2),
    ])
    def test_num_variations_is_clamped(self, requested, expected):
        assert ExpanderConfig(num_variations=requested).num_variations == expected

    def test_is_immutable(self):
        config = ExpanderConfig()

        with pytest.raises(ValidationError):
            config.num_variations = 4

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            ExpanderConfig(timeout=0)


class TestSettings:
    """Test settings loading."""

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("OLLAMA_MODEL", "mistral")
        monkeypatch.setenv("NUM_VARIATIONS", "9")
        monkeypatch.setenv("DEBUG", "true")

        settings = Settings()

        assert settings.ollama_model == "mistral"
        assert settings.debug is True
        assert settings.expander_config().num_variations == 5

    def test_expander_config(self):
        settings = Settings(
            ollama_model="phi3",
            ollama_url="http://gpu-box:11434",
            num_variations=4,
            expansion_timeout=15,
        )

        config = settings.expander_config()

        assert config == ExpanderConfig(model="phi3", url="http://gpu-box:11434", num_variations=4, timeout=15)

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()
