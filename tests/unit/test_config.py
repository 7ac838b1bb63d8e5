"""Unit tests for fairytale/config and fairytale/api/config.py."""

import logging

import pytest
from google import genai

from fairytale.api.config import Settings
from fairytale.config import (
    BOOK_CONSTANTS,
    MODEL_CONSTANTS,
    RATE_LIMIT_CONSTANTS,
    get_default_model,
    get_genai_client,
    get_generation_config,
)

ENV_VARS = (
    "GEMINI_API_KEY",
    "DEFAULT_MODEL",
    "ALLOWED_ORIGINS",
    "API_KEY",
    "ENFORCE_API_KEY",
    "RATE_LIMIT_ENABLED",
    "RATE_LIMIT_MAX_REQUESTS",
    "RATE_LIMIT_WINDOW_SECONDS",
    "TRUST_PROXY_HEADERS",
    "LOG_LEVEL",
    "LOG_JSON",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every setting from the environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# =============================================================================
# Model configuration
# =============================================================================


class TestModelConfig:

    def test_default_model(self):
        assert get_default_model() == "gemini-2.5-flash-lite"

    def test_generation_config_is_fixed(self):
        config = get_generation_config()
        assert config.temperature == MODEL_CONSTANTS["temperature"] == 0.9
        assert config.thinking_config.thinking_budget == 0

    def test_client_requires_key(self):
        with pytest.raises(ValueError):
            get_genai_client("")

    def test_client_built_from_key(self):
        assert isinstance(get_genai_client("test-key"), genai.Client)

    def test_book_bounds(self):
        assert BOOK_CONSTANTS["max_name_length"] == 50
        assert BOOK_CONSTANTS["max_topic_length"] == 1000
        assert (BOOK_CONSTANTS["min_age"], BOOK_CONSTANTS["max_age"]) == (1, 99)
        assert RATE_LIMIT_CONSTANTS == {"max_requests": 5, "window_seconds": 1800}


# =============================================================================
# Settings
# =============================================================================


class TestSettingsFromEnv:

    def test_defaults(self, clean_env):
        settings = Settings.from_env()

        assert settings.gemini_api_key is None
        assert settings.default_model == get_default_model()
        assert settings.allowed_origins is None
        assert settings.api_key is None
        assert settings.enforce_api_key is False
        assert settings.rate_limit_enabled is False
        assert settings.rate_limit_max_requests == 5
        assert settings.rate_limit_window_seconds == 1800
        assert settings.trust_proxy_headers is False
        assert settings.log_json is True

    def test_reads_values(self, clean_env):
        clean_env.setenv("GEMINI_API_KEY", "gem-key")
        clean_env.setenv("DEFAULT_MODEL", "gemini-2.5-flash")
        clean_env.setenv("ALLOWED_ORIGINS", "https://a.com, https://b.com")
        clean_env.setenv("API_KEY", "secret")
        clean_env.setenv("ENFORCE_API_KEY", "true")
        clean_env.setenv("RATE_LIMIT_ENABLED", "1")
        clean_env.setenv("RATE_LIMIT_MAX_REQUESTS", "10")
        clean_env.setenv("RATE_LIMIT_WINDOW_SECONDS", "60")
        clean_env.setenv("TRUST_PROXY_HEADERS", "on")
        clean_env.setenv("LOG_JSON", "no")

        settings = Settings.from_env()

        assert settings.gemini_api_key == "gem-key"
        assert settings.default_model == "gemini-2.5-flash"
        assert settings.allowed_origins == "https://a.com, https://b.com"
        assert settings.api_key_required is True
        assert settings.rate_limit_enabled is True
        assert settings.rate_limit_max_requests == 10
        assert settings.rate_limit_window_seconds == 60
        assert settings.trust_proxy_headers is True
        assert settings.log_json is False

    def test_blank_values_count_as_unset(self, clean_env):
        clean_env.setenv("GEMINI_API_KEY", "   ")
        clean_env.setenv("ALLOWED_ORIGINS", "")

        settings = Settings.from_env()

        assert settings.gemini_api_key is None
        assert settings.allowed_origins is None

    @pytest.mark.parametrize("value", ["1", "true", "TRUE", "yes", "On"])
    def test_truthy_booleans(self, clean_env, value):
        clean_env.setenv("RATE_LIMIT_ENABLED", value)
        assert Settings.from_env().rate_limit_enabled is True

    @pytest.mark.parametrize("value", ["0", "false", "off", "nope"])
    def test_falsy_booleans(self, clean_env, value):
        clean_env.setenv("RATE_LIMIT_ENABLED", value)
        assert Settings.from_env().rate_limit_enabled is False

    def test_invalid_integer_raises(self, clean_env):
        clean_env.setenv("RATE_LIMIT_MAX_REQUESTS", "many")
        with pytest.raises(ValueError, match="RATE_LIMIT_MAX_REQUESTS"):
            Settings.from_env()


class TestSettingsProperties:

    def test_api_key_not_required_unless_enforced(self):
        assert Settings(api_key="secret").api_key_required is False

    def test_enforcement_without_key_is_inactive(self):
        assert Settings(enforce_api_key=True).api_key_required is False

    def test_settings_are_immutable(self):
        settings = Settings()
        with pytest.raises(AttributeError):
            settings.gemini_api_key = "changed"

    def test_log_level_value(self):
        assert Settings(log_level="debug").log_level_value == logging.DEBUG
        assert Settings(log_level="bogus").log_level_value == logging.INFO
