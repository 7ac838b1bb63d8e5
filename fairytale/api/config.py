"""API configuration.

Single source of truth for settings used across the API layer. Values are
read from the environment (and a .env file, if present) once per process
and never change afterwards.
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from ..config import RATE_LIMIT_CONSTANTS, get_default_model

# Load .env from project root (find_dotenv searches parent directories)
load_dotenv(find_dotenv())

TRUTHY_VALUES = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in TRUTHY_VALUES


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}")


def _env_str(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration for the book generation endpoint."""

    # Generation backend
    gemini_api_key: Optional[str] = None
    default_model: str = get_default_model()

    # Cross-origin policy: None means every origin is allowed
    allowed_origins: Optional[str] = None

    # Optional static API key, checked against X-API-Key when enforced
    api_key: Optional[str] = None
    enforce_api_key: bool = False

    # Per-source rate limiting
    rate_limit_enabled: bool = False
    rate_limit_max_requests: int = RATE_LIMIT_CONSTANTS["max_requests"]
    rate_limit_window_seconds: int = RATE_LIMIT_CONSTANTS["window_seconds"]
    # Key rate limits on CF-Connecting-IP / X-Forwarded-For; only safe behind a proxy that sets them
    trust_proxy_headers: bool = False

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    @property
    def api_key_required(self) -> bool:
        """Whether the X-API-Key check is active."""
        return self.enforce_api_key and bool(self.api_key)

    @property
    def log_level_value(self) -> int:
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.INFO

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        return cls(
            gemini_api_key=_env_str("GEMINI_API_KEY"),
            default_model=_env_str("DEFAULT_MODEL") or get_default_model(),
            allowed_origins=_env_str("ALLOWED_ORIGINS"),
            api_key=_env_str("API_KEY"),
            enforce_api_key=_env_bool("ENFORCE_API_KEY"),
            rate_limit_enabled=_env_bool("RATE_LIMIT_ENABLED"),
            rate_limit_max_requests=_env_int(
                "RATE_LIMIT_MAX_REQUESTS", RATE_LIMIT_CONSTANTS["max_requests"]
            ),
            rate_limit_window_seconds=_env_int(
                "RATE_LIMIT_WINDOW_SECONDS", RATE_LIMIT_CONSTANTS["window_seconds"]
            ),
            trust_proxy_headers=_env_bool("TRUST_PROXY_HEADERS"),
            log_level=_env_str("LOG_LEVEL") or "INFO",
            log_json=_env_bool("LOG_JSON", default=True),
        )


@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings, read on first use."""
    return Settings.from_env()
