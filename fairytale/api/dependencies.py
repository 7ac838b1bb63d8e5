"""FastAPI dependency injection for settings, the model gateway and rate limiting."""

from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends

from ..core.gateway import GeminiGateway, ModelGateway
from ..core.rate_limit import SlidingWindowRateLimiter
from .config import Settings, get_settings


# Settings - read once per process
AppSettings = Annotated[Settings, Depends(get_settings)]


# Gateway - stateless, one per process
@lru_cache
def get_gateway() -> ModelGateway:
    """Get the production Gemini gateway."""
    return GeminiGateway()


@lru_cache
def _build_rate_limiter(max_requests: int, window_seconds: int) -> SlidingWindowRateLimiter:
    return SlidingWindowRateLimiter(max_requests=max_requests, window_seconds=window_seconds)


# Rate limiter - shared across requests, None when disabled
def get_rate_limiter(settings: AppSettings) -> Optional[SlidingWindowRateLimiter]:
    """Get the process-wide rate limiter, or None if rate limiting is off."""
    if not settings.rate_limit_enabled:
        return None
    return _build_rate_limiter(
        settings.rate_limit_max_requests, settings.rate_limit_window_seconds
    )


# Type aliases for cleaner route signatures
Gateway = Annotated[ModelGateway, Depends(get_gateway)]
RateLimiter = Annotated[Optional[SlidingWindowRateLimiter], Depends(get_rate_limiter)]
