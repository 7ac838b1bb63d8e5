# Fairy Tale Book Generator - Core Pipeline

from .types import Book, GenerationRequest, OriginDecision, Scene
from .errors import (
    BookServiceError,
    ConfigurationError,
    EmptyModelResponseError,
    GatewayTransportError,
    InvalidBookStructureError,
    InvalidRequestError,
    MalformedModelResponseError,
    OriginNotAllowedError,
)
from .validation import validate_request
from .origin import check_origin
from .prompt import build_prompt
from .extraction import extract_book
from .gateway import GeminiGateway, ModelGateway
from .rate_limit import RateLimitDecision, SlidingWindowRateLimiter

__all__ = [
    "Book",
    "GenerationRequest",
    "OriginDecision",
    "Scene",
    "BookServiceError",
    "ConfigurationError",
    "EmptyModelResponseError",
    "GatewayTransportError",
    "InvalidBookStructureError",
    "InvalidRequestError",
    "MalformedModelResponseError",
    "OriginNotAllowedError",
    "validate_request",
    "check_origin",
    "build_prompt",
    "extract_book",
    "GeminiGateway",
    "ModelGateway",
    "RateLimitDecision",
    "SlidingWindowRateLimiter",
]
