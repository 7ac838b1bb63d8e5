"""Book generation endpoint.

Every path is handled here: OPTIONS is a CORS preflight, POST generates
a book, anything else is 405. Each POST runs
origin -> API key -> rate limit -> validate -> prompt -> gateway -> extract,
and every failure is a JSON body with at least an "error" key.
"""

import secrets
import time
import uuid
from typing import Any, Optional

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse

from ...core.errors import (
    BookServiceError,
    ConfigurationError,
    InvalidApiKeyError,
    InvalidRequestError,
    MethodNotAllowedError,
    OriginNotAllowedError,
    RateLimitExceededError,
)
from ...core.extraction import extract_book
from ...core.gateway import ModelGateway
from ...core.origin import check_origin
from ...core.prompt import build_prompt
from ...core.rate_limit import SlidingWindowRateLimiter
from ...core.validation import validate_request
from ..config import Settings
from ..cors import cors_headers
from ..dependencies import AppSettings, Gateway, RateLimiter
from ..logging import book_logger
from ..models import BookResponse, ErrorResponse, GenerateBookRequest

router = APIRouter()

REJECTED_METHODS = ["GET", "HEAD", "PUT", "PATCH", "DELETE"]


def json_response(data: Any, status_code: int = 200, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(content=data, status_code=status_code, headers=headers or {})


def source_address(request: Request, trust_proxy_headers: bool = False) -> str:
    """
    Client address for rate limiting.

    CF-Connecting-IP and X-Forwarded-For are set by the client unless a
    proxy overwrites them, so they are only read when trust_proxy_headers is on.
    """
    if not trust_proxy_headers:
        return _peer_address(request)

    connecting_ip = request.headers.get("cf-connecting-ip")
    if connecting_ip:
        return connecting_ip.strip()

    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    return _peer_address(request)


def _peer_address(request: Request) -> str:
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def rate_limit_headers(rate_limiter: SlidingWindowRateLimiter) -> dict[str, str]:
    return {
        "X-RateLimit-Limit": str(rate_limiter.max_requests),
        "X-RateLimit-Window": f"{rate_limiter.window_seconds}s",
    }


async def read_json_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        raise InvalidRequestError("Invalid request body") from e


def preflight(request: Request, settings: Settings) -> Response:
    """Answer a CORS preflight."""
    decision = check_origin(request.headers.get("origin"), settings.allowed_origins)
    if not decision.allowed:
        return json_response(OriginNotAllowedError().to_body(), status.HTTP_403_FORBIDDEN)

    return Response(status_code=status.HTTP_204_NO_CONTENT, headers=cors_headers(decision.origin))


async def generate_book(
    request: Request,
    settings: Settings,
    gateway: ModelGateway,
    rate_limiter: Optional[SlidingWindowRateLimiter],
) -> JSONResponse:
    """Run the generation pipeline for one POST."""
    request_id = uuid.uuid4().hex

    decision = check_origin(request.headers.get("origin"), settings.allowed_origins)
    if not decision.allowed:
        # Denials carry no CORS headers
        book_logger.request_rejected(request_id, "origin not allowed", status.HTTP_403_FORBIDDEN)
        return json_response(OriginNotAllowedError().to_body(), status.HTTP_403_FORBIDDEN)

    headers = cors_headers(decision.origin)
    headers["X-Request-ID"] = request_id
    stage = "authorize"

    try:
        if settings.api_key_required and not secrets.compare_digest(
            request.headers.get("x-api-key", "").encode(), settings.api_key.encode()
        ):
            raise InvalidApiKeyError()

        if rate_limiter is not None:
            headers.update(rate_limit_headers(rate_limiter))
            limit = rate_limiter.check(source_address(request, settings.trust_proxy_headers))
            if not limit.allowed:
                headers["Retry-After"] = str(limit.retry_after)
                raise RateLimitExceededError(limit.retry_after)

        stage = "validate"
        body = await read_json_body(request)
        generation_request = validate_request(body, settings.default_model)

        stage = "configure"
        if not settings.gemini_api_key:
            raise ConfigurationError()

        stage = "generate"
        book_logger.generation_started(request_id, generation_request.model)
        started_at = time.monotonic()
        prompt = build_prompt(generation_request)
        raw = await gateway.generate(prompt, generation_request.model, settings.gemini_api_key)

        stage = "extract"
        book = extract_book(raw)

    except BookServiceError as e:
        if e.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            book_logger.generation_failed(request_id, e, stage, e.status_code)
        else:
            book_logger.request_rejected(request_id, e.error, e.status_code)
        return json_response(e.to_body(), e.status_code, headers)

    except Exception as e:
        book_logger.generation_failed(
            request_id, e, stage, status.HTTP_500_INTERNAL_SERVER_ERROR, exc_info=True
        )
        return json_response(
            {"error": "Internal server error", "message": str(e) or "Unknown error"},
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            headers,
        )

    book_logger.generation_completed(request_id, time.monotonic() - started_at, len(book["scenes"]))
    return json_response(book, status.HTTP_200_OK, headers)



@router.options(
    "/{path:path}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="CORS preflight",
    responses={403: {"model": ErrorResponse, "description": "Origin not allowed"}},
)
async def handle_preflight(request: Request, settings: AppSettings) -> Response:
    return preflight(request, settings)


@router.post(
    "/{path:path}",
    summary="Generate a fairy tale book",
    description=(
        "POST a child's name, age, gender and a topic to receive a 14-scene "
        "illustrated-book story as JSON. The body is the book itself, with no envelope."
    ),
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": GenerateBookRequest.model_json_schema()}},
        }
    },
    responses={
        200: {"model": BookResponse, "description": "The generated book"},
        400: {"model": ErrorResponse, "description": "Invalid request"},
        401: {"model": ErrorResponse, "description": "Invalid API key"},
        403: {"model": ErrorResponse, "description": "Origin not allowed"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
        500: {"model": ErrorResponse, "description": "Configuration or internal error"},
        502: {"model": ErrorResponse, "description": "Unusable response from the AI model"},
    },
)
async def handle_generate(
    request: Request,
    settings: AppSettings,
    gateway: Gateway,
    rate_limiter: RateLimiter,
) -> Response:
    return await generate_book(request, settings, gateway, rate_limiter)


@router.api_route("/{path:path}", methods=REJECTED_METHODS, include_in_schema=False)
async def handle_other_methods() -> Response:
    return json_response(MethodNotAllowedError().to_body(), status.HTTP_405_METHOD_NOT_ALLOWED)
