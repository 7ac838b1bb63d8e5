"""FastAPI application for the Fairy Tale Book Generator."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import get_settings
from .logging import configure_logging
from .models import HealthResponse
from .routes import books

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - configure logging and report configuration gaps."""
    settings = get_settings()
    configure_logging(settings)

    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY not set - generation requests will fail with 500")
    if not settings.allowed_origins:
        logger.warning("ALLOWED_ORIGINS not set - all origins are allowed")
    if settings.enforce_api_key and not settings.api_key:
        logger.warning("ENFORCE_API_KEY set without API_KEY - API key check is inactive")
    if settings.rate_limit_enabled:
        logger.info(
            f"Rate limiting enabled: {settings.rate_limit_max_requests} requests "
            f"per {settings.rate_limit_window_seconds}s"
        )

    yield


app = FastAPI(
    title="Fairy Tale Book Generator API",
    description="""
Generate personalized children's fairy tales ready to be laid out as an illustrated book.

## Workflow
1. POST a child's `name`, `age`, `gender` and a `topic`
2. Receive the book as JSON: a title, two short motivational quotes and 14 scenes

Cross-origin access is governed by `ALLOWED_ORIGINS`; without it every origin is allowed.
    """,
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors with the same "error" key as the endpoint."""
    if exc.status_code == 405:
        error = "Method not allowed"
    else:
        error = str(exc.detail)
    return JSONResponse({"error": error}, status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort JSON 500 for failures outside the endpoint's own boundary."""
    logger.error(f"Unhandled error: {exc}", exc_info=exc)
    return JSONResponse(
        {"error": "Internal server error", "message": str(exc) or "Unknown error"},
        status_code=500,
    )


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Catch-all book routes last so /health and the docs take precedence
app.include_router(books.router, tags=["Books"])
