"""Structured logging infrastructure for the API layer.

Provides JSON-formatted logging for production and human-readable
logging for development, plus a BookLogger helper for generation events.
Request content (child name, topic) is never logged.
"""

import json
import logging
import sys
from datetime import datetime, timezone

from .config import Settings

# Structured fields copied from LogRecord extras into the JSON output
EXTRA_FIELDS = (
    "request_id",
    "stage",
    "duration",
    "status_code",
    "error_type",
    "scene_count",
    "model",
)


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


HUMAN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# SDK loggers that echo every HTTP call at INFO
QUIET_LOGGERS = ("httpx", "google_genai")


def build_handler(settings: Settings) -> logging.Handler:
    """Stderr handler formatted per settings.log_json."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(settings.log_level_value)
    handler.setFormatter(JSONFormatter() if settings.log_json else logging.Formatter(HUMAN_FORMAT))
    return handler


def configure_logging(settings: Settings) -> None:
    """Route all application logging through one stderr handler."""
    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level_value)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.addHandler(build_handler(settings))

    if settings.log_level_value > logging.DEBUG:
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


class BookLogger:
    """Logger for book generation events with structured fields."""

    def __init__(self):
        self.logger = logging.getLogger("book_generation")

    def generation_started(self, request_id: str, model: str) -> None:
        self.logger.info(
            "Book generation started",
            extra={"request_id": request_id, "stage": "started", "model": model},
        )

    def generation_completed(self, request_id: str, duration: float, scene_count: int) -> None:
        self.logger.info(
            "Book generation completed",
            extra={
                "request_id": request_id,
                "stage": "completed",
                "duration": round(duration, 2),
                "scene_count": scene_count,
            },
        )

    def generation_failed(
        self, request_id: str, error: Exception, stage: str, status_code: int, exc_info: bool = False
    ) -> None:
        self.logger.error(
            f"Book generation failed: {error}",
            extra={
                "request_id": request_id,
                "stage": stage,
                "status_code": status_code,
                "error_type": type(error).__name__,
            },
            exc_info=exc_info,
        )

    def request_rejected(self, request_id: str, reason: str, status_code: int) -> None:
        self.logger.warning(
            f"Request rejected: {reason}",
            extra={"request_id": request_id, "stage": "rejected", "status_code": status_code},
        )


# Global book logger instance
book_logger = BookLogger()
