"""Pydantic models for API requests and responses."""

from .requests import GenerateBookRequest
from .responses import BookResponse, ErrorResponse, HealthResponse, SceneResponse

__all__ = [
    "GenerateBookRequest",
    "BookResponse",
    "ErrorResponse",
    "HealthResponse",
    "SceneResponse",
]
