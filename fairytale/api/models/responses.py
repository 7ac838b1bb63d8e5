"""Pydantic models for API responses.

Successful responses are the model's parsed book object relayed as-is,
so BookResponse allows extra keys.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class SceneResponse(BaseModel):
    """One page of the book: text for a single illustration."""

    model_config = ConfigDict(extra="allow")

    text: str


class BookResponse(BaseModel):
    """A generated fairy tale book.

    The prompt asks for 14 scenes; only a non-empty scene list is guaranteed.
    """

    model_config = ConfigDict(extra="allow")

    bookTitle: str
    shortDescription: Optional[str] = None
    motivationEnd: Optional[str] = None
    scenes: list[SceneResponse]


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    error: str
    details: Optional[str] = None
    message: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
