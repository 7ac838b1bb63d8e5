"""Pydantic models for API requests.

The endpoint validates bodies itself (see core.validation) so that every
failure is a 400 with a specific message; this model documents the body
shape in the OpenAPI schema.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from ...config import BOOK_CONSTANTS


class GenerateBookRequest(BaseModel):
    """Request body for generating a fairy tale book."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=BOOK_CONSTANTS["max_name_length"],
        description="Child's name, used for the main character",
        examples=["Мария"],
    )
    age: int = Field(
        ...,
        ge=BOOK_CONSTANTS["min_age"],
        le=BOOK_CONSTANTS["max_age"],
        description="Child's age in years",
    )
    gender: Literal["boy", "girl"]
    topic: str = Field(
        ...,
        min_length=1,
        max_length=BOOK_CONSTANTS["max_topic_length"],
        description="Theme or setting of the story",
        examples=["море"],
    )
    model: Optional[str] = Field(
        default=None,
        description="Generation backend model ID (defaults to the configured model)",
    )
