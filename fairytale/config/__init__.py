"""
Configuration module for the Fairy Tale Book Generator.

Re-exports model and book constants.
"""

from .llm import (
    MODEL_CONSTANTS,
    get_genai_client,
    get_default_model,
    get_generation_config,
)
from .book import BOOK_CONSTANTS, RATE_LIMIT_CONSTANTS

__all__ = [
    # LLM
    "MODEL_CONSTANTS",
    "get_genai_client",
    "get_default_model",
    "get_generation_config",
    # Book
    "BOOK_CONSTANTS",
    "RATE_LIMIT_CONSTANTS",
]
