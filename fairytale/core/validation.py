"""
Incoming request validation.

Rules are checked in order and the first failure wins; nothing is
accumulated and nothing about the request content is logged.
"""

import math
from typing import Any, Optional

from ..config import BOOK_CONSTANTS, get_default_model
from .errors import InvalidRequestError
from .types import GenerationRequest

MAX_NAME_LENGTH = BOOK_CONSTANTS["max_name_length"]
MAX_TOPIC_LENGTH = BOOK_CONSTANTS["max_topic_length"]
MIN_AGE = BOOK_CONSTANTS["min_age"]
MAX_AGE = BOOK_CONSTANTS["max_age"]
GENDERS = BOOK_CONSTANTS["genders"]


def _is_blank(value: Any) -> bool:
    return not value or not isinstance(value, str) or not value.strip()


def _coerce_age(value: Any) -> Optional[int]:
    """Return the age as an int, or None if it is not a whole number in range."""
    # bool is an int subclass; JSON true/false is not an age
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            return None
        value = int(value)
    if value < MIN_AGE or value > MAX_AGE:
        return None
    return value


def validate_request(body: Any, default_model: Optional[str] = None) -> GenerationRequest:
    """
    Validate a decoded JSON body and return a normalized request.

    Args:
        body: Whatever the JSON decoder produced
        default_model: Model used when the body omits one (falls back to
            the configured default)

    Returns:
        GenerationRequest with name/topic trimmed and model filled in

    Raises:
        InvalidRequestError: With a message naming the failed constraint
    """
    if not isinstance(body, dict):
        raise InvalidRequestError("Invalid request body")

    name = body.get("name")
    if _is_blank(name):
        raise InvalidRequestError("Name is required and must be a non-empty string")
    if len(name) > MAX_NAME_LENGTH:
        raise InvalidRequestError(f"Name must be at most {MAX_NAME_LENGTH} characters")

    age = _coerce_age(body.get("age"))
    if age is None:
        raise InvalidRequestError(f"Age must be between {MIN_AGE} and {MAX_AGE}")

    gender = body.get("gender")
    if not isinstance(gender, str) or gender not in GENDERS:
        raise InvalidRequestError('Gender must be "boy" or "girl"')

    topic = body.get("topic")
    if _is_blank(topic):
        raise InvalidRequestError("Topic is required and must be a non-empty string")
    if len(topic) > MAX_TOPIC_LENGTH:
        raise InvalidRequestError(f"Topic must be at most {MAX_TOPIC_LENGTH} characters")

    model = body.get("model")
    if model and (not isinstance(model, str) or not model.strip()):
        raise InvalidRequestError("Model must be a non-empty string")

    return GenerationRequest(
        name=name.strip(),
        age=age,
        gender=gender,
        topic=topic.strip(),
        model=model.strip() if model else (default_model or get_default_model()),
    )
