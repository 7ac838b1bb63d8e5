"""
Book extraction from raw model output.

The model is asked for bare JSON but often wraps it in a ```json fence.
Only a minimal shape is enforced here: a non-empty title and a non-empty
scenes list. Scene count and length are requested in the prompt but not
checked, since an external generator cannot be held to them strictly.
"""

import json
import math
import re

from .errors import InvalidBookStructureError, MalformedModelResponseError
from .types import Book

JSON_FENCE_PATTERN = re.compile(r"```json([\s\S]*?)```", re.IGNORECASE)


def _reject_constant(name: str) -> None:
    # NaN and Infinity are not JSON and cannot be rendered back into a response
    raise ValueError(f"Invalid JSON constant: {name}")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range: {text}")
    return value


def strip_json_fence(raw: str) -> str:
    """Return the interior of the first ```json fence, or the whole text if there is none."""
    match = JSON_FENCE_PATTERN.search(raw)
    text = match.group(1) if match else raw
    return text.strip()


def extract_book(raw: str) -> Book:
    """
    Parse and shape-check a model response.

    Args:
        raw: Text returned by the generation backend

    Returns:
        The parsed JSON object, unchanged

    Raises:
        MalformedModelResponseError: If the text is not valid JSON
        InvalidBookStructureError: If the title or scenes are missing or empty
    """
    try:
        parsed = json.loads(
            strip_json_fence(raw), parse_float=_finite_float, parse_constant=_reject_constant
        )
    except ValueError as e:
        raise MalformedModelResponseError() from e

    if not isinstance(parsed, dict):
        raise InvalidBookStructureError()

    title = parsed.get("bookTitle")
    if not isinstance(title, str) or not title:
        raise InvalidBookStructureError()

    scenes = parsed.get("scenes")
    if not isinstance(scenes, list) or not scenes:
        raise InvalidBookStructureError()

    return parsed
