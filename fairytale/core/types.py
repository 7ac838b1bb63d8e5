"""
Centralized domain types for the Fairy Tale Book Generator.

All values here are request-scoped: they are built for one call,
never mutated, and never stored.
"""

from dataclasses import dataclass
from typing import Literal, Optional, TypedDict


Gender = Literal["boy", "girl"]


# =============================================================================
# Request Types
# =============================================================================


@dataclass(frozen=True)
class GenerationRequest:
    """A validated, normalized book generation request."""

    name: str  # Trimmed, 1-50 chars
    age: int  # 1-99 inclusive
    gender: Gender
    topic: str  # Trimmed, 1-1000 chars
    model: str  # Backend model identifier, defaulted when omitted

    def to_dict(self) -> dict:
        """Plain mapping form, accepted back by validate_request()."""
        return {
            "name": self.name,
            "age": self.age,
            "gender": self.gender,
            "topic": self.topic,
            "model": self.model,
        }


# =============================================================================
# Origin Types
# =============================================================================


@dataclass(frozen=True)
class OriginDecision:
    """Outcome of checking a request's Origin header against the allow-list."""

    allowed: bool
    origin: Optional[str] = None  # Value for Access-Control-Allow-Origin

    @classmethod
    def deny(cls) -> "OriginDecision":
        return cls(allowed=False, origin=None)


# =============================================================================
# Book Types
# =============================================================================


class Scene(TypedDict):
    """One page/illustration unit of the generated story."""

    text: str


class Book(TypedDict, total=False):
    """The parsed model output, relayed to the caller as-is.

    Only bookTitle and a non-empty scenes list are guaranteed after
    extraction; the remaining keys are whatever the model returned.
    """

    bookTitle: str
    shortDescription: str
    motivationEnd: str
    scenes: list[Scene]
