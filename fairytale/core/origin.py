"""
Cross-origin policy.

With no allow-list configured every origin is accepted. That is a
permissive default for development and simple embeds, not a security
boundary: browsers enforce CORS, other clients ignore it entirely.
"""

from typing import Optional

from .types import OriginDecision

WILDCARD_ORIGIN = "*"


def parse_allow_list(allow_list: Optional[str]) -> list[str]:
    """Split a comma-separated allow-list into trimmed, non-empty entries."""
    if not allow_list:
        return []
    return [entry.strip() for entry in allow_list.split(",") if entry.strip()]


def check_origin(request_origin: Optional[str], allow_list: Optional[str]) -> OriginDecision:
    """
    Decide whether a request's Origin header is permitted.

    Args:
        request_origin: Value of the Origin header, or None if absent
        allow_list: Comma-separated allowed origins, or None/empty for
            the permissive default

    Returns:
        OriginDecision. Allowed decisions carry the origin to echo back
        (the request's own, or "*" when it sent none); denied decisions
        carry no origin.
    """
    if not allow_list:
        return OriginDecision(allowed=True, origin=request_origin or WILDCARD_ORIGIN)

    if request_origin and request_origin in parse_allow_list(allow_list):
        return OriginDecision(allowed=True, origin=request_origin)

    return OriginDecision.deny()
