"""CORS response headers for the book generation endpoint."""

ALLOW_METHODS = "POST, OPTIONS"
ALLOW_HEADERS = "Content-Type, X-API-Key"
MAX_AGE_SECONDS = 86400


def cors_headers(origin: str) -> dict[str, str]:
    """Headers attached to every response for an allowed origin."""
    headers = {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Methods": ALLOW_METHODS,
        "Access-Control-Allow-Headers": ALLOW_HEADERS,
        "Access-Control-Max-Age": str(MAX_AGE_SECONDS),
    }
    if origin != "*":
        # The echoed value depends on the request
        headers["Vary"] = "Origin"
    return headers
