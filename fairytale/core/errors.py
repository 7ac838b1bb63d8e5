"""
Error taxonomy for the book generation pipeline.

Every error a caller can see maps to a stable JSON body with at least an
"error" key. The HTTP layer reads status_code and to_body() and never
invents messages of its own.
"""

from typing import Optional


class BookServiceError(Exception):
    """Base class for errors reported to the caller as a JSON body."""

    status_code: int = 500
    error: str = "Internal server error"

    def __init__(
        self,
        error: Optional[str] = None,
        *,
        details: Optional[str] = None,
        message: Optional[str] = None,
    ):
        if error is not None:
            self.error = error
        self.details = details
        self.message = message
        super().__init__(self.error)

    def to_body(self) -> dict:
        body = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        if self.message is not None:
            body["message"] = self.message
        return body


# =============================================================================
# Client-side errors (4xx)
# =============================================================================


class InvalidRequestError(BookServiceError):
    """Request body is missing, malformed, or out of bounds."""

    status_code = 400
    error = "Invalid request body"


class InvalidApiKeyError(BookServiceError):
    status_code = 401
    error = "Invalid API key"


class OriginNotAllowedError(BookServiceError):
    status_code = 403
    error = "Origin not allowed"


class MethodNotAllowedError(BookServiceError):
    status_code = 405
    error = "Method not allowed"


class RateLimitExceededError(BookServiceError):
    status_code = 429
    error = "Rate limit exceeded. Please try again later."

    def __init__(self, retry_after: int = 0):
        super().__init__()
        self.retry_after = retry_after


# =============================================================================
# Server-side errors (5xx)
# =============================================================================


class ConfigurationError(BookServiceError):
    """The backend credential is not configured."""

    status_code = 500
    error = "Service configuration error"


class UpstreamError(BookServiceError):
    """The generation backend answered, but with nothing usable."""

    status_code = 502
    error = "Bad response from AI model"


class EmptyModelResponseError(UpstreamError):
    error = "Empty response from AI model"


class MalformedModelResponseError(UpstreamError):
    error = "Failed to parse AI response"

    def __init__(self):
        super().__init__(details="Invalid JSON format")


class InvalidBookStructureError(UpstreamError):
    error = "Invalid book structure"


class GatewayTransportError(Exception):
    """The call to the generation backend failed outright.

    Not a BookServiceError: it is reported through the outer boundary
    like any other unexpected failure.
    """
