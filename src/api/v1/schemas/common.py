"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standardized error response."""

    error_code: str
    message: str
    details: Any | None = None


class RateLimitErrorResponse(BaseModel):
    """Body of a 429 response. Retry-After and X-RateLimit-* headers carry the same data."""

    error: str
    message: str
    retry_after_seconds: int
