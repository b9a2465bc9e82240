"""HTTP wiring for the fixed-window rate limiter.

The limiter itself only returns decisions. This module turns a client
request into a limiter key, turns a rejection into the 429 wire response,
and exposes the FastAPI dependency that guards sensitive endpoints.
"""

import time
from functools import lru_cache

import structlog
from fastapi import Depends, Request
from fastapi.responses import JSONResponse

from core.config import settings
from domain.services.rate_limiter import RateLimiter
from infrastructure.rate_limit.memory_store import InMemoryRateLimitStore

logger = structlog.get_logger()

UNKNOWN_CLIENT_KEY = "unknown"


class RateLimitExceeded(Exception):
    """Raised by the HTTP guard when a client's window is saturated."""

    def __init__(self, retry_after: int, limit: int) -> None:
        self.retry_after = retry_after
        self.limit = limit
        super().__init__(f"Rate limit exceeded, retry after {retry_after}s")


@lru_cache
def get_rate_limiter() -> RateLimiter:
    """Get the process-wide rate limiter."""
    return RateLimiter(InMemoryRateLimitStore())


def get_client_ip(request: Request) -> str:
    """Derive the rate limit key for a request.

    First address of ``X-Forwarded-For``, else ``X-Real-IP``, else a single
    shared ``"unknown"`` bucket.
    """
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()

    return UNKNOWN_CLIENT_KEY


def create_rate_limit_response(
    retry_after: int,
    limit: int,
    now: float | None = None,
) -> JSONResponse:
    """Build the 429 response sent to rejected clients."""
    now = time.time() if now is None else now
    reset_at_ms = int(now * 1000) + retry_after * 1000
    return JSONResponse(
        status_code=429,
        content={
            "error": "Rate limit exceeded",
            "message": f"Too many requests. Try again in {retry_after} seconds",
            "retry_after_seconds": retry_after,
        },
        headers={
            "Retry-After": str(retry_after),
            "X-RateLimit-Limit": str(limit),
            "X-RateLimit-Reset": str(reset_at_ms),
        },
    )


async def rate_limit_exceeded_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle rate limit exceeded errors."""
    if isinstance(exc, RateLimitExceeded):
        return create_rate_limit_response(exc.retry_after, exc.limit)
    return create_rate_limit_response(0, get_rate_limiter().limit)


async def enforce_rate_limit(
    request: Request,
    limiter: RateLimiter = Depends(get_rate_limiter),
) -> None:
    """FastAPI dependency counting the request against the client's window.

    Raises:
        RateLimitExceeded: When the client has used up its window.
    """
    if not settings.rate_limit_enabled:
        return

    key = get_client_ip(request)
    decision = limiter.check_rate_limit(key)
    if decision.allowed:
        request.state.rate_limit_remaining = decision.remaining
        return

    retry_after = decision.retry_after or 0
    logger.warning(
        "rate_limit_exceeded",
        client_ip=key,
        limit=limiter.limit,
        retry_after_s=retry_after,
    )
    raise RateLimitExceeded(retry_after=retry_after, limit=limiter.limit)
