"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from core.config import settings
from core.rate_limit import get_rate_limiter
from domain.services.rate_limiter import RateLimiter

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
    environment: str
    rate_limit_buckets: int


@router.get("/health", response_model=HealthResponse, summary="Basic health check")
async def health_check(
    limiter: RateLimiter = Depends(get_rate_limiter),
) -> HealthResponse:
    """
    Health check for load balancers.

    Reports how many rate limit buckets are held in memory, which grows with
    distinct clients until the periodic cleanup runs.
    """
    return HealthResponse(
        status="healthy",
        version="1.0.0",
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.app_env,
        rate_limit_buckets=limiter.bucket_count,
    )
