"""Main FastAPI application entry point."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager, suppress

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.exception_handlers import setup_exception_handlers
from api.middleware.request_context import RequestContextMiddleware
from api.routes.health import router as health_router
from api.v1 import router as v1_router
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import get_rate_limiter

logger = structlog.get_logger()

# Initialize structured logging
setup_logging()


async def rate_limit_cleanup_loop(interval_seconds: float) -> None:
    """Periodically purge expired rate limit buckets."""
    limiter = get_rate_limiter()
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            removed = limiter.cleanup_expired_entries()
            if removed > 0:
                logger.info(
                    "rate_limit_cleanup_completed",
                    removed_count=removed,
                    remaining_count=limiter.bucket_count,
                )
        except Exception:
            logger.exception("rate_limit_cleanup_failed")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager for startup/shutdown tasks."""
    cleanup_task = asyncio.create_task(
        rate_limit_cleanup_loop(settings.rate_limit_cleanup_interval_seconds)
    )
    yield
    cleanup_task.cancel()
    with suppress(asyncio.CancelledError):
        await cleanup_task


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        lifespan=lifespan,
        title=settings.app_name,
        description=(
            "## Personal Notes: Tag Sharing\n\n"
            "Notes are organised by tags. A tag's owner can share it with other "
            "registered users, who then get read access to its notes.\n\n"
            "### Authentication\n"
            "All endpoints (except `/health`) require a valid JWT token "
            "in the Authorization header:\n"
            "```\nAuthorization: Bearer <your_token>\n```\n\n"
            "### Rate Limits\n"
            "- POST /tags/{id}/access: 100 requests per client per 24 hours"
        ),
        version="1.0.0",
        debug=settings.debug,
        openapi_tags=[
            {
                "name": "health",
                "description": "Health check endpoints",
            },
            {
                "name": "tags",
                "description": "Tag management operations",
            },
            {
                "name": "tag-access",
                "description": "Sharing tags with other users",
            },
        ],
    )

    # Request tracking middleware
    app.add_middleware(RequestContextMiddleware)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Retry-After", "X-RateLimit-Limit", "X-RateLimit-Reset", "X-Request-ID"],
    )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Include routers
    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
