"""Grant Intake - Main Application.

Accepts grant application submissions, stores them and notifies the support
team over Telegram.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from .api.v1.endpoints import metrics as metrics_endpoint
from .api.v1.router import api_router
from .core.config import settings
from .core.constants import ApiEndpoints, HttpHeaders
from .core.logging import get_logger, setup_logging
from .core.metrics import set_app_info
from .core.rate_limiting import limiter
from .db.database import db_manager
from .middleware import PayloadSizeMiddleware, PrometheusMiddleware, RequestIDMiddleware

# Setup logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events.

    The database connection is not opened here; the first request that needs
    it calls ensure_connected().
    """
    logger.info(
        "Application starting",
        extra={
            'environment': settings.ENVIRONMENT,
            'version': settings.APP_VERSION,
            'telegram_configured': settings.telegram_configured
        }
    )

    set_app_info(
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT
    )

    yield

    logger.info("Application shutting down")
    await db_manager.close()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Grant application intake with best-effort Telegram notifications",
    lifespan=lifespan,
    docs_url=ApiEndpoints.DOCS,
    redoc_url=ApiEndpoints.REDOC,
    openapi_url=ApiEndpoints.OPENAPI
)

# Rate limiter for public submissions
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=[
        "Content-Type",
        "Accept",
        HttpHeaders.REQUEST_ID,
        "Content-Length",
    ],
)

# Middleware added last runs first: request IDs wrap everything and
# oversized payloads are rejected before routing
app.add_middleware(PayloadSizeMiddleware)
app.add_middleware(PrometheusMiddleware)
app.add_middleware(RequestIDMiddleware)

app.include_router(
    api_router,
    prefix=settings.API_PREFIX
)

# Prometheus metrics endpoint
app.include_router(metrics_endpoint.router, tags=["Metrics"])


@app.get(ApiEndpoints.HEALTH, tags=["Health"])
async def health_check():
    """Liveness check. Does not touch the database; see /health/db."""
    return {
        "status": "healthy",
        "application": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT
    }


@app.get(ApiEndpoints.ROOT, tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "application": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": ApiEndpoints.DOCS,
        "health": ApiEndpoints.HEALTH,
        "applications": f"{settings.API_PREFIX}/applications"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "grant_intake.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
