"""API v1 Router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from .endpoints import applications, health

api_router = APIRouter()

# Include application endpoints
api_router.include_router(
    applications.router,
    prefix="/applications",
    tags=["Applications"]
)

# Include database health endpoints
api_router.include_router(
    health.router,
    prefix="/health",
    tags=["Health"]
)
