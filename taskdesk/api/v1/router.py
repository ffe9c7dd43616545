"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from taskdesk.api.v1.dependencies.
"""

from fastapi import APIRouter

from taskdesk.api.v1.endpoints import (
    analytics,
    auth,
    client_accounts,
    health,
    managers,
    tasks,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
api_router.include_router(managers.router, prefix="/managers", tags=["managers"])
api_router.include_router(
    client_accounts.router, prefix="/client-accounts", tags=["client-accounts"]
)
api_router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
