"""Health check endpoints: liveness and database readiness."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from taskdesk.core.config import get_settings
from taskdesk.domain.exceptions import StoreUnavailableException
from taskdesk.infrastructure.persistence import database
from taskdesk.schemas.health import HealthResponse, ReadinessResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse(version=get_settings().app_version)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Record store not reachable", "model": ReadinessResponse}},
)
async def readiness_check() -> ReadinessResponse | JSONResponse:
    """Return 200 when the record store answers; 503 when unconfigured or unreachable."""
    try:
        session_factory = database.require_session_factory()
    except StoreUnavailableException:
        return JSONResponse(
            status_code=503,
            content=ReadinessResponse(status="not_ready", database="unconfigured").model_dump(),
        )
    try:
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Readiness check failed: %s", e)
        return JSONResponse(
            status_code=503,
            content=ReadinessResponse(status="not_ready", database="unavailable").model_dump(),
        )
    return ReadinessResponse(database="ok")
