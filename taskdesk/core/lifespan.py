"""Application lifespan: startup and shutdown.

No business logic here; the only infrastructure to release is the SQL engine.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from taskdesk.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log startup, yield, then dispose the SQL engine if one was created."""
    settings = get_settings()
    if not settings.database_url:
        logger.warning(
            "DATABASE_URL is not set; store-backed endpoints will answer 503"
        )
    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    from taskdesk.infrastructure.persistence import database

    if getattr(database, "engine", None) is not None:
        await database.engine.dispose()
        logger.info("Database engine disposed")
