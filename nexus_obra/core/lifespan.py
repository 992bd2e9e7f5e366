"""Application lifespan: startup and shutdown.

Wiring only: logging, optional table creation, rate limiter and engine
lifecycle. No business logic here.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from nexus_obra.core.config import get_settings
from nexus_obra.core.logging import setup_logging
from nexus_obra.infrastructure.persistence.database import dispose_engine, init_models

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging, tables (when database_auto_create is set).
    Shutdown: rate limiter counters dropped, SQL engine disposed.
    """
    settings = get_settings()
    setup_logging()
    if settings.database_auto_create:
        await init_models()
    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    limiter = getattr(app.state, "rate_limiter", None)
    if limiter is not None:
        limiter.reset()
    await dispose_engine()
    logger.info("%s stopped", settings.app_name)
