"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (logging, fragment store).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings
from app.infrastructure.external.storage import StorageFactory
from app.shared.telemetry import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging, then the configured fragment store (kept on
    app.state.fragment_store unless one was already installed, e.g. by tests).
    """
    settings = get_settings()
    setup_logging()

    if getattr(app.state, "fragment_store", None) is None:
        app.state.fragment_store = StorageFactory.create_fragment_store(settings)
    logger.info(
        "Fragment store ready: %s (%s backend)",
        type(app.state.fragment_store).__name__,
        settings.storage_backend,
    )

    yield

    logger.info("Shutting down %s", settings.app_name)
