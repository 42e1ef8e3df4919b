"""
Application lifecycle management using the FastAPI lifespan pattern.

Startup creates the process-wide outbound rate limiter on app.state.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from storefront.config.settings import Settings, get_settings
from storefront.utils.rate_limiter import WindowRateLimiter

logger = logging.getLogger(__name__)


class LifecycleManager:
    """
    Manages application lifecycle events.

    Handles startup initialization and graceful shutdown.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._initialized = False

    async def startup(self, app: FastAPI) -> None:
        if self._initialized:
            logger.warning("Lifecycle already initialized, skipping startup")
            return

        logger.info("Starting application lifecycle...")

        app.state.rate_limiter = WindowRateLimiter(
            limit=self._settings.PRINTIFY_RATE_LIMIT,
            window_seconds=self._settings.PRINTIFY_RATE_WINDOW_SECONDS,
        )
        self._verify_configurations()

        self._initialized = True
        logger.info("Application lifecycle startup completed")

    async def shutdown(self, app: FastAPI) -> None:
        if not self._initialized:
            logger.warning("Lifecycle not initialized, skipping shutdown")
            return

        logger.info("Stopping application lifecycle...")
        status = app.state.rate_limiter.status()
        logger.info(f"Printify requests in last window: {status.request_count}/{status.limit}")

        self._initialized = False
        logger.info("Application lifecycle shutdown completed")

    def _verify_configurations(self) -> None:
        if not self._settings.PRINTIFY_API_TOKEN:
            logger.warning("PRINTIFY_API_TOKEN not configured - Printify endpoints will fail")
        if not self._settings.PRINTIFY_SHOP_ID:
            logger.warning("PRINTIFY_SHOP_ID not configured - Printify endpoints will fail")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Usage:
        app = FastAPI(lifespan=lifespan)
    """
    lifecycle = LifecycleManager(getattr(app.state, "settings", None))

    await lifecycle.startup(app)

    yield

    await lifecycle.shutdown(app)
