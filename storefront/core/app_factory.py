"""
Application factory for the storefront API.

Builds the FastAPI app around the Printify-backed routers: CORS for the shop
frontend, request logging with correlation ids, the domain exception handlers
and a liveness endpoint that never calls Printify.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.api.exception_handlers import register_exception_handlers
from storefront.api.middleware import RequestLoggingMiddleware
from storefront.api.middleware.logging_middleware import CORRELATION_HEADER
from storefront.api.router import api_router
from storefront.config.settings import Settings, get_settings
from storefront.core.lifecycle import lifespan

logger = logging.getLogger(__name__)

# Headers the shop frontend reads from API responses
EXPOSED_HEADERS = [CORRELATION_HEADER, "X-Response-Time-Ms", "Retry-After"]


class AppFactory:
    """
    Creates the storefront FastAPI application.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    def create_app(self) -> FastAPI:
        app = FastAPI(
            title=self._settings.PROJECT_NAME,
            description=self._settings.PROJECT_DESCRIPTION,
            version=self._settings.VERSION,
            docs_url=f"{self._settings.API_V1_STR}/docs" if self._settings.DEBUG else None,
            redoc_url=f"{self._settings.API_V1_STR}/redoc" if self._settings.DEBUG else None,
            lifespan=lifespan,
        )
        # lifespan reads the same settings to size the rate limiter
        app.state.settings = self._settings

        self._add_middleware(app)
        register_exception_handlers(app)
        app.include_router(api_router, prefix=self._settings.API_V1_STR)
        self._add_liveness(app)

        self._log_printify_target()
        return app

    def _add_middleware(self, app: FastAPI) -> None:
        """
        Added innermost first: request logging runs inside CORS so preflights
        are answered before a correlation id is minted for them.
        """
        app.add_middleware(RequestLoggingMiddleware, slow_request_ms=self._settings.SLOW_REQUEST_MS)
        app.add_middleware(
            CORSMiddleware,
            allow_origins=self._cors_origins(),
            allow_credentials=True,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["*"],
            expose_headers=EXPOSED_HEADERS,
        )

    def _add_liveness(self, app: FastAPI) -> None:
        printify_state = "configured" if self.printify_ready(self._settings) else "missing_credentials"

        @app.get("/health", tags=["health"])
        async def health_check() -> dict[str, str]:
            """Liveness; Printify connectivity lives under /printify/health."""
            return {
                "status": "ok",
                "environment": self._settings.ENVIRONMENT,
                "version": self._settings.VERSION,
                "printify": printify_state,
            }

    def _cors_origins(self) -> list[str]:
        if self._settings.DEBUG:
            return ["*"]
        return self._settings.CORS_ORIGINS

    def _log_printify_target(self) -> None:
        if self.printify_ready(self._settings):
            logger.info(
                f"{self._settings.PROJECT_NAME} created for Printify shop {self._settings.PRINTIFY_SHOP_ID} "
                f"at {self._settings.PRINTIFY_API_BASE_URL}"
            )
        else:
            logger.warning(f"{self._settings.PROJECT_NAME} created without Printify credentials")

    @staticmethod
    def printify_ready(settings: Settings) -> bool:
        return bool(settings.PRINTIFY_API_TOKEN and settings.PRINTIFY_SHOP_ID)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create FastAPI application using the factory.

    Args:
        settings: Optional settings override

    Returns:
        Configured FastAPI application
    """
    return AppFactory(settings).create_app()
