"""
Application entry point.

Configuration, middleware and lifecycle management live in storefront.core.
"""

import logging

import sentry_sdk

from storefront.config.settings import get_settings
from storefront.core.app_factory import create_app

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)

# Error tracking; a missing DSN leaves Sentry disabled
sentry_sdk.init(
    dsn=settings.SENTRY_DSN,
    send_default_pii=False,
    environment=settings.ENVIRONMENT,
)

app = create_app()

if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting application in {settings.ENVIRONMENT} mode")
    uvicorn.run(
        "storefront.main:app",
        host="0.0.0.0",
        port=8001,
        reload=settings.DEBUG,
    )
