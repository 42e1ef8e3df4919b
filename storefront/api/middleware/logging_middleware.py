"""
Request logging for the storefront API.

Every response carries X-Correlation-ID so a shopper-facing error can be matched
with the Printify calls logged while serving it. Checkout requests wait on
Printify several times, so only requests above the slow threshold are escalated.
"""

import logging
import re
import time
import uuid
from collections.abc import Callable
from typing import Any

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"

# Ids echoed back into headers and logs must stay short and printable
_CORRELATION_ID_RE = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs one line in and one line out per storefront request.

    Responses at 4xx/5xx, and responses slower than ``slow_request_ms``, are
    logged as warnings. Health checks and CORS preflights are not logged.
    """

    QUIET_PATHS: tuple[str, ...] = ("/health", "/favicon.ico")

    def __init__(self, app: ASGIApp, slow_request_ms: float = 8000.0) -> None:
        super().__init__(app)
        self.slow_request_ms = slow_request_ms

    async def dispatch(self, request: Request, call_next: Callable[[Request], Any]) -> Response:
        correlation_id = self.correlation_id_for(request)
        request.state.correlation_id = correlation_id

        if request.method == "OPTIONS" or request.url.path.startswith(self.QUIET_PATHS):
            response = await call_next(request)
            response.headers[CORRELATION_HEADER] = correlation_id
            return response

        route = f"{request.method} {request.url.path}"
        logger.info(f"[{correlation_id}] --> {route} from {self._client_ip(request)}")
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"[{correlation_id}] <-- {route} failed after {self._elapsed_ms(started):.2f}ms: "
                f"{type(e).__name__}: {e}"
            )
            raise

        elapsed_ms = self._elapsed_ms(started)
        slow = elapsed_ms >= self.slow_request_ms
        level = logging.WARNING if slow or response.status_code >= 400 else logging.INFO
        suffix = " (slow)" if slow else ""
        logger.log(level, f"[{correlation_id}] <-- {route} {response.status_code} in {elapsed_ms:.2f}ms{suffix}")

        response.headers[CORRELATION_HEADER] = correlation_id
        response.headers["X-Response-Time-Ms"] = f"{elapsed_ms:.2f}"
        return response

    @staticmethod
    def correlation_id_for(request: Request) -> str:
        """Reuse the caller's id when it is well formed, otherwise mint one."""
        incoming = request.headers.get(CORRELATION_HEADER, "")
        if _CORRELATION_ID_RE.match(incoming):
            return incoming
        return uuid.uuid4().hex[:12]

    @staticmethod
    def _elapsed_ms(started: float) -> float:
        return (time.perf_counter() - started) * 1000

    @staticmethod
    def _client_ip(request: Request) -> str:
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()
        return request.client.host if request.client else "unknown"
