"""
Rate Limiter para APIs externas
Responsabilidad: Controlar la cantidad de requests por ventana para respetar los límites de Printify
"""

import logging
import math
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class RateLimitExceeded(Exception):
    """
    Raised locally when the request ceiling of the current window is reached.

    Attributes:
        retry_after_seconds: Whole seconds until the window resets
    """

    def __init__(self, retry_after_seconds: int, limit: int):
        self.retry_after_seconds = retry_after_seconds
        self.limit = limit
        super().__init__(
            f"Rate limit exceeded ({limit} requests per window). "
            f"Please wait {retry_after_seconds} seconds before retrying."
        )


@dataclass(frozen=True)
class RateLimitWindow:
    """Snapshot of the current rate window."""

    request_count: int
    window_start: float
    is_limited: bool
    limit: int
    window_seconds: float

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.request_count)


class WindowRateLimiter:
    """
    Fixed window request counter.

    The window resets once `window_seconds` have elapsed since it started.
    Check and increment happen inside one lock so concurrent callers never
    undercount.

    Example:
        >>> limiter = WindowRateLimiter(limit=600, window_seconds=60)
        >>> limiter.check_and_consume()  # raises RateLimitExceeded at the ceiling
    """

    def __init__(
        self,
        limit: int = 600,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            limit: Requests allowed per window
            window_seconds: Window length in seconds
            clock: Monotonic time source, injectable for tests
        """
        if limit < 1:
            raise ValueError("limit must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")

        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._request_count = 0
        self._window_start = clock()
        self._is_limited = False

    def check_and_consume(self) -> None:
        """
        Count one outbound request against the current window.

        Raises:
            RateLimitExceeded: If the window already holds `limit` requests
        """
        with self._lock:
            now = self._clock()
            elapsed = now - self._window_start

            if elapsed >= self.window_seconds:
                self._request_count = 0
                self._window_start = now
                self._is_limited = False
                elapsed = 0.0

            if self._request_count >= self.limit:
                self._is_limited = True
                retry_after = max(1, math.ceil(self.window_seconds - elapsed))
                logger.warning(
                    f"Local rate limit reached: {self._request_count}/{self.limit}, retry in {retry_after}s"
                )
                raise RateLimitExceeded(retry_after, self.limit)

            self._request_count += 1

    def status(self) -> RateLimitWindow:
        """Obtiene el estado actual de la ventana"""
        with self._lock:
            return RateLimitWindow(
                request_count=self._request_count,
                window_start=self._window_start,
                is_limited=self._is_limited,
                limit=self.limit,
                window_seconds=self.window_seconds,
            )

    def reset(self) -> None:
        """Resetea el rate limiter"""
        with self._lock:
            self._request_count = 0
            self._window_start = self._clock()
            self._is_limited = False
