"""
Utilidades compartidas del storefront
"""

from .rate_limiter import RateLimitExceeded, RateLimitWindow, WindowRateLimiter

__all__ = [
    "RateLimitExceeded",
    "RateLimitWindow",
    "WindowRateLimiter",
]
