"""
Maps provider failures to the reason recorded on a fallback estimate.
"""

from storefront.domains.ecommerce.domain.exceptions import NoValidVariantError, ProductNotFoundError
from storefront.domains.ecommerce.domain.value_objects import FallbackReason
from storefront.models.printify import (
    PrintifyError,
    PrintifyNetworkError,
    PrintifyRateLimitError,
    PrintifyResponseError,
    PrintifyTimeoutError,
)
from storefront.utils.rate_limiter import RateLimitExceeded

# Failures the estimators degrade instead of raising
RECOVERABLE_ERRORS = (PrintifyError, RateLimitExceeded, ProductNotFoundError, NoValidVariantError)


def reason_for_error(error: Exception) -> FallbackReason:
    if isinstance(error, ProductNotFoundError):
        return FallbackReason.PRODUCT_NOT_FOUND
    if isinstance(error, NoValidVariantError):
        return FallbackReason.NO_VALID_VARIANT
    if isinstance(error, PrintifyTimeoutError):
        return FallbackReason.PROVIDER_TIMEOUT
    if isinstance(error, PrintifyNetworkError):
        return FallbackReason.NETWORK_ERROR
    if isinstance(error, (PrintifyRateLimitError, RateLimitExceeded)):
        return FallbackReason.RATE_LIMITED
    if isinstance(error, PrintifyResponseError):
        return FallbackReason.INVALID_RESPONSE
    if isinstance(error, PrintifyError):
        return FallbackReason.PROVIDER_ERROR
    return FallbackReason.CALCULATION_ERROR
