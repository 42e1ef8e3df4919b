"""
Modelos Printify - Errores y estructuras de respuesta de la API del proveedor
"""

from .errors import (
    PrintifyAuthError,
    PrintifyBadRequestError,
    PrintifyError,
    PrintifyForbiddenError,
    PrintifyNetworkError,
    PrintifyNotFoundError,
    PrintifyPayloadTooLargeError,
    PrintifyPaymentRequiredError,
    PrintifyRateLimitError,
    PrintifyResponseError,
    PrintifyServerError,
    PrintifyTimeoutError,
    PrintifyTransientError,
    PrintifyValidationError,
    error_from_response,
)
from .responses import (
    PrintifyImage,
    PrintifyOption,
    PrintifyOrder,
    PrintifyOrderLineItem,
    PrintifyOrdersResponse,
    PrintifyProduct,
    PrintifyProductsResponse,
    PrintifyShippingRates,
    PrintifyVariant,
)

__all__ = [
    # Errores
    "PrintifyError",
    "PrintifyBadRequestError",
    "PrintifyAuthError",
    "PrintifyPaymentRequiredError",
    "PrintifyForbiddenError",
    "PrintifyNotFoundError",
    "PrintifyPayloadTooLargeError",
    "PrintifyValidationError",
    "PrintifyRateLimitError",
    "PrintifyServerError",
    "PrintifyTimeoutError",
    "PrintifyNetworkError",
    "PrintifyTransientError",
    "PrintifyResponseError",
    "error_from_response",
    # Respuestas
    "PrintifyVariant",
    "PrintifyImage",
    "PrintifyOption",
    "PrintifyProduct",
    "PrintifyProductsResponse",
    "PrintifyShippingRates",
    "PrintifyOrderLineItem",
    "PrintifyOrder",
    "PrintifyOrdersResponse",
]
