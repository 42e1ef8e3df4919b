"""
Errores de la API Printify
Responsabilidad: Taxonomía tipada de fallas del proveedor y su mapeo desde respuestas HTTP
"""

from datetime import datetime
from typing import Any


class PrintifyError(Exception):
    """
    Base exception for Printify API errors.

    Attributes:
        error_code: Machine-readable error code
        error_message: Human-readable error description
        status_code: Upstream HTTP status, when there was a response
        retryable: Whether the retry policy may try the call again
    """

    retryable = False

    def __init__(self, error_code: str, error_message: str, status_code: int | None = None):
        self.error_code = error_code
        self.error_message = error_message
        self.status_code = status_code
        self.timestamp = datetime.now()
        super().__init__(f"{error_code}: {error_message}")


class PrintifyBadRequestError(PrintifyError):
    """400 - malformed request or order processing failure."""

    def __init__(self, message: str, provider_code: int | None = None):
        self.provider_code = provider_code
        super().__init__("BAD_REQUEST", message, 400)


class PrintifyAuthError(PrintifyError):
    """401 - missing or invalid API token."""

    def __init__(self, message: str = "Unauthorized: invalid or missing Printify API token"):
        super().__init__("UNAUTHORIZED", message, 401)


class PrintifyPaymentRequiredError(PrintifyError):
    """402 - account quota reached."""

    def __init__(
        self,
        message: str = "Payment Required: the Printify account hit a quota that requires a plan upgrade",
    ):
        super().__init__("PAYMENT_REQUIRED", message, 402)


class PrintifyForbiddenError(PrintifyError):
    """403 - token lacks access to the resource."""

    def __init__(
        self,
        message: str = "Forbidden: the API credentials don't have access to that resource",
    ):
        super().__init__("FORBIDDEN", message, 403)


class PrintifyNotFoundError(PrintifyError):
    """404 - route or resource does not exist."""

    def __init__(self, message: str = "Not Found: route or resource is not found"):
        super().__init__("NOT_FOUND", message, 404)


class PrintifyPayloadTooLargeError(PrintifyError):
    """413 - request body exceeded the allowed size."""

    def __init__(self, message: str = "Request Entity Too Large: the request exceeded the maximum payload size"):
        super().__init__("PAYLOAD_TOO_LARGE", message, 413)


class PrintifyValidationError(PrintifyError):
    """422 - request rejected with field-level messages."""

    def __init__(self, message: str, field_errors: dict[str, list[str]] | None = None):
        self.field_errors = field_errors or {}
        super().__init__("VALIDATION_ERROR", message, 422)


class PrintifyRateLimitError(PrintifyError):
    """429 - upstream rate limit."""

    retryable = True

    def __init__(
        self,
        message: str = "Too Many Requests: too many requests sent in a given amount of time",
        retry_after_seconds: int | None = None,
    ):
        self.retry_after_seconds = retry_after_seconds
        super().__init__("RATE_LIMITED", message, 429)


class PrintifyServerError(PrintifyError):
    """5xx - upstream failure, safe to retry."""

    retryable = True

    def __init__(self, status_code: int, message: str):
        super().__init__("SERVER_ERROR", message, status_code)


class PrintifyTimeoutError(PrintifyError):
    """The request did not complete within the configured timeout."""

    retryable = True

    def __init__(self, timeout_seconds: float):
        self.timeout_seconds = timeout_seconds
        super().__init__(
            "TIMEOUT",
            f"Request timeout: Printify API took too long to respond ({timeout_seconds:g}s)",
        )


class PrintifyNetworkError(PrintifyError):
    """DNS resolution or connection refused. Not retried."""

    def __init__(self, detail: str):
        super().__init__(
            "NETWORK_ERROR",
            "DNS/Connection error: cannot reach Printify servers. "
            f"Check internet connectivity, DNS and proxy/firewall settings ({detail})",
        )


class PrintifyTransientError(PrintifyError):
    """Connection dropped or protocol hiccup after the connection was established."""

    retryable = True

    def __init__(self, detail: str):
        super().__init__("TRANSPORT_ERROR", f"Network error while talking to Printify: {detail}")


class PrintifyResponseError(PrintifyError):
    """The response body could not be decoded or validated."""

    def __init__(self, detail: str):
        super().__init__("PARSE_ERROR", f"Failed to parse Printify response: {detail}")


_SERVER_MESSAGES = {
    500: "Internal Server Error: the server encountered an unexpected condition",
    502: (
        "Bad Gateway: Printify's servers are restarting or an unexpected outage is in progress. "
        "Requests are safe to retry"
    ),
    503: (
        "Service Unavailable: the server could not process the request in time. "
        "It could be temporarily unavailable. Retry later"
    ),
}


def error_from_response(status_code: int, body: dict[str, Any]) -> PrintifyError:
    """
    Map a non-2xx Printify response into the error taxonomy.

    Args:
        status_code: HTTP status of the response
        body: Decoded error body (``{"message", "errors", "code"}``), empty if unreadable

    Returns:
        The matching PrintifyError subclass instance
    """
    message = body.get("message") or ""
    errors = body.get("errors")

    if status_code == 400:
        if body.get("code") == 8502:
            reason = errors.get("reason") if isinstance(errors, dict) else None
            return PrintifyBadRequestError(f"Order Processing Error: {reason or message}", provider_code=8502)
        return PrintifyBadRequestError(
            f"Bad Request: {message or 'the request could not be parsed as valid JSON'}",
            provider_code=body.get("code"),
        )
    if status_code == 401:
        return PrintifyAuthError()
    if status_code == 402:
        return PrintifyPaymentRequiredError()
    if status_code == 403:
        return PrintifyForbiddenError()
    if status_code == 404:
        return PrintifyNotFoundError()
    if status_code == 413:
        return PrintifyPayloadTooLargeError()
    if status_code == 422:
        field_errors: dict[str, list[str]] = {}
        if isinstance(errors, dict):
            for field, messages in errors.items():
                field_errors[field] = [str(m) for m in messages] if isinstance(messages, list) else [str(messages)]
        if field_errors:
            summary = "; ".join(f"{field}: {', '.join(msgs)}" for field, msgs in field_errors.items())
        else:
            summary = message or "Invalid Request"
        return PrintifyValidationError(f"Validation Error: {summary}", field_errors)
    if status_code == 429:
        return PrintifyRateLimitError()
    if status_code >= 500:
        return PrintifyServerError(status_code, _SERVER_MESSAGES.get(status_code, f"Printify server error {status_code}"))

    return PrintifyError(
        f"HTTP_{status_code}", f"Printify API error: {status_code} - {message or 'Unknown error'}", status_code
    )
