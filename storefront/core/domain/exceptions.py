"""
Domain Exceptions

These exceptions represent business rule violations and domain-specific errors.
They are translated to HTTP responses by the API exception handlers.
"""

from typing import Any


class DomainException(Exception):
    """
    Base exception for all domain-related errors.

    Provides a standardized way to communicate business rule violations.
    """

    def __init__(self, message: str, code: str | None = None, details: dict[str, Any] | None = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "INVALID_ORDER_DATA")
            details: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__.upper()
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(DomainException):
    """
    Raised when input or domain validation fails.

    Use for missing fields, invalid quantities, unusable cart items, etc.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
        code: str = "VALIDATION_ERROR",
    ):
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, code, details)
        self.field = field


class EntityNotFoundException(DomainException):
    """
    Raised when an entity is not found.
    """

    def __init__(
        self,
        entity_type: str,
        entity_id: Any,
        message: str | None = None,
    ):
        self.entity_type = entity_type
        self.entity_id = entity_id
        msg = message or f"{entity_type} with ID {entity_id} not found"
        super().__init__(
            msg,
            "ENTITY_NOT_FOUND",
            {"entity_type": entity_type, "entity_id": str(entity_id)},
        )


class InvalidOperationException(DomainException):
    """Raised when an operation is not valid in the current state."""

    def __init__(self, operation: str, current_state: str, message: str | None = None):
        self.operation = operation
        self.current_state = current_state
        msg = message or f"Cannot perform '{operation}' in state '{current_state}'"
        super().__init__(
            msg,
            "INVALID_OPERATION",
            {"operation": operation, "current_state": current_state},
        )


class ConfigurationError(DomainException):
    """Raised when required configuration (credentials, identifiers) is missing."""

    def __init__(self, setting: str, message: str | None = None):
        self.setting = setting
        msg = message or f"{setting} is not configured"
        super().__init__(msg, "CONFIGURATION_ERROR", {"setting": setting})
