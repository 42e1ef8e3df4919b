"""
Domain Layer - Core DDD building blocks

This module provides base classes shared by the storefront domains:
- Value Objects: Immutable objects compared by value
- Exceptions: Domain-specific error handling
"""

from storefront.core.domain.exceptions import (
    ConfigurationError,
    DomainException,
    EntityNotFoundException,
    InvalidOperationException,
    ValidationException,
)
from storefront.core.domain.value_objects import (
    Money,
    StatusEnum,
    ValueObject,
)

__all__ = [
    # Value Objects
    "ValueObject",
    "Money",
    "StatusEnum",
    # Exceptions
    "DomainException",
    "ValidationException",
    "EntityNotFoundException",
    "InvalidOperationException",
    "ConfigurationError",
]
