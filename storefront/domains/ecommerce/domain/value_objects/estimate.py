"""
Estimate result type

Estimators return a value together with the reason a fallback was used, so
"used fallback" is an explicit signal instead of a swallowed exception.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class FallbackReason(str, Enum):
    PROVIDER_ERROR = "provider_error"
    PROVIDER_TIMEOUT = "provider_timeout"
    NETWORK_ERROR = "network_error"
    RATE_LIMITED = "rate_limited"
    INVALID_RESPONSE = "invalid_response"
    PRODUCT_NOT_FOUND = "product_not_found"
    NO_VALID_VARIANT = "no_valid_variant"
    CALCULATION_ERROR = "calculation_error"


@dataclass(frozen=True)
class Estimate(Generic[T]):
    value: T
    fallback_reason: FallbackReason | None = None

    @property
    def used_fallback(self) -> bool:
        return self.fallback_reason is not None

    @classmethod
    def authoritative(cls, value: T) -> "Estimate[T]":
        return cls(value)

    @classmethod
    def fallback(cls, value: T, reason: FallbackReason) -> "Estimate[T]":
        return cls(value, reason)
