"""
Shipping Address Value Object
"""

from dataclasses import dataclass, fields
from typing import Any

from storefront.core.domain import ValueObject

# Provider field -> field name the storefront client sends
REQUIRED_ADDRESS_FIELDS: dict[str, str] = {
    "first_name": "firstName",
    "last_name": "lastName",
    "email": "email",
    "address1": "address1",
    "city": "city",
    "region": "state",
    "zip": "zipCode",
    "country": "country",
}


@dataclass(frozen=True)
class ShippingAddress(ValueObject):
    """
    Destination of an order.

    Built from possibly incomplete shopper input; `missing_fields()` reports
    what checkout still needs. `country` is an ISO-3166 alpha-2 code.
    """

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    country: str | None = None
    region: str | None = None
    address1: str | None = None
    city: str | None = None
    zip: str | None = None
    phone: str | None = None
    address2: str | None = None

    @property
    def country_code(self) -> str:
        return (self.country or "").strip().upper()

    def missing_fields(self) -> list[str]:
        """Client-facing names of the required fields that are empty or blank."""
        missing = []
        for provider_field, client_field in REQUIRED_ADDRESS_FIELDS.items():
            value = getattr(self, provider_field)
            if value is None or not str(value).strip():
                missing.append(client_field)
        return missing

    def to_provider_payload(self) -> dict[str, Any]:
        """Trimmed `address_to` body for Printify."""
        payload = {f.name: (getattr(self, f.name) or "").strip() for f in fields(self)}
        payload["country"] = self.country_code
        return payload
