"""
Order Status Value Object for E-commerce Domain

Represents the lifecycle states of a Printify order.
The provider owns the status; this module only answers what the storefront may do next.
"""

from storefront.core.domain import StatusEnum


class OrderStatus(StatusEnum):
    """
    Order lifecycle states as reported by Printify.

    draft -> pending / sending_to_production -> in_production -> shipped -> delivered;
    drafts and pending orders can still be canceled on the provider.
    """

    DRAFT = "draft"
    PENDING = "pending"
    ON_HOLD = "on_hold"
    SENDING_TO_PRODUCTION = "sending_to_production"
    IN_PRODUCTION = "in_production"
    FULFILLED = "fulfilled"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELED = "canceled"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str | None) -> "OrderStatus":
        """Parse a provider status ("in-production", "In_Production"...), UNKNOWN when unrecognised."""
        if not value:
            return cls.UNKNOWN
        normalized = value.strip().lower().replace("-", "_").replace(" ", "_")
        if normalized == "cancelled":
            normalized = "canceled"
        try:
            return cls.from_string(normalized)
        except ValueError:
            return cls.UNKNOWN

    def can_be_sent_to_production(self) -> bool:
        """Only drafts are submitted; pending orders still wait for payment."""
        return self == OrderStatus.DRAFT

    def is_in_production_or_later(self) -> bool:
        return self in (
            OrderStatus.SENDING_TO_PRODUCTION,
            OrderStatus.IN_PRODUCTION,
            OrderStatus.FULFILLED,
            OrderStatus.SHIPPED,
            OrderStatus.DELIVERED,
        )

