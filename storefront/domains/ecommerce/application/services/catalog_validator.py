"""
Catalog Validator

Resolves cart items against the live catalog into orderable line items.
"""

import logging

from storefront.core.domain import Money
from storefront.domains.ecommerce.application.ports import IFulfillmentProvider
from storefront.domains.ecommerce.application.services.fallbacks import RECOVERABLE_ERRORS, reason_for_error
from storefront.domains.ecommerce.domain.entities import CartItem, LineItem
from storefront.domains.ecommerce.domain.exceptions import (
    InvalidCartItemError,
    NoValidVariantError,
    ProductNotFoundError,
)
from storefront.domains.ecommerce.domain.services import DEFAULT_ITEM_PRICE
from storefront.domains.ecommerce.domain.value_objects import Estimate

logger = logging.getLogger(__name__)

FALLBACK_VARIANT_ID = 1


class CatalogValidator:
    """
    Resolve cart items to (product, enabled variant) pairs.

    Two modes:
    - lenient (checkout calculation): a disabled or unknown variant is
      replaced by the first enabled one; failures become fallback estimates.
    - strict (order placement): a requested variant must exist and be
      enabled; failures are raised as 400-class validation errors.
    """

    def __init__(self, provider: IFulfillmentProvider, currency: str = "USD"):
        self.provider = provider
        self.currency = currency

    async def resolve(self, item: CartItem, strict: bool = False) -> LineItem:
        """
        Resolve one cart item.

        Raises:
            ProductNotFoundError: The product does not exist
            NoValidVariantError: No usable enabled variant
        """
        product = await self.provider.get_product(item.product_id)

        variant = product.find_enabled_variant(item.variant_id)
        if variant is None:
            if strict and item.variant_id is not None:
                raise NoValidVariantError(product.id, item.variant_id)
            variant = product.default_variant()
            if variant is None:
                raise NoValidVariantError(product.id)
            if item.variant_id is not None:
                logger.warning(
                    f"Variant {item.variant_id} of product {product.id} not available, using {variant.id}"
                )

        return LineItem(
            product_id=product.id,
            variant_id=variant.id,
            quantity=item.quantity,
            unit_cost=variant.price,
        )

    async def resolve_lenient(self, item: CartItem) -> Estimate[LineItem]:
        """Resolve for a cost estimate; never raises for catalog or provider failures."""
        try:
            return Estimate.authoritative(await self.resolve(item, strict=False))
        except RECOVERABLE_ERRORS as e:
            reason = reason_for_error(e)
            logger.warning(f"Using fallback line item for product {item.product_id} ({reason.value}): {e}")
            return Estimate.fallback(self.fallback_line_item(item), reason)

    async def resolve_strict(self, item: CartItem) -> LineItem:
        """Resolve for order placement; an unknown product is reported as an invalid cart item."""
        try:
            return await self.resolve(item, strict=True)
        except ProductNotFoundError as e:
            raise InvalidCartItemError(
                item.product_id,
                f"Product {item.product_id} is not available",
                field="cartItems",
            ) from e

    async def resolve_all(self, items: list[CartItem], strict: bool = False) -> list[LineItem]:
        """Resolve sequentially, preserving cart order."""
        resolved = []
        for item in items:
            if strict:
                resolved.append(await self.resolve_strict(item))
            else:
                resolved.append(await self.resolve(item))
        return resolved

    async def resolve_all_lenient(self, items: list[CartItem]) -> list[Estimate[LineItem]]:
        return [await self.resolve_lenient(item) for item in items]

    def fallback_line_item(self, item: CartItem) -> LineItem:
        """Synthesized line from the cart's own data."""
        return LineItem(
            product_id=item.product_id,
            variant_id=item.variant_id if item.variant_id is not None else FALLBACK_VARIANT_ID,
            quantity=item.quantity,
            unit_cost=item.unit_price or Money(DEFAULT_ITEM_PRICE, self.currency),
        )
