"""
Product Catalog Use Cases
"""

import logging

from storefront.core.domain import ValidationException
from storefront.domains.ecommerce.application.ports import IFulfillmentProvider
from storefront.domains.ecommerce.domain.entities import Page, Product

logger = logging.getLogger(__name__)


class ListProductsUseCase:
    """
    Use Case: List storefront products

    Only visible products are returned; pagination is the provider's.
    """

    def __init__(self, provider: IFulfillmentProvider):
        self.provider = provider

    async def execute(self, page: int = 1, limit: int = 10) -> Page[Product]:
        result = await self.provider.list_products(page=page, limit=limit)
        visible = [p for p in result.items if p.visible]
        logger.info(f"Received {len(result.items)} products, {len(visible)} visible")
        return Page(
            items=visible,
            current_page=result.current_page,
            last_page=result.last_page,
            total=result.total,
            per_page=result.per_page,
        )


class GetProductUseCase:
    def __init__(self, provider: IFulfillmentProvider):
        self.provider = provider

    async def execute(self, product_id: str) -> Product:
        """
        Raises:
            ValidationException: Blank product id
            ProductNotFoundError: Unknown product
        """
        if not product_id or not product_id.strip():
            raise ValidationException("Invalid product ID format", field="id")
        return await self.provider.get_product(product_id.strip())
