"""
Product Entity for E-commerce Domain

Read-only view of a catalog product as published by the fulfillment provider.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from storefront.core.domain import Money


@dataclass(frozen=True)
class Variant:
    id: int
    price: Money
    is_enabled: bool = True
    is_available: bool = True
    title: str = ""
    sku: str | None = None
    is_default: bool = False
    options: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class ProductImage:
    src: str
    variant_ids: list[int] = field(default_factory=list)
    position: str | None = None
    is_default: bool = False


@dataclass
class Product:
    """
    Catalog product with its variants.

    Example:
        ```python
        product = Product(id="p1", title="Tee", variants=[Variant(101, Money(2000))])
        product.find_enabled_variant(101)
        product.default_variant()
        ```
    """

    id: str
    title: str
    description: str = ""
    tags: list[str] = field(default_factory=list)
    variants: list[Variant] = field(default_factory=list)
    images: list[ProductImage] = field(default_factory=list)
    options: list[dict[str, Any]] = field(default_factory=list)
    visible: bool = True
    blueprint_id: int | None = None
    print_provider_id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self):
        if not self.id:
            raise ValueError("Product id is required")

    def enabled_variants(self) -> list[Variant]:
        return [v for v in self.variants if v.is_enabled]

    def find_enabled_variant(self, variant_id: int | None) -> Variant | None:
        """Variant with that id if it exists and is enabled."""
        if variant_id is None:
            return None
        for variant in self.variants:
            if variant.id == variant_id and variant.is_enabled:
                return variant
        return None

    def default_variant(self) -> Variant | None:
        """First enabled variant in catalog order."""
        enabled = self.enabled_variants()
        return enabled[0] if enabled else None

    def min_price(self) -> Money | None:
        enabled = self.enabled_variants()
        if not enabled:
            return None
        return min((v.price for v in enabled), key=lambda m: m.cents)

    def default_image(self) -> str | None:
        for image in self.images:
            if image.is_default:
                return image.src
        return self.images[0].src if self.images else None

    def secondary_image(self) -> str | None:
        """Second image for hover effects, falls back to the default image."""
        for image in self.images:
            if not image.is_default:
                return image.src
        if len(self.images) > 1:
            return self.images[1].src
        return self.default_image()
