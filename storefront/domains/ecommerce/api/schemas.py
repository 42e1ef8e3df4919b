"""
E-commerce API Schemas

Pydantic schemas for API request/response validation. JSON uses camelCase;
snake_case names are accepted on input too. Amounts leave the API in major
units (60.0 for 6000 cents).
"""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from storefront.core.domain import Money
from storefront.domains.ecommerce.domain.entities import CartItem, LineItem, Order, OrderLine, Page, Product, Variant
from storefront.domains.ecommerce.domain.value_objects import FallbackReason, ShippingAddress
from storefront.domains.ecommerce.domain.value_objects.costs import OrderCalculation, ShippingOption
from storefront.utils.rate_limiter import RateLimitWindow

PLACEHOLDER_IMAGE = "/placeholder.svg?height=400&width=400"


def to_amount(money: Money | None) -> float | None:
    if money is None:
        return None
    return float(money.to_major())


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Requests
# =============================================================================


class CartItemRequest(CamelModel):
    """Cart item as sent by the storefront. Quantity is checked by the use cases."""

    id: str | None = Field(default=None, validation_alias=AliasChoices("id", "productId", "product_id"))
    variant_id: int | None = None
    quantity: int | None = None
    price: float | None = Field(default=None, ge=0, description="Displayed unit price, major units")
    name: str | None = None

    def to_domain(self, currency: str = "USD") -> CartItem:
        return CartItem(
            product_id=(self.id or "").strip(),
            quantity=self.quantity if self.quantity is not None else 0,
            variant_id=self.variant_id,
            unit_price=Money.from_major(self.price, currency) if self.price is not None else None,
            name=self.name,
        )


class ShippingAddressRequest(CamelModel):
    """Shipping address. Fields are optional here so missing ones are reported as 400 by name."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address1: str | None = None
    address2: str | None = None
    city: str | None = None
    state: str | None = Field(default=None, validation_alias=AliasChoices("state", "region"))
    zip_code: str | None = Field(default=None, validation_alias=AliasChoices("zipCode", "zip_code", "zip"))
    country: str | None = None

    def to_domain(self) -> ShippingAddress:
        return ShippingAddress(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            country=self.country,
            region=self.state,
            address1=self.address1,
            city=self.city,
            zip=self.zip_code,
            phone=self.phone,
            address2=self.address2,
        )


class CalculateCheckoutRequestSchema(CamelModel):
    cart_items: list[CartItemRequest] = Field(default_factory=list)
    shipping_address: ShippingAddressRequest | None = None


class PlaceOrderRequestSchema(CamelModel):
    cart_items: list[CartItemRequest] = Field(default_factory=list)
    shipping_address: ShippingAddressRequest | None = None
    process_payment: bool = True


# =============================================================================
# Responses
# =============================================================================


class ShippingOptionSchema(CamelModel):
    id: int
    name: str
    cost: float

    @classmethod
    def from_domain(cls, option: ShippingOption) -> "ShippingOptionSchema":
        return cls(id=option.id, name=option.name, cost=to_amount(option.cost))


class CalculatedLineItemSchema(CamelModel):
    product_id: str
    variant_id: int
    quantity: int
    cost: float | None = None

    @classmethod
    def from_domain(cls, item: LineItem) -> "CalculatedLineItemSchema":
        return cls(
            product_id=item.product_id,
            variant_id=item.variant_id,
            quantity=item.quantity,
            cost=to_amount(item.unit_cost),
        )


class CheckoutCalculationResponse(CamelModel):
    """Checkout totals; `fallbackUsed` marks any estimated component."""

    line_items: list[CalculatedLineItemSchema]
    subtotal: float
    shipping: float
    tax: float
    total: float
    currency: str
    shipping_options: list[ShippingOptionSchema]
    fallback_used: bool
    fallback_reasons: list[str]

    @classmethod
    def from_domain(
        cls, calculation: OrderCalculation, fallback_reasons: list[FallbackReason]
    ) -> "CheckoutCalculationResponse":
        return cls(
            line_items=[CalculatedLineItemSchema.from_domain(li) for li in calculation.line_items],
            subtotal=to_amount(calculation.subtotal),
            shipping=to_amount(calculation.shipping),
            tax=to_amount(calculation.tax),
            total=to_amount(calculation.total),
            currency=calculation.currency,
            shipping_options=[ShippingOptionSchema.from_domain(o) for o in calculation.shipping_options],
            fallback_used=bool(fallback_reasons),
            fallback_reasons=[r.value for r in fallback_reasons],
        )


class OrderLineSchema(CamelModel):
    product_id: str
    variant_id: int
    quantity: int
    cost: float
    shipping_cost: float
    status: str | None = None

    @classmethod
    def from_domain(cls, line: OrderLine) -> "OrderLineSchema":
        return cls(
            product_id=line.product_id,
            variant_id=line.variant_id,
            quantity=line.quantity,
            cost=to_amount(line.cost),
            shipping_cost=to_amount(line.shipping_cost),
            status=line.status,
        )


class OrderSchema(CamelModel):
    """Order response schema."""

    id: str
    external_id: str | None = None
    label: str | None = None
    status: str
    total_price: float
    total_shipping: float
    total_tax: float
    created_at: datetime | None = None
    sent_to_production_at: datetime | None = None
    fulfilled_at: datetime | None = None
    line_items: list[OrderLineSchema] = Field(default_factory=list)
    address_to: dict[str, Any] = Field(default_factory=dict)
    shipments: list[dict[str, Any]] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, order: Order) -> "OrderSchema":
        return cls(
            id=order.id,
            external_id=order.external_id,
            label=order.label,
            status=order.raw_status or order.status.value,
            total_price=to_amount(order.total_price),
            total_shipping=to_amount(order.total_shipping),
            total_tax=to_amount(order.total_tax),
            created_at=order.created_at,
            sent_to_production_at=order.sent_to_production_at,
            fulfilled_at=order.fulfilled_at,
            line_items=[OrderLineSchema.from_domain(li) for li in order.line_items],
            address_to=order.address_to,
            shipments=order.shipments,
        )


class PlaceOrderResponseSchema(CamelModel):
    success: bool = True
    payment_processed: bool
    order: OrderSchema
    message: str
    error: str | None = None


class OrderActionResponse(CamelModel):
    success: bool = True
    order: OrderSchema
    message: str


class OrderDetailResponse(CamelModel):
    success: bool = True
    order: OrderSchema


class PaginationSchema(CamelModel):
    current_page: int
    total_pages: int
    total: int
    has_next: bool
    has_prev: bool

    @classmethod
    def from_page(cls, page: Page) -> "PaginationSchema":
        return cls(
            current_page=page.current_page,
            total_pages=page.last_page,
            total=page.total,
            has_next=page.has_next,
            has_prev=page.has_prev,
        )


class OrderListResponse(CamelModel):
    success: bool = True
    orders: list[OrderSchema]
    pagination: PaginationSchema


class VariantSchema(CamelModel):
    id: int
    title: str
    price: float
    is_enabled: bool
    is_available: bool
    sku: str | None = None

    @classmethod
    def from_domain(cls, variant: Variant) -> "VariantSchema":
        return cls(
            id=variant.id,
            title=variant.title,
            price=to_amount(variant.price),
            is_enabled=variant.is_enabled,
            is_available=variant.is_available,
            sku=variant.sku,
        )


class ProductSummarySchema(CamelModel):
    """Storefront card for a product."""

    id: str
    name: str
    price: float
    description: str
    image1: str
    image2: str
    variants: list[VariantSchema]
    options: list[dict[str, Any]]
    tags: list[str]
    visible: bool
    default_variant_id: int | None = None

    @classmethod
    def from_domain(cls, product: Product) -> "ProductSummarySchema":
        default_variant = product.default_variant()
        return cls(
            id=product.id,
            name=product.title,
            price=to_amount(product.min_price()) or 0.0,
            description=product.description,
            image1=product.default_image() or PLACEHOLDER_IMAGE,
            image2=product.secondary_image() or PLACEHOLDER_IMAGE,
            variants=[VariantSchema.from_domain(v) for v in product.enabled_variants()],
            options=product.options,
            tags=product.tags,
            visible=product.visible,
            default_variant_id=default_variant.id if default_variant else None,
        )


class ProductImageSchema(CamelModel):
    src: str
    variant_ids: list[int] = Field(default_factory=list)
    position: str | None = None
    is_default: bool = False


class ProductDetailSchema(ProductSummarySchema):
    """Product page: images and only purchasable variants."""

    images: list[ProductImageSchema] = Field(default_factory=list)
    blueprint_id: int | None = None
    print_provider_id: int | None = None

    @classmethod
    def from_domain(cls, product: Product) -> "ProductDetailSchema":
        summary = ProductSummarySchema.from_domain(product).model_dump()
        summary["variants"] = [
            VariantSchema.from_domain(v) for v in product.variants if v.is_enabled and v.is_available
        ]
        return cls(
            **summary,
            images=[
                ProductImageSchema(
                    src=i.src, variant_ids=i.variant_ids, position=i.position, is_default=i.is_default
                )
                for i in product.images
            ],
            blueprint_id=product.blueprint_id,
            print_provider_id=product.print_provider_id,
        )


class ProductListResponse(CamelModel):
    products: list[ProductSummarySchema]
    pagination: PaginationSchema


class RateLimitStatusSchema(CamelModel):
    request_count: int
    limit: int
    remaining: int
    window_seconds: float
    is_limited: bool

    @classmethod
    def from_window(cls, window: RateLimitWindow) -> "RateLimitStatusSchema":
        return cls(
            request_count=window.request_count,
            limit=window.limit,
            remaining=window.remaining,
            window_seconds=window.window_seconds,
            is_limited=window.is_limited,
        )


class ProviderHealthResponse(CamelModel):
    status: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)
    rate_limit: RateLimitStatusSchema | None = None
