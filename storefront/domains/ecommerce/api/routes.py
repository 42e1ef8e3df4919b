"""
E-commerce API Routes

FastAPI routers for checkout, orders, products and provider status.
"""

import logging

from fastapi import APIRouter, Depends, Query

from storefront.config.settings import Settings, get_settings
from storefront.domains.ecommerce.api.dependencies import (
    get_calculate_checkout_use_case,
    get_cancel_order_use_case,
    get_list_orders_use_case,
    get_list_products_use_case,
    get_order_use_case,
    get_place_order_use_case,
    get_product_use_case,
    get_provider_status_use_case,
    get_rate_limiter,
    get_submit_order_use_case,
)
from storefront.domains.ecommerce.api.schemas import (
    CalculateCheckoutRequestSchema,
    CheckoutCalculationResponse,
    OrderActionResponse,
    OrderDetailResponse,
    OrderListResponse,
    OrderSchema,
    PaginationSchema,
    PlaceOrderRequestSchema,
    PlaceOrderResponseSchema,
    ProductDetailSchema,
    ProductListResponse,
    ProductSummarySchema,
    ProviderHealthResponse,
    RateLimitStatusSchema,
)
from storefront.domains.ecommerce.application.use_cases import (
    CalculateCheckoutRequest,
    CalculateCheckoutUseCase,
    CancelOrderUseCase,
    GetOrderUseCase,
    GetProductUseCase,
    ListOrdersUseCase,
    ListProductsUseCase,
    PlaceOrderRequest,
    PlaceOrderUseCase,
    ProviderStatusUseCase,
    SubmitOrderUseCase,
)
from storefront.utils.rate_limiter import WindowRateLimiter

logger = logging.getLogger(__name__)

checkout_router = APIRouter(prefix="/checkout", tags=["Checkout"])
orders_router = APIRouter(prefix="/orders", tags=["Orders"])
products_router = APIRouter(prefix="/products", tags=["Products"])
printify_router = APIRouter(prefix="/printify", tags=["Printify"])


# =============================================================================
# Checkout
# =============================================================================


@checkout_router.post("/calculate", response_model=CheckoutCalculationResponse)
async def calculate_checkout(
    request: CalculateCheckoutRequestSchema,
    use_case: CalculateCheckoutUseCase = Depends(get_calculate_checkout_use_case),
    settings: Settings = Depends(get_settings),
):
    """Calculate subtotal, shipping, tax and total for a cart."""
    result = await use_case.execute(
        CalculateCheckoutRequest(
            cart_items=[item.to_domain(settings.STORE_CURRENCY) for item in request.cart_items],
            shipping_address=request.shipping_address.to_domain() if request.shipping_address else None,
        )
    )
    return CheckoutCalculationResponse.from_domain(result.calculation, result.fallback_reasons)


@checkout_router.post("", response_model=PlaceOrderResponseSchema)
async def place_order(
    request: PlaceOrderRequestSchema,
    use_case: PlaceOrderUseCase = Depends(get_place_order_use_case),
    settings: Settings = Depends(get_settings),
):
    """Create the order and, when requested, send it to production."""
    result = await use_case.execute(
        PlaceOrderRequest(
            cart_items=[item.to_domain(settings.STORE_CURRENCY) for item in request.cart_items],
            shipping_address=request.shipping_address.to_domain() if request.shipping_address else None,
            process_payment=request.process_payment,
        )
    )
    return PlaceOrderResponseSchema(
        payment_processed=result.payment_processed,
        order=OrderSchema.from_domain(result.order),
        message=result.message,
        error=result.submission_error,
    )


# =============================================================================
# Orders
# =============================================================================


@orders_router.get("", response_model=OrderListResponse)
async def list_orders(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    use_case: ListOrdersUseCase = Depends(get_list_orders_use_case),
):
    result = await use_case.execute(page=page, limit=limit)
    return OrderListResponse(
        orders=[OrderSchema.from_domain(o) for o in result.items],
        pagination=PaginationSchema.from_page(result),
    )


@orders_router.get("/{order_id}", response_model=OrderDetailResponse)
async def get_order(
    order_id: str,
    use_case: GetOrderUseCase = Depends(get_order_use_case),
):
    order = await use_case.execute(order_id)
    return OrderDetailResponse(order=OrderSchema.from_domain(order))


@orders_router.post("/{order_id}/submit", response_model=OrderActionResponse)
async def submit_order(
    order_id: str,
    use_case: SubmitOrderUseCase = Depends(get_submit_order_use_case),
):
    """Send a draft order to production."""
    order = await use_case.execute(order_id)
    return OrderActionResponse(order=OrderSchema.from_domain(order), message="Order sent to production")


@orders_router.post("/{order_id}/cancel", response_model=OrderActionResponse)
async def cancel_order(
    order_id: str,
    use_case: CancelOrderUseCase = Depends(get_cancel_order_use_case),
):
    order = await use_case.execute(order_id)
    return OrderActionResponse(order=OrderSchema.from_domain(order), message="Order cancellation requested")


# =============================================================================
# Products
# =============================================================================


@products_router.get("", response_model=ProductListResponse)
async def list_products(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    use_case: ListProductsUseCase = Depends(get_list_products_use_case),
):
    """Visible shop products in storefront format."""
    result = await use_case.execute(page=page, limit=limit)
    return ProductListResponse(
        products=[ProductSummarySchema.from_domain(p) for p in result.items],
        pagination=PaginationSchema.from_page(result),
    )


@products_router.get("/{product_id}", response_model=ProductDetailSchema)
async def get_product(
    product_id: str,
    use_case: GetProductUseCase = Depends(get_product_use_case),
):
    product = await use_case.execute(product_id)
    return ProductDetailSchema.from_domain(product)


# =============================================================================
# Provider status
# =============================================================================


@printify_router.get("/health", response_model=ProviderHealthResponse)
async def printify_health(use_case: ProviderStatusUseCase = Depends(get_provider_status_use_case)):
    """Check Printify connectivity without retries."""
    return await use_case.health()


@printify_router.get("/rate-limit", response_model=RateLimitStatusSchema)
async def printify_rate_limit(rate_limiter: WindowRateLimiter = Depends(get_rate_limiter)):
    """Outbound request window. Needs no Printify credentials."""
    return RateLimitStatusSchema.from_window(rate_limiter.status())


__all__ = ["checkout_router", "orders_router", "products_router", "printify_router"]
