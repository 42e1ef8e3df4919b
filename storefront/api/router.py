from fastapi import APIRouter

from storefront.domains.ecommerce.api.routes import (
    checkout_router,
    orders_router,
    printify_router,
    products_router,
)

api_router = APIRouter()

# API routes (all have the API_V1_STR prefix from the app factory)
api_router.include_router(checkout_router)
api_router.include_router(orders_router)
api_router.include_router(products_router)
api_router.include_router(printify_router)
