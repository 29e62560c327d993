# backend/gateway/gateway_router.py
from fastapi import APIRouter

from routers.auth_router import router as auth_router
from routers.products_router import router as products_router
from routers.orders_router import router as orders_router
from routers.images_gateway_router import router as images_gateway_router

gateway_router = APIRouter(prefix="/gateway", tags=["gateway"])

gateway_router.include_router(auth_router)            # /gateway/auth/...
gateway_router.include_router(products_router)        # /gateway/products/...
gateway_router.include_router(orders_router)          # /gateway/orders/...

# External services routers
gateway_router.include_router(images_gateway_router)  # /gateway/images/...
