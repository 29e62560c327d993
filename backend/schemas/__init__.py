# backend/schemas/__init__.py

# auth
from .auth import (
    SessionUser, LoginPayload, RegisterWorkerPayload, LoginResponse,
    AuthStatus, RegisterResponse, MessageResponse,
)

# products
from .products import (
    ProductUpdate, ProductOut, ProductPage, ImageUploadResponse,
)

# orders
from .orders import (
    OrderCreate, DeliveryUpdate, OrderOut, OrderListItem,
    ProductSummary, WorkerSummary, MyOrdersPage, AllOrdersPage, OrderResponse,
)

__all__ = [
    # auth
    "SessionUser", "LoginPayload", "RegisterWorkerPayload", "LoginResponse",
    "AuthStatus", "RegisterResponse", "MessageResponse",
    # products
    "ProductUpdate", "ProductOut", "ProductPage", "ImageUploadResponse",
    # orders
    "OrderCreate", "DeliveryUpdate", "OrderOut", "OrderListItem",
    "ProductSummary", "WorkerSummary", "MyOrdersPage", "AllOrdersPage", "OrderResponse",
]
