# backend/services/errors.py
"""
Errors raised by the service layer.

Each one is an ``HTTPException`` with a fixed status code, so FastAPI renders
it as ``{"detail": ...}`` without any extra handler.
"""

from fastapi import HTTPException


class ServiceError(HTTPException):
    status_code = 500
    default_detail = "Server error"

    def __init__(self, detail: str = None):
        super().__init__(status_code=self.status_code, detail=detail or self.default_detail)


class Unauthorized(ServiceError):
    status_code = 401
    default_detail = "Unauthorized: Please log in"


class InvalidCredentials(ServiceError):
    status_code = 401
    default_detail = "Invalid credentials"


class Forbidden(ServiceError):
    status_code = 403
    default_detail = "Forbidden"


class NotFound(ServiceError):
    status_code = 404
    default_detail = "Not found"


class UserNotFound(NotFound):
    default_detail = "User not found"


class ProductNotFound(NotFound):
    default_detail = "Product not found"


class OrderNotFound(NotFound):
    default_detail = "Order not found"


class ValidationError(ServiceError):
    status_code = 400
    default_detail = "Invalid request"


class InsufficientStock(ServiceError):
    status_code = 400
    default_detail = "Insufficient stock"


class Conflict(ServiceError):
    status_code = 409
    default_detail = "Already exists"


class InternalError(ServiceError):
    status_code = 500
    default_detail = "Server error"


class StorageUnavailable(InternalError):
    status_code = 503
    default_detail = "Image storage not available"
