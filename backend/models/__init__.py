# backend/models/__init__.py
from .role import Role
from .user_model import User
from .product_model import Product
from .order_model import Order
