# backend/schemas/orders.py
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field, constr

RequiredStr = constr(strip_whitespace=True, min_length=1)


class OrderCreate(BaseModel):
    product_id: int = Field(gt=0)
    customer_name: RequiredStr
    quantity: int = Field(gt=0)
    address: RequiredStr
    contact: RequiredStr
    cod: float = Field(ge=0, allow_inf_nan=False)
    description: str = ""


class DeliveryUpdate(BaseModel):
    delivered: bool


class OrderOut(BaseModel):
    id: int
    worker_id: int
    product_id: int
    customer_name: str
    quantity: int
    address: str
    contact: str
    cod: float
    description: str
    delivered: bool
    created_at: datetime
    date_added: Optional[str] = None


class ProductSummary(BaseModel):
    id: int
    name: str
    size: Optional[str] = None
    color: Optional[str] = None
    image_url: Optional[str] = None


class WorkerSummary(BaseModel):
    id: int
    username: str


class OrderListItem(OrderOut):
    # None when the referenced record has been deleted
    product: Optional[ProductSummary] = None
    worker: Optional[WorkerSummary] = None


class MyOrdersPage(BaseModel):
    orders: List[OrderListItem]
    worker_name: str
    total_count: int
    current_page: int
    total_pages: int


class AllOrdersPage(BaseModel):
    orders: List[OrderListItem]
    total_count: int
    current_page: int
    total_pages: int


class OrderResponse(BaseModel):
    message: str
    order: OrderOut
