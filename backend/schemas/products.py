# backend/schemas/products.py
from datetime import datetime
from typing import List, Optional, NewType
from pydantic import BaseModel, Field, constr

NameStr = NewType("NameStr", constr(strip_whitespace=True, min_length=1, max_length=255))


class ProductUpdate(BaseModel):
    name: Optional[NameStr] = None
    price: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    stock: Optional[int] = Field(default=None, ge=0, le=2 ** 63 - 1)
    description: Optional[str] = None
    size: Optional[str] = None
    color: Optional[str] = None


class ProductOut(BaseModel):
    id: int
    name: str
    price: float
    stock: int
    description: Optional[str] = None
    size: Optional[str] = None
    color: Optional[str] = None
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None


class ProductPage(BaseModel):
    products: List[ProductOut]
    total_count: int
    current_page: int
    total_pages: int


class ImageUploadResponse(BaseModel):
    image_url: str
