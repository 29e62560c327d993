# backend/models/product_model.py

from sqlalchemy import Column, Integer, Float, DateTime, CheckConstraint
from sqlalchemy.types import Unicode, UnicodeText

from database.session import Base, utcnow


class Product(Base):
    __tablename__ = "products"

    id          = Column(Integer, primary_key=True, index=True)
    name        = Column(Unicode(255), nullable=False)
    price       = Column(Float, nullable=False)
    stock       = Column(Integer, nullable=False, default=0)
    description = Column(UnicodeText, nullable=True)
    size        = Column(Unicode(64), nullable=True)
    color       = Column(Unicode(64), nullable=True)
    image_url   = Column(Unicode(512), nullable=True)
    image_public_id = Column(Unicode(255), nullable=True)
    created_at  = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at  = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
    )
