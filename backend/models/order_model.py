# backend/models/order_model.py

from sqlalchemy import Column, Integer, Float, Boolean, DateTime, CheckConstraint
from sqlalchemy.types import Unicode, UnicodeText
from sqlalchemy.orm import relationship

from database.session import Base, utcnow


class Order(Base):
    __tablename__ = "orders"
    id            = Column(Integer, primary_key=True, index=True)
    # plain ids: deleting a product or user leaves the reference dangling
    worker_id     = Column(Integer, nullable=False, index=True)
    product_id    = Column(Integer, nullable=False, index=True)
    customer_name = Column(Unicode(255), nullable=False)
    quantity      = Column(Integer, nullable=False)
    address       = Column(Unicode(512), nullable=False)
    contact       = Column(Unicode(64), nullable=False)
    cod           = Column(Float, nullable=False)
    description   = Column(UnicodeText, nullable=False)
    delivered     = Column(Boolean, nullable=False, default=False)
    created_at    = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    worker  = relationship("User", primaryjoin="foreign(Order.worker_id) == User.id", viewonly=True)
    product = relationship("Product", primaryjoin="foreign(Order.product_id) == Product.id", viewonly=True)

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_orders_quantity_positive"),
    )

    @property
    def date_added(self) -> str:
        # "18 Oct 2026"
        return self.created_at.strftime("%d %b %Y") if self.created_at else None
