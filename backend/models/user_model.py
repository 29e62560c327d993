# backend/models/user_model.py

from sqlalchemy import Column, Integer, DateTime, Enum
from sqlalchemy.orm import relationship, validates
from sqlalchemy.types import Unicode
from werkzeug.security import generate_password_hash, check_password_hash

from database.session import Base, utcnow
from models.role import Role


class User(Base):
    """Admin or worker principal. Lookups are always filtered by ``role``."""

    __tablename__ = "users"
    id            = Column(Integer, primary_key=True, index=True)
    username      = Column(Unicode(64), unique=True, nullable=False, index=True)
    password_hash = Column(Unicode(255), nullable=False)
    role          = Column(
        Enum(Role, name="user_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    created_at    = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    orders = relationship(
        "Order",
        primaryjoin="foreign(Order.worker_id) == User.id",
        order_by="Order.id",
        viewonly=True,
    )

    @property
    def password(self):
        raise AttributeError("password is write-only")

    @password.setter
    def password(self, plain_password: str) -> None:
        # the only writer of password_hash
        self.password_hash = generate_password_hash(plain_password)

    def check_password(self, plain_password: str) -> bool:
        return check_password_hash(self.password_hash, plain_password)

    @validates("role")
    def _freeze_role(self, key, value):
        if self.role is not None and Role(value) is not self.role:
            raise ValueError("role cannot be changed after creation")
        return Role(value)

    def __repr__(self) -> str:
        return f"<User {self.username!r} role={self.role.value if self.role else None!r}>"
