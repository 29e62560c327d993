# backend/services/catalog_service.py
import logging
import math
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.product_model import Product
from schemas.auth import SessionUser
from schemas.products import ProductOut, ProductPage, ProductUpdate
from services.access_control import require_admin
from services.cloudinary_service import validate_image_file
from services.errors import (
    InternalError, ProductNotFound, StorageUnavailable, ValidationError,
)
from services.pagination import PageRequest, contains_filter, normalize_search

logger = logging.getLogger(__name__)

MAX_INT = 2 ** 63 - 1


def to_out(p: Product) -> ProductOut:
    return ProductOut(
        id=p.id,
        name=p.name,
        price=float(p.price),
        stock=p.stock,
        description=p.description,
        size=p.size,
        color=p.color,
        image_url=p.image_url,
        created_at=p.created_at,
    )


def _parse_number(field: str, value: Any, cast):
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        number = cast(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number")
    if isinstance(number, float) and not math.isfinite(number):
        raise ValidationError(f"{field} must be a finite number")
    if isinstance(number, int) and number > MAX_INT:
        raise ValidationError(f"{field} is too large")
    if number < 0:
        raise ValidationError(f"{field} must be >= 0")
    return number


async def add_product(
    db: Session,
    actor: Optional[SessionUser],
    name: Optional[str],
    price: Any,
    stock: Any,
    description: Optional[str] = None,
    size: Optional[str] = None,
    color: Optional[str] = None,
    image: Optional[Dict[str, Any]] = None,
    storage=None,
) -> Product:
    """
    Create a product, uploading its image first when one is attached.

    ``image`` is ``{"content": bytes, "filename": str}``. An upload failure
    aborts the whole operation before anything is written.
    """
    require_admin(actor)

    name = (name or "").strip()
    price = _parse_number("price", price, float)
    stock = _parse_number("stock", stock, int)
    if not name or price is None or stock is None:
        raise ValidationError("name, price and stock are required")

    image_url = image_public_id = None
    if image:
        validate_image_file(image["content"], image["filename"])
        if storage is None:
            raise StorageUnavailable()
        uploaded = await storage.upload_product_image(
            file_content=image["content"],
            filename=image["filename"],
        )
        image_url = uploaded["url"]
        image_public_id = uploaded.get("public_id")

    p = Product(
        name=name,
        price=price,
        stock=stock,
        description=description,
        size=size or None,
        color=color or None,
        image_url=image_url,
        image_public_id=image_public_id,
    )
    db.add(p)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to save product %r", name)
        if image_public_id and not await storage.delete_product_image(image_public_id):
            logger.warning("Could not remove image %s of unsaved product %r", image_public_id, name)
        raise InternalError("Server error") from e
    db.refresh(p)
    logger.info("Product %s (%r) added by %s", p.id, p.name, actor.username)
    return p


def get_product(db: Session, product_id: int) -> Product:
    p = db.get(Product, product_id)
    if not p:
        raise ProductNotFound()
    return p


def update_product(db: Session, actor: Optional[SessionUser], product_id: int, body: ProductUpdate) -> Product:
    require_admin(actor)
    p = get_product(db, product_id)

    # only fields present in the request
    for field, value in body.model_dump(exclude_unset=True).items():
        if value is None and field in ("name", "price", "stock"):
            raise ValidationError(f"{field} cannot be empty")
        setattr(p, field, value)

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to update product %s", product_id)
        raise InternalError("Server error") from e
    db.refresh(p)
    return p


async def delete_product(db: Session, actor: Optional[SessionUser], product_id: int, storage=None) -> None:
    """Delete a product. Orders that reference it are left untouched."""
    require_admin(actor)
    p = get_product(db, product_id)
    public_id = p.image_public_id

    db.delete(p)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to delete product %s", product_id)
        raise InternalError("Server error") from e
    logger.info("Product %s deleted by %s", product_id, actor.username)

    if public_id and storage is not None:
        if not await storage.delete_product_image(public_id):
            logger.warning("Could not remove image %s of deleted product %s", public_id, product_id)


def list_products(db: Session, page: Any = None, limit: Any = None, search: Optional[str] = None) -> ProductPage:
    paging = PageRequest.from_query(page, limit)
    search = normalize_search(search)

    q = db.query(Product)
    if search:
        q = q.filter(contains_filter(db, Product.name, search))

    total_count = q.count()
    products = (
        q.order_by(Product.created_at.desc(), Product.id.desc())
        .offset(paging.skip)
        .limit(paging.limit)
        .all()
    )
    return ProductPage(
        products=[to_out(p) for p in products],
        total_count=total_count,
        current_page=paging.page,
        total_pages=paging.total_pages(total_count),
    )
