# backend/services/order_workflow.py
"""
Order placement and order listings.

Placing an order takes stock with a single conditional UPDATE
(``stock = stock - :qty WHERE id = :id AND stock >= :qty``) and inserts the
order in the same transaction, so two workers racing for the last units
cannot both succeed and a failed insert never leaves stock deducted.
"""

import logging
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from models.order_model import Order
from models.product_model import Product
from models.user_model import User
from schemas.auth import SessionUser
from schemas.orders import (
    AllOrdersPage, MyOrdersPage, OrderCreate, OrderListItem, OrderOut,
    ProductSummary, WorkerSummary,
)
from services.access_control import require_admin, require_worker
from services.errors import (
    InsufficientStock, InternalError, OrderNotFound, ProductNotFound,
)
from services.pagination import PageRequest, contains_filter, normalize_search

logger = logging.getLogger(__name__)


def order_to_out(o: Order) -> OrderOut:
    return OrderOut(
        id=o.id,
        worker_id=o.worker_id,
        product_id=o.product_id,
        customer_name=o.customer_name,
        quantity=o.quantity,
        address=o.address,
        contact=o.contact,
        cod=float(o.cod),
        description=o.description,
        delivered=bool(o.delivered),
        created_at=o.created_at,
        date_added=o.date_added,
    )


def _to_list_item(o: Order, with_worker: bool) -> OrderListItem:
    product = None
    if o.product is not None:
        product = ProductSummary(
            id=o.product.id,
            name=o.product.name,
            size=o.product.size,
            color=o.product.color,
            image_url=o.product.image_url,
        )
    worker = None
    if with_worker and o.worker is not None:
        worker = WorkerSummary(id=o.worker.id, username=o.worker.username)
    return OrderListItem(**order_to_out(o).model_dump(), product=product, worker=worker)


def place_order(db: Session, actor: Optional[SessionUser], body: OrderCreate) -> Order:
    actor = require_worker(actor)

    product = db.get(Product, body.product_id)
    if not product:
        raise ProductNotFound()
    if product.stock < body.quantity:
        logger.info("Order rejected: product %s has %s left, %s requested",
                    product.id, product.stock, body.quantity)
        raise InsufficientStock()

    try:
        taken = (
            db.query(Product)
            .filter(Product.id == body.product_id, Product.stock >= body.quantity)
            .update({Product.stock: Product.stock - body.quantity}, synchronize_session=False)
        )
        if taken == 0:
            # another order got there between the read and the update
            db.rollback()
            logger.info("Order rejected: product %s sold out concurrently", body.product_id)
            raise InsufficientStock()

        o = Order(
            worker_id=actor.id,
            product_id=body.product_id,
            customer_name=body.customer_name,
            quantity=body.quantity,
            address=body.address,
            contact=body.contact,
            cod=body.cod,
            description=body.description,
            delivered=False,
        )
        db.add(o)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to place order for product %s", body.product_id)
        raise InternalError("Server error") from e

    db.refresh(o)
    logger.info("Order %s placed by %s: %s x product %s",
                o.id, actor.username, o.quantity, o.product_id)
    return o


def _search_orders(db: Session, q, search: Optional[str]):
    search = normalize_search(search)
    if search:
        q = q.filter(contains_filter(db, Order.customer_name, search))
    return q


def list_my_orders(
    db: Session,
    actor: Optional[SessionUser],
    page: Any = None,
    limit: Any = None,
    search: Optional[str] = None,
) -> MyOrdersPage:
    actor = require_worker(actor)
    paging = PageRequest.from_query(page, limit)

    q = _search_orders(db, db.query(Order).filter(Order.worker_id == actor.id), search)
    total_count = q.count()
    orders = (
        q.options(joinedload(Order.product))
        .order_by(Order.created_at.desc(), Order.id.desc())
        .offset(paging.skip)
        .limit(paging.limit)
        .all()
    )
    worker = db.get(User, actor.id)

    return MyOrdersPage(
        orders=[_to_list_item(o, with_worker=False) for o in orders],
        worker_name=worker.username if worker else "Unknown Worker",
        total_count=total_count,
        current_page=paging.page,
        total_pages=paging.total_pages(total_count),
    )


def list_all_orders(
    db: Session,
    actor: Optional[SessionUser],
    page: Any = None,
    limit: Any = None,
    search: Optional[str] = None,
) -> AllOrdersPage:
    require_admin(actor)
    paging = PageRequest.from_query(page, limit)

    q = _search_orders(db, db.query(Order), search)
    total_count = q.count()
    orders = (
        q.options(joinedload(Order.product), joinedload(Order.worker))
        .order_by(Order.created_at.desc(), Order.id.desc())
        .offset(paging.skip)
        .limit(paging.limit)
        .all()
    )
    return AllOrdersPage(
        orders=[_to_list_item(o, with_worker=True) for o in orders],
        total_count=total_count,
        current_page=paging.page,
        total_pages=paging.total_pages(total_count),
    )


def update_delivery_status(db: Session, actor: Optional[SessionUser], order_id: int, delivered: bool) -> Order:
    require_admin(actor)
    o = db.get(Order, order_id)
    if not o:
        raise OrderNotFound()

    o.delivered = delivered
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to update order %s", order_id)
        raise InternalError("Server error") from e
    db.refresh(o)
    return o


def delete_order(db: Session, actor: Optional[SessionUser], order_id: int) -> None:
    """Remove an order. The stock it took is not given back."""
    require_admin(actor)
    o = db.get(Order, order_id)
    if not o:
        raise OrderNotFound()

    db.delete(o)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to delete order %s", order_id)
        raise InternalError("Server error") from e
    logger.info("Order %s deleted by %s", order_id, actor.username)
