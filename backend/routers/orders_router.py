# backend/routers/orders_router.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database.session import get_db
from routers.dependencies import get_session_user
from schemas.auth import MessageResponse, SessionUser
from schemas.orders import (
    AllOrdersPage, DeliveryUpdate, MyOrdersPage, OrderCreate, OrderResponse,
)
from services import order_workflow

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("/", response_model=OrderResponse, status_code=201)
def place_order(
    body: OrderCreate,
    user: Optional[SessionUser] = Depends(get_session_user),
    db: Session = Depends(get_db),
):
    o = order_workflow.place_order(db, user, body)
    return OrderResponse(message="Order added successfully", order=order_workflow.order_to_out(o))


@router.get("/mine", response_model=MyOrdersPage)
def my_orders(
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    user: Optional[SessionUser] = Depends(get_session_user),
    db: Session = Depends(get_db),
):
    return order_workflow.list_my_orders(db, user, page, limit, search)


@router.get("/", response_model=AllOrdersPage)
def all_orders(
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    user: Optional[SessionUser] = Depends(get_session_user),
    db: Session = Depends(get_db),
):
    return order_workflow.list_all_orders(db, user, page, limit, search)


@router.put("/{order_id}/delivery", response_model=OrderResponse)
def update_delivery(
    order_id: int,
    body: DeliveryUpdate,
    user: Optional[SessionUser] = Depends(get_session_user),
    db: Session = Depends(get_db),
):
    o = order_workflow.update_delivery_status(db, user, order_id, body.delivered)
    return OrderResponse(message="Order updated successfully", order=order_workflow.order_to_out(o))


@router.delete("/{order_id}", response_model=MessageResponse)
def delete_order(
    order_id: int,
    user: Optional[SessionUser] = Depends(get_session_user),
    db: Session = Depends(get_db),
):
    order_workflow.delete_order(db, user, order_id)
    return MessageResponse(message="Order deleted successfully")
