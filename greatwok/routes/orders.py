# routes/orders.py
from typing import Optional

from fastapi import APIRouter, Body, Depends, Header, HTTPException, Response
from sqlalchemy.orm import Session

from greatwok.core.db import get_db
from greatwok.core import order_service
from greatwok.core.address_service import format_address
from greatwok.core.logger import log_action
from greatwok.core.schemas import OrderCreate, StatusUpdate
from greatwok.core.security import get_current_user, require_admin, ensure_owner
from greatwok.models.order import IDEMPOTENCY_KEY_LENGTH
from greatwok.models.user import User

router = APIRouter(tags=["orders"])

NOT_FOUND = "Order not found"


def _owned_order(db: Session, order_id: int, user: User):
    order = order_service.get_order(db, order_id)
    if not order:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    ensure_owner(user, order.user_id)
    return order


@router.post("/orders", status_code=201)
def place_order(payload: OrderCreate, response: Response,
                idempotency_key: Optional[str] = Header(None, alias="Idempotency-Key",
                                                        max_length=IDEMPOTENCY_KEY_LENGTH),
                user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    ensure_owner(user, payload.user_id)
    order, created = order_service.place_order(
        db,
        user_id=payload.user_id,
        address_id=payload.address_id,
        total_price=payload.total_price,
        cart_items=[line.model_dump() for line in payload.cart_items],
        delivery_type=payload.delivery_type,
        clear_cart=payload.clear_cart,
        idempotency_key=(idempotency_key or "").strip() or None,
    )
    if not created:
        response.status_code = 200
    return {"message": "Order placed successfully!", "order": order.to_dict(with_items=True)}


@router.get("/orders")
def list_orders(admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    rows = []
    for order in order_service.get_all_orders(db):
        data = order.to_dict()
        data["username"] = order.user.username if order.user else None
        data["email"] = order.user.email if order.user else None
        data["address"] = format_address(order.address)
        rows.append(data)
    return rows


@router.get("/orders/user/{user_id}")
def list_user_orders(user_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    ensure_owner(user, user_id)
    return [o.to_dict() for o in order_service.get_user_orders(db, user_id)]


@router.get("/orders/{order_id}")
def get_order(order_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    order = _owned_order(db, order_id, user)
    items = order_service.get_order_items(db, order_id)
    return {"order": order.to_dict(), "items": [i.to_dict(with_dish=True) for i in items]}


@router.get("/orders/{order_id}/items")
def get_order_items(order_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    _owned_order(db, order_id, user)
    return [i.to_dict(with_dish=True) for i in order_service.get_order_items(db, order_id)]


@router.put("/orders/{order_id}/status")
def update_order_status(order_id: int, payload: Optional[StatusUpdate] = Body(None),
                        admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    target = (payload or StatusUpdate()).status
    order = order_service.update_order_status(db, order_id, target)
    if not order:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    log_action(db, admin.email, f"Order {order_id} marked {order.status}")
    return {"message": "Order status updated", "order": order.to_dict()}


@router.get("/order-items")
def list_order_items(admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    return [i.to_dict(with_dish=True) for i in order_service.get_all_order_items(db)]


@router.put("/order-items/{order_item_id}/status")
def update_order_item_status(order_item_id: int, payload: Optional[StatusUpdate] = Body(None),
                             admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    target = (payload or StatusUpdate()).status
    item = order_service.update_order_item_status(db, order_item_id, target)
    if not item:
        raise HTTPException(status_code=404, detail="Order item not found")
    log_action(db, admin.email, f"Order item {order_item_id} marked {item.status}")
    return {"message": "Order item status updated", "order_item": item.to_dict()}
