# routes/cart.py
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from greatwok.core.db import get_db
from greatwok.core import cart_service
from greatwok.core.schemas import CartAdd, CartUpdate
from greatwok.core.security import get_current_user, ensure_owner
from greatwok.models.user import User

router = APIRouter(prefix="/cart", tags=["cart"])

NOT_FOUND = "Cart item not found"


def _owned_item(db: Session, cart_item_id: int, user: User):
    item = cart_service.get_cart_item(db, cart_item_id)
    if not item:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    ensure_owner(user, item.user_id)
    return item


@router.get("/item/{cart_item_id}")
def get_cart_item(cart_item_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return _owned_item(db, cart_item_id, user).to_dict(with_dish=True)


@router.put("/item/{cart_item_id}")
def update_cart_item(cart_item_id: int, payload: CartUpdate,
                     user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    _owned_item(db, cart_item_id, user)
    item = cart_service.update_cart_quantity(db, cart_item_id, payload.quantity)
    return item.to_dict(with_dish=True)


@router.delete("/item/{cart_item_id}")
def delete_cart_item(cart_item_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    _owned_item(db, cart_item_id, user)
    cart_service.remove_from_cart(db, cart_item_id)
    return {"message": "Cart item removed successfully"}


@router.get("/{user_id}")
def get_cart(user_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    ensure_owner(user, user_id)
    return [item.to_dict(with_dish=True) for item in cart_service.get_user_cart(db, user_id)]


@router.post("")
def add_to_cart(payload: CartAdd, response: Response,
                user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    ensure_owner(user, payload.user_id)
    item, created = cart_service.add_to_cart(db, payload.user_id, payload.dish_id, payload.quantity)
    response.status_code = 201 if created else 200
    return item.to_dict(with_dish=True)


@router.delete("/{user_id}")
def clear_cart(user_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    ensure_owner(user, user_id)
    removed = cart_service.clear_user_cart(db, user_id)
    return {"message": "Cart cleared", "removed": removed}
