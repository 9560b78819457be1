from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from greatwok.core.errors import NotFoundError
from greatwok.models.cart import CartItem
from greatwok.models.dish import Dish


def get_user_cart(db: Session, user_id: int):
    """Get all cart items for a user, with their dishes loaded"""
    return (
        db.query(CartItem)
        .options(joinedload(CartItem.dish))
        .filter(CartItem.user_id == user_id)
        .order_by(CartItem.cart_item_id.asc())
        .all()
    )


def get_cart_item(db: Session, cart_item_id: int):
    return db.query(CartItem).filter(CartItem.cart_item_id == cart_item_id).first()


def add_to_cart(db: Session, user_id: int, dish_id: int, quantity: int = 1):
    """
    Add item to cart or update quantity if exists.

    Returns (cart_item, created).
    """
    if not db.query(Dish).filter(Dish.dish_id == dish_id).first():
        raise NotFoundError("Dish not found")

    cart_item = db.query(CartItem).filter(
        CartItem.user_id == user_id,
        CartItem.dish_id == dish_id
    ).first()

    created = cart_item is None
    if cart_item:
        cart_item.quantity += quantity
    else:
        cart_item = CartItem(user_id=user_id, dish_id=dish_id, quantity=quantity)
        db.add(cart_item)

    try:
        db.commit()
    except IntegrityError:
        # a concurrent add inserted the same (user, dish) pair first; merge into it
        db.rollback()
        cart_item = db.query(CartItem).filter(
            CartItem.user_id == user_id,
            CartItem.dish_id == dish_id
        ).first()
        cart_item.quantity += quantity
        db.commit()
        created = False

    db.refresh(cart_item)
    return cart_item, created


def update_cart_quantity(db: Session, cart_item_id: int, quantity: int):
    """Update cart item quantity"""
    cart_item = get_cart_item(db, cart_item_id)
    if not cart_item:
        return None
    cart_item.quantity = quantity
    db.commit()
    return cart_item


def remove_from_cart(db: Session, cart_item_id: int) -> bool:
    """Remove item from cart"""
    cart_item = get_cart_item(db, cart_item_id)
    if cart_item:
        db.delete(cart_item)
        db.commit()
        return True
    return False


def clear_user_cart(db: Session, user_id: int, commit: bool = True) -> int:
    """Clear all cart items for a user; returns the number of rows removed"""
    removed = db.query(CartItem).filter(CartItem.user_id == user_id).delete(synchronize_session=False)
    if commit:
        db.commit()
    return removed