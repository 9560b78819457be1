# core/order_service.py
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from greatwok.core.cart_service import clear_user_cart
from greatwok.core.errors import ServiceError, ConflictError
from greatwok.models.address import Address
from greatwok.models.dish import Dish
from greatwok.models.order import Order, OrderItem, OrderStatus, can_transition

logger = logging.getLogger(__name__)


def get_order(db: Session, order_id: int):
    return db.query(Order).filter(Order.order_id == order_id).first()


def get_order_by_key(db: Session, user_id: int, idempotency_key: str):
    return db.query(Order).filter(
        Order.user_id == user_id,
        Order.idempotency_key == idempotency_key
    ).first()


def place_order(db: Session, user_id: int, address_id: int, total_price, cart_items,
                delivery_type: str = "delivery", clear_cart: bool = True, idempotency_key: str = None):
    """
    Create an order, its items and (optionally) empty the user's cart in one transaction.

    ``cart_items`` is the client's snapshot: dicts with dish_id, quantity and price.
    Replaying the same ``idempotency_key`` returns the order created the first time.

    Returns:
        tuple: (order, created)
    """
    if idempotency_key:
        existing = get_order_by_key(db, user_id, idempotency_key)
        if existing:
            logger.info("Replayed order %s for key %s", existing.order_id, idempotency_key)
            return existing, False

    address = db.query(Address).filter(Address.address_id == address_id).first()
    if not address or address.user_id != user_id:
        raise ServiceError("Invalid address_id. The address does not exist for this user.")

    dish_ids = {line["dish_id"] for line in cart_items}
    known = {row.dish_id for row in db.query(Dish.dish_id).filter(Dish.dish_id.in_(dish_ids))}
    missing = sorted(dish_ids - known)
    if missing:
        raise ServiceError(f"Invalid dish_id(s): {', '.join(str(d) for d in missing)}")

    try:
        order = Order(
            user_id=user_id,
            address_id=address_id,
            total_price=total_price,
            delivery_type=delivery_type,
            status=OrderStatus.PENDING.value,
            idempotency_key=idempotency_key,
        )
        db.add(order)
        db.flush()

        for line in cart_items:
            order.items.append(OrderItem(
                dish_id=line["dish_id"],
                quantity=line["quantity"],
                price=line["price"],
                status=OrderStatus.PENDING.value,
            ))

        if clear_cart:
            clear_user_cart(db, user_id, commit=False)

        db.commit()
    except IntegrityError:
        db.rollback()
        # two requests raced on the same idempotency key; hand back the winner
        if idempotency_key:
            existing = get_order_by_key(db, user_id, idempotency_key)
            if existing:
                return existing, False
        raise
    except Exception:
        db.rollback()
        raise

    db.refresh(order)
    logger.info("Order %s placed by user %s with %s item(s)", order.order_id, user_id, len(order.items))
    return order, True


def get_user_orders(db: Session, user_id: int):
    return (
        db.query(Order)
        .filter(Order.user_id == user_id)
        .order_by(Order.placed_at.desc(), Order.order_id.desc())
        .all()
    )


def get_order_items(db: Session, order_id: int):
    return (
        db.query(OrderItem)
        .options(joinedload(OrderItem.dish))
        .filter(OrderItem.order_id == order_id)
        .order_by(OrderItem.order_item_id.asc())
        .all()
    )


def get_all_orders(db: Session):
    """Admin view: every order with its customer and delivery address."""
    return (
        db.query(Order)
        .options(joinedload(Order.user), joinedload(Order.address))
        .order_by(Order.placed_at.desc(), Order.order_id.desc())
        .all()
    )


def get_all_order_items(db: Session):
    return (
        db.query(OrderItem)
        .options(joinedload(OrderItem.dish))
        .order_by(OrderItem.order_id.asc(), OrderItem.order_item_id.asc())
        .all()
    )


def _transition(row, target: OrderStatus, label: str):
    if not can_transition(row.status, target):
        raise ConflictError(f'Cannot change {label} status from "{row.status}" to "{target.value}"')
    row.status = target.value


def update_order_status(db: Session, order_id: int, target: OrderStatus = OrderStatus.DONE_PREPARING):
    order = get_order(db, order_id)
    if not order:
        return None
    _transition(order, target, "order")
    db.commit()
    return order


def update_order_item_status(db: Session, order_item_id: int, target: OrderStatus = OrderStatus.DONE_PREPARING):
    item = db.query(OrderItem).filter(OrderItem.order_item_id == order_item_id).first()
    if not item:
        return None
    _transition(item, target, "order item")
    db.commit()
    return item
