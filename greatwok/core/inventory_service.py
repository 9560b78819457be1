# core/inventory_service.py
import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.orm.exc import StaleDataError

from greatwok.core.errors import ServiceError, ConflictError
from greatwok.models.dish import Dish
from greatwok.models.inventory import Inventory

logger = logging.getLogger(__name__)

STALE_MESSAGE = "Inventory was changed by someone else. Reload and try again."


def list_inventory(db: Session):
    return (
        db.query(Inventory)
        .options(joinedload(Inventory.dish))
        .order_by(Inventory.inventory_id.asc())
        .all()
    )


def get_inventory(db: Session, inventory_id: int):
    return db.query(Inventory).filter(Inventory.inventory_id == inventory_id).first()


def get_inventory_by_dish(db: Session, dish_id: int):
    return db.query(Inventory).filter(Inventory.dish_id == dish_id).first()


def create_inventory(db: Session, dish_id: int, quantity_in_stock: int):
    if not db.query(Dish).filter(Dish.dish_id == dish_id).first():
        raise ServiceError("Invalid dish_id. The dish does not exist.")
    if get_inventory_by_dish(db, dish_id):
        raise ConflictError("Inventory already exists for this dish")

    item = Inventory(dish_id=dish_id, quantity_in_stock=quantity_in_stock)
    db.add(item)
    try:
        db.commit()
    except IntegrityError:
        # another admin created it between our check and insert
        db.rollback()
        raise ConflictError("Inventory already exists for this dish")
    db.refresh(item)
    return item


def update_inventory(db: Session, inventory_id: int, quantity_in_stock=None, expected_version=None):
    """
    Overwrite the stock level with a new total.

    ``expected_version`` is the version the caller read; a mismatch means the
    row moved on since and the write is refused.
    """
    item = get_inventory(db, inventory_id)
    if not item:
        return None
    if expected_version is not None and expected_version != item.version:
        raise ConflictError(STALE_MESSAGE)

    if quantity_in_stock is not None:
        item.quantity_in_stock = quantity_in_stock
    item.last_updated = datetime.utcnow()
    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        raise ConflictError(STALE_MESSAGE)
    db.refresh(item)
    return item


def restock(db: Session, inventory_id: int, quantity: int):
    """Atomically add ``quantity`` to the stock level."""
    updated = (
        db.query(Inventory)
        .filter(Inventory.inventory_id == inventory_id)
        .update(
            {
                Inventory.quantity_in_stock: Inventory.quantity_in_stock + quantity,
                Inventory.version: Inventory.version + 1,
                Inventory.last_updated: datetime.utcnow(),
            },
            synchronize_session=False,
        )
    )
    db.commit()
    if not updated:
        return None
    item = get_inventory(db, inventory_id)
    db.refresh(item)
    logger.info("Restocked inventory %s by %s", inventory_id, quantity)
    return item


def delete_inventory(db: Session, inventory_id: int) -> bool:
    item = get_inventory(db, inventory_id)
    if not item:
        return False
    db.delete(item)
    db.commit()
    return True
