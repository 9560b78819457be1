# core/catalog_service.py
import logging
from sqlalchemy.orm import Session

from greatwok.core.errors import ServiceError, ConflictError
from greatwok.models.category import Category
from greatwok.models.dish import Dish
from greatwok.models.cart import CartItem
from greatwok.models.inventory import Inventory
from greatwok.models.order import OrderItem
from greatwok.models.review import Review

logger = logging.getLogger(__name__)


# ===================== CATEGORIES =====================

def list_categories(db: Session):
    return db.query(Category).order_by(Category.category_id.asc()).all()


def get_category(db: Session, category_id: int):
    return db.query(Category).filter(Category.category_id == category_id).first()


def create_category(db: Session, category_name: str):
    category = Category(category_name=category_name)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def update_category(db: Session, category_id: int, category_name: str):
    category = get_category(db, category_id)
    if not category:
        return None
    category.category_name = category_name
    db.commit()
    return category


def delete_category(db: Session, category_id: int) -> bool:
    """Delete a category; its dishes stay on the menu without a category."""
    category = get_category(db, category_id)
    if not category:
        return False
    db.query(Dish).filter(Dish.category_id == category_id).update(
        {Dish.category_id: None}, synchronize_session=False
    )
    db.delete(category)
    db.commit()
    return True


# ===================== DISHES =====================

def list_dishes(db: Session, category_id: int = None, available: bool = None):
    """All dishes, newest first, optionally filtered."""
    query = db.query(Dish)
    if category_id is not None:
        query = query.filter(Dish.category_id == category_id)
    if available is not None:
        query = query.filter(Dish.is_available == available)
    return query.order_by(Dish.created_at.desc(), Dish.dish_id.desc()).all()


def get_dish(db: Session, dish_id: int):
    return db.query(Dish).filter(Dish.dish_id == dish_id).first()


def _check_category(db: Session, category_id):
    if category_id is not None and not get_category(db, category_id):
        raise ServiceError("Invalid category_id. The category does not exist.")


def create_dish(db: Session, dish_name, price, description=None, category_id=None,
                image_url=None, is_available=True):
    _check_category(db, category_id)
    dish = Dish(
        dish_name=dish_name,
        description=description,
        price=price,
        category_id=category_id,
        image_url=image_url,
        is_available=is_available,
    )
    db.add(dish)
    db.commit()
    db.refresh(dish)
    return dish


def update_dish(db: Session, dish_id: int, changes: dict):
    """Apply ``changes`` (None clears a column); returns None if the dish is missing."""
    dish = get_dish(db, dish_id)
    if not dish:
        return None
    if "category_id" in changes:
        _check_category(db, changes["category_id"])
    for field, value in changes.items():
        setattr(dish, field, value)
    db.commit()
    db.refresh(dish)
    return dish


def delete_dish(db: Session, dish_id: int) -> bool:
    """
    Delete a dish together with its inventory row, reviews and cart lines.

    Dishes that appear on placed orders are kept so order history stays intact.
    """
    dish = get_dish(db, dish_id)
    if not dish:
        return False

    if db.query(OrderItem).filter(OrderItem.dish_id == dish_id).first():
        raise ConflictError("Dish is referenced by existing orders. Mark it unavailable instead.")

    try:
        db.query(CartItem).filter(CartItem.dish_id == dish_id).delete(synchronize_session=False)
        db.query(Review).filter(Review.dish_id == dish_id).delete(synchronize_session=False)
        db.query(Inventory).filter(Inventory.dish_id == dish_id).delete(synchronize_session=False)
        db.delete(dish)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Dish %s deleted", dish_id)
    return True
