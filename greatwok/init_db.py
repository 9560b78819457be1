import logging

from greatwok.core.db import Base, engine, SessionLocal
from greatwok.core.logger import configure_logging
from greatwok.core.user_service import create_default_admin
from greatwok.core.config import ADMIN_EMAIL
from greatwok.models.user import User
from greatwok.models.category import Category
from greatwok.models.dish import Dish
from greatwok.models.inventory import Inventory
from greatwok.models.cart import CartItem
from greatwok.models.address import Address
from greatwok.models.order import Order, OrderItem
from greatwok.models.review import Review
from greatwok.models.audit_log import AuditLog

logger = logging.getLogger(__name__)

SEED_MENU = {
    "Appetizers": [
        ("Spring Rolls", "Crispy rolls filled with cabbage, carrot and glass noodles.", "6.50"),
        ("Pork Dumplings", "Pan-fried dumplings with soy-vinegar dip.", "8.00"),
        ("Hot and Sour Soup", "Tofu, bamboo shoots and egg ribbons.", "5.75"),
    ],
    "Wok Classics": [
        ("Kung Pao Chicken", "Chicken, peanuts and dried chillies.", "13.50"),
        ("Beef and Broccoli", "Flank steak in oyster sauce.", "14.25"),
        ("Sweet and Sour Pork", "Pineapple, peppers and crispy pork.", "12.95"),
        ("Mapo Tofu", "Silken tofu in a spicy bean sauce.", "11.00"),
    ],
    "Noodles and Rice": [
        ("Chicken Chow Mein", "Egg noodles with chicken and vegetables.", "11.50"),
        ("Yangzhou Fried Rice", "Shrimp, char siu and egg.", "10.75"),
    ],
    "Drinks": [
        ("Jasmine Tea", "Pot of jasmine green tea.", "3.00"),
        ("Lychee Soda", "Sparkling lychee drink.", "3.50"),
    ],
}

DEFAULT_STOCK = 50


def seed_menu(db):
    if db.query(Dish).first():
        logger.info("Menu already seeded.")
        return
    for category_name, dishes in SEED_MENU.items():
        category = Category(category_name=category_name)
        db.add(category)
        db.flush()
        for name, description, price in dishes:
            dish = Dish(dish_name=name, description=description, price=price, category_id=category.category_id)
            db.add(dish)
            db.flush()
            db.add(Inventory(dish_id=dish.dish_id, quantity_in_stock=DEFAULT_STOCK))
    db.commit()
    logger.info("Sample menu seeded.")


def init_db():
    logger.info("Rebuilding database (drop/create)...")
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created: %s", ", ".join(sorted(Base.metadata.tables)))

    db = SessionLocal()
    try:
        create_default_admin(db)
        seed_menu(db)
    finally:
        db.close()
    logger.info("Database initialization complete. Default admin: %s", ADMIN_EMAIL)


if __name__ == "__main__":
    configure_logging()
    init_db()
