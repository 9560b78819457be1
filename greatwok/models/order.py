import enum
from sqlalchemy import Column, Integer, Numeric, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from greatwok.core.db import Base


class OrderStatus(str, enum.Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    DONE_PREPARING = "Done Preparing"


# Kitchen may skip straight from Pending to Done Preparing; Done Preparing is terminal.
ALLOWED_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.IN_PROGRESS, OrderStatus.DONE_PREPARING},
    OrderStatus.IN_PROGRESS: {OrderStatus.DONE_PREPARING},
    OrderStatus.DONE_PREPARING: set(),
}


def can_transition(current, target) -> bool:
    """Return True if a status may move from ``current`` to ``target``."""
    try:
        current = OrderStatus(current)
        target = OrderStatus(target)
    except ValueError:
        return False
    return target in ALLOWED_TRANSITIONS[current]


DELIVERY_TYPES = ("delivery", "pickup")
IDEMPOTENCY_KEY_LENGTH = 128


class Order(Base):
    __tablename__ = "orders"
    __table_args__ = (UniqueConstraint("user_id", "idempotency_key", name="uq_order_idempotency"),)

    order_id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    address_id = Column(Integer, ForeignKey("addresses.address_id"), nullable=True)
    total_price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    status = Column(String(32), nullable=False, default=OrderStatus.PENDING.value)
    delivery_type = Column(String(16), nullable=False, default="delivery")
    idempotency_key = Column(String(IDEMPOTENCY_KEY_LENGTH), nullable=True)
    placed_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="orders")
    address = relationship("Address")
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan",
                         order_by="OrderItem.order_item_id")

    def to_dict(self, with_items=False):
        data = {
            "order_id": self.order_id,
            "user_id": self.user_id,
            "address_id": self.address_id,
            "total_price": float(self.total_price),
            "status": self.status,
            "delivery_type": self.delivery_type,
            "placed_at": self.placed_at.isoformat() if self.placed_at else None,
        }
        if with_items:
            data["items"] = [item.to_dict() for item in self.items]
        return data


class OrderItem(Base):
    __tablename__ = "order_items"

    order_item_id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.order_id"), nullable=False, index=True)
    dish_id = Column(Integer, ForeignKey("dishes.dish_id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    status = Column(String(32), nullable=False, default=OrderStatus.PENDING.value)

    # Relationships
    order = relationship("Order", back_populates="items")
    dish = relationship("Dish")

    def to_dict(self, with_dish=False):
        data = {
            "order_item_id": self.order_item_id,
            "order_id": self.order_id,
            "dish_id": self.dish_id,
            "quantity": self.quantity,
            "price": float(self.price),
            "status": self.status,
        }
        if with_dish:
            data["dish_name"] = self.dish.dish_name if self.dish else None
        return data
