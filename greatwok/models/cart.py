from sqlalchemy import Column, Integer, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from greatwok.core.db import Base


class CartItem(Base):
    __tablename__ = "cart_items"
    __table_args__ = (UniqueConstraint("user_id", "dish_id", name="uq_cart_user_dish"),)

    cart_item_id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    dish_id = Column(Integer, ForeignKey("dishes.dish_id"), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="cart_items")
    dish = relationship("Dish")

    def to_dict(self, with_dish=False):
        data = {
            "cart_item_id": self.cart_item_id,
            "user_id": self.user_id,
            "dish_id": self.dish_id,
            "quantity": self.quantity,
        }
        if with_dish:
            data["dish_name"] = self.dish.dish_name if self.dish else None
            data["price"] = float(self.dish.price) if self.dish else None
        return data
