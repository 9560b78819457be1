# models/dish.py
from sqlalchemy import Column, Integer, String, Text, Numeric, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from greatwok.core.db import Base


class Dish(Base):
    __tablename__ = "dishes"

    dish_id = Column(Integer, primary_key=True, index=True)
    dish_name = Column(String(150), nullable=False)
    description = Column(Text)
    # stored as NUMERIC, handed back as float so JSON carries a number
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.category_id", ondelete="SET NULL"), nullable=True)
    image_url = Column(String, nullable=True)
    is_available = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    category = relationship("Category", back_populates="dishes")
    inventory = relationship("Inventory", back_populates="dish", uselist=False)

    def to_dict(self):
        return {
            "dish_id": self.dish_id,
            "dish_name": self.dish_name,
            "description": self.description,
            "price": float(self.price) if self.price is not None else None,
            "category_id": self.category_id,
            "image_url": self.image_url,
            "is_available": self.is_available,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
