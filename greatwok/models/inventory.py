from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from greatwok.core.db import Base


class Inventory(Base):
    __tablename__ = "inventory"

    inventory_id = Column(Integer, primary_key=True, index=True)
    dish_id = Column(Integer, ForeignKey("dishes.dish_id", ondelete="CASCADE"), nullable=False, unique=True)
    quantity_in_stock = Column(Integer, nullable=False, default=0)
    last_updated = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    version = Column(Integer, nullable=False, default=1)

    dish = relationship("Dish", back_populates="inventory")

    # UPDATEs carry "WHERE version = <loaded>", a lost race raises StaleDataError
    __mapper_args__ = {"version_id_col": version}

    def to_dict(self):
        return {
            "inventory_id": self.inventory_id,
            "dish_id": self.dish_id,
            "dish_name": self.dish.dish_name if self.dish else None,
            "quantity_in_stock": self.quantity_in_stock,
            "last_updated": self.last_updated.isoformat() if self.last_updated else None,
            "version": self.version,
        }
