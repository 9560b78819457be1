from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from greatwok.core.db import Base

ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLE_GUEST = "guest"


class User(Base):
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=True, index=True)  # NULL for guests
    password_hash = Column(String, nullable=True)
    phone = Column(String(32), nullable=True)
    role = Column(String(16), nullable=False, default=ROLE_USER)
    is_guest = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    addresses = relationship("Address", back_populates="user")
    cart_items = relationship("CartItem", back_populates="user")
    orders = relationship("Order", back_populates="user")
    reviews = relationship("Review", back_populates="user")

    @property
    def is_admin(self):
        return self.role == ROLE_ADMIN

    def to_dict(self):
        # password_hash never leaves the server
        return {
            "user_id": self.user_id,
            "username": self.username,
            "email": self.email,
            "phone": self.phone,
            "role": self.role,
            "is_guest": self.is_guest,
        }

    def __repr__(self):
        return f"<User {self.user_id} {self.username} ({self.role})>"
