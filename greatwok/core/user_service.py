# core/user_service.py
import logging
from sqlalchemy.orm import Session
from greatwok.models.user import User, ROLE_ADMIN
from greatwok.core.auth_service import hash_password
from greatwok.core.config import ADMIN_EMAIL, ADMIN_PASSWORD

logger = logging.getLogger(__name__)


def create_default_admin(db: Session):
    existing = db.query(User).filter(User.email == ADMIN_EMAIL).first()
    if existing:
        logger.info("Admin already exists.")
        return existing
    admin = User(
        username="admin",
        email=ADMIN_EMAIL,
        phone="0000000000",
        password_hash=hash_password(ADMIN_PASSWORD),
        role=ROLE_ADMIN,
    )
    db.add(admin)
    db.commit()
    logger.info("Default admin created: %s", ADMIN_EMAIL)
    return admin


def get_all_users(db: Session):
    """Get all users"""
    return db.query(User).order_by(User.user_id).all()
