# core/profile_service.py
from sqlalchemy.orm import Session
from greatwok.models.user import User


def get_user_by_id(db: Session, user_id: int):
    """Fetch user record by ID."""
    return db.query(User).filter(User.user_id == user_id).first()


def update_phone(db: Session, user_id: int, phone: str):
    """Update the phone number. Returns (success, message)."""
    user = get_user_by_id(db, user_id)
    if not user:
        return False, "User not found"
    user.phone = phone
    db.commit()
    return True, "Phone number updated successfully"
