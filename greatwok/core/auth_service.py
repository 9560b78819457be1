# core/auth_service.py
import logging
import time
from datetime import datetime, timedelta

import bcrypt
import jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from greatwok.core import config
from greatwok.models.user import User, ROLE_USER, ROLE_GUEST

logger = logging.getLogger(__name__)

USER_EXISTS = "User already exists"
USER_NOT_FOUND = "User not found. Please register first."
INVALID_PASSWORD = "Invalid password. Please try again."


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


def create_token(user: User) -> str:
    """Sign a bearer token carrying the user's identity and role."""
    payload = {
        "id": user.user_id,
        "username": user.username,
        "email": user.email,
        "role": user.role,
        "exp": datetime.utcnow() + timedelta(minutes=config.JWT_EXPIRES_MINUTES),
    }
    return jwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    """Decode and verify a token. Raises jwt.InvalidTokenError (incl. expiry)."""
    return jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])


def create_user(db: Session, username, email, password, phone=None):
    """Sign up a regular user. Returns (user, message); user is None if the email is taken."""
    if db.query(User).filter(User.email == email).first():
        return None, USER_EXISTS
    # every signup is a plain user; admins are created by init_db or promoted in the database
    user = User(username=username, email=email, phone=phone,
                password_hash=hash_password(password), role=ROLE_USER, is_guest=False)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # a concurrent signup took the email between the check and the insert
        db.rollback()
        return None, USER_EXISTS
    db.refresh(user)
    logger.info("User %s signed up", user.user_id)
    return user, "User created."


def create_guest_user(db: Session):
    guest = User(username=f"Guest_{int(time.time() * 1000)}", role=ROLE_GUEST, is_guest=True)
    db.add(guest)
    db.commit()
    db.refresh(guest)
    logger.info("Guest user %s created", guest.user_id)
    return guest


def authenticate_user(db: Session, email, password):
    """Return (user, message). message explains the failure for the client."""
    user = db.query(User).filter(User.email == email).first()
    if not user:
        return None, USER_NOT_FOUND
    if not verify_password(password, user.password_hash):
        logger.warning("Failed login for user %s", user.user_id)
        return None, INVALID_PASSWORD
    return user, "Login successful."
