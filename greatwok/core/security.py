# core/security.py
from typing import Optional

import jwt
from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from greatwok.core.db import get_db
from greatwok.core.auth_service import decode_token
from greatwok.core.profile_service import get_user_by_id
from greatwok.models.user import User


def get_current_user(authorization: Optional[str] = Header(None), db: Session = Depends(get_db)) -> User:
    """Resolve ``Authorization: Bearer <token>`` to the user row it names."""
    if not authorization:
        raise HTTPException(status_code=401, detail="No token provided, access denied")

    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(status_code=403, detail="Failed to authenticate token")

    try:
        payload = decode_token(token)
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=403, detail="Token expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=403, detail="Failed to authenticate token")

    user = get_user_by_id(db, payload.get("id"))
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Access denied. Admins only.")
    return user


def ensure_owner(user: User, owner_id: int):
    """Users may only touch their own rows; admins may touch anyone's."""
    if not user.is_admin and user.user_id != owner_id:
        raise HTTPException(status_code=403, detail="Access denied.")
