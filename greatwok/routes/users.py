# routes/users.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from greatwok.core.db import get_db
from greatwok.core.auth_service import (
    create_user, create_guest_user, authenticate_user, create_token, USER_NOT_FOUND
)
from greatwok.core.profile_service import update_phone
from greatwok.core.schemas import SignupRequest, LoginRequest, PhoneUpdate
from greatwok.core.security import get_current_user, require_admin
from greatwok.core.user_service import get_all_users
from greatwok.models.user import User

router = APIRouter(tags=["users"])


@router.post("/users", status_code=201)
def signup(payload: SignupRequest, db: Session = Depends(get_db)):
    user, message = create_user(db, payload.username, payload.email, payload.password, payload.phone)
    if not user:
        raise HTTPException(status_code=400, detail=message)
    return {"user": user.to_dict(), "token": create_token(user)}


@router.post("/login")
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user, message = authenticate_user(db, payload.email, payload.password)
    if not user:
        # unknown email is a client mistake (400); a wrong password is an auth failure (401)
        raise HTTPException(status_code=400 if message == USER_NOT_FOUND else 401, detail=message)
    return {"user": user.to_dict(), "token": create_token(user)}


@router.post("/guest", status_code=201)
def guest_login(db: Session = Depends(get_db)):
    guest = create_guest_user(db)
    return {"user": guest.to_dict(), "token": create_token(guest)}


@router.get("/profile")
def get_profile(user: User = Depends(get_current_user)):
    return {"user": user.to_dict()}


@router.put("/profile/phone")
def change_phone(payload: PhoneUpdate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    ok, message = update_phone(db, user.user_id, payload.phone)
    if not ok:
        raise HTTPException(status_code=404, detail=message)
    return {"message": message}


@router.get("/users")
def list_users(admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    return [u.to_dict() for u in get_all_users(db)]


@router.get("/admin")
def admin_home(admin: User = Depends(require_admin)):
    return {"message": f"Welcome, {admin.username}. You have admin access."}
