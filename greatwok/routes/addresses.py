# routes/addresses.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from greatwok.core.db import get_db
from greatwok.core import address_service
from greatwok.core.schemas import AddressCreate, AddressUpdate
from greatwok.core.security import get_current_user, ensure_owner
from greatwok.models.user import User

router = APIRouter(tags=["addresses"])

NOT_FOUND = "Address not found"


def _owned_address(db: Session, address_id: int, user: User):
    address = address_service.get_address(db, address_id)
    if not address:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    ensure_owner(user, address.user_id)
    return address


@router.get("/addresses/{user_id}")
def list_addresses(user_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    ensure_owner(user, user_id)
    return [a.to_dict() for a in address_service.get_user_addresses(db, user_id)]


@router.get("/address/{address_id}")
def get_address(address_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return _owned_address(db, address_id, user).to_dict()


@router.post("/address", status_code=201)
def create_address(payload: AddressCreate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    ensure_owner(user, payload.user_id)
    address = address_service.create_address(
        db, payload.user_id, payload.address_line, payload.city,
        payload.state, payload.country, payload.postal_code,
    )
    return address.to_dict()


@router.put("/address/{address_id}")
def update_address(address_id: int, payload: AddressUpdate,
                   user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    address = _owned_address(db, address_id, user)
    address = address_service.update_address(db, address, payload.model_dump(exclude_none=True))
    return address.to_dict()


@router.delete("/address/{address_id}")
def delete_address(address_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    address = _owned_address(db, address_id, user)
    address_service.delete_address(db, address)
    return {"message": "Address deleted successfully"}
