# core/address_service.py
from sqlalchemy.orm import Session
from greatwok.core.errors import ConflictError
from greatwok.models.address import Address
from greatwok.models.order import Order


def get_user_addresses(db: Session, user_id: int):
    return db.query(Address).filter(Address.user_id == user_id).order_by(Address.address_id.asc()).all()


def get_address(db: Session, address_id: int):
    return db.query(Address).filter(Address.address_id == address_id).first()


def create_address(db: Session, user_id: int, address_line, city, state, country, postal_code):
    address = Address(user_id=user_id, address_line=address_line, city=city,
                      state=state, country=country, postal_code=postal_code)
    db.add(address)
    db.commit()
    db.refresh(address)
    return address


def update_address(db: Session, address: Address, changes: dict):
    """Apply the provided (non-null) fields to an address."""
    for field, value in changes.items():
        setattr(address, field, value)
    db.commit()
    db.refresh(address)
    return address


def delete_address(db: Session, address: Address):
    if db.query(Order).filter(Order.address_id == address.address_id).first():
        raise ConflictError("Address is used by an existing order and cannot be deleted.")
    db.delete(address)
    db.commit()


def format_address(address) -> str:
    """One-line rendering used by the admin order list."""
    if address is None:
        return ""
    parts = [address.address_line, address.city, address.state, address.country, address.postal_code]
    return ", ".join(p for p in parts if p)
