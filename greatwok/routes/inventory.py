# routes/inventory.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from greatwok.core.db import get_db
from greatwok.core import inventory_service
from greatwok.core.logger import log_action
from greatwok.core.schemas import InventoryCreate, InventoryUpdate, RestockRequest
from greatwok.core.security import require_admin
from greatwok.models.user import User

router = APIRouter(prefix="/inventory", tags=["inventory"])

NOT_FOUND = "Inventory item not found"


@router.get("")
def list_inventory(db: Session = Depends(get_db)):
    return [item.to_dict() for item in inventory_service.list_inventory(db)]


@router.get("/dish/{dish_id}")
def get_inventory_for_dish(dish_id: int, db: Session = Depends(get_db)):
    item = inventory_service.get_inventory_by_dish(db, dish_id)
    if not item:
        raise HTTPException(status_code=404, detail="No inventory found for the provided dish ID")
    return item.to_dict()


@router.get("/{inventory_id}")
def get_inventory(inventory_id: int, db: Session = Depends(get_db)):
    item = inventory_service.get_inventory(db, inventory_id)
    if not item:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return item.to_dict()


@router.post("", status_code=201)
def create_inventory(payload: InventoryCreate, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    item = inventory_service.create_inventory(db, payload.dish_id, payload.quantity_in_stock)
    log_action(db, admin.email, f"Created inventory for dish {payload.dish_id} ({payload.quantity_in_stock})")
    return item.to_dict()


@router.put("/{inventory_id}")
def update_inventory(inventory_id: int, payload: InventoryUpdate,
                     admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    item = inventory_service.update_inventory(
        db, inventory_id,
        quantity_in_stock=payload.quantity_in_stock,
        expected_version=payload.version,
    )
    if not item:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    log_action(db, admin.email, f"Set inventory {inventory_id} to {item.quantity_in_stock}")
    return item.to_dict()


@router.post("/{inventory_id}/restock")
def restock_inventory(inventory_id: int, payload: RestockRequest,
                      admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    item = inventory_service.restock(db, inventory_id, payload.quantity)
    if not item:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    log_action(db, admin.email, f"Restocked inventory {inventory_id} by {payload.quantity}")
    return item.to_dict()


@router.delete("/{inventory_id}")
def delete_inventory(inventory_id: int, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    if not inventory_service.delete_inventory(db, inventory_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    log_action(db, admin.email, f"Deleted inventory {inventory_id}")
    return {"message": "Inventory item deleted successfully"}
