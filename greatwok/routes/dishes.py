# routes/dishes.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from greatwok.core.db import get_db
from greatwok.core import catalog_service
from greatwok.core.logger import log_action
from greatwok.core.schemas import DishCreate, DishUpdate
from greatwok.core.security import require_admin
from greatwok.models.user import User

router = APIRouter(prefix="/dishes", tags=["dishes"])

NOT_FOUND = "Dish not found"


@router.get("")
def list_dishes(category_id: Optional[int] = None, available: Optional[bool] = None,
                db: Session = Depends(get_db)):
    return [d.to_dict() for d in catalog_service.list_dishes(db, category_id, available)]


@router.get("/{dish_id}")
def get_dish(dish_id: int, db: Session = Depends(get_db)):
    dish = catalog_service.get_dish(db, dish_id)
    if not dish:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return dish.to_dict()


@router.post("", status_code=201)
def create_dish(payload: DishCreate, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    dish = catalog_service.create_dish(
        db,
        dish_name=payload.dish_name,
        price=payload.price,
        description=payload.description,
        category_id=payload.category_id,
        image_url=payload.image_url,
        is_available=payload.is_available,
    )
    log_action(db, admin.email, f"Added dish {dish.dish_name}")
    return dish.to_dict()


@router.put("/{dish_id}")
def update_dish(dish_id: int, payload: DishUpdate,
                admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    changes = payload.changes()
    dish = catalog_service.update_dish(db, dish_id, changes)
    if not dish:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    log_action(db, admin.email, f"Updated dish {dish_id}: {', '.join(sorted(changes)) or 'no changes'}")
    return dish.to_dict()


@router.delete("/{dish_id}")
def delete_dish(dish_id: int, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    if not catalog_service.delete_dish(db, dish_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    log_action(db, admin.email, f"Deleted dish {dish_id}")
    return {"message": "Dish deleted successfully"}
