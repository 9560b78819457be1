# routes/categories.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from greatwok.core.db import get_db
from greatwok.core import catalog_service
from greatwok.core.logger import log_action
from greatwok.core.schemas import CategoryIn
from greatwok.core.security import require_admin
from greatwok.models.user import User

router = APIRouter(prefix="/categories", tags=["categories"])

NOT_FOUND = "Category not found"


@router.get("")
def list_categories(db: Session = Depends(get_db)):
    return [c.to_dict() for c in catalog_service.list_categories(db)]


@router.get("/{category_id}")
def get_category(category_id: int, db: Session = Depends(get_db)):
    category = catalog_service.get_category(db, category_id)
    if not category:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return category.to_dict()


@router.post("", status_code=201)
def create_category(payload: CategoryIn, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    category = catalog_service.create_category(db, payload.category_name)
    log_action(db, admin.email, f"Created category {category.category_name}")
    return category.to_dict()


@router.put("/{category_id}")
def update_category(category_id: int, payload: CategoryIn,
                    admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    category = catalog_service.update_category(db, category_id, payload.category_name)
    if not category:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    log_action(db, admin.email, f"Renamed category {category_id} to {category.category_name}")
    return category.to_dict()


@router.delete("/{category_id}")
def delete_category(category_id: int, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    if not catalog_service.delete_category(db, category_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    log_action(db, admin.email, f"Deleted category {category_id}")
    return {"message": "Category deleted successfully"}
