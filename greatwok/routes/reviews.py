# routes/reviews.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from greatwok.core.db import get_db
from greatwok.core import review_service
from greatwok.core.schemas import ReviewCreate, ReviewUpdate
from greatwok.core.security import get_current_user, ensure_owner
from greatwok.models.user import User

router = APIRouter(prefix="/reviews", tags=["reviews"])

NOT_FOUND = "Review not found"


def _owned_review(db: Session, review_id: int, user: User):
    review = review_service.get_review(db, review_id)
    if not review:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    ensure_owner(user, review.user_id)
    return review


@router.get("")
def list_reviews(db: Session = Depends(get_db)):
    return [r.to_dict(with_names=True) for r in review_service.get_all_reviews(db)]


@router.get("/user/{user_id}")
def list_user_reviews(user_id: int, db: Session = Depends(get_db)):
    return [r.to_dict(with_names=True) for r in review_service.get_reviews_by_user(db, user_id)]


@router.get("/{dish_id}")
def list_dish_reviews(dish_id: int, db: Session = Depends(get_db)):
    return [r.to_dict(with_names=True) for r in review_service.get_reviews_for_dish(db, dish_id)]


@router.post("", status_code=201)
def create_review(payload: ReviewCreate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    ensure_owner(user, payload.user_id)
    review = review_service.create_review(db, payload.user_id, payload.dish_id, payload.rating, payload.comment)
    return review.to_dict()


@router.put("/{review_id}")
def update_review(review_id: int, payload: ReviewUpdate,
                  user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    review = _owned_review(db, review_id, user)
    review = review_service.update_review(db, review, payload.model_dump(exclude_none=True))
    return review.to_dict()


@router.delete("/{review_id}")
def delete_review(review_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    review = _owned_review(db, review_id, user)
    review_service.delete_review(db, review)
    return {"message": "Review deleted successfully"}
