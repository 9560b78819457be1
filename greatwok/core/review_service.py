# core/review_service.py
from sqlalchemy.orm import Session, joinedload

from greatwok.core.errors import ServiceError
from greatwok.models.dish import Dish
from greatwok.models.review import Review


def _joined(db: Session):
    return (
        db.query(Review)
        .options(joinedload(Review.dish), joinedload(Review.user))
        .order_by(Review.created_at.desc(), Review.review_id.desc())
    )


def get_all_reviews(db: Session):
    return _joined(db).all()


def get_reviews_for_dish(db: Session, dish_id: int):
    return _joined(db).filter(Review.dish_id == dish_id).all()


def get_reviews_by_user(db: Session, user_id: int):
    return _joined(db).filter(Review.user_id == user_id).all()


def get_review(db: Session, review_id: int):
    return db.query(Review).filter(Review.review_id == review_id).first()


def create_review(db: Session, user_id: int, dish_id: int, rating: int, comment: str = None):
    if not db.query(Dish).filter(Dish.dish_id == dish_id).first():
        raise ServiceError("Invalid dish_id. The dish does not exist.")
    review = Review(user_id=user_id, dish_id=dish_id, rating=rating, comment=comment)
    db.add(review)
    db.commit()
    db.refresh(review)
    return review


def update_review(db: Session, review: Review, changes: dict):
    for field, value in changes.items():
        setattr(review, field, value)
    db.commit()
    db.refresh(review)
    return review


def delete_review(db: Session, review: Review):
    db.delete(review)
    db.commit()
