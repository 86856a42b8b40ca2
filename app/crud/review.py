"""
CRUD operations for reviews. Reviews are immutable once written.
"""

from typing import List, Optional
from sqlalchemy.orm import Session
from app.models.review import Review
from app.schemas.review import ReviewCreate


def create(db: Session, review_data: ReviewCreate) -> Review:
    review = Review(**review_data.model_dump())

    db.add(review)
    db.commit()
    db.refresh(review)
    return review


def get_by_id(db: Session, review_id: int) -> Optional[Review]:
    return db.query(Review).filter(Review.id == review_id).first()


def get_by_editor(db: Session, editor_id: int) -> List[Review]:
    return db.query(Review).filter(Review.editor_id == editor_id).order_by(Review.id).all()


def get_by_creator(db: Session, creator_id: int) -> List[Review]:
    return db.query(Review).filter(Review.creator_id == creator_id).order_by(Review.id).all()
