"""
CRUD operations for User model.
"""

from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from app.models.user import User
from app.schemas.user import UserCreate


def create(db: Session, user_data: UserCreate) -> User:
    """
    Create a new user in the database.

    Args:
        db: Database session
        user_data: Validated registration data (password already hashed)

    Returns:
        Created User instance with id
    """
    db_user = User(**user_data.model_dump())

    db.add(db_user)
    db.commit()
    db.refresh(db_user)

    return db_user


def get_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def get_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def get_multi(db: Session, filters: Optional[Dict[str, Any]] = None) -> List[User]:
    """
    Retrieve users in insertion order, optionally filtered by exact field values.
    """
    query = db.query(User)
    if filters:
        query = query.filter_by(**filters)
    return query.order_by(User.id).all()


def update(db: Session, user_id: int, fields: Dict[str, Any]) -> Optional[User]:
    """
    Merge fields into an existing user.

    Args:
        db: Database session
        user_id: User ID to update
        fields: Column values to set; unknown keys and "id" are ignored

    Returns:
        Updated User instance if found, None otherwise
    """
    user = get_by_id(db, user_id)
    if not user:
        return None

    for key, value in fields.items():
        if key != "id" and hasattr(User, key):
            setattr(user, key, value)

    db.commit()
    db.refresh(user)

    return user
