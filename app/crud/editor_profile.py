"""
CRUD operations for editor profiles.
"""

from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from app.models.editor_profile import EditorProfile
from app.schemas.editor_profile import EditorProfileCreate


def create(db: Session, profile_data: EditorProfileCreate) -> EditorProfile:
    """
    Create a new editor profile.

    The unique constraint on user_id rejects a second profile for the same
    user with an IntegrityError.
    """
    profile = EditorProfile(**profile_data.model_dump())

    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def get_by_id(db: Session, profile_id: int) -> Optional[EditorProfile]:
    return db.query(EditorProfile).filter(EditorProfile.id == profile_id).first()


def get_by_user_id(db: Session, user_id: int) -> Optional[EditorProfile]:
    """
    Get the profile owned by a user.

    Returns:
        EditorProfile or None if the user has no profile
    """
    return db.query(EditorProfile).filter(EditorProfile.user_id == user_id).first()


def get_multi(db: Session, filters: Optional[Dict[str, Any]] = None) -> List[EditorProfile]:
    query = db.query(EditorProfile)
    if filters:
        query = query.filter_by(**filters)
    return query.order_by(EditorProfile.id).all()


def update(db: Session, profile_id: int, fields: Dict[str, Any]) -> Optional[EditorProfile]:
    profile = get_by_id(db, profile_id)
    if not profile:
        return None

    for key, value in fields.items():
        if key != "id" and hasattr(EditorProfile, key):
            setattr(profile, key, value)

    db.commit()
    db.refresh(profile)
    return profile
